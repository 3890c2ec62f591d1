"""
suins-setup: deployment registry and setup transactions for SuiNS.

Convenience exports for the most common APIs.
"""

from .version import __version__  # noqa: F401

# Errors
from .errors import (  # noqa: F401
    AddressError,
    ConfigurationError,
    PlaceholderUsedError,
    RemoteQueryError,
    RpcError,
    SetupError,
)

# Registry
from .types import NOT_DEPLOYED, Network, PackageInfo, Placeholder  # noqa: F401
from .address import normalize_sui_address  # noqa: F401
from .registry import get_registry, resolve  # noqa: F401

# Config
from .config import SetupConfig  # noqa: F401

# Tx / setup
from .tx import PtbSetupBuilder, TransactionBlock  # noqa: F401
from .setup import (  # noqa: F401
    PolicyOutcome,
    PolicySetupResult,
    asset_type,
    create_day_one_display,
    create_day_one_transfer_policy,
    run_day_one_setup,
)

# RPC
from .rpc import KioskClient, SuiRpcClient  # noqa: F401

__all__ = [
    "__version__",
    # Errors
    "SetupError", "ConfigurationError", "PlaceholderUsedError",
    "AddressError", "RemoteQueryError", "RpcError",
    # Registry
    "Network", "PackageInfo", "Placeholder", "NOT_DEPLOYED",
    "normalize_sui_address", "get_registry", "resolve",
    # Config
    "SetupConfig",
    # Tx / setup
    "TransactionBlock", "PtbSetupBuilder",
    "PolicyOutcome", "PolicySetupResult", "asset_type",
    "create_day_one_display", "create_day_one_transfer_policy", "run_day_one_setup",
    # RPC
    "SuiRpcClient", "KioskClient",
]
