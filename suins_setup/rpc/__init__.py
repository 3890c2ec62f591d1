"""Fullnode access: JSON-RPC transport and transfer-policy lookups."""

from .http import SuiRpcClient  # noqa: F401
from .kiosk import KioskClient, TransferPolicyProvider  # noqa: F401

__all__ = ["SuiRpcClient", "KioskClient", "TransferPolicyProvider"]
