"""
Runtime settings: selected network, fullnode RPC endpoint, retry/timeouts.

- Loads defaults and supports overrides via environment variables (SUINS_*).
- The RPC URL defaults to the public fullnode of the selected network.

The per-network package table lives in `suins_setup.registry`; this module
only covers how the tools talk to the chain.
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional, Union

from .types import Network
from .version import __version__

_DEFAULT_NETWORK = Network.TESTNET


def default_rpc_url(network: Network) -> str:
    return f"https://fullnode.{network.value}.sui.io:443"


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name)
    return v if v not in (None, "") else default


def _ensure_http(url: str) -> str:
    lower = url.lower()
    if not (lower.startswith("http://") or lower.startswith("https://")):
        raise ValueError(f"RPC URL must start with http:// or https://, got: {url!r}")
    return url


@dataclass(frozen=True)
class SetupConfig:
    network: Network = _DEFAULT_NETWORK
    rpc_url: str = field(default_factory=lambda: default_rpc_url(_DEFAULT_NETWORK))
    request_timeout: float = 30.0
    max_retries: int = 3
    backoff_base: float = 0.15
    user_agent: str = field(default_factory=lambda: f"suins-setup/{__version__}")

    @classmethod
    def from_env(
        cls, prefix: str = "SUINS_", *, network: Optional[Union[Network, str]] = None
    ) -> "SetupConfig":
        """
        Create config from environment variables. An explicit `network` wins
        and SUINS_NETWORK is then not read at all.

        SUINS_NETWORK       (mainnet|testnet)
        SUINS_RPC_URL       (http/https; default: public fullnode of the network)
        SUINS_TIMEOUT       (float seconds)
        SUINS_MAX_RETRIES   (int)
        SUINS_BACKOFF       (float seconds, first retry delay)
        SUINS_USER_AGENT    (str)
        """
        net = Network.parse(
            network if network is not None else _env(f"{prefix}NETWORK", _DEFAULT_NETWORK.value)
        )
        rpc = _ensure_http(_env(f"{prefix}RPC_URL", default_rpc_url(net)))
        return cls(
            network=net,
            rpc_url=rpc,
            request_timeout=float(_env(f"{prefix}TIMEOUT", "30.0")),
            max_retries=int(_env(f"{prefix}MAX_RETRIES", "3")),
            backoff_base=float(_env(f"{prefix}BACKOFF", "0.15")),
            user_agent=_env(f"{prefix}USER_AGENT", f"suins-setup/{__version__}"),
        )

    def with_overrides(self, **overrides: Any) -> "SetupConfig":
        """
        Return a copy with keyword overrides applied; None values and unknown
        keys are ignored. Switching network without an explicit rpc_url also
        switches to that network's default fullnode when the current URL was
        the default one.
        """
        data = self.to_dict()
        data["network"] = self.network
        overrides = {k: v for k, v in overrides.items() if k in data and v is not None}
        if "network" in overrides:
            net = Network.parse(overrides["network"])
            overrides["network"] = net
            if "rpc_url" not in overrides and self.rpc_url == default_rpc_url(self.network):
                overrides["rpc_url"] = default_rpc_url(net)
        if "rpc_url" in overrides:
            _ensure_http(overrides["rpc_url"])
        data.update(overrides)
        return SetupConfig(**data)

    def http_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self.user_agent,
        }

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["network"] = self.network.value
        return d


__all__ = ["SetupConfig", "default_rpc_url"]
