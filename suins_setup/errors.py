"""
suins_setup.errors
------------------

Typed exceptions for registry resolution and setup orchestration. Each error:
- carries a stable integer `code` and a short snake_case `reason`;
- keeps structured details in `context` (see `.to_dict()`);
- renders a compact one-line `__str__` for logs.

Hierarchy:

    SetupError (base)
    ├── ConfigurationError
    ├── PlaceholderUsedError
    ├── AddressError          (also a ValueError)
    ├── RemoteQueryError
    └── RpcError

A transfer policy that already exists is *not* an error; see
`suins_setup.setup.day_one.PolicyOutcome.SKIPPED`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

__all__ = [
    "SetupErrorCode",
    "SetupError",
    "ConfigurationError",
    "PlaceholderUsedError",
    "AddressError",
    "RemoteQueryError",
    "RpcError",
]


class SetupErrorCode:
    """
    Stable numeric codes. Range 4000-4099 is reserved for suins-setup.
    """

    CONFIGURATION = 4000
    PLACEHOLDER = 4001
    ADDRESS = 4002
    REMOTE_QUERY = 4010
    RPC = 4011


@dataclass(eq=False)
class SetupError(Exception):
    """
    Base class for suins-setup errors.

    Attributes
    ----------
    code : int
        Stable integer code (see SetupErrorCode).
    reason : str
        Short, machine-friendly reason.
    message : str
        Human-readable message.
    context : Dict[str, Any]
        Structured details safe for logs.
    """

    code: int
    reason: str
    message: str
    context: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        parts = []
        for k, v in self.context.items():
            if v is None:
                continue
            s = str(v)
            if len(s) > 80:
                s = s[:77] + "..."
            parts.append(f"{k}={s}")
        ctx = (" [" + ", ".join(parts) + "]") if parts else ""
        return f"{self.reason}: {self.message}{ctx}"

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable error object."""
        return {
            "code": self.code,
            "reason": self.reason,
            "message": self.message,
            "context": dict(self.context),
        }


class ConfigurationError(SetupError):
    """
    The network selection or the registry table itself is invalid.

    Unreachable through a `Network` member; reachable from external text
    (CLI/env) or a hand-edited table whose keys drift from the enumeration.
    """

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(
            code=SetupErrorCode.CONFIGURATION,
            reason="configuration_error",
            message=message,
            context=context,
        )


class PlaceholderUsedError(SetupError):
    """A required identifier is still a not-yet-deployed placeholder (or absent)."""

    def __init__(self, *, network: str, field_path: str) -> None:
        super().__init__(
            code=SetupErrorCode.PLACEHOLDER,
            reason="placeholder_used",
            message=f"{field_path} is not deployed on {network}",
            context={"network": network, "field": field_path},
        )

    @property
    def network(self) -> str:
        return self.context["network"]

    @property
    def field_path(self) -> str:
        return self.context["field"]


class AddressError(SetupError, ValueError):
    """Raised for malformed Sui addresses / object ids."""

    def __init__(self, message: str, *, value: Optional[str] = None) -> None:
        super().__init__(
            code=SetupErrorCode.ADDRESS,
            reason="invalid_address",
            message=message,
            context={"value": value},
        )


class RemoteQueryError(SetupError):
    """
    The transfer-policy existence check could not be completed.

    The original exception is chained as `__cause__`; nothing about policy
    existence may be inferred from this error.
    """

    def __init__(self, message: str, *, asset_type: str, **context: Any) -> None:
        super().__init__(
            code=SetupErrorCode.REMOTE_QUERY,
            reason="remote_query_failed",
            message=message,
            context={"asset_type": asset_type, **context},
        )

    @property
    def asset_type(self) -> str:
        return self.context["asset_type"]


class RpcError(SetupError):
    """Raised when a JSON-RPC call fails (transport, HTTP, or error object)."""

    def __init__(
        self,
        message: str,
        *,
        rpc_code: int = -32603,
        method: Optional[str] = None,
        data: Any = None,
    ) -> None:
        super().__init__(
            code=SetupErrorCode.RPC,
            reason="rpc_error",
            message=message,
            context={"method": method, "rpc_code": rpc_code, "data": data},
        )

    @property
    def rpc_code(self) -> int:
        return int(self.context["rpc_code"])
