"""
suins_setup.setup.day_one
=========================

Setup transactions for the SuiNS Day One NFT type.

Two independent operations share one resolved registry entry:

- `create_day_one_display`: always appends create-display, update-version and
  a transfer of the display to the admin address. No remote check.
- `create_day_one_transfer_policy`: asks the fullnode whether a
  `TransferPolicy<DayOne>` already exists. If so it appends nothing and
  reports SKIPPED; otherwise it appends create-policy and a transfer of the
  cap to the admin address and reports CREATED.

`run_day_one_setup` validates everything both operations need up front, then
runs them in order.

Concurrent policy setups for the same network are not serialized here: two
runs that both see "no policy" will both build a creation. Callers that may
race must serialize per (network, type).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence, Tuple, Union

from ..errors import RemoteQueryError, RpcError
from ..logging import get_logger
from ..registry import Registry, resolve
from ..rpc.kiosk import TransferPolicyProvider
from ..tx.ops import SetupBuilder
from ..types import Network, PackageInfo

log = get_logger(__name__)

DAY_ONE_TYPE_PATH = "day_one::DayOne"

# (key, template) pairs rendered by wallets and explorers, in this order
DISPLAY_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("name", "SuiNS Day 1 NFT #{serial}"),
    (
        "description",
        "The SuiNS Day 1 NFT represents community members who have been with "
        "SuiNS since day 1 of launch.",
    ),
    ("link", "https://suins.io/"),
    ("image_url", "https://suins.io/day_one_active_{active}.webp"),
)

DISPLAY_REQUIRES = ("package_id", "publisher_id", "admin_address")
POLICY_REQUIRES = ("package_id", "publisher_id", "admin_address")

NetworkLike = Union[Network, str]


class PolicyOutcome(str, Enum):
    CREATED = "created"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class PolicySetupResult:
    outcome: PolicyOutcome
    network: Network
    asset_type: str
    existing: int = 0
    cap: Any = None

    @property
    def created(self) -> bool:
        return self.outcome is PolicyOutcome.CREATED

    @property
    def skipped(self) -> bool:
        return self.outcome is PolicyOutcome.SKIPPED

    def __bool__(self) -> bool:
        return self.created

    def to_dict(self) -> dict:
        return {
            "outcome": self.outcome.value,
            "network": self.network.value,
            "asset_type": self.asset_type,
            "existing": self.existing,
        }


@dataclass(frozen=True)
class DayOneSetupReport:
    network: Network
    asset_type: str
    display: Any = None
    policy: Optional[PolicySetupResult] = None

    def to_dict(self) -> dict:
        return {
            "network": self.network.value,
            "asset_type": self.asset_type,
            "display": self.display is not None,
            "policy": self.policy.to_dict() if self.policy is not None else None,
        }


def day_one_type(info: PackageInfo) -> str:
    """`<package_id>::day_one::DayOne`; recomputed on every call."""
    return f"{info.require('package_id')}::{DAY_ONE_TYPE_PATH}"


def asset_type(network: NetworkLike, *, registry: Optional[Registry] = None) -> str:
    return day_one_type(resolve(network, registry))


def _preflight(info: PackageInfo, fields: Sequence[str]) -> None:
    for name in fields:
        info.require(name)


def create_day_one_display(
    builder: SetupBuilder,
    network: NetworkLike,
    *,
    registry: Optional[Registry] = None,
) -> Any:
    """
    Append the Day One display setup to `builder` and return the display handle.

    Order is fixed: create -> update_version -> transfer, each consuming the
    handle of the previous step.
    """
    info = resolve(network, registry)
    _preflight(info, DISPLAY_REQUIRES)
    item_type = day_one_type(info)
    keys = [k for k, _ in DISPLAY_FIELDS]
    values = [v for _, v in DISPLAY_FIELDS]

    display = builder.create_display(info.require("publisher_id"), keys, values, item_type)
    builder.update_display_version(display, item_type)
    builder.transfer_objects([display], info.require("admin_address"))
    log.info(
        "day one display appended",
        extra={"network": info.network.value, "asset_type": item_type},
    )
    return display


def create_day_one_transfer_policy(
    builder: SetupBuilder,
    provider: TransferPolicyProvider,
    network: NetworkLike,
    *,
    registry: Optional[Registry] = None,
) -> PolicySetupResult:
    """
    Append a TransferPolicy<DayOne> creation unless one already exists.

    A failing existence check raises RemoteQueryError and appends nothing.
    """
    info = resolve(network, registry)
    _preflight(info, POLICY_REQUIRES)
    item_type = day_one_type(info)

    try:
        existing = provider.query_transfer_policy(item_type)
    except RpcError as exc:
        raise RemoteQueryError(
            f"transfer policy lookup failed: {exc.message}", asset_type=item_type
        ) from exc

    if len(existing) > 0:
        log.warning(
            "transfer policy already exists; skipping creation",
            extra={
                "network": info.network.value,
                "asset_type": item_type,
                "existing": len(existing),
            },
        )
        return PolicySetupResult(
            outcome=PolicyOutcome.SKIPPED,
            network=info.network,
            asset_type=item_type,
            existing=len(existing),
        )

    cap = builder.create_transfer_policy(item_type, info.require("publisher_id"))
    builder.transfer_objects([cap], info.require("admin_address"))
    log.info(
        "day one transfer policy appended",
        extra={"network": info.network.value, "asset_type": item_type},
    )
    return PolicySetupResult(
        outcome=PolicyOutcome.CREATED,
        network=info.network,
        asset_type=item_type,
        cap=cap,
    )


def run_day_one_setup(
    builder: SetupBuilder,
    provider: Optional[TransferPolicyProvider],
    network: NetworkLike,
    *,
    display: bool = True,
    policy: bool = True,
    registry: Optional[Registry] = None,
) -> DayOneSetupReport:
    """
    Validate, then run the display and/or policy setup against one builder.

    Placeholders in any field either step needs abort the run before anything
    is appended or queried. A failed policy lookup propagates after the display
    commands were appended; the caller decides whether to submit them.
    """
    info = resolve(network, registry)
    needed = (DISPLAY_REQUIRES if display else ()) + (POLICY_REQUIRES if policy else ())
    _preflight(info, needed)
    if policy and provider is None:
        raise ValueError("a transfer policy provider is required when policy=True")

    item_type = day_one_type(info)
    display_handle = None
    policy_result = None
    if display:
        display_handle = create_day_one_display(builder, info.network, registry=registry)
    if policy:
        policy_result = create_day_one_transfer_policy(
            builder, provider, info.network, registry=registry
        )
    return DayOneSetupReport(
        network=info.network,
        asset_type=item_type,
        display=display_handle,
        policy=policy_result,
    )


__all__ = [
    "DAY_ONE_TYPE_PATH",
    "DISPLAY_FIELDS",
    "PolicyOutcome",
    "PolicySetupResult",
    "DayOneSetupReport",
    "asset_type",
    "day_one_type",
    "create_day_one_display",
    "create_day_one_transfer_policy",
    "run_day_one_setup",
]
