"""
suins_setup.rpc.kiosk
=====================

Read-only transfer-policy lookups against a Sui fullnode.

A `TransferPolicy<T>` is discoverable through the
`0x2::transfer_policy::TransferPolicyCreated<T>` event emitted when it was
created. We page through those events, collect the policy ids, and fetch the
objects; policies that were since deleted drop out at the fetch step, as do
objects whose type is not `TransferPolicy<T>`. A scan that hits the page cap
while the node still reports more events is an incomplete answer and raises
RemoteQueryError.

    kiosk = KioskClient(SuiRpcClient(url))
    policies = kiosk.query_transfer_policy("0x...::day_one::DayOne")
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple

from ..address import normalize_sui_address
from ..errors import AddressError, RemoteQueryError, RpcError
from ..logging import get_logger
from ..types import TransferPolicyRecord

log = get_logger(__name__)

TRANSFER_POLICY_CREATED_EVENT = "0x2::transfer_policy::TransferPolicyCreated"
TRANSFER_POLICY_TYPE = "0x2::transfer_policy::TransferPolicy"
_FRAMEWORK, _, _POLICY_PATH = TRANSFER_POLICY_TYPE.partition("::")
_FRAMEWORK_ADDRESS = normalize_sui_address(_FRAMEWORK)

_EVENT_PAGE_SIZE = 50
_MAX_EVENT_PAGES = 20


class RpcTransport(Protocol):
    def request(self, method: str, params: Any = None) -> Any: ...


class TransferPolicyProvider(Protocol):
    """Anything that can list the transfer policies that exist for a type."""

    def query_transfer_policy(self, asset_type: str) -> Sequence[TransferPolicyRecord]: ...


class KioskClient:
    """Transfer-policy provider backed by a JSON-RPC transport."""

    def __init__(self, rpc: RpcTransport, *, page_size: int = _EVENT_PAGE_SIZE) -> None:
        self.rpc = rpc
        self.page_size = int(page_size)

    def query_transfer_policy(self, asset_type: str) -> List[TransferPolicyRecord]:
        """
        Return every live TransferPolicy<asset_type>.

        Any RPC failure is raised as RemoteQueryError; an empty list means the
        node positively reported no policies.
        """
        try:
            ids = self._policy_ids(asset_type)
            if not ids:
                return []
            objects = self.rpc.request(
                "sui_multiGetObjects",
                [ids, {"showType": True, "showOwner": True, "showContent": True}],
            )
        except RpcError as exc:
            raise RemoteQueryError(
                f"could not list transfer policies: {exc.message}",
                asset_type=asset_type,
                rpc_code=exc.context.get("rpc_code"),
            ) from exc

        records = [
            r for r in (_to_record(o, asset_type) for o in objects or []) if r is not None
        ]
        log.debug(
            "transfer policies found",
            extra={"asset_type": asset_type, "events": len(ids), "live": len(records)},
        )
        return records

    def _policy_ids(self, asset_type: str) -> List[str]:
        query = {"MoveEventType": f"{TRANSFER_POLICY_CREATED_EVENT}<{asset_type}>"}
        cursor: Optional[Dict[str, Any]] = None
        seen: List[str] = []
        for _ in range(_MAX_EVENT_PAGES):
            page = self.rpc.request(
                "suix_queryEvents", [query, cursor, self.page_size, False]
            ) or {}
            for event in page.get("data") or []:
                pid = (event.get("parsedJson") or {}).get("id")
                if pid and pid not in seen:
                    seen.append(pid)
            if not page.get("hasNextPage"):
                return seen
            cursor = page.get("nextCursor")
        raise RemoteQueryError(
            "transfer policy scan truncated",
            asset_type=asset_type,
            pages=_MAX_EVENT_PAGES,
            events=len(seen),
        )


def _is_policy_of(type_tag: str, asset_type: str) -> bool:
    # the framework address may be rendered short (0x2) or padded
    addr, sep, rest = type_tag.partition("::")
    if not sep or rest != f"{_POLICY_PATH}<{asset_type}>":
        return False
    try:
        return normalize_sui_address(addr) == _FRAMEWORK_ADDRESS
    except AddressError:
        return False


def _to_record(obj: Dict[str, Any], asset_type: str) -> Optional[TransferPolicyRecord]:
    data = obj.get("data")
    if not data:
        # deleted / not found
        return None
    content = data.get("content") or {}
    fields = content.get("fields") or {}
    type_tag = data.get("type") or content.get("type") or ""
    if not _is_policy_of(type_tag, asset_type):
        log.warning(
            "event points at an object that is not a transfer policy",
            extra={"asset_type": asset_type, "object_id": data.get("objectId"), "object_type": type_tag},
        )
        return None
    return TransferPolicyRecord(
        id=data.get("objectId"),
        type=type_tag,
        owner=data.get("owner"),
        rules=_rule_names(fields.get("rules")),
        balance=_as_int(fields.get("balance")),
    )


def _as_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _rule_names(rules: Any) -> Tuple[str, ...]:
    # VecSet<TypeName> renders as {"type": ..., "fields": {"contents": [...]}}
    if isinstance(rules, dict):
        rules = (rules.get("fields") or {}).get("contents") or []
    names = []
    for item in rules or []:
        if isinstance(item, dict):
            item = (item.get("fields") or {}).get("name", item.get("name"))
        if item:
            names.append(str(item))
    return tuple(names)


__all__ = [
    "KioskClient",
    "RpcTransport",
    "TransferPolicyProvider",
    "TRANSFER_POLICY_CREATED_EVENT",
    "TRANSFER_POLICY_TYPE",
]
