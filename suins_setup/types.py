"""
Core types for the SuiNS deployment registry.

- Network: closed enumeration of deployment environments.
- Placeholder / NOT_DEPLOYED: explicit "not yet deployed" marker, distinct
  from any identifier string.
- PackageInfo and its sub-records: frozen per-network deployment metadata.
- TransferPolicyRecord: read-only view of an on-chain transfer policy.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from .errors import ConfigurationError, PlaceholderUsedError

__all__ = [
    "Network",
    "Placeholder",
    "NOT_DEPLOYED",
    "ObjectId",
    "IdField",
    "DiscountsPackage",
    "DiscordConfig",
    "CouponsPackage",
    "PackageInfo",
    "TransferPolicyRecord",
]

ObjectId = str


class Network(str, Enum):
    MAINNET = "mainnet"
    TESTNET = "testnet"

    @classmethod
    def parse(cls, value: Union[str, "Network"]) -> "Network":
        """Convert external text (CLI flag, env var) into a Network member."""
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if member.value == text:
                return member
        raise ConfigurationError(
            f"unknown network {value!r}",
            network=str(value),
            allowed=[m.value for m in cls],
        )

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Placeholder:
    """Marks an identifier slot whose object has not been deployed yet."""

    reason: str = "not yet deployed"

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_DEPLOYED"


NOT_DEPLOYED = Placeholder()

IdField = Union[ObjectId, Placeholder]


@dataclass(frozen=True)
class DiscountsPackage:
    package_id: IdField
    discount_house_id: IdField


@dataclass(frozen=True)
class DiscordConfig:
    package_id: IdField
    discord_cap: IdField
    discord_object_id: IdField
    discord_table_id: IdField


@dataclass(frozen=True)
class CouponsPackage:
    package_id: IdField


@dataclass(frozen=True)
class PackageInfo:
    """
    Deployment metadata for one network.

    Identifier fields hold a canonical object id or NOT_DEPLOYED. Fields typed
    Optional may also be None (no object recorded at all). Use `require()` to
    read a field that an operation cannot proceed without.
    """

    network: Network
    package_id: IdField
    registration_package_id: IdField
    publisher_id: IdField
    admin_address: IdField
    admin_cap: IdField
    suins: IdField
    direct_setup_package_id: IdField
    discounts_package: DiscountsPackage
    renewals_package_id: IdField
    sub_names_package_id: IdField
    temp_subdomains_proxy_package_id: IdField
    coupons: CouponsPackage
    discord: Optional[DiscordConfig] = None
    upgrade_cap: Optional[IdField] = None
    display_object: Optional[IdField] = None

    def require(self, path: str) -> ObjectId:
        """
        Return the identifier at dotted `path` or raise PlaceholderUsedError.

        `path` may reach into sub-records, e.g. "discounts_package.package_id".
        """
        node: Any = self
        for part in path.split("."):
            if node is None or isinstance(node, Placeholder):
                break
            if not is_dataclass(node) or part not in {f.name for f in fields(node)}:
                raise ConfigurationError(
                    f"unknown package field {path!r}", network=self.network.value
                )
            node = getattr(node, part)
        if node is None or isinstance(node, Placeholder):
            raise PlaceholderUsedError(network=self.network.value, field_path=path)
        if not isinstance(node, str):
            raise ConfigurationError(
                f"{path!r} is a record, not an identifier", network=self.network.value
            )
        return node

    def placeholders(self) -> List[str]:
        """Dotted paths of every identifier that is NOT_DEPLOYED or absent."""
        return [path for path, value in self._walk() if not isinstance(value, str)]

    def identifiers(self) -> List[Tuple[str, ObjectId]]:
        """(dotted path, id) pairs for every populated identifier."""
        return [(path, value) for path, value in self._walk() if isinstance(value, str)]

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"network": self.network.value}
        for path, value in self._walk():
            node = out
            *parents, leaf = path.split(".")
            for p in parents:
                node = node.setdefault(p, {})
            node[leaf] = value if isinstance(value, str) else None
        out["placeholders"] = self.placeholders()
        return out

    def _walk(self):
        yield from _walk_record(self, "")


def _walk_record(record: Any, prefix: str):
    for f in fields(record):
        if f.name == "network":
            continue
        value = getattr(record, f.name)
        path = f"{prefix}{f.name}"
        if is_dataclass(value) and not isinstance(value, Placeholder):
            yield from _walk_record(value, path + ".")
        else:
            yield path, value


@dataclass(frozen=True)
class TransferPolicyRecord:
    """An existing on-chain `TransferPolicy<T>` as seen through the fullnode."""

    id: ObjectId
    type: str
    owner: Any = None
    rules: Tuple[str, ...] = field(default_factory=tuple)
    balance: int = 0
