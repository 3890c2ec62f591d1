"""
suins_setup.registry
--------------------

Per-network deployment table for the SuiNS package family.

`PACKAGES` below is the hand-maintained source table. It is turned into
frozen `PackageInfo` records once per process (`get_registry()`); every
identifier is normalized on the way in, so how a literal was typed (case,
padding) does not matter. Unfilled slots are spelled `NOT_DEPLOYED`; the
legacy string "TODO: Fill this in..." is accepted and converted too.

    from suins_setup.registry import resolve
    info = resolve(Network.MAINNET)
    info.require("publisher_id")
"""

from __future__ import annotations

import functools
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Union

from .address import normalize_sui_address
from .errors import AddressError, ConfigurationError
from .types import (
    NOT_DEPLOYED,
    CouponsPackage,
    DiscordConfig,
    DiscountsPackage,
    IdField,
    Network,
    PackageInfo,
    Placeholder,
)

__all__ = [
    "PACKAGES",
    "LEGACY_PLACEHOLDER",
    "build_registry",
    "get_registry",
    "resolve",
    "validate_registry",
]

LEGACY_PLACEHOLDER = "TODO: Fill this in..."

PACKAGES: Mapping[str, Mapping[str, Any]] = {
    "mainnet": {
        "package_id": "0xd22b24490e0bae52676651b4f56660a5ff8022a2576e0089f79b3c88d44e08f0",
        "registration_package_id": "0x9d451fa0139fef8f7c1f0bd5d7e45b7fa9dbb84c2e63c2819c7abd0a7f7d749d",
        "upgrade_cap": "0x9cda28244a0d0de294d2b271e772a9c33eb47d316c59913d7369b545b4af098c",
        "publisher_id": "0x7339f23f06df3601167d67a31752781d307136fd18304c48c928778e752caae1",
        "admin_address": "0xa81a2328b7bbf70ab196d6aca400b5b0721dec7615bf272d95e0b0df04517e72",
        "admin_cap": "0x3f8d702d90c572b60ac692fb5074f7a7ac350b80d9c59eab4f6b7692786cae0a",
        "suins": "0x6e0ddefc0ad98889c04bab9639e512c21766c5e6366f89e696956d9be6952871",
        "display_object": "0x866fbd8e51b6637c25f0e811ece9a85eb417f3987ecdfefb80f15d1192d72b4c",
        "discounts_package": {
            "package_id": "0x6a6ea140e095ddd82f7c745905054b3203129dd04a09d0375416c31161932d2d",
            "discount_house_id": "0x7fdd883c0b7427f18cdb498c4c87a4a79d6bec4783cb3f21aa3816bbc64ce8ef",
        },
        "direct_setup_package_id": "0xdac22652eb400beb1f5e2126459cae8eedc116b73b8ad60b71e3e8d7fdb317e2",
        "renewals_package_id": "0xd5e5f74126e7934e35991643b0111c3361827fc0564c83fa810668837c6f0b0f",
        "sub_names_package_id": NOT_DEPLOYED,
        "temp_subdomains_proxy_package_id": NOT_DEPLOYED,
        "discord": None,
        "coupons": {
            "package_id": NOT_DEPLOYED,
        },
    },
    "testnet": {
        "package_id": "0x22fa05f21b1ad71442491220bb9338f7b7095fe35000ef88d5400d28523bdd93",
        "registration_package_id": "0x4255184a0143c0ce4394a3f16a6f5aa5d64507269e54e51ea396d569fe8f1ba5",
        "publisher_id": "0x62d9690d7e6234bfd57170a89c9c8ec54604ea31cefaa3869e8be4912ee1a4ab",
        "admin_address": "0xfe09cf0b3d77678b99250572624bf74fe3b12af915c5db95f0ed5d755612eb68",
        "admin_cap": "0x5def5bd9dc94b7d418d081a91c533ec619fb4350e6c4e4602aea96fd49331b15",
        "suins": "0x300369e8909b9a6464da265b9a5a9ab6fe2158a040e84e808628cde7a07ee5a3",
        "direct_setup_package_id": "0xb82c701b383df8e5e55e2c8f201ee5a9fe43fc252dad291d52cc7da32f44161f",
        "discounts_package": {
            "package_id": NOT_DEPLOYED,
            "discount_house_id": NOT_DEPLOYED,
        },
        "renewals_package_id": "0x54800ebb4606fd0c03b4554976264373b3374eeb3fd63e7ff69f31cac786ba8c",
        "sub_names_package_id": "0x3c272bc45f9157b7818ece4f7411bdfa8af46303b071aca4e18c03119c9ff636",
        "temp_subdomains_proxy_package_id": "0x3489ab5dcd346afee8b681267bcab2583a5eba9855680ec9931355e50e21c148",
        "discord": {
            "discord_cap": "0x7855fea8596ed665fa0aa308f9d2fc63d2186970ba0094d7603a5914eabf41df",
            "discord_object_id": "0xf19fb56e24e26766ab650c752af9422e6bd39f53e2a8ffcc2963a9881650149c",
            "package_id": "0x3632aa821af418cd7ea22fe3e5ddd1ea0437d785598de80241b74a0ba1c2c1c1",
            "discord_table_id": "0x2bf826d3f41ed992342eb089814467d782262cce06bfd635738f3003d16fb2b5",
        },
        "coupons": {
            "package_id": "0x689a2d65a9666921e73ad4d59d13fee0d4be5df1ab5c0eeda8e0f7ebecb6f1b7",
        },
    },
}

Registry = Mapping[Network, PackageInfo]

# -------------------------
# Construction
# -------------------------


def _id(network: str, path: str, raw: Any) -> IdField:
    if isinstance(raw, Placeholder):
        return raw
    if isinstance(raw, str) and raw.strip() == LEGACY_PLACEHOLDER:
        return NOT_DEPLOYED
    try:
        return normalize_sui_address(raw)
    except AddressError as exc:
        raise ConfigurationError(
            f"invalid identifier for {path}: {exc.message}",
            network=network,
            field=path,
            value=exc.context.get("value"),
        ) from exc


def _record(network: str, path: str, raw: Any, cls, optional: bool = False):
    if raw is None:
        if optional:
            return None
        raise ConfigurationError(f"missing record {path}", network=network, field=path)
    if not isinstance(raw, Mapping):
        raise ConfigurationError(f"{path} must be a mapping", network=network, field=path)
    names = list(cls.__dataclass_fields__)
    _check_keys(network, path + ".", raw, names, names)
    return cls(**{k: _id(network, f"{path}.{k}", raw[k]) for k in names})


def _check_keys(
    network: str, prefix: str, raw: Mapping[str, Any], allowed: List[str], required: List[str]
) -> None:
    unknown = sorted(set(raw) - set(allowed))
    if unknown:
        raise ConfigurationError(
            f"unknown fields {unknown}", network=network, prefix=prefix.rstrip(".") or None
        )
    missing = [k for k in required if k not in raw]
    if missing:
        raise ConfigurationError(
            f"missing fields {missing}", network=network, prefix=prefix.rstrip(".") or None
        )


_ID_FIELDS = [
    "package_id",
    "registration_package_id",
    "publisher_id",
    "admin_address",
    "admin_cap",
    "suins",
    "direct_setup_package_id",
    "renewals_package_id",
    "sub_names_package_id",
    "temp_subdomains_proxy_package_id",
]
_OPTIONAL_ID_FIELDS = ["upgrade_cap", "display_object"]
_RECORD_FIELDS = ["discounts_package", "coupons"]
_OPTIONAL_RECORD_FIELDS = ["discord"]


def _build_info(network: Network, raw: Mapping[str, Any]) -> PackageInfo:
    name = network.value
    _check_keys(
        name,
        "",
        raw,
        _ID_FIELDS + _OPTIONAL_ID_FIELDS + _RECORD_FIELDS + _OPTIONAL_RECORD_FIELDS,
        _ID_FIELDS + _RECORD_FIELDS,
    )
    kwargs: Dict[str, Any] = {k: _id(name, k, raw[k]) for k in _ID_FIELDS}
    for k in _OPTIONAL_ID_FIELDS:
        kwargs[k] = None if raw.get(k) is None else _id(name, k, raw[k])
    kwargs["discounts_package"] = _record(
        name, "discounts_package", raw["discounts_package"], DiscountsPackage
    )
    kwargs["coupons"] = _record(name, "coupons", raw["coupons"], CouponsPackage)
    kwargs["discord"] = _record(
        name, "discord", raw.get("discord"), DiscordConfig, optional=True
    )
    return PackageInfo(network=network, **kwargs)


def build_registry(raw: Mapping[str, Mapping[str, Any]]) -> Registry:
    """
    Build an immutable registry from a raw table keyed by network name.

    The table's keys must be exactly the Network members; anything else is a
    ConfigurationError.
    """
    expected = {n.value for n in Network}
    got = {str(k) for k in raw}
    if got != expected:
        raise ConfigurationError(
            "registry keys do not match the network set",
            missing=sorted(expected - got),
            unexpected=sorted(got - expected),
        )
    table = {n: _build_info(n, raw[n.value]) for n in Network}
    return MappingProxyType(table)


@functools.lru_cache(maxsize=None)
def get_registry() -> Registry:
    """The process-wide registry, built from PACKAGES on first use."""
    return build_registry(PACKAGES)


# -------------------------
# Lookup
# -------------------------


def resolve(
    network: Union[Network, str], registry: Optional[Registry] = None
) -> PackageInfo:
    """Return the PackageInfo for `network`."""
    net = Network.parse(network)
    reg = get_registry() if registry is None else registry
    try:
        return reg[net]
    except KeyError:
        raise ConfigurationError(
            f"no registry entry for {net.value}", network=net.value
        ) from None


def validate_registry(registry: Optional[Registry] = None) -> Dict[str, List[str]]:
    """Map each network name to the dotted paths of its undeployed identifiers."""
    reg = get_registry() if registry is None else registry
    return {net.value: info.placeholders() for net, info in reg.items()}
