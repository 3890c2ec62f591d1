"""
suins_setup.address
===================

Sui address / object-id canonicalisation.

Format
------
A canonical Sui identifier is `0x` followed by exactly 64 lowercase hex
characters (32 bytes). Short forms such as `0x2` are zero-padded on the left,
so `0x2` and `0x000...0002` name the same object.

This module provides:
- normalize_sui_address(value) -> str
- is_valid_sui_address(value) -> bool
- is_canonical(value) -> bool
"""

from __future__ import annotations

import re

from .errors import AddressError

SUI_ADDRESS_LENGTH = 32
_HEX_LEN = SUI_ADDRESS_LENGTH * 2
_HEX_RE = re.compile(r"[0-9a-f]*")
_VALID_RE = re.compile(r"0x[0-9a-fA-F]{1,64}")

__all__ = [
    "SUI_ADDRESS_LENGTH",
    "normalize_sui_address",
    "is_valid_sui_address",
    "is_canonical",
]


def normalize_sui_address(value: str, *, force_add_0x: bool = False) -> str:
    """
    Return the canonical `0x`-prefixed, 64-hex-char, lowercase form of `value`.

    Leading `0x` is optional on input. With `force_add_0x=True` a leading
    `0x` is treated as hex digits rather than a prefix, which only makes
    sense for raw hex strings that may legitimately start with "0x".
    Raises AddressError for empty, non-hex or over-long input.
    """
    if not isinstance(value, str):
        raise AddressError("address must be a string", value=repr(value))
    raw = value.strip().lower()
    if not force_add_0x and raw.startswith("0x"):
        raw = raw[2:]
    if not raw:
        raise AddressError("address must not be empty", value=value)
    if not _HEX_RE.fullmatch(raw):
        raise AddressError("address contains non-hex characters", value=value)
    if len(raw) > _HEX_LEN:
        raise AddressError(
            f"address longer than {SUI_ADDRESS_LENGTH} bytes", value=value
        )
    return "0x" + raw.rjust(_HEX_LEN, "0")


def is_valid_sui_address(value: object) -> bool:
    """True if `value` is `0x` followed by 1..64 hex characters (any case)."""
    return isinstance(value, str) and bool(_VALID_RE.fullmatch(value))


def is_canonical(value: object) -> bool:
    """True if `value` is already in canonical form (normalizing is a no-op)."""
    if not isinstance(value, str):
        return False
    try:
        return normalize_sui_address(value) == value
    except AddressError:
        return False
