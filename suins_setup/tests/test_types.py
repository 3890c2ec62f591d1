from __future__ import annotations

import json

import pytest

from suins_setup.errors import ConfigurationError, PlaceholderUsedError
from suins_setup.registry import resolve
from suins_setup.types import NOT_DEPLOYED, Network, Placeholder


def test_network_parse():
    assert Network.parse("MAINNET") is Network.MAINNET
    assert Network.parse(Network.TESTNET) is Network.TESTNET
    assert str(Network.TESTNET) == "testnet"
    with pytest.raises(ConfigurationError) as ei:
        Network.parse("localnet")
    assert ei.value.context["allowed"] == ["mainnet", "testnet"]


def test_placeholder_never_equals_an_identifier():
    assert NOT_DEPLOYED != "TODO: Fill this in..."
    assert NOT_DEPLOYED != "0x" + "0" * 64
    assert not NOT_DEPLOYED
    assert NOT_DEPLOYED == Placeholder()
    assert repr(NOT_DEPLOYED) == "NOT_DEPLOYED"


def test_require_returns_real_identifiers():
    info = resolve(Network.TESTNET)
    assert info.require("publisher_id") == info.publisher_id
    assert info.require("discord.discord_cap") == info.discord.discord_cap
    assert info.require("coupons.package_id").startswith("0x")


def test_require_placeholder_raises_with_path():
    info = resolve(Network.MAINNET)
    with pytest.raises(PlaceholderUsedError) as ei:
        info.require("coupons.package_id")
    assert ei.value.network == "mainnet"
    assert ei.value.field_path == "coupons.package_id"
    assert "coupons.package_id" in str(ei.value)


def test_require_absent_record_raises():
    info = resolve(Network.MAINNET)
    with pytest.raises(PlaceholderUsedError):
        info.require("discord.discord_cap")


def test_require_absent_optional_identifier_raises():
    with pytest.raises(PlaceholderUsedError):
        resolve(Network.TESTNET).require("upgrade_cap")


def test_require_unknown_field_or_record():
    info = resolve(Network.MAINNET)
    with pytest.raises(ConfigurationError):
        info.require("not_a_field")
    with pytest.raises(ConfigurationError):
        info.require("discounts_package")


def test_to_dict_is_json_safe():
    data = resolve(Network.MAINNET).to_dict()
    json.dumps(data)
    assert data["network"] == "mainnet"
    assert data["coupons"]["package_id"] is None
    assert data["discord"] is None
    assert data["discounts_package"]["package_id"].startswith("0x")
    assert "coupons.package_id" in data["placeholders"]
