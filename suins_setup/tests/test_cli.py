from __future__ import annotations

import json
import logging
from typing import Any

import httpx
import pytest
import respx
from typer.testing import CliRunner

from suins_setup import version as version_mod
from suins_setup.cli.main import app
from suins_setup.registry import resolve
from suins_setup.setup.day_one import asset_type
from suins_setup.types import Network

runner = CliRunner()
RPC_URL = "http://localhost:9999/rpc"


@pytest.fixture(autouse=True)
def _isolate(monkeypatch):
    for v in ("SUINS_NETWORK", "SUINS_RPC_URL", "SUINS_LOG_LEVEL", "SUINS_LOG_FORMAT"):
        monkeypatch.delenv(v, raising=False)
    monkeypatch.setenv("SUINS_MAX_RETRIES", "0")
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _rpc(result: Any) -> httpx.Response:
    return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": result})


def test_networks_lists_placeholders():
    result = runner.invoke(app, ["networks", "--json"])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert "coupons.package_id" in data["mainnet"]


def test_show_prints_resolved_entry():
    result = runner.invoke(app, ["show", "testnet", "--json"])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["package_id"] == resolve(Network.TESTNET).package_id

    text = runner.invoke(app, ["show", "mainnet"])
    assert text.exit_code == 0
    assert "<not deployed>" in text.stdout


def test_unknown_network_exits_2():
    result = runner.invoke(app, ["show", "devnet"])
    assert result.exit_code == 2


def test_normalize():
    ok = runner.invoke(app, ["normalize", "0x2"])
    assert ok.exit_code == 0
    assert ok.stdout.strip() == "0x" + "0" * 63 + "2"

    bad = runner.invoke(app, ["normalize", "0xzz"])
    assert bad.exit_code == 1


def test_day_one_display_only_needs_no_node():
    result = runner.invoke(app, ["day-one", "testnet", "--no-policy", "--json"])
    assert result.exit_code == 0, result.output
    out = json.loads(result.stdout)
    assert out["report"]["policy"] is None
    assert len(out["transaction"]["commands"]) == 3


@respx.mock
def test_day_one_creates_policy_when_none_exist():
    route = respx.post(RPC_URL).mock(return_value=_rpc({"data": [], "hasNextPage": False}))
    result = runner.invoke(app, ["day-one", "testnet", "--rpc-url", RPC_URL, "--json"])
    assert result.exit_code == 0, result.output
    out = json.loads(result.stdout)
    assert out["report"]["asset_type"] == asset_type(Network.TESTNET)
    assert out["report"]["policy"]["outcome"] == "created"
    # display: new, update_version, transfer; policy: new, share, transfer
    assert len(out["transaction"]["commands"]) == 6
    assert route.call_count == 1


@respx.mock
def test_day_one_skips_existing_policy():
    pid = "0x" + "ab" * 32
    policy_type = f"0x2::transfer_policy::TransferPolicy<{asset_type(Network.TESTNET)}>"
    respx.post(RPC_URL).mock(
        side_effect=[
            _rpc({"data": [{"parsedJson": {"id": pid}}], "hasNextPage": False}),
            _rpc([{"data": {"objectId": pid, "type": policy_type, "content": {"fields": {}}}}]),
        ]
    )
    result = runner.invoke(app, ["day-one", "testnet", "--no-display", "--rpc-url", RPC_URL])
    assert result.exit_code == 0, result.output
    assert "Transfer policy: skipped" in result.stdout
    assert "Nothing to submit." in result.stdout


@respx.mock
def test_day_one_node_failure_exits_1():
    respx.post(RPC_URL).mock(side_effect=httpx.ConnectError("refused"))
    result = runner.invoke(app, ["day-one", "testnet", "--rpc-url", RPC_URL])
    assert result.exit_code == 1
    # display commands were already built; they are reported, not dropped
    assert "Partial transaction (not submitted):" in result.output
    assert "\"new_with_fields\"" in result.output


@respx.mock
def test_day_one_policy_only_failure_has_nothing_partial():
    respx.post(RPC_URL).mock(side_effect=httpx.ConnectError("refused"))
    result = runner.invoke(app, ["day-one", "testnet", "--no-display", "--rpc-url", RPC_URL])
    assert result.exit_code == 1
    assert "Partial transaction" not in result.output


def test_network_argument_wins_over_env(monkeypatch):
    monkeypatch.setenv("SUINS_NETWORK", "devnet")
    result = runner.invoke(app, ["day-one", "mainnet", "--no-policy", "--json"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["report"]["network"] == "mainnet"


def test_version_option(monkeypatch):
    monkeypatch.setattr(version_mod, "_git_describe", lambda: "v0.1.0-3-gabc1234")
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.stdout.strip() == f"suins-setup {version_mod.__version__} (v0.1.0-3-gabc1234)"

    monkeypatch.setattr(version_mod, "_git_describe", lambda: None)
    plain = runner.invoke(app, ["-V"])
    assert plain.stdout.strip() == f"suins-setup {version_mod.__version__}"
