"""
suins-setup command-line entry point.

  suins-setup networks              List networks and their undeployed fields
  suins-setup show NETWORK          Print the resolved package table entry
  suins-setup normalize ADDRESS     Print the canonical form of an address
  suins-setup day-one NETWORK       Build the Day One display/policy transaction

Global options:
  --log-level TEXT    Logging level (env: SUINS_LOG_LEVEL)
  --log-json          JSON log lines instead of text
  --version, -V       Print version and exit

`day-one` only builds the programmable transaction and prints it; signing and
submission are done elsewhere. If the policy lookup fails after the display
commands were built, those commands are printed to stderr and the exit code
is 1.
"""

from __future__ import annotations

import json
from typing import Any, Optional

import typer

from .. import logging as slog
from ..address import normalize_sui_address
from ..config import SetupConfig
from ..errors import AddressError, ConfigurationError, SetupError
from ..registry import get_registry, resolve, validate_registry
from ..rpc.http import SuiRpcClient
from ..rpc.kiosk import KioskClient
from ..setup.day_one import run_day_one_setup
from ..tx.ops import PtbSetupBuilder
from ..types import Network
from ..version import version as full_version

app = typer.Typer(
    name="suins-setup",
    help="SuiNS deployment registry and setup transactions",
    no_args_is_help=True,
    add_completion=False,
)


def _pretty(obj: Any) -> str:
    return json.dumps(obj, indent=2, ensure_ascii=False)


def _network(value: str) -> Network:
    try:
        return Network.parse(value)
    except ConfigurationError as e:
        typer.echo(f"Error: {e.message} (expected one of: {', '.join(n.value for n in Network)})", err=True)
        raise typer.Exit(2)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"suins-setup {full_version()}")
        raise typer.Exit(0)


@app.callback()
def main_callback(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level", envvar="SUINS_LOG_LEVEL"
    ),
    log_json: bool = typer.Option(False, "--log-json", help="Emit JSON log lines"),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Print version and exit",
        callback=_print_version,
        is_eager=True,
    ),
) -> None:
    """SuiNS setup tooling."""
    slog.configure(json=True if log_json else None, level=log_level)


@app.command()
def networks(
    json_output: bool = typer.Option(False, "--json", help="Output JSON"),
) -> None:
    """List networks and the identifiers that are not deployed yet."""
    report = validate_registry()
    if json_output:
        typer.echo(_pretty(report))
        return
    for name, missing in report.items():
        typer.echo(f"{name}: {len(missing)} undeployed")
        for path in missing:
            typer.echo(f"  - {path}")


@app.command()
def show(
    network: str = typer.Argument(..., help="mainnet | testnet"),
    json_output: bool = typer.Option(False, "--json", help="Output JSON"),
) -> None:
    """Print the resolved package information for NETWORK."""
    info = resolve(_network(network), get_registry())
    if json_output:
        typer.echo(_pretty(info.to_dict()))
        return
    typer.echo(f"Network: {info.network.value}")
    typer.echo("-" * 60)
    for path, value in info.identifiers():
        typer.echo(f"{path:<36} {value}")
    for path in info.placeholders():
        typer.echo(f"{path:<36} <not deployed>")


@app.command()
def normalize(address: str = typer.Argument(..., help="Address or object id")) -> None:
    """Print the canonical 0x-prefixed 64-hex form of ADDRESS."""
    try:
        typer.echo(normalize_sui_address(address))
    except AddressError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("day-one")
def day_one(
    network: str = typer.Argument(..., help="mainnet | testnet"),
    rpc_url: Optional[str] = typer.Option(
        None, "--rpc-url", help="Fullnode JSON-RPC URL", envvar="SUINS_RPC_URL"
    ),
    display: bool = typer.Option(True, "--display/--no-display", help="Create the display"),
    policy: bool = typer.Option(True, "--policy/--no-policy", help="Create the transfer policy"),
    json_output: bool = typer.Option(False, "--json", help="Output JSON"),
) -> None:
    """Build the Day One setup transaction for NETWORK and print it."""
    net = _network(network)
    builder = PtbSetupBuilder()
    try:
        cfg = SetupConfig.from_env(network=net).with_overrides(rpc_url=rpc_url)
        with slog.trace_scope(network=net.value, component="day-one"):
            if policy:
                with SuiRpcClient.from_config(cfg) as rpc:
                    report = run_day_one_setup(
                        builder, KioskClient(rpc), net, display=display, policy=policy
                    )
            else:
                report = run_day_one_setup(builder, None, net, display=display, policy=False)
    except (SetupError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        if len(builder.tx):
            typer.echo("Partial transaction (not submitted):", err=True)
            typer.echo(_pretty(builder.tx.to_dict()), err=True)
        raise typer.Exit(1)

    out = {"report": report.to_dict(), "transaction": builder.tx.to_dict()}
    if json_output:
        typer.echo(_pretty(out))
        return
    typer.echo(f"Asset type: {report.asset_type}")
    if report.policy is not None:
        typer.echo(f"Transfer policy: {report.policy.outcome.value}")
    typer.echo(f"Commands: {len(builder.tx)}")
    if len(builder.tx) == 0:
        typer.echo("Nothing to submit.")


def main() -> None:  # pragma: no cover
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
