"""
Command line interface for managing wallet pockets.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from walletpockets.cli_common import setup_cli
from walletpockets.errors import NotFoundError, PocketError
from walletpockets.models import MultisigFund, PocketId, PocketKind
from walletpockets.registry import PocketRegistry
from walletpockets.store import JsonFileStore
from walletpockets.version import get_version
from walletpockets.wallet import Wallet

app = typer.Typer(help="Manage wallet pockets.", no_args_is_help=True)

DataDirOption = Annotated[
    Path | None,
    typer.Option("--data-dir", "-d", help="Directory holding the pocket store"),
]
LogLevelOption = Annotated[
    str | None,
    typer.Option("--log-level", "-l", help="Log level (TRACE, DEBUG, INFO, ...)"),
]


def _open_registry(data_dir: Path | None, log_level: str | None) -> PocketRegistry:
    settings = setup_cli(log_level)
    path = (data_dir / settings.store.filename) if data_dir else settings.store_path
    logger.debug(f"Using pocket store {path}")
    store = JsonFileStore(path)
    return PocketRegistry(store, Wallet.from_store(store), settings.store.default_pockets)


def _fail(error: PocketError) -> typer.Exit:
    typer.secho(f"Error: {error}", fg=typer.colors.RED, err=True)
    return typer.Exit(code=1)


def _parse_id(pocket_id: str, kind: PocketKind) -> PocketId:
    if kind != PocketKind.HD:
        return pocket_id
    try:
        return int(pocket_id)
    except ValueError:
        typer.secho(
            f"Error: HD pocket ids are numbers, got {pocket_id!r}", fg=typer.colors.RED, err=True
        )
        raise typer.Exit(code=1) from None


@app.command("list")
def list_pockets(data_dir: DataDirOption = None, log_level: LogLevelOption = None) -> None:
    """List HD pockets and known multisig funds."""
    try:
        registry = _open_registry(data_dir, log_level)
    except PocketError as e:
        raise _fail(e) from e

    typer.echo("HD pockets:")
    for index, pocket in sorted(registry.pockets[PocketKind.HD].items()):
        typer.echo(f"  [{index}] {pocket.name}")

    funds = list(registry.wallet.multisig)
    if funds:
        typer.echo("Multisig funds:")
        for fund in funds:
            typer.echo(f"  {fund.address} {fund.name}")


@app.command()
def create(
    name: Annotated[str, typer.Argument(help="Name of the new pocket")],
    data_dir: DataDirOption = None,
    log_level: LogLevelOption = None,
) -> None:
    """Create a new HD pocket."""
    try:
        registry = _open_registry(data_dir, log_level)
        pocket = registry.create_pocket(name)
    except PocketError as e:
        raise _fail(e) from e
    typer.echo(f"Created pocket {pocket.name!r} with id {pocket.pocket_id}")


@app.command()
def delete(
    pocket_id: Annotated[str, typer.Argument(help="Pocket id (index or fund address)")],
    kind: Annotated[PocketKind, typer.Option("--kind", "-k")] = PocketKind.HD,
    data_dir: DataDirOption = None,
    log_level: LogLevelOption = None,
) -> None:
    """Delete a pocket. HD pocket slots are kept as tombstones."""
    parsed_id = _parse_id(pocket_id, kind)
    try:
        registry = _open_registry(data_dir, log_level)
        pocket = registry.search(kind, pocket_id=parsed_id)
        if pocket is None:
            raise NotFoundError(f"No {kind} pocket with id {parsed_id!r}")
        registry.delete_pocket(kind, parsed_id)
    except PocketError as e:
        raise _fail(e) from e
    typer.echo(f"Deleted pocket {pocket.name!r}")


@app.command()
def show(
    pocket_id: Annotated[str, typer.Argument(help="Pocket id (index or fund address)")],
    kind: Annotated[PocketKind, typer.Option("--kind", "-k")] = PocketKind.HD,
    data_dir: DataDirOption = None,
    log_level: LogLevelOption = None,
) -> None:
    """Show a single pocket."""
    parsed_id = _parse_id(pocket_id, kind)
    try:
        registry = _open_registry(data_dir, log_level)
        if kind != PocketKind.HD and parsed_id not in registry.pockets[kind]:
            registry.init_pocket_wallet(kind, parsed_id)
        wallet = registry.get_pocket_wallet(parsed_id, kind)
    except PocketError as e:
        raise _fail(e) from e

    typer.echo(f"Pocket:    {wallet.name}")
    typer.echo(f"Kind:      {wallet.kind}")
    typer.echo(f"Id:        {wallet.pocket_id}")
    typer.echo(f"Can sign:  {'yes' if wallet.can_sign else 'no'}")
    if wallet.fund is not None:
        if wallet.fund.is_placeholder:
            typer.echo("Fund:      unknown (placeholder)")
        else:
            typer.echo(f"Fund:      {wallet.fund.m}-of-{len(wallet.fund.pubkeys)}")
    typer.echo(f"Addresses: {len(wallet.all_addresses)}")


@app.command("add-fund")
def add_fund(
    address: Annotated[str, typer.Argument(help="Multisig fund address")],
    name: Annotated[str, typer.Argument(help="Display name for the fund")],
    m: Annotated[int | None, typer.Option("--m", help="Required signatures")] = None,
    pubkeys: Annotated[
        list[str] | None, typer.Option("--pubkey", help="Participant pubkey (repeatable)")
    ] = None,
    data_dir: DataDirOption = None,
    log_level: LogLevelOption = None,
) -> None:
    """Record a multisig fund so its pocket gets a proper name."""
    try:
        registry = _open_registry(data_dir, log_level)
        fund = MultisigFund(address=address, name=name, m=m, pubkeys=pubkeys or [])
        registry.wallet.multisig.add(fund)
    except PocketError as e:
        raise _fail(e) from e
    typer.echo(f"Added multisig fund {name!r} ({address})")


@app.command()
def version() -> None:
    """Print the version."""
    typer.echo(f"walletpockets {get_version()}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
