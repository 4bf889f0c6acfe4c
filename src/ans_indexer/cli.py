"""CLI entry point for the ans_indexer."""

from __future__ import annotations

import asyncio
import json
import logging
import sys

import click
import httpx

from ans_indexer.aptos.client import AptosTransactionSource
from ans_indexer.config import load_config
from ans_indexer.daemon import run_daemon
from ans_indexer.errors import AnsProcessingError
from ans_indexer.models.transactions import Transaction, parse_transaction
from ans_indexer.processing.decoder import known_event_types
from ans_indexer.processing.lookups import (
    LookupMap,
    current_ans_lookups_from_transaction,
    merge_lookups,
)
from ans_indexer.storage.sqlite import SQLiteLookupStore


def _require_contract(cfg):
    """Exit with error if no ANS contract address is configured."""
    if not cfg.contract_address:
        click.echo("Error: No ANS contract address configured.", err=True)
        click.echo(
            "Set ANS_INDEXER_CONTRACT_ADDRESS or [ans] contract_address in config.", err=True,
        )
        sys.exit(1)


def _fail(exc: Exception) -> None:
    """Exit with error for a fatal processing or transport failure."""
    click.echo(f"Fatal: {exc}", err=True)
    sys.exit(1)


def _echo_lookups(lookups: LookupMap) -> None:
    rows = [lookups[pk].to_dict() for pk in sorted(lookups)]
    click.echo(json.dumps(rows, indent=2))


def _load_transactions(path: str) -> list[Transaction]:
    with open(path) as f:
        raw = json.load(f)
    if isinstance(raw, dict):
        raw = [raw]
    return [parse_transaction(t) for t in raw]


@click.group()
@click.option("-c", "--config", "config_path", default=None, help="Path to config TOML file")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """ans_indexer - Aptos Name Service current-lookup indexer."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose

    try:
        cfg = load_config(config_path)
    except ValueError as exc:
        click.echo(f"Error: invalid configuration: {exc}", err=True)
        sys.exit(1)
    ctx.obj["config"] = cfg

    level = logging.DEBUG if verbose else getattr(logging, cfg.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


# ── Indexer ────────────────────────────────────────────


@cli.command()
@click.pass_context
def run(ctx: click.Context) -> None:
    """Start the indexer."""
    cfg = ctx.obj["config"]
    click.echo(f"Starting ans_indexer (from version {cfg.start_version})")
    try:
        asyncio.run(run_daemon(cfg))
    except (AnsProcessingError, httpx.HTTPError) as exc:
        _fail(exc)


# ── Info ───────────────────────────────────────────────


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show indexer configuration."""
    cfg = ctx.obj["config"]
    click.echo(f"RPC URL:       {cfg.rpc_url}")
    click.echo(f"Contract:      {cfg.contract_address or '(not set - ANS disabled)'}")
    click.echo(f"Start version: {cfg.start_version}")
    click.echo(f"Batch size:    {cfg.batch_size}")
    click.echo(f"DB path:       {cfg.db_path}")
    click.echo(f"Events:        {', '.join(known_event_types())}")


@cli.command()
@click.option("--version", "version", type=int, default=None, help="Fetch this transaction version")
@click.option("--file", "path", type=click.Path(exists=True, dir_okay=False), default=None,
              help="JSON file holding one transaction or a list of them")
@click.pass_context
def inspect(ctx: click.Context, version: int | None, path: str | None) -> None:
    """Derive lookups from transactions without persisting them."""
    cfg = ctx.obj["config"]
    _require_contract(cfg)
    if (version is None) == (path is None):
        raise click.UsageError("Pass exactly one of --version or --file")

    async def _fetch() -> list[Transaction]:
        source = AptosTransactionSource(cfg.rpc_url, cfg.request_timeout)
        try:
            return [await source.get_transaction_by_version(version)]
        finally:
            await source.close()

    lookups: LookupMap = {}
    try:
        transactions = _load_transactions(path) if path else asyncio.run(_fetch())
        for txn in transactions:
            merge_lookups(
                lookups, current_ans_lookups_from_transaction(txn, cfg.contract_address),
            )
    except (AnsProcessingError, httpx.HTTPError) as exc:
        _fail(exc)

    _echo_lookups(lookups)


@cli.command()
@click.argument("domain")
@click.option("--subdomain", default="", help="Subdomain name (empty for the bare domain)")
@click.pass_context
def lookup(ctx: click.Context, domain: str, subdomain: str) -> None:
    """Show the stored lookup for a name."""
    cfg = ctx.obj["config"]

    async def _lookup():
        store = SQLiteLookupStore(cfg.db_path)
        await store.initialize()
        try:
            return await store.get_lookup(domain, subdomain)
        finally:
            await store.close()

    record = asyncio.run(_lookup())
    if record is None:
        name = f"{subdomain}.{domain}" if subdomain else domain
        click.echo(f"No lookup for {name}", err=True)
        sys.exit(1)
    click.echo(json.dumps(record.to_dict(), indent=2))


@cli.command("list")
@click.pass_context
def list_lookups(ctx: click.Context) -> None:
    """List every stored lookup."""
    cfg = ctx.obj["config"]

    async def _list():
        store = SQLiteLookupStore(cfg.db_path)
        await store.initialize()
        try:
            return await store.get_all_lookups()
        finally:
            await store.close()

    records = asyncio.run(_list())
    _echo_lookups({r.pk: r for r in records})


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
