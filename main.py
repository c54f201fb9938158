#!/usr/bin/env python3
"""Product Advertising API client - command line entry point."""
import json
import logging

import click
from colorama import Fore, Style, init

from config import app_config
from paapi import ProductAdvertisingClient
from paapi.api.marketplaces import default_registry
from paapi.errors import PaapiError

# Initialize colorama
init(autoreset=True)


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, app_config.log_level, logging.WARNING)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _build_client() -> ProductAdvertisingClient:
    missing = app_config.paapi.missing()
    if missing:
        raise click.UsageError(f"Missing configuration: {', '.join(missing)}")
    if app_config.paapi.invalid:
        raise click.UsageError(f"Invalid configuration: {'; '.join(app_config.paapi.invalid)}")
    return ProductAdvertisingClient.from_config(app_config.paapi)


def _run(ctx, operation: str, params: dict) -> None:
    """Send (or with --dry-run, print) one call and echo the result."""
    params = {k: v for k, v in params.items() if v is not None and v != ()}
    client = _build_client()

    try:
        if ctx.obj["dry_run"]:
            prepared = client.prepare(operation, **params)
            click.echo(f"{Fore.CYAN}POST {prepared.url}")
            for name, value in prepared.headers.items():
                click.echo(f"{Fore.YELLOW}{name}: {Style.RESET_ALL}{value}")
            click.echo()
            click.echo(prepared.body.decode("utf-8"))
            click.echo(f"{Fore.CYAN}Config: {Style.RESET_ALL}{json.dumps(prepared.config.to_dict())}", err=True)
            return

        response = client.execute(operation, **params)
    except PaapiError as e:
        raise click.ClickException(str(e)) from e

    colour = Fore.GREEN if response.ok else Fore.RED
    click.echo(f"{colour}HTTP {response.status}", err=True)
    try:
        click.echo(json.dumps(response.json(), indent=2, ensure_ascii=False))
    except ValueError:
        click.echo(response.text)

    if not response.ok:
        ctx.exit(1)


def _common_options(func):
    func = click.option("--marketplace", "-m", help="Marketplace code (e.g. us, de, jp)")(func)
    func = click.option("--resource", "-r", "resources", multiple=True, help="Resource selector (repeatable)")(func)
    func = click.option("--language", "languages_of_preference", multiple=True, help="Preferred language (repeatable)")(func)
    return func


def _offer_options(func):
    func = click.option("--condition", help="Offer condition (Any, New, Used, ...)")(func)
    func = click.option("--currency", "currency_of_preference", help="Preferred currency")(func)
    func = click.option("--offer-count", type=int, help="Number of offers")(func)
    return func


@click.group()
@click.version_option(version="0.1.0")
@click.option("--dry-run", is_flag=True, help="Print the signed request instead of sending it")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, dry_run, verbose):
    """Product Advertising API client."""
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["dry_run"] = dry_run


@cli.command()
@click.argument("item_ids", nargs=-1, required=True)
@_common_options
@_offer_options
@click.pass_context
def items(ctx, item_ids, **options):
    """Look up items by ASIN."""
    _run(ctx, "GetItems", {"item_ids": list(item_ids), **options})


@cli.command()
@click.argument("asin")
@_common_options
@_offer_options
@click.option("--variation-count", type=int, help="Variations per page")
@click.option("--variation-page", type=int, help="Page of variations")
@click.pass_context
def variations(ctx, asin, **options):
    """Look up the variations of an ASIN."""
    _run(ctx, "GetVariations", {"asin": asin, **options})


@cli.command("browse-nodes")
@click.argument("browse_node_ids", nargs=-1, required=True)
@_common_options
@click.pass_context
def browse_nodes(ctx, browse_node_ids, **options):
    """Look up browse nodes by id."""
    _run(ctx, "GetBrowseNodes", {"browse_node_ids": list(browse_node_ids), **options})


@cli.command()
def marketplaces():
    """List supported marketplaces."""
    click.echo(f"{Fore.CYAN}{'CODE':6}{'REGION':12}{'HOST'}")
    for marketplace in default_registry.all():
        click.echo(f"{marketplace.code:6}{marketplace.region:12}{marketplace.host}")


if __name__ == "__main__":
    cli()
