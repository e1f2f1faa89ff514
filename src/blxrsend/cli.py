"""
blxrsend CLI

Command-line interface for relaying raw transactions through the
bloXroute Cloud API websocket.

Commands:
  send      - Relay a signed raw transaction
  configure - Store relay credentials
  whoami    - Show the configured account id
  info      - Show endpoint and credential status
"""

from __future__ import annotations

import logging
import os
import sys

import click

from .pneuma.sender import CLOUD_WS, DEFAULT_LOGGER_NAME
from .sigil.credentials import (
    WS_URL_KEY,
    Credentials,
    load_credentials,
    load_env,
    save_credentials,
)
from .utils import mask_secret


# ============ Constants ============

VERSION = "1.0.0"


# ============ Logging ============


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Attach a stderr handler to the package logger."""
    logger = logging.getLogger(DEFAULT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(name)s - %(levelname)s - %(message)s"))
    logger.addHandler(handler)

    logging.getLogger("websocket").setLevel(logging.WARNING)
    return logger


# ============ Main CLI Group ============


@click.group(invoke_without_command=True)
@click.version_option(version=VERSION, prog_name="blxrsend")
@click.option("--verbose", "-v", is_flag=True, help="Log connection details to stderr")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """blxrsend - bloXroute transaction relay client."""
    setup_logging(verbose)
    load_env()
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ============ Top-level Commands ============

from .theurgy.relay import send

cli.add_command(send)


# ============ Credentials ============


@cli.command()
@click.option("--account-id", prompt="Account ID", help="Relay account id")
@click.option(
    "--secret-hash",
    prompt="Secret hash",
    hide_input=True,
    help="Relay secret hash",
)
def configure(account_id: str, secret_hash: str) -> None:
    """Store relay credentials in ~/.blxrsend/.env."""
    account_id = account_id.strip()
    secret_hash = secret_hash.strip()
    if not account_id or not secret_hash:
        click.secho("ERROR: Account id and secret hash must not be empty.", fg="red")
        sys.exit(1)

    path = save_credentials(Credentials(account_id=account_id, secret_hash=secret_hash))
    click.echo(f"Credentials saved to {path}")


@cli.command()
def whoami() -> None:
    """Show the configured relay account."""
    try:
        credentials = load_credentials()
    except ValueError:
        click.echo("No credentials found.")
        click.echo("Run 'blxrsend configure' to set them.")
        sys.exit(1)
    click.echo(f"Account: {credentials.account_id}")


# ============ Info ============


@cli.command()
def info() -> None:
    """Show endpoint and credential status."""
    click.echo(f"blxrsend v{VERSION}")
    click.echo()

    env_path = load_env()
    endpoint = os.environ.get(WS_URL_KEY) or CLOUD_WS
    click.echo(click.style("  Endpoint:    ", dim=True) + click.style(endpoint, fg="bright_white"))

    try:
        credentials = load_credentials()
        click.echo(
            click.style("  Account:     ", dim=True)
            + click.style(credentials.account_id, fg="bright_white")
        )
        click.echo(
            click.style("  Secret:      ", dim=True)
            + click.style(mask_secret(credentials.secret_hash), fg="bright_white")
        )
    except ValueError:
        click.echo(
            click.style("  Account:     ", dim=True)
            + click.style("not configured", fg="yellow")
            + click.style("  (run: blxrsend configure)", dim=True)
        )

    click.echo(click.style("  Config file: ", dim=True) + str(env_path))


# ============ Entry Points ============


def main() -> None:
    """blxrsend CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
