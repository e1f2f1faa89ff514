"""
Theurgy Relay - Submit a raw transaction.

Opens one connection to the relay, sends a single ``blxr_tx`` request and
prints the reply exactly as received.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from typing import Optional

import click

from ..pneuma import sender as relay
from ..pneuma.errors import ConfigurationError, SenderError
from ..sigil.credentials import WS_URL_KEY, load_credentials, load_env

logger = logging.getLogger(__name__)


@click.command()
@click.argument("raw_tx")
@click.option("--account-id", envvar="BLXR_ACCOUNT_ID", default=None, help="Relay account id")
@click.option("--secret-hash", envvar="BLXR_SECRET_HASH", default=None, help="Relay secret hash")
@click.option(
    "--url",
    "ws_url",
    default=None,
    help=f"Relay websocket endpoint [default: $BLXR_WS_URL or {relay.CLOUD_WS}]",
)
@click.option("--insecure", is_flag=True, help="Skip TLS certificate verification")
@click.option(
    "--ca-file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="CA bundle used to verify the relay certificate",
)
@click.option("--timeout", "timeout_s", type=float, default=None, help="Socket timeout in seconds")
def send(
    raw_tx: str,
    account_id: Optional[str],
    secret_hash: Optional[str],
    ws_url: Optional[str],
    insecure: bool,
    ca_file: Optional[str],
    timeout_s: Optional[float],
) -> None:
    """
    Relay a signed raw transaction.

    RAW_TX is the encoded transaction, or '-' to read it from stdin.
    The relay's reply is printed unmodified.
    """
    if raw_tx == "-":
        raw_tx = click.get_text_stream("stdin").read().strip()
    if not raw_tx:
        click.secho("ERROR: Empty transaction", fg="red", err=True)
        sys.exit(1)

    load_env()
    ws_url = ws_url or os.environ.get(WS_URL_KEY) or relay.CLOUD_WS

    try:
        credentials = load_credentials(account_id=account_id, secret_hash=secret_hash)
    except ValueError as exc:
        click.secho(f"ERROR: {exc}", fg="red", err=True)
        sys.exit(ConfigurationError.exit_code)

    options = [
        relay.log(logger),
        relay.account_id(credentials.account_id),
        relay.secret_hash(credentials.secret_hash),
        relay.url(ws_url),
        relay.verify_tls(not insecure),
        relay.timeout(timeout_s),
    ]
    if ca_file:
        options.append(relay.ca_file(ca_file))

    try:
        with relay.new_sender(*options) as sender:
            reply = sender.send(raw_tx)
    except SenderError as exc:
        click.secho(f"ERROR: {exc}", fg="red", err=True)
        sys.exit(exc.exit_code)

    click.echo(reply)
    if _is_rpc_error(reply):
        sys.exit(1)


def _is_rpc_error(reply: str) -> bool:
    """True if the reply is a JSON-RPC error object."""
    try:
        data = json.loads(reply)
    except json.JSONDecodeError:
        return False
    return isinstance(data, dict) and data.get("error") is not None
