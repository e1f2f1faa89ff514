"""
Relay Sender - Submit raw transactions to the bloXroute relay.

One authenticated websocket connection is opened when the sender is built
and kept for its lifetime.  Each ``send`` writes one ``blxr_tx`` request
and blocks for the next frame, which is returned verbatim.

The sender takes no lock.  Calls on one instance must be sequential; two
overlapping calls may read each other's replies.  After a TransportError
the connection is in an undefined state and a new sender should be built.
"""

from __future__ import annotations

import logging
import ssl
from dataclasses import dataclass
from typing import Any, Callable, Optional

import websocket

from ..sigil.credentials import Credentials
from .envelope import blxr_tx_request, encode_request
from .errors import ConfigurationError, RelayConnectionError, TransportError

# Default relay endpoint (bloXroute Cloud API)
CLOUD_WS = "wss://api.blxrbdn.com/ws"

DEFAULT_LOGGER_NAME = "blxrsend"

Dialer = Callable[..., Any]


@dataclass
class SenderConfig:
    account_id: str = ""
    secret_hash: str = ""
    url: str = ""
    logger: Optional[logging.Logger] = None
    verify_tls: bool = True
    ca_file: Optional[str] = None
    timeout: Optional[float] = None
    dialer: Optional[Dialer] = None

    def endpoint(self) -> str:
        return self.url or CLOUD_WS

    def sslopt(self) -> dict[str, Any]:
        """TLS options for the websocket handshake."""
        if not self.verify_tls:
            return {"cert_reqs": ssl.CERT_NONE, "check_hostname": False}
        opts: dict[str, Any] = {"cert_reqs": ssl.CERT_REQUIRED}
        if self.ca_file:
            opts["ca_certs"] = self.ca_file
        return opts


Option = Callable[[SenderConfig], None]


def log(logger: logging.Logger) -> Option:
    def apply(config: SenderConfig) -> None:
        config.logger = logger
    return apply


def account_id(value: str) -> Option:
    def apply(config: SenderConfig) -> None:
        config.account_id = value
    return apply


def secret_hash(value: str) -> Option:
    def apply(config: SenderConfig) -> None:
        config.secret_hash = value
    return apply


def url(value: str) -> Option:
    def apply(config: SenderConfig) -> None:
        config.url = value
    return apply


def verify_tls(enabled: bool) -> Option:
    """Turn certificate verification on or off (on by default)."""
    def apply(config: SenderConfig) -> None:
        config.verify_tls = enabled
    return apply


def ca_file(path: str) -> Option:
    def apply(config: SenderConfig) -> None:
        config.ca_file = path
    return apply


def timeout(seconds: Optional[float]) -> Option:
    """Socket timeout for the handshake and reads; None blocks indefinitely."""
    def apply(config: SenderConfig) -> None:
        config.timeout = seconds
    return apply


def dialer(fn: Dialer) -> Option:
    def apply(config: SenderConfig) -> None:
        config.dialer = fn
    return apply


def new_sender(*options: Option) -> "Sender":
    """
    Build a SenderConfig from options and connect.

    Options are applied in order, so a later option overrides an earlier
    one for the same setting.

    Raises:
        ConfigurationError: If the account id or secret hash is unset
        RelayConnectionError: If the websocket handshake fails
    """
    config = SenderConfig()
    for option in options:
        option(config)
    return Sender(config)


class Sender:
    def __init__(self, config: SenderConfig) -> None:
        if not config.account_id:
            raise ConfigurationError("account id is unset")
        if not config.secret_hash:
            raise ConfigurationError("secret hash is unset")

        self.log = config.logger or logging.getLogger(DEFAULT_LOGGER_NAME)
        self.url = config.endpoint()

        credentials = Credentials(account_id=config.account_id, secret_hash=config.secret_hash)
        header = [f"Authorization: {credentials.authorization()}"]

        if not config.verify_tls:
            self.log.warning("TLS certificate verification is disabled for %s", self.url)

        self.log.debug("Dialing relay %s as account %s", self.url, config.account_id)
        try:
            connect = config.dialer or websocket.create_connection
            self._conn = connect(
                self.url,
                header=header,
                sslopt=config.sslopt(),
                timeout=config.timeout,
            )
        except (websocket.WebSocketException, OSError, ValueError) as exc:
            raise RelayConnectionError(f"Cannot connect to {self.url}: {exc}") from exc
        self.log.debug("Connected to relay %s", self.url)

    def send(self, raw_tx: str) -> str:
        """
        Submit a raw transaction and return the relay's reply.

        Args:
            raw_tx: Signed transaction, already encoded (hex)

        Returns:
            Raw text of the next frame received, unparsed

        Raises:
            SerializationError: If the request cannot be encoded
            TransportError: If the write or the read fails
        """
        message = encode_request(blxr_tx_request(raw_tx))

        try:
            self._conn.send(message)
        except (websocket.WebSocketException, OSError) as exc:
            raise TransportError(f"Write to {self.url} failed: {exc}") from exc
        self.log.debug("Sent blxr_tx request (%d bytes)", len(message))

        try:
            opcode, data = self._conn.recv_data()
        except (websocket.WebSocketException, OSError) as exc:
            raise TransportError(f"Read from {self.url} failed: {exc}") from exc

        if opcode == websocket.ABNF.OPCODE_CLOSE:
            raise TransportError(f"Connection to {self.url} closed before a reply arrived")

        if isinstance(data, bytes):
            try:
                data = data.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise TransportError(f"Reply from {self.url} is not valid UTF-8") from exc
        self.log.debug("Received reply (%d bytes)", len(data))
        return data

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> "Sender":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
