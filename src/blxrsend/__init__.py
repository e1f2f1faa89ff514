__all__ = [
    # Sender
    "CLOUD_WS",
    "Sender",
    "SenderConfig",
    "new_sender",
    # Options
    "account_id",
    "ca_file",
    "dialer",
    "log",
    "secret_hash",
    "timeout",
    "url",
    "verify_tls",
    # Envelope
    "Request",
    "blxr_tx_request",
    "encode_request",
    # Errors
    "SenderError",
    "ConfigurationError",
    "RelayConnectionError",
    "SerializationError",
    "TransportError",
    # Credentials
    "Credentials",
    "load_credentials",
    "save_credentials",
]

from .pneuma.envelope import Request, blxr_tx_request, encode_request
from .pneuma.errors import (
    ConfigurationError,
    RelayConnectionError,
    SenderError,
    SerializationError,
    TransportError,
)
from .pneuma.sender import (
    CLOUD_WS,
    Sender,
    SenderConfig,
    account_id,
    ca_file,
    dialer,
    log,
    new_sender,
    secret_hash,
    timeout,
    url,
    verify_tls,
)
from .sigil.credentials import Credentials, load_credentials, save_credentials
