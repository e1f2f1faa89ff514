"""Relay sender errors.

Each error carries the process exit code the CLI reports for it.
"""

from __future__ import annotations


class SenderError(RuntimeError):
    exit_code: int = 1


class ConfigurationError(SenderError):
    """A required setting was missing before any network activity."""

    exit_code = 2


class RelayConnectionError(SenderError):
    """The websocket handshake with the relay failed."""

    exit_code = 3


class SerializationError(SenderError):
    exit_code = 4


class TransportError(SenderError):
    """Writing the request or reading the reply failed."""

    exit_code = 5
