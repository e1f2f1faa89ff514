"""
Relay Credentials for blxrsend.

The relay authenticates the websocket upgrade with an ``Authorization``
header carrying base64(account_id:secret_hash).  No "Basic " scheme prefix
is sent; the relay expects the bare value.

Credentials are stored in ~/.blxrsend/.env as BLXR_ACCOUNT_ID and
BLXR_SECRET_HASH, or taken from the process environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from ..utils import base64_encode_text, mask_secret


# Default config directory
BLXRSEND_DIR = Path.home() / ".blxrsend"
BLXRSEND_ENV = BLXRSEND_DIR / ".env"

ACCOUNT_ID_KEY = "BLXR_ACCOUNT_ID"
SECRET_HASH_KEY = "BLXR_SECRET_HASH"
WS_URL_KEY = "BLXR_WS_URL"


@dataclass(frozen=True)
class Credentials:
    account_id: str
    secret_hash: str

    def authorization(self) -> str:
        """Authorization header value: base64 of ``account_id:secret_hash``."""
        return base64_encode_text(f"{self.account_id}:{self.secret_hash}")

    def __repr__(self) -> str:
        return (
            f"Credentials(account_id={self.account_id!r}, "
            f"secret_hash={mask_secret(self.secret_hash)!r})"
        )


def save_credentials(credentials: Credentials, env_path: Optional[Path] = None) -> Path:
    """
    Save relay credentials to a .env file.

    Other keys already present in the file are preserved.

    Args:
        credentials: Account id and secret hash to store
        env_path: Path to .env file (default: ~/.blxrsend/.env)

    Returns:
        Path to the saved .env file
    """
    env_path = env_path or BLXRSEND_ENV
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing = {}
    if env_path.exists():
        for line in env_path.read_text(encoding="utf-8").splitlines():
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                k, v = line.split("=", 1)
                existing[k.strip()] = v.strip()

    existing[ACCOUNT_ID_KEY] = credentials.account_id
    existing[SECRET_HASH_KEY] = credentials.secret_hash

    lines = [f"{k}={v}" for k, v in existing.items()]
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")

    # Set secure permissions on Unix
    if os.name != "nt":
        env_path.chmod(0o600)

    return env_path


def load_env(env_path: Optional[Path] = None) -> Path:
    """
    Load the .env file into the process environment, if it exists.

    Values in the file override the environment, as for credentials.

    Returns:
        Path of the .env file that was considered
    """
    env_path = env_path or BLXRSEND_ENV
    if env_path.exists():
        load_dotenv(env_path, override=True)
    return env_path


def load_credentials(
    env_path: Optional[Path] = None,
    account_id: Optional[str] = None,
    secret_hash: Optional[str] = None,
) -> Credentials:
    """
    Load relay credentials from .env file or environment.

    Values passed in take precedence; each missing one is looked up on
    its own, so the two may come from different sources.

    Args:
        env_path: Path to .env file (default: ~/.blxrsend/.env)
        account_id: Account id already known to the caller
        secret_hash: Secret hash already known to the caller

    Returns:
        Credentials with both fields set

    Raises:
        ValueError: If either value is missing
    """
    env_path = load_env(env_path)

    account_id = (account_id or os.environ.get(ACCOUNT_ID_KEY, "")).strip()
    secret_hash = (secret_hash or os.environ.get(SECRET_HASH_KEY, "")).strip()
    if not account_id or not secret_hash:
        missing = ACCOUNT_ID_KEY if not account_id else SECRET_HASH_KEY
        raise ValueError(
            f"{missing} not found. Run 'blxrsend configure' or set "
            f"{missing} in {env_path}"
        )

    return Credentials(account_id=account_id, secret_hash=secret_hash)
