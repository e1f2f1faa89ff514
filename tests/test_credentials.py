"""Tests for relay credential handling and persistence."""

from __future__ import annotations

import base64
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from blxrsend.sigil.credentials import (
    ACCOUNT_ID_KEY,
    SECRET_HASH_KEY,
    WS_URL_KEY,
    Credentials,
    load_credentials,
    load_env,
    save_credentials,
)


class TestCredentials:
    def test_authorization(self) -> None:
        creds = Credentials(account_id="A", secret_hash="B")
        assert creds.authorization() == base64.b64encode(b"A:B").decode("ascii")

    def test_authorization_has_no_scheme_prefix(self) -> None:
        creds = Credentials(account_id="acct", secret_hash="secret")
        assert not creds.authorization().startswith("Basic ")

    def test_repr_masks_secret(self) -> None:
        creds = Credentials(account_id="acct", secret_hash="0123456789abcdef")
        text = repr(creds)
        assert "acct" in text
        assert "0123456789abcdef" not in text


class TestSaveAndLoad:
    """Round trip through a .env file in a temp directory."""

    def test_save_then_load(self, tmp_path: Path) -> None:
        env_path = tmp_path / ".blxrsend" / ".env"
        with patch.dict(os.environ, {}, clear=True):
            saved = save_credentials(Credentials("acct", "secret"), env_path)
            loaded = load_credentials(env_path)
        assert saved == env_path
        assert loaded == Credentials("acct", "secret")

    def test_save_preserves_other_keys(self, tmp_path: Path) -> None:
        env_path = tmp_path / ".env"
        env_path.write_text("# relay\nBLXR_WS_URL=wss://relay.test/ws\n", encoding="utf-8")
        save_credentials(Credentials("acct", "secret"), env_path)
        content = env_path.read_text(encoding="utf-8")
        assert "BLXR_WS_URL=wss://relay.test/ws" in content
        assert f"{ACCOUNT_ID_KEY}=acct" in content
        assert f"{SECRET_HASH_KEY}=secret" in content

    def test_save_overwrites_previous_values(self, tmp_path: Path) -> None:
        env_path = tmp_path / ".env"
        save_credentials(Credentials("old", "old-secret"), env_path)
        save_credentials(Credentials("new", "new-secret"), env_path)
        content = env_path.read_text(encoding="utf-8")
        assert "old" not in content
        assert f"{ACCOUNT_ID_KEY}=new" in content

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions only")
    def test_file_mode(self, tmp_path: Path) -> None:
        env_path = save_credentials(Credentials("acct", "secret"), tmp_path / ".env")
        assert env_path.stat().st_mode & 0o777 == 0o600

    def test_load_from_environment(self, tmp_path: Path) -> None:
        env = {ACCOUNT_ID_KEY: "env-acct", SECRET_HASH_KEY: "env-secret"}
        with patch.dict(os.environ, env, clear=True):
            loaded = load_credentials(tmp_path / "missing.env")
        assert loaded == Credentials("env-acct", "env-secret")

    def test_load_missing_account(self, tmp_path: Path) -> None:
        with patch.dict(os.environ, {SECRET_HASH_KEY: "secret"}, clear=True):
            with pytest.raises(ValueError, match=ACCOUNT_ID_KEY):
                load_credentials(tmp_path / "missing.env")

    def test_load_missing_secret(self, tmp_path: Path) -> None:
        with patch.dict(os.environ, {ACCOUNT_ID_KEY: "acct"}, clear=True):
            with pytest.raises(ValueError, match=SECRET_HASH_KEY):
                load_credentials(tmp_path / "missing.env")

    def test_blank_values_count_as_missing(self, tmp_path: Path) -> None:
        env = {ACCOUNT_ID_KEY: "  ", SECRET_HASH_KEY: "secret"}
        with patch.dict(os.environ, env, clear=True):
            with pytest.raises(ValueError):
                load_credentials(tmp_path / "missing.env")

    def test_explicit_value_combined_with_env_file(self, tmp_path: Path) -> None:
        env_path = tmp_path / ".env"
        env_path.write_text(f"{SECRET_HASH_KEY}=file-secret\n", encoding="utf-8")
        with patch.dict(os.environ, {}, clear=True):
            loaded = load_credentials(env_path, account_id="cli-acct")
        assert loaded == Credentials("cli-acct", "file-secret")

    def test_explicit_values_take_precedence(self, tmp_path: Path) -> None:
        env = {ACCOUNT_ID_KEY: "env-acct", SECRET_HASH_KEY: "env-secret"}
        with patch.dict(os.environ, env, clear=True):
            loaded = load_credentials(tmp_path / "missing.env", account_id="A", secret_hash="B")
        assert loaded == Credentials("A", "B")


class TestLoadEnv:
    def test_loads_other_keys(self, tmp_path: Path) -> None:
        env_path = tmp_path / ".env"
        env_path.write_text(f"{WS_URL_KEY}=wss://relay.test/ws\n", encoding="utf-8")
        with patch.dict(os.environ, {}, clear=True):
            assert load_env(env_path) == env_path
            assert os.environ[WS_URL_KEY] == "wss://relay.test/ws"

    def test_missing_file_is_ignored(self, tmp_path: Path) -> None:
        with patch.dict(os.environ, {}, clear=True):
            load_env(tmp_path / "missing.env")
            assert WS_URL_KEY not in os.environ
