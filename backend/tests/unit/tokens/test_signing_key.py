"""Unit tests for :mod:`journal_api.services.tokens.signing_key`."""

from __future__ import annotations

import base64

import pytest
from journal_api.services.tokens.signing_key import MIN_KEY_BYTES, SigningKey, SigningKeyProvider


def test_base64_secret_is_decoded():
    raw = bytes(range(32))
    provider = SigningKeyProvider.from_secret(base64.b64encode(raw).decode())
    assert provider.key.material == raw


def test_plain_secret_is_used_as_utf8_bytes():
    provider = SigningKeyProvider.from_secret("not base64 at all, has spaces and commas")
    assert provider.key.material == b"not base64 at all, has spaces and commas"


def test_secret_with_misplaced_padding_is_used_raw():
    secret = "ab=c" * 10
    provider = SigningKeyProvider.from_secret(secret)
    assert provider.key.material == secret.encode()


def test_short_key_is_accepted_with_a_warning(caplog):
    provider = SigningKeyProvider.from_secret("short-secret")
    assert len(provider.key) < MIN_KEY_BYTES
    assert "signing_key.too_short" in caplog.text


def test_empty_secret_is_rejected():
    with pytest.raises(ValueError):
        SigningKeyProvider.from_secret("")


def test_key_repr_never_shows_material():
    key = SigningKey(b"super-secret-material-0123456789abcdef")
    assert "super-secret" not in repr(key)
    assert repr(key) == f"SigningKey(<{len(key)} bytes>)"


def test_key_requires_bytes():
    with pytest.raises(ValueError):
        SigningKey(b"")
