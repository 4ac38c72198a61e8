"""Unit tests for :class:`journal_api.services.tokens.codec.TokenCodec`."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
import pytest
from journal_api.services._shared.errors import (
    InvalidSignatureError,
    MalformedTokenError,
    TokenError,
    TokenExpiredError,
    UnsupportedTokenError,
)
from journal_api.services.tokens.codec import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    TokenCodec,
)
from journal_api.services.tokens.signing_key import SigningKey

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)
KEY = SigningKey(b"k" * 32)
OTHER_KEY = SigningKey(b"o" * 32)


def _codec(key: SigningKey = KEY, **kwargs) -> TokenCodec:
    kwargs.setdefault("access_ttl", timedelta(hours=1))
    kwargs.setdefault("refresh_ttl", timedelta(days=30))
    return TokenCodec(key=key, clock=lambda: NOW, **kwargs)


# ------------------------------- Issuance --------------------------------- #
def test_access_token_round_trip():
    codec = _codec()
    token = codec.issue_access_token("alice", NOW)

    claims = codec.verify(token, now=NOW)

    assert claims.subject == "alice"
    assert claims.token_type == ACCESS_TOKEN_TYPE
    assert claims.issued_at == NOW
    assert claims.expires_at == NOW + timedelta(hours=1)


def test_refresh_token_uses_refresh_ttl_and_type():
    codec = _codec()
    claims = codec.verify(codec.issue_refresh_token("alice", NOW), now=NOW)
    assert claims.token_type == REFRESH_TOKEN_TYPE
    assert claims.expires_at - claims.issued_at == timedelta(days=30)


def test_tokens_issued_in_the_same_second_differ():
    codec = _codec()
    assert codec.issue_refresh_token("alice", NOW) != codec.issue_refresh_token("alice", NOW)


def test_codec_clock_is_used_when_now_is_omitted():
    codec = _codec()
    claims = codec.verify(codec.issue_access_token("alice"))
    assert claims.issued_at == NOW


def test_empty_subject_is_rejected():
    with pytest.raises(ValueError):
        _codec().issue_access_token("", NOW)


def test_non_positive_ttl_is_rejected():
    with pytest.raises(ValueError):
        _codec(access_ttl=timedelta(0))


# ------------------------------ Verification ------------------------------ #
def test_expired_token_reports_expiry_not_signature():
    codec = _codec()
    token = codec.issue_access_token("alice", NOW)

    with pytest.raises(TokenExpiredError):
        codec.verify(token, now=NOW + timedelta(hours=1))


def test_token_is_valid_until_just_before_exp():
    codec = _codec()
    token = codec.issue_access_token("alice", NOW)
    assert codec.verify(token, now=NOW + timedelta(minutes=59, seconds=59)).subject == "alice"


def test_token_signed_with_another_key_fails_signature():
    token = _codec(OTHER_KEY).issue_access_token("alice", NOW)

    with pytest.raises(InvalidSignatureError):
        _codec().verify(token, now=NOW)


def test_alg_none_is_unsupported():
    payload = {"sub": "alice", "iat": int(NOW.timestamp()), "exp": int(NOW.timestamp()) + 60}
    token = jwt.encode(payload, None, algorithm="none")

    with pytest.raises(UnsupportedTokenError):
        _codec().verify(token, now=NOW)


def test_other_hmac_algorithm_is_unsupported():
    payload = {"sub": "alice", "iat": int(NOW.timestamp()), "exp": int(NOW.timestamp()) + 60}
    token = jwt.encode(payload, KEY.material, algorithm="HS512")

    with pytest.raises(UnsupportedTokenError):
        _codec().verify(token, now=NOW)


@pytest.mark.parametrize("garbage", ["", "   ", "abc", "a.b.c", "not-a-token.at.all"])
def test_garbage_is_malformed(garbage):
    with pytest.raises(MalformedTokenError):
        _codec().verify(garbage, now=NOW)


def test_missing_subject_is_malformed():
    payload = {"iat": int(NOW.timestamp()), "exp": int(NOW.timestamp()) + 60}
    token = jwt.encode(payload, KEY.material, algorithm="HS256")

    with pytest.raises(MalformedTokenError):
        _codec().verify(token, now=NOW)


def test_expected_type_mismatch_is_unsupported():
    codec = _codec()
    token = codec.issue_access_token("alice", NOW)

    with pytest.raises(UnsupportedTokenError):
        codec.verify(token, now=NOW, expected_type=REFRESH_TOKEN_TYPE)


def test_all_failures_share_the_token_error_base():
    codec = _codec()
    expired = codec.issue_access_token("alice", NOW - timedelta(days=1))
    with pytest.raises(TokenError):
        codec.verify(expired, now=NOW)


def test_subject_of_ignores_expiry_but_not_signature():
    codec = _codec()
    expired = codec.issue_access_token("alice", NOW - timedelta(days=1))
    assert codec.subject_of(expired) == "alice"

    with pytest.raises(InvalidSignatureError):
        codec.subject_of(_codec(OTHER_KEY).issue_access_token("alice", NOW))
