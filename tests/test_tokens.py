from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from logistics_core.errors import SignatureInvalidError, TokenExpiredError
from logistics_core.models.domain import Role, TokenClaims
from logistics_core.services.auth.tokens import TokenCodec, from_millis, to_millis

SECRET = "s" * 32 + "-primary-signing-secret"
OTHER_SECRET = "o" * 32 + "-another-signing-secret"
T0 = datetime(2026, 1, 1, 8, 0, 0, tzinfo=timezone.utc)
TTL = timedelta(milliseconds=1000)


def _claims() -> dict:
    return {"user_id": "42", "email": "Ops@Example.com", "role": Role.MANAGER}


@pytest.fixture
def codec() -> TokenCodec:
    return TokenCodec()


def test_sign_then_validate_returns_claims(codec):
    token = codec.sign(_claims(), SECRET, T0, TTL)

    claims = codec.validate(token, SECRET, T0)

    assert claims == TokenClaims(
        user_id="42",
        email="Ops@Example.com",
        role=Role.MANAGER,
        issued_at=T0,
        expires_at=T0 + TTL,
    )


def test_signing_is_deterministic(codec):
    assert codec.sign(_claims(), SECRET, T0, TTL) == codec.sign(_claims(), SECRET, T0, TTL)


def test_sign_accepts_token_claims(codec):
    source = TokenClaims(user_id="7", email="a@b.c", role=Role.USER, issued_at=T0, expires_at=T0)
    token = codec.sign(source, SECRET, T0, timedelta(minutes=5))
    assert codec.validate(token, SECRET, T0).expires_at == T0 + timedelta(minutes=5)


@pytest.mark.parametrize("elapsed_ms", [0, 1, 500, 999, 1000])
def test_token_valid_through_expiry_instant(codec, elapsed_ms):
    token = codec.sign(_claims(), SECRET, T0, TTL)
    assert codec.validate(token, SECRET, T0 + timedelta(milliseconds=elapsed_ms)).user_id == "42"


@pytest.mark.parametrize("elapsed_ms", [1001, 1200, 60_000])
def test_token_expired_after_ttl(codec, elapsed_ms):
    token = codec.sign(_claims(), SECRET, T0, TTL)
    with pytest.raises(TokenExpiredError):
        codec.validate(token, SECRET, T0 + timedelta(milliseconds=elapsed_ms))


@pytest.mark.parametrize("now", [T0, T0 + timedelta(days=365)])
def test_wrong_secret_is_signature_invalid_regardless_of_time(codec, now):
    token = codec.sign(_claims(), SECRET, T0, TTL)
    with pytest.raises(SignatureInvalidError):
        codec.validate(token, OTHER_SECRET, now)


@pytest.mark.parametrize("token", ["", "not-a-token", "a.b.c", "eyJhbGciOiJIUzI1NiJ9.e30."])
def test_malformed_tokens_are_signature_invalid(codec, token):
    with pytest.raises(SignatureInvalidError):
        codec.validate(token, SECRET, T0)


def test_tampered_payload_is_signature_invalid(codec):
    token = codec.sign(_claims(), SECRET, T0, TTL)
    header, _, signature = token.split(".")
    forged = jwt.encode({"sub": "42", "email": "x", "role": "ADMIN", "iat_ms": 0, "exp_ms": 10**15}, OTHER_SECRET)
    forged_payload = forged.split(".")[1]

    with pytest.raises(SignatureInvalidError):
        codec.validate(f"{header}.{forged_payload}.{signature}", SECRET, T0)


def test_correctly_signed_token_missing_claims_is_rejected(codec):
    token = jwt.encode({"sub": "42"}, SECRET, algorithm="HS256")
    with pytest.raises(SignatureInvalidError):
        codec.validate(token, SECRET, T0)


def test_payload_carries_standard_claims(codec):
    token = codec.sign(_claims(), SECRET, T0, timedelta(milliseconds=1500))
    payload = jwt.get_unverified_claims(token)

    assert payload["sub"] == "42"
    assert payload["role"] == "MANAGER"
    assert payload["iat"] == int(T0.timestamp())
    assert payload["exp"] == int(T0.timestamp()) + 2
    assert payload["exp_ms"] - payload["iat_ms"] == 1500


def test_millisecond_conversion_treats_naive_as_utc():
    naive = datetime(2026, 1, 1, 8, 0, 0)
    assert to_millis(naive) == to_millis(T0)
    assert from_millis(to_millis(T0)) == T0


def test_sub_millisecond_issue_time_never_extends_expiry(codec):
    issued = T0 + timedelta(microseconds=400)
    token = codec.sign(_claims(), SECRET, issued, TTL)

    claims = codec.validate(token, SECRET, T0 + TTL)
    assert claims.issued_at == T0
    assert claims.expires_at == T0 + TTL

    with pytest.raises(TokenExpiredError):
        codec.validate(token, SECRET, T0 + TTL + timedelta(microseconds=500))
