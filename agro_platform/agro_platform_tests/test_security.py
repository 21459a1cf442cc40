"""
Unit tests for password hashing and session tokens.
"""
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from agro_platform.agro_platform.auth_service.auth import PasswordHasher, SessionTokenCodec, TOKEN_LIFETIME
from agro_platform.agro_platform.auth_service.errors import ErrorKind, InternalError, InvalidToken

SECRET = "unit-test-secret-with-enough-bytes-for-hs512-signatures-0123456789abcdef"


@pytest.fixture
def local_hasher():
    return PasswordHasher(rounds=1000)


@pytest.fixture
def local_codec():
    return SessionTokenCodec(SECRET)


@pytest.mark.parametrize("password", ["123456", "contraseña segura", "x" * 200])
def test_hash_then_verify(local_hasher, password):
    digest = local_hasher.hash(password)
    assert digest != password
    assert local_hasher.verify(password, digest) is True


def test_verify_rejects_other_password(local_hasher):
    digest = local_hasher.hash("123456")
    assert local_hasher.verify("1234567", digest) is False


def test_hash_is_salted(local_hasher):
    assert local_hasher.hash("123456") != local_hasher.hash("123456")


def test_verify_never_raises_on_bad_digest(local_hasher):
    assert local_hasher.verify("123456", "not-a-hash") is False
    assert local_hasher.verify("123456", "") is False
    assert local_hasher.verify("", local_hasher.hash("123456")) is False


def test_dummy_verify_runs(local_hasher):
    local_hasher.dummy_verify()


def test_issue_and_verify_claims(local_codec):
    token = local_codec.issue(42, "ana@test.com", "empresa")
    claims = local_codec.verify(token)
    assert (claims.id, claims.email, claims.rol) == (42, "ana@test.com", "empresa")


def test_token_expires_after_seven_days(local_codec):
    before = datetime.now(timezone.utc)
    token = local_codec.issue(1, "a@test.com", "productor")
    payload = jwt.decode(token, SECRET, algorithms=["HS256"])
    expiry = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
    assert TOKEN_LIFETIME == timedelta(days=7)
    assert before + timedelta(days=7) - timedelta(seconds=5) <= expiry <= before + timedelta(days=7, seconds=5)


def test_expired_token_rejected(local_codec):
    past = datetime.now(timezone.utc) - timedelta(days=1)
    token = jwt.encode({"sub": "1", "email": "a@test.com", "rol": "productor", "exp": past}, SECRET, algorithm="HS256")
    with pytest.raises(InvalidToken) as exc_info:
        local_codec.verify(token)
    assert exc_info.value.detail == "token_expired"


def test_token_from_other_secret_rejected(local_codec):
    other = SessionTokenCodec("another-secret-with-enough-bytes-for-hs256").issue(1, "a@test.com", "productor")
    with pytest.raises(InvalidToken):
        local_codec.verify(other)


def test_algorithm_is_pinned(local_codec):
    claims = {"sub": "1", "email": "a@test.com", "rol": "productor",
              "exp": datetime.now(timezone.utc) + timedelta(hours=1)}
    unsigned = jwt.encode(claims, None, algorithm="none")
    hs512 = jwt.encode(claims, SECRET, algorithm="HS512")
    for token in (unsigned, hs512):
        with pytest.raises(InvalidToken):
            local_codec.verify(token)


@pytest.mark.parametrize("claims", [
    {"sub": "1", "email": "a@test.com"},
    {"sub": "abc", "email": "a@test.com", "rol": "productor"},
])
def test_incomplete_or_malformed_claims_rejected(local_codec, claims):
    claims["exp"] = datetime.now(timezone.utc) + timedelta(hours=1)
    token = jwt.encode(claims, SECRET, algorithm="HS256")
    with pytest.raises(InvalidToken):
        local_codec.verify(token)


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_malformed_token_rejected(local_codec, token):
    with pytest.raises(InvalidToken) as exc_info:
        local_codec.verify(token)
    assert exc_info.value.kind == ErrorKind.INVALID_TOKEN


def test_signing_failure_is_internal_error():
    codec = SessionTokenCodec(SECRET, algorithm="NOPE")
    with pytest.raises(InternalError):
        codec.issue(1, "a@test.com", "productor")


def test_blank_secret_refused():
    with pytest.raises(ValueError):
        SessionTokenCodec("")
