from datetime import datetime, timedelta, timezone

import jwt
import pytest

from services.token_service import (
    InvalidTokenError,
    MissingTokenError,
    TokenService,
    extract_bearer_token,
)

TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"

ISSUED_AT = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


def test_issue_and_verify_round_trip():
    service = TokenService(TEST_SECRET)
    token = service.issue("user-1", "alice")

    claims = service.verify(token)

    assert claims.user_id == "user-1"
    assert claims.username == "alice"
    assert claims.exp - claims.iat == 3600


def test_token_claims_use_wire_names():
    token = TokenService(TEST_SECRET).issue("user-1", "alice")
    payload = jwt.decode(token, TEST_SECRET, algorithms=["HS256"])
    assert {"userId", "username", "iat", "exp"} <= set(payload)


@pytest.mark.parametrize("secret", [None, ""])
def test_missing_secret_is_fatal(secret):
    with pytest.raises(ValueError):
        TokenService(secret)


@pytest.mark.parametrize("token", [None, ""])
def test_no_token_is_missing(token):
    with pytest.raises(MissingTokenError):
        TokenService(TEST_SECRET).verify(token)


def test_garbage_token_is_invalid():
    with pytest.raises(InvalidTokenError):
        TokenService(TEST_SECRET).verify("not-a-jwt")


def test_token_signed_with_other_secret_is_invalid():
    token = TokenService("some-other-secret-that-is-also-long-enough").issue("user-1", "alice")
    with pytest.raises(InvalidTokenError):
        TokenService(TEST_SECRET).verify(token)


def test_token_without_identity_claims_is_invalid():
    token = jwt.encode(
        {"userId": "user-1", "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
        TEST_SECRET,
        algorithm="HS256",
    )
    with pytest.raises(InvalidTokenError):
        TokenService(TEST_SECRET).verify(token)


def test_token_valid_until_expiry():
    clock = FakeClock(ISSUED_AT)
    service = TokenService(TEST_SECRET, clock=clock)
    token = service.issue("user-1", "alice")

    clock.now = ISSUED_AT + timedelta(minutes=59, seconds=59)
    assert service.verify(token).username == "alice"


@pytest.mark.parametrize("elapsed", [timedelta(hours=1), timedelta(hours=1, seconds=1), timedelta(days=2)])
def test_token_rejected_at_and_after_expiry(elapsed):
    clock = FakeClock(ISSUED_AT)
    service = TokenService(TEST_SECRET, clock=clock)
    token = service.issue("user-1", "alice")

    clock.now = ISSUED_AT + elapsed
    with pytest.raises(InvalidTokenError):
        service.verify(token)


@pytest.mark.parametrize(
    "header, expected",
    [
        (None, None),
        ("", None),
        ("Bearer", None),
        ("Bearer abc.def.ghi", "abc.def.ghi"),
        ("Bearer   abc", "abc"),
        ("Token abc", "abc"),
    ],
)
def test_extract_bearer_token(header, expected):
    assert extract_bearer_token(header) == expected
