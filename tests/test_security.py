import pytest
from jose import jwt

from socialfeed.core.security import (
    InvalidTokenError,
    TokenClaims,
    TokenExpiredError,
    TokenService,
    get_password_hash,
    verify_password,
)

SECRET = "unit-secret"


class FakeClock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock(1_700_000_000)


@pytest.fixture
def tokens(clock):
    return TokenService(SECRET, expiration_minutes=10, clock=clock)


def test_issue_sets_user_iat_and_exp(tokens, clock):
    token = tokens.issue("abc")

    payload = jwt.decode(token, SECRET, algorithms=["HS256"], options={"verify_exp": False})
    assert payload == {"user_id": "abc", "iat": clock.now, "exp": clock.now + 600}


def test_decode_returns_the_claims(tokens, clock):
    claims = tokens.decode(tokens.issue("abc"))

    assert claims == TokenClaims(user_id="abc", issued_at=clock.now, expires_at=clock.now + 600)


def test_refresh_is_strictly_newer_within_the_same_second(tokens):
    claims = tokens.decode(tokens.issue("abc"))

    refreshed = tokens.decode(tokens.refresh(claims))

    assert refreshed.user_id == "abc"
    assert refreshed.issued_at > claims.issued_at
    assert refreshed.expires_at > claims.expires_at


def test_refresh_uses_the_clock_when_it_has_moved_on(tokens, clock):
    claims = tokens.decode(tokens.issue("abc"))
    clock.now += 120

    refreshed = tokens.decode(tokens.refresh(claims))

    assert refreshed.issued_at == clock.now


def test_token_expires_at_its_exp(tokens, clock):
    token = tokens.issue("abc")
    clock.now += 600

    with pytest.raises(TokenExpiredError):
        tokens.decode(token)


def test_token_is_valid_just_before_exp(tokens, clock):
    token = tokens.issue("abc")
    clock.now += 599

    assert tokens.decode(token).user_id == "abc"


def test_wrong_secret_is_invalid(tokens):
    other = TokenService("another-secret", clock=lambda: 1_700_000_000)

    with pytest.raises(InvalidTokenError):
        tokens.decode(other.issue("abc"))


def test_garbage_is_invalid(tokens):
    with pytest.raises(InvalidTokenError):
        tokens.decode("not.a.token")


def test_missing_user_id_is_invalid(tokens, clock):
    token = jwt.encode({"iat": clock.now, "exp": clock.now + 600}, SECRET, algorithm="HS256")

    with pytest.raises(InvalidTokenError):
        tokens.decode(token)


def test_missing_exp_is_invalid(tokens, clock):
    token = jwt.encode({"user_id": "abc", "iat": clock.now}, SECRET, algorithm="HS256")

    with pytest.raises(InvalidTokenError):
        tokens.decode(token)


def test_secret_is_required():
    with pytest.raises(ValueError):
        TokenService("")


def test_password_hash_round_trip():
    hashed = get_password_hash("12345678")

    assert hashed != "12345678"
    assert verify_password("12345678", hashed)
    assert not verify_password("87654321", hashed)
