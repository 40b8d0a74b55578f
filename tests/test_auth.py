from datetime import datetime, timedelta, timezone

from azure_tts import TOKEN_TTL, Region, Token, TokenStore


def _token(value, region=Region.WEST_EUROPE, issued_at=None):
    return Token(value=value, issued_at=issued_at or datetime.now(timezone.utc), region=region)


def test_token_expiry_is_ten_minutes_after_issue():
    issued_at = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
    token = _token("abc", issued_at=issued_at)

    assert TOKEN_TTL == timedelta(minutes=10)
    assert token.expires_at == issued_at + timedelta(minutes=10)
    assert not token.is_expired(now=issued_at + timedelta(minutes=9))
    assert token.is_expired(now=issued_at + timedelta(minutes=10))
    assert token.authorization_header == "Bearer abc"


def test_token_repr_hides_value():
    assert "secret-value" not in repr(_token("secret-value"))


def test_token_store_keeps_only_latest_token():
    store = TokenStore()
    first = _token("first")
    second = _token("second", region=Region.EAST_US)

    assert store.get() is None
    store.set(first)
    store.set(second)

    assert store.get() is second
    assert store.get_for("eastus") is second
    assert store.get_for(Region.WEST_EUROPE) is None


def test_token_store_clear():
    store = TokenStore(_token("abc"))

    store.clear()

    assert store.get() is None
