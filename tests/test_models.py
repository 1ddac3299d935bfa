"""Tests for data models."""

from datetime import datetime, timedelta, timezone

from unified_oauth import ProviderName, TokenResponse, UserProfile


def test_token_response_expires_at_derived():
    """Test that expires_at is now + expires_in, computed at build time."""
    before = datetime.now(timezone.utc)
    tokens = TokenResponse.from_provider(
        {"access_token": "abc", "token_type": "bearer", "expires_in": 3600}
    )
    after = datetime.now(timezone.utc)

    assert tokens.expires_in == 3600
    assert before + timedelta(seconds=3600) <= tokens.expires_at <= after + timedelta(seconds=3600)


def test_token_response_without_expiry():
    """Test that expires_at stays None when the provider sends no lifetime."""
    tokens = TokenResponse.from_provider({"access_token": "abc", "token_type": "bearer"})

    assert tokens.expires_in is None
    assert tokens.expires_at is None
    assert tokens.is_expired() is False


def test_token_response_zero_expires_in():
    """Test that a zero lifetime expires immediately instead of never."""
    before = datetime.now(timezone.utc)
    tokens = TokenResponse.from_provider({"access_token": "abc", "expires_in": 0})
    after = datetime.now(timezone.utc)

    assert tokens.expires_in == 0
    assert before <= tokens.expires_at <= after
    assert tokens.is_expired() is True


def test_token_response_string_expires_in():
    """Test that a numeric string lifetime is accepted."""
    tokens = TokenResponse.from_provider({"access_token": "abc", "expires_in": "60"})
    assert tokens.expires_in == 60
    assert tokens.expires_at is not None


def test_token_response_carries_refresh_token_forward():
    """Test that the fallback refresh token is used when none is issued."""
    tokens = TokenResponse.from_provider({"access_token": "abc"}, refresh_token="old-refresh")
    assert tokens.refresh_token == "old-refresh"

    tokens = TokenResponse.from_provider(
        {"access_token": "abc", "refresh_token": "new-refresh"}, refresh_token="old-refresh"
    )
    assert tokens.refresh_token == "new-refresh"


def test_token_response_token_type_default_and_override():
    """Test token type defaults to Bearer and can be forced."""
    assert TokenResponse.from_provider({"access_token": "abc"}).token_type == "Bearer"
    tokens = TokenResponse.from_provider(
        {"access_token": "abc", "token_type": "bearer"}, token_type="Bearer"
    )
    assert tokens.token_type == "Bearer"


def test_token_response_is_expired():
    """Test expiry checks with and without leeway."""
    tokens = TokenResponse(
        access_token="abc",
        expires_at=datetime.now(timezone.utc) + timedelta(seconds=30),
    )
    assert tokens.is_expired() is False
    assert tokens.is_expired(leeway=60) is True


def test_user_profile_missing_fields_are_none():
    """Test that fields a provider cannot supply are present as None."""
    profile = UserProfile(id="1", provider=ProviderName.instagram)
    dumped = profile.model_dump()

    for field in ("email", "name", "first_name", "last_name", "avatar_url", "username"):
        assert field in dumped
        assert dumped[field] is None
    assert dumped["provider"] == ProviderName.instagram
