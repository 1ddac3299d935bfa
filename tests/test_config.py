"""Tests for ProviderConfig and UnifiedOAuthConfig."""

import dataclasses

import pytest

from unified_oauth import ProviderConfig, ProviderName, UnifiedOAuthConfig


def test_provider_config_scopes_stored_as_tuple():
    """Test that scopes are normalized to an ordered tuple."""
    config = ProviderConfig(
        client_id="id",
        client_secret="secret",
        redirect_uri="http://localhost/callback",
        scopes=["read:user", "user:email"],
    )
    assert config.scopes == ("read:user", "user:email")


def test_provider_config_default_scopes_empty():
    """Test that scopes default to an empty tuple."""
    config = ProviderConfig("id", "secret", "http://localhost/callback")
    assert config.scopes == ()


def test_provider_config_is_immutable():
    """Test that a config cannot be modified after construction."""
    config = ProviderConfig("id", "secret", "http://localhost/callback")
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.client_id = "other"


@pytest.mark.parametrize(
    "field,message",
    [
        ("client_id", "client_id must not be empty"),
        ("client_secret", "client_secret must not be empty"),
        ("redirect_uri", "redirect_uri must not be empty"),
    ],
)
def test_provider_config_required_fields(field, message):
    """Test that empty credentials raise ValueError."""
    values = {
        "client_id": "id",
        "client_secret": "secret",
        "redirect_uri": "http://localhost/callback",
    }
    values[field] = ""
    with pytest.raises(ValueError, match=message):
        ProviderConfig(**values)


def test_provider_config_rejects_string_scopes():
    """Test that a bare string is not accepted as a scope list."""
    with pytest.raises(ValueError, match="scopes must be a sequence of strings"):
        ProviderConfig("id", "secret", "http://localhost/callback", scopes="email profile")


def test_provider_config_from_dict_accepts_camel_case():
    """Test that camelCase keys map onto the config fields."""
    config = ProviderConfig.from_dict(
        {
            "clientId": "id",
            "clientSecret": "secret",
            "redirectUri": "http://localhost/callback",
            "scopes": ["email"],
        }
    )
    assert config.client_id == "id"
    assert config.client_secret == "secret"
    assert config.redirect_uri == "http://localhost/callback"
    assert config.scopes == ("email",)


def test_provider_config_from_dict_unknown_key():
    """Test that unknown keys are rejected."""
    with pytest.raises(ValueError, match="Unknown provider config keys: tenant"):
        ProviderConfig.from_dict(
            {
                "client_id": "id",
                "client_secret": "secret",
                "redirect_uri": "http://localhost/callback",
                "tenant": "common",
            }
        )


def test_unified_config_from_dict(provider_config):
    """Test building the top-level config from a mapping."""
    config = UnifiedOAuthConfig.from_dict(
        {
            "github": provider_config,
            "google": {
                "client_id": "google-id",
                "client_secret": "google-secret",
                "redirect_uri": "http://localhost/google",
                "scopes": ["openid"],
            },
            "reddit": None,
        }
    )
    assert config.github is provider_config
    assert config.google.client_id == "google-id"
    assert config.reddit is None


def test_unified_config_from_dict_unknown_provider():
    """Test that unsupported providers are rejected."""
    with pytest.raises(ValueError, match="Unsupported provider: myspace"):
        UnifiedOAuthConfig.from_dict({"myspace": {}})


def test_unified_config_configured_order(provider_config):
    """Test that configured providers are yielded in registry order."""
    config = UnifiedOAuthConfig(
        github=provider_config,
        reddit=provider_config,
        google=provider_config,
    )
    names = [name for name, _ in config.configured()]
    assert names == [ProviderName.google, ProviderName.reddit, ProviderName.github]
