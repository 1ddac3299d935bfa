"""Tests for the UnifiedOAuth registry."""

from urllib.parse import parse_qs

import httpx
import pytest

from unified_oauth import (
    ConfigurationError,
    GitHubOAuthProvider,
    GoogleOAuthProvider,
    ProviderConfig,
    ProviderName,
    UnifiedOAuth,
    UnifiedOAuthConfig,
)


@pytest.fixture
def config():
    """Create a test configuration with Google and GitHub."""
    return {
        "github": {
            "client_id": "github-id",
            "client_secret": "github-secret",
            "redirect_uri": "http://localhost:3000/auth/github/callback",
            "scopes": ["read:user", "user:email"],
        },
        "google": {
            "clientId": "google-id",
            "clientSecret": "google-secret",
            "redirectUri": "http://localhost:3000/auth/google/callback",
            "scopes": ["openid", "profile", "email"],
        },
    }


def test_configured_providers_match_config(config):
    """Test that exactly the configured providers are registered."""
    oauth = UnifiedOAuth(config)

    assert oauth.get_configured_providers() == [ProviderName.google, ProviderName.github]
    assert len(oauth) == 2
    for name in ProviderName:
        assert oauth.is_provider_configured(name) is (name.value in config)


def test_empty_config():
    """Test that an empty configuration registers nothing."""
    oauth = UnifiedOAuth(UnifiedOAuthConfig())

    assert oauth.get_configured_providers() == []
    assert oauth.is_provider_configured("google") is False


def test_get_provider_returns_bound_adapter(config):
    """Test that lookups return adapters bound to their own config."""
    oauth = UnifiedOAuth(config)

    google = oauth.get_provider(ProviderName.google)
    github = oauth.get_provider("github")

    assert isinstance(google, GoogleOAuthProvider)
    assert google.config.client_id == "google-id"
    assert google.config.client_secret == "google-secret"
    assert google.config.scopes == ("openid", "profile", "email")
    assert isinstance(github, GitHubOAuthProvider)
    assert github.config.redirect_uri == "http://localhost:3000/auth/github/callback"


def test_get_provider_is_case_insensitive(config):
    """Test that provider names are matched case-insensitively."""
    oauth = UnifiedOAuth(config)
    assert oauth.get_provider("GitHub") is oauth.get_provider(ProviderName.github)


def test_get_provider_not_configured(config):
    """Test that an unconfigured provider raises ConfigurationError."""
    oauth = UnifiedOAuth(config)

    with pytest.raises(ConfigurationError) as exc_info:
        oauth.get_provider("facebook")

    assert exc_info.value.provider == "facebook"
    assert "not configured" in exc_info.value.message


def test_get_provider_unknown_name(config):
    """Test that an unknown provider raises ConfigurationError."""
    oauth = UnifiedOAuth(config)

    with pytest.raises(ConfigurationError) as exc_info:
        oauth.get_provider("myspace")

    assert exc_info.value.provider == "myspace"


def test_is_provider_configured_never_raises(config):
    """Test membership checks on unknown names."""
    oauth = UnifiedOAuth(config)

    assert oauth.is_provider_configured("myspace") is False
    assert "google" in oauth
    assert "reddit" not in oauth
    assert 42 not in oauth


def test_iteration_order(config):
    """Test that iteration yields adapters in registration order."""
    oauth = UnifiedOAuth(config)
    assert [provider.name for provider in oauth] == [ProviderName.google, ProviderName.github]


def test_accepts_config_object():
    """Test construction from a UnifiedOAuthConfig."""
    provider_config = ProviderConfig("id", "secret", "http://localhost/cb", ["identity"])
    oauth = UnifiedOAuth(UnifiedOAuthConfig(reddit=provider_config))

    assert oauth.get_configured_providers() == [ProviderName.reddit]
    assert oauth.get_provider("reddit").config is provider_config


@pytest.mark.asyncio
async def test_full_flow_with_shared_client(config):
    """Test the three-step flow through a shared, caller-owned client."""
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.path == "/login/oauth/access_token":
            return httpx.Response(
                200, json={"access_token": "gho_abc", "token_type": "bearer", "scope": "read:user"}
            )
        if request.url.path == "/user":
            return httpx.Response(
                200, json={"id": 1, "login": "octocat", "name": None, "email": "octo@x.com"}
            )
        return httpx.Response(404)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        oauth = UnifiedOAuth(config, http_client=client)
        github = oauth.get_provider("github")

        url = github.get_auth_url("state-123")
        tokens = await github.get_token("code-123", "state-123")
        profile = await github.get_user_profile(tokens.access_token)

        assert not client.is_closed

    assert "state=state-123" in url
    assert tokens.access_token == "gho_abc"
    assert profile.id == "1"
    assert profile.email == "octo@x.com"
    assert profile.name is None

    token_request, profile_request = requests
    assert parse_qs(token_request.content.decode())["code"] == ["code-123"]
    assert profile_request.headers["Authorization"] == "token gho_abc"
