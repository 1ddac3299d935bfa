"""OAuth Provider Registry"""

from typing import Any, Iterator, Mapping

import httpx
import structlog

from .config import UnifiedOAuthConfig
from .exceptions import ConfigurationError
from .models import ProviderName
from .providers import (
    FacebookOAuthProvider,
    GitHubOAuthProvider,
    GoogleOAuthProvider,
    InstagramOAuthProvider,
    LinkedInOAuthProvider,
    OAuthProvider,
    RedditOAuthProvider,
    TwitterOAuthProvider,
)

logger = structlog.get_logger()

PROVIDER_CLASSES: dict[ProviderName, type[OAuthProvider]] = {
    ProviderName.google: GoogleOAuthProvider,
    ProviderName.facebook: FacebookOAuthProvider,
    ProviderName.linkedin: LinkedInOAuthProvider,
    ProviderName.twitter: TwitterOAuthProvider,
    ProviderName.instagram: InstagramOAuthProvider,
    ProviderName.reddit: RedditOAuthProvider,
    ProviderName.github: GitHubOAuthProvider,
}


class UnifiedOAuth:
    """
    Registry of configured OAuth providers.

    One adapter is created per provider present in the configuration; absent
    providers are skipped. The registry is built once and never modified.

    Usage:
        oauth = UnifiedOAuth({"github": {...}, "google": {...}})

        github = oauth.get_provider("github")
        url = github.get_auth_url(state)
        # ... redirect, then on callback:
        tokens = await github.get_token(code, state)
        profile = await github.get_user_profile(tokens.access_token)
    """

    def __init__(
        self,
        config: UnifiedOAuthConfig | Mapping[str, Any],
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the registry.

        Args:
            config: UnifiedOAuthConfig or a mapping accepted by
                ``UnifiedOAuthConfig.from_dict``
            http_client: Optional client shared by every adapter
        """
        if not isinstance(config, UnifiedOAuthConfig):
            config = UnifiedOAuthConfig.from_dict(config)

        self._providers: dict[ProviderName, OAuthProvider] = {}
        for name, provider_config in config.configured():
            provider_class = PROVIDER_CLASSES[name]
            self._providers[name] = provider_class(provider_config, http_client=http_client)

        logger.info(
            "UnifiedOAuth initialized",
            providers=[name.value for name in self._providers],
        )

    def get_provider(self, name: ProviderName | str) -> OAuthProvider:
        """
        Get the adapter for a provider.

        Args:
            name: Provider name (e.g. "github", "google")

        Raises:
            ConfigurationError: If the provider is unknown or not configured
        """
        key = _coerce(name)
        if key is None or key not in self._providers:
            available = ", ".join(p.value for p in self._providers) or "none"
            provider = key.value if key is not None else str(name)
            raise ConfigurationError(
                f'Provider "{provider}" is not configured or supported. '
                f"Configured providers: {available}",
                provider,
            )
        return self._providers[key]

    def get_configured_providers(self) -> list[ProviderName]:
        """List configured providers in registration order."""
        return list(self._providers.keys())

    def is_provider_configured(self, name: ProviderName | str) -> bool:
        """Check if a provider is configured. Never raises."""
        key = _coerce(name)
        return key is not None and key in self._providers

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        return self.is_provider_configured(name)

    def __iter__(self) -> Iterator[OAuthProvider]:
        return iter(self._providers.values())

    def __len__(self) -> int:
        return len(self._providers)


def _coerce(name: ProviderName | str) -> ProviderName | None:
    if isinstance(name, ProviderName):
        return name
    try:
        return ProviderName(str(name).lower())
    except ValueError:
        return None
