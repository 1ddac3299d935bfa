"""Configuration for unified-oauth."""

from dataclasses import dataclass, field, fields
from typing import Any, Iterator, Mapping

from .models import ProviderName

# Registry construction order
PROVIDER_ORDER: tuple[ProviderName, ...] = (
    ProviderName.google,
    ProviderName.facebook,
    ProviderName.linkedin,
    ProviderName.twitter,
    ProviderName.instagram,
    ProviderName.reddit,
    ProviderName.github,
)

_CAMEL_CASE_KEYS = {
    "clientId": "client_id",
    "clientSecret": "client_secret",
    "redirectUri": "redirect_uri",
}


@dataclass(frozen=True)
class ProviderConfig:
    """
    Credentials and scopes for a single OAuth provider.

    Attributes:
        client_id: OAuth client ID
        client_secret: OAuth client secret
        redirect_uri: Callback URL registered with the provider
        scopes: Scopes to request, in order

    Example:
        ```python
        config = ProviderConfig(
            client_id="your-client-id",
            client_secret="your-client-secret",
            redirect_uri="http://localhost:3000/auth/github/callback",
            scopes=["read:user", "user:email"],
        )
        ```
    """

    client_id: str
    client_secret: str
    redirect_uri: str
    scopes: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.client_id:
            raise ValueError("client_id must not be empty")

        if not self.client_secret:
            raise ValueError("client_secret must not be empty")

        if not self.redirect_uri:
            raise ValueError("redirect_uri must not be empty")

        if isinstance(self.scopes, str):
            raise ValueError("scopes must be a sequence of strings, not a string")

        scopes = tuple(self.scopes)
        if not all(isinstance(scope, str) and scope for scope in scopes):
            raise ValueError("scopes must be non-empty strings")

        # Frozen dataclass: store the normalized tuple
        object.__setattr__(self, "scopes", scopes)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ProviderConfig":
        """Create a config from a mapping, accepting camelCase keys as well."""
        values = {_CAMEL_CASE_KEYS.get(key, key): value for key, value in data.items()}
        unknown = set(values) - {f.name for f in fields(cls)}
        if unknown:
            raise ValueError(f"Unknown provider config keys: {', '.join(sorted(unknown))}")
        return cls(**values)


@dataclass(frozen=True)
class UnifiedOAuthConfig:
    """
    Configuration for every provider the application wants to use.

    Providers left as None are not registered.

    Example:
        ```python
        config = UnifiedOAuthConfig.from_dict({
            "google": {
                "client_id": "...",
                "client_secret": "...",
                "redirect_uri": "http://localhost:3000/auth/google/callback",
                "scopes": ["openid", "profile", "email"],
            },
        })
        ```
    """

    google: ProviderConfig | None = None
    facebook: ProviderConfig | None = None
    linkedin: ProviderConfig | None = None
    twitter: ProviderConfig | None = None
    instagram: ProviderConfig | None = None
    reddit: ProviderConfig | None = None
    github: ProviderConfig | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UnifiedOAuthConfig":
        """
        Create a config from a mapping keyed by provider name.

        Args:
            data: Provider name -> ProviderConfig or plain dict

        Raises:
            ValueError: If a key is not a supported provider
        """
        values: dict[str, ProviderConfig] = {}
        for key, value in data.items():
            try:
                name = ProviderName(str(getattr(key, "value", key)).lower())
            except ValueError:
                raise ValueError(f"Unsupported provider: {key}") from None

            if value is None:
                continue
            if not isinstance(value, ProviderConfig):
                value = ProviderConfig.from_dict(value)
            values[name.value] = value
        return cls(**values)

    def get(self, name: ProviderName) -> ProviderConfig | None:
        """Return the config for a provider, or None if it is absent."""
        return getattr(self, ProviderName(name).value)

    def configured(self) -> Iterator[tuple[ProviderName, ProviderConfig]]:
        """Yield (name, config) for each present provider, in registry order."""
        for name in PROVIDER_ORDER:
            provider_config = self.get(name)
            if provider_config is not None:
                yield name, provider_config
