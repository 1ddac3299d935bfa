"""
unified-oauth - One interface for OAuth 2.0 login across identity providers

Supported providers: Google, GitHub, Facebook, LinkedIn, Twitter, Instagram
and Reddit. Each adapter hides its provider's endpoints, parameter defaults
and response shapes behind the same operations and returns a standardized
``UserProfile``.

Example:
    ```python
    from unified_oauth import UnifiedOAuth

    oauth = UnifiedOAuth({
        "github": {
            "client_id": "your-github-client-id",
            "client_secret": "your-github-client-secret",
            "redirect_uri": "http://localhost:3000/auth/github/callback",
            "scopes": ["read:user", "user:email"],
        },
    })

    github = oauth.get_provider("github")
    url = github.get_auth_url(state)  # state is generated and checked by the caller

    # On callback
    tokens = await github.get_token(code, state)
    profile = await github.get_user_profile(tokens.access_token)
    ```
"""

from .config import ProviderConfig, UnifiedOAuthConfig
from .exceptions import (
    AuthorizationError,
    ConfigurationError,
    OAuthError,
    ProviderApiError,
    StateMismatchError,
    TokenError,
    UnsupportedOperationError,
    UserProfileError,
)
from .models import (
    AuthParams,
    Capability,
    ProfileResult,
    ProviderName,
    TokenResponse,
    UserProfile,
)
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
from .registry import PROVIDER_CLASSES, UnifiedOAuth
from .version import __version__

__all__ = [
    # Registry
    "UnifiedOAuth",
    "PROVIDER_CLASSES",
    # Configuration
    "ProviderConfig",
    "UnifiedOAuthConfig",
    # Providers
    "OAuthProvider",
    "FacebookOAuthProvider",
    "GitHubOAuthProvider",
    "GoogleOAuthProvider",
    "InstagramOAuthProvider",
    "LinkedInOAuthProvider",
    "RedditOAuthProvider",
    "TwitterOAuthProvider",
    # Exceptions
    "OAuthError",
    "AuthorizationError",
    "ConfigurationError",
    "ProviderApiError",
    "StateMismatchError",
    "TokenError",
    "UnsupportedOperationError",
    "UserProfileError",
    # Models
    "AuthParams",
    "Capability",
    "ProfileResult",
    "ProviderName",
    "TokenResponse",
    "UserProfile",
    # Version
    "__version__",
]
