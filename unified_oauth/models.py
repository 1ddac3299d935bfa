"""Data models for unified-oauth."""

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================


class ProviderName(str, Enum):
    """Supported OAuth providers."""

    google = "google"
    facebook = "facebook"
    linkedin = "linkedin"
    twitter = "twitter"
    instagram = "instagram"
    reddit = "reddit"
    github = "github"


class Capability(str, Enum):
    """Optional operations a provider may support."""

    refresh = "refresh"
    revoke = "revoke"


# =============================================================================
# Request Models
# =============================================================================


class AuthParams(BaseModel):
    """Optional hints for the authorization URL.

    Providers only read the fields they understand; the rest are ignored.
    """

    state: str | None = Field(None, description="Opaque CSRF value")
    prompt: str | None = Field(None, description="Consent prompt behaviour")
    access_type: str | None = Field(None, description="online or offline access")
    include_granted_scopes: bool | None = Field(
        None, description="Enable incremental authorization"
    )
    login_hint: str | None = Field(None, description="Email or sub to pre-fill")
    hd: str | None = Field(None, description="Hosted domain restriction")
    code_verifier: str | None = Field(None, description="PKCE code verifier")


# =============================================================================
# Response Models
# =============================================================================


class TokenResponse(BaseModel):
    """Access token issued by a provider."""

    access_token: str = Field(..., description="Access token")
    refresh_token: str | None = Field(None, description="Refresh token, if issued")
    scope: str | None = Field(None, description="Granted scopes as reported by provider")
    token_type: str = Field(default="Bearer", description="Token type")
    expires_in: int | None = Field(None, description="Lifetime in seconds")
    expires_at: datetime | None = Field(None, description="Absolute expiry (UTC)")

    @classmethod
    def from_provider(
        cls,
        data: dict[str, Any],
        *,
        token_type: str | None = None,
        refresh_token: str | None = None,
    ) -> "TokenResponse":
        """
        Build a token response from a provider payload.

        ``expires_at`` is computed here, once, from the current time.

        Args:
            data: Parsed token endpoint body
            token_type: Overrides the token type reported by the provider
            refresh_token: Used when the payload carries no refresh token
        """
        expires_in = data.get("expires_in")
        expires_at = None
        if expires_in is not None:
            expires_in = int(expires_in)
            expires_at = datetime.now(timezone.utc) + timedelta(seconds=expires_in)

        return cls(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token") or refresh_token,
            scope=data.get("scope"),
            token_type=token_type or data.get("token_type") or "Bearer",
            expires_in=expires_in,
            expires_at=expires_at,
        )

    def is_expired(self, leeway: int = 0) -> bool:
        """Return True if the token is past ``expires_at`` (minus ``leeway`` seconds)."""
        if self.expires_at is None:
            return False
        return datetime.now(timezone.utc) >= self.expires_at - timedelta(seconds=leeway)


class UserProfile(BaseModel):
    """User profile normalized across providers."""

    id: str = Field(..., description="Provider-native user ID")
    email: str | None = Field(None, description="Primary email")
    name: str | None = Field(None, description="Display name")
    first_name: str | None = Field(None, description="Given name")
    last_name: str | None = Field(None, description="Family name")
    avatar_url: str | None = Field(None, description="Profile picture URL")
    username: str | None = Field(None, description="Handle or derived username")
    provider: ProviderName = Field(..., description="Provider that issued the profile")
    verified: bool | None = Field(None, description="Whether the account/email is verified")
    locale: str | None = Field(None, description="User locale")
    raw: Any = Field(default=None, description="Unmodified provider payload")


class ProfileResult(BaseModel):
    """A profile plus warnings from best-effort lookups that failed."""

    profile: UserProfile
    warnings: list[str] = Field(default_factory=list)
