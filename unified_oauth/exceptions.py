"""Exceptions for unified-oauth."""

from typing import Any


class OAuthError(Exception):
    """Base exception for all unified-oauth errors."""

    def __init__(self, message: str, provider: str, cause: Any = None) -> None:
        """
        Initialize OAuthError.

        Args:
            message: Error message
            provider: Name of the provider the error belongs to
            cause: Original failure (httpx exception, response body, ...)
        """
        self.message = message
        self.provider = provider
        self.cause = cause
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.provider}] {self.message}"


class TokenError(OAuthError):
    """Raised when exchanging, refreshing or revoking a token fails."""


class UserProfileError(OAuthError):
    """Raised when fetching the user's profile fails."""


class ProviderApiError(OAuthError):
    """Raised when the provider's response body itself reports an error."""

    def __init__(
        self,
        message: str,
        provider: str,
        status: int,
        response_data: Any = None,
        cause: Any = None,
    ) -> None:
        """
        Initialize ProviderApiError.

        Args:
            message: Error message reported by the provider
            provider: Name of the provider
            status: HTTP status or provider-assigned error code
            response_data: Raw response payload
            cause: Original failure, if any
        """
        self.status = status
        self.response_data = response_data
        super().__init__(message, provider, cause)


class AuthorizationError(OAuthError):
    """Raised when the authorization code or PKCE verifier is invalid or missing."""


class StateMismatchError(OAuthError):
    """Raised by callers when the returned state does not match the stored one."""


class ConfigurationError(OAuthError):
    """Raised when a provider is requested but not configured."""


class UnsupportedOperationError(OAuthError):
    """Raised when a provider does not offer an optional capability."""
