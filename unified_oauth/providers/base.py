"""OAuth Provider Interface - common contract for all provider adapters"""

from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, ClassVar
from urllib.parse import urlencode

import httpx
import structlog

from ..config import ProviderConfig
from ..exceptions import (
    OAuthError,
    ProviderApiError,
    TokenError,
    UnsupportedOperationError,
    UserProfileError,
)
from ..models import AuthParams, Capability, ProfileResult, ProviderName, TokenResponse, UserProfile

logger = structlog.get_logger()


class OAuthProvider(ABC):
    """
    Abstract base class for OAuth provider adapters.

    Each adapter translates the common operations into one provider's wire
    format and normalizes the responses into ``TokenResponse`` and
    ``UserProfile``. Adapters are bound to a single immutable
    ``ProviderConfig`` and keep no state between calls, so one instance can
    serve concurrent requests.

    Optional capabilities (token refresh, revocation) are declared in
    ``CAPABILITIES`` and can be checked with ``supports()`` before calling.
    """

    name: ClassVar[ProviderName]

    AUTHORIZATION_URL: ClassVar[str]
    TOKEN_URL: ClassVar[str]
    USER_INFO_URL: ClassVar[str]
    REVOKE_URL: ClassVar[str | None] = None

    SCOPE_SEPARATOR: ClassVar[str] = " "

    # Always sent with the authorization request, cannot be overridden
    FIXED_AUTH_PARAMS: ClassVar[dict[str, str]] = {}
    # Sent unless the caller overrides them through AuthParams
    DEFAULT_AUTH_PARAMS: ClassVar[dict[str, str]] = {}
    # AuthParams fields this provider reads; the rest are ignored
    CONSUMED_AUTH_PARAMS: ClassVar[tuple[str, ...]] = ()

    CAPABILITIES: ClassVar[frozenset[Capability]] = frozenset()

    def __init__(self, config: ProviderConfig, http_client: httpx.AsyncClient | None = None) -> None:
        """
        Initialize OAuth provider.

        Args:
            config: Client credentials, redirect URI and scopes
            http_client: Shared client to send requests with. When omitted a
                short-lived client is opened for every call.
        """
        self._config = config
        self._http_client = http_client

    def __repr__(self) -> str:
        return f"{type(self).__name__}(client_id={self._config.client_id!r})"

    @property
    def config(self) -> ProviderConfig:
        return self._config

    @property
    def provider_name(self) -> str:
        return self.name.value

    # -------------------------------------------------------------------------
    # Capabilities
    # -------------------------------------------------------------------------

    def supports(self, capability: Capability | str) -> bool:
        """Return True if this provider implements the optional capability."""
        return Capability(capability) in self.CAPABILITIES

    @property
    def supports_refresh(self) -> bool:
        return self.supports(Capability.refresh)

    @property
    def supports_revoke(self) -> bool:
        return self.supports(Capability.revoke)

    # -------------------------------------------------------------------------
    # Authorization URL
    # -------------------------------------------------------------------------

    def build_auth_params(self, state: str, params: AuthParams | None = None) -> dict[str, str]:
        """
        Build the query parameters of the authorization URL.

        Merge order: base parameters, provider defaults, then the caller's
        params (only the fields this provider consumes, ``None`` skipped).

        Args:
            state: CSRF protection token
            params: Optional provider-interpreted hints

        Returns:
            Ordered parameter mapping
        """
        query = {
            "client_id": self._config.client_id,
            "redirect_uri": self._config.redirect_uri,
            "scope": self.SCOPE_SEPARATOR.join(self._config.scopes),
            "state": state,
        }
        query.update(self.FIXED_AUTH_PARAMS)
        query.update(self.DEFAULT_AUTH_PARAMS)

        if params is not None:
            for key in self.CONSUMED_AUTH_PARAMS:
                value = getattr(params, key)
                if value is None:
                    continue
                query[key] = _serialize_param(value)

        return query

    def get_auth_url(self, state: str, params: AuthParams | None = None) -> str:
        """
        Generate the authorization URL to redirect the user to.

        Args:
            state: CSRF protection token
            params: Optional provider-interpreted hints

        Returns:
            Full authorization URL with query parameters
        """
        query = self.build_auth_params(state, params)
        logger.debug("Built authorization URL", provider=self.provider_name)
        return f"{self.AUTHORIZATION_URL}?{urlencode(query)}"

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    @abstractmethod
    async def get_token(self, code: str, state: str | None = None) -> TokenResponse:
        """
        Exchange an authorization code for an access token.

        Args:
            code: Authorization code from the OAuth callback
            state: State value from the callback

        Raises:
            ProviderApiError: If the provider reports an error in the body
            TokenError: If the request fails
        """

    async def refresh_token(self, refresh_token: str) -> TokenResponse:
        """
        Refresh an access token.

        Raises:
            UnsupportedOperationError: If the provider cannot refresh tokens
        """
        raise UnsupportedOperationError(
            "Token refresh is not supported", self.provider_name
        )

    async def revoke_token(self, access_token: str) -> None:
        """
        Revoke an access token.

        Raises:
            UnsupportedOperationError: If the provider cannot revoke tokens
        """
        raise UnsupportedOperationError(
            "Token revocation is not supported", self.provider_name
        )

    async def get_user_profile(self, access_token: str) -> UserProfile:
        """
        Fetch the user's profile.

        Args:
            access_token: Valid access token

        Returns:
            Standardized user profile

        Raises:
            ProviderApiError: If the provider reports an error in the body
            UserProfileError: If the request fails or the payload is malformed
        """
        result = await self.fetch_profile(access_token)
        return result.profile

    async def fetch_profile(self, access_token: str) -> ProfileResult:
        """
        Fetch the user's profile together with any best-effort lookup warnings.

        Raises:
            ProviderApiError: If the provider reports an error in the body
            UserProfileError: If the request fails or the payload is malformed
        """
        try:
            return await self._fetch_profile(access_token)
        except OAuthError:
            raise
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.error(
                "Malformed user profile payload",
                provider=self.provider_name,
                error=str(e),
            )
            raise UserProfileError(
                f"Unexpected user profile payload: {e!r}", self.provider_name, e
            ) from e

    @abstractmethod
    async def _fetch_profile(self, access_token: str) -> ProfileResult:
        """Fetch and normalize the provider's profile payload."""

    # -------------------------------------------------------------------------
    # HTTP helpers
    # -------------------------------------------------------------------------

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._http_client is not None:
            yield self._http_client
            return
        async with httpx.AsyncClient() as client:
            yield client

    async def _request(
        self,
        method: str,
        url: str,
        *,
        error_cls: type[OAuthError],
        action: str,
        **kwargs: Any,
    ) -> Any:
        """
        Send a single request and return the parsed JSON body.

        The body is checked for a provider-reported error before the HTTP
        status, since several providers answer errors with 200.

        Args:
            method: HTTP method (get, post, delete)
            url: Endpoint URL
            error_cls: Exception raised for transport and status failures
            action: Short description used in error messages
            **kwargs: Passed to the httpx request method

        Raises:
            ProviderApiError: If the body carries an error field
            error_cls: If the request fails or returns an error status
        """
        try:
            async with self._client() as client:
                send = getattr(client, method.lower())
                response = await send(url, **kwargs)
        except httpx.HTTPError as e:
            logger.error(
                "Provider request failed",
                provider=self.provider_name,
                action=action,
                error=str(e),
            )
            raise error_cls(f"Failed to {action}: {e}", self.provider_name, e) from e

        data = _parse_json(response)

        api_error = self._provider_error(data, response.status_code)
        if api_error is not None:
            logger.error(
                "Provider reported an error",
                provider=self.provider_name,
                action=action,
                status=api_error.status,
                error=api_error.message,
            )
            raise api_error

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Provider returned an error status",
                provider=self.provider_name,
                action=action,
                status_code=response.status_code,
            )
            raise error_cls(
                f"Failed to {action}: {response.status_code}", self.provider_name, e
            ) from e

        return data

    def _provider_error(self, data: Any, status_code: int) -> ProviderApiError | None:
        """Return a ProviderApiError if the parsed body carries an error field."""
        if not isinstance(data, dict) or not data.get("error"):
            return None

        error = data["error"]
        status = status_code if status_code >= 400 else 400
        if isinstance(error, dict):
            message = error.get("message") or error.get("error_description")
            status = error.get("code") or status
        else:
            message = data.get("error_description") or data.get("error_message") or error

        return ProviderApiError(
            str(message or f"{self.provider_name} API error"),
            self.provider_name,
            status,
            data,
        )

    def _token_response(
        self,
        data: Any,
        action: str,
        *,
        token_type: str | None = None,
        refresh_token: str | None = None,
    ) -> TokenResponse:
        """Normalize a token endpoint body, raising TokenError if it is unusable."""
        if not isinstance(data, dict) or not data.get("access_token"):
            raise TokenError(
                f"Failed to {action}: response did not contain an access token",
                self.provider_name,
                data,
            )

        try:
            tokens = TokenResponse.from_provider(
                data, token_type=token_type, refresh_token=refresh_token
            )
        except (KeyError, TypeError, ValueError) as e:
            # pydantic's ValidationError is a ValueError
            logger.error(
                "Malformed token payload",
                provider=self.provider_name,
                action=action,
                error=str(e),
            )
            raise TokenError(
                f"Failed to {action}: unexpected token payload: {e!r}", self.provider_name, e
            ) from e

        logger.info(
            "Token issued",
            provider=self.provider_name,
            action=action,
            token_type=tokens.token_type,
            expires_in=tokens.expires_in,
            has_refresh_token=tokens.refresh_token is not None,
        )
        return tokens

    async def _fetch_optional(
        self, url: str, what: str, **kwargs: Any
    ) -> tuple[Any, str | None]:
        """
        Best-effort GET used for secondary lookups.

        Returns:
            (parsed body or None, warning message or None)
        """
        try:
            data = await self._request(
                "get", url, error_cls=UserProfileError, action=f"fetch {what}", **kwargs
            )
        except OAuthError as e:
            warning = f"Could not fetch {what}: {e.message}"
            logger.warning(
                "Best-effort lookup failed",
                provider=self.provider_name,
                lookup=what,
                error=e.message,
            )
            return None, warning
        return data, None

    @property
    def _client_auth(self) -> tuple[str, str]:
        """Client credentials for httpx Basic auth."""
        return (self._config.client_id, self._config.client_secret)

    @staticmethod
    def _bearer(access_token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {access_token}"}


def _serialize_param(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _parse_json(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None
