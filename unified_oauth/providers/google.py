"""Google OAuth Provider"""

import structlog

from ..exceptions import TokenError, UserProfileError
from ..models import Capability, ProfileResult, ProviderName, TokenResponse, UserProfile
from .base import OAuthProvider

logger = structlog.get_logger()


class GoogleOAuthProvider(OAuthProvider):
    """
    Google OAuth 2.0 provider implementation.

    Requests offline access with a forced consent screen by default so that a
    refresh token is issued; both can be overridden through ``AuthParams``.

    References:
    - https://developers.google.com/identity/protocols/oauth2
    - https://developers.google.com/identity/protocols/oauth2/web-server
    """

    name = ProviderName.google

    AUTHORIZATION_URL = "https://accounts.google.com/o/oauth2/v2/auth"
    TOKEN_URL = "https://oauth2.googleapis.com/token"
    USER_INFO_URL = "https://www.googleapis.com/oauth2/v2/userinfo"
    REVOKE_URL = "https://oauth2.googleapis.com/revoke"

    FIXED_AUTH_PARAMS = {"response_type": "code"}
    DEFAULT_AUTH_PARAMS = {
        "access_type": "offline",  # Request refresh token
        "prompt": "consent",  # Force consent screen to get refresh token
        "include_granted_scopes": "true",
    }
    CONSUMED_AUTH_PARAMS = (
        "access_type",
        "prompt",
        "include_granted_scopes",
        "login_hint",
        "hd",
    )

    CAPABILITIES = frozenset({Capability.refresh, Capability.revoke})

    async def get_token(self, code: str, state: str | None = None) -> TokenResponse:
        """
        Exchange authorization code for Google access tokens.

        Args:
            code: Authorization code from OAuth callback
            state: Unused; accepted for interface compatibility

        Returns:
            OAuth tokens including the refresh token when offline access was granted
        """
        data = await self._request(
            "post",
            self.TOKEN_URL,
            error_cls=TokenError,
            action="exchange code for token",
            data={
                "client_id": self.config.client_id,
                "client_secret": self.config.client_secret,
                "code": code,
                "grant_type": "authorization_code",
                "redirect_uri": self.config.redirect_uri,
            },
        )
        return self._token_response(data, "exchange code for token")

    async def refresh_token(self, refresh_token: str) -> TokenResponse:
        """
        Refresh Google access token using refresh token.

        Google does not return a new refresh token, so the one passed in is
        carried forward.
        """
        data = await self._request(
            "post",
            self.TOKEN_URL,
            error_cls=TokenError,
            action="refresh token",
            data={
                "client_id": self.config.client_id,
                "client_secret": self.config.client_secret,
                "refresh_token": refresh_token,
                "grant_type": "refresh_token",
            },
        )
        return self._token_response(data, "refresh token", refresh_token=refresh_token)

    async def revoke_token(self, access_token: str) -> None:
        await self._request(
            "post",
            self.REVOKE_URL,
            error_cls=TokenError,
            action="revoke token",
            params={"token": access_token},
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        logger.info("Token revoked", provider=self.provider_name)

    async def _fetch_profile(self, access_token: str) -> ProfileResult:
        user_data = await self._request(
            "get",
            self.USER_INFO_URL,
            error_cls=UserProfileError,
            action="fetch user profile",
            headers=self._bearer(access_token),
        )

        email = user_data.get("email")
        profile = UserProfile(
            id=str(user_data["id"]),
            email=email,
            name=user_data.get("name"),
            first_name=user_data.get("given_name"),
            last_name=user_data.get("family_name"),
            avatar_url=user_data.get("picture"),
            username=email.split("@")[0] if email else None,
            provider=self.name,
            verified=user_data.get("verified_email"),
            locale=user_data.get("locale"),
            raw=user_data,
        )
        return ProfileResult(profile=profile)
