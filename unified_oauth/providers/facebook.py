"""Facebook OAuth Provider"""

import re

import structlog

from ..exceptions import TokenError, UserProfileError
from ..models import Capability, ProfileResult, ProviderName, TokenResponse, UserProfile
from .base import OAuthProvider

logger = structlog.get_logger()

_WHITESPACE = re.compile(r"\s+")


class FacebookOAuthProvider(OAuthProvider):
    """
    Facebook Login (Graph API v18.0) provider implementation.

    Facebook has no username concept for apps; ``username`` is derived from
    the display name (lowercased, whitespace removed) and is not a real handle.

    References:
    - https://developers.facebook.com/docs/facebook-login/guides/advanced/manual-flow
    """

    name = ProviderName.facebook

    GRAPH_VERSION = "v18.0"
    AUTHORIZATION_URL = f"https://www.facebook.com/{GRAPH_VERSION}/dialog/oauth"
    TOKEN_URL = f"https://graph.facebook.com/{GRAPH_VERSION}/oauth/access_token"
    USER_INFO_URL = f"https://graph.facebook.com/{GRAPH_VERSION}/me"
    REVOKE_URL = f"https://graph.facebook.com/{GRAPH_VERSION}/me/permissions"

    USER_FIELDS = "id,name,email,first_name,last_name,picture.width(200).height(200),verified"

    SCOPE_SEPARATOR = ","
    FIXED_AUTH_PARAMS = {"response_type": "code"}

    CAPABILITIES = frozenset({Capability.revoke})

    async def get_token(self, code: str, state: str | None = None) -> TokenResponse:
        # Token exchange is a GET with query parameters
        data = await self._request(
            "get",
            self.TOKEN_URL,
            error_cls=TokenError,
            action="exchange code for token",
            params={
                "client_id": self.config.client_id,
                "client_secret": self.config.client_secret,
                "code": code,
                "redirect_uri": self.config.redirect_uri,
            },
        )
        return self._token_response(data, "exchange code for token", token_type="Bearer")

    async def revoke_token(self, access_token: str) -> None:
        await self._request(
            "delete",
            self.REVOKE_URL,
            error_cls=TokenError,
            action="revoke token",
            params={"access_token": access_token},
        )
        logger.info("Token revoked", provider=self.provider_name)

    async def _fetch_profile(self, access_token: str) -> ProfileResult:
        user_data = await self._request(
            "get",
            self.USER_INFO_URL,
            error_cls=UserProfileError,
            action="fetch user profile",
            params={"fields": self.USER_FIELDS, "access_token": access_token},
        )

        name = user_data.get("name") or None
        picture = (user_data.get("picture") or {}).get("data") or {}

        profile = UserProfile(
            id=str(user_data["id"]),
            email=user_data.get("email") or None,
            name=name,
            first_name=user_data.get("first_name") or None,
            last_name=user_data.get("last_name") or None,
            avatar_url=picture.get("url") or None,
            username=_WHITESPACE.sub("", name.lower()) if name else None,
            provider=self.name,
            verified=bool(user_data.get("verified", False)),
            raw=user_data,
        )
        return ProfileResult(profile=profile)
