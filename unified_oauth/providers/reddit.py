"""Reddit OAuth Provider"""

from ..exceptions import TokenError, UserProfileError
from ..models import Capability, ProfileResult, ProviderName, TokenResponse, UserProfile
from ..version import __version__
from .base import OAuthProvider


class RedditOAuthProvider(OAuthProvider):
    """
    Reddit OAuth 2.0 provider implementation.

    Reddit rejects requests without a descriptive User-Agent, so one is sent
    on every call. Client credentials go in a Basic auth header.

    References:
    - https://github.com/reddit-archive/reddit/wiki/OAuth2
    """

    name = ProviderName.reddit

    AUTHORIZATION_URL = "https://www.reddit.com/api/v1/authorize"
    TOKEN_URL = "https://www.reddit.com/api/v1/access_token"
    USER_INFO_URL = "https://oauth.reddit.com/api/v1/me"

    USER_AGENT = f"UnifiedOAuth/{__version__}"

    FIXED_AUTH_PARAMS = {"response_type": "code", "duration": "permanent"}

    CAPABILITIES = frozenset({Capability.refresh})

    async def get_token(self, code: str, state: str | None = None) -> TokenResponse:
        data = await self._request(
            "post",
            self.TOKEN_URL,
            error_cls=TokenError,
            action="exchange code for token",
            data={
                "grant_type": "authorization_code",
                "code": code,
                "redirect_uri": self.config.redirect_uri,
            },
            auth=self._client_auth,
            headers={"User-Agent": self.USER_AGENT},
        )
        return self._token_response(data, "exchange code for token")

    async def refresh_token(self, refresh_token: str) -> TokenResponse:
        data = await self._request(
            "post",
            self.TOKEN_URL,
            error_cls=TokenError,
            action="refresh token",
            data={"grant_type": "refresh_token", "refresh_token": refresh_token},
            auth=self._client_auth,
            headers={"User-Agent": self.USER_AGENT},
        )
        return self._token_response(data, "refresh token", refresh_token=refresh_token)

    async def _fetch_profile(self, access_token: str) -> ProfileResult:
        user_data = await self._request(
            "get",
            self.USER_INFO_URL,
            error_cls=UserProfileError,
            action="fetch user profile",
            headers={**self._bearer(access_token), "User-Agent": self.USER_AGENT},
        )

        profile = UserProfile(
            id=str(user_data["id"]),
            email=user_data.get("email") or None,
            name=user_data.get("name") or None,
            first_name=None,
            last_name=None,
            avatar_url=user_data.get("icon_img") or None,
            username=user_data.get("name") or None,
            provider=self.name,
            verified=bool(user_data.get("verified", False)),
            raw=user_data,
        )
        return ProfileResult(profile=profile)
