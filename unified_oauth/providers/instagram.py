"""Instagram OAuth Provider"""

from ..exceptions import TokenError, UserProfileError
from ..models import ProfileResult, ProviderName, TokenResponse, UserProfile
from .base import OAuthProvider


class InstagramOAuthProvider(OAuthProvider):
    """
    Instagram Basic Display provider implementation.

    The API exposes neither email nor profile picture, so both are always None.
    """

    name = ProviderName.instagram

    AUTHORIZATION_URL = "https://api.instagram.com/oauth/authorize"
    TOKEN_URL = "https://api.instagram.com/oauth/access_token"
    USER_INFO_URL = "https://graph.instagram.com/me"

    USER_FIELDS = "id,username,account_type,media_count"

    SCOPE_SEPARATOR = ","
    FIXED_AUTH_PARAMS = {"response_type": "code"}

    async def get_token(self, code: str, state: str | None = None) -> TokenResponse:
        data = await self._request(
            "post",
            self.TOKEN_URL,
            error_cls=TokenError,
            action="exchange code for token",
            data={
                "client_id": self.config.client_id,
                "client_secret": self.config.client_secret,
                "grant_type": "authorization_code",
                "redirect_uri": self.config.redirect_uri,
                "code": code,
            },
        )
        return self._token_response(data, "exchange code for token", token_type="Bearer")

    async def _fetch_profile(self, access_token: str) -> ProfileResult:
        user_data = await self._request(
            "get",
            self.USER_INFO_URL,
            error_cls=UserProfileError,
            action="fetch user profile",
            headers=self._bearer(access_token),
            params={"fields": self.USER_FIELDS},
        )

        username = user_data.get("username") or None
        profile = UserProfile(
            id=str(user_data["id"]),
            email=None,
            name=username,
            first_name=None,
            last_name=None,
            avatar_url=None,
            username=username,
            provider=self.name,
            verified=False,
            raw=user_data,
        )
        return ProfileResult(profile=profile)
