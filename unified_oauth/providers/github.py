"""GitHub OAuth Provider"""

from ..exceptions import TokenError, UserProfileError
from ..models import ProfileResult, ProviderName, TokenResponse, UserProfile
from .base import OAuthProvider


class GitHubOAuthProvider(OAuthProvider):
    """
    GitHub OAuth App provider implementation.

    GitHub returns a null email when the user keeps it private; in that case
    the primary address is looked up from the emails endpoint (needs the
    ``user:email`` scope). That lookup is best-effort.

    References:
    - https://docs.github.com/en/apps/oauth-apps/building-oauth-apps/authorizing-oauth-apps
    """

    name = ProviderName.github

    AUTHORIZATION_URL = "https://github.com/login/oauth/authorize"
    TOKEN_URL = "https://github.com/login/oauth/access_token"
    USER_INFO_URL = "https://api.github.com/user"
    USER_EMAILS_URL = "https://api.github.com/user/emails"

    async def get_token(self, code: str, state: str | None = None) -> TokenResponse:
        # GitHub answers errors with 200 and an "error" field
        data = await self._request(
            "post",
            self.TOKEN_URL,
            error_cls=TokenError,
            action="exchange code for token",
            data={
                "client_id": self.config.client_id,
                "client_secret": self.config.client_secret,
                "code": code,
                "redirect_uri": self.config.redirect_uri,
            },
            headers={"Accept": "application/json"},
        )
        return self._token_response(data, "exchange code for token")

    async def _fetch_profile(self, access_token: str) -> ProfileResult:
        headers = self._auth_headers(access_token)
        user_data = await self._request(
            "get",
            self.USER_INFO_URL,
            error_cls=UserProfileError,
            action="fetch user profile",
            headers=headers,
        )

        warnings: list[str] = []
        email = user_data.get("email")
        if not email:
            email, warning = await self._primary_email(headers)
            if warning:
                warnings.append(warning)

        profile = UserProfile(
            id=str(user_data["id"]),
            email=email,
            name=user_data.get("name"),
            avatar_url=user_data.get("avatar_url"),
            username=user_data.get("login"),
            provider=self.name,
            raw=user_data,
        )
        return ProfileResult(profile=profile, warnings=warnings)

    async def _primary_email(self, headers: dict[str, str]) -> tuple[str | None, str | None]:
        """Find the account's primary email. Never raises."""
        emails, warning = await self._fetch_optional(
            self.USER_EMAILS_URL, "user emails", headers=headers
        )
        if not isinstance(emails, list):
            return None, warning

        for entry in emails:
            if isinstance(entry, dict) and entry.get("primary") is True:
                return entry.get("email"), None
        return None, None

    @staticmethod
    def _auth_headers(access_token: str) -> dict[str, str]:
        return {
            "Authorization": f"token {access_token}",
            "Accept": "application/vnd.github+json",
        }
