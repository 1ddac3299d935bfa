"""LinkedIn OAuth Provider"""

from typing import Any

import structlog

from ..exceptions import TokenError, UserProfileError
from ..models import ProfileResult, ProviderName, TokenResponse, UserProfile
from .base import OAuthProvider

logger = structlog.get_logger()

PROFILE_LOCALE = "en_US"


class LinkedInOAuthProvider(OAuthProvider):
    """
    LinkedIn OAuth 2.0 provider implementation (v2 people API).

    The email address lives behind a separate endpoint and needs the
    ``r_emailaddress`` scope; it is fetched best-effort after the profile.

    References:
    - https://learn.microsoft.com/en-us/linkedin/shared/authentication/authorization-code-flow
    """

    name = ProviderName.linkedin

    AUTHORIZATION_URL = "https://www.linkedin.com/oauth/v2/authorization"
    TOKEN_URL = "https://www.linkedin.com/oauth/v2/accessToken"
    USER_INFO_URL = "https://api.linkedin.com/v2/people/~"
    EMAIL_URL = "https://api.linkedin.com/v2/emailAddress"

    PROFILE_PROJECTION = "(id,firstName,lastName,profilePicture(displayImage~:playableStreams))"
    EMAIL_PROJECTION = "(elements*(handle~))"

    FIXED_AUTH_PARAMS = {"response_type": "code"}

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
                "client_id": self.config.client_id,
                "client_secret": self.config.client_secret,
            },
        )
        return self._token_response(data, "exchange code for token")

    async def _fetch_profile(self, access_token: str) -> ProfileResult:
        headers = self._bearer(access_token)
        profile_data = await self._request(
            "get",
            self.USER_INFO_URL,
            error_cls=UserProfileError,
            action="fetch user profile",
            headers=headers,
            params={"projection": self.PROFILE_PROJECTION},
        )

        warnings: list[str] = []
        email_data, warning = await self._fetch_optional(
            self.EMAIL_URL,
            "email address",
            headers=headers,
            params={"q": "members", "projection": self.EMAIL_PROJECTION},
        )
        if warning:
            warnings.append(warning)

        email = None
        if email_data is not None:
            try:
                email = _email_from(email_data)
            except (AttributeError, KeyError, TypeError) as e:
                logger.warning(
                    "Malformed email address payload",
                    provider=self.provider_name,
                    error=str(e),
                )
                warnings.append(f"Could not read email address: {e!r}")

        first_name = _localized(profile_data.get("firstName"))
        last_name = _localized(profile_data.get("lastName"))

        profile = UserProfile(
            id=str(profile_data["id"]),
            email=email,
            name=f"{first_name} {last_name}" if first_name and last_name else None,
            first_name=first_name,
            last_name=last_name,
            avatar_url=_avatar_from(profile_data),
            username=str(profile_data["id"]),
            provider=self.name,
            raw=profile_data,
        )
        return ProfileResult(profile=profile, warnings=warnings)


def _localized(field: Any) -> str | None:
    """Pick the English value out of a LinkedIn ``MultiLocaleString``."""
    if not isinstance(field, dict):
        return None
    return (field.get("localized") or {}).get(PROFILE_LOCALE) or None


def _email_from(email_data: Any) -> str | None:
    # elements[0]["handle~"].emailAddress
    elements = email_data.get("elements") or []
    if not elements:
        return None
    return (elements[0].get("handle~") or {}).get("emailAddress") or None


def _avatar_from(profile_data: dict[str, Any]) -> str | None:
    # profilePicture["displayImage~"].elements[0].identifiers[0].identifier
    display_image = (profile_data.get("profilePicture") or {}).get("displayImage~") or {}
    elements = display_image.get("elements") or []
    if not elements:
        return None
    identifiers = elements[0].get("identifiers") or []
    if not identifiers:
        return None
    return identifiers[0].get("identifier") or None
