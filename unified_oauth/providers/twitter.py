"""Twitter (X) OAuth 2.0 Provider"""

from typing import Any

from ..exceptions import AuthorizationError, ProviderApiError, TokenError, UserProfileError
from ..models import AuthParams, ProfileResult, ProviderName, TokenResponse, UserProfile
from ..pkce import CODE_CHALLENGE_METHOD, code_challenge, derive_code_verifier
from .base import OAuthProvider


class TwitterOAuthProvider(OAuthProvider):
    """
    Twitter OAuth 2.0 provider implementation.

    Twitter requires PKCE. Unless the caller passes its own verifier, the
    verifier is derived from the ``state`` and the client secret, so the same
    state given back to ``get_token`` rebuilds it without server-side storage.

    The email address is not available through this API.

    References:
    - https://developer.twitter.com/en/docs/authentication/oauth-2-0/authorization-code
    """

    name = ProviderName.twitter

    AUTHORIZATION_URL = "https://twitter.com/i/oauth2/authorize"
    TOKEN_URL = "https://api.twitter.com/2/oauth2/token"
    USER_INFO_URL = "https://api.twitter.com/2/users/me"

    USER_FIELDS = "id,name,username,profile_image_url,verified"

    FIXED_AUTH_PARAMS = {"response_type": "code"}

    def code_verifier_for(self, state: str) -> str:
        """Return the PKCE verifier this provider derives for ``state``."""
        return derive_code_verifier(self.config.client_secret, state)

    def build_auth_params(self, state: str, params: AuthParams | None = None) -> dict[str, str]:
        """
        Add the S256 PKCE challenge to the authorization parameters.

        Raises:
            AuthorizationError: If ``state`` is empty and no ``code_verifier``
                is given, since there is nothing to derive the verifier from
        """
        query = super().build_auth_params(state, params)
        verifier = params.code_verifier if params and params.code_verifier else None
        if verifier is None:
            if not state:
                raise AuthorizationError(
                    "A state or code_verifier is required to build the PKCE challenge",
                    self.provider_name,
                )
            verifier = self.code_verifier_for(state)
        query["code_challenge"] = code_challenge(verifier)
        query["code_challenge_method"] = CODE_CHALLENGE_METHOD
        return query

    async def get_token(
        self,
        code: str,
        state: str | None = None,
        code_verifier: str | None = None,
    ) -> TokenResponse:
        """
        Exchange authorization code for Twitter access tokens.

        Args:
            code: Authorization code from OAuth callback
            state: State from the callback, used to rebuild the PKCE verifier
            code_verifier: Verifier passed to ``get_auth_url``, if the caller supplied one

        Raises:
            AuthorizationError: If neither ``state`` nor ``code_verifier`` is given
        """
        if code_verifier is None:
            if not state:
                raise AuthorizationError(
                    "A state or code_verifier is required to complete the PKCE exchange",
                    self.provider_name,
                )
            code_verifier = self.code_verifier_for(state)

        data = await self._request(
            "post",
            self.TOKEN_URL,
            error_cls=TokenError,
            action="exchange code for token",
            data={
                "code": code,
                "grant_type": "authorization_code",
                "redirect_uri": self.config.redirect_uri,
                "code_verifier": code_verifier,
            },
            auth=self._client_auth,
        )
        return self._token_response(data, "exchange code for token")

    async def _fetch_profile(self, access_token: str) -> ProfileResult:
        body = await self._request(
            "get",
            self.USER_INFO_URL,
            error_cls=UserProfileError,
            action="fetch user profile",
            headers=self._bearer(access_token),
            params={"user.fields": self.USER_FIELDS},
        )

        user_data: dict[str, Any] | None = body.get("data")
        if not user_data:
            # v2 reports problems as {"errors": [...]} with a 200 status
            errors = body.get("errors") or []
            detail = errors[0].get("detail") if errors else None
            raise ProviderApiError(
                detail or "Twitter response did not contain user data",
                self.provider_name,
                400,
                body,
            )

        profile = UserProfile(
            id=str(user_data["id"]),
            email=None,
            name=user_data.get("name") or None,
            first_name=None,
            last_name=None,
            avatar_url=user_data.get("profile_image_url") or None,
            username=user_data.get("username") or None,
            provider=self.name,
            verified=bool(user_data.get("verified", False)),
            raw=body,
        )
        return ProfileResult(profile=profile)
