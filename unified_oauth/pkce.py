"""PKCE (RFC 7636) helpers.

Verifiers are either random or derived from the OAuth ``state`` with an HMAC
keyed by the client secret, so a stateless adapter can rebuild the verifier
at token exchange time from the state the caller already round-trips.
"""

import base64
import hashlib
import hmac
import secrets

CODE_CHALLENGE_METHOD = "S256"


def _b64url(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def generate_code_verifier(nbytes: int = 32) -> str:
    """Return a fresh random verifier (43 characters for the default 32 bytes)."""
    if not 32 <= nbytes <= 96:
        raise ValueError("nbytes must be between 32 and 96")
    return _b64url(secrets.token_bytes(nbytes))


def derive_code_verifier(secret: str, state: str) -> str:
    """Derive a deterministic verifier from ``state``, keyed by ``secret``."""
    if not state:
        raise ValueError("state must not be empty")
    digest = hmac.new(secret.encode("utf-8"), state.encode("utf-8"), hashlib.sha256).digest()
    return _b64url(digest)


def code_challenge(verifier: str) -> str:
    """Return the S256 challenge for ``verifier``."""
    return _b64url(hashlib.sha256(verifier.encode("ascii")).digest())
