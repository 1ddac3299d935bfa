"""OAuth providers package"""

from .base import OAuthProvider
from .facebook import FacebookOAuthProvider
from .github import GitHubOAuthProvider
from .google import GoogleOAuthProvider
from .instagram import InstagramOAuthProvider
from .linkedin import LinkedInOAuthProvider
from .reddit import RedditOAuthProvider
from .twitter import TwitterOAuthProvider

__all__ = [
    "OAuthProvider",
    "FacebookOAuthProvider",
    "GitHubOAuthProvider",
    "GoogleOAuthProvider",
    "InstagramOAuthProvider",
    "LinkedInOAuthProvider",
    "RedditOAuthProvider",
    "TwitterOAuthProvider",
]
