"""Version information for unified-oauth."""

__version__ = "1.0.0"
