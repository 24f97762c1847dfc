"""Remote source exports."""

from .cached_fetcher import CachedFetcher, FetchError, TextFetcher
from .url_validation import UrlChecker, UrlValidator

__all__ = ["CachedFetcher", "FetchError", "TextFetcher", "UrlChecker", "UrlValidator"]
