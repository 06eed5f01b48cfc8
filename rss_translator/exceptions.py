"""
Exception types raised inside the feed/translation pipeline.

FetchError and TranslationError are absorbed by RSSProcessor.process_feed,
which returns None instead of propagating them.
"""

from typing import Any


class RSSTranslatorError(Exception):
    """Base exception for rss_translator."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigError(RSSTranslatorError):
    """Raised when required configuration is missing or malformed."""
    pass


class FetchError(RSSTranslatorError):
    """Raised when a feed cannot be fetched or parsed."""

    def __init__(self, url: str, error: str, details: dict[str, Any] | None = None):
        super().__init__(f"Failed to fetch feed {url}: {error}", details)
        self.url = url
        self.error = error


class BlockedURLError(FetchError):
    """Raised when a feed URL targets a disallowed scheme or network."""
    pass


class TranslationError(RSSTranslatorError):
    """Raised when a translation backend fails in a way it cannot degrade from."""

    def __init__(self, source_lang: str, target_lang: str, error: str):
        super().__init__(f"Translation error for {source_lang} -> {target_lang}: {error}")
        self.source_lang = source_lang
        self.target_lang = target_lang
        self.error = error
