"""
Feed Fetcher - Fetch and parse RSS/Atom feeds.

Handles:
- RSS 2.0, RSS 1.0 and Atom 1.0 formats
- Mapping entries onto the fields the translator rewrites
- Outbound URL validation before fetching
"""

import asyncio
import logging
from dataclasses import dataclass, field

import aiohttp
import feedparser

from .exceptions import FetchError
from .url_validator import validate_feed_url

logger = logging.getLogger(__name__)


@dataclass
class FeedItem:
    """A single item/entry from a feed."""
    title: str | None = None
    link: str | None = None
    content_encoded: str | None = None  # RSS content:encoded
    content: str | None = None  # Atom content
    summary: str | None = None  # RSS description / Atom summary
    pub_date: str | None = None
    guid: str | None = None
    creator: str | None = None

    @property
    def content_field(self) -> str | None:
        """Name of the field that supplies translatable content, by priority."""
        for name in ("content_encoded", "content", "summary"):
            if getattr(self, name):
                return name
        return None


@dataclass
class Feed:
    """A parsed feed."""
    title: str | None = None
    description: str | None = None
    link: str | None = None
    language: str | None = None
    last_build_date: str | None = None
    items: list[FeedItem] = field(default_factory=list)


class FeedFetcher:
    """Fetches feed documents and parses them into Feed objects."""

    def __init__(
        self,
        timeout: float = 10.0,
        user_agent: str | None = None,
        validate_urls: bool = True,
    ):
        self.timeout = timeout
        self.user_agent = user_agent or "RSS Translator/1.0"
        self.validate_urls = validate_urls

    async def fetch(self, url: str) -> bytes:
        """
        Fetch the raw feed document.

        Raises:
            FetchError: On a blocked URL, network error or non-2xx response
        """
        if self.validate_urls:
            # Resolution blocks, so keep it off the event loop
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(None, validate_feed_url, url)

        headers = {
            "User-Agent": self.user_agent,
            "Accept": "application/rss+xml, application/atom+xml, application/xml;q=0.9, */*;q=0.8",
        }

        try:
            async with aiohttp.ClientSession(headers=headers) as session:
                async with session.get(
                    url,
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                    allow_redirects=True,
                ) as resp:
                    resp.raise_for_status()
                    return await resp.read()
        except aiohttp.ClientResponseError as e:
            raise FetchError(url, f"HTTP {e.status}", {"status": e.status})
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise FetchError(url, str(e) or type(e).__name__)

    def parse(self, content: bytes | str, url: str = "") -> Feed:
        """
        Parse a feed document using feedparser.

        Raises:
            FetchError: If the document is not a usable feed
        """
        parsed = feedparser.parse(content)

        if parsed.bozo and not parsed.entries and not parsed.feed.get("title"):
            raise FetchError(url, f"Failed to parse feed: {parsed.bozo_exception}")
        if not parsed.version and not parsed.entries:
            raise FetchError(url, "Document is not an RSS or Atom feed")

        is_atom = parsed.version.startswith("atom")
        items = [self._parse_entry(entry, is_atom) for entry in parsed.entries]

        channel = parsed.feed
        return Feed(
            title=channel.get("title"),
            description=channel.get("subtitle"),
            link=channel.get("link"),
            language=channel.get("language"),
            last_build_date=channel["updated"] if "updated" in channel else None,
            items=items,
        )

    async def fetch_feed(self, url: str) -> Feed:
        """Fetch and parse a feed URL."""
        content = await self.fetch(url)
        feed = self.parse(content, url)
        logger.info(f"Fetched {url}: {len(feed.items)} items")
        return feed

    def _parse_entry(self, entry, is_atom: bool) -> FeedItem:
        # feedparser puts both content:encoded and Atom <content> in entry.content
        body = None
        if entry.get("content"):
            body = entry.content[0].get("value")

        # Without a real description element feedparser copies the body into
        # summary (no summary_detail); drop the copy so it is not emitted untranslated
        summary = entry.get("summary") if "summary_detail" in entry else None

        return FeedItem(
            title=entry.get("title"),
            link=entry.get("link"),
            content_encoded=None if is_atom else body,
            content=body if is_atom else None,
            summary=summary,
            pub_date=entry.get("published") or (entry["updated"] if "updated" in entry else None),
            guid=entry.get("id"),
            creator=entry.get("author"),
        )
