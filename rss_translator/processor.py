"""
Feed processing: fetch a feed, translate it in one batch, emit RSS.

Translatable fragments are keyed so results can be mapped back regardless
of the order the endpoint returns them in:

    feed-title, feed-description, item-<i>-title, item-<i>-content
"""

import logging

from .config import Config
from .exceptions import FetchError
from .feeds import Feed, FeedFetcher
from .rss_writer import feed_to_xml
from .schemas import BatchTranslateItem
from .translator import BaseTranslator, GASTranslator

logger = logging.getLogger(__name__)

FEED_TITLE_ID = "feed-title"
FEED_DESCRIPTION_ID = "feed-description"


def item_title_id(index: int) -> str:
    return f"item-{index}-title"


def item_content_id(index: int) -> str:
    return f"item-{index}-content"


def build_batch(feed: Feed, exclude_feed_title: bool = True) -> list[BatchTranslateItem]:
    """
    Collect every non-empty translatable string in the feed.

    Items are always included; exclude_feed_title only controls the
    channel title.
    """
    batch: list[BatchTranslateItem] = []

    if feed.title and not exclude_feed_title:
        batch.append(BatchTranslateItem(id=FEED_TITLE_ID, text=feed.title))
    if feed.description:
        batch.append(BatchTranslateItem(id=FEED_DESCRIPTION_ID, text=feed.description))

    for index, item in enumerate(feed.items):
        if item.title:
            batch.append(BatchTranslateItem(id=item_title_id(index), text=item.title))
        field_name = item.content_field
        if field_name:
            batch.append(
                BatchTranslateItem(id=item_content_id(index), text=getattr(item, field_name))
            )

    return batch


def apply_translations(feed: Feed, translations: dict[str, str]) -> None:
    """
    Write translated text back into the feed in place.

    Content goes back into the field that supplied it. Ids missing from
    the mapping keep their original text.
    """
    if FEED_TITLE_ID in translations:
        feed.title = translations[FEED_TITLE_ID]
    if FEED_DESCRIPTION_ID in translations:
        feed.description = translations[FEED_DESCRIPTION_ID]

    for index, item in enumerate(feed.items):
        title_id = item_title_id(index)
        if title_id in translations:
            item.title = translations[title_id]

        content_id = item_content_id(index)
        field_name = item.content_field
        if field_name and content_id in translations:
            setattr(item, field_name, translations[content_id])


class RSSProcessor:
    """Fetches, translates and re-serializes feeds."""

    def __init__(self, translator: BaseTranslator, fetcher: FeedFetcher | None = None):
        self.translator = translator
        self.fetcher = fetcher or FeedFetcher()

    @classmethod
    def from_config(cls, config: Config) -> "RSSProcessor":
        """Build a processor wired to the configured translation endpoint."""
        translator = GASTranslator(
            config.gas_url,
            batch_timeout=config.batch_timeout,
            translate_timeout=config.translate_timeout,
        )
        fetcher = FeedFetcher(
            timeout=config.feed_timeout,
            validate_urls=config.validate_feed_urls,
        )
        return cls(translator, fetcher)

    async def process_feed(
        self,
        url: str,
        source_lang: str,
        target_lang: str,
        exclude_feed_title: bool = True,
    ) -> str | None:
        """
        Fetch a feed, translate it and return RSS XML.

        Returns:
            The translated RSS document, or None if the feed could not be
            fetched, translated or serialized
        """
        try:
            feed = await self.fetcher.fetch_feed(url)
            batch = build_batch(feed, exclude_feed_title)
            translations = await self.translator.translate_batch(batch, source_lang, target_lang)
            apply_translations(feed, translations)
            xml = feed_to_xml(feed)
        except FetchError as e:
            logger.error(f"RSS processing error: {e}")
            return None
        except Exception:
            logger.exception(f"RSS processing failed for {url}")
            return None

        logger.info(f"Translated {len(translations)}/{len(batch)} fragments from {url}")
        return xml
