"""
Command-line entry point.

Usage:
    python -m rss_translator feed https://example.com/feed.xml --target ja
    python -m rss_translator text "Hello world" --source en --target ja
"""

import argparse
import asyncio
import logging
import sys

from .config import Config, load_config, setup_logging
from .exceptions import ConfigError
from .processor import RSSProcessor
from .translator import GASTranslator

logger = logging.getLogger(__name__)


def build_parser(config: Config) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rss-translator",
        description="Translate an RSS/Atom feed and print it as RSS 2.0.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    feed = subparsers.add_parser("feed", help="Translate a feed URL")
    feed.add_argument("url", help="Feed URL")
    feed.add_argument("--source", default=config.default_source_lang, help="Source language")
    feed.add_argument("--target", default=config.default_target_lang, help="Target language")
    title_group = feed.add_mutually_exclusive_group()
    title_group.add_argument(
        "--include-feed-title", dest="exclude_feed_title", action="store_false",
        help="Translate the channel title too",
    )
    title_group.add_argument(
        "--exclude-feed-title", dest="exclude_feed_title", action="store_true",
        help="Leave the channel title untranslated",
    )
    feed.set_defaults(exclude_feed_title=config.default_exclude_feed_title)

    text = subparsers.add_parser("text", help="Translate a single string")
    text.add_argument("text", help="Text to translate")
    text.add_argument("--source", default=config.default_source_lang, help="Source language")
    text.add_argument("--target", default=config.default_target_lang, help="Target language")

    return parser


async def run(args: argparse.Namespace, config: Config) -> int:
    if args.command == "feed":
        processor = RSSProcessor.from_config(config)
        xml = await processor.process_feed(
            args.url, args.source, args.target, args.exclude_feed_title
        )
        if xml is None:
            logger.error("Failed to process RSS feed")
            return 1
        print(xml)
        return 0

    translator = GASTranslator(
        config.gas_url,
        batch_timeout=config.batch_timeout,
        translate_timeout=config.translate_timeout,
    )
    translated = await translator.translate(args.text, args.source, args.target)
    if translated is None:
        logger.warning("No translation available, printing original text")
        print(args.text)
        return 1
    print(translated)
    return 0


def main(argv: list[str] | None = None) -> int:
    try:
        config = load_config()
    except ConfigError as e:
        print(f"ERROR: {e.message}", file=sys.stderr)
        return 2

    setup_logging(config.log_level)
    args = build_parser(config).parse_args(argv)
    return asyncio.run(run(args, config))


if __name__ == "__main__":
    sys.exit(main())
