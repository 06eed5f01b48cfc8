"""RSS 2.0 writer for translated feeds."""

import re
from email.utils import formatdate

from .feeds import Feed, FeedItem

CONTENT_NS = "http://purl.org/rss/1.0/modules/content/"
DC_NS = "http://purl.org/dc/elements/1.1/"

INDENT = "  "

_MARKUP_CHARS = re.compile(r"[<>&]")

# Characters outside the XML 1.0 Char production
_INVALID_XML_CHARS = re.compile("[^\x09\x0a\x0d\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def _cdata(value: str) -> str:
    # "]]>" cannot appear inside a CDATA section, so split it across two
    return "<![CDATA[" + value.replace("]]>", "]]]]><![CDATA[>") + "]]>"


def _element(tag: str, value: str | None, depth: int) -> str:
    """
    Render a text element.

    Characters XML 1.0 cannot represent are dropped. Text that contains
    markup characters is CDATA-wrapped so embedded HTML from translated
    content survives literally.
    """
    pad = INDENT * depth
    if value:
        value = _INVALID_XML_CHARS.sub("", value)
    if not value:
        return f"{pad}<{tag}/>"
    text = _cdata(value) if _MARKUP_CHARS.search(value) else value
    return f"{pad}<{tag}>{text}</{tag}>"


def _item_lines(item: FeedItem) -> list[str]:
    lines = [
        f"{INDENT * 2}<item>",
        _element("title", item.title, 3),
        _element("link", item.link, 3),
        _element("description", item.summary or item.content, 3),
        _element("pubDate", item.pub_date, 3),
        _element("guid", item.guid or item.link, 3),
    ]
    if item.content_encoded:
        lines.append(_element("content:encoded", item.content_encoded, 3))
    if item.creator:
        lines.append(_element("dc:creator", item.creator, 3))
    lines.append(f"{INDENT * 2}</item>")
    return lines


def feed_to_xml(feed: Feed) -> str:
    """
    Serialize a Feed as an RSS 2.0 document.

    Missing channel fields are written empty, except lastBuildDate which
    defaults to the current time in RFC 1123 format.

    Args:
        feed: The (possibly translated) feed

    Returns:
        RSS XML string with declaration
    """
    lines = [
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>',
        f'<rss version="2.0" xmlns:content="{CONTENT_NS}" xmlns:dc="{DC_NS}">',
        f"{INDENT}<channel>",
        _element("title", feed.title, 2),
        _element("link", feed.link, 2),
        _element("description", feed.description, 2),
        _element("language", feed.language, 2),
        _element("lastBuildDate", feed.last_build_date or formatdate(usegmt=True), 2),
    ]
    for item in feed.items:
        lines.extend(_item_lines(item))
    lines.append(f"{INDENT}</channel>")
    lines.append("</rss>")
    return "\n".join(lines)
