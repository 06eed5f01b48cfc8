"""
Pytest fixtures for rss_translator tests.
"""

import asyncio
from typing import Any

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

SAMPLE_RSS = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"
     xmlns:content="http://purl.org/rss/1.0/modules/content/"
     xmlns:dc="http://purl.org/dc/elements/1.1/">
  <channel>
    <title>Test Feed</title>
    <link>https://example.com</link>
    <description>Test Description</description>
    <language>en</language>
    <lastBuildDate>Sun, 01 Jan 2023 00:00:00 GMT</lastBuildDate>
    <item>
      <title>Item 1 Title</title>
      <link>https://example.com/item1</link>
      <description>Item 1 content</description>
      <pubDate>Sun, 01 Jan 2023 00:00:00 GMT</pubDate>
      <guid>item1</guid>
    </item>
    <item>
      <title>Item 2 Title</title>
      <link>https://example.com/item2</link>
      <description>Item 2 summary</description>
      <content:encoded><![CDATA[<p>Item 2 content encoded</p>]]></content:encoded>
      <pubDate>Mon, 02 Jan 2023 00:00:00 GMT</pubDate>
      <guid>item2</guid>
      <dc:creator>Author Name</dc:creator>
    </item>
  </channel>
</rss>
"""

SAMPLE_ATOM = """<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Atom Feed</title>
  <subtitle>Atom Subtitle</subtitle>
  <link href="https://example.org/"/>
  <updated>2023-01-01T00:00:00Z</updated>
  <id>urn:uuid:feed</id>
  <entry>
    <title>Atom Entry</title>
    <link href="https://example.org/entry1"/>
    <id>urn:uuid:entry1</id>
    <published>2023-01-01T00:00:00Z</published>
    <author><name>Jane Doe</name></author>
    <summary>Entry summary</summary>
    <content type="html">&lt;p&gt;Entry body&lt;/p&gt;</content>
  </entry>
</feed>
"""

EMPTY_RSS = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Empty Feed</title>
    <description>Empty Description</description>
  </channel>
</rss>
"""


class FakeGASEndpoint:
    """Records posted JSON and answers with a configurable response."""

    def __init__(self):
        self.url = ""
        self.requests: list[dict] = []
        self.status = 200
        self.payload: Any = {"status": True, "results": [], "processed": 0, "total": 0, "executionTime": 0}
        self.raw_body: str | None = None
        self.delay = 0.0

    async def handle(self, request: web.Request) -> web.Response:
        self.requests.append(await request.json())
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.raw_body is not None:
            return web.Response(status=self.status, text=self.raw_body)
        return web.json_response(self.payload, status=self.status)


@pytest_asyncio.fixture
async def gas_endpoint():
    """Local stand-in for the Apps Script translation endpoint."""
    endpoint = FakeGASEndpoint()
    app = web.Application()
    app.router.add_post("/exec", endpoint.handle)
    server = TestServer(app)
    await server.start_server()
    endpoint.url = str(server.make_url("/exec"))
    yield endpoint
    await server.close()


@pytest_asyncio.fixture
async def feed_server():
    """Local HTTP server publishing sample feeds. Yields its base URL."""
    async def rss(request):
        return web.Response(text=SAMPLE_RSS, content_type="application/rss+xml")

    async def atom(request):
        return web.Response(text=SAMPLE_ATOM, content_type="application/atom+xml")

    async def html(request):
        return web.Response(text="<html><body>Not a feed</body></html>", content_type="text/html")

    app = web.Application()
    app.router.add_get("/feed.xml", rss)
    app.router.add_get("/atom.xml", atom)
    app.router.add_get("/page.html", html)
    server = TestServer(app)
    await server.start_server()
    yield str(server.make_url("")).rstrip("/")
    await server.close()


@pytest.fixture
def sample_rss():
    return SAMPLE_RSS


@pytest.fixture
def sample_atom():
    return SAMPLE_ATOM


@pytest.fixture
def empty_rss():
    return EMPTY_RSS
