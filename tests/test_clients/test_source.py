"""Tests for the Commons source image adapter."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from eyebot.clients.source import CommonsImageSource, find_image_link
from eyebot.errors import ImageLinkNotFoundError, SourceFetchError

PAGE_URL = "https://commons.wikimedia.org/wiki/Special:Random/File"
FILE_PAGE = "https://commons.wikimedia.org/wiki/File:Cat.jpg"
IMAGE_URL = "https://upload.wikimedia.org/thumb/Cat.jpg/800px-Cat.jpg"

FILE_PAGE_HTML = (
    '<div class="fullMedia">Size of this preview: '
    f'<a href="{IMAGE_URL}" class="mw-thumbnail-link">800 × 600 pixels</a>.</div>'
)


def _fetch(handler) -> bytes:
    async def go() -> bytes:
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await CommonsImageSource(client, PAGE_URL).fetch_random_image_buffer()

    return asyncio.run(go())


class TestFindImageLink:
    def test_finds_preview_link(self):
        assert find_image_link(FILE_PAGE_HTML) == IMAGE_URL

    def test_unescapes_entities(self):
        html = 'Size of this preview: <a href="/img?a=1&amp;b=2" class="x">'
        assert find_image_link(html) == "/img?a=1&b=2"

    def test_no_link(self):
        assert find_image_link("<html>No preview here</html>") is None


def test_follows_redirect_then_fetches_image():
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        if str(request.url) == PAGE_URL:
            return httpx.Response(302, headers={"Location": FILE_PAGE})
        if str(request.url) == FILE_PAGE:
            return httpx.Response(200, text=FILE_PAGE_HTML)
        if str(request.url) == IMAGE_URL:
            return httpx.Response(200, content=b"jpeg-bytes")
        return httpx.Response(404)

    assert _fetch(handler) == b"jpeg-bytes"
    assert seen == [PAGE_URL, FILE_PAGE, IMAGE_URL]


def test_relative_link_resolved_against_page():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/wiki/Special:Random/File":
            return httpx.Response(200, text='Size of this preview: <a href="/media/x.jpg" ')
        if request.url.path == "/media/x.jpg":
            assert request.url.host == "commons.wikimedia.org"
            return httpx.Response(200, content=b"x")
        return httpx.Response(404)

    assert _fetch(handler) == b"x"


def test_missing_link_raises_not_found():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>audio file, no preview</html>")

    with pytest.raises(ImageLinkNotFoundError):
        _fetch(handler)


def test_page_error_is_source_fetch_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    with pytest.raises(SourceFetchError):
        _fetch(handler)


def test_image_error_is_source_fetch_error():
    def handler(request: httpx.Request) -> httpx.Response:
        if str(request.url) == PAGE_URL:
            return httpx.Response(200, text=FILE_PAGE_HTML)
        return httpx.Response(404)

    with pytest.raises(SourceFetchError) as info:
        _fetch(handler)
    assert not isinstance(info.value, ImageLinkNotFoundError)


def test_transport_error_is_source_fetch_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("no route", request=request)

    with pytest.raises(SourceFetchError):
        _fetch(handler)
