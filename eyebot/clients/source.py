"""Random source image from Wikimedia Commons.

``Special:Random/File`` redirects to a file description page; the preview
link on that page points at a downscaled rendition of the file.
"""

from __future__ import annotations

import html
import logging
import re

import httpx

from eyebot.errors import ImageLinkNotFoundError, SourceFetchError

logger = logging.getLogger(__name__)

_IMG_LINK_RE = re.compile(r'Size of this preview: <a href="([^"]+)"(\s)')


def find_image_link(page_html: str) -> str | None:
    match = _IMG_LINK_RE.search(page_html)
    if match is None:
        return None
    return html.unescape(match.group(1))


class CommonsImageSource:
    def __init__(self, client: httpx.AsyncClient, page_url: str) -> None:
        self._client = client
        self._page_url = page_url

    async def fetch_random_image_buffer(self) -> bytes:
        try:
            page = await self._client.get(self._page_url, follow_redirects=True)
            page.raise_for_status()
        except httpx.HTTPError as e:
            raise SourceFetchError(f"Could not fetch {self._page_url}: {e}") from e

        link = find_image_link(page.text)
        if link is None:
            raise ImageLinkNotFoundError(f"Could not find image link for {page.url}.")

        image_url = page.url.join(link)
        logger.debug("Source page %s -> %s", page.url, image_url)
        try:
            image = await self._client.get(image_url, follow_redirects=True)
            image.raise_for_status()
        except httpx.HTTPError as e:
            raise SourceFetchError(f"Could not fetch image {image_url}: {e}") from e

        if not image.content:
            raise SourceFetchError(f"Empty image body from {image_url}")
        logger.info("Fetched source image %s (%d bytes)", image_url, len(image.content))
        return image.content
