"""
Chapter markup rewriting.

Turns a raw XHTML/SVG chapter into an embeddable fragment: keeps only the
body, strips scripts and styles, disables inline event handlers and points
image and link references at URLs built from the manifest. Everything is
done with pattern substitution on the text; the markup is never parsed, so
malformed chapters come through as well as they went in.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from .errors import UnsupportedChapterType
from .helpers import DEFAULT_IMAGE_ROOT, DEFAULT_LINK_ROOT, ManifestItem
from .utils import join_path

logger = logging.getLogger(__name__)

CHAPTER_MEDIA_TYPES = frozenset({"application/xhtml+xml", "image/svg+xml"})

# Stands in for line breaks so that single-line patterns see the whole text
NEWLINE_PLACEHOLDER = "\x00"
EVENT_HANDLER_PREFIX = "skip-"

_NEWLINE = re.compile(r"\r?\n")
_BODY = re.compile(r"<body[^>]*?>(.*)</body[^>]*?>", re.IGNORECASE)
_SCRIPT = re.compile(r"<script[^>]*?>(.*?)</script[^>]*?>", re.IGNORECASE)
_STYLE = re.compile(r"<style[^>]*?>(.*?)</style[^>]*?>", re.IGNORECASE)
_EVENT_HANDLER = re.compile(r"""(\s)(on\w+)(\s*=\s*["']?[^"'\s>]*?["'\s>])""")
_SRC = re.compile(r"""(\ssrc\s*=\s*["']?)([^"'\s>]*?)(["'\s>])""")
_HREF = re.compile(r"""(\shref\s*=\s*["']?)([^"'\s>]*?)(["'\s>])""")


def check_chapter_type(item: ManifestItem) -> None:
    """Raise UnsupportedChapterType unless ``item`` is XHTML or SVG."""
    if item.media_type not in CHAPTER_MEDIA_TYPES:
        raise UnsupportedChapterType("Invalid mime type for chapter")


class ChapterRewriter:
    """Rewrites chapter markup against a manifest.

    Image URLs take the form ``image_root + id + "/" + path`` and link URLs
    ``link_root + id + "/" + path[#fragment]``, where ``path`` is the
    resource's archive path. An image missing from the manifest loses its
    ``src`` attribute; a link missing from the manifest is left unchanged.
    """

    def __init__(
        self,
        manifest: dict[str, ManifestItem],
        image_root: str = DEFAULT_IMAGE_ROOT,
        link_root: str = DEFAULT_LINK_ROOT,
    ):
        self.manifest = manifest
        self.image_root = image_root
        self.link_root = link_root

    def _by_href(self, strip_fragment: bool) -> dict[str, ManifestItem]:
        # First item in manifest order wins for a shared href
        index: dict[str, ManifestItem] = {}
        for item in self.manifest.values():
            href = item.href.split("#")[0] if strip_fragment else item.href
            index.setdefault(href, item)
        return index

    def rewrite(self, markup: str, base: Sequence[str]) -> str:
        """Return the rewritten body of ``markup``.

        Args:
            markup: Raw chapter text
            base: Directory segments that relative references resolve against
        """
        text = _NEWLINE.sub(NEWLINE_PLACEHOLDER, markup)

        body = _BODY.search(text)
        if body:
            text = body.group(1).strip()

        text = _SCRIPT.sub("", text)
        text = _STYLE.sub("", text)
        text = _EVENT_HANDLER.sub(rf"\1{EVENT_HANDLER_PREFIX}\2\3", text)
        text = self._rewrite_images(text, base)
        text = self._rewrite_links(text, base)

        return text.replace(NEWLINE_PLACEHOLDER, "\n").strip()

    def _rewrite_images(self, text: str, base: Sequence[str]) -> str:
        images = self._by_href(strip_fragment=False)

        def replace(match: re.Match) -> str:
            prefix, ref, end = match.groups()
            path = join_path(ref, base).strip()
            item = images.get(path)
            if item is None:
                logger.debug(f"Dropping src '{ref}' not found in manifest")
                return ""
            return f"{prefix}{self.image_root}{item.id}/{path}{end}"

        return _SRC.sub(replace, text)

    def _rewrite_links(self, text: str, base: Sequence[str]) -> str:
        links = self._by_href(strip_fragment=True)

        def replace(match: re.Match) -> str:
            prefix, ref, end = match.groups()
            target, *fragments = ref.split("#")
            path = join_path(target, base).strip()
            item = links.get(path)
            if item is None:
                return match.group(0)
            if fragments:
                path += "#" + "#".join(fragments)
            return f"{prefix}{self.link_root}{item.id}/{path}{end}"

        return _HREF.sub(replace, text)


__all__ = [
    "CHAPTER_MEDIA_TYPES",
    "EVENT_HANDLER_PREFIX",
    "NEWLINE_PLACEHOLDER",
    "ChapterRewriter",
    "check_chapter_type",
]
