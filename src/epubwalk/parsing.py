"""
EPUB reader: the parsing pipeline and the resource retrieval API.

The pipeline runs strictly in order and stops at the first failure:
open archive -> check mimetype -> locate container rootfile -> parse
package document -> parse navigation document. Retrieval methods look
resources up by manifest id once the pipeline has produced a manifest.

    reader = EpubReader(Path("book.epub"))
    book = reader.parse()
    html = reader.get_chapter(book.flow[0].id)

Image and link URLs in rewritten chapters have the form
``image_root + id + "/" + archive_path``, so an image "logo.jpg" stored in
"OPS/" with manifest id "logo_img" becomes ``/images/logo_img/OPS/logo.jpg``
with the default image root.
"""

from __future__ import annotations

import logging
import warnings
from pathlib import Path
from typing import BinaryIO

from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning

from .archive import READ_ERRORS, Archive, ZipArchive
from .chapter import ChapterRewriter, check_chapter_type
from .container import find_rootfiles
from .errors import (
    EmptyArchive,
    EpubError,
    MimetypeMissing,
    MimetypeReadError,
    NavigationReadError,
    PackageReadError,
    ResourceNotFound,
    ResourceReadError,
    UnsupportedImageType,
    UnsupportedMimetype,
)
from .helpers import (
    Config,
    ManifestItem,
    NavEntry,
    PackageMetadata,
    ParsedBook,
    Spine,
)
from .navigation import parse_toc
from .package import parse_package
from .utils import clean_text, dirname_parts

logger = logging.getLogger(__name__)

EPUB_MIMETYPE = "application/epub+zip"

# Chapters are XHTML; html.parser handles them without complaint
warnings.filterwarnings("ignore", category=XMLParsedAsHTMLWarning)


class EpubReader:
    """Parses an EPUB archive and serves its resources.

    Args:
        source: Path to the .epub file, a binary file object, or an Archive
        config: URL roots for rewritten chapters (defaults apply when None)
    """

    def __init__(
        self,
        source: str | Path | BinaryIO | Archive,
        config: Config | None = None,
    ):
        self.source = source
        self.config = config or Config()
        self.archive: Archive | None = source if isinstance(source, Archive) else None
        self._book: ParsedBook | None = None

    # --- Pipeline ---

    def parse(self) -> ParsedBook:
        """Run the full pipeline and return the parsed book.

        Raises:
            EpubError: The subclass names the step that failed.
        """
        archive = self.open()
        self._check_mimetype(archive)

        rootfile = find_rootfiles(archive)[0]
        logger.debug(f"Parsing package document {rootfile}")
        data = self._read_entry(rootfile, PackageReadError)
        book = parse_package(data, rootfile)

        toc_item = book.spine.toc
        if book.manifest and toc_item is not None:
            logger.debug(f"Parsing navigation document {toc_item.href}")
            toc_data = self._read_entry(toc_item.href, NavigationReadError)
            book.toc = parse_toc(toc_data, toc_item, book.manifest)

        self._book = book
        logger.debug(
            f"Parsed {rootfile}: {len(book.manifest)} manifest items, "
            f"{len(book.flow)} spine items, {len(book.toc)} TOC entries"
        )
        return book

    def open(self) -> Archive:
        """Open the archive if needed and make sure it is not empty."""
        if self.archive is None:
            self.archive = ZipArchive(self.source)
        if not self.archive.names:
            raise EmptyArchive("No files in archive")
        return self.archive

    def _check_mimetype(self, archive: Archive) -> None:
        name = archive.find("mimetype", ignore_case=True)
        if name is None:
            raise MimetypeMissing("No mimetype file in archive")
        try:
            data = archive.read(name)
        except READ_ERRORS as e:
            raise MimetypeReadError("Reading archive mimetype failed", e) from e

        mime = data.decode("utf-8", errors="replace").lower().strip()
        if mime != EPUB_MIMETYPE:
            raise UnsupportedMimetype(f"Unsupported mime type {mime}")

    def _read_entry(self, name: str, error: type[EpubError]) -> bytes:
        try:
            return self.open().read(name)
        except READ_ERRORS as e:
            raise error(f"Reading archive failed: {name}", e) from e

    def close(self) -> None:
        if isinstance(self.archive, ZipArchive) and self.archive is not self.source:
            self.archive.close()

    def __enter__(self) -> EpubReader:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # --- Parsed structure ---

    @property
    def book(self) -> ParsedBook:
        """The parsed book, running the pipeline on first access."""
        if self._book is None:
            self.parse()
        return self._book

    @property
    def rootfile(self) -> str:
        return self.book.rootfile

    @property
    def version(self) -> str:
        return self.book.version

    @property
    def metadata(self) -> PackageMetadata:
        return self.book.metadata

    @property
    def manifest(self) -> dict[str, ManifestItem]:
        return self.book.manifest

    @property
    def spine(self) -> Spine:
        return self.book.spine

    @property
    def flow(self) -> list[ManifestItem]:
        return self.book.flow

    @property
    def toc(self) -> list[NavEntry]:
        return self.book.toc

    # --- Resource retrieval ---

    def _item(self, item_id: str) -> ManifestItem:
        item = self.manifest.get(item_id)
        if item is None:
            raise ResourceNotFound(f"File not found: {item_id}")
        return item

    def get_file(self, item_id: str) -> tuple[bytes, str]:
        """Return the raw bytes and media type of a manifest resource."""
        item = self._item(item_id)
        return self._read_entry(item.href, ResourceReadError), item.media_type

    def get_image(self, item_id: str) -> tuple[bytes, str]:
        """Like get_file, restricted to ``image/*`` media types."""
        item = self._item(item_id)
        if not item.media_type.lower().strip().startswith("image/"):
            raise UnsupportedImageType(f"Invalid mime type for image: {item_id}")
        return self.get_file(item_id)

    def get_chapter_raw(self, item_id: str) -> str:
        """Return the undecorated text of an XHTML or SVG chapter."""
        item = self._item(item_id)
        check_chapter_type(item)
        data = self._read_entry(item.href, ResourceReadError)
        return data.decode("utf-8", errors="replace")

    def get_chapter(self, item_id: str) -> str:
        """Return chapter body markup with image and link URLs rewritten."""
        raw = self.get_chapter_raw(item_id)
        rewriter = ChapterRewriter(
            self.manifest,
            image_root=self.config.image_root,
            link_root=self.config.link_root,
        )
        return rewriter.rewrite(raw, dirname_parts(self.manifest[item_id].href))

    def get_chapter_text(self, item_id: str) -> list[str]:
        """Return the chapter's text as a list of paragraphs."""
        soup = BeautifulSoup(self.get_chapter(item_id), "html.parser")
        for t in soup.find_all(["script", "style"]):
            t.decompose()

        paragraphs = []
        blocks = ["p", "div", "h1", "h2", "h3", "h4", "h5", "h6", "li", "blockquote"]
        for elem in soup.find_all(blocks):
            if elem.find_parent(blocks):
                continue
            text = clean_text(elem.get_text(" "))
            if text:
                paragraphs.append(text)

        # Bare text without block elements
        if not paragraphs:
            lines = soup.get_text(separator="\n").split("\n")
            paragraphs = [clean_text(line) for line in lines if line.strip()]

        return paragraphs

    def read_file(self, name: str, encoding: str | None = None) -> bytes | str:
        """Read an archive entry by its exact name, decoding if asked."""
        data = self._read_entry(name, ResourceReadError)
        if encoding:
            return data.decode(encoding)
        return data


__all__ = ["EPUB_MIMETYPE", "EpubReader"]
