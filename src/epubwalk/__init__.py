"""epubwalk - Structural parsing and chapter rewriting for EPUB archives.

Locates the package document, reads metadata, manifest, spine and the NCX
table of contents into plain dataclasses, and rewrites chapter markup so
images and internal links point at addressable URLs.

Example:
    >>> from epubwalk import EpubReader
    >>> reader = EpubReader(Path("book.epub"))
    >>> book = reader.parse()
    >>> book.metadata.title
    >>> html = reader.get_chapter(book.flow[0].id)
"""

import importlib.metadata

from .archive import Archive, ZipArchive
from .chapter import ChapterRewriter
from .container import find_rootfiles
from .errors import *  # noqa: F401,F403
from .errors import __all__ as _error_names
from .helpers import (
    Config,
    ManifestItem,
    NavEntry,
    PackageMetadata,
    ParsedBook,
    Spine,
    TocEntry,
)
from .navigation import parse_toc, walk_nav_map
from .package import parse_manifest, parse_metadata, parse_package, parse_spine
from .parsing import EpubReader
from .utils import resolve_path
from .xmltree import Node, as_list, parse_xml

try:
    __version__ = importlib.metadata.version("epubwalk")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.1.0"

__all__ = [
    # Reader
    "EpubReader",
    "Config",
    # Data model
    "ParsedBook",
    "PackageMetadata",
    "ManifestItem",
    "Spine",
    "TocEntry",
    "NavEntry",
    # Pipeline steps
    "find_rootfiles",
    "parse_package",
    "parse_metadata",
    "parse_manifest",
    "parse_spine",
    "parse_toc",
    "walk_nav_map",
    "ChapterRewriter",
    "resolve_path",
    # Collaborators
    "Archive",
    "ZipArchive",
    "Node",
    "parse_xml",
    "as_list",
    # Metadata
    "__version__",
    *_error_names,
]
