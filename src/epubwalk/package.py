"""
Package document (OPF) parsing.

Extracts bibliographic metadata, the manifest of resources and the spine
(reading order) from a parsed package document. Works for both EPUB 2 and
EPUB 3 package documents; nothing here validates conformance.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from xml.etree import ElementTree as ET

from .errors import PackageReadError
from .helpers import (
    DEFAULT_VERSION,
    ManifestItem,
    PackageMetadata,
    ParsedBook,
    Spine,
)
from .utils import dirname_parts, resolve_path
from .xmltree import Node, as_list, local_name, parse_xml

logger = logging.getLogger(__name__)

# Single-valued fields read straight from element text; first occurrence wins
SINGULAR_FIELDS = ("publisher", "language", "subject", "description", "date", "title")

_UUID_ID = re.compile(r"uuid", re.IGNORECASE)


def _first_value(nodes: list[Node]) -> str:
    return nodes[0].value if nodes else ""


def _read_identifiers(nodes: list[Node], result: dict[str, str]) -> None:
    for node in nodes:
        if node.attr("scheme") == "ISBN":
            result["ISBN"] = node.value
        elif _UUID_ID.search(node.attr("id") or ""):
            result["UUID"] = (node.text or "").replace("urn:uuid:", "", 1).upper().strip()


def parse_metadata(metadata: Node) -> PackageMetadata:
    """Normalize the ``<metadata>`` block.

    Element names are matched on their lowercased local name. Generic
    ``<meta>`` declarations are applied last and overwrite fixed fields
    of the same name.
    """
    result: dict[str, str] = {}

    for tag, nodes in metadata.groups():
        key = local_name(tag).lower().strip()
        if key in SINGULAR_FIELDS:
            value = _first_value(nodes)
            result[key] = value.lower() if key == "language" else value
        elif key == "creator":
            creator = nodes[0]
            result["creator"] = creator.value
            file_as = creator.attr("file-as") or result["creator"]
            result["creatorFileAs"] = file_as.strip()
        elif key == "identifier":
            _read_identifiers(nodes, result)

    for meta in as_list(metadata.get("meta")):
        name = meta.attr("name")
        if name:
            result[name] = meta.attr("content", "")
        prop = meta.attr("property")
        if meta.value and prop:
            result[prop] = meta.value

    return PackageMetadata.from_dict(result)


def parse_manifest(manifest: Node, base: Sequence[str]) -> dict[str, ManifestItem]:
    """Build the id -> ManifestItem index from the ``<manifest>`` block.

    Hrefs are resolved against ``base``, the package document's directory.
    Items without attributes are skipped; a repeated id keeps the last item.
    """
    items: dict[str, ManifestItem] = {}
    for node in as_list(manifest.get("item")):
        if not node.attributes:
            continue
        attributes = dict(node.attributes)
        href = attributes.get("href", "")
        if href:
            href = resolve_path(href, base)
        item_id = attributes.get("id", "")
        items[item_id] = ManifestItem(
            id=item_id,
            href=href,
            media_type=attributes.get("media-type", ""),
            attributes=attributes,
        )
    logger.debug(f"Manifest has {len(items)} items")
    return items


def parse_spine(
    spine: Node,
    manifest: dict[str, ManifestItem],
    base: Sequence[str] = (),
) -> Spine:
    """Resolve the ``<spine>`` block against the manifest.

    An unknown ``toc`` id leaves ``Spine.toc`` as None. Itemrefs whose idref
    is not in the manifest are dropped from the reading order.
    """
    result = Spine()

    toc_id = spine.attr("toc")
    if toc_id:
        result.toc = manifest.get(toc_id)

    for itemref in as_list(spine.get("itemref")):
        idref = itemref.attr("idref")
        if not idref:
            continue
        item = manifest.get(idref)
        if item is None:
            logger.warning(f"Spine itemref '{idref}' is not in the manifest, skipping")
            continue
        result.contents.append(item)

    return result


def parse_package(data: bytes | str, rootfile: str) -> ParsedBook:
    """Parse a package document into a ParsedBook without its TOC.

    Raises:
        PackageReadError: The document is not well-formed XML.
    """
    try:
        root = parse_xml(data)
    except ET.ParseError as e:
        raise PackageReadError("Parsing package document failed", e) from e

    book = ParsedBook(rootfile=rootfile)
    book.version = root.attr("version") or DEFAULT_VERSION
    base = dirname_parts(rootfile)

    metadata = root.first("metadata", ignore_case=True)
    if metadata is not None:
        book.metadata = parse_metadata(metadata)

    manifest = root.first("manifest", ignore_case=True)
    if manifest is None:
        return book
    book.manifest = parse_manifest(manifest, base)

    spine = root.first("spine", ignore_case=True)
    if spine is not None:
        book.spine = parse_spine(spine, book.manifest, base)
        book.flow = book.spine.contents

    return book


__all__ = [
    "SINGULAR_FIELDS",
    "parse_metadata",
    "parse_manifest",
    "parse_spine",
    "parse_package",
]
