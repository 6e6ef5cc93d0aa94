"""
NCX navigation document walking.

Flattens the nested ``navMap/navPoint`` tree into a pre-order list of
entries. An entry whose target matches a manifest item's href *is* that
manifest item: the walk writes ``title``, ``order`` and ``level`` onto the
shared ManifestItem in place, so the same object seen through the spine
carries the navigation fields too.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from xml.etree import ElementTree as ET

from .errors import NavigationReadError
from .helpers import ManifestItem, NavEntry, TocEntry
from .utils import dirname_parts, join_path
from .xmltree import Node, NodeGroup, as_list, parse_xml

logger = logging.getLogger(__name__)

# navPoints nested below this level are dropped without error
MAX_NAV_DEPTH = 7


def _play_order(node: Node) -> int:
    raw = (node.attr("playOrder") or "").strip()
    try:
        order = int(raw) if raw else 0
    except ValueError:
        return 0
    return max(order, 0)


def _nav_entry(
    node: Node,
    base: Sequence[str],
    hrefs: dict[str, str],
    manifest: dict[str, ManifestItem],
    level: int,
) -> NavEntry | None:
    """Build the entry for one navPoint, or None when it has no target."""
    label = node.first("navLabel")
    text = label.first("text") if label is not None else None
    title = text.value if text is not None else ""
    order = _play_order(node)

    content = node.first("content")
    src = (content.attr("src") or "").strip() if content is not None else ""
    if not src:
        return None

    href = join_path(src, base)
    item_id = hrefs.get(href)
    if item_id is not None:
        item = manifest[item_id]
        item.title = title
        item.order = order
        item.level = level
        return item

    return TocEntry(
        id=(node.attr("id") or "").strip(),
        href=href,
        title=title,
        order=order,
        level=level,
    )


def walk_nav_map(
    branch: NodeGroup,
    base: Sequence[str],
    hrefs: dict[str, str],
    manifest: dict[str, ManifestItem],
    level: int = 0,
) -> list[NavEntry]:
    """Recursively flatten a navPoint group.

    Args:
        branch: navPoint node or list of nodes at this level
        base: Directory segments of the navigation document
        hrefs: Reverse index of manifest href -> manifest id
        manifest: Manifest whose items may be merged into
        level: Current depth, 0 for top-level entries

    Returns:
        Entries in document pre-order, parents before children
    """
    if level > MAX_NAV_DEPTH:
        logger.warning(f"Navigation deeper than {MAX_NAV_DEPTH} levels, truncating")
        return []

    output: list[NavEntry] = []
    for node in as_list(branch):
        if node.get("navLabel") is not None:
            entry = _nav_entry(node, base, hrefs, manifest, level)
            if entry is not None:
                output.append(entry)
        children = node.get("navPoint")
        if children is not None:
            output.extend(walk_nav_map(children, base, hrefs, manifest, level + 1))
    return output


def parse_toc(
    data: bytes | str,
    toc_item: ManifestItem,
    manifest: dict[str, ManifestItem],
) -> list[NavEntry]:
    """Parse an NCX document and return its flattened table of contents.

    A document without ``navMap/navPoint`` gives an empty list.

    Raises:
        NavigationReadError: The document is not well-formed XML.
    """
    try:
        root = parse_xml(data)
    except ET.ParseError as e:
        raise NavigationReadError("Parsing navigation document failed", e) from e

    nav_map = root.first("navMap")
    nav_points = nav_map.get("navPoint") if nav_map is not None else None
    if nav_points is None:
        logger.debug(f"No navMap in {toc_item.href}")
        return []

    hrefs = {item.href: item_id for item_id, item in manifest.items()}
    toc = walk_nav_map(nav_points, dirname_parts(toc_item.href), hrefs, manifest)
    logger.debug(f"Table of contents has {len(toc)} entries")
    return toc


__all__ = ["MAX_NAV_DEPTH", "walk_nav_map", "parse_toc"]
