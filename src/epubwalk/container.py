"""
Container descriptor lookup.

Reads ``META-INF/container.xml`` and returns the package document paths it
declares. See https://www.w3.org/TR/epub-33/#sec-container-metainf
"""

from __future__ import annotations

import logging
from xml.etree import ElementTree as ET

from .archive import READ_ERRORS, Archive
from .errors import (
    ContainerMissing,
    ContainerParseError,
    ContainerReadError,
    EmptyRootfileList,
    RootfileFormatInvalid,
    RootfileNotFound,
    RootfilesMissing,
)
from .xmltree import Node, parse_xml

logger = logging.getLogger(__name__)

CONTAINER_PATH = "meta-inf/container.xml"
PACKAGE_MEDIA_TYPE = "application/oebps-package+xml"


def _attr(node: Node, name: str) -> str | None:
    # Container attribute names are matched without regard to case
    for key, value in node.attributes.items():
        if key.lower() == name:
            return value
    return None


def _candidate(node: Node) -> str | None:
    """Return the trimmed full-path of a usable rootfile, else None."""
    media_type = (_attr(node, "media-type") or "").strip().lower()
    full_path = (_attr(node, "full-path") or "").strip()
    if media_type != PACKAGE_MEDIA_TYPE or not full_path:
        return None
    return full_path


def find_rootfiles(archive: Archive) -> list[str]:
    """Return the package document paths declared by the container.

    Paths are kept in declaration order and filtered down to entries that
    exist in the archive; callers treat the first one as canonical.

    Raises:
        ContainerMissing: No container descriptor in the archive.
        ContainerReadError: The descriptor could not be read.
        ContainerParseError: The descriptor is not well-formed XML.
        RootfilesMissing: No ``rootfiles/rootfile`` element.
        RootfileFormatInvalid: A lone rootfile lacks media-type/full-path.
        EmptyRootfileList: No rootfile qualified as a package document.
        RootfileNotFound: No declared path exists in the archive.
    """
    container_name = archive.find(CONTAINER_PATH, ignore_case=True)
    if container_name is None:
        raise ContainerMissing("No container file in archive")

    try:
        data = archive.read(container_name)
    except READ_ERRORS as e:
        raise ContainerReadError("Reading archive container failed", e) from e

    try:
        root = parse_xml(data)
    except ET.ParseError as e:
        raise ContainerParseError("Parsing container XML failed", e) from e

    rootfiles = root.first("rootfiles", ignore_case=True)
    rootfile = rootfiles.get("rootfile", ignore_case=True) if rootfiles is not None else None
    if rootfile is None:
        raise RootfilesMissing("No rootfiles found")

    filenames: list[str] = []
    if isinstance(rootfile, list):
        for node in rootfile:
            path = _candidate(node)
            if path:
                filenames.append(path)
    else:
        path = _candidate(rootfile)
        if path is None:
            raise RootfileFormatInvalid("Rootfile in unknown format")
        filenames.append(path)

    if not filenames:
        raise EmptyRootfileList("Empty rootfile")

    valid = [name for name in filenames if name in archive]
    if not valid:
        raise RootfileNotFound("Rootfile not found from archive")

    logger.debug(f"Found rootfiles: {valid}")
    return valid


__all__ = ["CONTAINER_PATH", "PACKAGE_MEDIA_TYPE", "find_rootfiles"]
