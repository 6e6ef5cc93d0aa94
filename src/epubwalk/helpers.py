"""Data model shared by the parsing pipeline and the reader."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Union

DEFAULT_IMAGE_ROOT = "/images/"
DEFAULT_LINK_ROOT = "/links/"
DEFAULT_VERSION = "2.0"


def _with_trailing_slash(root: str | None, default: str) -> str:
    root = (root or default).strip()
    if not root.endswith("/"):
        root += "/"
    return root


@dataclass
class Config:
    """Reader configuration.

    ``image_root`` and ``link_root`` are URL prefixes for rewritten chapter
    images and links; both always end with ``/``.
    """

    image_root: str = DEFAULT_IMAGE_ROOT
    link_root: str = DEFAULT_LINK_ROOT

    def __post_init__(self):
        self.image_root = _with_trailing_slash(self.image_root, DEFAULT_IMAGE_ROOT)
        self.link_root = _with_trailing_slash(self.link_root, DEFAULT_LINK_ROOT)


# Flat metadata keys that differ from the dataclass attribute names
_METADATA_KEYS = {
    "creatorFileAs": "creator_file_as",
    "ISBN": "isbn",
    "UUID": "uuid",
}


def _field_name(key: str) -> str | None:
    """Map a flat metadata key to its attribute, None for non-fixed keys."""
    if key in _METADATA_KEYS:
        return _METADATA_KEYS[key]
    if key in _METADATA_KEYS.values() or key == "extra":
        return None
    if key in {f.name for f in fields(PackageMetadata)}:
        return key
    return None


@dataclass
class PackageMetadata:
    """Bibliographic fields from the package document.

    ``extra`` holds values declared through generic ``<meta>`` elements that
    do not share a name with one of the fixed fields.
    """

    title: str | None = None
    creator: str | None = None
    creator_file_as: str | None = None
    publisher: str | None = None
    language: str | None = None
    subject: str | None = None
    description: str | None = None
    date: str | None = None
    isbn: str | None = None
    uuid: str | None = None
    extra: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, values: dict[str, str]) -> PackageMetadata:
        """Build from a flat mapping keyed like ``as_dict`` output."""
        metadata = cls()
        for key, value in values.items():
            name = _field_name(key)
            if name is not None:
                setattr(metadata, name, value)
            else:
                metadata.extra[key] = value
        return metadata

    def as_dict(self) -> dict[str, str]:
        """Flatten to a single mapping, omitting unset fields."""
        reverse = {v: k for k, v in _METADATA_KEYS.items()}
        result = {}
        for f in fields(self):
            if f.name == "extra":
                continue
            value = getattr(self, f.name)
            if value is not None:
                result[reverse.get(f.name, f.name)] = value
        result.update(self.extra)
        return result

    def get(self, key: str, default: str | None = None) -> str | None:
        return self.as_dict().get(key, default)


@dataclass
class ManifestItem:
    """A resource declared in the manifest.

    ``href`` is archive-absolute. ``attributes`` keeps every attribute the
    ``<item>`` element declared, with the original (unresolved) href.
    ``title``, ``order`` and ``level`` stay None until a navigation entry
    pointing at this item is merged into it.
    """

    id: str
    href: str
    media_type: str = ""
    attributes: dict[str, str] = field(default_factory=dict)
    title: str | None = None
    order: int | None = None
    level: int | None = None

    def get(self, name: str, default: str | None = None) -> str | None:
        return self.attributes.get(name, default)


@dataclass
class TocEntry:
    """A navigation entry that matches no manifest item."""

    id: str
    href: str
    title: str = ""
    order: int = 0
    level: int = 0


# A TOC entry is either the shared manifest item or a standalone record
NavEntry = Union[ManifestItem, TocEntry]


@dataclass
class Spine:
    """Reading order. ``toc`` is None when no navigation resource is known."""

    toc: ManifestItem | None = None
    contents: list[ManifestItem] = field(default_factory=list)


@dataclass
class ParsedBook:
    rootfile: str
    version: str = DEFAULT_VERSION
    metadata: PackageMetadata = field(default_factory=PackageMetadata)
    manifest: dict[str, ManifestItem] = field(default_factory=dict)
    spine: Spine = field(default_factory=Spine)
    flow: list[ManifestItem] = field(default_factory=list)
    toc: list[NavEntry] = field(default_factory=list)


__all__ = [
    "DEFAULT_IMAGE_ROOT",
    "DEFAULT_LINK_ROOT",
    "DEFAULT_VERSION",
    "Config",
    "PackageMetadata",
    "ManifestItem",
    "TocEntry",
    "NavEntry",
    "Spine",
    "ParsedBook",
]
