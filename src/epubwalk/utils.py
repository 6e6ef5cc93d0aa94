"""Shared path and text helpers used across the parsing modules."""

from __future__ import annotations

import re
from collections.abc import Sequence


def dirname_parts(path: str) -> list[str]:
    """Split an archive path and drop its last segment.

    ``"OEBPS/content.opf"`` -> ``["OEBPS"]``; a root-level file gives ``[]``.
    """
    return path.split("/")[:-1]


def join_path(reference: str, base: Sequence[str]) -> str:
    """Join ``reference`` onto the ``base`` directory segments with ``/``.

    No ``.``/``..`` normalization is done.
    """
    return "/".join([*base, reference])


def resolve_path(reference: str, base: Sequence[str]) -> str:
    """Resolve ``reference`` relative to ``base`` inside the archive.

    A reference that already starts with the base directory string is
    returned as is. The check is a plain string prefix test, so ``OEBPSx``
    counts as prefixed by ``OEBPS`` and an empty base leaves every
    reference untouched.
    """
    prefix = "/".join(base)
    if reference.startswith(prefix):
        return reference
    return join_path(reference, base)


def clean_text(text: str) -> str:
    """Normalize text and handle encoding issues."""
    text = text.encode("utf-8", errors="replace").decode("utf-8")
    return re.sub(r"\s+", " ", text).strip()


__all__ = ["dirname_parts", "join_path", "resolve_path", "clean_text"]
