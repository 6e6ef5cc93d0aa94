"""
Archive access layer.

The parser only needs two things from an archive: the flat list of entry
names and a way to read one entry by its exact name. Archive captures that
interface so the pipeline can run against a ZIP file on disk, an in-memory
buffer, or any other container of named blobs.
"""

from __future__ import annotations

import logging
import zipfile
import zlib
from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO

from .errors import ArchiveInvalid

logger = logging.getLogger(__name__)

# Exceptions an entry read may raise: missing name, I/O failure, corrupt or
# truncated member data, encrypted member, unsupported compression method
READ_ERRORS = (
    KeyError,
    OSError,
    EOFError,
    zipfile.BadZipFile,
    zlib.error,
    RuntimeError,
    NotImplementedError,
)


class Archive(ABC):
    """Abstract base class for archive readers.

    Entry names are case-sensitive and unique. ``read`` raises KeyError
    when the name is not present.
    """

    @property
    @abstractmethod
    def names(self) -> tuple[str, ...]:
        """Return every entry name in archive order."""
        pass

    @abstractmethod
    def read(self, name: str) -> bytes:
        """Return the raw bytes of the entry called ``name``."""
        pass

    def find(self, name: str, ignore_case: bool = False) -> str | None:
        """Return the first entry name equal to ``name``.

        With ``ignore_case`` the comparison lowercases the archive side, so
        ``name`` must already be lowercase.
        """
        for entry in self.names:
            candidate = entry.lower() if ignore_case else entry
            if candidate == name:
                return entry
        return None

    def __contains__(self, name: object) -> bool:
        return name in self.names

    def __len__(self) -> int:
        return len(self.names)


class ZipArchive(Archive):
    """Archive backed by ``zipfile``.

    Accepts a filesystem path or a binary file object. Directory entries
    are kept in ``names`` as the ZIP central directory lists them.
    """

    def __init__(self, source: str | Path | BinaryIO):
        try:
            self._zip = zipfile.ZipFile(source, "r")
        except (zipfile.BadZipFile, OSError) as e:
            raise ArchiveInvalid("Invalid/missing file", e) from e
        self._names = tuple(self._zip.namelist())
        logger.debug(f"Opened archive with {len(self._names)} entries")

    @property
    def names(self) -> tuple[str, ...]:
        return self._names

    def read(self, name: str) -> bytes:
        return self._zip.read(name)

    def close(self) -> None:
        self._zip.close()

    def __enter__(self) -> ZipArchive:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


__all__ = ["READ_ERRORS", "Archive", "ZipArchive"]
