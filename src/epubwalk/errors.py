"""
Error taxonomy for EPUB parsing.

Every failure raised by the parsing pipeline or the retrieval methods is an
EpubError subclass. The underlying exception, when there is one, is kept on
``cause`` and chained with ``raise ... from``.
"""


class EpubError(Exception):
    """Base class for all epubwalk errors."""

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}, {self.cause}"
        return self.message


# --- Archive ---


class ArchiveInvalid(EpubError):
    """The file could not be opened as a ZIP archive."""


class EmptyArchive(EpubError):
    """The archive contains no entries."""


# --- Mimetype ---


class MimetypeMissing(EpubError):
    """No ``mimetype`` entry in the archive."""


class MimetypeReadError(EpubError):
    pass


class UnsupportedMimetype(EpubError):
    pass


# --- Container ---


class ContainerMissing(EpubError):
    """No ``META-INF/container.xml`` entry in the archive."""


class ContainerReadError(EpubError):
    pass


class ContainerParseError(EpubError):
    pass


class RootfilesMissing(EpubError):
    """The container declares no ``rootfiles/rootfile`` node."""


class RootfileFormatInvalid(EpubError):
    """A single rootfile lacks a package media-type or full-path."""


class EmptyRootfileList(EpubError):
    pass


class RootfileNotFound(EpubError):
    """None of the declared rootfiles exists in the archive."""


# --- Package and navigation documents ---


class PackageReadError(EpubError):
    pass


class NavigationReadError(EpubError):
    pass


# --- Resource retrieval ---


class ResourceNotFound(EpubError):
    """The requested id is not in the manifest."""


class ResourceReadError(EpubError):
    pass


class UnsupportedChapterType(EpubError):
    pass


class UnsupportedImageType(EpubError):
    pass


__all__ = [
    "EpubError",
    "ArchiveInvalid",
    "EmptyArchive",
    "MimetypeMissing",
    "MimetypeReadError",
    "UnsupportedMimetype",
    "ContainerMissing",
    "ContainerReadError",
    "ContainerParseError",
    "RootfilesMissing",
    "RootfileFormatInvalid",
    "EmptyRootfileList",
    "RootfileNotFound",
    "PackageReadError",
    "NavigationReadError",
    "ResourceNotFound",
    "ResourceReadError",
    "UnsupportedChapterType",
    "UnsupportedImageType",
]
