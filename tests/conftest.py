"""Pytest configuration and shared fixtures."""

import io
import zipfile

import pytest
from pathlib import Path

# Ensure the src directory is in the path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from epubwalk.archive import Archive  # noqa: E402


CONTAINER_XML = """<?xml version="1.0" encoding="UTF-8"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="OEBPS/content.opf" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>
"""

CONTENT_OPF = """<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf"
         xmlns:dc="http://purl.org/dc/elements/1.1/"
         xmlns:opf="http://www.idpf.org/2007/opf"
         version="2.0" unique-identifier="uuid_id">
  <metadata>
    <dc:title>  The Sample Book </dc:title>
    <dc:creator opf:file-as="Doe, Jane">Jane Doe</dc:creator>
    <dc:language>EN-US</dc:language>
    <dc:identifier id="uuid_id">urn:uuid:12345678-abcd-ef00-0000-000000000000</dc:identifier>
    <dc:identifier opf:scheme="ISBN">978-3-16-148410-0</dc:identifier>
    <dc:publisher>Sample Press</dc:publisher>
    <dc:date>2020-01-01</dc:date>
    <meta name="cover" content="cover-img"/>
  </metadata>
  <manifest>
    <item id="ncx" href="toc.ncx" media-type="application/x-dtbncx+xml"/>
    <item id="chap1" href="chap1.xhtml" media-type="application/xhtml+xml"/>
    <item id="chap2" href="chap2.xhtml" media-type="application/xhtml+xml"/>
    <item id="cover-img" href="images/cover.png" media-type="image/png"/>
    <item id="css" href="style.css" media-type="text/css"/>
  </manifest>
  <spine toc="ncx">
    <itemref idref="chap1"/>
    <itemref idref="missing"/>
    <itemref idref="chap2"/>
  </spine>
</package>
"""

TOC_NCX = """<?xml version="1.0" encoding="UTF-8"?>
<ncx xmlns="http://www.daisy.org/z3986/2005/ncx/" version="2005-1">
  <head/>
  <docTitle><text>The Sample Book</text></docTitle>
  <navMap>
    <navPoint id="np1" playOrder="1">
      <navLabel><text> Chapter One </text></navLabel>
      <content src="chap1.xhtml"/>
      <navPoint id="np1a" playOrder="2">
        <navLabel><text>Section 1.1</text></navLabel>
        <content src="chap1.xhtml#s1"/>
      </navPoint>
    </navPoint>
    <navPoint id="np2" playOrder="3">
      <navLabel><text>Chapter Two</text></navLabel>
      <content src="chap2.xhtml"/>
    </navPoint>
  </navMap>
</ncx>
"""

CHAPTER_1 = """<?xml version="1.0" encoding="UTF-8"?>
<html xmlns="http://www.w3.org/1999/xhtml">
<head>
  <title>Chapter One</title>
  <link rel="stylesheet" href="style.css" type="text/css"/>
</head>
<body class="chapter">
  <h1>Chapter One</h1>
  <script type="text/javascript">alert(1)</script>
  <p onclick="steal()">It was a dark night.</p>
  <img src="images/cover.png" alt="cover"/>
  <p>See <a href="chap2.xhtml#part2">the next chapter</a>.</p>
</body>
</html>
"""

CHAPTER_2 = """<html xmlns="http://www.w3.org/1999/xhtml">
<body><h1>Chapter Two</h1><p>The end.</p></body>
</html>
"""

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake"


def build_epub(files: dict, mimetype: str | None = "application/epub+zip") -> io.BytesIO:
    """Build an EPUB-shaped ZIP in memory.

    ``files`` maps entry names to str or bytes content. The mimetype entry
    is written first unless ``mimetype`` is None.
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        if mimetype is not None:
            zf.writestr("mimetype", mimetype)
        for name, content in files.items():
            zf.writestr(name, content)
    buffer.seek(0)
    return buffer


def sample_files() -> dict:
    return {
        "META-INF/container.xml": CONTAINER_XML,
        "OEBPS/content.opf": CONTENT_OPF,
        "OEBPS/toc.ncx": TOC_NCX,
        "OEBPS/chap1.xhtml": CHAPTER_1,
        "OEBPS/chap2.xhtml": CHAPTER_2,
        "OEBPS/images/cover.png": PNG_BYTES,
        "OEBPS/style.css": "p { color: red; }",
    }


class DictArchive(Archive):
    """In-memory archive keyed by entry name."""

    def __init__(self, files: dict):
        self.files = {
            name: content.encode("utf-8") if isinstance(content, str) else content
            for name, content in files.items()
        }

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self.files)

    def read(self, name: str) -> bytes:
        return self.files[name]


@pytest.fixture
def sample_epub() -> io.BytesIO:
    """A small, valid EPUB 2 book as an in-memory ZIP."""
    return build_epub(sample_files())


@pytest.fixture
def sample_epub_path(tmp_path, sample_epub) -> Path:
    """The sample book written to disk."""
    path = tmp_path / "sample.epub"
    path.write_bytes(sample_epub.getvalue())
    return path
