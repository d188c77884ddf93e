"""Shared EPUB fixtures.

All EPUBs are built in-memory with zipfile and written to tmp_path;
no binary fixtures are checked in.
"""

import zipfile
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------

CONTAINER_XML = """\
<?xml version="1.0" encoding="UTF-8"?>
<container xmlns="urn:oasis:names:tc:opendocument:xmlns:container" version="1.0">
  <rootfiles>
{rootfiles}
  </rootfiles>
</container>"""

JANE_EYRE_OPF = """\
<?xml version="1.0" encoding="utf-8"?>
<package xmlns="http://www.idpf.org/2007/opf" dir="ltr" unique-identifier="uid" version="3.0" xml:lang="en-US">
    <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
        <dc:identifier id="uid">url:https://standardebooks.org/ebooks/charlotte-bronte/jane-eyre</dc:identifier>
        <dc:title id="title"> Jane Eyre </dc:title>
        <dc:title id="subtitle">An Autobiography</dc:title>
        <dc:title id="fulltitle">Jane Eyre: An Autobiography</dc:title>
        <dc:language> en-GB </dc:language>
    </metadata>
    <manifest>
        <item href="css/core.css" id="core.css" media-type="text/css"/>
        <item href="images/cover.svg" id="cover.svg" media-type="image/svg+xml" properties="cover-image"/>
        <item href="text/chapter-1.xhtml" id="chapter-1.xhtml" media-type="application/xhtml+xml"/>
        <item href="text/endnotes.xhtml" id="endnotes.xhtml" media-type="application/xhtml+xml"/>
        <item href="text/preface.xhtml" id="preface.xhtml" media-type="application/xhtml+xml"/>
        <item href="toc.xhtml" id="toc.xhtml" media-type="application/xhtml+xml" properties="nav"/>
        <item href="toc.ncx" id="ncx" media-type="application/x-dtbncx+xml"/>
    </manifest>
    <spine toc="ncx">
        <itemref idref="preface.xhtml"/>
        <itemref idref="chapter-1.xhtml"/>
        <itemref idref="endnotes.xhtml"/>
    </spine>
</package>"""

NAV_DOC = """\
<?xml version="1.0" encoding="utf-8"?>
<html xmlns="http://www.w3.org/1999/xhtml" xmlns:epub="http://www.idpf.org/2007/ops" xml:lang="en-US">
<head>
    <title>Table of Contents</title>
</head>
<body>
<nav id="toc" epub:type="toc">
    <h2>Table of Contents</h2>
    <ol>
        <li><a href="preface.xhtml">Preface</a></li>
        <li>
            <a href="title-page.xhtml">Jane Eyre</a>
            <ol>
                <li><a href="chapter-1.xhtml">Chapter 1</a></li>
                <li><a href="chapter-2.xhtml"> Chapter 2 </a></li>
                <li><a href="chapter-3.xhtml"><span>Chapter 3 </span></a></li>
                <li><a href="chapter-4.xhtml"> <span> Chapter</span> 4</a></li>
                <li><span><span>Chapter</span> 5</span></li>
            </ol>
        </li>
    </ol>
</nav>
</body>
</html>"""

NCX_DOC = """\
<?xml version="1.0" encoding="UTF-8"?>
<ncx xmlns="http://www.daisy.org/z3986/2005/ncx/" version="2005-1">
  <head/>
  <docTitle><text>Test Book</text></docTitle>
  <navMap>
    <navPoint id="ch_1" playOrder="1">
      <navLabel><text>Chapter 1</text></navLabel>
      <content src="content.html#ch_1"/>
      <navPoint id="ch_1_1" playOrder="2">
        <navLabel><text>Chapter 1.1</text></navLabel>
        <content src="content.html#ch_1_1"/>
      </navPoint>
    </navPoint>
    <navPoint id="ch_2" playOrder="3">
      <navLabel><text>Chapter 2</text></navLabel>
      <content src="content.html#ch_2"/>
    </navPoint>
  </navMap>
</ncx>"""


def build_opf(
    title: str = "Test Book",
    items: list[tuple[str, str, str]] | None = None,
    spine_ids: list[str] | None = None,
    nav_href: str | None = None,
    ncx: tuple[str, str] | None = None,
    spine_toc: str | None = None,
) -> str:
    """Build an OPF package document.

    items: [(id, href, media_type), ...]
    ncx: (id, href) of the NCX manifest item
    """
    if items is None:
        items = [("content", "content.html", "application/xhtml+xml")]
    if spine_ids is None:
        spine_ids = [item_id for item_id, _, _ in items]

    manifest_lines = [f'    <item id="{i}" href="{h}" media-type="{m}"/>' for i, h, m in items]
    if nav_href:
        manifest_lines.append(
            f'    <item id="nav" href="{nav_href}" media-type="application/xhtml+xml" properties="nav"/>'
        )
    if ncx:
        manifest_lines.append(
            f'    <item id="{ncx[0]}" href="{ncx[1]}" media-type="application/x-dtbncx+xml"/>'
        )
    spine_refs = "\n".join(f'    <itemref idref="{i}"/>' for i in spine_ids)
    toc_attr = f' toc="{spine_toc}"' if spine_toc else ""

    return f"""\
<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" xmlns:dc="http://purl.org/dc/elements/1.1/" version="3.0">
  <metadata>
    <dc:title>{title}</dc:title>
    <dc:language>en</dc:language>
  </metadata>
  <manifest>
{chr(10).join(manifest_lines)}
  </manifest>
  <spine{toc_attr}>
{spine_refs}
  </spine>
</package>"""


def build_container(*opf_paths: str) -> str:
    lines = [
        f'    <rootfile full-path="{p}" media-type="application/oebps-package+xml"/>'
        for p in opf_paths
    ]
    return CONTAINER_XML.format(rootfiles="\n".join(lines))


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_epub(tmp_path: Path):
    """Write an EPUB to tmp_path and return its path.

    If `container` is None a container.xml pointing at `opf_path` is added.
    """
    counter = [0]

    def _make(
        files: dict[str, str | bytes],
        opf_path: str = "epub/content.opf",
        container: str | None = None,
    ) -> Path:
        counter[0] += 1
        path = tmp_path / f"book-{counter[0]}.epub"
        with zipfile.ZipFile(path, "w", zipfile.ZIP_DEFLATED) as zf:
            zf.writestr("mimetype", "application/epub+zip")
            zf.writestr("META-INF/container.xml", container or build_container(opf_path))
            for name, content in files.items():
                zf.writestr(name, content)
        return path

    return _make


@pytest.fixture
def epub3_book(make_epub) -> Path:
    """EPUB 3 with both a nav doc and an NCX."""
    return make_epub(
        {
            "epub/content.opf": JANE_EYRE_OPF,
            "epub/toc.xhtml": NAV_DOC,
            "epub/toc.ncx": NCX_DOC,
            "epub/images/cover.svg": b"<svg/>",
            "epub/text/preface.xhtml": "<html/>",
        }
    )


@pytest.fixture
def epub2_book(make_epub) -> Path:
    """EPUB 2 with an NCX only."""
    opf = build_opf(
        title="Test Book",
        items=[("content", "content.html", "application/xhtml+xml")],
        ncx=("ncx", "toc.ncx"),
        spine_toc="ncx",
    )
    return make_epub(
        {
            "OEBPS/content.opf": opf,
            "OEBPS/toc.ncx": NCX_DOC,
            "OEBPS/content.html": "<html><body><h1 id='ch_1'>Chapter 1</h1></body></html>",
        },
        opf_path="OEBPS/content.opf",
    )
