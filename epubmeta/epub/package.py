"""OPF 包文档解析：书名、语言、manifest、spine，以及目录文档的位置。"""

from __future__ import annotations

from dataclasses import dataclass, field

from lxml import etree

from epubmeta.config import ParserConfig
from epubmeta.epub.xmlutil import children, first_child, join_path, parse_xml
from epubmeta.errors import MissingPackageSectionError

DC_NS = "http://purl.org/dc/elements/1.1/"


@dataclass
class PackageDocument:
    title: str
    language: str
    spine: list[str]                        # ZIP 内路径，阅读顺序
    manifest: dict[str, str | None]         # ZIP 内路径 -> media-type
    cover_image_path: str | None = None
    toc_ncx_path: str | None = None
    toc_nav_doc_path: str | None = None
    # id -> ZIP 内路径，仅用于解析 spine / NCX 引用
    manifest_by_id: dict[str, str] = field(default_factory=dict, repr=False)


@dataclass
class _Manifest:
    by_id: dict[str, str] = field(default_factory=dict)
    by_path: dict[str, str | None] = field(default_factory=dict)
    cover_image_path: str | None = None
    toc_nav_doc_path: str | None = None


def parse_package(
    doc: str,
    base_path: str,
    config: ParserConfig | None = None,
    path: str | None = None,
) -> PackageDocument:
    """解析 OPF 文本。所有 href 都以 base_path 为前缀改写为 ZIP 内路径。"""
    config = config or ParserConfig()
    root = parse_xml(doc, path)

    metadata_el = _require_section(root, "metadata")
    title, language = _parse_metadata(metadata_el)

    manifest_el = _require_section(root, "manifest")
    manifest = _parse_manifest(manifest_el, base_path, config)

    spine_el = _require_section(root, "spine")
    spine = [
        manifest.by_id[idref]
        for idref in (itemref.get("idref") for itemref in children(spine_el, "itemref"))
        if idref is not None and idref in manifest.by_id
    ]

    ncx_id = config.ncx_id(spine_el.get("toc"))
    toc_ncx_path = manifest.by_id.get(ncx_id) if ncx_id is not None else None

    return PackageDocument(
        title=title,
        language=language,
        spine=spine,
        manifest=manifest.by_path,
        cover_image_path=manifest.cover_image_path,
        toc_ncx_path=toc_ncx_path,
        toc_nav_doc_path=manifest.toc_nav_doc_path,
        manifest_by_id=manifest.by_id,
    )


# ── 内部工具函数 ────────────────────────────────────────────────────────────


def _require_section(root: etree._Element, name: str) -> etree._Element:
    el = first_child(root, name)
    if el is None:
        raise MissingPackageSectionError(name)
    return el


def _parse_metadata(metadata_el: etree._Element) -> tuple[str, str]:
    # 只取第一个 dc:title，subtitle / fulltitle 等后续标题忽略
    title_el = metadata_el.find(f"{{{DC_NS}}}title")
    language_el = metadata_el.find(f"{{{DC_NS}}}language")
    title = (title_el.text or "").strip() if title_el is not None else ""
    language = (language_el.text or "").strip() if language_el is not None else ""
    return title, language


def _parse_manifest(manifest_el: etree._Element, base_path: str, config: ParserConfig) -> _Manifest:
    manifest = _Manifest()
    for item in children(manifest_el, "item"):
        href = item.get("href")
        item_id = item.get("id")
        properties = item.get("properties")
        abs_path = join_path(base_path, href, config.strip_root_slash) if href is not None else None

        # properties 做整串比较，不按空白拆分
        if properties == "cover-image" and abs_path is not None:
            manifest.cover_image_path = abs_path
        if properties == "nav" and abs_path is not None:
            manifest.toc_nav_doc_path = abs_path

        if item_id is not None and abs_path is not None:
            manifest.by_id[item_id] = abs_path
            manifest.by_path[abs_path] = item.get("media-type")
    return manifest
