"""目录解析：EPUB 3 nav 文档与 EPUB 2 NCX，两者产出相同的树结构。"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from lxml import etree

from epubmeta.config import ParserConfig
from epubmeta.epub.xmlutil import (
    children,
    collect_text,
    first_child,
    join_path,
    local_name,
    parse_xml,
    text_norm,
)
from epubmeta.errors import NavMapNotFoundError, NavNotFoundError, TopLevelOlMissingError


@dataclass
class TocNode:
    title: str
    href: str | None = None                     # ZIP 内路径，可带 #fragment
    children: list[TocNode] | None = None       # 没有下级目录时为 None


@dataclass
class Toc:
    contents: list[TocNode] = field(default_factory=list)

    def walk(self) -> Iterator[tuple[int, TocNode]]:
        """深度优先遍历，产出 (depth, node)。"""
        stack = [(0, node) for node in reversed(self.contents)]
        while stack:
            depth, node = stack.pop()
            yield depth, node
            if node.children:
                stack.extend((depth + 1, child) for child in reversed(node.children))

    @classmethod
    def from_nav_doc(cls, doc: str, base_path: str, config: ParserConfig | None = None,
                     path: str | None = None) -> Toc:
        return cls(contents=_NavDocParser(base_path, config or ParserConfig()).parse(doc, path))

    @classmethod
    def from_ncx(cls, doc: str, base_path: str, config: ParserConfig | None = None,
                 path: str | None = None) -> Toc:
        return cls(contents=_NcxParser(base_path, config or ParserConfig()).parse(doc, path))


class _NavDocParser:
    """EPUB 3 XHTML nav 文档：nav#toc > ol > li。"""

    def __init__(self, base_path: str, config: ParserConfig) -> None:
        self.base_path = base_path
        self.config = config

    def parse(self, doc: str, path: str | None = None) -> list[TocNode]:
        root = parse_xml(doc, path)
        nav_el = next(
            (el for el in root.iter() if local_name(el) == "nav" and el.get("id") == "toc"),
            None,
        )
        if nav_el is None:
            raise NavNotFoundError()
        ol_el = first_child(nav_el, "ol")
        if ol_el is None:
            raise TopLevelOlMissingError()
        return [self._parse_li(li) for li in children(ol_el, "li")]

    def _parse_li(self, li_el: etree._Element) -> TocNode:
        title, href = "", None
        a_el = first_child(li_el, "a")
        if a_el is not None:
            title = text_norm(a_el)
            raw_href = a_el.get("href")
            if raw_href is not None:
                href = join_path(self.base_path, raw_href, self.config.strip_root_slash)
        else:
            # 无链接的分组标题
            span_el = first_child(li_el, "span")
            if span_el is not None:
                title = text_norm(span_el)

        node_children = None
        ol_el = first_child(li_el, "ol")
        if ol_el is not None:
            node_children = [self._parse_li(li) for li in children(ol_el, "li")]
            if not node_children and not self.config.keep_empty_children:
                node_children = None

        return TocNode(title=title, href=href, children=node_children)


class _NcxParser:
    """EPUB 2 NCX：navMap > navPoint（可嵌套）。"""

    def __init__(self, base_path: str, config: ParserConfig) -> None:
        self.base_path = base_path
        self.config = config

    def parse(self, doc: str, path: str | None = None) -> list[TocNode]:
        root = parse_xml(doc, path)
        nav_map = next((el for el in root.iter() if local_name(el) == "navMap"), None)
        if nav_map is None:
            raise NavMapNotFoundError()
        return [self._parse_nav_point(np) for np in children(nav_map, "navPoint")]

    def _parse_nav_point(self, np_el: etree._Element) -> TocNode:
        title = ""
        label_el = first_child(np_el, "navLabel")
        if label_el is not None:
            text_el = first_child(label_el, "text")
            if text_el is not None:
                # NCX 标题默认保留原始文本，不做空白归一化
                title = text_norm(text_el) if self.config.normalize_ncx_titles else collect_text(text_el)

        href = None
        content_el = first_child(np_el, "content")
        if content_el is not None and content_el.get("src") is not None:
            href = join_path(self.base_path, content_el.get("src"), self.config.strip_root_slash)

        node_children = [self._parse_nav_point(child) for child in children(np_el, "navPoint")]
        return TocNode(title=title, href=href, children=node_children or None)
