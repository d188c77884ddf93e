"""XML 辅助函数：解析、按本地名匹配、文本归一化、路径拼接。

除 Dublin Core 元素外，所有标签都只按本地名（忽略命名空间）匹配。
"""

from __future__ import annotations

import re
from typing import Iterator

from lxml import etree

from epubmeta.errors import MalformedXmlError

_WS_RE = re.compile(r"\s+")


def parse_xml(text: str, path: str | None = None) -> etree._Element:
    """把 UTF-8 文本解析为 lxml 元素树，返回根元素。"""
    # 文本已按 UTF-8 解码，强制解析器使用 UTF-8，忽略文档声明里的编码
    parser = etree.XMLParser(
        encoding="utf-8",
        resolve_entities=False,
        no_network=True,
        remove_comments=True,
        remove_pis=True,
    )
    try:
        return etree.fromstring(text.encode("utf-8"), parser)
    except etree.XMLSyntaxError as exc:
        raise MalformedXmlError(str(exc), path) from exc


def local_name(el: etree._Element) -> str | None:
    """元素的本地名；注释、处理指令等非元素节点返回 None。"""
    if not isinstance(el.tag, str):
        return None
    return etree.QName(el).localname


def children(el: etree._Element, name: str) -> Iterator[etree._Element]:
    """按文档顺序遍历本地名为 name 的直接子元素。"""
    for child in el:
        if local_name(child) == name:
            yield child


def first_child(el: etree._Element, name: str) -> etree._Element | None:
    return next(children(el, name), None)


def collect_text(el: etree._Element) -> str:
    """按深度优先顺序拼接所有后代文本（不含 el 自身的 tail）。"""
    return "".join(el.itertext())


def normalize_ws(text: str) -> str:
    return _WS_RE.sub(" ", text.strip())


def text_norm(el: etree._Element) -> str:
    """拼接后代文本，去掉首尾空白，并把连续空白压缩为单个空格。"""
    return normalize_ws(collect_text(el))


def join_path(base_path: str, href: str, strip_root_slash: bool = False) -> str:
    """将 OPF 目录和相对 href 拼成 ZIP 内路径。

    直接做字符串拼接，不做规范化；base_path 为空时默认得到 "/href"。
    """
    if not base_path and strip_root_slash:
        return href
    return f"{base_path}/{href}"
