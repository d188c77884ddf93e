"""META-INF/container.xml 解析：列出所有 rootfile（OPF 文件）。"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass

from epubmeta.epub.xmlutil import local_name, parse_xml

CONTAINER_PATH = "META-INF/container.xml"


@dataclass
class RootFile:
    full_path: str     # OPF 在 ZIP 内的完整路径
    base_path: str     # OPF 所在目录，位于归档根目录时为空字符串


def parse_container(doc: str) -> list[RootFile]:
    """按文档顺序返回带 full-path 属性的 rootfile。

    只按本地名匹配 rootfile，不校验 container 命名空间。
    没有任何 rootfile 不算解析错误，由调用方决定如何处理。
    """
    root = parse_xml(doc, CONTAINER_PATH)
    root_files: list[RootFile] = []
    for el in root.iter():
        if local_name(el) != "rootfile":
            continue
        full_path = el.get("full-path")
        if full_path is None:
            continue
        root_files.append(RootFile(full_path=full_path, base_path=posixpath.dirname(full_path)))
    return root_files
