"""解析器配置模型。"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ParserConfig:
    # spine@toc 只认字面量 "ncx"；开启后按 EPUB 2 规范把它当作 manifest id 查找
    strict_ncx_lookup: bool = False

    # OPF 位于归档根目录时路径形如 "/href"；开启后去掉前导 "/"
    strip_root_slash: bool = False

    # NCX 标题默认保留原始文本；开启后与 nav 文档一样做空白归一化
    normalize_ncx_titles: bool = False

    # nav 文档中空的 <ol> 默认视为没有子节点（None）；开启后保留为 []
    keep_empty_children: bool = False

    def ncx_id(self, spine_toc: str | None) -> str | None:
        """根据 spine@toc 的值决定去 manifest 中查找的 id。"""
        if spine_toc is None:
            return None
        if self.strict_ncx_lookup:
            return spine_toc
        return spine_toc if spine_toc == "ncx" else None
