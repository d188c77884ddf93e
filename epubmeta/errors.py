"""错误定义。

所有解析错误都继承自 EpubError，并携带一个 EpubErrorCode，
调用方既可以按异常类型捕获，也可以按 code 分类处理。
"""

from __future__ import annotations

from enum import Enum


class EpubErrorCode(str, Enum):
    """标准化错误码，格式：E_CATEGORY_NAME。"""

    # 归档层
    E_FILE_OPEN = "E_FILE_OPEN"
    E_ARCHIVE_CORRUPT = "E_ARCHIVE_CORRUPT"

    # 条目读取
    E_ENTRY_NOT_FOUND = "E_ENTRY_NOT_FOUND"
    E_ENTRY_DECODING = "E_ENTRY_DECODING"

    # XML 解析
    E_MALFORMED_XML = "E_MALFORMED_XML"

    # 结构错误
    E_NO_ROOT_FILE = "E_NO_ROOT_FILE"
    E_MISSING_PACKAGE_SECTION = "E_MISSING_PACKAGE_SECTION"
    E_NO_TOC = "E_NO_TOC"

    # 目录形态错误
    E_NAV_NOT_FOUND = "E_NAV_NOT_FOUND"
    E_TOP_LEVEL_OL_MISSING = "E_TOP_LEVEL_OL_MISSING"
    E_NAV_MAP_NOT_FOUND = "E_NAV_MAP_NOT_FOUND"


class EpubError(Exception):
    """所有 epubmeta 错误的基类。

    Attributes:
        code: 错误码
        message: 可读的错误信息
    """

    def __init__(self, code: EpubErrorCode, message: str):
        self.code = code
        self.message = message
        super().__init__(message)


# ── 归档层 ──────────────────────────────────────────────────────────────────


class ArchiveError(EpubError):
    """打开 EPUB 文件或读取 ZIP 目录失败。"""


class FileOpenError(ArchiveError):
    def __init__(self, path: str, reason: str = ""):
        self.path = path
        message = f"无法打开文件：{path}"
        if reason:
            message = f"{message}（{reason}）"
        super().__init__(EpubErrorCode.E_FILE_OPEN, message)


class ArchiveCorruptError(ArchiveError):
    def __init__(self, path: str, reason: str = ""):
        self.path = path
        message = f"ZIP 归档损坏：{path}"
        if reason:
            message = f"{message}（{reason}）"
        super().__init__(EpubErrorCode.E_ARCHIVE_CORRUPT, message)


# ── 条目读取 ────────────────────────────────────────────────────────────────


class EntryError(EpubError):
    """读取归档内条目失败。"""

    def __init__(self, code: EpubErrorCode, path: str, message: str):
        self.path = path
        super().__init__(code, message)


class EntryNotFoundError(EntryError):
    def __init__(self, path: str):
        super().__init__(EpubErrorCode.E_ENTRY_NOT_FOUND, path, f"归档中不存在条目：{path}")


class EntryDecodingError(EntryError):
    def __init__(self, path: str):
        super().__init__(EpubErrorCode.E_ENTRY_DECODING, path, f"条目不是合法的 UTF-8 文本：{path}")


# ── XML ─────────────────────────────────────────────────────────────────────


class MalformedXmlError(EpubError):
    def __init__(self, reason: str, path: str | None = None):
        self.path = path
        where = f"{path}: " if path else ""
        super().__init__(EpubErrorCode.E_MALFORMED_XML, f"XML 解析失败：{where}{reason}")


# ── 结构错误 ────────────────────────────────────────────────────────────────


class StructureError(EpubError):
    """EPUB 缺少构建元数据所必需的结构。"""


class NoRootFileError(StructureError):
    def __init__(self):
        super().__init__(EpubErrorCode.E_NO_ROOT_FILE, "container.xml 中未找到 `rootfile` 元素")


class MissingPackageSectionError(StructureError):
    def __init__(self, section: str):
        self.section = section
        super().__init__(EpubErrorCode.E_MISSING_PACKAGE_SECTION, f"OPF 中缺少 `{section}` 节点")


class NoTocError(StructureError):
    def __init__(self):
        super().__init__(EpubErrorCode.E_NO_TOC, "OPF 未声明 nav 文档或 NCX 目录")


# ── 目录形态错误 ────────────────────────────────────────────────────────────


class TocError(EpubError):
    """目录文档结构不符合预期。"""


class NavNotFoundError(TocError):
    def __init__(self):
        super().__init__(EpubErrorCode.E_NAV_NOT_FOUND, "未找到 `nav(id=toc)` 节点")


class TopLevelOlMissingError(TocError):
    def __init__(self):
        super().__init__(EpubErrorCode.E_TOP_LEVEL_OL_MISSING, "`nav(id=toc)` 下未找到顶层 `ol` 节点")


class NavMapNotFoundError(TocError):
    def __init__(self):
        super().__init__(EpubErrorCode.E_NAV_MAP_NOT_FOUND, "NCX 中未找到 `navMap` 节点")
