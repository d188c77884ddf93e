"""epubmeta: 读取 EPUB 2 / EPUB 3 的书名、manifest、spine、目录与资源。"""

from loguru import logger

from epubmeta.config import ParserConfig
from epubmeta.epub.container import RootFile
from epubmeta.epub.package import PackageDocument
from epubmeta.epub.parser import BookMeta, Parser, open
from epubmeta.epub.toc import Toc, TocNode
from epubmeta.errors import (
    ArchiveCorruptError,
    ArchiveError,
    EntryDecodingError,
    EntryError,
    EntryNotFoundError,
    EpubError,
    EpubErrorCode,
    FileOpenError,
    MalformedXmlError,
    MissingPackageSectionError,
    NavMapNotFoundError,
    NavNotFoundError,
    NoRootFileError,
    NoTocError,
    StructureError,
    TocError,
    TopLevelOlMissingError,
)

# 作为库使用时默认静默，应用可通过 logger.enable("epubmeta") 打开
logger.disable("epubmeta")

__version__ = "0.1.0"

__all__ = [
    "Parser",
    "ParserConfig",
    "BookMeta",
    "PackageDocument",
    "RootFile",
    "Toc",
    "TocNode",
    # errors
    "EpubError",
    "EpubErrorCode",
    "ArchiveError",
    "FileOpenError",
    "ArchiveCorruptError",
    "EntryError",
    "EntryNotFoundError",
    "EntryDecodingError",
    "MalformedXmlError",
    "StructureError",
    "NoRootFileError",
    "MissingPackageSectionError",
    "NoTocError",
    "TocError",
    "NavNotFoundError",
    "TopLevelOlMissingError",
    "NavMapNotFoundError",
]
