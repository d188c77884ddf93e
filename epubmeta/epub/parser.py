"""EPUB 元数据解析入口：open → meta → resource。

流程：
  1. 读取 META-INF/container.xml，取第一个 rootfile
  2. 解析 OPF，得到书名、manifest、spine 以及目录文档位置
  3. 优先解析 nav 文档，其次 NCX，都没有则报错
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path

from loguru import logger

from epubmeta.config import ParserConfig
from epubmeta.epub.archive import ZipArchive
from epubmeta.epub.container import CONTAINER_PATH, RootFile, parse_container
from epubmeta.epub.package import PackageDocument, parse_package
from epubmeta.epub.toc import Toc
from epubmeta.errors import NoRootFileError, NoTocError


@dataclass
class BookMeta:
    title: str
    manifest: dict[str, str | None]    # ZIP 内路径 -> media-type
    spine: list[str]                   # 阅读顺序
    toc: Toc

    def to_dict(self) -> dict:
        return asdict(self)

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)


class Parser:
    """持有打开的 EPUB 归档。

    同一个 Parser 不可重入，跨线程使用需要调用方自行加锁。
    """

    def __init__(self, epub_path: str | Path, config: ParserConfig | None = None) -> None:
        self.config = config or ParserConfig()
        self.archive = ZipArchive(epub_path)

    def root_files(self) -> list[RootFile]:
        return parse_container(self.archive.read_text(CONTAINER_PATH))

    def package(self) -> tuple[RootFile, PackageDocument]:
        """解析第一个 rootfile 指向的 OPF。"""
        root_files = self.root_files()
        if not root_files:
            raise NoRootFileError()
        if len(root_files) > 1:
            logger.debug("container lists {} rootfiles, using {}", len(root_files), root_files[0].full_path)

        root_file = root_files[0]
        opf_text = self.archive.read_text(root_file.full_path)
        pkg_doc = parse_package(opf_text, root_file.base_path, self.config, path=root_file.full_path)
        logger.debug(
            "opf {}  manifest={} spine={} nav={} ncx={}",
            root_file.full_path, len(pkg_doc.manifest), len(pkg_doc.spine),
            pkg_doc.toc_nav_doc_path, pkg_doc.toc_ncx_path,
        )
        return root_file, pkg_doc

    def meta(self) -> BookMeta:
        """解析 EPUB，返回书名、manifest、spine 与目录。"""
        root_file, pkg_doc = self.package()

        # nav 文档无条件优先，不检查 OPF 版本
        if pkg_doc.toc_nav_doc_path is not None:
            doc = self.archive.read_text(self._entry_name(pkg_doc.toc_nav_doc_path))
            toc = Toc.from_nav_doc(doc, root_file.base_path, self.config, path=pkg_doc.toc_nav_doc_path)
        elif pkg_doc.toc_ncx_path is not None:
            doc = self.archive.read_text(self._entry_name(pkg_doc.toc_ncx_path))
            toc = Toc.from_ncx(doc, root_file.base_path, self.config, path=pkg_doc.toc_ncx_path)
        else:
            raise NoTocError()
        logger.debug("toc  top-level entries={}", len(toc.contents))

        return BookMeta(
            title=pkg_doc.title,
            manifest=pkg_doc.manifest,
            spine=pkg_doc.spine,
            toc=toc,
        )

    def resource(self, path: str) -> bytes:
        """按 ZIP 内路径读取资源原始字节。

        接受 meta() 返回的路径，包括 OPF 位于根目录时带前导 "/" 的形式。
        """
        return self.archive.read_bytes(self._entry_name(path))

    def cover(self) -> bytes | None:
        """读取 OPF 中 properties="cover-image" 声明的封面，未声明时返回 None。"""
        _, pkg_doc = self.package()
        if pkg_doc.cover_image_path is None:
            return None
        return self.archive.read_bytes(self._entry_name(pkg_doc.cover_image_path))

    def names(self) -> list[str]:
        return self.archive.names()

    def _entry_name(self, path: str) -> str:
        # OPF 位于根目录时路径形如 "/href"，而 ZIP 条目名没有前导 "/"
        if path.startswith("/") and path not in self.archive and path[1:] in self.archive:
            return path[1:]
        return path

    def close(self) -> None:
        self.archive.close()

    def __enter__(self) -> Parser:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def open(epub_path: str | Path, config: ParserConfig | None = None) -> Parser:
    """打开 EPUB 文件。"""
    return Parser(epub_path, config)
