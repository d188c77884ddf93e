"""ZIP 归档读取：按归档内路径读取条目文本或字节。"""

from __future__ import annotations

import zipfile
import zlib
from pathlib import Path

from loguru import logger

from epubmeta.errors import (
    ArchiveCorruptError,
    EntryDecodingError,
    EntryNotFoundError,
    FileOpenError,
)


class ZipArchive:
    """对 zipfile.ZipFile 的薄封装，持有底层文件句柄。

    路径与 ZIP 中央目录中存储的名字精确匹配，不做任何规范化。
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        try:
            self._zf = zipfile.ZipFile(self.path, "r")
        except zipfile.BadZipFile as exc:
            raise ArchiveCorruptError(str(self.path), str(exc)) from exc
        except OSError as exc:
            raise FileOpenError(str(self.path), exc.strerror or str(exc)) from exc
        logger.debug("opened {} ({} entries)", self.path.name, len(self._zf.infolist()))

    def names(self) -> list[str]:
        return self._zf.namelist()

    def __contains__(self, path: str) -> bool:
        try:
            self._zf.getinfo(path)
        except KeyError:
            return False
        return True

    def read_bytes(self, path: str) -> bytes:
        """读取条目原始字节。"""
        try:
            return self._zf.read(path)
        except KeyError as exc:
            raise EntryNotFoundError(path) from exc
        # 压缩流损坏时 zlib 报 error，截断时报 EOFError
        except (zipfile.BadZipFile, zipfile.LargeZipFile, NotImplementedError, zlib.error, EOFError) as exc:
            raise ArchiveCorruptError(str(self.path), f"{path}: {exc}") from exc

    def read_text(self, path: str) -> str:
        """读取条目并按 UTF-8 解码。"""
        data = self.read_bytes(path)
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise EntryDecodingError(path) from exc

    def close(self) -> None:
        self._zf.close()

    def __enter__(self) -> ZipArchive:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
