"""epubmeta CLI 入口。

命令：
  epubmeta meta <epub>              查看书名、spine 与目录（--json 输出 JSON）
  epubmeta resource <epub> <path>   导出归档内任意资源
  epubmeta cover <epub>             导出封面图片
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import NoReturn, Optional

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

import epubmeta
from epubmeta.config import ParserConfig
from epubmeta.epub.toc import TocNode
from epubmeta.errors import EpubError

app = typer.Typer(
    name="epubmeta",
    help="epubmeta: EPUB 元数据与资源查看工具",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)


def _setup_logging(verbose: bool) -> None:
    # 移除 loguru 默认的 stderr handler，改为通过 Rich Console 输出
    logger.remove()
    logger.add(
        lambda msg: err_console.log(msg, end=""),
        format="<green>{time:HH:mm:ss}</green> | <level>{level:<7}</level> | {message}",
        level="DEBUG" if verbose else "WARNING",
        colorize=True,
    )
    logger.enable("epubmeta")


def _fail(e: EpubError) -> NoReturn:
    err_console.print(f"[red]{e.code.value}[/red] {escape(e.message)}")
    raise typer.Exit(1)


def _write_output(data: bytes, output: Optional[Path]) -> None:
    if output is None:
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()
    else:
        output.write_bytes(data)
        err_console.print(f"[green]✓[/green] {len(data)} bytes → {output}")


@app.command()
def meta(
    epub: Path = typer.Argument(..., help="输入 EPUB 文件路径", exists=True, dir_okay=False),
    as_json: bool = typer.Option(False, "--json", help="以 JSON 输出"),
    strict_ncx: bool = typer.Option(False, "--strict-ncx", help="把 spine@toc 当作 manifest id 查找 NCX"),
    strip_root_slash: bool = typer.Option(False, "--strip-root-slash", help="OPF 位于根目录时去掉路径前导 /"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="输出调试日志"),
) -> None:
    """查看 EPUB 的书名、spine 与目录。"""
    _setup_logging(verbose)
    config = ParserConfig(strict_ncx_lookup=strict_ncx, strip_root_slash=strip_root_slash)

    try:
        with epubmeta.open(epub, config) as parser:
            book = parser.meta()
    except EpubError as e:
        _fail(e)

    if as_json:
        typer.echo(book.to_json(indent=2))
        return

    console.print(f"\n[bold]{escape(book.title) or '(无标题)'}[/bold]")
    console.print(f"  manifest：{len(book.manifest)} 项  spine：{len(book.spine)} 项\n")

    table = Table(title="Spine", show_header=True)
    table.add_column("#", style="dim", width=4)
    table.add_column("路径", style="cyan")
    table.add_column("类型", style="white")
    for idx, path in enumerate(book.spine, 1):
        table.add_row(str(idx), path, book.manifest.get(path) or "")
    console.print(table)

    tree = Tree("[bold]目录[/bold]")
    _add_toc_nodes(tree, book.toc.contents)
    console.print(tree)


@app.command()
def resource(
    epub: Path = typer.Argument(..., help="输入 EPUB 文件路径", exists=True, dir_okay=False),
    path: str = typer.Argument(..., help="归档内路径（如 OEBPS/images/cover.jpg）"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="输出文件（默认写到 stdout）"),
    strip_root_slash: bool = typer.Option(False, "--strip-root-slash", help="OPF 位于根目录时去掉路径前导 /"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="输出调试日志"),
) -> None:
    """导出归档内任意资源的原始字节。"""
    _setup_logging(verbose)
    try:
        with epubmeta.open(epub, ParserConfig(strip_root_slash=strip_root_slash)) as parser:
            data = parser.resource(path)
    except EpubError as e:
        _fail(e)
    _write_output(data, output)


@app.command()
def cover(
    epub: Path = typer.Argument(..., help="输入 EPUB 文件路径", exists=True, dir_okay=False),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="输出文件（默认写到 stdout）"),
    strip_root_slash: bool = typer.Option(False, "--strip-root-slash", help="OPF 位于根目录时去掉路径前导 /"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="输出调试日志"),
) -> None:
    """导出 OPF 中声明的封面图片。"""
    _setup_logging(verbose)
    try:
        with epubmeta.open(epub, ParserConfig(strip_root_slash=strip_root_slash)) as parser:
            data = parser.cover()
    except EpubError as e:
        _fail(e)
    if data is None:
        err_console.print("[yellow]OPF 未声明封面图片（properties=\"cover-image\"）[/yellow]")
        raise typer.Exit(1)
    _write_output(data, output)


def _add_toc_nodes(branch: Tree, nodes: list[TocNode]) -> None:
    for node in nodes:
        label = escape(node.title) if node.title else "[dim](无标题)[/dim]"
        if node.href:
            label = f"{label}  [dim]{escape(node.href)}[/dim]"
        child = branch.add(label)
        if node.children:
            _add_toc_nodes(child, node.children)
