"""
EPUB inspector
Metadata, reading order, table of contents and rewritten chapters.
"""

import argparse
import logging
import sys
from pathlib import Path

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from . import __version__
from .errors import EpubError
from .helpers import Config, ManifestItem
from .parsing import EpubReader


def setup_logging(verbose: bool) -> None:
    """Route library logging through rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def print_metadata(reader: EpubReader, console: Console) -> None:
    table = Table(title="Metadata", box=box.SIMPLE, header_style="bold magenta")
    table.add_column("Field", style="bold cyan")
    table.add_column("Value")

    table.add_row("rootfile", escape(reader.rootfile))
    table.add_row("version", escape(reader.version))
    for key, value in reader.metadata.as_dict().items():
        table.add_row(escape(key), escape(str(value)))
    console.print(table)


def print_manifest(reader: EpubReader, console: Console) -> None:
    table = Table(title="Manifest", box=box.SIMPLE, header_style="bold magenta")
    table.add_column("Id", style="bold cyan")
    table.add_column("Href")
    table.add_column("Media type", style="dim")

    for item in reader.manifest.values():
        table.add_row(escape(item.id), escape(item.href), escape(item.media_type))
    console.print(table)


def print_spine(reader: EpubReader, console: Console) -> None:
    toc = reader.spine.toc
    table = Table(
        title=f"Spine (toc: {escape(toc.id) if toc else 'none'})",
        box=box.SIMPLE,
        header_style="bold magenta",
    )
    table.add_column("#", style="dim", justify="right")
    table.add_column("Id", style="bold cyan")
    table.add_column("Href")

    for idx, item in enumerate(reader.flow, 1):
        table.add_row(str(idx), escape(item.id), escape(item.href))
    console.print(table)


def print_toc(reader: EpubReader, console: Console) -> None:
    if not reader.toc:
        console.print("[yellow]No table of contents.[/yellow]")
        return

    table = Table(
        title="Table of Contents", box=box.SIMPLE, header_style="bold magenta"
    )
    table.add_column("Order", style="dim", justify="right")
    table.add_column("Title")
    table.add_column("Id", style="bold cyan")
    table.add_column("Href", style="dim")

    for entry in reader.toc:
        indent = "  " * (entry.level or 0)
        manifest_marker = "" if isinstance(entry, ManifestItem) else " [dim](extra)[/dim]"
        table.add_row(
            str(entry.order),
            f"{indent}{escape(entry.title or '')}",
            escape(entry.id) + manifest_marker,
            escape(entry.href),
        )
    console.print(table)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="epubwalk",
        description="Inspect EPUB metadata, spine, table of contents and chapters.",
    )
    parser.add_argument("input", type=Path, help="EPUB file")
    parser.add_argument(
        "--manifest", action="store_true", help="List every manifest resource"
    )
    parser.add_argument(
        "--spine", action="store_true", help="Show the reading order"
    )
    parser.add_argument(
        "--toc", action="store_true", help="Show the table of contents"
    )
    parser.add_argument(
        "-c",
        "--chapter",
        metavar="ID",
        help="Print the rewritten markup of the chapter with this manifest id",
    )
    parser.add_argument(
        "--text",
        action="store_true",
        help="With --chapter, print plain-text paragraphs instead of markup",
    )
    parser.add_argument(
        "--image-root",
        default=None,
        help="URL prefix for rewritten image sources (default: /images/)",
    )
    parser.add_argument(
        "--link-root",
        default=None,
        help="URL prefix for rewritten internal links (default: /links/)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Show debug logs"
    )
    parser.add_argument(
        "-d", "--debug", action="store_true", help="Show full exception tracebacks"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Show version information and exit",
    )

    args = parser.parse_args(argv)
    if args.text and not args.chapter:
        parser.error("--text requires --chapter")

    console = Console()
    setup_logging(args.verbose)

    if not args.input.is_file():
        console.print(f"[red]Error: File '{escape(str(args.input))}' does not exist.[/red]")
        return 1

    config = Config(image_root=args.image_root, link_root=args.link_root)
    try:
        with EpubReader(args.input, config) as reader:
            reader.parse()

            if args.chapter:
                if args.text:
                    for paragraph in reader.get_chapter_text(args.chapter):
                        console.print(escape(paragraph))
                        console.print()
                else:
                    console.print(
                        reader.get_chapter(args.chapter), markup=False, soft_wrap=True
                    )
                return 0

            print_metadata(reader, console)
            if args.manifest:
                print_manifest(reader, console)
            if args.spine:
                print_spine(reader, console)
            if args.toc:
                print_toc(reader, console)
    except EpubError as e:
        console.print(f"[red]Error reading {escape(args.input.name)}: {escape(str(e))}[/red]")
        if args.debug:
            import traceback

            console.print(traceback.format_exc(), markup=False)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
