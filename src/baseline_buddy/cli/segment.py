import json
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from baseline_buddy.config import RenderConfig, SegmenterConfig
from baseline_buddy.core.segmenter import Segmenter
from baseline_buddy.render.console import ConsoleRenderer, export_code

console = Console()


def build_segmenter() -> Segmenter:
    try:
        return Segmenter(config=SegmenterConfig.from_env())
    except ValueError as exc:
        console.print(f"[red]Invalid configuration:[/red] {exc}")
        raise typer.Exit(1) from None


def build_renderer(segmenter: Segmenter) -> ConsoleRenderer:
    try:
        return ConsoleRenderer(console, RenderConfig.from_env(), segmenter)
    except ValueError as exc:
        console.print(f"[red]Invalid configuration:[/red] {exc}")
        raise typer.Exit(1) from None


def read_source(path: str | None, text: str | None) -> str:
    if text is not None:
        return text
    if path is None:
        console.print("[red]Provide a file path, '-' for stdin, or --text.[/red]")
        raise typer.Exit(1)
    if path == "-":
        return typer.get_text_stream("stdin").read()
    try:
        return Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        console.print(f"[red]File not found:[/red] {path}")
        raise typer.Exit(1) from None
    except UnicodeDecodeError:
        console.print(f"[red]Not a UTF-8 text file:[/red] {path}")
        raise typer.Exit(1) from None


def segment(
    path: Annotated[str | None, typer.Argument(help="Text file to segment, or '-' to read stdin.")] = None,
    text: Annotated[str | None, typer.Option(help="Text to segment instead of a file.")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print the segments as JSON.")] = False,
    export_dir: Annotated[Path | None, typer.Option(help="Also write every code block to this directory.")] = None,
) -> None:
    """Split text into prose and code segments and render them."""
    source = read_source(path, text)
    segmenter = build_segmenter()
    segments = segmenter.segment(source)

    if as_json:
        typer.echo(json.dumps([s.model_dump(mode="json") for s in segments], indent=2))
    else:
        build_renderer(segmenter).render_segments(segments)

    if export_dir is not None:
        for index, seg in enumerate(s for s in segments if s.is_code and not s.inline):
            written = export_code(seg, export_dir, stem=f"code-{index + 1}")
            console.print(f"[green]Exported[/green] {written}")
