import json
from pathlib import Path
from typing import Annotated, Any

import typer
from pydantic import TypeAdapter, ValidationError
from rich.console import Console

from baseline_buddy.cli.segment import build_renderer, build_segmenter
from baseline_buddy.models import Suggestion

console = Console()

_RECORDS = TypeAdapter(list[Suggestion])


def _collect_records(payload: Any) -> list[Any]:
    """Accept a bare list or an analysis object with ``suggestions`` and/or ``polyfills`` lists."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        records: list[Any] = []
        for key in ("suggestions", "polyfills"):
            value = payload.get(key)
            if isinstance(value, dict):
                value = value.get(key)
            if isinstance(value, list):
                records.extend(value)
        return records
    raise ValueError("expected a list of records or an object with 'suggestions'/'polyfills'")


def load_records(path: Path) -> list[Suggestion]:
    payload = json.loads(path.read_text(encoding="utf-8"))
    return _RECORDS.validate_python(_collect_records(payload))


def suggestions(
    path: Annotated[Path, typer.Argument(help="JSON file with suggestion or polyfill records.")],
    repo_url: Annotated[str | None, typer.Option(help="Repository URL used to link annotated files.")] = None,
) -> None:
    """Render suggestion/polyfill records: explanation as prose, snippet as an annotated code block."""
    try:
        records = load_records(path)
    except FileNotFoundError:
        console.print(f"[red]File not found:[/red] {path}")
        raise typer.Exit(1) from None
    except (json.JSONDecodeError, ValidationError, ValueError) as exc:
        console.print(f"[red]Invalid records file:[/red] {exc}")
        raise typer.Exit(1) from None

    if not records:
        console.print("(0 records)")
        return

    renderer = build_renderer(build_segmenter())
    count = renderer.render_records(records, repo_url)
    console.print(f"({count} records)")
