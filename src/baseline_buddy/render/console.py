"""Render segments to a terminal with rich: Markdown for prose, a Syntax panel for code."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path

from rich.console import Console, Group, RenderableType
from rich.markdown import Markdown
from rich.panel import Panel
from rich.rule import Rule
from rich.syntax import Syntax

from baseline_buddy.config import RenderConfig
from baseline_buddy.core.detection import guess_language
from baseline_buddy.core.languages import export_path, normalize_language
from baseline_buddy.core.segmenter import Segmenter
from baseline_buddy.models import FileAnnotation, Polyfill, Segment, source_link
from baseline_buddy.render.formatting import format_for_display

_EDITOR_TITLE = "Editor"


def code_stats(content: str) -> str:
    return f"Lines: {len(content.splitlines()) or 1} | Characters: {len(content)}"


def editor_title(annotation: FileAnnotation | None = None, link: str | None = None) -> str:
    if annotation is None or not annotation.file_path:
        return _EDITOR_TITLE
    title = annotation.file_path
    if annotation.line_number:
        title += f":{annotation.line_number}"
    if link:
        return f"[link={link}]{title}[/link]"
    return title


def _inline_markdown(segments: Sequence[Segment]) -> str:
    parts = []
    for segment in segments:
        if segment.is_code:
            fence = "``" if "`" in segment.content else "`"
            parts.append(f"{fence}{segment.content}{fence}")
        else:
            parts.append(segment.content)
    return "".join(parts)


class ConsoleRenderer:
    def __init__(
        self,
        console: Console | None = None,
        config: RenderConfig | None = None,
        segmenter: Segmenter | None = None,
    ) -> None:
        self.console = console or Console()
        self.config = config or RenderConfig()
        self.segmenter = segmenter or Segmenter()

    def code_panel(
        self,
        segment: Segment,
        annotation: FileAnnotation | None = None,
        link: str | None = None,
    ) -> Panel:
        language = normalize_language(segment.language or guess_language(segment.content))
        display = format_for_display(segment.content, language, pretty=self.config.pretty_print)
        syntax = Syntax(
            display,
            language,
            theme=self.config.code_theme,
            line_numbers=self.config.line_numbers,
            word_wrap=True,
        )
        return Panel(
            syntax,
            title=editor_title(annotation, link),
            title_align="left",
            subtitle=f"{code_stats(segment.content)} | {language}",
            subtitle_align="left",
        )

    def renderables(self, segments: Sequence[Segment]) -> list[RenderableType]:
        """Group prose with its inline code spans into Markdown; block code becomes a panel."""
        out: list[RenderableType] = []
        run: list[Segment] = []
        for segment in segments:
            if segment.is_code and not segment.inline:
                if run:
                    out.append(Markdown(_inline_markdown(run)))
                    run = []
                out.append(self.code_panel(segment))
            else:
                run.append(segment)
        if run:
            out.append(Markdown(_inline_markdown(run)))
        return out

    def render_segments(self, segments: Sequence[Segment]) -> None:
        for renderable in self.renderables(segments):
            self.console.print(renderable)

    def render_text(self, text: str) -> list[Segment]:
        segments = self.segmenter.segment(text)
        self.render_segments(segments)
        return segments

    def record_renderable(self, record: Polyfill, repo_url: str | None = None) -> Group:
        annotation = record.annotation
        link = source_link(repo_url, annotation) if repo_url else None
        parts: list[RenderableType] = list(self.renderables(self.segmenter.segment(record.explanation)))
        parts.append(self.code_panel(Segment.code(record.code), annotation=annotation, link=link))
        return Group(*parts)

    def render_records(self, records: Iterable[Polyfill], repo_url: str | None = None) -> int:
        count = 0
        for record in records:
            if count:
                self.console.print(Rule())
            self.console.print(self.record_renderable(record, repo_url))
            count += 1
        return count


def export_code(segment: Segment, directory: Path, stem: str = "code") -> Path:
    """Write a code segment's stored content to ``directory``, named by its language."""
    if not segment.is_code:
        raise ValueError("Only code segments can be exported.")
    directory.mkdir(parents=True, exist_ok=True)
    path = export_path(directory, segment.language, stem)
    path.write_text(segment.content + "\n", encoding="utf-8")
    return path
