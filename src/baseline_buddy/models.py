from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class SegmentKind(str, Enum):
    PROSE = "prose"
    CODE = "code"


class Segment(BaseModel):
    kind: SegmentKind
    content: str
    language: str | None = None
    inline: bool = False

    @classmethod
    def prose(cls, content: str) -> "Segment":
        return cls(kind=SegmentKind.PROSE, content=content)

    @classmethod
    def code(cls, content: str, language: str | None = None, inline: bool = False) -> "Segment":
        return cls(kind=SegmentKind.CODE, content=content, language=language, inline=inline)

    @property
    def is_code(self) -> bool:
        return self.kind is SegmentKind.CODE


class FileAnnotation(BaseModel):
    """Where a suggested snippet applies. Supplied by the caller, never derived from text."""

    model_config = ConfigDict(populate_by_name=True)

    file_path: str | None = Field(default=None, alias="filePath")
    line_number: int | None = Field(default=None, alias="lineNumber", ge=1)

    @property
    def is_empty(self) -> bool:
        return self.file_path is None and self.line_number is None


class Polyfill(FileAnnotation):
    code: str
    explanation: str

    @property
    def annotation(self) -> FileAnnotation:
        return FileAnnotation(file_path=self.file_path, line_number=self.line_number)


class Suggestion(Polyfill):
    original_code: str | None = Field(default=None, alias="originalCode")


class ChatMessage(BaseModel):
    role: Literal["user", "model", "system"]
    content: str


def source_link(repo_url: str, annotation: FileAnnotation) -> str | None:
    """Build a ``blob/HEAD`` link for an annotated file, with a ``#L<n>`` anchor when the line is known."""
    if not annotation.file_path:
        return None
    link = f"{repo_url.rstrip('/')}/blob/HEAD/{annotation.file_path.lstrip('/')}"
    if annotation.line_number:
        link += f"#L{annotation.line_number}"
    return link
