from pathlib import Path

DEFAULT_LANGUAGE = "javascript"

_LANGUAGE_ALIASES = {
    "c#": "csharp",
    "cs": "csharp",
    "csharp": "csharp",
    "c++": "cpp",
    "cpp": "cpp",
    "css": "css",
    "scss": "scss",
    "less": "less",
    "go": "go",
    "golang": "go",
    "htm": "html",
    "html": "html",
    "xml": "xml",
    "svg": "xml",
    "java": "java",
    "javascript": "javascript",
    "js": "javascript",
    "jsx": "jsx",
    "mjs": "javascript",
    "cjs": "javascript",
    "node": "javascript",
    "json": "json",
    "md": "markdown",
    "markdown": "markdown",
    "python": "python",
    "py": "python",
    "sh": "bash",
    "shell": "bash",
    "bash": "bash",
    "sql": "sql",
    "ts": "typescript",
    "tsx": "tsx",
    "typescript": "typescript",
    "yaml": "yaml",
    "yml": "yaml",
    "text": "text",
    "txt": "text",
    "plaintext": "text",
}

_LANGUAGE_DEFAULT_EXTENSIONS = {
    "bash": ".sh",
    "cpp": ".cpp",
    "csharp": ".cs",
    "css": ".css",
    "go": ".go",
    "html": ".html",
    "java": ".java",
    "javascript": ".js",
    "json": ".json",
    "jsx": ".jsx",
    "less": ".less",
    "markdown": ".md",
    "python": ".py",
    "scss": ".scss",
    "sql": ".sql",
    "tsx": ".tsx",
    "typescript": ".ts",
    "xml": ".xml",
    "yaml": ".yml",
}

# Languages the display formatter can pretty-print.
_BEAUTIFIABLE = frozenset({"javascript", "jsx", "typescript", "tsx", "json"})


def normalize_language(language: str | None) -> str:
    """Map a fence tag (``js``, ``C#``, ``yml``...) to a canonical language name.

    Unknown tags are passed through lower-cased so any highlighter can still try them.
    An empty tag means the generic script language.
    """
    if not language or not language.strip():
        return DEFAULT_LANGUAGE
    normalized = language.strip().lower()
    return _LANGUAGE_ALIASES.get(normalized, normalized)


def default_extension(language: str | None) -> str:
    return _LANGUAGE_DEFAULT_EXTENSIONS.get(normalize_language(language), ".txt")


def is_beautifiable(language: str | None) -> bool:
    return normalize_language(language) in _BEAUTIFIABLE


def export_path(directory: Path, language: str | None, stem: str = "code") -> Path:
    """Return a non-clobbering ``<stem>[-n]<ext>`` path inside ``directory``."""
    suffix = default_extension(language)
    candidate = directory / f"{stem}{suffix}"
    index = 1
    while candidate.exists():
        candidate = directory / f"{stem}-{index}{suffix}"
        index += 1
    return candidate
