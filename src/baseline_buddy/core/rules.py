"""Static line-classification rules, grouped by source dialect.

The table is built once (``DEFAULT_RULES``) and handed to the segmenter. Every
pattern is matched against a single, already stripped line.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum


class Signal(str, Enum):
    CODE_START = "code-start"
    CODE_CONTINUATION = "code-continuation"
    COMMENT = "comment"
    NATURAL_LANGUAGE = "natural-language"
    SHORT_TEXT = "short-text"


class Dialect(str, Enum):
    SCRIPT = "script"
    MARKUP = "markup"
    STYLESHEET = "stylesheet"
    QUERY = "query"
    COMMENT = "comment"
    NATURAL_LANGUAGE = "natural-language"


@dataclass(frozen=True)
class ClassificationRule:
    name: str
    pattern: re.Pattern[str]
    signal: Signal
    dialect: Dialect
    in_code_only: bool = False
    """Only applies while a code run is open (e.g. ``#`` comments vs. Markdown headings)."""

    def matches(self, line: str) -> bool:
        return self.pattern.search(line) is not None


@dataclass(frozen=True)
class BlockCommentMarker:
    opener: str
    closer: str


def rule(
    name: str,
    pattern: str,
    signal: Signal,
    dialect: Dialect,
    *,
    flags: int = 0,
    in_code_only: bool = False,
) -> ClassificationRule:
    return ClassificationRule(name, re.compile(pattern, flags), signal, dialect, in_code_only)


@dataclass(frozen=True)
class RuleSet:
    rules: tuple[ClassificationRule, ...]
    block_comments: tuple[BlockCommentMarker, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        names = [r.name for r in self.rules]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate rule names: {duplicates}")

    def __iter__(self) -> Iterator[ClassificationRule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def by_signal(self, *signals: Signal) -> tuple[ClassificationRule, ...]:
        return tuple(r for r in self.rules if r.signal in signals)

    def by_dialect(self, dialect: Dialect) -> tuple[ClassificationRule, ...]:
        return tuple(r for r in self.rules if r.dialect is dialect)

    def first_match(self, line: str, signals: Iterable[Signal], in_code_run: bool = False) -> ClassificationRule | None:
        wanted = set(signals)
        for r in self.rules:
            if r.signal not in wanted:
                continue
            if r.in_code_only and not in_code_run:
                continue
            if r.matches(line):
                return r
        return None


_CS = Signal.CODE_START
_CC = Signal.CODE_CONTINUATION

_EXPORT = r"(?:export\s+(?:default\s+)?)?"

_SCRIPT_RULES = (
    rule(
        "variable-declaration",
        r"^" + _EXPORT + r"(?:const|let|var)\s+(?:[\w$]+\s*(?:[=;,:]|$)|[\[{])",
        _CS,
        Dialect.SCRIPT,
    ),
    rule(
        "function-declaration",
        r"^" + _EXPORT + r"(?:async\s+)?function\b\s*\*?\s*[\w$]*\s*\(",
        _CS,
        Dialect.SCRIPT,
    ),
    rule(
        "class-declaration",
        r"^" + _EXPORT + r"(?:abstract\s+)?class\s+[\w$]+(?:\s+extends\s+[\w$.]+)?\s*(?:\{|$)",
        _CS,
        Dialect.SCRIPT,
    ),
    rule(
        "type-declaration",
        r"^" + _EXPORT + r"(?:(?:interface|enum)\s+[\w$]+(?:<[^>]*>)?\s*(?:extends\s+[^{]+)?\{|type\s+[\w$]+(?:<[^>]*>)?\s*=)",
        _CS,
        Dialect.SCRIPT,
    ),
    rule("import-statement", r"^import\s+(?:[\w$*{][^'\"]*\s+from\s+)?['\"]|^import\s*\(", _CS, Dialect.SCRIPT),
    rule("export-statement", r"^export\s+(?:\*|\{|default\b)|^(?:module\.exports|exports\.[\w$]+)\s*=", _CS, Dialect.SCRIPT),
    rule("python-definition", r"^(?:async\s+)?def\s+\w+\s*\(|^from\s+[\w.]+\s+import\s+\S", _CS, Dialect.SCRIPT),
    rule("control-flow", r"^(?:if|for|while|switch|catch|with)\s*\(|^else\s+if\s*\(", _CS, Dialect.SCRIPT),
    rule("block-keyword", r"^(?:else|try|finally|do)\s*(?:\{.*)?$", _CS, Dialect.SCRIPT),
    rule("bare-jump", r"^(?:return|break|continue|debugger);?$", _CS, Dialect.SCRIPT),
    rule("async-call", r"^(?:await|async)\s+[\w$.]+\s*\(", _CS, Dialect.SCRIPT),
    rule(
        "global-object-access",
        r"^(?:console|document|window|navigator|JSON|Math|Object|Array|Promise|Reflect|Intl|Number|String|Symbol"
        r"|localStorage|sessionStorage|location|history|process|globalThis|this)\.[\w$]",
        _CS,
        Dialect.SCRIPT,
    ),
    rule(
        "global-function-call",
        r"^(?:fetch|setTimeout|setInterval|clearTimeout|clearInterval|requestAnimationFrame|queueMicrotask"
        r"|require|alert|confirm|structuredClone)\s*\(",
        _CS,
        Dialect.SCRIPT,
    ),
    rule("constructor-call", r"^new\s+[A-Z][\w$]*(?:\.[\w$]+)*\s*\(", _CS, Dialect.SCRIPT),
    rule(
        "assignment",
        r"^[\w$]+(?:\.[\w$]+|\[[^\]]*\])*\s*(?:[-+*/%]|\*\*|\|\||&&|\?\?)?=(?!=)\s*\S",
        _CS,
        Dialect.SCRIPT,
    ),
    rule("call-statement", r"^[\w$]+(?:\.[\w$]+)*\(.*\);?$", _CS, Dialect.SCRIPT),
    rule("statement-punctuation", r"[{}(;]$|[\w$]\(.*\)$", _CS, Dialect.SCRIPT),
)

_MARKUP_RULES = (
    rule("doctype", r"^<!DOCTYPE\b|^<\?xml\b", _CS, Dialect.MARKUP, flags=re.IGNORECASE),
    rule("open-tag", r"^<[a-zA-Z][\w:.-]*(?:\s[^<>]*)?/?>", _CS, Dialect.MARKUP),
    rule(
        "open-tag-continued",
        r"^<[a-zA-Z][\w:.-]*(?:\s+[\w:@.-]+(?:=(?:\"[^\"]*\"|'[^']*'|\{[^}]*\}|[^\s>\"'{][^\s>]*))?)*\s*$",
        _CS,
        Dialect.MARKUP,
    ),
    rule("close-tag", r"^</[a-zA-Z][\w:.-]*\s*>", _CS, Dialect.MARKUP),
)

_STYLESHEET_RULES = (
    rule("class-or-id-selector", r"^[.#][\w-][^{}]*\{\s*\}?$", _CS, Dialect.STYLESHEET),
    rule(
        "element-selector",
        r"^[a-z*][\w-]*(?:(?:::?|[.#])[\w-]+(?:\([^)]*\))?)*(?:(?:\s*[,>+~]\s*|\s+)[.#a-z*][\w:.#()-]*)*\s*\{\s*$",
        _CS,
        Dialect.STYLESHEET,
    ),
    rule(
        "at-rule",
        r"^@(?:media|keyframes|import|font-face|supports|charset|layer|container|page|namespace)\b",
        _CS,
        Dialect.STYLESHEET,
        flags=re.IGNORECASE,
    ),
    rule("declaration", r"^-{0,2}[a-z][\w-]*\s*:\s*[^;]+;$", _CS, Dialect.STYLESHEET),
)

# Upper-case only: "Update your browser" and "select an option" are prose.
_QUERY_RULES = (
    rule(
        "query-statement",
        r"^(?:SELECT|INSERT\s+INTO|UPDATE|DELETE\s+FROM|WITH"
        r"|(?:CREATE|DROP)\s+(?:TABLE|INDEX|VIEW|DATABASE)|ALTER\s+TABLE)\s+",
        _CS,
        Dialect.QUERY,
    ),
    rule(
        "query-clause",
        r"^(?:FROM|WHERE|(?:(?:INNER|LEFT|RIGHT|FULL|CROSS)\s+)?JOIN|GROUP\s+BY|ORDER\s+BY|HAVING|LIMIT|VALUES|SET|UNION)\b",
        _CS,
        Dialect.QUERY,
    ),
)

_COMMENT_RULES = (
    rule("line-comment", r"^//", Signal.COMMENT, Dialect.COMMENT),
    rule("inline-block-comment", r"^/\*.*\*/$", Signal.COMMENT, Dialect.COMMENT),
    rule("markup-comment", r"^<!--.*-->$", Signal.COMMENT, Dialect.COMMENT),
    rule("shebang", r"^#!", Signal.COMMENT, Dialect.COMMENT),
    rule("block-comment-close", r"^\*/", Signal.COMMENT, Dialect.COMMENT),
    # "## Heading" is Markdown even right after code.
    rule("hash-comment", r"^#(?!#+\s)", Signal.COMMENT, Dialect.COMMENT, in_code_only=True),
)

_CONTINUATION_RULES = (
    rule("closing-brace-clause", r"^\}\s*(?:else|catch|finally|while|for)\b", _CC, Dialect.SCRIPT),
    rule("leading-punctuation", r"^[=:;)\]}]", _CC, Dialect.SCRIPT),
    rule("leading-operator", r"^(?:=>|&&|\|\||\?\?|\?)\s*\S", _CC, Dialect.SCRIPT),
    rule("chained-call", r"^\.[\w$]+(?:\.[\w$]+)*\s*(?:\(|;|$)", _CC, Dialect.SCRIPT),
    rule(
        "object-property",
        r"^['\"]?[\w$-]+['\"]?\s*:\s*(?:['\"`\[{(]|-?\d[\d._]*\s*,?$|(?:true|false|null|undefined)\b"
        r"|(?:function|async|new)\b|[\w$.]+\s*,?$)",
        _CC,
        Dialect.SCRIPT,
    ),
)

_NATURAL_LANGUAGE_RULES = (
    rule(
        "discourse-opener",
        r"^(?:this|the|here(?:'s)?|in|when|you|we|it|they|there|these|those|that|note|remember|important|warning"
        r"|tip|consider|keep in mind|for example|for instance|such as|like|including|please|could you|can you"
        r"|would you|help me|i need|i want|i|my|our|your|also|however|therefore|and|but|so|first|then|finally"
        r"|next|to)\b",
        Signal.NATURAL_LANGUAGE,
        Dialect.NATURAL_LANGUAGE,
        flags=re.IGNORECASE,
    ),
    rule(
        "descriptive-verb",
        r"^(?:explains?|shows?|demonstrates?|checks?|uses?|calls?|returns?|handles?|provides?|creates?"
        r"|implements?|allows?|enables?|supports?)\b",
        Signal.NATURAL_LANGUAGE,
        Dialect.NATURAL_LANGUAGE,
        flags=re.IGNORECASE,
    ),
    rule(
        "sentence",
        r"^[A-Z][a-z']+(?:\s+[\w'’,()-]+){3,}[.!?:]$",
        Signal.NATURAL_LANGUAGE,
        Dialect.NATURAL_LANGUAGE,
    ),
)

_SHORT_TEXT_RULES = (
    rule(
        "interrogative",
        r"^(?:what|how|why|when|where|which|who|whom|whose|can|could|would|should|is|are|does|do|did|will)\b",
        Signal.SHORT_TEXT,
        Dialect.NATURAL_LANGUAGE,
        flags=re.IGNORECASE,
    ),
    rule("question-mark", r"\?$", Signal.SHORT_TEXT, Dialect.NATURAL_LANGUAGE),
    rule(
        "greeting",
        r"^(?:hello|hi|hey|hye|greetings|good\s+(?:morning|afternoon|evening)|thanks|thank\s+you"
        r"|what'?s\s+up|how\s+are\s+you)\b",
        Signal.SHORT_TEXT,
        Dialect.NATURAL_LANGUAGE,
        flags=re.IGNORECASE,
    ),
    rule(
        "command",
        r"^(?:explain|describe|tell\s+me|show\s+me|help|please|summari[sz]e|ok|okay|yes|no|sure|alright"
        r"|got\s+it|understood|start|end|done)\b[\w\s']*[.:!]?$",
        Signal.SHORT_TEXT,
        Dialect.NATURAL_LANGUAGE,
        flags=re.IGNORECASE,
    ),
)

DEFAULT_BLOCK_COMMENTS = (
    BlockCommentMarker("/*", "*/"),
    BlockCommentMarker("<!--", "-->"),
)

DEFAULT_RULES = RuleSet(
    rules=(
        *_COMMENT_RULES,
        *_SCRIPT_RULES,
        *_MARKUP_RULES,
        *_STYLESHEET_RULES,
        *_QUERY_RULES,
        *_CONTINUATION_RULES,
        *_NATURAL_LANGUAGE_RULES,
        *_SHORT_TEXT_RULES,
    ),
    block_comments=DEFAULT_BLOCK_COMMENTS,
)
