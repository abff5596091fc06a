"""Lexical scoring of code runs with pygments.

A run is lexed with each candidate lexer. Its score for that lexer is the share
of non-whitespace tokens that are keywords, operators, punctuation, literals or
comments; prose lexes as plain names and scores near zero.
"""

from __future__ import annotations

from dataclasses import dataclass

from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name
from pygments.token import Comment, Keyword, Name, Number, Operator, Punctuation, String

# Tried in order; the first lexer wins ties.
_CANDIDATES = ("javascript", "typescript", "css", "html", "sql", "python", "bash")
_LEXERS: dict[str, Lexer] = {name: get_lexer_by_name(name, stripnl=False) for name in _CANDIDATES}
_SIGNAL_TOKENS = (Keyword, Operator, Punctuation, Number, String, Comment, Name.Builtin)

DEFAULT_GUESS_MINIMUM = 0.5


@dataclass(frozen=True)
class LanguageScore:
    language: str
    confidence: float


def lexical_score(code: str, lexer: Lexer) -> float:
    total = signal = 0
    for token_type, value in lexer.get_tokens(code):
        if not value.strip():
            continue
        total += 1
        if any(token_type in group for group in _SIGNAL_TOKENS):
            signal += 1
    return signal / total if total else 0.0


def best_score(code: str) -> LanguageScore:
    """Score ``code`` against every candidate lexer and keep the best one."""
    best = LanguageScore(_CANDIDATES[0], 0.0)
    for name, lexer in _LEXERS.items():
        score = lexical_score(code, lexer)
        if score > best.confidence:
            best = LanguageScore(name, score)
    return best


def code_confidence(code: str) -> float:
    return best_score(code).confidence


def guess_language(code: str, minimum: float = DEFAULT_GUESS_MINIMUM) -> str | None:
    """Return the best-scoring language, or ``None`` when nothing reaches ``minimum``."""
    if not code.strip():
        return None
    best = best_score(code)
    return best.language if best.confidence >= minimum else None
