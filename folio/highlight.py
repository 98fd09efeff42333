"""Dependency-free syntax highlighting for code blocks in rendered documents.

Source text is split into classified tokens and emitted as ``<span>`` elements
carrying ``sh__token--<kind>`` classes, one ``sh__line`` span per source line,
so themes can style the output purely with CSS custom properties.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass
from typing import Iterator

KEYWORD = "keyword"
STRING = "string"
COMMENT = "comment"
NUMBER = "number"
CLASS = "class"
PROPERTY = "property"
IDENTIFIER = "identifier"
SIGN = "sign"
SPACE = "space"
BREAK = "break"

_JS_KEYWORDS = frozenset(
    """
    as async await break case catch class const continue debugger default delete do
    else enum export extends false finally for from function get if implements import
    in instanceof interface let new null of return set static super switch this throw
    true try type typeof undefined var void while with yield
    """.split()
)
_PYTHON_KEYWORDS = frozenset(
    """
    False None True and as assert async await break case class continue def del elif
    else except finally for from global if import in is lambda match nonlocal not or
    pass raise return try while with yield
    """.split()
)
_SHELL_KEYWORDS = frozenset(
    """
    case do done elif else esac export fi for function if in local readonly return
    select then until while
    """.split()
)

_C_COMMENT = r"//[^\n]*|/\*[\s\S]*?(?:\*/|$)"
_HASH_COMMENT = r"#[^\n]*"
_C_STRING = r"\"(?:\\.|[^\"\\\n])*\"?|'(?:\\.|[^'\\\n])*'?|`(?:\\.|[^`\\])*`?"
_PY_STRING = (
    r"[rRbBuUfF]{0,2}"
    r"(?:\"\"\"[\s\S]*?(?:\"\"\"|$)|'''[\s\S]*?(?:'''|$)"
    r"|\"(?:\\.|[^\"\\\n])*\"?|'(?:\\.|[^'\\\n])*'?)"
)
_SHELL_STRING = r"\"(?:\\.|[^\"\\])*\"?|'[^']*'?"
_NUMBER = r"0[xXoObB][0-9a-fA-F_]+|\d[\d_]*(?:\.[\d_]+)?(?:[eE][+-]?\d+)?[njJ]?"
_WORD = r"[A-Za-z_$][\w$]*"


@dataclass(frozen=True, slots=True)
class Token:
    kind: str
    text: str


@dataclass(frozen=True, slots=True)
class LanguageProfile:
    name: str
    keywords: frozenset[str]
    pattern: re.Pattern[str]


def _compile(comment: str, string: str) -> re.Pattern[str]:
    return re.compile(
        rf"(?P<{COMMENT}>{comment})"
        rf"|(?P<{STRING}>{string})"
        rf"|(?P<{NUMBER}>{_NUMBER})"
        rf"|(?P<word>{_WORD})"
        rf"|(?P<{SPACE}>[ \t\r\f\v]+)"
        rf"|(?P<{BREAK}>\n)"
        rf"|(?P<{SIGN}>.)"
    )


_JS = LanguageProfile("javascript", _JS_KEYWORDS, _compile(_C_COMMENT, _C_STRING))
_PYTHON = LanguageProfile("python", _PYTHON_KEYWORDS, _compile(_HASH_COMMENT, _PY_STRING))
_SHELL = LanguageProfile("shell", _SHELL_KEYWORDS, _compile(_HASH_COMMENT, _SHELL_STRING))
_HASH = LanguageProfile("config", frozenset({"true", "false", "null"}), _compile(_HASH_COMMENT, _C_STRING))

_ALIASES: dict[str, LanguageProfile] = {
    **dict.fromkeys(("js", "javascript", "jsx", "mjs", "cjs", "ts", "typescript", "tsx", "json"), _JS),
    **dict.fromkeys(("py", "python", "python3", "pycon"), _PYTHON),
    **dict.fromkeys(("sh", "bash", "shell", "zsh", "console"), _SHELL),
    **dict.fromkeys(("yaml", "yml", "toml", "ini", "dockerfile", "make", "makefile"), _HASH),
}


def resolve_language(language: str | None) -> LanguageProfile:
    """Map a fence info string to a profile; unknown languages use JavaScript rules."""
    if not language:
        return _JS
    return _ALIASES.get(language.strip().lower(), _JS)


def tokenize(code: str, language: str | None = None) -> Iterator[Token]:
    """Split ``code`` into classified tokens covering every input character."""
    profile = resolve_language(language)
    previous_sign = ""
    for match in profile.pattern.finditer(code):
        group = match.lastgroup or SIGN
        text = match.group()
        if group == "word":
            kind = _classify_word(text, profile, previous_sign)
        else:
            kind = group
        if kind not in (SPACE, BREAK):
            previous_sign = text if kind == SIGN else ""
        yield Token(kind, text)


def _classify_word(word: str, profile: LanguageProfile, previous_sign: str) -> str:
    if previous_sign == ".":
        return PROPERTY
    if word in profile.keywords:
        return KEYWORD
    if word[0].isupper():
        return CLASS
    return IDENTIFIER


def highlight(code: str, language: str | None = None) -> str:
    """Return ``code`` as escaped HTML with one span per token and per line."""
    lines: list[list[str]] = [[]]
    for token in tokenize(code, language):
        if token.kind == BREAK:
            lines.append([])
            continue
        pieces = token.text.split("\n")
        for index, piece in enumerate(pieces):
            if index:
                lines.append([])
            if piece:
                lines[-1].append(_render_token(token.kind, piece))

    if len(lines) > 1 and not lines[-1]:
        lines.pop()
    return "\n".join(f'<span class="sh__line">{"".join(parts)}</span>' for parts in lines)


def _render_token(kind: str, text: str) -> str:
    escaped = html.escape(text)
    if kind == SPACE:
        return escaped
    return f'<span class="sh__token--{kind}" style="color: var(--sh-{kind})">{escaped}</span>'
