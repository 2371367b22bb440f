"""Markdown to HTML rendering.

Wraps mistune with pygments highlighting for fenced code blocks and
typographic substitutions for prose. Raw HTML in notes passes through.

A MarkdownRenderer holds no per-request state: build one at startup and
hand it to every caller.
"""

import logging
import re
from html import escape

import mistune
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

logger = logging.getLogger(__name__)

DEFAULT_PLUGINS = ("strikethrough", "table", "url")

_REPLACEMENTS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"\(c\)", re.IGNORECASE), "©"),
    (re.compile(r"\(r\)", re.IGNORECASE), "®"),
    (re.compile(r"\(tm\)", re.IGNORECASE), "™"),
    (re.compile(r"\+-"), "±"),
    (re.compile(r"\.{3}"), "…"),
    (re.compile(r"(?<!-)---(?!-)"), "—"),
    (re.compile(r"(?<![-!])--(?![->])"), "–"),
    (re.compile(r'"([^"\n]*)"'), "“\\1”"),
    (re.compile(r"(?<=\w)'(?=\w)"), "’"),
    (re.compile(r"'([^'\n]*)'"), "‘\\1’"),
]


def typographic(text: str) -> str:
    """Apply typographic substitutions (dashes, ellipses, quotes, symbols)."""
    for pattern, replacement in _REPLACEMENTS:
        text = pattern.sub(replacement, text)
    return text


class HighlightRenderer(mistune.HTMLRenderer):
    """HTML renderer with pygments code blocks and smart typography."""

    def __init__(self) -> None:
        super().__init__(escape=False)
        self._formatter = HtmlFormatter(nowrap=True)

    def text(self, text: str) -> str:
        return super().text(typographic(text))

    def block_code(self, code: str, info: str | None = None) -> str:
        lang = info.split(None, 1)[0] if info and info.strip() else None
        lexer = _find_lexer(lang) if lang else None

        if lang and lexer is not None:
            try:
                highlighted = highlight(code, lexer, self._formatter)
            except Exception as e:
                logger.warning(f"Highlighting failed for {lang} block, using plain text: {e}")
            else:
                return (
                    f'<pre><code class="highlight language-{escape(lang)}">'
                    f"{highlighted}</code></pre>\n"
                )

        return f'<pre><code class="highlight">{escape(code, quote=False)}</code></pre>\n'


class MarkdownRenderer:
    """Renders note markdown to HTML."""

    def __init__(self, plugins: tuple[str, ...] = DEFAULT_PLUGINS) -> None:
        """Initialize renderer.

        Args:
            plugins: mistune plugin names to enable
        """
        self._markdown = mistune.create_markdown(
            renderer=HighlightRenderer(),
            plugins=list(plugins),
        )

    def render(self, markdown_text: str) -> str:
        """Render markdown text to HTML.

        Args:
            markdown_text: Markdown source (front matter already removed)

        Returns:
            HTML string
        """
        logger.debug(f"Rendering {len(markdown_text)} characters of markdown")
        html = self._markdown(markdown_text)
        return str(html)


def _find_lexer(lang: str) -> Lexer | None:
    try:
        return get_lexer_by_name(lang)
    except ClassNotFound:
        return None
