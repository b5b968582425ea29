"""Markdown rendering for Quire.

Post bodies are converted with mistune using CommonMark rules plus the
strikethrough, footnotes, table and url plugins. Fenced code blocks that
name a language are highlighted with Pygments.

Key classes:
- MarkdownRenderer: Renders a post body to an HTML fragment.
"""

from __future__ import annotations

import mistune
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

MARKDOWN_PLUGINS = ["strikethrough", "footnotes", "table", "url"]


class _HighlightRenderer(mistune.HTMLRenderer):
    """HTML renderer that keeps inline HTML and highlights fenced code."""

    def __init__(self):
        super().__init__(escape=False)

    def block_code(self, code: str, info: str | None = None) -> str:
        """Render a code block with Pygments syntax highlighting.

        Args:
            code: The code content.
            info: Language identifier (e.g., 'python', 'rust').

        Returns:
            HTML string with highlighted code.
        """
        lang = info.split()[0] if info and info.strip() else ""
        if lang:
            try:
                lexer = get_lexer_by_name(lang, stripall=True)
            except ClassNotFound:
                lexer = None
            if lexer is not None:
                formatter = HtmlFormatter(nowrap=False, cssclass="highlight")
                return highlight(code, lexer, formatter)
        escaped = code.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
        lang_class = f' class="language-{lang}"' if lang else ""
        return f"<pre><code{lang_class}>{escaped}</code></pre>\n"


class MarkdownRenderer:
    """Renders Markdown post bodies to HTML."""

    def render(self, body: str) -> str:
        """Render Markdown content to HTML.

        Args:
            body: Markdown source content.

        Returns:
            Rendered HTML fragment.
        """
        markdown = mistune.create_markdown(
            renderer=_HighlightRenderer(), plugins=MARKDOWN_PLUGINS
        )
        return markdown(body)
