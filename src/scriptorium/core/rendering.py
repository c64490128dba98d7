"""Markdown rendering on top of markdown-it-py.

The grammar and the escaping rules belong to markdown-it; this module only
maps :class:`RenderOptions` onto a configured parser and hands back the
result as :class:`markupsafe.Markup`, the trusted-HTML type the page
templates embed without escaping.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING

from markdown_it import MarkdownIt
from markupsafe import Markup

from scriptorium.core.exceptions import PostEncodingError, PostNotFoundError
from scriptorium.core.options import DEFAULT_OPTIONS, RenderOptions

if TYPE_CHECKING:
    from markdown_it.rules_core import StateCore

logger = logging.getLogger(__name__)

HtmlFragment = Markup

CONTENT_WRAPPER = Markup('<div class="post-content">\n{}\n</div>')


def _default_language_rule(language: str):
    """Build a core rule that tags untagged code blocks with ``language``."""

    def default_language(state: StateCore) -> None:
        for token in state.tokens:
            if token.type == "fence" and not token.info.strip():
                token.info = language
            elif token.type == "code_block":
                # Indented blocks have no info string; render them as fences.
                token.type = "fence"
                token.markup = "```"
                token.info = language

    return default_language


@lru_cache(maxsize=32)
def _build_parser(options: RenderOptions) -> MarkdownIt:
    """Return a markdown-it instance configured for ``options``.

    Cached per options value. Instances are never mutated after this returns.
    """
    md = MarkdownIt(
        "commonmark",
        {
            "html": not options.sanitize,
            "breaks": options.breaks,
            "typographer": options.smarty_pants,
        },
    )
    if options.tables:
        md.enable(["table", "strikethrough"])
    if options.smarty_pants:
        md.enable(["replacements", "smartquotes"])
    if options.default_highlight_language:
        md.core.ruler.after(
            "block",
            "default_language",
            _default_language_rule(options.default_highlight_language),
        )
    return md


def render(source: str, options: RenderOptions | None = None) -> HtmlFragment:
    """Render markdown ``source`` to an HTML fragment.

    Args:
        source: Markdown text.
        options: Render options. Defaults to :data:`DEFAULT_OPTIONS`.

    Returns:
        The rendered HTML as :class:`Markup`. When ``options.sanitize`` is
        false, raw HTML from ``source`` passes through untouched and the caller
        is responsible for trusting the input.

    """
    options = options if options is not None else DEFAULT_OPTIONS
    logger.debug("Rendering %d characters of markdown (%s)", len(source), options.summary())
    return Markup(_build_parser(options).render(source).strip())


def wrap_content(fragment: HtmlFragment) -> HtmlFragment:
    """Nest a rendered fragment inside the post content container."""
    return CONTENT_WRAPPER.format(fragment)


def read_source(path: Path | str) -> str:
    """Read a markdown source file as UTF-8 text.

    Raises:
        PostNotFoundError: If ``path`` is not an existing file.
        PostEncodingError: If the file is not valid UTF-8.

    """
    path = Path(path)
    if not path.is_file():
        raise PostNotFoundError(path)
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise PostEncodingError(path, exc.reason) from exc


def render_file(path: Path | str, options: RenderOptions | None = None) -> HtmlFragment:
    """Render a markdown file and wrap the result in the content container.

    Raises:
        PostNotFoundError: If ``path`` is not an existing file.
        PostEncodingError: If the file is not valid UTF-8.

    """
    source = read_source(path)
    logger.debug("Rendering markdown file %s", path)
    return wrap_content(render(source, options))
