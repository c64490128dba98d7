"""Scriptorium: markdown posts rendered into static blog pages."""

from scriptorium.core.authors import Author, build_author_table, get_author, load_authors
from scriptorium.core.options import FlavoredOptions, RenderOptions, derive_options
from scriptorium.core.rendering import HtmlFragment, render, render_file
from scriptorium.engine.composer import PageComposer, compose_page

__version__ = "0.1.0"
__all__ = [
    "Author",
    "FlavoredOptions",
    "HtmlFragment",
    "PageComposer",
    "RenderOptions",
    "build_author_table",
    "compose_page",
    "derive_options",
    "get_author",
    "load_authors",
    "render",
    "render_file",
]
