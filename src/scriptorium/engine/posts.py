"""Blog posts: markdown files with YAML front matter, composed into pages."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any

import frontmatter
import yaml
from pydantic import ValidationError

from scriptorium.core.authors import AuthorTable, get_author, load_authors
from scriptorium.core.exceptions import PostMetadataError, PostNotFoundError
from scriptorium.core.options import RenderOptions, derive_options
from scriptorium.core.rendering import read_source, render, wrap_content
from scriptorium.core.utils import humanize_stem, slugify
from scriptorium.engine.composer import PageComposer

if TYPE_CHECKING:
    from markupsafe import Markup

    from scriptorium.core.config import ScriptoriumConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Post:
    """A markdown post and the metadata read from its front matter.

    Attributes:
        slug: Output file name (without extension)
        title: Page title
        author_key: Key into the author table, if the post names an author
        body: Markdown body with the front matter removed
        options: Render options after front matter overrides
        source: File the post was read from
    """

    slug: str
    title: str
    author_key: str | None
    body: str
    options: RenderOptions
    source: Path | None = None


def _non_string_keys(mapping: dict[Any, Any]) -> list[Any]:
    keys = [key for key in mapping if not isinstance(key, str)]
    for value in mapping.values():
        if isinstance(value, dict):
            keys.extend(_non_string_keys(value))
    return keys


def parse_post(content: str, *, stem: str = "untitled", base_options: RenderOptions | None = None) -> Post:
    """Build a :class:`Post` from markdown text with optional front matter.

    Recognized keys: ``title``, ``slug``, ``author`` and ``render`` (a mapping
    of render option overrides, e.g. ``{sanitize: true, flavored: {tables: true}}``).

    Raises:
        PostMetadataError: If the front matter cannot be parsed or holds invalid values.

    """
    try:
        parsed = frontmatter.loads(content)
    except (yaml.YAMLError, ValueError) as exc:
        raise PostMetadataError(f"Invalid front matter: {exc}") from exc

    metadata: dict[str, Any] = dict(parsed.metadata or {})

    title = str(metadata.get("title") or humanize_stem(stem))
    slug = slugify(str(metadata.get("slug") or title))
    author = metadata.get("author")

    overrides = metadata.get("render") or {}
    if not isinstance(overrides, dict):
        msg = f"Front matter 'render' must be a mapping, got {type(overrides).__name__}"
        raise PostMetadataError(msg)
    bad_keys = _non_string_keys(overrides)
    if bad_keys:
        msg = f"Front matter 'render' keys must be strings, got {bad_keys!r}"
        raise PostMetadataError(msg)
    try:
        options = derive_options(base_options, **overrides)
    except ValidationError as exc:
        raise PostMetadataError(f"Invalid render options in front matter: {exc}") from exc

    return Post(
        slug=slug,
        title=title,
        author_key=str(author) if author else None,
        body=parsed.content,
        options=options,
    )


def load_post(path: Path, base_options: RenderOptions | None = None) -> Post:
    """Read and parse a post file.

    Raises:
        PostNotFoundError: If ``path`` is not an existing file.
        PostEncodingError: If the file is not valid UTF-8.
        PostMetadataError: If the front matter is invalid.

    """
    post = parse_post(read_source(path), stem=path.stem, base_options=base_options)
    return replace(post, source=path)


def compose_post(post: Post, authors: AuthorTable, composer: PageComposer) -> Markup:
    """Render the post body and lay it out as a full page.

    Raises:
        UnknownAuthorError: If the post names an author missing from ``authors``.

    """
    author = get_author(authors, post.author_key) if post.author_key else None
    content = wrap_content(render(post.body, post.options))
    return composer.compose_page(post.title, content, author)


def write_post(post: Post, output_dir: Path, authors: AuthorTable, composer: PageComposer) -> Path:
    """Compose ``post`` and write it to ``<output_dir>/<slug>.html``."""
    html = compose_post(post, authors, composer)

    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / f"{post.slug}.html"
    output_path.write_text(str(html), encoding="utf-8")
    logger.info("Wrote %s -> %s", post.source.name if post.source else post.slug, output_path)
    return output_path


def build_post(
    path: Path,
    output_dir: Path,
    config: ScriptoriumConfig,
    *,
    authors: AuthorTable | None = None,
    composer: PageComposer | None = None,
) -> Path:
    """Render ``path`` and write ``<output_dir>/<slug>.html``.

    Returns:
        The path of the written HTML file.

    """
    authors = authors if authors is not None else load_authors(config.paths.abs_authors_file)
    composer = composer if composer is not None else PageComposer(site=config.site)

    post = load_post(path, base_options=config.markdown.to_options())
    return write_post(post, output_dir, authors, composer)


def build_site(posts_dir: Path, output_dir: Path, config: ScriptoriumConfig) -> list[Path]:
    """Build every ``*.md`` post in ``posts_dir``, sorted by file name.

    All posts are loaded and checked for slug collisions before any file is
    written.

    Raises:
        PostNotFoundError: If ``posts_dir`` does not exist.
        PostMetadataError: If a post is malformed or two posts share a slug.

    """
    if not posts_dir.is_dir():
        raise PostNotFoundError(posts_dir)

    base_options = config.markdown.to_options()
    posts = [load_post(path, base_options=base_options) for path in sorted(posts_dir.glob("*.md"))]

    seen: dict[str, Path | None] = {}
    for post in posts:
        if post.slug in seen:
            msg = f"Posts {seen[post.slug]} and {post.source} both use the slug {post.slug!r}"
            raise PostMetadataError(msg)
        seen[post.slug] = post.source

    authors = load_authors(config.paths.abs_authors_file)
    composer = PageComposer(site=config.site)

    written = [write_post(post, output_dir, authors, composer) for post in posts]
    logger.info("Built %d post(s) into %s", len(written), output_dir)
    return written
