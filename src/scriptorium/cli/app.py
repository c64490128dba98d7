from dataclasses import replace
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from scriptorium.core.authors import load_authors
from scriptorium.core.config import ScriptoriumConfig
from scriptorium.core.exceptions import ScriptoriumError
from scriptorium.core.logging import configure_logging
from scriptorium.core.options import derive_options
from scriptorium.engine.composer import PageComposer
from scriptorium.engine.posts import build_site, compose_post, load_post

app = typer.Typer(name="scriptorium", help="Scriptorium - render markdown posts into blog pages")

console = Console()


def _load_config(ctx: typer.Context) -> ScriptoriumConfig:
    return ScriptoriumConfig.load(ctx.obj["site_root"])


def _fail(exc: ScriptoriumError) -> typer.Exit:
    console.print(f"[bold red]Error:[/] {escape(str(exc))}")
    return typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    site_root: Path = typer.Option(None, "--site-root", help="Site root holding .scriptorium.toml."),
    log_level: str = typer.Option(None, "--log-level", help="Logging level (default: SCRIPTORIUM_LOG_LEVEL or INFO)."),
):
    """
    Render markdown posts into static blog pages.
    """
    configure_logging(log_level)
    ctx.obj = {"site_root": site_root or Path.cwd()}


@app.command()
def render(
    ctx: typer.Context,
    source: Path = typer.Argument(..., help="Markdown file to render."),
    title: str = typer.Option(None, "--title", help="Page title (defaults to the front matter title)."),
    author: str = typer.Option(None, "--author", help="Author key from the authors file."),
    out: Path = typer.Option(None, "--out", help="Write the page here instead of stdout."),
    sanitize: Optional[bool] = typer.Option(None, "--sanitize/--no-sanitize", help="Escape raw HTML."),
    tables: Optional[bool] = typer.Option(None, "--tables/--no-tables", help="Parse GFM tables."),
    breaks: Optional[bool] = typer.Option(None, "--breaks/--no-breaks", help="Turn newlines into <br />."),
    smarty_pants: Optional[bool] = typer.Option(None, "--smarty-pants/--no-smarty-pants", help="Typographic quotes and dashes."),
    lang: str = typer.Option(None, "--lang", help="Language for untagged code blocks."),
):
    """
    Render a single markdown file into a full page.
    """
    config = _load_config(ctx)

    overrides: dict[str, Any] = {}
    flavored = {key: value for key, value in (("tables", tables), ("breaks", breaks)) if value is not None}
    if flavored:
        overrides["flavored"] = flavored
    if sanitize is not None:
        overrides["sanitize"] = sanitize
    if smarty_pants is not None:
        overrides["smarty_pants"] = smarty_pants
    if lang:
        overrides["default_highlight_language"] = lang

    try:
        post = load_post(source, base_options=config.markdown.to_options())
        post = replace(
            post,
            title=title or post.title,
            author_key=author or post.author_key,
            options=derive_options(post.options, **overrides),
        )
        authors = load_authors(config.paths.abs_authors_file)
        html = compose_post(post, authors, PageComposer(site=config.site))
    except ScriptoriumError as exc:
        raise _fail(exc) from exc

    if out is None:
        typer.echo(str(html))
        return

    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(str(html), encoding="utf-8")
    console.print(f"✅ Wrote [bold]{out}[/bold]")


@app.command()
def build(
    ctx: typer.Context,
    posts_dir: Path = typer.Argument(None, help="Directory of markdown posts (default: paths.posts_dir)."),
    out: Path = typer.Option(None, "--out", help="Output directory (default: paths.output_dir)."),
):
    """
    Build every markdown post in a directory.
    """
    config = _load_config(ctx)
    posts_dir = posts_dir or config.paths.abs_posts_dir
    out = out or config.paths.abs_output_dir

    try:
        written = build_site(posts_dir, out, config)
    except ScriptoriumError as exc:
        raise _fail(exc) from exc

    console.print(f"✅ Built {len(written)} post(s) into [bold]{out}[/bold]")


@app.command()
def authors(ctx: typer.Context):
    """
    List the configured authors.
    """
    config = _load_config(ctx)
    try:
        table_data = load_authors(config.paths.abs_authors_file)
    except ScriptoriumError as exc:
        raise _fail(exc) from exc

    if not table_data:
        console.print(f"👤 No authors found in {config.paths.abs_authors_file}")
        return

    table = Table(title="Authors")
    table.add_column("Key", style="bold cyan")
    table.add_column("Name", style="green")
    table.add_column("Twitter")
    table.add_column("Image", style="dim")

    for key, author in table_data.items():
        table.add_row(key, author.full_name, author.twitter_handle, author.image_url)

    console.print(table)


if __name__ == "__main__":
    app()
