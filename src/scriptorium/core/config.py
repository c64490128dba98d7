import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from scriptorium.core.options import FlavoredOptions, RenderOptions

CONFIG_FILENAME = ".scriptorium.toml"


def _deep_merge(destination: dict[str, Any], source: dict[str, Any]) -> dict[str, Any]:
    """Merge source into destination, with source values overwriting."""
    for key, value in source.items():
        if isinstance(value, Mapping) and key in destination and isinstance(destination[key], Mapping):
            destination[key] = _deep_merge(dict(destination[key]), dict(value))
        else:
            destination[key] = value
    return destination


class MarkdownSettings(BaseModel):
    """Site-wide defaults for markdown rendering."""

    tables: bool = Field(default=False, description="Parse GFM tables")
    breaks: bool = Field(default=False, description="Convert newlines to <br />")
    default_highlight_language: str | None = Field(
        default=None, description="Language for untagged code blocks"
    )
    sanitize: bool = Field(default=False, description="Escape raw HTML in posts")
    smarty_pants: bool = Field(default=False, description="Typographic quotes and dashes")

    def to_options(self) -> RenderOptions:
        return RenderOptions(
            flavored=FlavoredOptions(tables=self.tables, breaks=self.breaks),
            default_highlight_language=self.default_highlight_language,
            sanitize=self.sanitize,
            smarty_pants=self.smarty_pants,
        )


class SiteSettings(BaseModel):
    """Static layout settings shared by every page."""

    name: str = Field(default="Scriptorium", description="Site name shown in the header")
    base_url: str = Field(default="/", description="Link target of the header")
    stylesheets: list[str] = Field(
        default_factory=lambda: ["/static/css/main.css", "/static/css/highlight.css"],
        description="Stylesheets linked from every page",
    )
    font_stylesheet: str = Field(
        default="https://fonts.googleapis.com/css?family=Merriweather:400,700|Open+Sans:400,700",
        description="Web font stylesheet",
    )
    twitter_base_url: str = Field(default="https://twitter.com", description="Prefix for author links")


class PathsSettings(BaseModel):
    """Path configuration.

    All paths are relative to the 'site_root' unless absolute.
    site_root defaults to current working directory.
    """

    site_root: Path = Field(
        default_factory=Path.cwd,
        description="Root directory of the site (defaults to current working directory)",
    )

    posts_dir: Path = Field(default=Path("posts"), description="Markdown posts directory")
    output_dir: Path = Field(default=Path("public"), description="Rendered HTML directory")
    authors_file: Path = Field(default=Path("authors.yml"), description="Author table (YAML)")

    @property
    def abs_posts_dir(self) -> Path:
        return self._resolve(self.posts_dir)

    @property
    def abs_output_dir(self) -> Path:
        return self._resolve(self.output_dir)

    @property
    def abs_authors_file(self) -> Path:
        return self._resolve(self.authors_file)

    def _resolve(self, path: Path) -> Path:
        if path.is_absolute():
            return path
        return self.site_root / path


class ScriptoriumConfig(BaseSettings):
    """Root configuration for Scriptorium.

    Supports environment variable overrides with the pattern:
    SCRIPTORIUM_SECTION__KEY (e.g., SCRIPTORIUM_MARKDOWN__SANITIZE)
    """

    markdown: MarkdownSettings = Field(default_factory=MarkdownSettings)
    site: SiteSettings = Field(default_factory=SiteSettings)
    paths: PathsSettings = Field(default_factory=PathsSettings)

    model_config = SettingsConfigDict(
        extra="ignore",
        env_prefix="SCRIPTORIUM_",
        env_nested_delimiter="__",
    )

    @classmethod
    def load(cls, site_root: Path | None = None) -> "ScriptoriumConfig":
        """Loads configuration from .scriptorium.toml and environment variables.

        Priority (highest to lowest):
        1. Environment variables (SCRIPTORIUM_SECTION__KEY)
        2. Config file (.scriptorium.toml)
        3. Defaults
        """
        root_path = site_root if site_root is not None else Path.cwd()
        config_file = root_path / CONFIG_FILENAME

        file_settings: dict[str, Any] = {}
        if config_file.is_file():
            with config_file.open("rb") as f:
                file_settings = tomllib.load(f)

        env_settings = cls().model_dump(exclude_unset=True)

        merged_config = _deep_merge(file_settings, env_settings)
        merged_config.setdefault("paths", {})["site_root"] = root_path

        return cls.model_validate(merged_config)
