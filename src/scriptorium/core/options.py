"""Render options for the markdown pipeline.

Options are frozen pydantic models: they are built once, never mutated, and
hashable so a configured parser can be cached per distinct value. Derived
values come from :func:`derive_options`, which copies a base and replaces the
requested fields.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class FlavoredOptions(BaseModel):
    """Extended markdown toggles (GFM tables, newline to ``<br />``)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    tables: bool = Field(default=False, description="Parse GFM tables and strikethrough")
    breaks: bool = Field(default=False, description="Convert single newlines into <br />")


class RenderOptions(BaseModel):
    """Configuration for a single markdown render call."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    flavored: FlavoredOptions | None = Field(default_factory=FlavoredOptions)
    default_highlight_language: str | None = Field(
        default=None,
        description="Language assigned to code blocks that carry no language tag",
    )
    sanitize: bool = Field(default=False, description="Escape raw HTML found in the source")
    smarty_pants: bool = Field(default=False, description="Typographic quotes and dashes")

    @property
    def tables(self) -> bool:
        return self.flavored is not None and self.flavored.tables

    @property
    def breaks(self) -> bool:
        return self.flavored is not None and self.flavored.breaks

    def summary(self) -> str:
        """Short human-readable description used in log messages."""
        enabled = [
            name
            for name, on in (
                ("tables", self.tables),
                ("breaks", self.breaks),
                ("sanitize", self.sanitize),
                ("smarty_pants", self.smarty_pants),
            )
            if on
        ]
        if self.default_highlight_language:
            enabled.append(f"lang={self.default_highlight_language}")
        return ", ".join(enabled) or "defaults"


DEFAULT_OPTIONS = RenderOptions()


def derive_options(base: RenderOptions | None = None, **overrides: Any) -> RenderOptions:
    """Return a new :class:`RenderOptions` with ``overrides`` applied over ``base``.

    Args:
        base: Options to start from. Defaults to :data:`DEFAULT_OPTIONS`.
        **overrides: Top-level fields to replace. ``flavored`` may be a
            :class:`FlavoredOptions` (replaces the base value) or a mapping
            (merged over the base's flavored fields).

    Returns:
        A validated options value. ``base`` is left untouched.

    Raises:
        pydantic.ValidationError: If a field is unknown or has the wrong type.

    """
    base = base if base is not None else DEFAULT_OPTIONS
    data = base.model_dump()

    flavored = overrides.pop("flavored", data["flavored"])
    if isinstance(flavored, Mapping):
        merged = dict(data["flavored"] or {})
        merged.update(flavored)
        flavored = merged
    elif isinstance(flavored, FlavoredOptions):
        flavored = flavored.model_dump()

    data.update(overrides)
    data["flavored"] = flavored
    return RenderOptions.model_validate(data)
