"""Author records and the read-only author lookup table."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from scriptorium.core.exceptions import AuthorConfigError, UnknownAuthorError

logger = logging.getLogger(__name__)

AuthorTable = Mapping[str, "Author"]


class Author(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    image_url: str
    full_name: str
    twitter_handle: str


EMPTY_AUTHORS: AuthorTable = MappingProxyType({})


def build_author_table(entries: Mapping[str, Author | Mapping[str, Any]]) -> AuthorTable:
    """Freeze ``entries`` into an immutable author table.

    Values may already be :class:`Author` instances or plain mappings of
    author fields.

    Raises:
        AuthorConfigError: If an entry is not a valid author.

    """
    table: dict[str, Author] = {}
    for key, value in entries.items():
        if isinstance(value, Author):
            table[str(key)] = value
            continue
        if not isinstance(value, Mapping):
            msg = f"Author '{key}' must be a mapping, got {type(value).__name__}"
            raise AuthorConfigError(msg)
        try:
            table[str(key)] = Author.model_validate(dict(value))
        except ValidationError as e:
            raise AuthorConfigError(f"Invalid author '{key}': {e}") from e
    return MappingProxyType(table)


def load_authors(path: Path) -> AuthorTable:
    """Load the author table from a YAML file.

    The file maps author keys to ``image_url``, ``full_name`` and
    ``twitter_handle``. A missing file yields an empty table.

    Raises:
        AuthorConfigError: If the YAML is invalid or not a mapping of authors.

    """
    if not path.exists():
        logger.debug("No authors file at %s", path)
        return EMPTY_AUTHORS

    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise AuthorConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        msg = f"Authors file root must be a mapping, got {type(data).__name__}"
        raise AuthorConfigError(msg)

    table = build_author_table(data)
    logger.debug("Loaded %d author(s) from %s", len(table), path)
    return table


def get_author(table: AuthorTable, key: str) -> Author:
    """Look up ``key`` in ``table``.

    Raises:
        UnknownAuthorError: If no author is registered under ``key``.

    """
    try:
        return table[key]
    except KeyError:
        raise UnknownAuthorError(key) from None
