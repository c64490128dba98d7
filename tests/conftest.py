"""Shared fixtures for the Scriptorium test suite."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from scriptorium.core.authors import Author, build_author_table
from scriptorium.core.config import SiteSettings

AUTHORS_YAML = """
kevin:
  image_url: /images/kevin.png
  full_name: Kevin Webber
  twitter_handle: kvnwbbr
ada:
  image_url: /images/ada.png
  full_name: Ada Lovelace
  twitter_handle: "@ada"
"""


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep SCRIPTORIUM_* variables from the host out of the tests."""
    for key in list(os.environ):
        if key.startswith("SCRIPTORIUM_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def author() -> Author:
    return Author(image_url="/images/kevin.png", full_name="Kevin Webber", twitter_handle="kvnwbbr")


@pytest.fixture
def authors(author: Author):
    return build_author_table({"kevin": author})


@pytest.fixture
def site() -> SiteSettings:
    return SiteSettings(name="Field Notes", base_url="https://example.org/")


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """A site directory with an authors file and two posts."""
    (tmp_path / "authors.yml").write_text(AUTHORS_YAML, encoding="utf-8")
    posts = tmp_path / "posts"
    posts.mkdir()
    (posts / "hello-world.md").write_text(
        "---\ntitle: Hello World\nauthor: kevin\n---\n\nFirst *post*.\n",
        encoding="utf-8",
    )
    (posts / "second_post.md").write_text("Just text.\n", encoding="utf-8")
    return tmp_path
