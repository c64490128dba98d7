"""Tests for markdown rendering through markdown-it-py."""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from markupsafe import Markup

from scriptorium.core.exceptions import PostEncodingError, PostNotFoundError, ScriptoriumError
from scriptorium.core.options import FlavoredOptions, RenderOptions
from scriptorium.core.rendering import render, render_file, wrap_content

SANITIZED = RenderOptions(sanitize=True)
ELIXIR = RenderOptions(default_highlight_language="elixir")

markdown_text = st.text(
    alphabet=st.characters(blacklist_categories=("Cs", "Cc"), blacklist_characters="\x00"),
    max_size=200,
)


def test_render_returns_trusted_markup():
    html = render("# Hello")

    assert isinstance(html, Markup)
    assert html == "<h1>Hello</h1>"


def test_render_uses_defaults_when_options_missing():
    assert render("*hi*") == render("*hi*", RenderOptions())


class TestSanitize:
    def test_raw_html_passes_through_by_default(self):
        html = render("<div class=\"note\">raw</div>")

        assert '<div class="note">raw</div>' in html

    def test_raw_html_is_escaped_when_sanitizing(self):
        html = render("<script>alert(1)</script>", SANITIZED)

        assert "<script>" not in html
        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html

    def test_inline_html_is_escaped_when_sanitizing(self):
        html = render("click <a href=\"x\" onclick=\"evil()\">here</a>", SANITIZED)

        assert "<a href" not in html
        assert "&lt;a href=" in html

    @settings(max_examples=50, deadline=None)
    @given(prefix=markdown_text, suffix=markdown_text)
    def test_sanitized_output_never_contains_source_script_tags(self, prefix, suffix):
        source = f"{prefix}<script>alert(1)</script>{suffix}"

        html = render(source, SANITIZED)

        assert "<script" not in html.lower()


@settings(max_examples=50, deadline=None)
@given(source=markdown_text, sanitize=st.booleans(), smarty_pants=st.booleans())
def test_rendering_is_idempotent(source, sanitize, smarty_pants):
    options = RenderOptions(sanitize=sanitize, smarty_pants=smarty_pants)

    assert render(source, options) == render(source, options)


class TestDefaultHighlightLanguage:
    def test_untagged_fence_gets_default_language(self):
        html = render("```\nIO.puts \"hi\"\n```\n", ELIXIR)

        assert '<pre><code class="language-elixir">' in html

    def test_tagged_fence_keeps_its_language(self):
        html = render("```python\nprint(1)\n```\n", ELIXIR)

        assert 'class="language-python"' in html
        assert "language-elixir" not in html

    def test_indented_block_gets_default_language(self):
        html = render("Code:\n\n    x = 1\n", ELIXIR)

        assert 'class="language-elixir"' in html
        assert "x = 1" in html

    def test_no_default_leaves_block_untagged(self):
        html = render("```\nplain\n```\n")

        assert "<pre><code>plain" in html


class TestFlavored:
    TABLE = "| a | b |\n| - | - |\n| 1 | 2 |\n"

    def test_tables_disabled_by_default(self):
        assert "<table>" not in render(self.TABLE)

    def test_tables_enabled(self):
        html = render(self.TABLE, RenderOptions(flavored=FlavoredOptions(tables=True)))

        assert "<table>" in html
        assert "<td>1</td>" in html

    def test_breaks_disabled_by_default(self):
        assert "<br" not in render("one\ntwo")

    def test_breaks_enabled(self):
        html = render("one\ntwo", RenderOptions(flavored=FlavoredOptions(breaks=True)))

        assert "one<br />" in html


class TestSmartyPants:
    SOURCE = '"quoted" -- dash'

    def test_plain_quotes_by_default(self):
        html = render(self.SOURCE)

        assert "“" not in html
        assert "--" in html

    def test_typographic_substitution(self):
        html = render(self.SOURCE, RenderOptions(smarty_pants=True))

        assert "“quoted”" in html
        assert "–" in html


class TestRenderFile:
    def test_wraps_content_in_container(self, tmp_path):
        path = tmp_path / "post.md"
        path.write_text("Hello <em>there</em>", encoding="utf-8")

        html = render_file(path)

        assert isinstance(html, Markup)
        assert html.startswith('<div class="post-content">')
        assert html.endswith("</div>")
        assert "<p>Hello <em>there</em></p>" in html

    def test_accepts_string_path_and_options(self, tmp_path):
        path = tmp_path / "post.md"
        path.write_text("<b>bold</b>", encoding="utf-8")

        html = render_file(str(path), SANITIZED)

        assert "&lt;b&gt;bold&lt;/b&gt;" in html

    def test_missing_file_raises(self, tmp_path):
        missing = tmp_path / "nope.md"

        with pytest.raises(PostNotFoundError) as exc_info:
            render_file(missing)

        assert exc_info.value.path == missing
        assert isinstance(exc_info.value, FileNotFoundError)
        assert isinstance(exc_info.value, ScriptoriumError)

    def test_non_utf8_file_raises(self, tmp_path):
        path = tmp_path / "post.md"
        path.write_bytes(b"\xff\xfe bad")

        with pytest.raises(PostEncodingError) as exc_info:
            render_file(path)

        assert exc_info.value.path == path
        assert isinstance(exc_info.value, ScriptoriumError)


def test_wrap_content_does_not_escape_fragment():
    wrapped = wrap_content(Markup("<p>x</p>"))

    assert wrapped == '<div class="post-content">\n<p>x</p>\n</div>'


def test_wrap_content_escapes_plain_strings():
    assert "&lt;p&gt;" in wrap_content("<p>x</p>")
