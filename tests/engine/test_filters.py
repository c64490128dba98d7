import pytest

from scriptorium.engine.filters import display_handle, twitter_url


@pytest.mark.parametrize(
    ("handle", "base_url", "expected"),
    [
        ("kvnwbbr", "https://twitter.com", "https://twitter.com/kvnwbbr"),
        ("@kvnwbbr", "https://twitter.com", "https://twitter.com/kvnwbbr"),
        ("kvnwbbr", "https://x.com/", "https://x.com/kvnwbbr"),
        (" kvnwbbr ", "https://twitter.com", "https://twitter.com/kvnwbbr"),
    ],
)
def test_twitter_url(handle, base_url, expected):
    assert twitter_url(handle, base_url) == expected


def test_twitter_url_default_base():
    assert twitter_url("ada") == "https://twitter.com/ada"


@pytest.mark.parametrize(("handle", "expected"), [("ada", "@ada"), ("@ada", "@ada")])
def test_display_handle(handle, expected):
    assert display_handle(handle) == expected
