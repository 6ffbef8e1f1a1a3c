"""Unit tests for presentation helpers."""

import pytest

from backend.app.utils.formatting import format_file_size, truncate_text


@pytest.mark.parametrize(
    "size_bytes, expected",
    [
        (0, "0 Bytes"),
        (512, "512 Bytes"),
        (1024, "1 KB"),
        (1536, "1.5 KB"),
        (1024 * 1024 * 3, "3 MB"),
        (int(1024 ** 3 * 2.25), "2.25 GB"),
    ],
)
def test_format_file_size(size_bytes, expected):
    assert format_file_size(size_bytes) == expected


def test_truncate_text_short_is_unchanged():
    assert truncate_text("hello") == "hello"
    assert truncate_text("x" * 100) == "x" * 100


def test_truncate_text_long_gets_ellipsis():
    text = "y" * 150

    assert truncate_text(text) == "y" * 100 + "..."
    assert truncate_text(text, limit=10) == "y" * 10 + "..."
