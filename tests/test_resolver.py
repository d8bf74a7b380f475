"""Tests for video id resolution."""

import pytest

from tdg.captions.resolver import is_url, parse_video_id


def test_is_url_http():
    assert is_url("https://www.youtube.com/watch?v=dQw4w9WgXcQ") is True
    assert is_url("http://youtu.be/dQw4w9WgXcQ") is True


def test_is_url_bare_id():
    assert is_url("dQw4w9WgXcQ") is False


@pytest.mark.parametrize(
    "value",
    [
        "dQw4w9WgXcQ",
        "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        "https://www.youtube.com/watch?feature=share&v=dQw4w9WgXcQ&t=42",
        "https://youtu.be/dQw4w9WgXcQ?si=abc",
        "https://www.youtube.com/shorts/dQw4w9WgXcQ",
        "https://www.youtube.com/embed/dQw4w9WgXcQ",
        "youtube.com/watch?v=dQw4w9WgXcQ",
        "  dQw4w9WgXcQ  ",
    ],
)
def test_parse_video_id(value):
    assert parse_video_id(value) == "dQw4w9WgXcQ"


@pytest.mark.parametrize(
    "value",
    ["", "https://example.com/watch?v=dQw4w9WgXcQ", "https://www.youtube.com/watch", "short"],
)
def test_parse_video_id_invalid(value):
    with pytest.raises(ValueError):
        parse_video_id(value)
