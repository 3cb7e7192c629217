import pytest

from carousel.core.exceptions import InvalidIdentifier
from carousel.services.youtube import extract_video_id, require_video_id, thumbnail_url


@pytest.mark.parametrize(
    "raw",
    [
        "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        "https://youtube.com/watch?v=dQw4w9WgXcQ&t=42s",
        "https://www.youtube.com/watch?feature=share&v=dQw4w9WgXcQ",
        "https://youtu.be/dQw4w9WgXcQ",
        "https://youtu.be/dQw4w9WgXcQ?si=abc",
        "https://www.youtube.com/embed/dQw4w9WgXcQ",
        "https://www.youtube.com/v/dQw4w9WgXcQ",
        "dQw4w9WgXcQ",
        "  dQw4w9WgXcQ  ",
    ],
)
def test_extract_video_id_recognized_shapes(raw):
    assert extract_video_id(raw) == "dQw4w9WgXcQ"


@pytest.mark.parametrize(
    "raw",
    [
        "",
        None,
        "not a url",
        "https://vimeo.com/123456789",
        "https://www.youtube.com/watch?v=short",
        "https://www.youtube.com/watch?v=dQw4w9WgXcQX",
        "dQw4w9WgXc",
        "dQw4w9WgXcQQ",
        "https://www.youtube.com/playlist?list=PL123",
    ],
)
def test_extract_video_id_rejects_other_input(raw):
    assert extract_video_id(raw) is None


def test_require_video_id_raises_bad_request():
    with pytest.raises(InvalidIdentifier) as exc_info:
        require_video_id("not a url")

    assert exc_info.value.status_code == 400
    assert "not a url" in exc_info.value.detail


def test_thumbnail_url():
    assert thumbnail_url("dQw4w9WgXcQ") == "https://img.youtube.com/vi/dQw4w9WgXcQ/maxresdefault.jpg"
