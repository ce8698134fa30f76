"""Test configuration."""

import logging
import tempfile
from pathlib import Path

import pytest

from content_safety.models import Photo


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers the CLI tools attach to the package logger."""
    yield
    logger = logging.getLogger("content_safety")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def attack_samples():
    """Markup and script injection attempts."""
    return [
        "<script>alert(1)</script>",
        "<SCRIPT>alert('xss')</SCRIPT>",
        "&#60;script&#62;alert(document.cookie)&#60;/script&#62;",
        "<img src=x onerror=alert('xss')>",
        "<scr<scriptipt>alert(1)</script>",
        "<a href='javascript:alert(1)'>click</a>",
        "<iframe src=data:text/html;base64,PHNjcmlwdD4=></iframe>",
        "<div style=\"width: expression(alert(1))\">",
        "Hello\x00World\x1b[31m",
        "   lots\t\tof \n\n  whitespace   ",
        "&amp;lt;script&amp;gt;",
        "Just a normal message, nothing to see here.",
        "",
    ]


@pytest.fixture
def normal_photos():
    """Three phone-camera sized photos."""
    return [
        Photo(width=1080, height=1350, source="a.jpg"),
        Photo(width=1080, height=1350, source="b.jpg"),
        Photo(width=1440, height=1080, source="c.jpg"),
    ]


@pytest.fixture
def genuine_bio():
    """A bio that trips no fake profile check."""
    return "Avid hiker and coffee lover who enjoys weekend trips to the mountains."


@pytest.fixture
def profile_file(temp_dir):
    """Create a minimal, highly suspicious profile snapshot file."""
    path = Path(temp_dir) / "profile.yml"
    path.write_text(
        """
name: "a"
bio: ""
photos: []
behavior:
  messages_sent: 150
  messages_received: 0
  matches_count: 5
  account_age_seconds: 3600
""",
        encoding="utf-8",
    )
    return str(path)


@pytest.fixture
def genuine_profile_file(temp_dir):
    """Create a complete, unremarkable profile snapshot file."""
    path = Path(temp_dir) / "genuine.yaml"
    path.write_text(
        """
name: "Jane Doe"
bio: "Avid hiker and coffee lover who enjoys weekend trips to the mountains."
age: 29
location: "Denver"
photos:
  - {width: 1080, height: 1350}
  - {width: 1080, height: 1350}
""",
        encoding="utf-8",
    )
    return str(path)
