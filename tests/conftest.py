"""
Pytest configuration: default runs most tests; use --run-slow to include slow tests.
"""

import io

import pytest
from PIL import Image


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="Run slow tests (real Gemini / OpenRouter calls). Default: skip them.",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if config.getoption("--run-slow", False):
        return
    skip_slow = pytest.mark.skip(reason="Slow test; run with --run-slow to include")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def png_bytes() -> bytes:
    """A valid 2x2 PNG."""
    buf = io.BytesIO()
    Image.new("RGB", (2, 2), color=(255, 0, 0)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def jpeg_bytes() -> bytes:
    """A valid 2x2 JPEG."""
    buf = io.BytesIO()
    Image.new("RGB", (2, 2), color=(0, 0, 255)).save(buf, format="JPEG")
    return buf.getvalue()
