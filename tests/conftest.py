"""Pytest configuration and shared fixtures."""

from pathlib import Path
from unittest.mock import AsyncMock, Mock

import pytest
from PIL import Image

from niffy.browser.session import BrowserSession
from niffy.models.config import NiffyConfig, TimingConfig, ViewportConfig
from niffy.models.result import PixelDiff


BASE_HOST = "https://prod.example.com"
TEST_HOST = "http://localhost:3000"


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def no_wait_timing() -> TimingConfig:
    """Timing with every stabilization wait disabled."""
    return TimingConfig(settle_ms=0, capture_delay_ms=0, post_capture_ms=0)


@pytest.fixture
def niffy_config(tmp_path: Path, no_wait_timing: TimingConfig) -> NiffyConfig:
    """Create a test configuration writing images under tmp_path."""
    return NiffyConfig(
        base_host=BASE_HOST,
        test_host=TEST_HOST,
        viewport=ViewportConfig(width=800, height=600),
        threshold=0.2,
        imgfiledir=str(tmp_path / "niffy"),
        timing=no_wait_timing,
    )


# ============================================================================
# Browser Fixtures
# ============================================================================


def make_mock_page() -> AsyncMock:
    """Create an AsyncMock page whose screenshot() writes a placeholder file."""
    page = AsyncMock()
    page.on = Mock()

    async def _screenshot(path: str, full_page: bool = False) -> bytes:
        Path(path).write_bytes(b"png")
        return b"png"

    page.screenshot = AsyncMock(side_effect=_screenshot)
    return page


@pytest.fixture
def mock_page() -> AsyncMock:
    return make_mock_page()


@pytest.fixture
def session(mock_page: AsyncMock) -> BrowserSession:
    """A BrowserSession wired to a mock page instead of a real browser."""
    s = BrowserSession(ViewportConfig(width=800, height=600))
    s._page = mock_page
    return s


# ============================================================================
# Diff Fixtures
# ============================================================================


def fake_diff(differences: int, total: int = 1_000_000):
    """Build a diff function reporting fixed counts and writing the diff file."""
    calls = []

    def _diff(path_a, path_b, diff_path, tolerance=0) -> PixelDiff:
        calls.append((str(path_a), str(path_b), str(diff_path), tolerance))
        Path(diff_path).write_bytes(b"diff")
        return PixelDiff(differences=differences, total=total)

    _diff.calls = calls
    return _diff


def write_png(path: Path, size: tuple[int, int], color, mode: str = "RGB") -> Path:
    """Write a solid-color PNG."""
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new(mode, size, color).save(path)
    return path
