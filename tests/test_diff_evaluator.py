"""Tests for the diff evaluator."""

import pytest

from niffy.diff.evaluator import evaluate, to_result
from niffy.models.result import PixelDiff

from tests.conftest import fake_diff, write_png


class TestToResult:
    """Tests for percentage derivation."""

    @pytest.mark.parametrize(
        "differences,total,expected",
        [(0, 1_000_000, 0.0), (300_000, 1_000_000, 30.0), (1, 4, 25.0), (7, 7, 100.0)],
    )
    def test_percentage(self, differences, total, expected):
        result = to_result(PixelDiff(differences=differences, total=total), "/x/diff.png")
        assert result.percentage == pytest.approx(expected)
        assert 0 <= result.percentage <= 100

    def test_carries_counts_and_path(self):
        result = to_result(PixelDiff(differences=3, total=10), "/tmp/niffy/a/diff.png")
        assert result.differences == 3
        assert result.total == 10
        assert result.diff_filepath == "/tmp/niffy/a/diff.png"

    def test_total_must_be_positive(self):
        with pytest.raises(ValueError):
            PixelDiff(differences=0, total=0)


class TestEvaluate:
    """Tests for evaluate()."""

    @pytest.mark.asyncio
    async def test_delegates_to_diff_fn(self, tmp_path):
        diff_fn = fake_diff(250, total=1000)
        result = await evaluate(
            tmp_path / "base.png", tmp_path / "test.png", tmp_path / "diff.png",
            tolerance=3, diff_fn=diff_fn,
        )
        assert result.percentage == pytest.approx(25.0)
        assert result.diff_filepath == str(tmp_path / "diff.png")
        assert diff_fn.calls == [
            (str(tmp_path / "base.png"), str(tmp_path / "test.png"), str(tmp_path / "diff.png"), 3)
        ]

    @pytest.mark.asyncio
    async def test_real_images(self, tmp_path):
        a = write_png(tmp_path / "base.png", (10, 10), (0, 0, 0))
        b = write_png(tmp_path / "test.png", (10, 10), (0, 0, 0))
        result = await evaluate(a, b, tmp_path / "diff.png")
        assert result.percentage == 0.0
        assert (tmp_path / "diff.png").exists()
