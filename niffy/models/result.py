"""Result data structures produced by captures, diffs and batch runs."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Role(str, Enum):
    BASE = "base"
    TEST = "test"
    DIFF = "diff"


class ImageArtifact(BaseModel):
    role: Role
    logical_path: str
    path: str  # absolute filesystem path to the PNG


class PixelDiff(BaseModel):
    """Raw counts reported by the pixel-diff capability."""
    differences: int = Field(ge=0)
    total: int = Field(gt=0)


class DiffResult(PixelDiff):
    """A pixel diff interpreted as a percentage, with its artifact location."""
    percentage: float  # 0-100
    diff_filepath: str


class ComparisonResult(BaseModel):
    path: str
    result: str  # pass, fail, error
    percentage: Optional[float] = None
    diff_filepath: Optional[str] = None
    message: str = ""
    duration_seconds: float = 0.0


class RunResult(BaseModel):
    run_id: str
    base_host: str
    test_host: str
    threshold: float
    started_at: str = ""
    completed_at: str = ""
    duration_seconds: float = 0.0
    comparisons: list[ComparisonResult] = Field(default_factory=list)
    profile: dict[str, int] = Field(default_factory=dict)  # phase -> ms

    @property
    def total(self) -> int:
        return len(self.comparisons)

    @property
    def passed(self) -> int:
        return sum(1 for c in self.comparisons if c.result == "pass")

    @property
    def failed(self) -> int:
        return sum(1 for c in self.comparisons if c.result == "fail")

    @property
    def errors(self) -> int:
        return sum(1 for c in self.comparisons if c.result == "error")
