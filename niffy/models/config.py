"""Configuration models for niffy."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from niffy.browser.timing import (
    CAPTURE_DELAY_MS,
    POST_CAPTURE_MS,
    SETTLE_MS,
)


class ViewportConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: int = 1400
    height: int = 1000

    @field_validator("width", "height")
    @classmethod
    def positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("viewport dimensions must be positive")
        return v


class TimingConfig(BaseModel):
    """Stabilization waits, in milliseconds.

    Render settle time depends on the environment, so the defaults can be
    raised for slow pages or CI machines.
    """

    model_config = ConfigDict(frozen=True)

    settle_ms: int = SETTLE_MS  # before and after an interaction
    capture_delay_ms: int = CAPTURE_DELAY_MS  # between navigation and screenshot
    post_capture_ms: int = POST_CAPTURE_MS  # after a screenshot

    @field_validator("settle_ms", "capture_delay_ms", "post_capture_ms")
    @classmethod
    def non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("timings must not be negative")
        return v


class NiffyConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Hosts
    base_host: str
    test_host: str

    # Browser
    viewport: ViewportConfig = Field(default_factory=ViewportConfig)
    show: bool = False

    # Comparison. threshold is in percent, on the same 0-100 scale as
    # DiffResult.percentage: 0.2 fails anything above 0.2% of pixels.
    threshold: float = 0.2
    pixel_tolerance: int = 0  # per-channel difference ignored by the diff, 0-255
    imgfiledir: str = "/tmp/niffy"
    timing: TimingConfig = Field(default_factory=TimingConfig)

    # Batch runs
    paths: list[str] = Field(default_factory=list)
    report_output_dir: str = "./niffy-reports"

    @field_validator("base_host", "test_host")
    @classmethod
    def host_required(cls, v: str) -> str:
        if not v:
            raise ValueError("host must not be empty")
        return v

    @field_validator("threshold")
    @classmethod
    def threshold_in_range(cls, v: float) -> float:
        if not 0 <= v <= 100:
            raise ValueError("threshold must be a percentage between 0 and 100")
        return v

    @field_validator("pixel_tolerance")
    @classmethod
    def tolerance_in_range(cls, v: int) -> int:
        if not 0 <= v <= 255:
            raise ValueError("pixel_tolerance must be between 0 and 255")
        return v

    @classmethod
    def from_options(cls, base_host: str, test_host: str, **options) -> "NiffyConfig":
        """Build a config from flat construction options.

        Accepts ``show``, ``width``, ``height``, ``threshold`` and
        ``imgfiledir`` alongside any NiffyConfig field.
        """
        viewport = {}
        for key in ("width", "height"):
            if options.get(key) is not None:
                viewport[key] = options.pop(key)
            else:
                options.pop(key, None)
        if viewport:
            options["viewport"] = ViewportConfig(**viewport)
        options = {k: v for k, v in options.items() if v is not None}
        return cls(base_host=base_host, test_host=test_host, **options)

    @classmethod
    def load(cls, path: str | Path) -> "NiffyConfig":
        """Load config from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path) as f:
            data = json.load(f)
        return cls(**data)

    def save(self, path: str | Path) -> None:
        """Save config to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.model_dump(), f, indent=2)
