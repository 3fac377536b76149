"""JSON report output."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from niffy.models.result import RunResult

logger = logging.getLogger(__name__)


def generate_json_report(run_result: RunResult, output_dir: Path) -> Path:
    """Write a machine-readable JSON report and return its path."""
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / f"report_{run_result.run_id}.json"

    report = run_result.model_dump()
    report["summary"] = {
        "total": run_result.total,
        "passed": run_result.passed,
        "failed": run_result.failed,
        "errors": run_result.errors,
    }

    with open(output_path, "w") as f:
        json.dump(report, f, indent=2, default=str)
    logger.info("JSON report: %s", output_path)
    return output_path
