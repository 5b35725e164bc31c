"""JSON export of eligibility reports.

- Interoperates with spreadsheets and scripts downstream.
- Stable key order so that repeated runs diff cleanly.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import EligibilityReport


def export_report_json(*, report: EligibilityReport, output_path: Path) -> Path:
    """Export an `EligibilityReport` as UTF-8 JSON."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = report.model_dump(mode="json")
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
