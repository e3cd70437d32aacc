"""CSV export for findings and label audit rows.

Fields are quoted only when they contain a comma, quote or line break, with
embedded quotes doubled (``csv.QUOTE_MINIMAL``).
"""

from __future__ import annotations

import csv
from typing import TYPE_CHECKING

from uiaudit.models.finding import Finding

if TYPE_CHECKING:
    from uiaudit.core.label_audit import LabelAuditRow


def _flatten_finding(f: Finding) -> dict[str, object]:
    """Flatten a Finding into a flat dict for CSV."""
    return {
        "container": f.container,
        "path": f.path,
        "asset": f.asset_name,
        "texture_path": f.texture_path,
        "sprite_name": f.sprite_name,
        "type": f.result_type.value,
        "severity": f.severity.name,
        "impact": f"{f.impact:.1f}",
        "usage": f.usage_count,
        "waste_kb": f.waste_kb,
        "authored_w": f.authored_width,
        "authored_h": f.authored_height,
        "local_scale": f"{f.local_scale:.2f}",
        "display_ref_w": f"{f.display_ref_width:.0f}",
        "display_ref_h": f"{f.display_ref_height:.0f}",
        "display_top_w": f"{f.display_top_width:.0f}",
        "display_top_h": f"{f.display_top_height:.0f}",
        "required_w": f.required_width,
        "required_h": f.required_height,
        "message": f.message,
    }


def _flatten_label_row(r: LabelAuditRow) -> dict[str, object]:
    return {
        "path": r.path,
        "sprite": r.sprite_name,
        "label": r.label,
        "pixels_w": r.authored_width,
        "pixels_h": r.authored_height,
        "logical_ref_w": r.logical_width,
        "logical_ref_h": r.logical_height,
        "max_display_w": r.max_display_width,
        "max_display_h": r.max_display_height,
        "required_w": r.required_width,
        "required_h": r.required_height,
        "type": r.result_type.value,
        "severity": r.severity.name,
        "message": r.message,
    }


def _write_rows(rows: list[dict[str, object]], output_path: str) -> int:
    if not rows:
        return 0

    fieldnames = list(rows[0].keys())
    with open(output_path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames, quoting=csv.QUOTE_MINIMAL)
        writer.writeheader()
        writer.writerows(rows)

    return len(rows)


def findings_to_csv(findings: list[Finding], output_path: str) -> int:
    """Write Findings to a CSV file. Returns row count."""
    return _write_rows([_flatten_finding(f) for f in findings], output_path)


def label_rows_to_csv(rows: list[LabelAuditRow], output_path: str) -> int:
    """Write label audit rows to a CSV file. Returns row count."""
    return _write_rows([_flatten_label_row(r) for r in rows], output_path)
