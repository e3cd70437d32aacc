"""Report view filtering."""

from __future__ import annotations

from uiaudit.models.config import ReportFilter
from uiaudit.models.finding import Finding, ResultType


def passes_filters(finding: Finding, flt: ReportFilter) -> bool:
    if flt.text:
        needle = flt.text.casefold()
        haystacks = (finding.container, finding.asset_name, finding.path)
        if not any(needle in h.casefold() for h in haystacks):
            return False
    if not flt.show_blurry and finding.result_type is ResultType.BLURRY:
        return False
    if not flt.show_heavy and finding.result_type is ResultType.HEAVY:
        return False
    return finding.severity >= flt.min_severity


def apply_filters(findings: list[Finding], flt: ReportFilter) -> list[Finding]:
    return [f for f in findings if passes_filters(f, flt)]
