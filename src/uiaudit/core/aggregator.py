"""Usage counting, impact scoring and ordering of findings; audit-level summary."""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field

from uiaudit.models.finding import Finding, ResultType, Severity

# Display width (px at top resolution) at which the size weight reaches 1.0.
SIZE_WEIGHT_BASE = 48.0


def size_weight(display_top_width: float) -> float:
    """Logarithmic weight so huge banners don't drown out many small icons."""
    return math.log2(max(1.0, display_top_width) / SIZE_WEIGHT_BASE + 1.0)


def compute_impact(finding: Finding) -> float:
    if finding.result_type in (ResultType.OK, ResultType.CONTEXT):
        return 0.0
    return finding.severity.weight * finding.usage_count * size_weight(finding.display_top_width)


def aggregate(findings: list[Finding], sort_by_impact: bool = True) -> list[Finding]:
    """Assign usage counts and impact in place, then return a new ordered list.

    Usage counts need every container's findings, so call this once per scan
    on the concatenated list.
    """
    usage: Counter[str] = Counter(f.asset_key for f in findings)
    for f in findings:
        f.usage_count = max(1, usage[f.asset_key])
        f.impact = compute_impact(f)

    if sort_by_impact:
        return sorted(
            findings,
            key=lambda f: (f.impact, f.severity.weight, f.display_top_width),
            reverse=True,
        )
    return sorted(findings, key=lambda f: (f.container, f.path))


@dataclass
class AuditSummary:
    total_findings: int = 0
    unique_assets: int = 0
    total_waste_kb: int = 0
    containers_found: int = 0
    containers_processed: int = 0

    type_counts: dict[str, int] = field(default_factory=dict)
    severity_counts: dict[str, int] = field(default_factory=dict)
    top_assets: list[tuple[str, float]] = field(default_factory=list)


def summarize(
    findings: list[Finding],
    containers_found: int = 0,
    containers_processed: int = 0,
    top_n: int = 5,
) -> AuditSummary:
    """Compute audit-level summary statistics."""
    if not findings:
        return AuditSummary(
            containers_found=containers_found,
            containers_processed=containers_processed,
        )

    types: Counter[str] = Counter(f.result_type.value for f in findings)
    severities: Counter[str] = Counter(
        f.severity.value for f in findings if f.severity is not Severity.NONE
    )

    asset_impact: dict[str, float] = {}
    asset_names: dict[str, str] = {}
    for f in findings:
        asset_impact[f.asset_key] = asset_impact.get(f.asset_key, 0.0) + f.impact
        asset_names.setdefault(f.asset_key, f.asset_name or f.texture_path)

    ranked = sorted(asset_impact.items(), key=lambda kv: kv[1], reverse=True)
    top_assets = [(asset_names[k], v) for k, v in ranked if v > 0][:top_n]

    return AuditSummary(
        total_findings=len(findings),
        unique_assets=len(asset_impact),
        total_waste_kb=sum(f.waste_kb for f in findings),
        containers_found=containers_found,
        containers_processed=containers_processed,
        type_counts=dict(types.most_common()),
        severity_counts={
            s.value: severities[s.value] for s in reversed(Severity) if severities[s.value]
        },
        top_assets=top_assets,
    )
