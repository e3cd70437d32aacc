"""Authored-vs-required classification into blurry / heavy / ok."""

from __future__ import annotations

import math
from dataclasses import dataclass

from uiaudit.models.finding import ResultType, Severity
from uiaudit.models.policy import Policy

# Ratios this close below 1.0 are float noise, not a real deficit.
BLURRY_EPSILON = 0.001

BYTES_PER_PIXEL = 4  # RGBA8


@dataclass(frozen=True, slots=True)
class Evaluation:
    result_type: ResultType = ResultType.OK
    severity: Severity = Severity.NONE
    message: str = ""
    waste_kb: int = 0


OK = Evaluation()


def _ratio(authored: int, required: int) -> float:
    return authored / required if required > 0 else 1.0


def blurry_severity(worst_ratio: float) -> Severity:
    if worst_ratio < 0.5:
        return Severity.CRITICAL
    if worst_ratio < 0.75:
        return Severity.HIGH
    if worst_ratio < 0.9:
        return Severity.MEDIUM
    return Severity.LOW


def heavy_severity(heavy_ratio: float) -> Severity:
    if heavy_ratio >= 10:
        return Severity.CRITICAL
    if heavy_ratio >= 5:
        return Severity.HIGH
    if heavy_ratio >= 3:
        return Severity.MEDIUM
    return Severity.LOW


def wasted_kb(authored_w: int, authored_h: int, required_w: int, required_h: int) -> int:
    """Estimated storage spent on pixels above the requirement, capped at the asset size."""
    authored_area = authored_w * authored_h
    required_area = required_w * required_h
    waste_bytes = max(0, authored_area - required_area) * BYTES_PER_PIXEL
    capped = min(authored_area * BYTES_PER_PIXEL, waste_bytes)
    return max(0, capped // 1024)


def classify(
    authored_w: int,
    authored_h: int,
    required_w: int,
    required_h: int,
    policy: Policy,
) -> Evaluation:
    ratio_w = _ratio(authored_w, required_w)
    ratio_h = _ratio(authored_h, required_h)
    worst_ratio = min(ratio_w, ratio_h)

    if worst_ratio < 1.0 - BLURRY_EPSILON:
        sev = blurry_severity(worst_ratio)
        if ratio_w < ratio_h:
            dim, have, need = "W", authored_w, required_w
        else:
            dim, have, need = "H", authored_h, required_h
        return Evaluation(
            result_type=ResultType.BLURRY,
            severity=sev,
            message=f"Blurry {sev.name} ({dim}: have {have}px, need {need}px)",
        )

    # The gate is a pixel threshold; the severity is the continuous ratio.
    heavy_ratio = max(ratio_w, ratio_h)
    threshold_w = math.ceil(required_w * policy.oversize_factor)
    threshold_h = math.ceil(required_h * policy.oversize_factor)

    if authored_w > threshold_w or authored_h > threshold_h:
        sev = heavy_severity(heavy_ratio)
        return Evaluation(
            result_type=ResultType.HEAVY,
            severity=sev,
            message=f"Heavy {sev.name} x{heavy_ratio:.1f} (need {required_w}x{required_h}px)",
            waste_kb=wasted_kb(authored_w, authored_h, required_w, required_h),
        )

    return OK
