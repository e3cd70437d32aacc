"""Reference-resolution to top-resolution scale law and required authored pixels."""

from __future__ import annotations

import math

from uiaudit.models.layout import ScalingSurface
from uiaudit.models.policy import Policy


def _clamp01(value: float) -> float:
    return min(1.0, max(0.0, value))


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def scale_to_top(policy: Policy, surface: ScalingSurface | None = None) -> float:
    """Blend the width and height ratios between top and reference resolution.

    The surface's reference resolution overrides the policy per axis when it is
    positive; its match always overrides when a surface is given.
    """
    ref_w = float(policy.reference_width)
    ref_h = float(policy.reference_height)
    match = policy.match
    if surface is not None:
        if surface.reference_width > 0:
            ref_w = surface.reference_width
        if surface.reference_height > 0:
            ref_h = surface.reference_height
        match = surface.match

    s_w = policy.top_width / max(1.0, ref_w)
    s_h = policy.top_height / max(1.0, ref_h)
    return _lerp(s_w, s_h, _clamp01(match))


def project_to_top(
    ref_width: float,
    ref_height: float,
    policy: Policy,
    surface: ScalingSurface | None = None,
) -> tuple[float, float]:
    scale = scale_to_top(policy, surface)
    return ref_width * scale, ref_height * scale


def required_authored_pixels(
    top_width: float,
    top_height: float,
    oversample: float,
    min_authored: int = 0,
) -> tuple[int, int]:
    """Pixels the asset needs at the top resolution, always rounded up."""
    factor = max(1.0, oversample)
    req_w = math.ceil(top_width * factor)
    req_h = math.ceil(top_height * factor)
    if min_authored > 0:
        req_w = max(req_w, min_authored)
        req_h = max(req_h, min_authored)
    return req_w, req_h


def required_for_label(
    policy: Policy,
    label: str,
    surface: ScalingSurface | None = None,
) -> tuple[int, int] | None:
    """Required authored size for a labelled rule, or None when no rule matches."""
    rule = policy.rule_for(label)
    if rule is None:
        return None
    display_w, display_h = max_display_for_label(policy, label, surface) or (0, 0)
    return required_authored_pixels(
        display_w,
        display_h,
        policy.oversample_for(label),
        rule.min_authored_override,
    )


def max_display_for_label(
    policy: Policy,
    label: str,
    surface: ScalingSurface | None = None,
) -> tuple[int, int] | None:
    rule = policy.rule_for(label)
    if rule is None:
        return None
    scale = scale_to_top(policy, surface)
    return (
        math.ceil(max(0, rule.logical_width) * scale),
        math.ceil(max(0, rule.effective_logical_height) * scale),
    )
