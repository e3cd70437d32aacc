"""Per-node evaluation: resolve, project and classify one image placement."""

from __future__ import annotations

from uiaudit.core.classifier import classify
from uiaudit.core.projector import project_to_top, required_authored_pixels
from uiaudit.core.resolver import Resolution, resolve
from uiaudit.models.config import ScanConfig
from uiaudit.models.finding import Finding, ResultType, Severity
from uiaudit.models.layout import LayoutNode
from uiaudit.models.policy import Policy

NINE_SLICED_MESSAGE = "Nine-sliced/tiled, skip resolution check"
CONTEXT_MESSAGE = "Context-dependent (stretches to parent)"


def _note(res: Resolution, config: ScanConfig) -> str:
    if res.nine_sliced:
        return "Sliced"
    if res.container_hint is not None:
        return f"Container {res.container_hint[0]:.0f}x{res.container_hint[1]:.0f}"
    if res.is_context_dependent:
        if res.estimated:
            return (
                f"Stretch (assumed {config.assumed_container_width}"
                f"x{config.assumed_container_height})"
            )
        return "Stretch"
    if res.local_scale > 1.01 or res.local_scale < 0.99:
        return f"Scale {res.local_scale:.2f}x"
    return ""


def evaluate_node(
    node: LayoutNode,
    policy: Policy,
    config: ScanConfig | None = None,
) -> Finding | None:
    """Evaluate one image placement. Returns None for malformed assets (zero area)."""
    config = config or ScanConfig()
    if node.authored_width <= 0 or node.authored_height <= 0:
        return None

    res = resolve(node, policy, config.assumed_container)

    surface = node.surface if config.use_surface_scaler else None
    top_w, top_h = project_to_top(res.ref_width, res.ref_height, policy, surface)
    req_w, req_h = required_authored_pixels(
        top_w,
        top_h,
        policy.oversample_for(node.label),
        policy.min_authored_for(node.label),
    )

    evaluation = classify(node.authored_width, node.authored_height, req_w, req_h, policy)
    result_type = evaluation.result_type
    severity = evaluation.severity
    message = evaluation.message
    waste_kb = evaluation.waste_kb

    if res.nine_sliced:
        result_type, severity, message, waste_kb = (
            ResultType.CONTEXT,
            Severity.NONE,
            NINE_SLICED_MESSAGE,
            0,
        )
    elif res.is_context_dependent and not res.estimated:
        result_type, severity, message, waste_kb = (
            ResultType.CONTEXT,
            Severity.NONE,
            CONTEXT_MESSAGE,
            0,
        )

    return Finding(
        container=node.container,
        path=node.path,
        asset_name=node.asset_name,
        texture_path=node.texture_path,
        sprite_name=node.sprite_name,
        authored_width=node.authored_width,
        authored_height=node.authored_height,
        local_scale=res.local_scale,
        display_ref_width=res.ref_width,
        display_ref_height=res.ref_height,
        display_top_width=top_w,
        display_top_height=top_h,
        required_width=req_w,
        required_height=req_h,
        result_type=result_type,
        severity=severity,
        waste_kb=waste_kb,
        message=message,
        note=_note(res, config),
    )


def delta_px(finding: Finding) -> int | None:
    """Authored minus required pixels on the dimension that drove the result."""
    if finding.result_type not in (ResultType.BLURRY, ResultType.HEAVY):
        return None
    delta_w = finding.authored_width - finding.required_width
    delta_h = finding.authored_height - finding.required_height
    if finding.result_type is ResultType.BLURRY:
        return min(delta_w, delta_h)
    return max(delta_w, delta_h)
