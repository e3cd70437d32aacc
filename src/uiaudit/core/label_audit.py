"""Label-based texture audit: required size comes from the labelled rule, not the layout."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from uiaudit.core.classifier import classify
from uiaudit.core.projector import max_display_for_label, required_for_label
from uiaudit.io.asset_store import AssetStore, discover_textures
from uiaudit.models.finding import ResultType, Severity
from uiaudit.models.layout import ScalingSurface
from uiaudit.models.policy import Policy

UNLABELED_MESSAGE = "No UI label, pick one"


@dataclass(slots=True)
class LabelAuditRow:
    path: str = ""
    sprite_name: str = ""
    label: str = ""
    authored_width: int = 0
    authored_height: int = 0
    logical_width: int = 0
    logical_height: int = 0
    max_display_width: int = 0
    max_display_height: int = 0
    required_width: int = 0
    required_height: int = 0
    result_type: ResultType = ResultType.OK
    severity: Severity = Severity.NONE
    message: str = ""


def audit_texture(
    path: str,
    authored: tuple[int, int],
    label: str,
    policy: Policy,
    surface: ScalingSurface | None = None,
) -> LabelAuditRow:
    """Evaluate one texture against the rule its label selects."""
    sprite_name = Path(path).stem
    row = LabelAuditRow(
        path=path,
        sprite_name=sprite_name,
        label=label,
        authored_width=authored[0],
        authored_height=authored[1],
    )
    rule = policy.rule_for(label)
    required = required_for_label(policy, label, surface)
    display = max_display_for_label(policy, label, surface)
    if rule is None or required is None or display is None:
        row.result_type = ResultType.CONTEXT
        row.message = UNLABELED_MESSAGE
        return row

    row.logical_width = rule.logical_width
    row.logical_height = rule.effective_logical_height
    row.max_display_width, row.max_display_height = display
    row.required_width, row.required_height = required

    evaluation = classify(authored[0], authored[1], required[0], required[1], policy)
    row.result_type = evaluation.result_type
    row.severity = evaluation.severity
    row.message = evaluation.message
    return row


def audit_labels(
    assets_dir: str,
    labels: dict[str, str],
    policy: Policy,
    include_unlabeled: bool = True,
    surface: ScalingSurface | None = None,
) -> list[LabelAuditRow]:
    """Audit every texture under assets_dir. ``labels`` keys are paths relative to it."""
    store = AssetStore()
    normalized = {k.replace("\\", "/").casefold(): v for k, v in labels.items()}
    rows: list[LabelAuditRow] = []

    for texture in discover_textures(assets_dir):
        rel = os.path.relpath(texture, assets_dir).replace(os.sep, "/")
        label = normalized.get(rel.casefold(), "")
        if policy.rule_for(label) is None:
            label = ""
        if not label and not include_unlabeled:
            continue

        authored = store.pixel_size(texture)
        if authored is None:
            continue
        rows.append(audit_texture(rel, authored, label, policy, surface))

    return rows


def load_labels(path: str) -> dict[str, str]:
    """Load a texture → label mapping from a YAML file."""
    import yaml  # type: ignore[import-untyped]

    with open(path) as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        return {}
    return {str(k): str(v) for k, v in data.items() if v}
