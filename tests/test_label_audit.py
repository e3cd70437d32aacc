"""Tests for the label-based texture audit."""

from __future__ import annotations

from pathlib import Path

from uiaudit.core.label_audit import (
    UNLABELED_MESSAGE,
    audit_labels,
    audit_texture,
    load_labels,
)
from uiaudit.models.finding import ResultType, Severity
from uiaudit.models.layout import ScalingSurface
from uiaudit.models.policy import Policy


class TestAuditTexture:
    def test_ok(self, policy: Policy) -> None:
        row = audit_texture("icons/ok.png", (128, 128), "UI/Icon/M", policy)
        assert row.result_type is ResultType.OK
        assert row.sprite_name == "ok"
        assert (row.logical_width, row.logical_height) == (32, 32)
        assert (row.max_display_width, row.max_display_height) == (64, 64)
        assert (row.required_width, row.required_height) == (128, 128)

    def test_unknown_label(self, policy: Policy) -> None:
        row = audit_texture("a.png", (16, 16), "UI/Nope", policy)
        assert row.result_type is ResultType.CONTEXT
        assert row.severity is Severity.NONE
        assert row.message == UNLABELED_MESSAGE

    def test_surface(self, policy: Policy) -> None:
        surface = ScalingSurface(reference_width=1280, reference_height=720)
        row = audit_texture("a.png", (128, 128), "UI/Icon/M", policy, surface)
        assert (row.required_width, row.required_height) == (192, 192)
        assert row.result_type is ResultType.BLURRY


class TestAuditLabels:
    def test_all_rows(self, texture_dir: Path, labels_map: dict[str, str], policy: Policy) -> None:
        rows = audit_labels(str(texture_dir), labels_map, policy)
        by_path = {r.path: r for r in rows}
        assert list(by_path) == ["icons/big.png", "icons/ok.png", "icons/small.png", "misc.png"]

        assert by_path["icons/ok.png"].result_type is ResultType.OK
        assert by_path["icons/small.png"].result_type is ResultType.BLURRY
        assert by_path["icons/small.png"].severity is Severity.CRITICAL
        assert by_path["icons/big.png"].result_type is ResultType.HEAVY
        assert by_path["icons/big.png"].severity is Severity.MEDIUM
        assert by_path["misc.png"].result_type is ResultType.CONTEXT
        assert by_path["misc.png"].message == UNLABELED_MESSAGE

    def test_exclude_unlabeled(
        self, texture_dir: Path, labels_map: dict[str, str], policy: Policy
    ) -> None:
        rows = audit_labels(str(texture_dir), labels_map, policy, include_unlabeled=False)
        assert [r.path for r in rows] == ["icons/big.png", "icons/ok.png", "icons/small.png"]

    def test_undefined_label_is_unlabeled(self, texture_dir: Path, policy: Policy) -> None:
        rows = audit_labels(
            str(texture_dir), {"misc.png": "UI/Missing"}, policy, include_unlabeled=False
        )
        assert rows == []

    def test_label_keys_case_insensitive(self, texture_dir: Path, policy: Policy) -> None:
        rows = audit_labels(
            str(texture_dir), {"ICONS\\OK.png": "UI/Icon/M"}, policy, include_unlabeled=False
        )
        assert [r.path for r in rows] == ["icons/ok.png"]

    def test_oversized_texture(self, huge_texture_dir: Path, policy: Policy) -> None:
        rows = audit_labels(str(huge_texture_dir), {"huge.png": "UI/Icon/M"}, policy)
        assert [(r.path, r.result_type) for r in rows] == [("huge.png", ResultType.HEAVY)]
        assert rows[0].authored_width == 16384


class TestLoadLabels:
    def test_load(self, tmp_path: Path) -> None:
        path = tmp_path / "labels.yaml"
        path.write_text('icons/ok.png: UI/Icon/M\n"misc.png": \n')
        assert load_labels(str(path)) == {"icons/ok.png": "UI/Icon/M"}

    def test_non_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "labels.yaml"
        path.write_text("- a\n- b\n")
        assert load_labels(str(path)) == {}
