"""Tests for per-node evaluation."""

from __future__ import annotations

from typing import Callable

import pytest

from uiaudit.core.evaluator import CONTEXT_MESSAGE, NINE_SLICED_MESSAGE, delta_px, evaluate_node
from uiaudit.models.config import ScanConfig
from uiaudit.models.finding import Finding, ResultType, Severity
from uiaudit.models.layout import AncestorView, DrawMode, LayoutNode, RectLayout, ScalingSurface
from uiaudit.models.policy import Policy, Rule

NodeFactory = Callable[..., LayoutNode]


@pytest.fixture
def slot_node(node_factory: NodeFactory, surface_ancestor: AncestorView) -> NodeFactory:
    """Full-stretch image inside a fixed 100x100 slot."""
    slot = AncestorView(name="Slot", layout=RectLayout(rect=(100.0, 100.0)))

    def build(**kwargs: object) -> LayoutNode:
        return node_factory(stretch=True, ancestors=(slot, surface_ancestor), **kwargs)

    return build


class TestEvaluateNode:
    def test_blurry_scenario(self, slot_node: NodeFactory, policy: Policy) -> None:
        f = evaluate_node(slot_node(authored=(128, 128)), policy)
        assert f is not None
        assert (f.display_ref_width, f.display_ref_height) == (100.0, 100.0)
        assert (f.display_top_width, f.display_top_height) == (200.0, 200.0)
        assert (f.required_width, f.required_height) == (400, 400)
        assert f.result_type is ResultType.BLURRY
        assert f.severity is Severity.CRITICAL
        assert f.note == "Container 100x100"

    def test_heavy_scenario(self, slot_node: NodeFactory, policy: Policy) -> None:
        f = evaluate_node(slot_node(authored=(4096, 4096)), policy)
        assert f is not None
        assert f.result_type is ResultType.HEAVY
        assert f.severity is Severity.CRITICAL
        assert f.waste_kb == 64911

    def test_identity_fields(self, slot_node: NodeFactory, policy: Policy) -> None:
        f = evaluate_node(slot_node(), policy)
        assert f is not None
        assert f.container == "UI/Test.prefab"
        assert f.path == "Canvas/Image"
        assert f.asset_name == "icon"
        assert f.texture_path == "Assets/UI/icon.png"

    @pytest.mark.parametrize("authored", [(16, 16), (8192, 8192)])
    def test_context_dependent(
        self,
        node_factory: NodeFactory,
        surface_ancestor: AncestorView,
        policy: Policy,
        authored: tuple[int, int],
    ) -> None:
        node = node_factory(stretch=True, ancestors=(surface_ancestor,), authored=authored)
        f = evaluate_node(node, policy)
        assert f is not None
        assert f.result_type is ResultType.CONTEXT
        assert f.severity is Severity.NONE
        assert f.message == CONTEXT_MESSAGE
        assert f.waste_kb == 0
        assert f.note == "Stretch"

    def test_estimated_stretch_is_classified(
        self, node_factory: NodeFactory, surface_ancestor: AncestorView, policy: Policy
    ) -> None:
        node = node_factory(stretch=True, ancestors=(surface_ancestor,), authored=(256, 256))
        f = evaluate_node(node, policy, ScanConfig(estimate_stretch=True))
        assert f is not None
        assert (f.required_width, f.required_height) == (3200, 2400)
        assert f.result_type is ResultType.BLURRY
        assert f.note == "Stretch (assumed 800x600)"

    def test_nine_sliced(self, node_factory: NodeFactory, policy: Policy) -> None:
        node = node_factory(rect=(300.0, 50.0), authored=(8, 8), draw_mode=DrawMode.SLICED)
        f = evaluate_node(node, policy)
        assert f is not None
        assert f.result_type is ResultType.CONTEXT
        assert f.severity is Severity.NONE
        assert f.message == NINE_SLICED_MESSAGE
        assert f.note == "Sliced"
        assert f.display_ref_width == 300.0

    def test_zero_area_skipped(self, node_factory: NodeFactory, policy: Policy) -> None:
        assert evaluate_node(node_factory(authored=(0, 64)), policy) is None

    def test_surface_scaler(self, node_factory: NodeFactory, policy: Policy) -> None:
        surface = ScalingSurface(reference_width=1280, reference_height=720, match=0.5)
        node = node_factory(rect=(100.0, 100.0), surface=surface)

        f = evaluate_node(node, policy)
        assert f is not None
        assert f.required_width == 600

        f = evaluate_node(node, policy, ScanConfig(use_surface_scaler=False))
        assert f is not None
        assert f.required_width == 400

    def test_label_oversample(self, node_factory: NodeFactory) -> None:
        p = Policy(rules=[Rule(label="UI/Flat", logical_width=32, oversample_override=1.0)])
        f = evaluate_node(node_factory(rect=(100.0, 100.0), label="UI/Flat"), p)
        assert f is not None
        assert f.required_width == 200

    def test_scale_note(self, node_factory: NodeFactory, policy: Policy) -> None:
        f = evaluate_node(node_factory(scale=(2.0, 2.0)), policy)
        assert f is not None
        assert f.note == "Scale 2.00x"
        assert f.local_scale == 2.0

    def test_ok(self, node_factory: NodeFactory, policy: Policy) -> None:
        f = evaluate_node(node_factory(rect=(64.0, 64.0), authored=(256, 256)), policy)
        assert f is not None
        assert f.result_type is ResultType.OK
        assert f.note == ""


class TestDeltaPx:
    def test_blurry_worst_dimension(self) -> None:
        f = Finding(
            authored_width=100,
            authored_height=300,
            required_width=400,
            required_height=400,
            result_type=ResultType.BLURRY,
        )
        assert delta_px(f) == -300

    def test_heavy_largest_excess(self) -> None:
        f = Finding(
            authored_width=2048,
            authored_height=1024,
            required_width=400,
            required_height=400,
            result_type=ResultType.HEAVY,
        )
        assert delta_px(f) == 1648

    def test_ok_has_no_delta(self) -> None:
        assert delta_px(Finding(result_type=ResultType.OK)) is None
        assert delta_px(Finding(result_type=ResultType.CONTEXT)) is None
