"""Tests for report view filters."""

from __future__ import annotations

from uiaudit.core.filters import apply_filters, passes_filters
from uiaudit.models.config import ReportFilter
from uiaudit.models.finding import Finding, ResultType, Severity


def _f(result_type: ResultType, severity: Severity, container: str = "UI/Shop.prefab") -> Finding:
    return Finding(
        container=container,
        path="Canvas/Slot/Icon",
        asset_name="coin",
        result_type=result_type,
        severity=severity,
    )


class TestFilters:
    def test_default_hides_none_severity(self) -> None:
        flt = ReportFilter()
        assert passes_filters(_f(ResultType.BLURRY, Severity.LOW), flt)
        assert not passes_filters(_f(ResultType.OK, Severity.NONE), flt)
        assert not passes_filters(_f(ResultType.CONTEXT, Severity.NONE), flt)

    def test_min_none_shows_everything(self) -> None:
        flt = ReportFilter(min_severity=Severity.NONE)
        assert passes_filters(_f(ResultType.OK, Severity.NONE), flt)

    def test_min_severity(self) -> None:
        flt = ReportFilter(min_severity=Severity.HIGH)
        assert not passes_filters(_f(ResultType.BLURRY, Severity.MEDIUM), flt)
        assert passes_filters(_f(ResultType.BLURRY, Severity.HIGH), flt)
        assert passes_filters(_f(ResultType.HEAVY, Severity.CRITICAL), flt)

    def test_type_toggles(self) -> None:
        blurry = _f(ResultType.BLURRY, Severity.HIGH)
        heavy = _f(ResultType.HEAVY, Severity.HIGH)
        assert not passes_filters(blurry, ReportFilter(show_blurry=False))
        assert passes_filters(heavy, ReportFilter(show_blurry=False))
        assert not passes_filters(heavy, ReportFilter(show_heavy=False))

    def test_text_case_insensitive(self) -> None:
        f = _f(ResultType.BLURRY, Severity.HIGH)
        assert passes_filters(f, ReportFilter(text="SHOP"))
        assert passes_filters(f, ReportFilter(text="slot/icon"))
        assert passes_filters(f, ReportFilter(text="Coin"))
        assert not passes_filters(f, ReportFilter(text="inventory"))

    def test_apply_preserves_order(self) -> None:
        items = [
            _f(ResultType.BLURRY, Severity.HIGH, container="A"),
            _f(ResultType.OK, Severity.NONE, container="B"),
            _f(ResultType.HEAVY, Severity.LOW, container="C"),
        ]
        assert [f.container for f in apply_filters(items, ReportFilter())] == ["A", "C"]
