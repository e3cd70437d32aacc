"""Configuration models with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass

from uiaudit.models.finding import Severity


@dataclass(slots=True)
class ScanConfig:
    workers: int = 1
    extensions: tuple[str, ...] = (".json",)
    exclude_dirs: tuple[str, ...] = ("packages", "packagecache", "editor")
    assets_root: str | None = None
    estimate_stretch: bool = False
    assumed_container_width: int = 800
    assumed_container_height: int = 600
    use_surface_scaler: bool = True
    sort_by_impact: bool = True

    @property
    def assumed_container(self) -> tuple[float, float] | None:
        if not self.estimate_stretch:
            return None
        return (float(self.assumed_container_width), float(self.assumed_container_height))


@dataclass(slots=True)
class ReportFilter:
    text: str = ""
    show_blurry: bool = True
    show_heavy: bool = True
    min_severity: Severity = Severity.LOW
