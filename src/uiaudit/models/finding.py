"""Data models for audit findings."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any


class ResultType(str, Enum):
    OK = "OK"
    BLURRY = "Blurry"
    HEAVY = "Heavy"
    CONTEXT = "Context"


_SEVERITY_WEIGHTS = {"none": 0, "low": 1, "medium": 2, "high": 3, "critical": 5}


class Severity(str, Enum):
    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def weight(self) -> int:
        return _SEVERITY_WEIGHTS[self.value]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.weight < other.weight

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.weight <= other.weight

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.weight > other.weight

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.weight >= other.weight


def make_asset_key(texture_path: str, sprite_name: str) -> str:
    """Grouping key for usage counts: texture path + sub-image, case-insensitive."""
    return f"{texture_path or ''}::{sprite_name or ''}".casefold()


@dataclass(slots=True)
class Finding:
    # Identity
    container: str = ""
    path: str = ""
    asset_name: str = ""
    texture_path: str = ""
    sprite_name: str = ""

    # Geometry
    authored_width: int = 0
    authored_height: int = 0
    local_scale: float = 1.0
    display_ref_width: float = 0.0
    display_ref_height: float = 0.0
    display_top_width: float = 0.0
    display_top_height: float = 0.0
    required_width: int = 0
    required_height: int = 0

    # Classification
    result_type: ResultType = ResultType.OK
    severity: Severity = Severity.NONE
    waste_kb: int = 0
    message: str = ""
    note: str = ""

    # Assigned by the aggregator
    usage_count: int = 0
    impact: float = 0.0

    @property
    def asset_key(self) -> str:
        return make_asset_key(self.texture_path, self.sprite_name)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["result_type"] = self.result_type.value
        d["severity"] = self.severity.value
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Finding:
        kwargs = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        if "result_type" in kwargs:
            kwargs["result_type"] = ResultType(kwargs["result_type"])
        if "severity" in kwargs:
            kwargs["severity"] = Severity(kwargs["severity"])
        return cls(**kwargs)


FINDINGS_META_KEY = "__findings_meta__"


@dataclass(slots=True)
class FindingsMeta:
    is_meta: bool = field(default=True, repr=False)
    target: str = ""
    schema_version: int = 1
    policy: dict[str, Any] = field(default_factory=dict)
    settings: dict[str, Any] = field(default_factory=dict)
    containers_found: int = 0
    containers_processed: int = 0
    containers_failed: int = 0
    aborted: bool = False
    status: str = ""
    created_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d.pop("is_meta", None)
        d[FINDINGS_META_KEY] = True
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FindingsMeta:
        filtered = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**filtered)
