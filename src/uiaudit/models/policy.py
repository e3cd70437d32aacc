"""Sizing policy: device target, design reference and per-label logical sizes."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


class PolicyError(ValueError):
    """Raised when a policy is missing or fails validation."""


@dataclass(slots=True)
class Rule:
    label: str = ""
    logical_width: int = 32
    logical_height: int = 0  # 0 = square (use logical_width)
    oversample_override: float = 0.0  # 0 = inherit global
    min_authored_override: int = 0  # 0 = no floor

    @property
    def effective_logical_height(self) -> int:
        return self.logical_height if self.logical_height > 0 else self.logical_width

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _default_rules() -> list[Rule]:
    return [
        Rule(label="UI/Icon/XS", logical_width=16),
        Rule(label="UI/Icon/S", logical_width=24),
        Rule(label="UI/Icon/M", logical_width=32),
        Rule(label="UI/Icon/L", logical_width=48),
        Rule(label="UI/Button/H", logical_width=56),
        Rule(label="UI/Logo", logical_width=400),
        Rule(label="UI/Hero", logical_width=600),
    ]


@dataclass(slots=True)
class Policy:
    top_width: int = 3840
    top_height: int = 2160
    reference_width: int = 1920
    reference_height: int = 1080
    match: float = 0.5  # 0 = scale by width, 1 = by height
    oversample: float = 2.0
    oversize_factor: float = 2.0
    rules: list[Rule] = field(default_factory=_default_rules)

    def __post_init__(self) -> None:
        if self.top_width <= 0 or self.top_height <= 0:
            raise PolicyError(
                f"top resolution must be positive, got {self.top_width}x{self.top_height}"
            )
        if self.reference_width <= 0 or self.reference_height <= 0:
            raise PolicyError(
                "reference resolution must be positive, "
                f"got {self.reference_width}x{self.reference_height}"
            )
        if not 0.0 <= self.match <= 1.0:
            raise PolicyError(f"match must be within [0, 1], got {self.match}")
        if self.oversample < 1.0:
            raise PolicyError(f"oversample must be >= 1.0, got {self.oversample}")
        if self.oversize_factor < 1.0:
            raise PolicyError(f"oversize_factor must be >= 1.0, got {self.oversize_factor}")

        seen: set[str] = set()
        for rule in self.rules:
            if not rule.label:
                raise PolicyError("rule label must be a non-empty string")
            if rule.label in seen:
                raise PolicyError(f"duplicate rule label: {rule.label}")
            seen.add(rule.label)
            if rule.logical_width <= 0:
                raise PolicyError(
                    f"rule {rule.label}: logical_width must be positive, got {rule.logical_width}"
                )
            if rule.logical_height < 0:
                raise PolicyError(
                    f"rule {rule.label}: logical_height must be non-negative, "
                    f"got {rule.logical_height}"
                )
            if rule.oversample_override < 0 or rule.min_authored_override < 0:
                raise PolicyError(f"rule {rule.label}: overrides must be non-negative")

    @property
    def top_resolution(self) -> tuple[int, int]:
        return (self.top_width, self.top_height)

    @property
    def reference_resolution(self) -> tuple[int, int]:
        return (self.reference_width, self.reference_height)

    def rule_for(self, label: str | None) -> Rule | None:
        if not label:
            return None
        for rule in self.rules:
            if rule.label == label:
                return rule
        return None

    def oversample_for(self, label: str | None = None) -> float:
        """Rule-specific oversample when set, otherwise the global factor."""
        rule = self.rule_for(label)
        if rule is not None and rule.oversample_override > 0:
            return rule.oversample_override
        return self.oversample

    def min_authored_for(self, label: str | None = None) -> int:
        rule = self.rule_for(label)
        return rule.min_authored_override if rule is not None else 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Policy:
        kwargs = {k: v for k, v in data.items() if k in cls.__dataclass_fields__ and k != "rules"}
        if "rules" in data:
            raw_rules = data.get("rules") or []
            if not isinstance(raw_rules, list):
                raise PolicyError("rules must be a list")
            rules = []
            for item in raw_rules:
                if not isinstance(item, dict):
                    raise PolicyError(f"invalid rule entry: {item!r}")
                rule_kwargs = {k: v for k, v in item.items() if k in Rule.__dataclass_fields__}
                rules.append(Rule(**rule_kwargs))
            kwargs["rules"] = rules
        try:
            return cls(**kwargs)
        except TypeError as e:
            raise PolicyError(str(e)) from e


def load_policy(path: str) -> Policy:
    """Load a Policy from a YAML file."""
    import yaml  # type: ignore[import-untyped]

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise PolicyError(f"cannot read policy {path}: {e}") from e
    except yaml.YAMLError as e:
        raise PolicyError(f"invalid YAML in policy {path}: {e}") from e

    if not isinstance(data, dict):
        return Policy()

    return Policy.from_dict(data)


def dump_policy(policy: Policy, path: str) -> None:
    """Write a Policy to a YAML file."""
    import yaml  # type: ignore[import-untyped]

    with open(path, "w") as f:
        yaml.safe_dump(policy.to_dict(), f, sort_keys=False)
