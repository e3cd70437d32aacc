"""Read-only layout views handed to the resolver by the container provider."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

Vec2 = tuple[float, float]

_SQR_EPSILON = 0.001


class AspectMode(str, Enum):
    NONE = "none"
    FIT_INSIDE = "fit_inside"
    ENVELOPE = "envelope"


class ImageKind(str, Enum):
    SPRITE = "sprite"
    RAW = "raw"


class DrawMode(str, Enum):
    SIMPLE = "simple"
    SLICED = "sliced"
    TILED = "tiled"
    FILLED = "filled"


def _sqr_magnitude(v: Vec2) -> float:
    return v[0] * v[0] + v[1] * v[1]


def _approx(a: float, b: float) -> bool:
    return math.isclose(a, b, rel_tol=1e-6, abs_tol=1e-6)


@dataclass(frozen=True, slots=True)
class RectLayout:
    """Anchoring and resolved size of one rectangle, in reference pixels."""

    anchor_min: Vec2 = (0.5, 0.5)
    anchor_max: Vec2 = (0.5, 0.5)
    offset_min: Vec2 = (0.0, 0.0)
    offset_max: Vec2 = (0.0, 0.0)
    size_delta: Vec2 = (0.0, 0.0)
    rect: Vec2 = (0.0, 0.0)
    scale: Vec2 = (1.0, 1.0)
    is_surface: bool = False

    def is_full_stretch(self) -> bool:
        """Anchored to fill the parent on both axes with no offset or size delta."""
        if self.anchor_min != (0.0, 0.0) or self.anchor_max != (1.0, 1.0):
            return False
        offsets_zero = (
            _sqr_magnitude(self.offset_min) < _SQR_EPSILON
            and _sqr_magnitude(self.offset_max) < _SQR_EPSILON
        )
        return offsets_zero and _sqr_magnitude(self.size_delta) < _SQR_EPSILON

    def has_fixed_size(self) -> bool:
        non_stretch_x = not (_approx(self.anchor_min[0], 0.0) and _approx(self.anchor_max[0], 1.0))
        non_stretch_y = not (_approx(self.anchor_min[1], 0.0) and _approx(self.anchor_max[1], 1.0))
        if non_stretch_x or non_stretch_y:
            return True
        if _sqr_magnitude(self.size_delta) > _SQR_EPSILON:
            return True
        return (
            _sqr_magnitude(self.offset_min) > _SQR_EPSILON
            or _sqr_magnitude(self.offset_max) > _SQR_EPSILON
        )

    @property
    def uniform_scale(self) -> float:
        return max(self.scale[0], self.scale[1])


@dataclass(frozen=True, slots=True)
class ScalingSurface:
    """Reference resolution and match of a surface that scales with screen size."""

    reference_width: float = 0.0
    reference_height: float = 0.0
    match: float = 0.5


@dataclass(frozen=True, slots=True)
class AncestorView:
    name: str = ""
    layout: RectLayout = RectLayout()
    preferred_size: Vec2 = (0.0, 0.0)  # <= 0 on an axis = no preference

    @property
    def has_preferred_size(self) -> bool:
        return self.preferred_size[0] > 0 or self.preferred_size[1] > 0


@dataclass(frozen=True, slots=True)
class LayoutNode:
    """One image placement inside a container, with its ancestor chain (nearest first)."""

    container: str = ""
    path: str = ""
    layout: RectLayout = RectLayout()
    ancestors: tuple[AncestorView, ...] = ()
    aspect_mode: AspectMode = AspectMode.NONE
    kind: ImageKind = ImageKind.SPRITE
    draw_mode: DrawMode = DrawMode.SIMPLE
    surface: ScalingSurface | None = None
    texture_path: str = ""
    sprite_name: str = ""
    label: str = ""
    authored_width: int = 0
    authored_height: int = 0

    @property
    def is_nine_sliced(self) -> bool:
        return self.draw_mode in (DrawMode.SLICED, DrawMode.TILED)

    @property
    def asset_name(self) -> str:
        if self.sprite_name:
            return self.sprite_name
        base = self.texture_path.replace("\\", "/").rsplit("/", 1)[-1]
        return base.rsplit(".", 1)[0] if "." in base else base

    @property
    def aspect(self) -> float:
        return self.authored_width / max(1.0, float(self.authored_height))
