"""Container provider: discovers layout snapshot files and yields LayoutNode views.

A snapshot is a JSON document with an already-resolved layout::

    {"container": "UI/Shop.prefab", "root": {"name": "Shop", "children": [...]}}

Nodes carry anchors, offsets, the resolved ``rect`` in reference pixels and
local ``scale``. A ``canvas`` key marks a rendering surface, an ``image`` key an
image placement.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import orjson

from uiaudit.io.asset_store import AssetStore
from uiaudit.models.layout import (
    AncestorView,
    AspectMode,
    DrawMode,
    ImageKind,
    LayoutNode,
    RectLayout,
    ScalingSurface,
    Vec2,
)

logger = logging.getLogger(__name__)

_FITTER_MODES = {
    "fit_in_parent": AspectMode.FIT_INSIDE,
    "fit_inside": AspectMode.FIT_INSIDE,
    "envelope_parent": AspectMode.ENVELOPE,
    "envelope": AspectMode.ENVELOPE,
}


class ContainerLoadError(Exception):
    """A container snapshot could not be opened or traversed."""


@dataclass(slots=True)
class ContainerSnapshot:
    container: str
    root: dict[str, Any]


def discover_containers(
    target: str | Path,
    extensions: tuple[str, ...] = (".json",),
    exclude_dirs: tuple[str, ...] = (),
) -> list[str]:
    """List container files under target (or target itself if a file), sorted by path."""
    target = Path(target)
    if target.is_file():
        return [str(target)]

    excluded = {d.lower() for d in exclude_dirs}
    ext_set = {e.lower() for e in extensions}
    found: list[str] = []
    for dirpath, dirnames, filenames in os.walk(target):
        dirnames[:] = [d for d in dirnames if d.lower() not in excluded]
        for fn in filenames:
            if any(fn.lower().endswith(ext) for ext in ext_set):
                found.append(os.path.join(dirpath, fn))
    found.sort()
    return found


def load_container(path: str | Path) -> ContainerSnapshot:
    path = Path(path)
    try:
        data = orjson.loads(path.read_bytes())
    except OSError as e:
        raise ContainerLoadError(f"cannot read {path}: {e}") from e
    except orjson.JSONDecodeError as e:
        raise ContainerLoadError(f"invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("root"), dict):
        raise ContainerLoadError(f"{path} has no root node")

    container = data.get("container") or str(path)
    return ContainerSnapshot(container=str(container), root=data["root"])


def _vec2(value: Any, default: Vec2) -> Vec2:
    if value is None:
        return default
    if isinstance(value, dict):
        return float(value.get("x", default[0])), float(value.get("y", default[1]))
    if isinstance(value, (list, tuple)) and len(value) == 2:
        return float(value[0]), float(value[1])
    raise ContainerLoadError(f"expected a 2-vector, got {value!r}")


def parse_rect_layout(node: dict[str, Any]) -> RectLayout:
    return RectLayout(
        anchor_min=_vec2(node.get("anchor_min"), (0.5, 0.5)),
        anchor_max=_vec2(node.get("anchor_max"), (0.5, 0.5)),
        offset_min=_vec2(node.get("offset_min"), (0.0, 0.0)),
        offset_max=_vec2(node.get("offset_max"), (0.0, 0.0)),
        size_delta=_vec2(node.get("size_delta"), (0.0, 0.0)),
        rect=_vec2(node.get("rect"), (0.0, 0.0)),
        scale=_vec2(node.get("scale"), (1.0, 1.0)),
        is_surface="canvas" in node,
    )


def _parse_surface(node: dict[str, Any]) -> ScalingSurface | None:
    """Scaling settings of a canvas node, or None when it does not scale with screen size."""
    canvas = node.get("canvas")
    if not isinstance(canvas, dict) or "reference_resolution" not in canvas:
        return None
    ref_w, ref_h = _vec2(canvas.get("reference_resolution"), (0.0, 0.0))
    return ScalingSurface(
        reference_width=ref_w,
        reference_height=ref_h,
        match=float(canvas.get("match", 0.5)),
    )


def _preferred_size(node: dict[str, Any]) -> Vec2:
    le = node.get("layout_element")
    if not isinstance(le, dict):
        return (0.0, 0.0)
    return float(le.get("preferred_width", 0) or 0), float(le.get("preferred_height", 0) or 0)


def _aspect_mode(node: dict[str, Any], image: dict[str, Any], kind: ImageKind) -> AspectMode:
    # sprites honour preserve_aspect only, raw images an aspect fitter only
    if kind is ImageKind.SPRITE:
        return AspectMode.FIT_INSIDE if image.get("preserve_aspect") else AspectMode.NONE
    fitter = node.get("aspect_fitter")
    if isinstance(fitter, dict):
        fitter = fitter.get("mode")
    return _FITTER_MODES.get(str(fitter or "").lower(), AspectMode.NONE)


def _authored_size(image: dict[str, Any], store: AssetStore | None) -> tuple[int, int] | None:
    size = image.get("size")
    if size is not None:
        w, h = _vec2(size, (0.0, 0.0))
        return (round(w), round(h)) if w > 0 and h > 0 else None
    if store is None:
        return None
    return store.pixel_size(str(image.get("texture") or ""))


def iter_layout_nodes(
    snapshot: ContainerSnapshot,
    store: AssetStore | None = None,
) -> list[LayoutNode]:
    """Flatten a snapshot into LayoutNode views, in document order.

    Image nodes whose texture is missing or has zero area are skipped.
    """
    nodes: list[LayoutNode] = []

    def visit(
        raw: dict[str, Any],
        path: list[str],
        ancestors: tuple[AncestorView, ...],
        surface: ScalingSurface | None,
    ) -> None:
        layout = parse_rect_layout(raw)
        name = str(raw.get("name", ""))
        here = path + [name]
        # the nearest canvas decides, even when it carries no scaling settings
        if layout.is_surface:
            surface = _parse_surface(raw)

        image = raw.get("image")
        if isinstance(image, dict):
            node = _build_node(
                snapshot.container,
                "/".join(here),
                raw,
                image,
                layout,
                ancestors,
                surface,
                store,
            )
            if node is not None:
                nodes.append(node)

        view = AncestorView(name=name, layout=layout, preferred_size=_preferred_size(raw))
        for child in raw.get("children") or []:
            if isinstance(child, dict):
                visit(child, here, (view,) + ancestors, surface)

    visit(snapshot.root, [], (), None)
    return nodes


def _build_node(
    container: str,
    path: str,
    raw: dict[str, Any],
    image: dict[str, Any],
    layout: RectLayout,
    ancestors: tuple[AncestorView, ...],
    surface: ScalingSurface | None,
    store: AssetStore | None,
) -> LayoutNode | None:
    authored = _authored_size(image, store)
    if authored is None:
        logger.debug("skipping %s in %s: missing texture or zero-area sprite", path, container)
        return None

    try:
        kind = ImageKind(str(image.get("kind", "sprite")).lower())
        draw_mode = DrawMode(str(image.get("type", "simple")).lower())
    except ValueError:
        logger.debug("skipping %s in %s: unknown image kind or type", path, container)
        return None

    return LayoutNode(
        container=container,
        path=path,
        layout=layout,
        ancestors=ancestors,
        aspect_mode=_aspect_mode(raw, image, kind),
        kind=kind,
        draw_mode=draw_mode if kind is ImageKind.SPRITE else DrawMode.SIMPLE,
        surface=surface,
        texture_path=str(image.get("texture") or ""),
        sprite_name=str(image.get("sprite") or "") if kind is ImageKind.SPRITE else "",
        label=str(image.get("label") or ""),
        authored_width=authored[0],
        authored_height=authored[1],
    )
