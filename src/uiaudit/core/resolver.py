"""Layout resolver: effective on-screen size of an image in reference pixels.

Works on the immutable ancestor view of a node supplied by the container
provider; nothing here touches a live scene graph.
"""

from __future__ import annotations

from dataclasses import dataclass

from uiaudit.models.layout import AncestorView, AspectMode, LayoutNode, Vec2
from uiaudit.models.policy import Policy

MIN_CUMULATIVE_SCALE = 0.001


@dataclass(frozen=True, slots=True)
class Resolution:
    ref_width: float = 0.0
    ref_height: float = 0.0
    is_context_dependent: bool = False
    container_hint: Vec2 | None = None
    local_scale: float = 1.0
    full_stretch: bool = False
    estimated: bool = False
    nine_sliced: bool = False


def fit_aspect(width: float, height: float, aspect: float, mode: AspectMode) -> Vec2:
    """Adjust a box for aspect preservation (aspect = width / height of the asset)."""
    if aspect <= 0:
        return width, height
    if mode is AspectMode.FIT_INSIDE:
        fit_w = min(width, height * aspect)
        return fit_w, fit_w / aspect
    if mode is AspectMode.ENVELOPE:
        env_w = max(width, height * aspect)
        return env_w, env_w / aspect
    return width, height


def cumulative_scale(node: LayoutNode) -> float:
    """Product of uniform scales from the node up to, not including, the first surface."""
    scale = 1.0
    chain = [node.layout] + [a.layout for a in node.ancestors]
    for layout in chain:
        if layout.is_surface:
            break
        scale *= layout.uniform_scale
    return max(MIN_CUMULATIVE_SCALE, scale)


def _owning_surface_size(ancestors: tuple[AncestorView, ...], start: int, policy: Policy) -> Vec2:
    for ancestor in ancestors[start:]:
        if ancestor.layout.is_surface:
            w, h = ancestor.layout.rect
            return max(1.0, w), max(1.0, h)
    return float(policy.reference_width), float(policy.reference_height)


def surface_pixel_size(node: LayoutNode, policy: Policy) -> Vec2:
    """Size of the enclosing surface; the policy reference when none is known."""
    return _owning_surface_size(node.ancestors, 0, policy)


def find_fixed_container(node: LayoutNode, policy: Policy) -> Vec2 | None:
    """Nearest ancestor that pins a stretched child to a size.

    Each ancestor is compared with the surface that owns it, which for a
    nested canvas is the canvas itself, so the search continues past
    full-size sub-canvases.
    """
    for index, ancestor in enumerate(node.ancestors):
        layout = ancestor.layout
        surface_w, surface_h = _owning_surface_size(node.ancestors, index, policy)
        px = (max(1.0, layout.rect[0]), max(1.0, layout.rect[1]))
        if ancestor.has_preferred_size:
            return px
        smaller_than_surface = px[0] < surface_w - 1.0 or px[1] < surface_h - 1.0
        if smaller_than_surface or layout.has_fixed_size():
            return px
    return None


def resolve(
    node: LayoutNode,
    policy: Policy,
    assumed_container: Vec2 | None = None,
) -> Resolution:
    """Compute the node's displayed size at the reference resolution.

    Full-stretch nodes take the size of their nearest fixed container. When
    there is none the node is context dependent; an ``assumed_container``
    gives it a numeric estimate but it stays flagged. Nine-sliced and tiled
    nodes report their own rect unscaled, since their requirement does not
    depend on authored pixel count.
    """
    width, height = node.layout.rect

    if node.is_nine_sliced:
        return Resolution(
            ref_width=width,
            ref_height=height,
            full_stretch=node.layout.is_full_stretch(),
            nine_sliced=True,
        )

    full_stretch = node.layout.is_full_stretch()
    container = find_fixed_container(node, policy) if full_stretch else None
    context_dependent = full_stretch and container is None
    estimated = False

    if container is not None:
        width, height = fit_aspect(container[0], container[1], node.aspect, node.aspect_mode)
    elif context_dependent and assumed_container is not None:
        assumed_w = max(1.0, assumed_container[0])
        assumed_h = max(1.0, assumed_container[1])
        width, height = fit_aspect(assumed_w, assumed_h, node.aspect, node.aspect_mode)
        estimated = True
    else:
        width, height = fit_aspect(width, height, node.aspect, node.aspect_mode)

    scale = cumulative_scale(node)
    return Resolution(
        ref_width=width * scale,
        ref_height=height * scale,
        is_context_dependent=context_dependent,
        container_hint=container,
        local_scale=scale,
        full_stretch=full_stretch,
        estimated=estimated,
    )
