"""Programmatic texture and layout snapshot fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import numpy as np
import orjson
import pytest
from PIL import Image

from uiaudit.models.layout import (
    AncestorView,
    AspectMode,
    DrawMode,
    LayoutNode,
    RectLayout,
    ScalingSurface,
)
from uiaudit.models.policy import Policy

STRETCH = {"anchor_min": [0, 0], "anchor_max": [1, 1], "size_delta": [0, 0]}


def save_texture(path: Path, width: int, height: int) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    arr = np.random.randint(0, 255, (height, width, 4), dtype=np.uint8)
    Image.fromarray(arr).save(path)
    return path


def write_snapshot(path: Path, root: dict[str, Any], container: str | None = None) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    data: dict[str, Any] = {"root": root}
    if container is not None:
        data["container"] = container
    path.write_bytes(orjson.dumps(data))
    return path


def canvas(name: str, children: list[dict[str, Any]]) -> dict[str, Any]:
    return {
        "name": name,
        **STRETCH,
        "rect": [1920, 1080],
        "canvas": {"reference_resolution": [1920, 1080], "match": 0.5},
        "children": children,
    }


def make_node(
    rect: tuple[float, float] = (100.0, 100.0),
    authored: tuple[int, int] = (256, 256),
    stretch: bool = False,
    ancestors: tuple[AncestorView, ...] = (),
    scale: tuple[float, float] = (1.0, 1.0),
    aspect_mode: AspectMode = AspectMode.NONE,
    draw_mode: DrawMode = DrawMode.SIMPLE,
    surface: ScalingSurface | None = None,
    label: str = "",
) -> LayoutNode:
    anchors = ((0.0, 0.0), (1.0, 1.0)) if stretch else ((0.5, 0.5), (0.5, 0.5))
    layout = RectLayout(anchor_min=anchors[0], anchor_max=anchors[1], rect=rect, scale=scale)
    return LayoutNode(
        container="UI/Test.prefab",
        path="Canvas/Image",
        layout=layout,
        ancestors=ancestors,
        aspect_mode=aspect_mode,
        draw_mode=draw_mode,
        surface=surface,
        texture_path="Assets/UI/icon.png",
        sprite_name="icon",
        label=label,
        authored_width=authored[0],
        authored_height=authored[1],
    )


@pytest.fixture
def policy() -> Policy:
    return Policy()


@pytest.fixture
def node_factory() -> Callable[..., LayoutNode]:
    return make_node


@pytest.fixture
def snapshot_writer() -> Callable[..., Path]:
    return write_snapshot


@pytest.fixture
def surface_ancestor() -> AncestorView:
    """A full-screen canvas at the default reference resolution."""
    layout = RectLayout(
        anchor_min=(0.0, 0.0), anchor_max=(1.0, 1.0), rect=(1920.0, 1080.0), is_surface=True
    )
    return AncestorView(name="Canvas", layout=layout)


@pytest.fixture
def container_dir(tmp_path: Path) -> Path:
    """Two valid containers, one corrupt one and one under an excluded directory."""
    root = tmp_path / "containers"

    write_snapshot(
        root / "shop.json",
        canvas(
            "Canvas",
            [
                {
                    "name": "Slot",
                    "rect": [100, 100],
                    "children": [
                        {
                            "name": "Icon",
                            **STRETCH,
                            "rect": [100, 100],
                            "image": {
                                "texture": "icons/coin.png",
                                "sprite": "coin",
                                "size": [128, 128],
                            },
                        }
                    ],
                },
                {
                    "name": "Banner",
                    "rect": [200, 200],
                    "image": {"texture": "banner.png", "size": [4096, 4096]},
                },
                {
                    "name": "Background",
                    **STRETCH,
                    "rect": [1920, 1080],
                    "image": {"texture": "bg.png", "size": [1024, 1024]},
                },
                {
                    "name": "Frame",
                    "rect": [300, 50],
                    "image": {"texture": "frame.png", "type": "sliced", "size": [64, 64]},
                },
            ],
        ),
        container="UI/Shop.prefab",
    )

    write_snapshot(
        root / "hud.json",
        canvas(
            "HUD",
            [
                {
                    "name": "Coin",
                    "rect": [64, 64],
                    "image": {"texture": "icons/coin.png", "sprite": "coin", "size": [256, 256]},
                }
            ],
        ),
        container="UI/Hud.prefab",
    )

    (root / "broken.json").write_text("{ not json")

    write_snapshot(
        root / "Packages" / "vendor.json",
        canvas("Vendor", [{"name": "X", "rect": [10, 10], "image": {"size": [1, 1]}}]),
    )
    return root


@pytest.fixture
def texture_dir(tmp_path: Path) -> Path:
    """Textures for the label audit; UI/Icon/M needs 128x128 under the default policy."""
    root = tmp_path / "textures"
    save_texture(root / "icons" / "ok.png", 128, 128)
    save_texture(root / "icons" / "small.png", 32, 32)
    save_texture(root / "icons" / "big.png", 512, 512)
    save_texture(root / "misc.png", 64, 64)
    (root / "notes.txt").write_text("not a texture")
    return root


@pytest.fixture
def labels_map() -> dict[str, str]:
    return {
        "icons/ok.png": "UI/Icon/M",
        "icons/small.png": "UI/Icon/M",
        "icons/big.png": "UI/Icon/M",
    }


@pytest.fixture
def huge_texture_dir(tmp_path: Path) -> Path:
    """A 16384x16384 bilevel texture, past Pillow's decompression bomb limit."""
    root = tmp_path / "huge"
    root.mkdir()
    Image.new("1", (16384, 16384)).save(root / "huge.png")
    return root
