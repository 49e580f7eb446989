from __future__ import annotations

from typing import Sequence

import numpy as np
import pytest

import api
from api import GammaPressureCurve, InkCanvas, Layer, MouseButton


class RecordingCompositor:
    """`submit()` の呼び出しを記録するだけの合成器。"""

    def __init__(self) -> None:
        self.calls: list[tuple[tuple[Layer, ...], int, int]] = []

    def submit(self, shapes: Sequence[Layer], width: int, height: int) -> None:
        self.calls.append((tuple(shapes), width, height))


@pytest.mark.smoke
def test_public_api_surface() -> None:
    for name in api.__all__:
        assert hasattr(api, name), name
    assert isinstance(api.__version__, str)


@pytest.mark.integration
def test_mouse_drag_becomes_single_layer_and_is_rendered() -> None:
    canvas = InkCanvas(800, 600, base_width=16.0)
    canvas.mouse_moved((0.0, 0.0))  # 押下前の移動は無視
    assert canvas.mouse_pressed(MouseButton.LEFT) == 1
    canvas.mouse_moved((0.0, 0.0))
    canvas.mouse_moved((100.0, 0.0))
    canvas.mouse_released(MouseButton.LEFT)

    layers = list(canvas.layers())
    assert len(layers) == 1
    key, outline = layers[0]
    assert key == 1
    assert np.allclose(outline.vertices, [(0.0, 8.0), (100.0, 8.0), (100.0, -8.0), (0.0, -8.0)])

    comp = RecordingCompositor()
    assert canvas.render(comp) == 1
    shapes, w, h = comp.calls[0]
    assert (w, h) == (800, 600)
    assert shapes == canvas.snapshot()


def test_pen_pressure_shapes_width() -> None:
    canvas = InkCanvas(100, 100, base_width=10.0)
    canvas.pen_pressure(0.5)
    canvas.pen_pressed()
    canvas.pen_moved((0.0, 0.0))
    canvas.pen_pressure(1.0)
    canvas.pen_moved((50.0, 0.0))
    canvas.pen_released()

    (_, outline), = list(canvas.layers())
    assert np.allclose(outline.vertices, [(0.0, 2.5), (50.0, 5.0), (50.0, -5.0), (0.0, -2.5)])


def test_gamma_curve_is_forwarded() -> None:
    canvas = InkCanvas(100, 100, base_width=10.0, curve=GammaPressureCurve(gamma=2.0))
    canvas.start_stroke()
    canvas.move_stroke((0.0, 0.0), 0.5)
    canvas.move_stroke((0.0, 20.0), 0.5)
    canvas.end_stroke()
    (_, outline), = list(canvas.layers())
    xmin, _, xmax, _ = outline.bounds()
    assert xmax - xmin == pytest.approx(2.5)


def test_render_before_any_stroke_submits_nothing() -> None:
    canvas = InkCanvas(10, 10)
    comp = RecordingCompositor()
    assert canvas.render(comp) == 0
    assert comp.calls == [((), 10, 10)]


def test_dispatch_ignores_none() -> None:
    canvas = InkCanvas(10, 10)
    assert canvas.dispatch(None) is None
    assert len(canvas.store) == 0


def test_resize_validates_dimensions() -> None:
    canvas = InkCanvas(10, 10)
    canvas.resize(20, 30)
    assert (canvas.width, canvas.height) == (20, 30)
    with pytest.raises(ValueError):
        canvas.resize(0, 30)
    with pytest.raises(ValueError):
        InkCanvas(10, -1)


def test_snapshot_is_detached_from_later_strokes() -> None:
    canvas = InkCanvas(10, 10)
    canvas.start_stroke()
    canvas.move_stroke((0.0, 0.0))
    canvas.move_stroke((5.0, 0.0))
    canvas.end_stroke()
    snap = canvas.snapshot()
    canvas.start_stroke()
    assert len(snap) == 1
    assert len(canvas.snapshot()) == 2
