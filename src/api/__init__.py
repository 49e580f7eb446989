"""
どこで: `api` 入口（高レベル公開 API）。
何を: `InkCanvas`・イベント型・筆圧写像・輪郭型などを再輸出。
なぜ: 利用者が単一名前空間から入力受付 → 輪郭合成 → 合成器への受け渡しまで完結できるようにするため。

Usage:
    from api import InkCanvas, MouseButton

    canvas = InkCanvas(800, 600)
    canvas.mouse_pressed(MouseButton.LEFT)
    canvas.mouse_moved((10.0, 10.0))
    canvas.mouse_moved((40.0, 12.0))
    canvas.mouse_released(MouseButton.LEFT)
    for key, outline in canvas.layers():
        ...
"""

from engine.core.outline import OutlinePolygon
from engine.core.pen import PenSample
from engine.core.pressure import GammaPressureCurve, IdentityPressureCurve, PressureCurve
from engine.io.events import StrokeEnd, StrokeMove, StrokeStart
from engine.io.pointer import MouseButton
from engine.render.compositor import Compositor
from engine.render.layer_store import LayerStore
from engine.render.types import Layer
from engine.stroke.ribbon import build_outline
from engine.stroke.simplify import simplify_samples

from .canvas import InkCanvas

__all__ = [
    # メインAPI
    "InkCanvas",
    "MouseButton",
    "StrokeStart",
    "StrokeMove",
    "StrokeEnd",
    # 部品（高度な使用）
    "LayerStore",
    "Layer",
    "Compositor",
    "OutlinePolygon",
    "PenSample",
    "PressureCurve",
    "IdentityPressureCurve",
    "GammaPressureCurve",
    "build_outline",
    "simplify_samples",
]

# バージョン情報
__version__ = "2026.10"
