"""
どこで: `api` 層のキャンバス組み立てヘルパ。
何を: LayerStore/StrokeController/PointerGate を束ねた高レベル API `InkCanvas` を提供する。
なぜ: 入力ループ側が部品の配線を意識せず、押下/移動/解放と描画要求だけで完結できるようにするため。
"""

from __future__ import annotations

from engine.core.pressure import IDENTITY, PressureCurve
from engine.io.controller import StrokeController
from engine.io.events import StrokeEnd, StrokeEvent, StrokeMove, StrokeStart
from engine.io.pointer import MouseButton, PointerGate
from engine.render.compositor import Compositor
from engine.render.layer_store import LayerStore, OrderedLayers
from engine.render.types import Layer


class InkCanvas:
    """ストローク入力を受け付け、順序付きレイヤーとして保持するキャンバス。"""

    def __init__(
        self,
        width: int,
        height: int,
        *,
        curve: PressureCurve = IDENTITY,
        base_width: float | None = None,
        simplify: bool | None = None,
        incremental: bool | None = None,
        draw_button: MouseButton = MouseButton.LEFT,
    ) -> None:
        self.resize(width, height)
        self.store = LayerStore()
        self.controller = StrokeController(
            self.store,
            curve=curve,
            base_width=base_width,
            simplify=simplify,
            incremental=incremental,
        )
        self.gate = PointerGate(draw_button)

    def __repr__(self) -> str:
        return f"InkCanvas({self.width}x{self.height}, layers={len(self.store)})"

    # -------- 論理イベント --------
    def dispatch(self, event: StrokeEvent | None) -> int | None:
        """イベント（None は無視）をコントローラへ渡す。"""
        if event is None:
            return None
        return self.controller.handle(event)

    def start_stroke(self) -> int | None:
        return self.dispatch(StrokeStart())

    def move_stroke(self, position: tuple[float, float], pressure: float = 1.0) -> int | None:
        return self.dispatch(StrokeMove(position, pressure))

    def end_stroke(self) -> int | None:
        return self.dispatch(StrokeEnd())

    # -------- 生の入力（押下状態ゲート経由） --------
    def mouse_pressed(self, button: MouseButton) -> int | None:
        return self.dispatch(self.gate.mouse_pressed(button))

    def mouse_released(self, button: MouseButton) -> int | None:
        return self.dispatch(self.gate.mouse_released(button))

    def mouse_moved(self, position: tuple[float, float]) -> int | None:
        return self.dispatch(self.gate.mouse_moved(position))

    def pen_pressure(self, pressure: float) -> None:
        self.gate.pen_pressure(pressure)

    def pen_pressed(self) -> int | None:
        return self.dispatch(self.gate.pen_pressed())

    def pen_released(self) -> int | None:
        return self.dispatch(self.gate.pen_released())

    def pen_moved(self, position: tuple[float, float]) -> int | None:
        return self.dispatch(self.gate.pen_moved(position))

    # -------- 出力 --------
    def layers(self) -> OrderedLayers:
        return self.store.iter_ordered()

    def snapshot(self) -> tuple[Layer, ...]:
        return self.store.snapshot()

    def render(self, compositor: Compositor) -> int:
        """現在のレイヤー列を合成器へ渡し、渡したレイヤー数を返す。"""
        shapes = self.store.snapshot()
        compositor.submit(shapes, self.width, self.height)
        return len(shapes)

    def resize(self, width: int, height: int) -> None:
        w = int(width)
        h = int(height)
        if w <= 0 or h <= 0:
            raise ValueError(f"キャンバスサイズは正である必要があります: {width}x{height}")
        self.width = w
        self.height = h


__all__ = ["InkCanvas"]
