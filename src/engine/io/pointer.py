"""
どこで: `engine.io.pointer`
何を: マウスボタン/ペン接触の押下状態を追跡し、生の押下・移動・解放を StrokeStart/Move/End へ変換する `PointerGate`。
なぜ: 二重押下や別ボタンの解放でストロークが重複/途切れないよう、開始と終了を必ず対にするため。

仕様/注意:
- 同時に扱うストロークは 1 本（マウスかペンの先着側）。もう一方の入力は終了まで無視する。
- マウスは描画ボタン（既定: 左）のドラッグのみストロークになる。他ボタンは押下状態だけ追跡する。
- マウス移動の筆圧は 1.0、ペン移動は直近に報告された筆圧を使う。
- 座標はパン/ズーム適用済みの論理座標であることを呼び出し側が保証する。
"""

from __future__ import annotations

import enum

from common.types import Vec2

from .events import StrokeEnd, StrokeEvent, StrokeMove, StrokeStart


class MouseButton(enum.Enum):
    LEFT = "left"
    MIDDLE = "middle"
    RIGHT = "right"


class _Source(enum.Enum):
    MOUSE = "mouse"
    PEN = "pen"


class PointerGate:
    """押下状態からストロークイベントを生成する。各メソッドはイベントか None を返す。"""

    def __init__(self, draw_button: MouseButton = MouseButton.LEFT) -> None:
        self.draw_button = draw_button
        self._mouse_press: MouseButton | None = None
        self._pen_press = False
        self._pressure = 0.0
        self._source: _Source | None = None

    @property
    def drawing(self) -> bool:
        return self._source is not None

    @property
    def pressure(self) -> float:
        """直近に報告されたペン筆圧。"""
        return self._pressure

    def is_mouse_dragging(self, button: MouseButton) -> bool:
        return self._mouse_press == button

    def is_pen_pressed(self) -> bool:
        return self._pen_press

    # -------- mouse --------
    def mouse_pressed(self, button: MouseButton) -> StrokeEvent | None:
        if self._mouse_press is not None:
            return None
        self._mouse_press = button
        if button == self.draw_button and self._source is None:
            self._source = _Source.MOUSE
            return StrokeStart()
        return None

    def mouse_released(self, button: MouseButton) -> StrokeEvent | None:
        if self._mouse_press != button:
            return None
        self._mouse_press = None
        if button == self.draw_button and self._source is _Source.MOUSE:
            self._source = None
            return StrokeEnd()
        return None

    def mouse_moved(self, position: Vec2) -> StrokeEvent | None:
        if self._source is _Source.MOUSE:
            return StrokeMove(position, 1.0)
        return None

    # -------- pen --------
    def pen_pressure(self, pressure: float) -> None:
        self._pressure = float(pressure)

    def pen_pressed(self) -> StrokeEvent | None:
        if self._pen_press:
            return None
        self._pen_press = True
        if self._source is None:
            self._source = _Source.PEN
            return StrokeStart()
        return None

    def pen_released(self) -> StrokeEvent | None:
        if not self._pen_press:
            return None
        self._pen_press = False
        if self._source is _Source.PEN:
            self._source = None
            return StrokeEnd()
        return None

    def pen_moved(self, position: Vec2) -> StrokeEvent | None:
        if self._source is _Source.PEN:
            return StrokeMove(position, self._pressure)
        return None

    def __repr__(self) -> str:
        src = self._source.value if self._source is not None else None
        return f"PointerGate(source={src}, pressure={self._pressure:.3f})"


__all__ = ["PointerGate", "MouseButton"]
