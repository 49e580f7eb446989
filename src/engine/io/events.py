"""
どこで: `engine.io.events`
何を: 入力層からストローク処理へ渡す閉じたイベント集合（StrokeStart / StrokeMove / StrokeEnd）。
なぜ: ウィンドウ/デバイス固有のイベントを、論理キャンバス座標の 3 種類に正規化して受け渡すため。
"""

from __future__ import annotations

from dataclasses import dataclass

from common.types import Vec2


@dataclass(slots=True, frozen=True)
class StrokeStart:
    """ストローク開始（ポインタ押下）。"""


@dataclass(slots=True, frozen=True)
class StrokeMove:
    """ストローク継続。`position` はパン/ズーム適用済みの論理座標、`pressure` は未丸めでも可。"""

    position: Vec2
    pressure: float = 1.0


@dataclass(slots=True, frozen=True)
class StrokeEnd:
    """ストローク確定（ポインタ解放）。"""


StrokeEvent = StrokeStart | StrokeMove | StrokeEnd


__all__ = ["StrokeStart", "StrokeMove", "StrokeEnd", "StrokeEvent"]
