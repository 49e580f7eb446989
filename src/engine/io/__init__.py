"""
どこで: `engine.io` サブパッケージ。
何を: 入力イベント（StrokeStart/Move/End）、押下状態ゲート（PointerGate）、ストローク制御（StrokeController）。
なぜ: デバイス入力とストローク合成の境界を 1 箇所に集め、状態機械を局所化するため。
"""

from .controller import StrokeController
from .events import StrokeEnd, StrokeEvent, StrokeMove, StrokeStart
from .pointer import MouseButton, PointerGate

__all__ = [
    "StrokeController",
    "StrokeStart",
    "StrokeMove",
    "StrokeEnd",
    "StrokeEvent",
    "PointerGate",
    "MouseButton",
]
