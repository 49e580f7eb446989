"""
どこで: `engine.render.compositor`
何を: 外部の合成器（ラスタライズ/合成担当）が満たすべき最小インターフェース `Compositor`。
なぜ: GPU/ウィンドウ実装に依存せず、順序付きレイヤー列の受け渡し境界だけを型で固定するため。

契約:
- `submit(shapes, width, height)` は `shapes` をキー昇順（奥 → 手前）に、非ゼロ巻き数規則で塗る。
- `shapes` は不変スナップショットであり、合成器側で保持してよい。
"""

from __future__ import annotations

from typing import Protocol, Sequence

from .types import Layer


class Compositor(Protocol):
    """順序付き塗りつぶし図形を指定サイズのターゲットへ描画する。"""

    def submit(self, shapes: Sequence[Layer], width: int, height: int) -> None:
        ...


__all__ = ["Compositor"]
