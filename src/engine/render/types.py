"""
どこで: `engine.render` 型定義。
何を: 描画順キー付きの軽量データクラス `Layer`。
なぜ: 1 フレーム内で複数のストローク輪郭を奥から手前へ順描画するためのコンテナが必要。
"""

from __future__ import annotations

from dataclasses import dataclass, field

from engine.core.outline import OutlinePolygon


@dataclass(frozen=True)
class Layer:
    """描画順キーと塗りつぶし輪郭の組（不変）。"""

    order_key: int  # 大きいほど手前に描画
    geometry: OutlinePolygon = field(default_factory=OutlinePolygon.empty)

    @property
    def is_empty(self) -> bool:
        return self.geometry.is_empty


__all__ = ["Layer"]
