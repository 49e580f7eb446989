"""
どこで: `engine.render.layer_store`
何を: 描画順キーで並ぶレイヤー集合 `LayerStore`（予約・置換・封印・順序付き走査）。
なぜ: ライブプレビュー中のストロークを「予約済みスロットの置換」で更新し、
      確定後に重複レイヤーを作らないようにするため。

不変条件:
- キーは 1 から始まり、予約ごとに厳密に +1 される。一度払い出したキーは再利用しない。
- 走査順 = キー順 = 挿入順。
- 削除操作は持たない（取り消しは外部の責務）。
- 封印済み（確定済み）レイヤーは置換できない。

スレッド:
- 入力処理スレッドのみが書き込む前提。別スレッドの Compositor には `snapshot()` を渡す。
"""

from __future__ import annotations

import logging
from typing import Iterator

from engine.core.errors import LayerSealedError
from engine.core.outline import OutlinePolygon

from .types import Layer

logger = logging.getLogger(__name__)


class OrderedLayers:
    """`LayerStore` の順序付きビュー（遅延・有限・再走査可能）。"""

    __slots__ = ("_store",)

    def __init__(self, store: "LayerStore") -> None:
        self._store = store

    def __iter__(self) -> Iterator[tuple[int, OutlinePolygon]]:
        # dict は挿入順 = キー順
        for key, layer in self._store._layers.items():
            yield key, layer.geometry

    def __len__(self) -> int:
        return len(self._store)


class LayerStore:
    """予約済みキー → `Layer` の順序付きマップ。"""

    FIRST_KEY = 1

    def __init__(self) -> None:
        self._layers: dict[int, Layer] = {}
        self._sealed: set[int] = set()
        self._next_key = self.FIRST_KEY

    # ── 書き込み ─────────────────────────────
    def reserve_next(self) -> int:
        """次のキーを払い出し、空レイヤーを挿入して返す。"""
        key = self._next_key
        self._next_key += 1
        self._layers[key] = Layer(key)
        logger.debug("reserved layer key=%d", key)
        return key

    def replace(self, order_key: int, geometry: OutlinePolygon) -> None:
        """予約済みキーのジオメトリを置き換える。

        Raises
        ------
        KeyError
            未予約のキー。
        LayerSealedError
            封印済み（確定済み）のキー。
        """
        if order_key not in self._layers:
            raise KeyError(f"未予約のレイヤーキーです: {order_key}")
        if order_key in self._sealed:
            raise LayerSealedError(f"確定済みレイヤーは置き換えられません: {order_key}")
        self._layers[order_key] = Layer(order_key, geometry)

    def seal(self, order_key: int) -> None:
        """レイヤーを確定（以後の置換を禁止）。"""
        if order_key not in self._layers:
            raise KeyError(f"未予約のレイヤーキーです: {order_key}")
        self._sealed.add(order_key)

    # ── 参照 ─────────────────────────────────
    def iter_ordered(self) -> OrderedLayers:
        """`(order_key, OutlinePolygon)` をキー昇順に返す再走査可能なビュー。"""
        return OrderedLayers(self)

    def snapshot(self) -> tuple[Layer, ...]:
        """現在のレイヤー列の不変スナップショット（別スレッドへの受け渡し用）。"""
        return tuple(self._layers.values())

    def get(self, order_key: int) -> Layer:
        return self._layers[order_key]

    def is_sealed(self, order_key: int) -> bool:
        return order_key in self._sealed

    @property
    def latest_key(self) -> int | None:
        """最後に予約したキー（未予約なら None）。"""
        if not self._layers:
            return None
        return self._next_key - 1

    def __contains__(self, order_key: object) -> bool:
        return order_key in self._layers

    def __len__(self) -> int:
        return len(self._layers)

    def __repr__(self) -> str:
        return f"LayerStore(n_layers={len(self)}, latest_key={self.latest_key})"


__all__ = ["LayerStore", "OrderedLayers"]
