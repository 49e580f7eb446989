"""
リボン輪郭型 `OutlinePolygon`（塗りつぶし図形の唯一の表現）

本モジュールは、ストロークから合成された可変幅リボンを表す閉ポリゴン型を提供する。
Compositor へ渡す図形はすべてこの型で表現し、生成後は不変として扱う。

データモデル（不変条件）:
- `vertices: float64 ndarray (N, 2)`: 1 本の閉ループ。先頭頂点は暗黙に末尾へ接続する。
- 空ポリゴンは `vertices.shape == (0, 2)`（ストロークが 2 点未満の相異なる位置しか持たない場合）。
- NaN/Inf 座標は生成時に拒否する（`ValueError`）。
- 配列は書き込み禁止フラグ付きで保持し、共有しても外部から改変されない。

塗り規則:
- Compositor は非ゼロ巻き数規則で塗りつぶす前提。自己重なりがあっても穴は生じない。

直感図（直線ストローク (0,0)→(100,0), 半幅 8）:

    # 頂点順（リボン順）
    #   0: ( 0,  8)   前進側
    #   1: (100, 8)
    #   2: (100,-8)   後退側
    #   3: ( 0, -8)
"""

from __future__ import annotations

from typing import Iterator, Sequence

import numpy as np

from common.types import Vec2


def _normalize_vertices(vertices: np.ndarray | Sequence[Sequence[float]]) -> np.ndarray:
    """`OutlinePolygon` 生成時の内部正規化ヘルパ。"""
    arr = np.asarray(vertices, dtype=np.float64)
    if arr.size == 0:
        arr = arr.reshape(0, 2)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError("vertices は形状 (N, 2) の配列である必要があります。")
    if not np.all(np.isfinite(arr)):
        raise ValueError("vertices に NaN/Inf を含めることはできません。")
    if arr.shape[0] in (1, 2):
        raise ValueError("閉ポリゴンは 0 または 3 頂点以上である必要があります。")
    arr = np.array(arr, dtype=np.float64, order="C", copy=True)
    arr.flags.writeable = False
    return arr


class OutlinePolygon:
    """閉じた塗りつぶし輪郭。

    フィールド:
    - `vertices (N,2) float64`: リボン順の頂点列（書き込み禁止）。
    """

    __slots__ = ("vertices",)

    vertices: np.ndarray

    def __init__(self, vertices: np.ndarray | Sequence[Sequence[float]]):
        self.vertices = _normalize_vertices(vertices)

    # ── 構築 ─────────────────────────────────
    @classmethod
    def empty(cls) -> "OutlinePolygon":
        return _EMPTY

    @classmethod
    def from_sides(cls, forward: np.ndarray, backward: np.ndarray) -> "OutlinePolygon":
        """前進側と後退側（ともにサンプル順）から閉ループを組み立てる。

        後退側は逆順に連結する。どちらかが空なら空ポリゴン。
        """
        if len(forward) == 0 or len(backward) == 0:
            return _EMPTY
        return cls(np.concatenate([forward, backward[::-1]], axis=0))

    # ── 参照 ─────────────────────────────────
    @property
    def is_empty(self) -> bool:
        return self.vertices.shape[0] == 0

    @property
    def n_vertices(self) -> int:
        return int(self.vertices.shape[0])

    def __len__(self) -> int:
        return self.n_vertices

    def __iter__(self) -> Iterator[Vec2]:
        for x, y in self.vertices:
            yield (float(x), float(y))

    def __bool__(self) -> bool:
        return not self.is_empty

    def bounds(self) -> tuple[float, float, float, float] | None:
        """軸平行外接矩形 `(xmin, ymin, xmax, ymax)`。空なら None。"""
        if self.is_empty:
            return None
        mn = self.vertices.min(axis=0)
        mx = self.vertices.max(axis=0)
        return float(mn[0]), float(mn[1]), float(mx[0]), float(mx[1])

    def signed_area(self) -> float:
        """シューレース公式による符号付き面積（y 下向き座標では符号が反転して見える）。"""
        if self.is_empty:
            return 0.0
        x = self.vertices[:, 0]
        y = self.vertices[:, 1]
        return 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y))

    def as_array(self) -> np.ndarray:
        """頂点配列のコピー（書き込み可能）を返す。"""
        return self.vertices.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OutlinePolygon):
            return NotImplemented
        return np.array_equal(self.vertices, other.vertices)

    def __hash__(self) -> int:
        return hash(self.vertices.tobytes())

    def __repr__(self) -> str:
        return f"OutlinePolygon(n_vertices={self.n_vertices})"


_EMPTY = OutlinePolygon(np.zeros((0, 2), dtype=np.float64))


__all__ = ["OutlinePolygon"]
