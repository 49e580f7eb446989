"""
リボン合成（OutlineBuilder: サンプル列 → 可変幅の閉ポリゴン）

- 隣接サンプル間の方向ベクトルの垂線で左右へオフセットし、前進側と後退側を連結して 1 本の閉ループにする。
- 半幅は `W/2 * PressureCurve(pressure)`。

主なパラメータ:
- base_width: 筆圧 1.0 のときの全幅 W（既定は設定 `STROKE_BASE_WIDTH`）。
- eps: 縮退判定の距離閾値（既定は設定 `DEGENERATE_EPS`）。

仕様/注意:
- 垂線は `rotate90(x, y) = (y, -x)` を正規化したもの。前進側は `-p * hw`、後退側は `+p * hw`。
- 先頭サンプルは最初の採用セグメントの垂線、以降の各サンプルは「入ってくる」採用セグメントの垂線を使う。
  継ぎ目の二等分線平均やマイター/ラウンド処理は行わない（平坦な継ぎ目）。
- 直前の採用位置からの距離が eps 未満のサンプルは丸ごと読み飛ばす（正規化による NaN を出さない）。
- 非有限の位置を持つサンプルも読み飛ばす。採用サンプルが 2 未満なら空ポリゴン。
- 出力頂点数は `2 * 採用サンプル数`。

実装メモ（詳細設計）:
- 全再構築は Numba カーネル `_ribbon_kernel`（float64, fastmath なし）。`USE_NUMBA=0` で同じカーネルの
  `py_func`（純 Python 経路）を使う。
- `RibbonAccumulator` は 1 サンプル追加ごとに頂点ペアを 1 組だけ追記する増分版。各サンプルの頂点は
  入ってくるセグメントのみに依存するため、全再構築と同一の結果になる。
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Sequence

import numpy as np
from numba import njit  # type: ignore[attr-defined]

from common.settings import get as get_settings

from ..core.outline import OutlinePolygon
from ..core.pen import PenSample
from ..core.pressure import IDENTITY, PressureCurve, half_width, half_widths

logger = logging.getLogger(__name__)


def resolve_base_width(base_width: float | None) -> float:
    """全幅 W を確定する（None なら設定値）。負または非有限なら `ValueError`。"""
    w = get_settings().STROKE_BASE_WIDTH if base_width is None else float(base_width)
    if not math.isfinite(w) or w < 0.0:
        raise ValueError(f"base_width は 0 以上の有限値である必要があります: {base_width!r}")
    return w


def _resolve_eps(eps: float | None) -> float:
    e = get_settings().DEGENERATE_EPS if eps is None else float(eps)
    if not math.isfinite(e) or e < 0.0:
        raise ValueError(f"eps は 0 以上の有限値である必要があります: {eps!r}")
    return e


def build_outline(
    samples: Sequence[PenSample],
    curve: PressureCurve = IDENTITY,
    base_width: float | None = None,
    *,
    eps: float | None = None,
    use_numba: bool | None = None,
) -> OutlinePolygon:
    """サンプル列からリボン輪郭を合成する。

    Parameters
    ----------
    samples : Sequence[PenSample]
        ストロークのサンプル列（記録順）。
    curve : PressureCurve, default IDENTITY
        筆圧 → 半幅倍率の写像。
    base_width : float | None
        全幅 W。None なら設定値。
    eps : float | None
        縮退セグメント判定の距離閾値。None なら設定値。
    use_numba : bool | None
        Numba カーネルを使うか。None なら設定値。

    Returns
    -------
    OutlinePolygon
        閉ポリゴン。採用サンプルが 2 未満なら空。
    """
    width = resolve_base_width(base_width)
    threshold = _resolve_eps(eps)
    if len(samples) < 2:
        return OutlinePolygon.empty()

    xy = np.array([s.position for s in samples], dtype=np.float64).reshape(-1, 2)
    hw = half_widths(samples, curve, width)
    finite = np.isfinite(xy).all(axis=1)
    if not finite.all():
        logger.debug("build_outline: skipped %d non-finite samples", int((~finite).sum()))
        xy = np.ascontiguousarray(xy[finite])
        hw = np.ascontiguousarray(hw[finite])

    if use_numba is None:
        use_numba = get_settings().USE_NUMBA
    kernel = _ribbon_kernel if use_numba else _ribbon_kernel.py_func
    forward, backward = kernel(xy, hw, threshold)
    if forward.shape[0] < 2:
        return OutlinePolygon.empty()
    return OutlinePolygon.from_sides(forward, backward)


def segment_quad(
    a: PenSample,
    b: PenSample,
    curve: PressureCurve = IDENTITY,
    base_width: float | None = None,
    *,
    eps: float | None = None,
) -> OutlinePolygon:
    """1 セグメント分の四角形（a 前進側, b 前進側, b 後退側, a 後退側）。縮退時は空。"""
    width = resolve_base_width(base_width)
    threshold = _resolve_eps(eps)
    perp = _unit_perpendicular(a.x, a.y, b.x, b.y, threshold)
    if perp is None:
        return OutlinePolygon.empty()
    px, py = perp
    ha = half_width(a.pressure, curve, width)
    hb = half_width(b.pressure, curve, width)
    return OutlinePolygon(
        [
            (a.x - px * ha, a.y - py * ha),
            (b.x - px * hb, b.y - py * hb),
            (b.x + px * hb, b.y + py * hb),
            (a.x + px * ha, a.y + py * ha),
        ]
    )


def _unit_perpendicular(
    ax: float, ay: float, bx: float, by: float, eps: float
) -> tuple[float, float] | None:
    """a→b の単位垂線 `normalize((dy, -dx))`。正規化できなければ None。"""
    dx = bx - ax
    dy = by - ay
    length = math.sqrt(dx * dx + dy * dy)
    if not (length > 0.0 and length >= eps and length < math.inf):
        return None
    return dy / length, -dx / length


class RibbonAccumulator:
    """サンプルを 1 つずつ受け取り、リボンを増分的に伸ばす。

    - `push()` は O(1)（頂点ペアを 1 組追記するだけ）。
    - `outline()` は `build_outline(これまでの全サンプル)` と同じ頂点列を返す。
    """

    def __init__(
        self,
        curve: PressureCurve = IDENTITY,
        base_width: float | None = None,
        *,
        eps: float | None = None,
    ) -> None:
        self._curve = curve
        self._width = resolve_base_width(base_width)
        self._eps = _resolve_eps(eps)
        self._forward: list[tuple[float, float]] = []
        self._backward: list[tuple[float, float]] = []
        # 直前に採用したサンプル（x, y, 半幅）。最初の有限サンプルで初期化。
        self._last: tuple[float, float, float] | None = None
        self._n_seen = 0

    @property
    def n_retained(self) -> int:
        return len(self._forward)

    @property
    def n_seen(self) -> int:
        return self._n_seen

    def __len__(self) -> int:
        return self.n_retained

    def push(self, sample: PenSample) -> bool:
        """サンプルを追加する。リボンが伸びた場合に True。"""
        self._n_seen += 1
        x, y = sample.position
        if not (math.isfinite(x) and math.isfinite(y)):
            return False
        h = half_width(sample.pressure, self._curve, self._width)
        if self._last is None:
            self._last = (x, y, h)
            return False

        lx, ly, lh = self._last
        perp = _unit_perpendicular(lx, ly, x, y, self._eps)
        if perp is None:
            return False
        px, py = perp
        if not self._forward:
            # 先頭サンプルは最初の採用セグメントの垂線を使う
            self._forward.append((lx - px * lh, ly - py * lh))
            self._backward.append((lx + px * lh, ly + py * lh))
        self._forward.append((x - px * h, y - py * h))
        self._backward.append((x + px * h, y + py * h))
        self._last = (x, y, h)
        return True

    def extend(self, samples: Iterable[PenSample]) -> int:
        """複数サンプルを追加し、伸びた回数を返す。"""
        return sum(1 for s in samples if self.push(s))

    def outline(self) -> OutlinePolygon:
        if len(self._forward) < 2:
            return OutlinePolygon.empty()
        return OutlinePolygon.from_sides(
            np.asarray(self._forward, dtype=np.float64),
            np.asarray(self._backward, dtype=np.float64),
        )

    def __repr__(self) -> str:
        return f"RibbonAccumulator(n_seen={self._n_seen}, n_retained={self.n_retained})"


@njit(cache=True)
def _ribbon_kernel(xy: np.ndarray, hw: np.ndarray, eps: float) -> tuple[np.ndarray, np.ndarray]:
    """前進側/後退側の頂点列（サンプル順）を返す（Numba 最適化）。

    - 直前の採用位置からの距離が eps 未満のサンプルは読み飛ばす。
    - 返す配列の行数 = 採用サンプル数（1 以下なら呼び出し側で空扱い）。
    """
    n = xy.shape[0]
    forward = np.empty((n, 2), dtype=np.float64)
    backward = np.empty((n, 2), dtype=np.float64)
    if n < 2:
        return forward[:0], backward[:0]

    lx = xy[0, 0]
    ly = xy[0, 1]
    lh = hw[0]
    m = 0
    for i in range(1, n):
        x = xy[i, 0]
        y = xy[i, 1]
        dx = x - lx
        dy = y - ly
        length = np.sqrt(dx * dx + dy * dy)
        if not (length > 0.0 and length >= eps and length < np.inf):
            continue
        px = dy / length
        py = -dx / length
        if m == 0:
            forward[0, 0] = lx - px * lh
            forward[0, 1] = ly - py * lh
            backward[0, 0] = lx + px * lh
            backward[0, 1] = ly + py * lh
            m = 1
        h = hw[i]
        forward[m, 0] = x - px * h
        forward[m, 1] = y - py * h
        backward[m, 0] = x + px * h
        backward[m, 1] = y + py * h
        m += 1
        lx = x
        ly = y
        lh = h
    return forward[:m], backward[:m]


__all__ = ["build_outline", "segment_quad", "RibbonAccumulator", "resolve_base_width"]
