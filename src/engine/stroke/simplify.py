"""
ストローク簡略化（StrokeSimplifier: 過密サンプルの間引き）

- 高頻度なペン/タブレット入力では、サンプル間隔が線の太さより細かくなり、
  リボンに縮退・自己重なりセグメントが生じる。そうした過密サンプルを間引く。

仕様/注意:
- 最も近い隣接ペア (i, i+1) を探し（同距離なら先頭側）、距離が `hw(i) + hw(i+1)` 以上なら停止。
- そうでなければ後ろ側 i+1 を取り除いて繰り返す（先行するストローク方向を優先して残す）。
- 残りが 2 サンプルになったら距離に関係なく停止する。各反復で必ず 1 つ削除するため
  高々 n-2 回で終了し、結果は常に 2..n サンプル（n >= 2 のとき）。
- 先頭サンプルは削除されない。3 未満の入力はそのまま返す。

実装メモ:
- 生存リストは `nxt` 配列の単方向リンクで表し、削除は O(1)、最小ペア探索は O(生存数)。
- Numba カーネル `_simplify_kernel` は保持マスクを返す。`USE_NUMBA=0` で `py_func` を使う。
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np
from numba import njit  # type: ignore[attr-defined]

from common.settings import get as get_settings

from ..core.pen import PenSample
from ..core.pressure import IDENTITY, PressureCurve, half_widths
from .ribbon import resolve_base_width

logger = logging.getLogger(__name__)


def simplify_samples(
    samples: Sequence[PenSample],
    curve: PressureCurve = IDENTITY,
    base_width: float | None = None,
    *,
    use_numba: bool | None = None,
) -> tuple[PenSample, ...]:
    """過密なサンプルを間引いたサンプル列を返す（入力は変更しない）。

    Parameters
    ----------
    samples : Sequence[PenSample]
        ストロークのサンプル列。
    curve : PressureCurve, default IDENTITY
        半幅算出に使う筆圧写像。
    base_width : float | None
        全幅 W。None なら設定値。
    use_numba : bool | None
        Numba カーネルを使うか。None なら設定値。
    """
    n = len(samples)
    if n < 3:
        return tuple(samples)
    width = resolve_base_width(base_width)

    xy = np.array([s.position for s in samples], dtype=np.float64).reshape(-1, 2)
    hw = half_widths(samples, curve, width)

    if use_numba is None:
        use_numba = get_settings().USE_NUMBA
    kernel = _simplify_kernel if use_numba else _simplify_kernel.py_func
    keep = kernel(xy, hw)

    out = tuple(s for s, k in zip(samples, keep) if k)
    if len(out) != n:
        logger.debug("simplify_samples: %d -> %d samples", n, len(out))
    return out


@njit(cache=True)
def _simplify_kernel(xy: np.ndarray, hw: np.ndarray) -> np.ndarray:
    """保持マスクを返す（Numba 最適化）。"""
    n = xy.shape[0]
    keep = np.ones(n, dtype=np.bool_)
    if n < 3:
        return keep

    nxt = np.empty(n, dtype=np.int64)
    for i in range(n - 1):
        nxt[i] = i + 1
    nxt[n - 1] = -1

    alive = n
    while alive > 2:
        best = -1
        best_d = np.inf
        i = 0
        while nxt[i] != -1:
            j = nxt[i]
            dx = xy[j, 0] - xy[i, 0]
            dy = xy[j, 1] - xy[i, 1]
            d = np.sqrt(dx * dx + dy * dy)
            if d < best_d:
                best_d = d
                best = i
            i = j
        # 比較可能な距離が 1 つも無い（非有限座標のみ）
        if best < 0:
            break
        j = nxt[best]
        if best_d >= hw[best] + hw[j]:
            break
        keep[j] = False
        nxt[best] = nxt[j]
        alive -= 1
    return keep


__all__ = ["simplify_samples"]
