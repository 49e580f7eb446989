"""
どこで: `engine.core.pressure`
何を: 正規化筆圧 [0, 1] を半幅倍率へ写像する `PressureCurve` インターフェースと既定実装。
なぜ: リボン合成/簡略化をクロージャ型に縛らず、写像だけを差し替え可能にするため。
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol, Sequence

import numpy as np

from .pen import PenSample


class PressureCurve(Protocol):
    """筆圧 → 半幅倍率の写像。"""

    def width_multiplier(self, pressure: float) -> float:
        """`pressure` に対する半幅の倍率を返す。"""


class IdentityPressureCurve:
    """恒等写像（筆圧がそのまま倍率になる）。"""

    def width_multiplier(self, pressure: float) -> float:
        return pressure

    def __repr__(self) -> str:
        return "IdentityPressureCurve()"


@dataclass(frozen=True)
class GammaPressureCurve:
    """`floor + (1 - floor) * pressure ** gamma` による写像。

    - gamma < 1 で軽い筆圧でも太く、gamma > 1 で強く押した時だけ太くなる。
    - floor は筆圧 0 でも残る最小倍率。
    """

    gamma: float = 1.0
    floor: float = 0.0

    def __post_init__(self) -> None:
        if not (math.isfinite(self.gamma) and self.gamma > 0.0):
            raise ValueError("gamma は正の有限値である必要があります。")
        if not (0.0 <= self.floor <= 1.0):
            raise ValueError("floor は [0, 1] の範囲である必要があります。")

    def width_multiplier(self, pressure: float) -> float:
        return self.floor + (1.0 - self.floor) * (pressure**self.gamma)


IDENTITY = IdentityPressureCurve()


def half_widths(
    samples: Sequence[PenSample], curve: PressureCurve, base_width: float
) -> np.ndarray:
    """各サンプルの半幅 `W/2 * curve(pressure)` を float64 配列で返す。

    倍率が非有限/負の場合は 0 とみなす（出力に NaN を流さない）。
    """
    out = np.empty(len(samples), dtype=np.float64)
    for i, s in enumerate(samples):
        out[i] = half_width(s.pressure, curve, base_width)
    return out


def half_width(pressure: float, curve: PressureCurve, base_width: float) -> float:
    """単一サンプルの半幅。倍率が非有限/負なら 0。"""
    m = float(curve.width_multiplier(pressure))
    if not math.isfinite(m) or m < 0.0:
        return 0.0
    return float(base_width) * 0.5 * m


__all__ = [
    "PressureCurve",
    "IdentityPressureCurve",
    "GammaPressureCurve",
    "IDENTITY",
    "half_width",
    "half_widths",
]
