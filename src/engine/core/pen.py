"""
どこで: `engine.core.pen`
何を: 1 回分のポインタ/ペン入力 `PenSample`（位置・筆圧・速度）と筆圧の正規化。
なぜ: サンプラ/簡略化/リボン合成が共有する最小の入力表現を 1 箇所に固定するため。
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from common.types import Vec2


def clamp_pressure(pressure: float) -> float:
    """筆圧を [0, 1] に丸める（NaN は 0 として扱う）。"""
    p = float(pressure)
    if math.isnan(p):
        return 0.0
    if p < 0.0:
        return 0.0
    if p > 1.0:
        return 1.0
    return p


@dataclass(slots=True, frozen=True)
class PenSample:
    """記録済みの入力サンプル（不変）。"""

    position: Vec2
    pressure: float  # [0, 1] に正規化済み
    speed: float = 1.0  # 予約（幾何には未使用）

    @classmethod
    def record(cls, position: Vec2, pressure: float, speed: float = 1.0) -> "PenSample":
        """位置を float 2 要素へ、筆圧を [0, 1] へ正規化して生成する。"""
        x, y = position
        return cls((float(x), float(y)), clamp_pressure(pressure), float(speed))

    @property
    def x(self) -> float:
        return self.position[0]

    @property
    def y(self) -> float:
        return self.position[1]


__all__ = ["PenSample", "clamp_pressure"]
