"""
どこで: `engine.stroke` サブパッケージ。
何を: サンプル蓄積（StrokeSampler）・過密サンプル間引き（simplify_samples）・リボン合成（build_outline/RibbonAccumulator）。
なぜ: 入力サンプル列から塗りつぶし輪郭までの数値処理を、描画/入力層から独立させるため。
"""

from .ribbon import RibbonAccumulator, build_outline, segment_quad
from .sampler import StrokeHandle, StrokeSampler
from .simplify import simplify_samples

__all__ = [
    "StrokeSampler",
    "StrokeHandle",
    "simplify_samples",
    "build_outline",
    "segment_quad",
    "RibbonAccumulator",
]
