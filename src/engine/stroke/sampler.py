"""
どこで: `engine.stroke.sampler`
何を: 1 ストローク分の入力サンプルを順に蓄積する `StrokeSampler` とハンドル `StrokeHandle`。
なぜ: 進行中ストロークのバッファ所有権を 1 箇所に閉じ込め、確定時に唯一の持ち主へ受け渡すため。

仕様/注意:
- 筆圧は記録時に [0, 1] へ丸める（NaN は 0）。
- 直前と同一位置のサンプルもそのまま記録する（縮退の除去は輪郭合成側の責務）。
- `finish()` 後のハンドルへの `record()`/`finish()` は `StrokeClosedError`。
"""

from __future__ import annotations

from common.types import Vec2

from ..core.errors import StrokeClosedError
from ..core.pen import PenSample


class StrokeHandle:
    """進行中ストロークのバッファを排他的に保持するハンドル。"""

    __slots__ = ("_samples", "_closed")

    def __init__(self) -> None:
        self._samples: list[PenSample] | None = []
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def record(self, position: Vec2, pressure: float, speed: float = 1.0) -> PenSample:
        """サンプルを 1 つ追加して返す。"""
        if self._samples is None:
            raise StrokeClosedError("finish() 済みのストロークには記録できません")
        sample = PenSample.record(position, pressure, speed)
        self._samples.append(sample)
        return sample

    def finish(self) -> tuple[PenSample, ...]:
        """蓄積したサンプル列を引き渡し、ハンドルを無効化する。"""
        if self._samples is None:
            raise StrokeClosedError("finish() は 1 度だけ呼び出せます")
        out = tuple(self._samples)
        self._samples = None
        self._closed = True
        return out

    def samples(self) -> tuple[PenSample, ...]:
        """現時点のサンプル列のスナップショット（ライブプレビュー用）。"""
        if self._samples is None:
            raise StrokeClosedError("finish() 済みのストロークは参照できません")
        return tuple(self._samples)

    def __len__(self) -> int:
        return 0 if self._samples is None else len(self._samples)

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"StrokeHandle({state}, n_samples={len(self)})"


class StrokeSampler:
    """アクティブなストローク 1 本分のバッファを払い出して管理する。

    `start()` が返すハンドルを直接使っても、サンプラ経由で `record()`/`finish()` してもよい。
    """

    def __init__(self) -> None:
        self._active: StrokeHandle | None = None

    @property
    def active(self) -> StrokeHandle | None:
        return self._active

    def start(self) -> StrokeHandle:
        """新しい空バッファを確保する（進行中のハンドルがあれば置き換える）。"""
        self._active = StrokeHandle()
        return self._active

    def record(self, position: Vec2, pressure: float, speed: float = 1.0) -> PenSample:
        if self._active is None:
            raise StrokeClosedError("アクティブなストロークがありません")
        return self._active.record(position, pressure, speed)

    def finish(self) -> tuple[PenSample, ...]:
        if self._active is None:
            raise StrokeClosedError("アクティブなストロークがありません")
        handle, self._active = self._active, None
        return handle.finish()


__all__ = ["StrokeSampler", "StrokeHandle"]
