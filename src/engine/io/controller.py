"""
ストローク入力コントローラ（IO モジュール）

本モジュールは、正規化済みの入力イベント（StrokeStart / StrokeMove / StrokeEnd）を受け取り、
サンプル蓄積 → （任意の）間引き → リボン合成 → レイヤー置換までを 1 スレッド上で同期実行する。

主な責務:
- StrokeStart: サンプラのバッファ確保と `LayerStore.reserve_next()` による描画スロットの予約。
- StrokeMove: サンプル記録、輪郭の再合成、予約スロットの置換（ライブプレビュー）。
- StrokeEnd: 最終輪郭をもう 1 度合成して置換し、レイヤーを封印、バッファを破棄する。

状態機械:
    Idle --StrokeStart--> Active --StrokeMove*--> Active --StrokeEnd--> Idle

設計メモ:
- 間引き無効時は `RibbonAccumulator` による増分合成（1 サンプル O(1)）を既定とし、
  `INK_INCREMENTAL_RIBBON=0` で毎回の全再構築に切り替えられる。
- 間引き有効時は先行サンプルも削除され得るため、常に全再構築する。
- サンプルが 2 未満のまま確定したストロークは空レイヤーのまま残す（エラーにしない）。
- 状態機械に反するイベント順序は呼び出し側のバグとして `StrokeStateError` を送出する。

使用例:
    from engine.io.controller import StrokeController
    from engine.render.layer_store import LayerStore
    store = LayerStore()
    ctrl = StrokeController(store)
    ctrl.handle(StrokeStart())
    ctrl.handle(StrokeMove((0.0, 0.0), 0.5))
    ctrl.handle(StrokeEnd())
"""

from __future__ import annotations

import logging
import time
from typing import Sequence

from common.settings import get as get_settings
from common.types import Vec2

from ..core.errors import StrokeStateError
from ..core.outline import OutlinePolygon
from ..core.pen import PenSample
from ..core.pressure import IDENTITY, PressureCurve
from ..render.layer_store import LayerStore
from ..stroke.ribbon import RibbonAccumulator, build_outline, resolve_base_width
from ..stroke.sampler import StrokeHandle, StrokeSampler
from ..stroke.simplify import simplify_samples
from .events import StrokeEnd, StrokeEvent, StrokeMove, StrokeStart

logger = logging.getLogger(__name__)


class StrokeController:
    """入力イベントを LayerStore への書き込みへ変換する。"""

    def __init__(
        self,
        store: LayerStore,
        *,
        sampler: StrokeSampler | None = None,
        curve: PressureCurve = IDENTITY,
        base_width: float | None = None,
        simplify: bool | None = None,
        incremental: bool | None = None,
        use_numba: bool | None = None,
    ) -> None:
        settings = get_settings()
        self.store = store
        self.sampler = sampler if sampler is not None else StrokeSampler()
        self.curve = curve
        self.base_width = resolve_base_width(base_width)
        self.simplify = settings.SIMPLIFY_ENABLED if simplify is None else bool(simplify)
        self.incremental = (
            settings.INCREMENTAL_RIBBON if incremental is None else bool(incremental)
        )
        self.use_numba = settings.USE_NUMBA if use_numba is None else bool(use_numba)
        self._timing = settings.TIMING_LOG

        self._handle: StrokeHandle | None = None
        self._key: int | None = None
        self._accumulator: RibbonAccumulator | None = None

    def __repr__(self) -> str:
        return f"StrokeController(active={self.active}, key={self._key})"

    @property
    def active(self) -> bool:
        return self._handle is not None

    @property
    def active_key(self) -> int | None:
        """進行中ストロークの予約キー（アイドル中は None）。"""
        return self._key

    # -------- dispatch --------
    def handle(self, event: StrokeEvent) -> int | None:
        """イベントを処理し、対象レイヤーのキーを返す。"""
        if isinstance(event, StrokeStart):
            return self.start()
        if isinstance(event, StrokeMove):
            self.move(event.position, event.pressure)
            return self._key
        if isinstance(event, StrokeEnd):
            return self.end()
        raise TypeError(f"未対応のイベント型です: {type(event).__name__}")

    def handle_all(self, events: Sequence[StrokeEvent]) -> None:
        for event in events:
            self.handle(event)

    # -------- transitions --------
    def start(self) -> int:
        if self._handle is not None:
            raise StrokeStateError("ストローク進行中に StrokeStart を受け取りました")
        # 失敗し得る準備はバッファ確保/スロット予約より先に済ませる
        accumulator = None
        if self.incremental and not self.simplify:
            accumulator = RibbonAccumulator(self.curve, self.base_width)
        self._handle = self.sampler.start()
        self._key = self.store.reserve_next()
        self._accumulator = accumulator
        logger.debug("stroke start key=%d", self._key)
        return self._key

    def move(self, position: Vec2, pressure: float) -> OutlinePolygon:
        """サンプルを記録し、予約スロットをライブプレビュー輪郭で置き換える。"""
        if self._handle is None or self._key is None:
            raise StrokeStateError("アイドル中に StrokeMove を受け取りました")
        sample = self.sampler.record(position, pressure)

        t0 = time.perf_counter()
        if self._accumulator is not None:
            if not self._accumulator.push(sample):
                # 縮退サンプル: 形状は変わらない
                return self.store.get(self._key).geometry
            outline = self._accumulator.outline()
        else:
            outline = self._rebuild(self._handle.samples())
        self.store.replace(self._key, outline)
        if self._timing:
            logger.debug(
                "stroke move key=%d n=%d rebuild=%.3fms",
                self._key,
                len(self._handle),
                (time.perf_counter() - t0) * 1000.0,
            )
        return outline

    def end(self) -> int | None:
        """ストロークを確定する。確定したレイヤーのキーを返す。"""
        if self._handle is None or self._key is None:
            raise StrokeStateError("アイドル中に StrokeEnd を受け取りました")
        key = self._key
        samples = self.sampler.finish()
        self._handle = None
        self._key = None
        self._accumulator = None

        try:
            if len(samples) < 2:
                logger.debug(
                    "stroke end key=%d: %d sample(s), layer left empty", key, len(samples)
                )
            else:
                t0 = time.perf_counter()
                outline = self._rebuild(samples)
                self.store.replace(key, outline)
                if self._timing:
                    logger.debug(
                        "stroke end key=%d n=%d final=%.3fms",
                        key,
                        len(samples),
                        (time.perf_counter() - t0) * 1000.0,
                    )
                logger.debug("stroke end key=%d vertices=%d", key, outline.n_vertices)
        finally:
            # 再構築が失敗しても直前のプレビューのまま確定させる
            self.store.seal(key)
        return key

    # -------- helpers --------
    def _rebuild(self, samples: Sequence[PenSample]) -> OutlinePolygon:
        if self.simplify:
            samples = simplify_samples(
                samples, self.curve, self.base_width, use_numba=self.use_numba
            )
        return build_outline(samples, self.curve, self.base_width, use_numba=self.use_numba)


__all__ = ["StrokeController"]
