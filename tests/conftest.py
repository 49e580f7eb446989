"""共通フィクスチャ。

- 設定（環境変数）の読み直しと後片付け
- 小さなサンプル列の試料
"""

from __future__ import annotations

from typing import Callable, Iterator

import numpy as np
import pytest

from common import settings
from engine.core.pen import PenSample
from engine.render.layer_store import LayerStore


@pytest.fixture(scope="session", autouse=True)
def np_seed() -> None:
    """NumPy の乱数を固定。"""
    np.random.seed(12345)


@pytest.fixture()
def ink_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[Callable[..., None]]:
    """`INK_*` 環境変数を設定して設定を再読込する。終了時に既定へ戻す。"""

    def _apply(**values: str) -> None:
        for name, value in values.items():
            monkeypatch.setenv(name, value)
        settings.reload_from_env()

    yield _apply
    monkeypatch.undo()
    settings.reload_from_env()


def make_samples(points, pressure: float | list[float] = 1.0) -> list[PenSample]:
    if isinstance(pressure, (int, float)):
        pressures = [float(pressure)] * len(points)
    else:
        pressures = list(pressure)
    return [PenSample.record(p, pr) for p, pr in zip(points, pressures)]


@pytest.fixture()
def samples_factory() -> Callable[..., list[PenSample]]:
    return make_samples


@pytest.fixture()
def straight_samples() -> list[PenSample]:
    return make_samples([(0.0, 0.0), (100.0, 0.0)])


@pytest.fixture()
def store() -> LayerStore:
    return LayerStore()
