"""
どこで: `common.settings`
何を: ストローク合成の環境変数を型付きで一元管理し、起動時に読み込む。
なぜ: `os.getenv` の散在を解消し、既定値/型の一貫性とテスト容易性を高めるため。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_float


@dataclass
class _Settings:
    # リボン幾何
    STROKE_BASE_WIDTH: float = 16.0
    DEGENERATE_EPS: float = 1e-6

    # パイプライン
    SIMPLIFY_ENABLED: bool = False
    INCREMENTAL_RIBBON: bool = True

    # Misc
    USE_NUMBA: bool = True
    TIMING_LOG: bool = False


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - bool は `env_bool`、float は `env_float` を使用。
    - 幅/閾値は 0 未満を 0 に丸める。
    """
    _settings.STROKE_BASE_WIDTH = env_float("INK_STROKE_BASE_WIDTH", 16.0, min_value=0.0)
    _settings.DEGENERATE_EPS = env_float("INK_DEGENERATE_EPS", 1e-6, min_value=0.0)

    _settings.SIMPLIFY_ENABLED = env_bool("INK_SIMPLIFY", False)
    _settings.INCREMENTAL_RIBBON = env_bool("INK_INCREMENTAL_RIBBON", True)

    _settings.USE_NUMBA = env_bool("INK_USE_NUMBA", True)
    _settings.TIMING_LOG = env_bool("INK_TIMING_LOG", False)


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
