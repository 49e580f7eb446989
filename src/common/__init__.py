"""
どこで: `common` パッケージ。
何を: 設定・環境変数・ロギングの軽量ユーティリティ。
なぜ: engine/api 双方で使う共通基盤を分離し、依存の向きを単純化するため。
"""

from .logging import setup_default_logging

__all__ = [
    "setup_default_logging",
]
