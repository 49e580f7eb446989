"""
どこで: `engine.core` の例外定義。
何を: 呼び出し側の契約違反（終了済みストロークへの記録、封印済みレイヤーの置換等）を表す例外階層。
なぜ: 回復対象ではない「呼び出し側のバグ」を、データ不足/縮退（非エラー）と区別して通知するため。
"""

from __future__ import annotations


class InkContractError(RuntimeError):
    """呼び出し側の契約違反の基底例外。"""


class StrokeClosedError(InkContractError):
    """`finish()` 済みのストロークハンドルを再利用した。"""


class StrokeStateError(InkContractError):
    """入力イベントの順序が状態機械と矛盾する（例: アイドル中の StrokeMove）。"""


class LayerSealedError(InkContractError):
    """確定済み（封印済み）レイヤーのジオメトリを置き換えようとした。"""


__all__ = [
    "InkContractError",
    "StrokeClosedError",
    "StrokeStateError",
    "LayerSealedError",
]
