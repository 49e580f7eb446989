"""
どこで: `engine.render` サブパッケージ。
何を: レイヤー型（Layer）・順序付きレイヤー集合（LayerStore）・合成器インターフェース（Compositor）。
なぜ: ストローク合成と描画の責務を分離し、合成器へ渡すデータの形を局所化するため。
"""

from .compositor import Compositor
from .layer_store import LayerStore, OrderedLayers
from .types import Layer

__all__ = ["Compositor", "Layer", "LayerStore", "OrderedLayers"]
