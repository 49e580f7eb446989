"""
どこで: `engine.core` サブパッケージ。
何を: 入力サンプル（PenSample）・筆圧写像（PressureCurve）・輪郭型（OutlinePolygon）・契約違反例外を提供。
なぜ: ストローク合成とレイヤー管理の基盤を構成し、上位層（stroke/render/io）から再利用可能にするため。
"""
