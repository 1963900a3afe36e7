"""
共通の型定義を提供するモジュール。
プロジェクト全体で使用される汎用的な型エイリアスを定義します。
"""
from typing import Dict, Sequence

# @intent:data_structure レジスタ名と値をマッピングする辞書の型エイリアス。
# CPU, ホストループ, UIなど複数のレイヤーで共通して使用されます。
RegisterMap = Dict[str, int]

# @intent:data_structure 画面の読み取り専用ビューの型エイリアス。行（y）ごとの画素列（x）。
DisplayRows = Sequence[Sequence[bool]]
