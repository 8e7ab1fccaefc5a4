"""
アプリケーション固有の例外定義モジュール。

シート取得、ゴール抽出、出力検証などの処理で発生する例外を
分類して扱うために、基底例外および派生例外を定義する。
"""


class RankSheetError(Exception):
    """ランク要件抽出システム全体の基底例外。"""


class FetchError(RankSheetError):
    """シート内容の取得処理に起因する例外。"""


class TableNotFoundError(FetchError):
    """公開HTML内にシートのテーブルが見つからない場合の例外。"""


class NoDataError(RankSheetError):
    """抽出対象のグリッドが空、または存在しない場合の例外。"""


class ValidationError(RankSheetError):
    """抽出結果が出力の不変条件を満たさない場合の例外。"""


class GoalBandOverflowError(RankSheetError):
    """ゴールIDの採番帯域を使い切った場合の例外。"""
