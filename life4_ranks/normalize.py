"""
文字列・数値正規化ユーティリティ。

セル内のスコア表記や曲数表記、曲名の揺れを吸収し、
ゴールの比較・保存用の値へ統一する。
"""

from __future__ import annotations

import re

AAA_SCORE = 990000

# スコア表記: "987k" / "987,654" / "1,000,000" / "AAA"
SCORE_TOKEN = r"(?:[0-9]{3}k|[0-9]{1,3}(?:,[0-9]{3})+|AAA)"

_QUOTE_MAP = {
    "“": '"',
    "”": '"',
    "„": '"',
    "‟": '"',
    "’": "'",
    "‘": "'",
    "‚": "'",
    "‛": "'",
}

# 旧曲名 -> 正式名
SONG_ALIASES = {
    "DEAD END": 'DEAD END("GROOVE RADAR" Special)',
}


def parse_score(token: str) -> int:
    """
    スコア表記を絶対値のスコアへ変換する。

    - "987k" -> 987000
    - "987,654" -> 987654
    - "AAA" -> 990000

    Args:
        token: スコア表記文字列。末尾の "+" は無視する。

    Returns:
        スコア(int)。

    Raises:
        ValueError: スコアとして解釈できない場合。
    """
    s = token.strip().rstrip("+")
    if s == "AAA":
        return AAA_SCORE
    if s.endswith("k"):
        return int(s[:-1]) * 1000
    return int(s.replace(",", ""))


def parse_count(token: str) -> int:
    """曲数・回数表記を整数へ変換する。"a"/"an" は1。"""
    s = token.strip()
    if s in ("a", "an"):
        return 1
    return int(s.replace(",", ""))


def normalize_song_name(s: str) -> str:
    """
    曲名を正規化して返す。

    正規化内容:
    - 引用符の統一
    - trim
    - 連続空白を単一化
    - 旧曲名を正式名へ置換

    Args:
        s: 入力文字列。

    Returns:
        正規化済み曲名。入力が None の場合は空文字を返す。
    """
    if s is None:
        return ""

    for k, v in _QUOTE_MAP.items():
        s = s.replace(k, v)

    s = re.sub(r"\s+", " ", s.strip())

    return SONG_ALIASES.get(s, s)


def split_song_names(text: str, separators: str = r" & ") -> tuple[str, ...]:
    """区切り文字で曲名を分割し、正規化したタプルを返す。"""
    names = [normalize_song_name(part) for part in re.split(separators, text)]
    return tuple(name for name in names if name)
