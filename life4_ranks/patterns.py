"""
ゴール文パターンマッチャ。

セル文字列を優先順位つきの認識器リストに順に当て、最初に一致した
認識器がゴール記述子（id 未採番）を生成する。

想定仕様:
- パターン同士は重なりうるため、認識器の順序は固定とする
- ランプ表記（"... Lamp"）はスコア・クリア系より後に判定する
- セル内に難易度が無いゴールは、同じ列の上方にある "<N>s" セルから難易度を補う
- どの認識器にも一致しないセルはゴールを生成しない（エラーではない）
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional

from life4_ranks.grid import CellContext
from life4_ranks.models import (
    CLEAR_TYPES_BY_COLOR,
    CaloriesGoal,
    Goal,
    MAPointsGoal,
    SetGoal,
    SongsAverageGoal,
    SongsCountGoal,
    SongsFolderGoal,
    SongsLampGoal,
    SongsSpecificGoal,
    TrialGoal,
)
from life4_ranks.normalize import (
    SCORE_TOKEN,
    parse_count,
    parse_score,
    split_song_names,
)

logger = logging.getLogger(__name__)

# クリア表記 -> クリア種別（None は通常クリア）
CLEAR_WORDS = {
    "Clear": None,
    "LIFE4 Clear": "life4",
    "Full Combo": "good",
    "FC": "good",
    "Great Full Combo": "great",
    "GFC": "great",
    "Perfect Full Combo": "perfect",
    "PFC": "perfect",
}

# 譜面区分の略記 -> 正式名
DIFF_CLASSES = {
    "BSP": "basic",
    "DSP": "difficult",
    "ESP": "expert",
    "CSP": "challenge",
    "Beginner": "beginner",
    "Basic": "basic",
    "Difficult": "difficult",
    "Expert": "expert",
    "Challenge": "challenge",
}
DEFAULT_DIFF_CLASS = "expert"

Builder = Callable[[re.Match, CellContext], Goal]


def _score(name: str) -> str:
    return rf"(?P<{name}>{SCORE_TOKEN})"


def _alternation(words) -> str:
    # 長い表記を先に試す
    return "|".join(re.escape(w) for w in sorted(words, key=len, reverse=True))


_COUNT = r"(?P<count>an|a|[0-9]+)"
_EXCEPTION_CLAUSE = (
    rf"(?: \((?P<exceptions>[0-9]+)E(?: (?:over |at )?{_score('exception_score')}\+?)?\))?"
)


@dataclass(frozen=True)
class Recognizer:
    """ゴール1種類分の認識器。"""

    name: str
    pattern: re.Pattern
    build: Builder


@dataclass(frozen=True)
class CellMatch:
    """
    マッチ結果。

    Attributes:
        recognizer: 一致した認識器名。
        goal: 生成したゴール記述子（id 未採番）。
        row: セルの行番号。
        col: セルの列番号。
    """

    recognizer: str
    goal: Goal
    row: int
    col: int


def _flag(match: re.Match, group: str) -> Optional[bool]:
    return True if match.group(group) else None


def _optional_int(match: re.Match, group: str) -> Optional[int]:
    value = match.groupdict().get(group)
    return int(value) if value else None


def _optional_score(match: re.Match, group: str) -> Optional[int]:
    value = match.groupdict().get(group)
    return parse_score(value) if value else None


def _difficulty(match: re.Match, ctx: CellContext) -> int:
    """セル内に難易度があればそれを、無ければ上方の難易度見出しを使う。"""
    value = match.groupdict().get("d")
    if value:
        return int(value)
    return ctx.difficulty_above()


def build_calories(match: re.Match, ctx: CellContext) -> Goal:
    return CaloriesGoal(count=int(match.group("count").replace(",", "")))


def build_trial(match: re.Match, ctx: CellContext) -> Goal:
    return TrialGoal(
        rank=match.group("rank").strip().lower(),
        count=parse_count(match.group("count")),
    )


def build_set_repeated(match: re.Match, ctx: CellContext) -> Goal:
    count = int(match.group("count"))
    d = int(match.group("d"))
    return SetGoal(diff_nums=(d,) * count, higher_diff=_flag(match, "higher"))


def build_set_sequence(match: re.Match, ctx: CellContext) -> Goal:
    diff_nums = tuple(int(n) for n in re.findall(r"[0-9]+", match.group("diffs")))
    return SetGoal(diff_nums=diff_nums, higher_diff=_flag(match, "higher"))


def build_songs_count(match: re.Match, ctx: CellContext) -> Goal:
    clear_word = match.groupdict().get("clear")
    return SongsCountGoal(
        d=int(match.group("d")),
        song_count=parse_count(match.group("count")),
        clear_type=CLEAR_WORDS[clear_word] if clear_word else None,
        score=_optional_score(match, "score"),
        higher_diff=_flag(match, "higher"),
        exceptions=_optional_int(match, "exceptions"),
        exception_score=_optional_score(match, "exception_score"),
    )


def build_songs_folder(match: re.Match, ctx: CellContext) -> Goal:
    songs = match.group("songs")
    return SongsFolderGoal(
        d=int(match.group("d")),
        score=parse_score(match.group("score")),
        exceptions=_optional_int(match, "exceptions"),
        exception_score=_optional_score(match, "exception_score"),
        song_exceptions=split_song_names(songs) if songs else None,
    )


def build_songs_average(match: re.Match, ctx: CellContext) -> Goal:
    return SongsAverageGoal(
        d=_difficulty(match, ctx),
        average_score=parse_score(match.group("score")),
    )


def build_songs_specific(match: re.Match, ctx: CellContext) -> Goal:
    diff_class = match.group("diff_class")
    return SongsSpecificGoal(
        d=ctx.difficulty_above(),
        diff_class=DIFF_CLASSES[diff_class] if diff_class else DEFAULT_DIFF_CLASS,
        score=parse_score(match.group("score")),
        songs=split_song_names(match.group("songs"), r", | & "),
    )


def build_ma_points(match: re.Match, ctx: CellContext) -> Goal:
    points = match.group("points")
    if points:
        return MAPointsGoal(points=int(points.replace(",", "")))
    return MAPointsGoal(points=ctx.value_below())


def build_lamp(match: re.Match, ctx: CellContext) -> Goal:
    return SongsLampGoal(
        d=_difficulty(match, ctx),
        clear_type=CLEAR_TYPES_BY_COLOR.get(match.group("color")),
    )


RECOGNIZERS: List[Recognizer] = [
    Recognizer(
        "calories",
        re.compile(r"^Burn (?P<count>[0-9][0-9,]*)"),
        build_calories,
    ),
    Recognizer(
        "trial",
        re.compile(
            r"^Earn (?P<rank>.+?) or (?:above|higher) on (?P<count>an|a|[0-9]+) Trials?"
        ),
        build_trial,
    ),
    Recognizer(
        "set",
        re.compile(r"^Clear (?P<count>[0-9]+) (?P<d>[0-9]{1,2})s in a row(?P<higher>\+)?"),
        build_set_repeated,
    ),
    Recognizer(
        "set",
        re.compile(
            r"^Clear (?:an? )?(?P<diffs>[0-9]{1,2}(?:, ?[0-9]{1,2})+),? in a row(?P<higher>\+)?"
        ),
        build_set_sequence,
    ),
    Recognizer(
        "songs_count",
        re.compile(
            rf"^(?P<clear>{_alternation(CLEAR_WORDS)}) {_COUNT} "
            rf"(?P<d>[0-9]{{1,2}})s?(?P<higher>\+)?{_EXCEPTION_CLAUSE}$"
        ),
        build_songs_count,
    ),
    # スコア指定は後ろに注記が付いていてもよい
    Recognizer(
        "songs_count",
        re.compile(
            rf"^{_score('score')}\+? {_COUNT} "
            rf"(?P<d>[0-9]{{1,2}})s?(?P<higher>\+)?{_EXCEPTION_CLAUSE}"
        ),
        build_songs_count,
    ),
    Recognizer(
        "songs_folder",
        re.compile(
            rf"^All (?P<d>[0-9]{{1,2}})s (?:over|at) {_score('score')}\+?"
            rf"{_EXCEPTION_CLAUSE}(?: \(ex\. (?P<songs>.+)\))?"
        ),
        build_songs_folder,
    ),
    Recognizer(
        "songs_average",
        re.compile(
            rf"^(?:(?P<d>[0-9]{{1,2}})s: )?{_score('score')}\+? (?:Folder )?Average$"
        ),
        build_songs_average,
    ),
    Recognizer(
        "songs_average",
        re.compile(rf"^(?:Folder )?Average (?:of |over )?{_score('score')}\+?$"),
        build_songs_average,
    ),
    Recognizer(
        "songs_specific",
        re.compile(
            rf"^{_score('score')}\+? on (?P<songs>.+?)"
            rf"(?: \((?P<diff_class>{_alternation(DIFF_CLASSES)})\))?$"
        ),
        build_songs_specific,
    ),
    Recognizer(
        "ma_points",
        re.compile(r"^(?:MA|MFC) Points:?(?: (?P<points>[0-9][0-9,]*))?$"),
        build_ma_points,
    ),
    Recognizer(
        "lamp",
        re.compile(r"^(?:(?P<d>[0-9]{1,2})s? )?(?P<color>[A-Za-z]+) Lamp$"),
        build_lamp,
    ),
]


def match_cell(text: str, ctx: CellContext) -> Optional[CellMatch]:
    """
    セル文字列を認識器リストへ順に当て、最初に一致したゴールを返す。

    Args:
        text: 前後空白除去済みの、空でないセル文字列。
        ctx: セル位置と周辺セル参照用のコンテキスト。

    Returns:
        CellMatch。どの認識器にも一致しない場合は None。
    """
    for recognizer in RECOGNIZERS:
        match = recognizer.pattern.match(text)
        if match is None:
            continue
        goal = recognizer.build(match, ctx)
        return CellMatch(recognizer.name, goal, ctx.row, ctx.col)

    logger.debug("Unrecognized cell (row=%d, col=%d): %r", ctx.row, ctx.col, text)
    return None
