"""
公開HTMLパーサ。

Google スプレッドシートの「ウェブに公開」HTMLから、対象シートの
table.waffle を特定し、グリッド（2次元文字列配列）へ変換する責務を持つ。

想定仕様:
- シートごとに <div id="{gid}"> の中に table.waffle がある
- 列見出し(A, B, ...)は thead、行番号は th として出力される
- 結合セルは colspan/rowspan で表現されるため、空文字で埋めて列位置を揃える
- 固定行/列の区切り(freezebar-cell)はセルとして扱わない
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from bs4 import BeautifulSoup

from life4_ranks.errors import TableNotFoundError
from life4_ranks.scraper import fetch_html


def find_sheet_table(html: str, gid: Optional[str] = None) -> Any:
    """
    HTML文字列から対象シートの table.waffle を特定して返す。

    gid 指定時は id が gid の要素配下のテーブルを探す。
    未指定時はテーブルが1つだけの場合に限りそれを返す。

    Args:
        html: 公開HTML文字列。
        gid: シートのgid。

    Returns:
        BeautifulSoup の table タグ。

    Raises:
        TableNotFoundError: 条件に合致するテーブルが存在しない、または特定できない場合。
    """
    soup = BeautifulSoup(html, "html.parser")

    if gid is not None:
        container = soup.find(id=str(gid))
        table = container.select_one("table.waffle") if container else None
        if table is None:
            raise TableNotFoundError(f"No table.waffle found for gid={gid}")
        return table

    tables = soup.select("table.waffle")
    if len(tables) == 0:
        raise TableNotFoundError("No table.waffle found.")
    if len(tables) >= 2:
        raise TableNotFoundError(f"Multiple sheet tables found: {len(tables)}")
    return tables[0]


def _span(td: Any, attr: str) -> int:
    try:
        return max(1, int(td.get(attr, 1)))
    except (TypeError, ValueError):
        return 1


def _is_freezebar(td: Any) -> bool:
    return "freezebar-cell" in (td.get("class") or [])


def parse_sheet_table(table: Any) -> List[List[str]]:
    """
    table.waffle をグリッドへ変換する。

    Args:
        table: BeautifulSoup の table タグ。

    Returns:
        行ごとのセル文字列リスト。
    """
    tbody = table.find("tbody") or table
    grid: List[List[str]] = []
    # 列番号 -> rowspan により残っている行数
    pending: Dict[int, int] = {}

    for tr in tbody.find_all("tr", recursive=False):
        tds = [td for td in tr.find_all("td", recursive=False) if not _is_freezebar(td)]
        if not tds and (
            not any(pending.values()) or tr.find(class_="freezebar-cell") is not None
        ):
            continue

        cells: List[str] = []

        def fill_pending():
            while pending.get(len(cells), 0) > 0:
                pending[len(cells)] -= 1
                cells.append("")

        for td in tds:
            fill_pending()
            col = len(cells)
            colspan = _span(td, "colspan")
            rowspan = _span(td, "rowspan")

            cells.append(re.sub(r"\s+", " ", td.get_text(" ", strip=True)))
            cells.extend([""] * (colspan - 1))

            if rowspan > 1:
                for c in range(col, col + colspan):
                    pending[c] = rowspan - 1

        # 行末側に残った結合セル
        for c in sorted(k for k, v in pending.items() if v > 0 and k >= len(cells)):
            cells.extend([""] * (c - len(cells)))
            fill_pending()

        grid.append(cells)

    return grid


def parse_published_sheet(html: str, gid: Optional[str] = None) -> List[List[str]]:
    """公開HTMLから対象シートのグリッドを返す。"""
    return parse_sheet_table(find_sheet_table(html, gid))


def fetch_published_sheet(url: str, gid: Optional[str] = None) -> List[List[str]]:
    """公開HTMLを取得し、対象シートのグリッドを返す。"""
    params = {"gid": gid} if gid is not None else None
    return parse_published_sheet(fetch_html(url, params=params), gid)
