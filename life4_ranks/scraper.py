"""
シート取得処理。

Google Sheets API (values) または公開HTMLからシート内容を取得する責務を持つ。
HTMLの解析は parser.py 側で行い、本モジュールは通信のみを担当する。

例外方針:
- requests 由来の例外は FetchError に変換して上位へ伝播する。
"""

from __future__ import annotations

from typing import List, Optional
from urllib.parse import quote

import requests

from life4_ranks.errors import FetchError

SHEETS_API = "https://sheets.googleapis.com/v4/spreadsheets"


def fetch_sheet_values(
    spreadsheet_id: str,
    range_a1: str,
    api_key: str,
    timeout: int = 30,
) -> List[List[str]]:
    """
    Sheets API の values.get でセル範囲を取得し、2次元配列で返す。

    Args:
        spreadsheet_id: スプレッドシートID。
        range_a1: A1形式の範囲（例: "A3!A1:BM"）。
        api_key: Google API キー。
        timeout: requests.get に渡すタイムアウト秒。

    Returns:
        行ごとのセル文字列リスト。値が無い場合は空リスト。

    Raises:
        FetchError: HTTPエラーや通信失敗が発生した場合。
    """
    url = f"{SHEETS_API}/{spreadsheet_id}/values/{quote(range_a1, safe='!:')}"
    try:
        r = requests.get(url, params={"key": api_key}, timeout=timeout)
        r.raise_for_status()
        data = r.json()
    except requests.RequestException as e:
        raise FetchError(f"Sheets API fetch failed: {range_a1} ({e})") from e
    except ValueError as e:
        raise FetchError(f"Sheets API returned invalid JSON: {range_a1}") from e

    values = data.get("values") or []
    return [[str(cell) for cell in row] for row in values]


def fetch_html(url: str, params: Optional[dict] = None, timeout: int = 30) -> str:
    """
    指定URLへHTTP GETを行い、レスポンスHTML文字列を返す。

    Args:
        url: 取得対象URL。
        params: クエリパラメータ。
        timeout: requests.get に渡すタイムアウト秒。

    Returns:
        HTML文字列。

    Raises:
        FetchError: HTTPエラーや通信失敗が発生した場合。
    """
    try:
        r = requests.get(url, params=params, timeout=timeout)
        r.raise_for_status()
        r.encoding = r.apparent_encoding
        return r.text
    except requests.RequestException as e:
        raise FetchError(f"HTTP fetch failed: {url} ({e})") from e
