"""
設定ファイル(settings.yaml)の読み込み処理を提供するモジュール。

settings.yaml からランク要件の抽出に必要な各種設定を読み込み、
アプリ内で扱いやすい dataclass に変換する。
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import yaml

SOURCE_SHEETS_API = "sheets_api"
SOURCE_PUBLISHED_HTML = "published_html"


@dataclass(frozen=True)
class VersionRange:
    """
    ゲームバージョン1つ分の取得範囲。

    Attributes:
        name: バージョン名（出力の game_versions のキー）。
        range: Sheets API 用のA1形式範囲。
        gid: 公開HTML用のシートgid。
    """

    name: str
    range: str
    gid: Optional[str]


@dataclass(frozen=True)
class Settings:
    """
    アプリケーション全体設定。

    settings.yaml の内容を保持する。

    Attributes:
        spreadsheet_id: 取得対象のスプレッドシートID。
        source: 取得方法（sheets_api / published_html）。
        published_url: 公開HTMLのURL（published_html 時に使用）。
        output_path: 出力JSONファイルパス。
        versions: バージョンごとの取得範囲（記載順に処理する）。
    """

    spreadsheet_id: str
    source: str
    published_url: str
    output_path: str
    versions: Tuple[VersionRange, ...]


def load_settings(path: str) -> Settings:
    """
    settings.yaml を読み込み Settings に変換する。

    Args:
        path: settings.yaml のファイルパス。

    Returns:
        Settingsオブジェクト。

    Raises:
        FileNotFoundError: 設定ファイルが存在しない場合。
        KeyError: 必須キー(spreadsheet_id/versions/name/range)が存在しない場合。
        yaml.YAMLError: YAMLのパースに失敗した場合。
        ValueError: source が未知の値、または versions が空の場合。
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    source = str(data.get("source", SOURCE_SHEETS_API)).strip()
    if source not in (SOURCE_SHEETS_API, SOURCE_PUBLISHED_HTML):
        raise ValueError(f"Unknown source: {source}")

    versions = tuple(
        VersionRange(
            name=str(v["name"]),
            range=str(v["range"]),
            gid=str(v["gid"]) if v.get("gid") is not None else None,
        )
        for v in data["versions"]
    )
    if not versions:
        raise ValueError("versions が空です")

    return Settings(
        spreadsheet_id=str(data["spreadsheet_id"]).strip(),
        source=source,
        published_url=str(data.get("published_url", "")).strip(),
        output_path=str(data.get("output_path", "ranks.json")),
        versions=versions,
    )
