import logging
import os
import sys
import traceback

from life4_ranks.config import SOURCE_PUBLISHED_HTML, Settings, load_settings
from life4_ranks.export import write_ranks_json
from life4_ranks.extractor import build_ranks
from life4_ranks.parser import fetch_published_sheet
from life4_ranks.scraper import fetch_sheet_values


def fetch_grids(settings: Settings, api_key: str) -> dict:
    """
    設定されたバージョンごとにシートのグリッドを取得する。

    Args:
        settings: アプリケーション設定。
        api_key: Google API キー（sheets_api 時のみ使用）。

    Returns:
        バージョン名 -> グリッド の dict（設定の記載順）。
    """
    grids = {}
    for version in settings.versions:
        if settings.source == SOURCE_PUBLISHED_HTML:
            grids[version.name] = fetch_published_sheet(settings.published_url, version.gid)
        else:
            grids[version.name] = fetch_sheet_values(
                settings.spreadsheet_id, version.range, api_key
            )
    return grids


def main():
    """
    ランク要件シートからゴール・要件を抽出し、JSONとして出力するメイン処理。
    以下の処理を順序実行する:
    1. settings.yaml を読み込む
    2. バージョンごとにシートのグリッドを取得
    3. ゴール一覧を共有してランク要件を抽出
    4. JSONファイルへ書き出し
    環境変数の要件:
    - GOOGLE_API_KEY: Sheets API キー(source が sheets_api の場合は必須)
    - SETTINGS_PATH: 設定ファイルパス(デフォルト: "settings.yaml")
    - LOG_LEVEL: ログレベル(デフォルト: "INFO")
    処理の成功時はSUCCESS、失敗時は例外を発生させる。
    Raises:
        Exception: 処理中に任意のエラーが発生した場合。
                   シートが空の場合は NoDataError。
    """
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings(os.environ.get("SETTINGS_PATH", "settings.yaml"))

        api_key = ""
        if settings.source != SOURCE_PUBLISHED_HTML:
            api_key = os.environ["GOOGLE_API_KEY"]

        # 1. シート取得
        grids = fetch_grids(settings, api_key)

        # 2. ゴール抽出・要件の紐付け
        document = build_ranks(grids)

        # 3. JSON出力
        write_ranks_json(settings.output_path, document)

        print(
            f"goals: {len(document['goals'])}, "
            f"versions: {', '.join(document['game_versions'])}"
        )
        print("SUCCESS")

    except Exception:
        err = traceback.format_exc()
        print(err, file=sys.stderr)
        raise


if __name__ == "__main__":
    main()
