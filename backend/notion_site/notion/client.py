# backend/notion_site/notion/client.py

"""
Notion 非公式 API (/api/v3) との通信を担当するクライアントモジュール。
"""

import logging
from typing import Any, Dict, Optional

import httpx

from .config import NotionConfig, get_notion_config
from .ids import parse_page_id

logger = logging.getLogger(__name__)

# loadPageChunk で 1 回に取得するブロック数
PAGE_CHUNK_LIMIT = 100

# loadPageChunk を呼ぶ回数の上限（カーソルが終わらない場合の打ち切り）
MAX_CHUNKS = 50

# チャンク間でマージするレコードテーブル
RECORD_TABLES = ("block", "collection", "collection_view", "notion_user", "space")


class NotionClientError(RuntimeError):
    """Notion クライアント全般の例外。"""


class NotionAuthError(NotionClientError):
    """認証・権限関連のエラー。"""


class NotionAPIError(NotionClientError):
    """その他 Notion API 呼び出し時のエラー。"""


class InvalidPageIdError(NotionClientError):
    """ページ ID として解釈できない文字列が渡された場合のエラー。"""


class NotionClient:
    """
    Notion 非公式 API の薄いラッパークライアント。

    - ページ（レコードマップ）の取得
    - 検索

    設定値はコンストラクタで受け取る。省略時のみ環境変数から読み込む。
    """

    def __init__(
        self,
        config: Optional[NotionConfig] = None,
        *,
        timeout: Optional[float] = None,
    ) -> None:
        self.config = config or get_notion_config()
        self._timeout = timeout if timeout is not None else self.config.timeout_seconds

    def _build_headers(self) -> Dict[str, str]:
        """
        Notion API 呼び出しに必要なヘッダーを構築。
        """
        headers = {"Content-Type": "application/json"}
        if self.config.auth_token:
            headers["Cookie"] = f"token_v2={self.config.auth_token}"
        if self.config.active_user:
            headers["x-notion-active-user-header"] = self.config.active_user
        return headers

    def _raise_for_status(self, response: httpx.Response) -> None:
        """
        HTTP レスポンスコードに応じて適切な例外を投げる。
        """
        if response.status_code == 401:
            raise NotionAuthError("Unauthorized. Check NOTION_TOKEN.")
        if response.status_code == 403:
            raise NotionAuthError("Forbidden. Check that the page is shared publicly.")
        if response.status_code >= 400:
            raise NotionAPIError(
                f"Notion API error: {response.status_code} {response.text[:300]}"
            )

    def _post(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.config.api_base_url}/{endpoint}"

        try:
            response = httpx.post(
                url,
                headers=self._build_headers(),
                json=payload,
                timeout=self._timeout,
            )
        except httpx.RequestError as exc:
            raise NotionClientError(f"Failed to call Notion API ({endpoint}): {exc}") from exc

        self._raise_for_status(response)

        try:
            data = response.json()
        except ValueError as exc:
            raise NotionAPIError(f"Notion API returned invalid JSON for {endpoint}.") from exc

        if not isinstance(data, dict):
            raise NotionAPIError(
                f"Unexpected Notion API response format for {endpoint}: not an object."
            )
        return data

    def get_page(self, page_id: str) -> Dict[str, Any]:
        """
        ページのレコードマップを loadPageChunk のページングで全件取得する。

        返り値は Notion API の生のレコードマップ
        （{"block": {...}, "collection": {...}, ...}）。
        上位レイヤー（graph.models）で型付きモデルに変換する。
        """
        page_uuid = parse_page_id(page_id)
        if page_uuid is None:
            raise InvalidPageIdError(f"Invalid Notion page id: {page_id!r}")

        record_map: Dict[str, Dict[str, Any]] = {table: {} for table in RECORD_TABLES}
        cursor: Dict[str, Any] = {"stack": []}
        chunk_number = 0

        while True:
            payload = {
                "page": {"id": page_uuid},
                "limit": PAGE_CHUNK_LIMIT,
                "cursor": cursor,
                "chunkNumber": chunk_number,
                "verticalColumns": False,
            }
            data = self._post("loadPageChunk", payload)

            chunk = data.get("recordMap") or {}
            if not isinstance(chunk, dict):
                raise NotionAPIError("Unexpected loadPageChunk response: 'recordMap' is not an object.")

            blocks = chunk.get("block") or {}
            if not blocks:
                break

            for table in RECORD_TABLES:
                records = chunk.get(table)
                if isinstance(records, dict):
                    record_map[table].update(records)

            new_cursor = data.get("cursor") or {}
            if not new_cursor.get("stack") or new_cursor == cursor:
                break

            if chunk_number + 1 >= MAX_CHUNKS:
                logger.warning(
                    "Stopped loading page %s after %d chunks; cursor did not finish",
                    page_uuid,
                    MAX_CHUNKS,
                )
                break

            cursor = new_cursor
            chunk_number += 1

        logger.debug(
            "Loaded page %s in %d chunk(s): %d blocks",
            page_uuid,
            chunk_number + 1,
            len(record_map["block"]),
        )
        return record_map

    def search(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        search エンドポイントを呼び出し、生の JSON を返す。

        payload の組み立て（フィルタ・上限件数など）は service.py の責務。
        """
        return self._post("search", payload)
