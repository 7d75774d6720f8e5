# backend/notion_site/notion/service.py

"""
Notion クライアントとレコードグラフ処理をつなぐサービス層。

- ページ（レコードマップ）の取得 → RecordGraph への変換
- カテゴリ一覧 / フィルタ・ソート結果 / メニュー項目の計算
- Notion 検索のパラメータ調整と結果の正規化
"""

import logging
from typing import Any, Dict, List, Optional

from notion_site.graph.filters import SortOrder, compute_visible_ids, extract_categories
from notion_site.graph.menu import get_menu_items
from notion_site.graph.models import RecordGraph
from notion_site.graph.search import results_from_search_response, simple_search

from .client import InvalidPageIdError, NotionClient, NotionClientError
from .ids import parse_page_id
from .schemas import MIN_QUERY_LENGTH, MenuItem, PageView, SearchParams, SearchResults

logger = logging.getLogger(__name__)


class NotionService:
    """
    NotionClient を利用して、ルーター層に対して扱いやすいモデルを返すサービス。

    グラフ取得時のクライアント例外は呼び出し元へそのまま伝播させる。
    検索だけは失敗しても空の結果を返す（検索オーバーレイを壊さないため）。
    """

    def __init__(
        self,
        client: NotionClient,
        *,
        root_page_id: str,
        search_limit: int = 50,
    ) -> None:
        self.client = client
        self.root_page_id = root_page_id
        self.search_limit = search_limit

    @classmethod
    def from_client(cls, client: NotionClient) -> "NotionService":
        """クライアントの設定値からサービスを組み立てる。"""
        return cls(
            client,
            root_page_id=client.config.root_page_id,
            search_limit=client.config.search_limit,
        )

    def get_record_graph(self, page_id: Optional[str] = None) -> RecordGraph:
        """ページのレコードマップを取得して RecordGraph にする。"""
        target = page_id or self.root_page_id
        if parse_page_id(target) is None:
            raise InvalidPageIdError(f"Invalid Notion page id: {target!r}")

        record_map = self.client.get_page(target)
        return RecordGraph.from_record_map(record_map)

    def get_categories(self, page_id: Optional[str] = None) -> List[str]:
        return extract_categories(self.get_record_graph(page_id))

    def get_page_view(
        self,
        page_id: Optional[str] = None,
        category: Optional[str] = None,
        sort_order: Any = None,
    ) -> PageView:
        """
        カテゴリ / 並び順を適用した表示対象ページ ID を返す。

        グラフの取得は 1 回だけで、カテゴリ一覧も同じグラフから計算する。
        """
        graph = self.get_record_graph(page_id)
        order = SortOrder.parse(sort_order)
        visible_ids = compute_visible_ids(graph, category, order)

        return PageView(
            page_id=page_id or self.root_page_id,
            category=category or None,
            sort_order=order,
            categories=extract_categories(graph),
            visible_ids=visible_ids,
            count=len(visible_ids),
        )

    def get_menu_items(self, page_id: Optional[str] = None) -> List[MenuItem]:
        return get_menu_items(self.get_record_graph(page_id))

    def _build_search_payload(self, params: SearchParams) -> Dict[str, Any]:
        root_uuid = parse_page_id(self.root_page_id)
        ancestor_id = parse_page_id(params.ancestor_id) or root_uuid

        return {
            "type": "BlocksInAncestor",
            "query": params.query,
            "ancestorId": ancestor_id,
            "source": "quick_find_public",
            "sort": {"field": "relevance"},
            "limit": params.limit or self.search_limit,
            "filters": {
                "isDeletedOnly": False,
                "excludeTemplates": True,
                # False にして検索範囲を広げる
                "isNavigableOnly": False,
                "requireEditPermissions": False,
                "includePublicPagesWithoutExplicitAccess": True,
                # 検索範囲は常にサイトのルートページ配下に限定する
                "ancestors": [root_uuid] if root_uuid else [],
                "createdBy": [],
                "editedBy": [],
                "lastEditedTime": {},
                "createdTime": {},
            },
        }

    def search(self, params: SearchParams) -> SearchResults:
        """
        Notion の search API で検索する。

        - クエリが空 / 2 文字未満なら API を呼ばずに空の結果
        - API エラー時はログを残して空の結果
        """
        if not params.query or len(params.query.strip()) < MIN_QUERY_LENGTH:
            return SearchResults.empty()

        payload = self._build_search_payload(params)
        logger.info("Notion search: query=%r limit=%s", params.query, payload["limit"])

        try:
            raw = self.client.search(payload)
        except NotionClientError as exc:
            logger.error("Notion search failed: %s", exc)
            return SearchResults.empty()

        results = results_from_search_response(raw)
        logger.info("Found %d results for query %r", len(results.results), params.query)
        return results

    def simple_search(self, query: str) -> SearchResults:
        """
        ルートページを取得し、その中のブロック / コレクションを部分一致検索する。
        """
        if not query or len(query) < MIN_QUERY_LENGTH:
            return SearchResults.empty()

        try:
            graph = self.get_record_graph()
        except NotionClientError as exc:
            logger.error("Simple search failed to load root page: %s", exc)
            return SearchResults.empty()

        results = simple_search(graph, query)
        logger.info("Simple search found %d results for %r", results.total, query)
        return results
