# backend/notion_site/graph/search.py

"""
検索結果の組み立て。

- simple_search: 取得済みのレコードグラフをその場で部分一致検索する
- results_from_search_response: Notion の search API の生レスポンスを
  フロントエンド向けの SearchResults に正規化する
"""

from typing import Any, Dict, List

from notion_site.notion.ids import uuid_to_id
from notion_site.notion.schemas import (
    MIN_QUERY_LENGTH,
    SearchHighlight,
    SearchPreview,
    SearchResult,
    SearchResults,
)

from .models import RecordGraph
from .properties import decoration_text

TITLE_MAX_LENGTH = 80
PREVIEW_MAX_LENGTH = 200


def _truncate(text: str, max_length: int) -> str:
    return text[:max_length] + ("..." if len(text) > max_length else "")


def normalize_result_url(url: str) -> str:
    """"/p/<id>" 形式のパスを "/<id>" 形式にする。"""
    if url.startswith("/p/"):
        return "/" + url[len("/p/"):]
    return url


def page_path(block_id: str) -> str:
    return f"/{uuid_to_id(block_id)}"


def simple_search(graph: RecordGraph, query: str) -> SearchResults:
    """
    ブロックのタイトルとコレクション名に対する大文字小文字を無視した部分一致検索。
    """
    if not query or len(query) < MIN_QUERY_LENGTH:
        return SearchResults.empty()

    needle = query.lower()
    results: List[SearchResult] = []

    for block_id, block in graph.blocks.items():
        text = decoration_text(block.properties.get("title"))
        if not text or needle not in text.lower():
            continue

        path = page_path(block_id)
        preview = _truncate(text, PREVIEW_MAX_LENGTH)
        results.append(
            SearchResult(
                id=block_id,
                title=_truncate(text, TITLE_MAX_LENGTH),
                url=path,
                preview=SearchPreview(text=preview),
                object="block",
                type=block.type or None,
                is_navigable=True,
                score=1.0,
                highlight=SearchHighlight(path_text=path, text=preview),
            )
        )

    for collection_id, collection in graph.collections.items():
        if not collection.name or needle not in collection.name.lower():
            continue

        path = page_path(collection_id)
        preview = f"データベース: {collection.name}"
        results.append(
            SearchResult(
                id=collection_id,
                title=collection.name,
                url=path,
                preview=SearchPreview(text=preview),
                object="collection",
                is_navigable=True,
                score=0.8,
                highlight=SearchHighlight(path_text=path, text=preview),
            )
        )

    return SearchResults(results=results, total=len(results))


def results_from_search_response(raw: Dict[str, Any]) -> SearchResults:
    """
    Notion search API の生レスポンスを SearchResults に変換する。

    タイトルはレスポンスに同梱されるレコードマップのブロックから引く。
    """
    graph = RecordGraph.from_record_map(raw.get("recordMap"))
    raw_results = raw.get("results")
    if not isinstance(raw_results, list):
        raw_results = []

    results: List[SearchResult] = []
    for item in raw_results:
        if not isinstance(item, dict) or not item.get("id"):
            continue

        block_id = str(item["id"])
        block = graph.blocks.get(block_id)
        title = decoration_text(block.properties.get("title")) if block else ""

        highlight = item.get("highlight") if isinstance(item.get("highlight"), dict) else {}
        path = page_path(block_id)
        path_text = normalize_result_url(str(highlight.get("pathText") or path))
        text = str(highlight.get("text") or "")

        score = item.get("score")
        results.append(
            SearchResult(
                id=block_id,
                title=title or "Untitled",
                url=path,
                preview=SearchPreview(text=text or None),
                object="block",
                type=block.type if block else None,
                is_navigable=bool(item.get("isNavigable", True)),
                score=float(score) if isinstance(score, (int, float)) else 0.0,
                highlight=SearchHighlight(path_text=path_text, text=text),
            )
        )

    total = raw.get("total")
    return SearchResults(
        results=results,
        total=total if isinstance(total, int) else len(results),
    )
