# backend/notion_site/notion/router.py

from typing import NoReturn, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from notion_site.graph.filters import SortOrder

from .client import InvalidPageIdError, NotionAuthError, NotionClientError
from .schemas import (
    MIN_QUERY_LENGTH,
    CategoryListResponse,
    MenuResponse,
    PageView,
    SearchParams,
    SearchResults,
    SimpleSearchRequest,
)
from .service import NotionService

router = APIRouter(tags=["notion"])

SEARCH_CACHE_CONTROL = "public, s-maxage=60, max-age=60, stale-while-revalidate=60"


def get_notion_service(request: Request) -> NotionService:
    """
    create_app() で組み立てた NotionService を返す。

    テストでは create_app(notion_service=...) でフェイクを差し込む。
    """
    return request.app.state.notion_service


def _raise_upstream_error(exc: Exception) -> NoReturn:
    """
    Notion 呼び出し時の例外を HTTP エラーに変換する。

    - 不正なページ ID → 400
    - 認証 / 権限エラー → 502（ページの公開設定を確認してもらう）
    - その他クライアントエラー → 502
    - 想定外の例外 → 500
    """
    if isinstance(exc, InvalidPageIdError):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid Notion page id.",
        ) from exc
    if isinstance(exc, NotionAuthError):
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Notion rejected the request. Check the page sharing settings.",
        ) from exc
    if isinstance(exc, NotionClientError):
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to fetch data from Notion.",
        ) from exc
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error.",
    ) from exc


@router.get(
    "/notion/pages/{page_id}/categories",
    response_model=CategoryListResponse,
    summary="ページ内データベースのカテゴリ一覧",
)
def list_categories(
    page_id: str,
    service: NotionService = Depends(get_notion_service),
) -> CategoryListResponse:
    try:
        categories = service.get_categories(page_id)
    except Exception as exc:  # noqa: BLE001
        _raise_upstream_error(exc)

    return CategoryListResponse(categories=categories, count=len(categories))


@router.get(
    "/notion/pages/{page_id}/view",
    response_model=PageView,
    summary="カテゴリ / 並び順を適用した表示対象ページ ID",
    description="category が空なら全ページ、sort は newest / oldest / title_asc / title_desc。",
)
def get_page_view(
    page_id: str,
    category: Optional[str] = None,
    sort: str = SortOrder.NEWEST.value,
    service: NotionService = Depends(get_notion_service),
) -> PageView:
    """
    フィルタ UI の選択変更ごとに呼ばれる想定。

    未知の sort は newest として扱う（エラーにはしない）。
    """
    try:
        return service.get_page_view(page_id, category=category, sort_order=sort)
    except Exception as exc:  # noqa: BLE001
        _raise_upstream_error(exc)


@router.get(
    "/notion/menu",
    response_model=MenuResponse,
    summary="Menu チェックボックスから作るメニュー項目",
)
def list_menu_items(
    service: NotionService = Depends(get_notion_service),
) -> MenuResponse:
    try:
        items = service.get_menu_items()
    except Exception as exc:  # noqa: BLE001
        _raise_upstream_error(exc)

    return MenuResponse(items=items, count=len(items))


@router.post(
    "/api/search-notion",
    response_model=SearchResults,
    summary="Notion 検索のプロキシ",
)
def search_notion(
    params: SearchParams,
    response: Response,
    service: NotionService = Depends(get_notion_service),
) -> SearchResults:
    """
    - 正常系: NotionService.search() の結果を返す（API エラー時は空の結果）
    - 異常系: 予期しない例外は 500
    """
    try:
        results = service.search(params)
    except Exception as exc:  # noqa: BLE001
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to search Notion",
        ) from exc

    response.headers["Cache-Control"] = SEARCH_CACHE_CONTROL
    return results


@router.post(
    "/api/simple-search",
    response_model=SearchResults,
    summary="ルートページ内の簡易検索",
)
def simple_search(
    body: SimpleSearchRequest,
    response: Response,
    service: NotionService = Depends(get_notion_service),
) -> SearchResults:
    if len(body.query) < MIN_QUERY_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="検索クエリが短すぎます",
        )

    try:
        results = service.simple_search(body.query)
    except Exception as exc:  # noqa: BLE001
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="検索中にエラーが発生しました",
        ) from exc

    response.headers["Cache-Control"] = SEARCH_CACHE_CONTROL
    return results
