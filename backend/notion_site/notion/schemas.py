# backend/notion_site/notion/schemas.py

"""
Notion から取得したデータを API で返すためのスキーマ定義。

フロントエンド（検索オーバーレイ）は notion-types の SearchResults 形式を
そのまま期待しているため、検索まわりは camelCase のエイリアスで入出力する。
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from notion_site.graph.filters import SortOrder

# これより短い検索クエリは Notion に投げない
MIN_QUERY_LENGTH = 2


class _CamelModel(BaseModel):
    """camelCase エイリアスでも snake_case でも受け付けるベースモデル。"""

    model_config = ConfigDict(populate_by_name=True)


class SearchParams(_CamelModel):
    """/api/search-notion のリクエストボディ。"""

    query: str = Field("", description="検索クエリ")
    ancestor_id: Optional[str] = Field(
        None,
        alias="ancestorId",
        description="検索範囲のルートページ ID。省略時は設定のルートページ。",
    )
    limit: Optional[int] = Field(None, ge=1, le=100, description="最大件数")
    user_locale: Optional[str] = Field(None, alias="userLocale")


class SimpleSearchRequest(BaseModel):
    """/api/simple-search のリクエストボディ。"""

    query: str = Field("", description="検索クエリ（2 文字以上）")


class SearchHighlight(_CamelModel):
    path_text: str = Field("", alias="pathText")
    text: str = ""


class SearchPreview(_CamelModel):
    text: Optional[str] = None
    image_url: Optional[str] = Field(None, alias="imageUrl")


class SearchResult(_CamelModel):
    """
    検索結果の 1 件。

    url / highlight.pathText はサイト内のパス（"/<ページID>"）。
    """

    id: str
    title: str
    url: str
    preview: SearchPreview = Field(default_factory=SearchPreview)
    object: Optional[str] = Field(None, description="block / collection など")
    type: Optional[str] = None
    is_navigable: bool = Field(True, alias="isNavigable")
    score: float = 0.0
    highlight: SearchHighlight = Field(default_factory=SearchHighlight)


class SearchResults(_CamelModel):
    """検索結果全体。"""

    results: List[SearchResult] = Field(default_factory=list)
    total: int = 0

    @classmethod
    def empty(cls) -> "SearchResults":
        return cls(results=[], total=0)


class MenuItem(_CamelModel):
    """ヘッダー / ハンバーガーメニューの 1 項目。"""

    id: str
    name: str
    path: str
    page_id: Optional[str] = Field(None, alias="pageId")


class MenuResponse(BaseModel):
    items: List[MenuItem]
    count: int


class CategoryListResponse(BaseModel):
    """フィルタ UI の選択肢になるカテゴリ一覧。"""

    categories: List[str]
    count: int


class PageView(_CamelModel):
    """
    カテゴリ / 並び順を適用した結果。

    visible_ids の順に並べ、含まれないページは非表示（グレーアウト）にする想定。
    """

    page_id: str = Field(..., alias="pageId")
    category: Optional[str] = None
    sort_order: SortOrder = Field(SortOrder.NEWEST, alias="sortOrder")
    categories: List[str] = Field(default_factory=list)
    visible_ids: List[str] = Field(default_factory=list, alias="visibleIds")
    count: int = 0
