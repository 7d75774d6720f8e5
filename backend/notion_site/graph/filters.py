# backend/notion_site/graph/filters.py

"""
レコードグラフに対するカテゴリ抽出・フィルタ・ソート。

責務:
- データベースのカテゴリ一覧を抽出する（フィルタ UI の選択肢）
- 選択中のカテゴリ / 並び順から「表示すべきページ ID の並び」を計算する

ページの描画ツリーは外部のレンダラーが持っているため、ここでは
ブロックそのものではなく ID だけを返す。呼び出し側は ID をキーに
表示 / 非表示を切り替える。

どの関数も入力のグラフを変更しない純粋関数で、想定外の例外は
ログに残したうえで「全部見せる」側（抽出なら空リスト）に倒す。
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, List, Optional, Tuple

from .models import Block, Collection, PropertyType, RecordGraph
from .properties import decoration_text, read_property

logger = logging.getLogger(__name__)

# カテゴリとして扱うプロパティ名（大文字小文字は区別しない）
CATEGORY_PROPERTY_NAMES = ("category", "カテゴリ")


class SortOrder(str, Enum):
    """ページ一覧の並び順。"""

    NEWEST = "newest"
    OLDEST = "oldest"
    TITLE_ASC = "title_asc"
    TITLE_DESC = "title_desc"

    @classmethod
    def parse(cls, value: Any) -> "SortOrder":
        """未知の値（None を含む）は NEWEST として扱う。"""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.NEWEST


def resolve_category_property_id(collection: Optional[Collection]) -> Optional[str]:
    """
    カテゴリとして使うプロパティ ID を決める。

    1. 名前が "category" / "カテゴリ" に一致するプロパティ
    2. 無ければ最初の select 型プロパティ
    3. それも無ければ None（カテゴリ軸なし）
    """
    if collection is None:
        return None

    for property_id, prop in collection.schema.items():
        if prop.name.lower() in CATEGORY_PROPERTY_NAMES:
            return property_id

    fallback = collection.find_property(PropertyType.SELECT)
    if fallback is not None:
        logger.debug("No category property; using select property %r", fallback.name)
        return fallback.property_id

    return None


def extract_categories(graph: RecordGraph) -> List[str]:
    """
    グラフ内のブロックから重複なしのカテゴリ一覧を昇順で返す。

    コレクション / スキーマ / カテゴリプロパティが無い場合は空リスト。
    """
    try:
        property_id = resolve_category_property_id(graph.first_collection())
        if property_id is None:
            return []

        categories = set()
        for block in graph.blocks.values():
            if not block.properties:
                continue
            value = read_property(property_id, block, graph)
            if value and isinstance(value, str):
                categories.add(value)

        return sorted(categories)
    except Exception:  # noqa: BLE001
        logger.exception("Failed to extract categories")
        return []


def _category_text(value: Any) -> str:
    """
    プロパティ値をカテゴリ文字列にする。

    multi_select はカンマ区切り、checkbox は "true"、整数値の number は
    小数点なしで表す。偽値（False / 0 / 空）は空文字。
    """
    if not value:
        return ""
    if isinstance(value, list):
        return ",".join(str(item) for item in value)
    if isinstance(value, bool):
        return "true"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def get_page_category(block: Block, graph: RecordGraph) -> str:
    """1 ページのカテゴリ。取れなければ空文字。"""
    try:
        property_id = resolve_category_property_id(graph.first_collection())
        if property_id is None:
            return ""

        return _category_text(read_property(property_id, block, graph))
    except Exception:  # noqa: BLE001
        logger.exception("Failed to get page category: %s", getattr(block, "block_id", "?"))
        return ""


def get_page_title(block: Block, graph: RecordGraph) -> str:
    """ページタイトル。スキーマの title プロパティ → "title" キーの順に探す。"""
    collection = graph.collection_for(block)
    title_prop = collection.find_property(PropertyType.TITLE) if collection else None

    if title_prop is not None and title_prop.property_id in block.properties:
        return decoration_text(block.properties[title_prop.property_id])

    return decoration_text(block.properties.get("title"))


def get_page_creation_time(block: Block) -> int:
    return block.created_time


def _title_key(title: str) -> Tuple[str, str]:
    # 大文字小文字を無視して比較し、同値の場合は元の文字列で順序を決める
    return (title.casefold(), title)


def compute_visible_ids(
    graph: RecordGraph,
    category: Optional[str] = None,
    sort_order: Any = SortOrder.NEWEST,
) -> List[str]:
    """
    フィルタとソート条件を適用し、表示すべきページ ID のリストを返す。

    - ページ種別のブロックだけが対象
    - category が空ならフィルタしない（すべて表示）
    - 未知の sort_order は newest 扱い
    - 同順位は元の並び順を保つ
    """
    try:
        candidates = [
            (block_id, block) for block_id, block in graph.blocks.items() if block.is_page
        ]

        if category:
            candidates = [
                (block_id, block)
                for block_id, block in candidates
                if get_page_category(block, graph) == category
            ]

        order = SortOrder.parse(sort_order)

        if order in (SortOrder.TITLE_ASC, SortOrder.TITLE_DESC):
            candidates.sort(
                key=lambda item: _title_key(get_page_title(item[1], graph) or ""),
                reverse=order == SortOrder.TITLE_DESC,
            )
        else:
            candidates.sort(
                key=lambda item: get_page_creation_time(item[1]),
                reverse=order == SortOrder.NEWEST,
            )

        return [block_id for block_id, _ in candidates]
    except Exception:  # noqa: BLE001
        logger.exception("Filter/sort failed; showing all pages")
        return graph.page_ids()
