# backend/notion_site/graph/properties.py

"""
ブロックのプロパティ値（装飾付きテキストラン）を読み出すモジュール。

Notion のプロパティ値は次のような形をしている:

    [["Hello", [["b"]]], [" world"]]
    [["‣", [["d", {"type": "date", "start_date": "2024-04-01"}]]]]
"""

from typing import Any, List, Optional, Union

from .models import Block, PropertyType, RecordGraph

PropertyValue = Union[str, bool, float, int, List[str], None]

# プレーンテキストとして扱う種別
_TEXT_TYPES = frozenset(
    {
        PropertyType.TITLE,
        PropertyType.TEXT,
        PropertyType.SELECT,
        PropertyType.URL,
        PropertyType.EMAIL,
        PropertyType.PHONE_NUMBER,
        PropertyType.PERSON,
        PropertyType.FILE,
        PropertyType.RELATION,
        PropertyType.FORMULA,
        PropertyType.ROLLUP,
        PropertyType.UNKNOWN,
    }
)


def decoration_text(value: Any) -> str:
    """装飾付きテキストランの配列を連結してプレーンテキストにする。"""
    if not isinstance(value, list):
        return ""

    parts: List[str] = []
    for run in value:
        if isinstance(run, list) and run and isinstance(run[0], str):
            parts.append(run[0])
    return "".join(parts)


def _date_start(value: Any) -> Optional[str]:
    """日付デコレーション（["d", {...}]）から start_date を取り出す。"""
    if not isinstance(value, list):
        return None

    for run in value:
        if not isinstance(run, list) or len(run) < 2 or not isinstance(run[1], list):
            continue
        for decoration in run[1]:
            if (
                isinstance(decoration, list)
                and len(decoration) >= 2
                and decoration[0] == "d"
                and isinstance(decoration[1], dict)
            ):
                start = decoration[1].get("start_date")
                if isinstance(start, str):
                    return start
    return None


def property_type_of(property_id: str, block: Block, graph: RecordGraph) -> PropertyType:
    """ブロックの親コレクションのスキーマからプロパティ種別を引く。"""
    collection = graph.collection_for(block)
    if collection is not None and property_id in collection.schema:
        return collection.schema[property_id].type
    if property_id == "title":
        return PropertyType.TITLE
    return PropertyType.TEXT


def read_property(property_id: str, block: Block, graph: RecordGraph) -> PropertyValue:
    """
    ブロックのプロパティを種別に応じた Python 値として読み出す。

    - テキスト系（title / text / select など）: str（空なら None）
    - multi_select: カンマ区切りの選択肢リスト
    - checkbox: "Yes" なら True
    - number: float
    - date: 開始日の文字列
    - created_time / last_edited_time: ブロックのタイムスタンプ
    """
    property_type = property_type_of(property_id, block, graph)

    if property_type == PropertyType.CREATED_TIME:
        return block.created_time
    if property_type == PropertyType.LAST_EDITED_TIME:
        return block.last_edited_time

    raw = block.properties.get(property_id)
    if raw is None:
        return None

    text = decoration_text(raw)

    if property_type in _TEXT_TYPES:
        return text or None
    if property_type == PropertyType.MULTI_SELECT:
        return [option for option in text.split(",") if option] if text else []
    if property_type == PropertyType.CHECKBOX:
        return text == "Yes"
    if property_type == PropertyType.NUMBER:
        try:
            return float(text)
        except ValueError:
            return None
    if property_type == PropertyType.DATE:
        return _date_start(raw) or text or None

    raise ValueError(f"Unhandled property type: {property_type}")
