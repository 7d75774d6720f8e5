# backend/notion_site/graph/models.py

"""
Notion のレコードマップ（block / collection テーブル）を表す型付きモデル。

Notion API から返る生の dict をそのまま辿るのではなく、
ページ / それ以外のブロック、スキーマプロパティを明示的な型として扱う。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Optional


class PropertyType(str, Enum):
    """コレクションスキーマのプロパティ種別。"""

    TITLE = "title"
    TEXT = "text"
    SELECT = "select"
    MULTI_SELECT = "multi_select"
    CHECKBOX = "checkbox"
    NUMBER = "number"
    DATE = "date"
    URL = "url"
    EMAIL = "email"
    PHONE_NUMBER = "phone_number"
    PERSON = "person"
    FILE = "file"
    RELATION = "relation"
    CREATED_TIME = "created_time"
    LAST_EDITED_TIME = "last_edited_time"
    FORMULA = "formula"
    ROLLUP = "rollup"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Any) -> "PropertyType":
        """未知の種別は UNKNOWN に寄せる。"""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class SchemaProperty:
    """コレクションスキーマの 1 プロパティ。"""

    property_id: str
    name: str
    type: PropertyType


@dataclass(frozen=True)
class Collection:
    """Notion データベース（コレクション）のスキーマ。"""

    collection_id: str
    name: str = ""
    schema: Dict[str, SchemaProperty] = field(default_factory=dict)

    def find_property(self, property_type: PropertyType) -> Optional[SchemaProperty]:
        """指定種別の最初のプロパティを返す。"""
        for prop in self.schema.values():
            if prop.type == property_type:
                return prop
        return None


@dataclass(frozen=True)
class Block:
    """
    Notion の 1 ブロック。

    properties はプロパティ ID → 値（装飾付きテキストランの配列）の生のマップ。
    """

    block_id: str
    type: str
    created_time: int = 0
    last_edited_time: int = 0
    parent_id: Optional[str] = None
    parent_table: Optional[str] = None
    properties: Mapping[str, Any] = field(default_factory=dict)
    alive: bool = True

    @property
    def is_page(self) -> bool:
        return False


@dataclass(frozen=True)
class PageBlock(Block):
    """type == "page" のブロック。"""

    @property
    def is_page(self) -> bool:
        return True


@dataclass(frozen=True)
class ContentBlock(Block):
    """ページ以外のブロック（テキスト・画像・コレクションビューなど）。"""


def _unwrap_record(record: Any) -> Optional[Dict[str, Any]]:
    """
    レコードマップの 1 エントリから value を取り出す。

    {"value": {...}} と、新しい API の {"value": {"value": {...}, "role": ...}}
    の両方の形に対応する。
    """
    if not isinstance(record, dict):
        return None

    value = record.get("value")
    if isinstance(value, dict) and isinstance(value.get("value"), dict) and "id" not in value:
        value = value["value"]

    return value if isinstance(value, dict) else None


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return int(value)
    return 0


def _decoration_name(name: Any) -> str:
    """コレクション名（装飾付きテキスト）をプレーンテキストにする。"""
    if isinstance(name, str):
        return name
    if not isinstance(name, list):
        return ""
    return "".join(
        run[0] for run in name if isinstance(run, list) and run and isinstance(run[0], str)
    )


def _parse_block(block_id: str, value: Dict[str, Any]) -> Block:
    properties = value.get("properties")
    kwargs = dict(
        block_id=str(value.get("id") or block_id),
        type=str(value.get("type") or ""),
        created_time=_to_int(value.get("created_time")),
        last_edited_time=_to_int(value.get("last_edited_time")),
        parent_id=value.get("parent_id"),
        parent_table=value.get("parent_table"),
        properties=properties if isinstance(properties, dict) else {},
        alive=value.get("alive", True) is not False,
    )
    if kwargs["type"] == "page":
        return PageBlock(**kwargs)
    return ContentBlock(**kwargs)


def _parse_collection(collection_id: str, value: Dict[str, Any]) -> Collection:
    schema: Dict[str, SchemaProperty] = {}
    raw_schema = value.get("schema")

    if isinstance(raw_schema, dict):
        for property_id, descriptor in raw_schema.items():
            if not isinstance(descriptor, dict):
                continue
            schema[property_id] = SchemaProperty(
                property_id=property_id,
                name=str(descriptor.get("name") or ""),
                type=PropertyType.parse(descriptor.get("type")),
            )

    return Collection(
        collection_id=str(value.get("id") or collection_id),
        name=_decoration_name(value.get("name")),
        schema=schema,
    )


@dataclass(frozen=True)
class RecordGraph:
    """
    1 ページ分のレコードマップ（ブロック + コレクション）。

    呼び出し側から渡される読み取り専用の入力として扱う。
    dict の挿入順（= API の返却順）を保持する。
    """

    blocks: Dict[str, Block] = field(default_factory=dict)
    collections: Dict[str, Collection] = field(default_factory=dict)

    @classmethod
    def from_record_map(cls, record_map: Any) -> "RecordGraph":
        """
        Notion API の生のレコードマップから RecordGraph を構築する。

        value が無い / 形式が壊れているレコードは例外にせず読み飛ばす。
        """
        if not isinstance(record_map, dict):
            return cls()

        blocks: Dict[str, Block] = {}
        raw_blocks = record_map.get("block")
        if isinstance(raw_blocks, dict):
            for block_id, record in raw_blocks.items():
                value = _unwrap_record(record)
                if value is not None:
                    blocks[block_id] = _parse_block(block_id, value)

        collections: Dict[str, Collection] = {}
        raw_collections = record_map.get("collection")
        if isinstance(raw_collections, dict):
            for collection_id, record in raw_collections.items():
                value = _unwrap_record(record)
                if value is not None:
                    collections[collection_id] = _parse_collection(collection_id, value)

        return cls(blocks=blocks, collections=collections)

    def first_collection(self) -> Optional[Collection]:
        """
        最初に見つかったコレクションを返す。

        NOTE: 複数のデータベースを含むページでは先頭のものしか見ない（既知の制約）。
        """
        return next(iter(self.collections.values()), None)

    def collection_for(self, block: Block) -> Optional[Collection]:
        """ブロックの親コレクション。親が分からなければ先頭のコレクション。"""
        if block.parent_table == "collection" and block.parent_id in self.collections:
            return self.collections[block.parent_id]
        return self.first_collection()

    def pages(self) -> Iterator[PageBlock]:
        """ページ種別のブロックを挿入順に返す。"""
        for block in self.blocks.values():
            if isinstance(block, PageBlock):
                yield block

    def page_ids(self) -> List[str]:
        return [block_id for block_id, block in self.blocks.items() if block.is_page]
