# backend/notion_site/notion/ids.py

"""
Notion のページ ID を扱うユーティリティ。

Notion の ID は 32 桁の 16 進数で、URL 上ではハイフン無し、
API 上では 8-4-4-4-12 のハイフン付き UUID 形式で現れる。
"""

import re
from typing import Optional

_UUID_RE = re.compile(
    r"([0-9a-fA-F]{8})-([0-9a-fA-F]{4})-([0-9a-fA-F]{4})-([0-9a-fA-F]{4})-([0-9a-fA-F]{12})"
)
_COMPACT_RE = re.compile(r"([0-9a-fA-F]{32})")


def uuid_to_id(uuid: str) -> str:
    """ハイフン付き UUID をハイフン無しの 32 桁 ID に変換する。"""
    return uuid.replace("-", "")


def id_to_uuid(page_id: str) -> str:
    """32 桁 ID を 8-4-4-4-12 形式に変換する。"""
    raw = uuid_to_id(page_id)
    return f"{raw[0:8]}-{raw[8:12]}-{raw[12:16]}-{raw[16:20]}-{raw[20:32]}"


def parse_page_id(text: Optional[str], *, uuid: bool = True) -> Optional[str]:
    """
    URL / スラッグ / 生 ID などの文字列からページ ID を取り出す。

    :param text: 任意の文字列（例: "https://www.notion.so/My-Page-1ceb802c..."）
    :param uuid: True ならハイフン付き UUID、False なら 32 桁 ID で返す
    :return: 見つからなければ None
    """
    if not text:
        return None

    match = _UUID_RE.search(text)
    if match:
        raw = "".join(match.groups())
    else:
        match = _COMPACT_RE.search(text)
        if not match:
            return None
        raw = match.group(1)

    raw = raw.lower()
    return id_to_uuid(raw) if uuid else raw
