# backend/notion_site/graph/menu.py

"""
Notion データベースの「Menu」チェックボックスからメニュー項目を組み立てる。
"""

import logging
from typing import List

from notion_site.notion.ids import uuid_to_id
from notion_site.notion.schemas import MenuItem

from .models import PropertyType, RecordGraph
from .properties import read_property

logger = logging.getLogger(__name__)

MENU_PROPERTY_NAME = "Menu"

DEFAULT_MENU_ITEM = MenuItem(id="all", name="すべて", path="/")


def get_menu_items(graph: RecordGraph) -> List[MenuItem]:
    """
    Menu チェックボックスがオンのページをメニュー項目として返す。

    先頭は常に「すべて」（/）。
    """
    items: List[MenuItem] = [DEFAULT_MENU_ITEM]

    try:
        for collection in graph.collections.values():
            menu_prop = next(
                (
                    prop
                    for prop in collection.schema.values()
                    if prop.name == MENU_PROPERTY_NAME and prop.type == PropertyType.CHECKBOX
                ),
                None,
            )
            title_prop = collection.find_property(PropertyType.TITLE)
            if menu_prop is None or title_prop is None:
                continue

            for block_id, block in graph.blocks.items():
                if not (
                    block.is_page
                    and block.parent_table == "collection"
                    and block.parent_id == collection.collection_id
                ):
                    continue

                if read_property(menu_prop.property_id, block, graph) is not True:
                    continue

                title = read_property(title_prop.property_id, block, graph)
                if not title:
                    continue

                items.append(
                    MenuItem(
                        id=block_id,
                        name=str(title),
                        path=f"/page/{uuid_to_id(block_id)}",
                        page_id=block_id,
                    )
                )
    except Exception:  # noqa: BLE001
        logger.exception("Failed to extract menu items from Notion")
        return [DEFAULT_MENU_ITEM]

    return items
