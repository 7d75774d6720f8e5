# backend/tests/test_graph_menu.py

from notion_site.graph import menu as menu_module
from notion_site.graph.menu import DEFAULT_MENU_ITEM, get_menu_items
from notion_site.graph.models import RecordGraph

from record_maps import COLLECTION_ID, collection, page, record_map, text

MENU_SCHEMA = {
    "title": {"name": "Name", "type": "title"},
    "menu": {"name": "Menu", "type": "checkbox"},
}

PROFILE_ID = "aaaaaaaa-bbbb-cccc-dddd-eeeeeeeeeeee"


def test_menu_items_include_checked_pages_after_default_item():
    raw = record_map(
        page(PROFILE_ID, "プロフィール", extra={"menu": text("Yes")}),
        page("hidden", "Hidden", extra={"menu": text("No")}),
        page("unset", "Unset"),
        collections=[collection(MENU_SCHEMA)],
    )

    items = get_menu_items(RecordGraph.from_record_map(raw))

    assert items[0] == DEFAULT_MENU_ITEM
    assert items[0].path == "/"
    assert len(items) == 2
    assert items[1].id == PROFILE_ID
    assert items[1].name == "プロフィール"
    assert items[1].path == "/page/aaaaaaaabbbbccccddddeeeeeeeeeeee"
    assert items[1].page_id == PROFILE_ID


def test_menu_items_skip_pages_of_other_parents_and_untitled_pages():
    raw = record_map(
        page("other-parent", "Other", parent_id="somewhere-else", extra={"menu": text("Yes")}),
        page("untitled", extra={"menu": text("Yes")}),
        collections=[collection(MENU_SCHEMA)],
    )

    assert get_menu_items(RecordGraph.from_record_map(raw)) == [DEFAULT_MENU_ITEM]


def test_menu_requires_checkbox_named_menu():
    schema = {
        "title": {"name": "Name", "type": "title"},
        "menu": {"name": "Menu", "type": "text"},
    }
    raw = record_map(
        page("p1", "One", extra={"menu": text("Yes")}),
        collections=[collection(schema, collection_id=COLLECTION_ID)],
    )

    assert get_menu_items(RecordGraph.from_record_map(raw)) == [DEFAULT_MENU_ITEM]


def test_menu_falls_back_to_default_item_on_error(monkeypatch):
    raw = record_map(
        page(PROFILE_ID, "Profile", extra={"menu": text("Yes")}),
        collections=[collection(MENU_SCHEMA)],
    )

    def broken_read_property(*args, **kwargs):
        raise ValueError("boom")

    monkeypatch.setattr(menu_module, "read_property", broken_read_property)

    assert get_menu_items(RecordGraph.from_record_map(raw)) == [DEFAULT_MENU_ITEM]
