# backend/tests/test_notion_ids.py

from notion_site.notion.ids import id_to_uuid, parse_page_id, uuid_to_id

COMPACT = "1ceb802cb0c680f29369dba86095fb38"
UUID = "1ceb802c-b0c6-80f2-9369-dba86095fb38"


def test_uuid_round_trip_helpers():
    assert uuid_to_id(UUID) == COMPACT
    assert id_to_uuid(COMPACT) == UUID


def test_parse_page_id_from_url_and_slug():
    assert parse_page_id(f"https://www.notion.so/My-Page-{COMPACT}") == UUID
    assert parse_page_id(f"/{COMPACT}?v=abc", uuid=False) == COMPACT
    assert parse_page_id(UUID.upper()) == UUID


def test_parse_page_id_without_id():
    assert parse_page_id("about-me") is None
    assert parse_page_id("") is None
    assert parse_page_id(None) is None
