# backend/tests/test_graph_properties.py

from notion_site.graph.models import RecordGraph
from notion_site.graph.properties import decoration_text, read_property

from record_maps import collection, page, record_map, text

SCHEMA = {
    "title": {"name": "Name", "type": "title"},
    "sel": {"name": "Category", "type": "select"},
    "tags": {"name": "Tags", "type": "multi_select"},
    "menu": {"name": "Menu", "type": "checkbox"},
    "num": {"name": "Order", "type": "number"},
    "date": {"name": "Published", "type": "date"},
    "ct": {"name": "Created", "type": "created_time"},
}


def _graph_with(**properties) -> RecordGraph:
    raw = record_map(
        page("p1", "Title", created_time=1700000000000, extra=properties),
        collections=[collection(SCHEMA)],
    )
    return RecordGraph.from_record_map(raw)


def test_decoration_text_concatenates_runs_and_ignores_garbage():
    value = [["Hello", [["b"]]], [", "], ["world", [["a", "https://example.com"]]], "x", [], [1]]

    assert decoration_text(value) == "Hello, world"
    assert decoration_text(None) == ""
    assert decoration_text("plain") == ""


def test_read_text_like_properties():
    graph = _graph_with(sel=text("Blog"))
    block = graph.blocks["p1"]

    assert read_property("title", block, graph) == "Title"
    assert read_property("sel", block, graph) == "Blog"


def test_read_missing_property_is_none():
    graph = _graph_with()

    assert read_property("sel", graph.blocks["p1"], graph) is None


def test_read_multi_select_splits_options():
    graph = _graph_with(tags=text("a,b,c"))

    assert read_property("tags", graph.blocks["p1"], graph) == ["a", "b", "c"]


def test_read_checkbox():
    graph = _graph_with(menu=text("Yes"))
    assert read_property("menu", graph.blocks["p1"], graph) is True

    graph = _graph_with(menu=text("No"))
    assert read_property("menu", graph.blocks["p1"], graph) is False


def test_read_number():
    graph = _graph_with(num=text("42"))
    assert read_property("num", graph.blocks["p1"], graph) == 42.0

    graph = _graph_with(num=text("n/a"))
    assert read_property("num", graph.blocks["p1"], graph) is None


def test_read_date_returns_start_date():
    value = [["‣", [["d", {"type": "date", "start_date": "2024-04-01"}]]]]
    graph = _graph_with(date=value)

    assert read_property("date", graph.blocks["p1"], graph) == "2024-04-01"


def test_read_created_time_comes_from_block():
    graph = _graph_with()

    assert read_property("ct", graph.blocks["p1"], graph) == 1700000000000


def test_property_not_in_schema_is_read_as_text():
    graph = _graph_with(zzz=text("free text"))

    assert read_property("zzz", graph.blocks["p1"], graph) == "free text"
