# backend/tests/test_notion_config.py

import pytest

from notion_site.notion.config import DEFAULT_API_BASE_URL, get_notion_config
from notion_site.utils.config import EnvVarMissingError, get_env


@pytest.fixture(autouse=True)
def _clear_config_cache():
    get_notion_config.cache_clear()
    yield
    get_notion_config.cache_clear()


def test_defaults(monkeypatch):
    monkeypatch.setenv("NOTION_PAGE_ID", "root-page")
    for name in (
        "NOTION_API_BASE_URL",
        "NOTION_TOKEN",
        "NOTION_ACTIVE_USER",
        "NOTION_USER_TIMEZONE",
        "NOTION_TIMEOUT_SECONDS",
        "NOTION_SEARCH_LIMIT",
    ):
        monkeypatch.delenv(name, raising=False)

    config = get_notion_config()

    assert config.root_page_id == "root-page"
    assert config.api_base_url == DEFAULT_API_BASE_URL
    assert config.auth_token is None
    assert config.timeout_seconds == 10.0
    assert config.search_limit == 50


def test_overrides(monkeypatch):
    monkeypatch.setenv("NOTION_PAGE_ID", "root-page")
    monkeypatch.setenv("NOTION_API_BASE_URL", "https://proxy.example.com/api/v3/")
    monkeypatch.setenv("NOTION_TOKEN", "token")
    monkeypatch.setenv("NOTION_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("NOTION_SEARCH_LIMIT", "10")

    config = get_notion_config()

    assert config.api_base_url == "https://proxy.example.com/api/v3"
    assert config.auth_token == "token"
    assert config.timeout_seconds == 2.5
    assert config.search_limit == 10


def test_missing_root_page_id_raises(monkeypatch):
    monkeypatch.delenv("NOTION_PAGE_ID", raising=False)

    with pytest.raises(EnvVarMissingError) as exc_info:
        get_notion_config()

    assert exc_info.value.name == "NOTION_PAGE_ID"


def test_invalid_number_raises(monkeypatch):
    monkeypatch.setenv("NOTION_PAGE_ID", "root-page")
    monkeypatch.setenv("NOTION_SEARCH_LIMIT", "many")

    with pytest.raises(RuntimeError):
        get_notion_config()


def test_get_env_treats_empty_as_unset(monkeypatch):
    monkeypatch.setenv("SOME_EMPTY_VAR", "")

    assert get_env("SOME_EMPTY_VAR", default="fallback", required=False) == "fallback"
    with pytest.raises(EnvVarMissingError):
        get_env("SOME_EMPTY_VAR")
