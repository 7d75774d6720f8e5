# backend/notion_site/notion/config.py

"""
Notion 連携に必要な設定値をまとめるモジュール。
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from notion_site.utils.config import get_env, get_env_number

DEFAULT_API_BASE_URL = "https://www.notion.so/api/v3"


@dataclass(frozen=True)
class NotionConfig:
    """Notion 非公式 API 用の設定値コンテナ。"""

    root_page_id: str
    api_base_url: str = DEFAULT_API_BASE_URL
    auth_token: Optional[str] = None
    active_user: Optional[str] = None
    user_timezone: Optional[str] = None
    timeout_seconds: float = 10.0
    search_limit: int = 50


@lru_cache()
def get_notion_config() -> NotionConfig:
    """
    環境変数から Notion 設定を読み込む。

    必須:
      - NOTION_PAGE_ID

    任意:
      - NOTION_API_BASE_URL    (デフォルト: https://www.notion.so/api/v3)
      - NOTION_TOKEN           (token_v2 クッキー。公開ページだけなら不要)
      - NOTION_ACTIVE_USER
      - NOTION_USER_TIMEZONE
      - NOTION_TIMEOUT_SECONDS (デフォルト: 10 秒)
      - NOTION_SEARCH_LIMIT    (デフォルト: 50 件)
    """
    root_page_id = get_env("NOTION_PAGE_ID")

    api_base_url = get_env(
        "NOTION_API_BASE_URL",
        default=DEFAULT_API_BASE_URL,
        required=False,
    )

    return NotionConfig(
        root_page_id=root_page_id,
        api_base_url=api_base_url.rstrip("/"),
        auth_token=get_env("NOTION_TOKEN", required=False),
        active_user=get_env("NOTION_ACTIVE_USER", required=False),
        user_timezone=get_env("NOTION_USER_TIMEZONE", required=False),
        timeout_seconds=get_env_number("NOTION_TIMEOUT_SECONDS", 10.0),
        search_limit=get_env_number("NOTION_SEARCH_LIMIT", 50, cast=int),
    )
