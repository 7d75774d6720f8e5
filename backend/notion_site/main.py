# backend/notion_site/main.py

"""
バックエンドアプリケーションのエントリーポイント。

主な責務:
- Notion クライアント / サービスの組み立て（設定の読み込みはここだけで行う）
- カテゴリ・フィルタ・メニュー・検索エンドポイントの公開
"""

from typing import Optional

from fastapi import FastAPI

from notion_site.notion.client import NotionClient
from notion_site.notion.config import get_notion_config
from notion_site.notion.router import router as notion_router
from notion_site.notion.service import NotionService


def create_app(notion_service: Optional[NotionService] = None) -> FastAPI:
    """
    FastAPI アプリケーションファクトリ。

    - Notion 連携エンドポイント (/notion/..., /api/search-notion, /api/simple-search)
    - ヘルスチェックエンドポイント (/health)

    notion_service を省略した場合は環境変数の設定からクライアントを生成する。
    """
    if notion_service is None:
        client = NotionClient(get_notion_config())
        notion_service = NotionService.from_client(client)

    app = FastAPI(title="Notion Site Backend")
    app.state.notion_service = notion_service

    # ルーター登録
    app.include_router(notion_router)

    @app.get("/health", tags=["health"])
    def health_check() -> dict:
        """
        簡易ヘルスチェックエンドポイント。
        モニタリングや動作確認用。
        """
        return {"status": "ok"}

    return app


# uvicorn 実行時: uvicorn notion_site.main:create_app --factory
