# backend/notion_site/__init__.py
"""
Notion-backed site backend package.

This package contains:
- main: FastAPI application entrypoint
- notion: Notion client / config / service / router
- graph: record graph model, category filter & sort, menu and search helpers
"""
