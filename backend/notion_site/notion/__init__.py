# backend/notion_site/notion/__init__.py

"""
Notion 連携用モジュール群。

主な責務:
- Notion 非公式 API からページのレコードマップを取得する
- 検索リクエストを Notion に中継し、結果を正規化する
- graph パッケージの処理結果を HTTP API として公開する
"""
