# backend/notion_site/graph/__init__.py

"""
Notion のレコードグラフ（block / collection）に対する純粋な処理群。

- models: 型付きのブロック / コレクション
- properties: プロパティ値の読み出し
- filters: カテゴリ抽出・フィルタ・ソート
- menu / search: メニュー項目・検索結果の組み立て
"""
