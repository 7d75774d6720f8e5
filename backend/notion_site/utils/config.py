# backend/notion_site/utils/config.py

"""
環境変数読み取り用のユーティリティ。
Notion 連携の設定（notion/config.py）から共通利用する。
"""

import os
from typing import Optional


class EnvVarMissingError(RuntimeError):
    """必須環境変数が設定されていない場合に投げる例外。"""

    def __init__(self, name: str) -> None:
        super().__init__(f"Required environment variable '{name}' is not set.")
        self.name = name


def get_env(
    name: str,
    default: Optional[str] = None,
    *,
    required: bool = True,
) -> Optional[str]:
    """
    環境変数を取得するヘルパー。

    :param name: 環境変数名
    :param default: デフォルト値（required=False の場合のみ使用）
    :param required: True の場合、未設定なら例外を投げる
    :return: 文字列値（任意項目が未設定なら default）
    """
    value = os.getenv(name)

    if value is None or value == "":
        if required:
            raise EnvVarMissingError(name)
        return default

    return value


def get_env_number(name: str, default: float, *, cast=float):
    """
    数値の環境変数を取得するヘルパー。

    - 未設定なら default を返す
    - パースできない値が入っていた場合は RuntimeError にする
    """
    raw = get_env(name, required=False)
    if raw is None:
        return default

    try:
        return cast(raw)
    except ValueError as exc:  # noqa: TRY003
        raise RuntimeError(
            f"Invalid numeric value for env var {name}: {raw!r}"
        ) from exc
