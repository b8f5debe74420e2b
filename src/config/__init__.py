"""
設定管理モジュール。

タスクの既定回数・待機間隔・ログレベルを環境変数から型安全に読み込む。
"""

from src.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
