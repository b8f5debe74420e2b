"""
Pytest設定と共有フィクスチャ。

プロジェクト全体で共有されるフィクスチャと設定を定義します。
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from src.config.settings import Settings
from src.extension.host import ExtensionHost

from tests.helpers import FAST_TICK


@pytest.fixture
def fast_settings() -> Settings:
    """待機間隔を短くした設定を提供。"""
    return Settings(default_iterations=4, tick_interval_seconds=FAST_TICK, log_level="DEBUG")


@pytest.fixture
def mock_host() -> MagicMock:
    """ExtensionHostのモックを提供。"""
    host = MagicMock(spec=ExtensionHost)
    host.update_console = AsyncMock()
    host.show_message = AsyncMock()
    return host
