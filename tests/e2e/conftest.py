# E2Eテスト共通フィクスチャ
"""
E2Eテスト用の共有フィクスチャと設定。

このファイルはE2Eテストで使用される共通のフィクスチャを定義します。
ホストはターミナル描画の実装(RichConsoleHost)をバッファに向けて使用します。
"""

import io

import pytest
from rich.console import Console
from src.config.settings import Settings
from src.extension import HiddifyWrtExtension, RichConsoleHost

from tests.helpers import E2E_TICK

# =============================================================================
# 環境設定フィクスチャ
# =============================================================================


@pytest.fixture
def e2e_settings() -> Settings:
    """E2Eテスト用の設定を提供。

    Returns:
        待機間隔を短縮した設定
    """
    return Settings(default_iterations=4, tick_interval_seconds=E2E_TICK)


# =============================================================================
# ホスト・拡張機能フィクスチャ
# =============================================================================


@pytest.fixture
def host_output() -> io.StringIO:
    """ホストの描画先バッファを提供。"""
    return io.StringIO()


@pytest.fixture
def rich_host(host_output: io.StringIO) -> RichConsoleHost:
    """バッファに描画するホストを提供。"""
    return RichConsoleHost(console=Console(file=host_output, width=100, color_system=None))


@pytest.fixture
def extension(rich_host: RichConsoleHost, e2e_settings: Settings) -> HiddifyWrtExtension:
    """実際のスーパーバイザーを持つ拡張機能を提供。"""
    return HiddifyWrtExtension(host=rich_host, settings=e2e_settings)
