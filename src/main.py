"""
アプリケーションのエントリーポイント。

hiddifyWRT拡張機能をターミナル上のホストで動かす。
設定の読み込み、ロギング設定、拡張機能の登録、フォーム送信、終了処理を行う。
"""

import asyncio
import logging

from src.config import get_settings
from src.extension import (
    BUTTON_SUBMIT,
    EXTENSION_ID,
    RichConsoleHost,
    get_extension_factory,
    register_default_extensions,
)

logger = logging.getLogger(__name__)


async def main() -> None:
    """アプリケーションのエントリーポイント。

    以下の処理を順次実行する:
    1. 環境変数から設定を読み込み、ロギングを設定
    2. 拡張機能をレジストリに登録
    3. レジストリから拡張機能を生成
    4. 既定の回数でフォーム送信し、タスクの終了を待機
    5. 拡張機能を終了
    """
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    register_default_extensions()

    factory = get_extension_factory(EXTENSION_ID)
    extension = factory.builder(RichConsoleHost(title=factory.title), settings)

    logger.info("Starting extension: %s", factory.title)
    try:
        await extension.submit_data(
            BUTTON_SUBMIT,
            {"iterations": str(settings.default_iterations)},
        )
        await extension.supervisor.join()
    finally:
        await extension.close()
        await extension.supervisor.join()


if __name__ == "__main__":
    asyncio.run(main())
