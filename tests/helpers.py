"""
テスト用ヘルパー。

非同期のバックグラウンドタスクを観測するための待機関数などを提供します。
"""

import asyncio
from collections.abc import Callable

from src.task.console import ConsoleLog

# テスト用の短い待機間隔(秒)
FAST_TICK = 0.05

# 時刻に依存するE2E検証のための待機間隔(秒)
E2E_TICK = 0.2


async def wait_until(
    condition: Callable[[], bool],
    timeout: float = 2.0,
    interval: float = 0.005,
) -> None:
    """条件が成立するまで待機する。タイムアウトした場合はAssertionErrorを発生させる。"""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not condition():
        if loop.time() > deadline:
            msg = "condition not met before timeout"
            raise AssertionError(msg)
        await asyncio.sleep(interval)


def progress_lines(console: ConsoleLog) -> list[str]:
    """コンソールから進捗行だけを取り出す。"""
    return [line for line in console.lines if line.endswith("working...")]
