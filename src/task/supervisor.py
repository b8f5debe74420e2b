"""
タスクスーパーバイザーモジュール。

単一スロットのバックグラウンドタスク管理を実装する:
- 同時に実行されるタスクは最大1つ
- 新しいタスクの開始は実行中タスクをキャンセルして置き換える
- 進捗はConsoleLogへの追記で通知する
- キャンセルは協調的で、イテレーションの境界でのみ検知される

依存性注入パターン:
- ConsoleLog: 進捗の出力先
- ConsoleFormatter: 出力行のスタイル
"""

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from src.task.console import ConsoleFormatter, ConsoleLog
from src.task.models import (
    RunningTask,
    TaskParameters,
    TaskStatus,
    parse_task_parameters,
)

DEFAULT_TICK_INTERVAL_SECONDS = 1.0

logger = logging.getLogger(__name__)


class TaskSupervisor:
    """単一スロットのタスクスーパーバイザー。

    機能:
    - start: パラメータを検証してタスクを開始(実行中タスクは置き換え)
    - cancel: 実行中タスクをキャンセル
    - shutdown: 終了時のキャンセル
    - join: 起動済みのバックグラウンド処理の終了を待機

    公開操作はバックグラウンド処理の完了を待たずに戻る。

    Attributes:
        _console: 進捗の出力先
        _formatter: 出力行のスタイル
        _tick_interval: イテレーション間の待機秒数
        _current: 現在スロットを占有しているタスク
        _lock: スロット操作用ロック
        _background: 実行中のasyncioタスク
    """

    def __init__(
        self,
        console: ConsoleLog | None = None,
        formatter: ConsoleFormatter | None = None,
        tick_interval: float = DEFAULT_TICK_INTERVAL_SECONDS,
    ) -> None:
        """TaskSupervisorを初期化する。

        Args:
            console: 進捗の出力先(省略時は歓迎メッセージ付きで新規作成)
            formatter: 出力行のスタイル(省略時はデフォルト)
            tick_interval: イテレーション間の待機秒数

        Raises:
            ValueError: tick_intervalが0以下の場合
        """
        if tick_interval <= 0:
            msg = "tick_interval must be positive"
            raise ValueError(msg)

        self._formatter = formatter or ConsoleFormatter()
        self._console = console if console is not None else ConsoleLog(self._formatter.welcome())
        self._tick_interval = tick_interval
        self._current: RunningTask | None = None
        self._lock = asyncio.Lock()
        self._background: set[asyncio.Task[None]] = set()

        logger.info("TaskSupervisor initialized with tick_interval=%.3f", tick_interval)

    @property
    def console(self) -> ConsoleLog:
        """進捗の出力先を返す。"""
        return self._console

    @property
    def current_task(self) -> RunningTask | None:
        """スロットを占有しているタスクを返す。"""
        return self._current

    @property
    def is_running(self) -> bool:
        """スロットにタスクがあるかどうかを返す。"""
        return self._current is not None

    async def start(self, params: TaskParameters | Mapping[str, Any]) -> RunningTask:
        """タスクを開始する。

        パラメータの検証に失敗した場合は何も変更しない。
        実行中のタスクがあればキャンセル信号を送り、その後片付けは待たない。

        Args:
            params: 起動パラメータ、またはフィールド名と値の辞書

        Returns:
            スロットに登録された新しいタスク

        Raises:
            TaskParametersError: パラメータが不正な場合
        """
        if not isinstance(params, TaskParameters):
            params = parse_task_parameters(params)

        task = RunningTask(params)

        async with self._lock:
            previous = self._current
            if previous is not None:
                previous.request_cancel()
                logger.info("Superseding task: old=%s, new=%s", previous.id, task.id)
            self._current = task

        runner = asyncio.create_task(self._run(task), name=f"background-task-{task.id}")
        self._background.add(runner)
        runner.add_done_callback(self._background.discard)

        logger.info("Task started: id=%s, iterations=%d", task.id, params.iterations)

        return task

    async def cancel(self) -> None:
        """実行中のタスクをキャンセルする。

        スロットが空の場合は何もしない。連続して呼んでも安全。
        """
        async with self._lock:
            task = self._current
            if task is None:
                logger.debug("Cancel requested with no running task")
                return
            task.request_cancel()
            self._current = None

        logger.info("Task cancel requested: id=%s", task.id)

    async def shutdown(self) -> None:
        """終了処理としてタスクをキャンセルする。

        キャンセル信号を送った時点で戻り、タスク側の後片付けは待たない。
        """
        logger.info("TaskSupervisor shutting down")
        await self.cancel()

    async def join(self) -> None:
        """起動済みのバックグラウンド処理がすべて終わるまで待機する。"""
        while self._background:
            await asyncio.gather(*list(self._background))

    async def _run(self, task: RunningTask) -> None:
        """カウントループ本体。

        Args:
            task: 実行するタスク
        """
        task.status = TaskStatus.RUNNING
        try:
            for count in range(1, task.params.iterations + 1):
                if task.cancel_requested or await task.wait_cancelled(self._tick_interval):
                    task.status = TaskStatus.CANCELLED
                    await self._console.append(self._formatter.cancelled())
                    logger.info("Task cancelled: id=%s, progress=%d", task.id, task.progress)
                    return

                task.progress = count
                await self._console.append(self._formatter.progress(count))
                logger.debug("Task progress: id=%s, count=%d", task.id, count)

            task.status = TaskStatus.COMPLETED
            await self._console.append(self._formatter.finished())
            logger.info("Task finished: id=%s", task.id)
        finally:
            await self._release(task)

    async def _release(self, task: RunningTask) -> None:
        """スロットがまだこのタスクのものであれば解放する。

        後続のタスクに置き換えられている場合はスロットに触れない。

        Args:
            task: 終了したタスク
        """
        async with self._lock:
            if self._current is task:
                self._current = None
                logger.debug("Slot released: id=%s", task.id)
