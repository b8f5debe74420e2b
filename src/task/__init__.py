"""
タスク管理モジュール。

単一スロットのバックグラウンドタスクの起動・キャンセルと進捗出力を担当する。
"""

from src.task.console import (
    CANCELLED_MESSAGE,
    FINISHED_MESSAGE,
    ConsoleFormatter,
    ConsoleLog,
    ConsoleObserver,
)
from src.task.models import (
    DEFAULT_ITERATIONS,
    RunningTask,
    TaskParameters,
    TaskParametersError,
    TaskStatus,
    parse_task_parameters,
)
from src.task.supervisor import TaskSupervisor

__all__ = [
    "CANCELLED_MESSAGE",
    "DEFAULT_ITERATIONS",
    "FINISHED_MESSAGE",
    "ConsoleFormatter",
    "ConsoleLog",
    "ConsoleObserver",
    "RunningTask",
    "TaskParameters",
    "TaskParametersError",
    "TaskStatus",
    "TaskSupervisor",
    "parse_task_parameters",
]
