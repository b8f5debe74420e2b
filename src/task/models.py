"""
タスク関連の型定義モジュール。

バックグラウンドタスクで扱う型を定義する:
- TaskStatus: タスクの状態を表すEnum
- TaskParameters: タスク起動パラメータ(バリデーション付き)
- TaskParametersError: パラメータ不正時の例外
- RunningTask: 実行中タスクのハンドル
"""

import asyncio
import uuid
from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

DEFAULT_ITERATIONS = 4


class TaskStatus(Enum):
    """タスクの状態を表すEnum。

    タスクのライフサイクルに対応する状態を定義する:
    - CREATED: スロットに登録済み、ループ未開始
    - RUNNING: カウントループ実行中
    - COMPLETED: 全イテレーション完了
    - CANCELLED: キャンセル(明示的キャンセル、後続タスクによる置き換え、終了処理)
    """

    CREATED = "created"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


TERMINAL_STATES = frozenset({TaskStatus.COMPLETED, TaskStatus.CANCELLED})


class TaskParametersError(ValueError):
    """タスクパラメータが不正な場合の例外。

    Attributes:
        field: 不正だったフィールド名
        message: 人間向けのエラーメッセージ
    """

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class TaskParameters(BaseModel):
    """タスク起動パラメータ。

    Attributes:
        iterations: 実行するイテレーション数(0以上の整数)
    """

    iterations: int = Field(default=DEFAULT_ITERATIONS, ge=0)

    @field_validator("iterations", mode="before")
    @classmethod
    def _parse_integer_text(cls, value: Any) -> Any:
        # フォームからは文字列で届く。小数表記や空文字は受け付けない
        if isinstance(value, bool):
            raise ValueError("must be an integer")
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                raise ValueError(f"{value!r} is not an integer") from None
        return value


def parse_task_parameters(data: Mapping[str, Any]) -> TaskParameters:
    """辞書からTaskParametersを生成する。

    Args:
        data: フィールド名と値の辞書

    Returns:
        検証済みのTaskParameters

    Raises:
        TaskParametersError: 値が0以上の整数として解釈できない場合
    """
    try:
        return TaskParameters.model_validate(dict(data))
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or "iterations"
        msg = error["msg"]
        raise TaskParametersError(field, msg) from e


class RunningTask:
    """実行中タスクのハンドル。

    TaskSupervisorのみが生成・保持する。タスク自身はスロットを操作しない。

    Attributes:
        id: UUID v4形式のタスクID
        params: 起動パラメータ
        status: タスクの現在の状態
        progress: 最後に出力したカウント(未出力なら0)
    """

    def __init__(self, params: TaskParameters) -> None:
        self.id = str(uuid.uuid4())
        self.params = params
        self.status = TaskStatus.CREATED
        self.progress = 0
        self._cancel_event = asyncio.Event()

    @property
    def cancel_requested(self) -> bool:
        """キャンセルが要求されているかどうかを返す。"""
        return self._cancel_event.is_set()

    @property
    def is_finished(self) -> bool:
        """終端状態に達しているかどうかを返す。"""
        return self.status in TERMINAL_STATES

    def request_cancel(self) -> None:
        """キャンセルを要求する。何度呼んでもよい。"""
        self._cancel_event.set()

    async def wait_cancelled(self, timeout: float) -> bool:
        """キャンセル要求かタイムアウトのどちらか早い方まで待機する。

        Args:
            timeout: 最大待機秒数

        Returns:
            キャンセルが要求された場合はTrue、タイムアウトした場合はFalse
        """
        try:
            await asyncio.wait_for(self._cancel_event.wait(), timeout=timeout)
        except TimeoutError:
            return False
        return True

    def __repr__(self) -> str:
        return (
            f"RunningTask(id={self.id!r}, iterations={self.params.iterations}, "
            f"progress={self.progress}, status={self.status.value})"
        )
