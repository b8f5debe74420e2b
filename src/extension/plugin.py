"""
hiddifyWRT拡張機能モジュール。

ホストから呼ばれる拡張機能の実装を提供する:
- フォーム送信(submit_data): ボタンごとにタスクの開始・キャンセルを振り分ける
- 終了処理(close): 実行中タスクのキャンセル
- 接続前フック(before_app_connect): 設定は変更しない
- フォーム定義(get_form): ホストが描画するフォームの内容
"""

import logging
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel

from src.config import Settings, get_settings
from src.extension.host import ExtensionHost
from src.extension.registry import ExtensionFactory
from src.task import (
    ConsoleFormatter,
    ConsoleLog,
    TaskParameters,
    TaskParametersError,
    TaskSupervisor,
    parse_task_parameters,
)
from src.task.console import EXTENSION_TITLE

EXTENSION_ID = "github.com/minisind/hiddifywrt/hiddify_extension"
EXTENSION_DESCRIPTION = "Awesome Extension hiddifywrt created by minisind"

BUTTON_SUBMIT = "submit"
BUTTON_CANCEL = "cancel"
BUTTON_DIALOG_OK = "dialog-ok"
BUTTON_DIALOG_CLOSE = "dialog-close"

# "count" は件数フィールドの別名として受け付ける
ITERATIONS_FIELD_ALIASES = ("iterations", "count")

logger = logging.getLogger(__name__)


class FormField(BaseModel):
    """フォームの入力フィールド。"""

    key: str
    label: str
    type: Literal["number", "text"]
    value: str


class ExtensionForm(BaseModel):
    """ホストが描画するフォームの内容。

    Attributes:
        title: フォームのタイトル
        description: 説明文
        fields: 入力フィールド
        buttons: 表示するボタンのID
        console: コンソールパネルの内容(スタイルなし)
    """

    title: str
    description: str
    fields: list[FormField]
    buttons: list[str]
    console: str


def extract_iterations(data: Mapping[str, str]) -> dict[str, str]:
    """フォームデータから件数フィールドを取り出す。

    Args:
        data: フォームのフィールド名と値の辞書

    Returns:
        {"iterations": 値}。該当するキーがない場合は空の辞書。
    """
    for key in ITERATIONS_FIELD_ALIASES:
        if key in data:
            return {"iterations": data[key]}
    return {}


class HiddifyWrtExtension:
    """hiddifyWRT拡張機能。

    フォームで指定された回数だけ1秒ごとに進捗を出力するバックグラウンドタスクを管理する。

    Attributes:
        _host: ホスト(コンソール表示・ダイアログ)
        _supervisor: バックグラウンドタスクの管理
        params: 最後に受け付けたパラメータ(フォームの現在値)
    """

    def __init__(
        self,
        host: ExtensionHost,
        settings: Settings | None = None,
        supervisor: TaskSupervisor | None = None,
    ) -> None:
        """HiddifyWrtExtensionを初期化する。

        Args:
            host: ホスト
            settings: 設定(省略時はget_settings()の値)
            supervisor: タスク管理(省略時は設定値から作成)
        """
        settings = settings or get_settings()
        self._host = host
        if supervisor is None:
            formatter = ConsoleFormatter()
            supervisor = TaskSupervisor(
                console=ConsoleLog(formatter.welcome(EXTENSION_TITLE)),
                formatter=formatter,
                tick_interval=settings.tick_interval_seconds,
            )
        self._supervisor = supervisor
        self._supervisor.console.subscribe(host)
        self.params = TaskParameters(iterations=settings.default_iterations)

        logger.info(
            "HiddifyWrtExtension initialized with iterations=%d",
            self.params.iterations,
        )

    @property
    def supervisor(self) -> TaskSupervisor:
        return self._supervisor

    async def submit_data(self, button: str, data: Mapping[str, str]) -> None:
        """フォーム送信を処理する。

        Args:
            button: 押されたボタンのID
            data: フォームのフィールド名と値の辞書

        Raises:
            TaskParametersError: submitでフォームデータが不正な場合
        """
        logger.info("Form submitted: button=%s", button)

        if button in (BUTTON_DIALOG_OK, BUTTON_DIALOG_CLOSE):
            return

        if button == BUTTON_CANCEL:
            await self._supervisor.cancel()
            return

        if button == BUTTON_SUBMIT:
            merged = {**self.params.model_dump(), **extract_iterations(data)}
            try:
                params = parse_task_parameters(merged)
            except TaskParametersError as e:
                logger.warning("Invalid form data: %s", e)
                await self._host.show_message("Invalid data", str(e))
                raise

            self.params = params
            await self._supervisor.start(params)
            return

        await self._host.show_message(
            f"Button {button} is pressed",
            "No action is defined for this button",
        )

    async def close(self) -> None:
        """拡張機能の終了時に呼ばれる。

        実行中タスクをキャンセルし、ホストへのコンソール通知を止める。
        キャンセル後に追記される行はコンソールログにのみ残る。
        """
        logger.info("Closing extension: %s", EXTENSION_ID)
        await self._supervisor.shutdown()
        self._supervisor.console.unsubscribe(self._host)

    async def before_app_connect(self, app_settings: Any, proxy_options: Any) -> None:
        """接続前に呼ばれるフック。

        ユーザー設定を変更する場合はここで行う。この拡張機能では何もしない。

        Args:
            app_settings: ホストアプリケーションの設定
            proxy_options: 接続に使用するプロキシ設定
        """
        return None

    def get_form(self) -> ExtensionForm:
        """ホストが描画するフォームの内容を返す。"""
        return ExtensionForm(
            title=EXTENSION_TITLE,
            description=EXTENSION_DESCRIPTION,
            fields=[
                FormField(
                    key="iterations",
                    label="Count",
                    type="number",
                    value=str(self.params.iterations),
                ),
            ],
            buttons=[BUTTON_SUBMIT, BUTTON_CANCEL],
            console="\n".join(self._supervisor.console.lines),
        )


def new_hiddify_wrt(host: ExtensionHost, settings: Settings | None = None) -> HiddifyWrtExtension:
    """HiddifyWrtExtensionを生成する。ExtensionFactoryのbuilderとして使用する。"""
    return HiddifyWrtExtension(host=host, settings=settings)


HIDDIFY_WRT_FACTORY = ExtensionFactory(
    id=EXTENSION_ID,
    title=EXTENSION_TITLE,
    description=EXTENSION_DESCRIPTION,
    builder=new_hiddify_wrt,
)
