"""
コンソール出力モジュール。

バックグラウンドタスクの進捗をコンソールパネルに表示する:
- ConsoleFormatter: 行ごとのスタイル(赤太字/緑下線/黄)を付与
- ConsoleLog: 追記専用の行バッファ。追記のたびに全体を購読者へ再表示させる
"""

import asyncio
import logging
from typing import Protocol

from rich.style import Style
from rich.text import Text

logger = logging.getLogger(__name__)

EXTENSION_TITLE = "hiddifyWRT"

CANCELLED_MESSAGE = "Background Task Canceled"
FINISHED_MESSAGE = "Background Task Finished Successfully"


class ConsoleObserver(Protocol):
    """コンソール表示先のプロトコル定義。"""

    async def update_console(self, content: Text) -> None:
        """コンソール全体を再表示する。

        Args:
            content: 表示するコンソール全体のテキスト
        """
        ...


class ConsoleFormatter:
    """コンソール行のスタイルを決めるクラス。

    Attributes:
        alert: 強調(カウント値・キャンセル通知)用スタイル
        success: 完了通知用スタイル
        info: 通常メッセージ用スタイル
    """

    def __init__(
        self,
        alert: Style | str = "bold red",
        success: Style | str = "underline green",
        info: Style | str = "yellow",
    ) -> None:
        self.alert = alert
        self.success = success
        self.info = info

    def welcome(self, title: str = EXTENSION_TITLE) -> Text:
        """起動直後に表示する歓迎メッセージを返す。"""
        return Text.assemble(("Welcome to ", self.info), (title, self.success))

    def progress(self, count: int) -> Text:
        """進捗行を返す。

        Args:
            count: 現在のカウント(1始まり)

        Returns:
            例: "1 Background task 1 working..."
        """
        return Text.assemble(
            (str(count), self.alert),
            (f" Background task {count} working...", self.info),
        )

    def cancelled(self) -> Text:
        return Text(CANCELLED_MESSAGE, style=self.alert)

    def finished(self) -> Text:
        return Text(FINISHED_MESSAGE, style=self.success)


class ConsoleLog:
    """追記専用のコンソールログ。

    行の追記はappendのみで行い、追記のたびに購読者へコンソール全体を通知する。
    クリアはしない。

    Attributes:
        _lines: 追記された行
        _observers: 追記を通知する購読者
        _lock: 追記の順序を保つためのロック
        _notified_version: 通知を開始した最新の内容の行数
    """

    def __init__(self, welcome: Text | str | None = None) -> None:
        self._lines: list[Text] = []
        self._observers: list[ConsoleObserver] = []
        self._lock = asyncio.Lock()
        self._notified_version = 0
        if welcome is not None:
            self._lines.append(Text(welcome) if isinstance(welcome, str) else welcome)

    @property
    def lines(self) -> list[str]:
        """スタイルを除いた行のリストを返す。"""
        return [line.plain for line in self._lines]

    def __len__(self) -> int:
        return len(self._lines)

    def subscribe(self, observer: ConsoleObserver) -> None:
        """購読者を登録する。

        Args:
            observer: 追記のたびにupdate_consoleを呼ばれる購読者
        """
        self._observers.append(observer)

    def unsubscribe(self, observer: ConsoleObserver) -> None:
        """購読者の登録を解除する。未登録の場合は何もしない。

        Args:
            observer: 解除する購読者
        """
        if observer in self._observers:
            self._observers.remove(observer)

    def render(self) -> Text:
        """コンソール全体を1つのテキストにして返す。"""
        return Text("\n").join(self._lines)

    async def append(self, line: Text | str) -> None:
        """1行追記し、購読者に再表示させる。

        通知はロックの外で行うため、購読者の処理が遅くても他の追記は待たされない。
        より新しい内容の通知が始まっている場合、古い内容は通知しない。

        Args:
            line: 追記する行
        """
        async with self._lock:
            self._lines.append(Text(line) if isinstance(line, str) else line)
            version = len(self._lines)
            content = self.render()
            observers = list(self._observers)
            logger.debug("Console line appended: %s", self._lines[-1].plain)

        for observer in observers:
            if version < self._notified_version:
                logger.debug("Skipping stale console update: version=%d", version)
                return
            self._notified_version = version
            try:
                await observer.update_console(content)
            except Exception as e:
                logger.error("Failed to update console: %s", e)
