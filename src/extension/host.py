"""
ホストアプリケーション連携モジュール。

拡張機能がホストに対して行う表示操作を定義する。
- Protocol型でインターフェースを定義
- RichConsoleHost: ターミナルで動作するrichベースの実装
- 依存性注入パターン(拡張機能はホストを引数で受け取る)
"""

import logging
from typing import Protocol

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

logger = logging.getLogger(__name__)


class ExtensionHost(Protocol):
    """ホストのインターフェース定義。

    コンソールパネルの再表示とメッセージダイアログの表示を抽象化する。
    """

    async def update_console(self, content: Text) -> None:
        """コンソールパネルの内容を置き換えて再表示する。

        Args:
            content: コンソール全体のテキスト
        """
        ...

    async def show_message(self, title: str, message: str) -> None:
        """メッセージダイアログを表示する。

        Args:
            title: ダイアログのタイトル
            message: 本文
        """
        ...


class RichConsoleHost:
    """ExtensionHostのターミナル実装。

    コンソールパネルとダイアログをrichのPanelとして描画する。

    Attributes:
        _console: 描画先のrichコンソール
        _title: コンソールパネルのタイトル
        last_content: 最後に表示したコンソール内容
    """

    def __init__(self, console: Console | None = None, title: str = "Console") -> None:
        """RichConsoleHostを初期化する。

        Args:
            console: 描画先(省略時は標準出力)
            title: コンソールパネルのタイトル
        """
        self._console = console or Console()
        self._title = title
        self.last_content: Text | None = None

    async def update_console(self, content: Text) -> None:
        self.last_content = content
        self._console.print(Panel(content, title=self._title, title_align="left"))

    async def show_message(self, title: str, message: str) -> None:
        logger.info("Showing message: title=%s", title)
        self._console.print(Panel(Text(message), title=f"[bold]{title}[/bold]", border_style="yellow"))
