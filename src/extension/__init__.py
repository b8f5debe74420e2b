"""
拡張機能モジュール。

ホストアプリケーションに組み込まれる拡張機能とその登録処理を提供する。
"""

from src.extension.host import ExtensionHost, RichConsoleHost
from src.extension.plugin import (
    BUTTON_CANCEL,
    BUTTON_DIALOG_CLOSE,
    BUTTON_DIALOG_OK,
    BUTTON_SUBMIT,
    EXTENSION_ID,
    HIDDIFY_WRT_FACTORY,
    ExtensionForm,
    HiddifyWrtExtension,
    new_hiddify_wrt,
)
from src.extension.registry import (
    ExtensionFactory,
    ExtensionRegistrationError,
    get_extension_factory,
    list_extensions,
    register_extension,
)


def register_default_extensions() -> None:
    """同梱の拡張機能をホストのレジストリに登録する。起動時に一度だけ呼ぶ。"""
    register_extension(HIDDIFY_WRT_FACTORY)


__all__ = [
    "BUTTON_CANCEL",
    "BUTTON_DIALOG_CLOSE",
    "BUTTON_DIALOG_OK",
    "BUTTON_SUBMIT",
    "EXTENSION_ID",
    "HIDDIFY_WRT_FACTORY",
    "ExtensionFactory",
    "ExtensionForm",
    "ExtensionHost",
    "ExtensionRegistrationError",
    "HiddifyWrtExtension",
    "RichConsoleHost",
    "get_extension_factory",
    "list_extensions",
    "new_hiddify_wrt",
    "register_default_extensions",
    "register_extension",
]
