"""Capability protocols for components registered with the helper.

Each well-known registry key has one protocol describing the methods the
helper calls on it. Components satisfy them structurally; nothing has to
inherit from these classes.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Protocol, runtime_checkable

__all__ = [
    "Decoratable",
    "FileState",
    "YesNoAnswer",
    "DialogProvider",
    "MessageSink",
    "Toggle",
    "Account",
    "LanguageProvider",
]


@runtime_checkable
class Decoratable(Protocol):
    def decorate(self, node: Any, prefix: str) -> None: ...  # pragma: no cover


class FileState(Protocol):
    """Registered under ``file``."""

    def get_file_title(self) -> str: ...  # pragma: no cover

    def is_modified(self) -> bool: ...  # pragma: no cover


class YesNoAnswer(Protocol):
    """Future-like answer of a yes/no dialog.

    ``concurrent.futures.Future`` and ``asyncio.Future`` both qualify.
    """

    def add_done_callback(self, fn: Any) -> None: ...  # pragma: no cover

    def cancelled(self) -> bool: ...  # pragma: no cover

    def exception(self) -> Optional[BaseException]: ...  # pragma: no cover

    def result(self) -> bool: ...  # pragma: no cover


class DialogProvider(Protocol):
    """Registered under ``dialog``."""

    def show_yes_no(self, title: str, body: str) -> YesNoAnswer: ...  # pragma: no cover


class MessageSink(Protocol):
    """Registered under ``message``."""

    def error(self, text: str) -> None: ...  # pragma: no cover

    def warning(self, text: str) -> None: ...  # pragma: no cover

    def info(self, text: str) -> None: ...  # pragma: no cover

    def success(self, text: str) -> None: ...  # pragma: no cover


class Toggle(Protocol):
    """Registered under ``debug`` and ``experimental``."""

    def is_enabled(self, name: Optional[str] = None) -> bool: ...  # pragma: no cover


class Account(Protocol):
    """Registered under ``account``."""

    def is_authenticated(self) -> bool: ...  # pragma: no cover


class LanguageProvider(Protocol):
    """Registered under ``i18n``."""

    def get_language_data(self) -> Dict[str, str]: ...  # pragma: no cover
