"""Qt yes/no dialog used as the ``dialog`` component.

``show_yes_no`` opens a window-modal ``QMessageBox`` without blocking the
event loop and returns a ``concurrent.futures.Future`` resolved with the
answer. Closing the box without pressing a button answers "no".

Usage:
    dialog = QtDialog()
    dialog.show_yes_no("Quit", "Really quit?").add_done_callback(on_answer)
"""

from __future__ import annotations

from concurrent.futures import Future
from typing import List, Optional

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QMessageBox, QWidget

__all__ = ["QtDialog"]


class QtDialog:
    def __init__(self, parent: Optional[QWidget] = None) -> None:
        self._parent = parent
        self._prefix = ""
        self._boxes: List[QMessageBox] = []

    def decorate(self, node: Optional[QWidget], prefix: str) -> None:
        """Parent future dialogs to ``node`` and namespace their object names."""
        self._parent = node
        self._prefix = prefix

    def show_yes_no(self, title: str, body: str) -> "Future[bool]":
        future: Future[bool] = Future()
        future.set_running_or_notify_cancel()
        box = QMessageBox(self._parent)
        box.setObjectName(f"{self._prefix}dialog-yes-no")
        box.setWindowModality(Qt.WindowModality.WindowModal)
        box.setIcon(QMessageBox.Icon.Question)
        box.setWindowTitle(title)
        box.setText(body)
        box.setStandardButtons(QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No)
        box.setDefaultButton(QMessageBox.StandardButton.No)

        def _finished(_code: int) -> None:
            clicked = box.clickedButton()
            answer = (
                clicked is not None
                and box.standardButton(clicked) == QMessageBox.StandardButton.Yes
            )
            if box in self._boxes:
                self._boxes.remove(box)
            box.deleteLater()
            if not future.done():
                future.set_result(answer)

        box.finished.connect(_finished)
        self._boxes.append(box)
        box.show()
        return future

    def active_boxes(self) -> List[QMessageBox]:
        return list(self._boxes)
