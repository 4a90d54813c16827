# Minimal conftest providing a fallback 'qtbot' fixture if pytest-qt is not installed.
# Qt tests run on the offscreen platform so no display is needed.

import os
import sys
import contextlib
import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from editorkit.config.settings import ShellSettings
from editorkit.services.event_bus import EventBus
from editorkit.services.features import Features
from editorkit.services.helper import Helper

try:  # If pytest-qt present, do nothing (its fixture will be used)
    import pytestqt  # type: ignore  # noqa: F401
except Exception:  # pragma: no cover
    try:
        from PyQt6.QtWidgets import QApplication
    except Exception:  # pragma: no cover
        QApplication = None  # type: ignore

    @pytest.fixture
    def qtbot():  # type: ignore
        if QApplication is None:
            pytest.skip("PyQt6 not available")
        app = QApplication.instance() or QApplication(sys.argv)  # type: ignore
        widgets = []

        class Bot:
            def addWidget(self, w):  # mimic pytest-qt API subset
                widgets.append(w)

            @contextlib.contextmanager
            def waitSignal(self, *args, **kwargs):  # no-op stub
                yield

        return Bot()


class StaticDetector:
    """Feature source returning fixed layers; counts detection passes."""

    def __init__(self, browser=None, host=None, scripting=None):
        self.browser = dict(browser or {})
        self.host = dict(host or {})
        self.scripting = dict(scripting or {})
        self.calls = 0

    def detect_browser(self):
        self.calls += 1
        return dict(self.browser)

    def detect_host(self):
        return dict(self.host)

    def detect_scripting(self):
        return dict(self.scripting)


@pytest.fixture
def detector():
    return StaticDetector(
        browser={"web_engine": True},
        host={"qt": True, "os": "linux"},
        scripting={"python_version": "3.12.1", "tomllib": True},
    )


@pytest.fixture
def helper(detector):
    settings = ShellSettings(prefix="ek-", css_prefix="ekcss-", manifest_path=None, dist_name="")
    return Helper(
        settings,
        features=Features(detector),
        event_bus=EventBus(),
        manifest_loader=lambda: None,
    )
