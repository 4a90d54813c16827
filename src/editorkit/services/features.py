"""Layered feature flags.

Flags are stored per group. Three groups are filled by detection:

 - ``browser``: the embedded web engine that hosts script workspaces
 - ``host``: the Qt / operating system host application
 - ``scripting``: the Python runtime

Any other group (``general`` by default) is set explicitly by application
code. Detection runs on demand through :meth:`Features.detect_features`; reads
never trigger detection.
"""

from __future__ import annotations

import importlib.util
import logging
import os
import platform
import sys
from typing import Callable, Dict, Optional, Protocol, Union

import psutil

__all__ = [
    "FeatureValue",
    "FeatureDetector",
    "FeatureSource",
    "Features",
    "GENERAL_GROUP",
    "BROWSER_GROUP",
    "HOST_GROUP",
    "SCRIPTING_GROUP",
]

logger = logging.getLogger(__name__)

FeatureValue = Union[bool, str]

GENERAL_GROUP = "general"
BROWSER_GROUP = "browser"
HOST_GROUP = "host"
SCRIPTING_GROUP = "scripting"

_LOW_MEMORY_BYTES = 2 * 1024**3


class FeatureSource(Protocol):
    def detect_browser(self) -> Dict[str, FeatureValue]: ...  # pragma: no cover

    def detect_host(self) -> Dict[str, FeatureValue]: ...  # pragma: no cover

    def detect_scripting(self) -> Dict[str, FeatureValue]: ...  # pragma: no cover


def _module_available(name: str) -> bool:
    try:
        return importlib.util.find_spec(name) is not None
    except (ImportError, ValueError):
        return False


class FeatureDetector:
    """Default capability probes for the three detection layers.

    ``manifest_probe`` reports whether host packaging metadata is available;
    the bootstrap wires it to the manifest loader.
    """

    def __init__(self, manifest_probe: Optional[Callable[[], bool]] = None) -> None:
        self._manifest_probe = manifest_probe

    def detect_browser(self) -> Dict[str, FeatureValue]:
        web_engine = _module_available("PyQt6.QtWebEngineWidgets")
        return {
            "web_engine": web_engine,
            "web_channel": web_engine and _module_available("PyQt6.QtWebChannel"),
            "offscreen": os.environ.get("QT_QPA_PLATFORM", "") == "offscreen",
        }

    def detect_host(self) -> Dict[str, FeatureValue]:
        flags: Dict[str, FeatureValue] = {
            "os": platform.system().lower() or sys.platform,
            "qt": _module_available("PyQt6.QtWidgets"),
            "display": bool(
                sys.platform in ("win32", "darwin")
                or os.environ.get("DISPLAY")
                or os.environ.get("WAYLAND_DISPLAY")
            ),
        }
        if flags["qt"]:
            try:
                from PyQt6.QtCore import QT_VERSION_STR  # type: ignore

                flags["qt_version"] = QT_VERSION_STR
            except ImportError:  # pragma: no cover - broken install
                flags["qt"] = False
        try:
            flags["low_memory"] = psutil.virtual_memory().total < _LOW_MEMORY_BYTES
        except (OSError, RuntimeError):  # pragma: no cover - restricted sandboxes
            flags["low_memory"] = False
        if self._manifest_probe is not None:
            flags["manifest"] = bool(self._manifest_probe())
        return flags

    def detect_scripting(self) -> Dict[str, FeatureValue]:
        return {
            "implementation": platform.python_implementation().lower(),
            "python_version": platform.python_version(),
            "asyncio": _module_available("asyncio"),
            "sqlite3": _module_available("sqlite3"),
            "ssl": _module_available("ssl"),
            "tomllib": _module_available("tomllib"),
        }


class Features:
    """Grouped flag table fed by a :class:`FeatureSource`."""

    def __init__(self, detector: Optional[FeatureSource] = None) -> None:
        self._detector: FeatureSource = detector or FeatureDetector()
        self._groups: Dict[str, Dict[str, FeatureValue]] = {}
        self._detected = False

    def use_detector(self, detector: FeatureSource) -> None:
        """Swap the source used by later detection passes; stored flags stay."""
        self._detector = detector

    def set(self, name: str, value: FeatureValue, group: Optional[str] = None) -> None:
        self._groups.setdefault(group or GENERAL_GROUP, {})[name] = value

    def get(self, name: str, group: Optional[str] = None) -> Optional[FeatureValue]:
        return self._groups.get(group or GENERAL_GROUP, {}).get(name)

    def get_browser_feature(self, name: str) -> FeatureValue:
        return self.get(name, BROWSER_GROUP) or False

    def get_host_feature(self, name: str) -> FeatureValue:
        return self.get(name, HOST_GROUP) or False

    def get_scripting_feature(self, name: str) -> FeatureValue:
        return self.get(name, SCRIPTING_GROUP) or False

    def detect_features(self) -> Dict[str, Dict[str, FeatureValue]]:
        """Run every detection layer and store the results (last write wins)."""
        layers = (
            (BROWSER_GROUP, self._detector.detect_browser),
            (HOST_GROUP, self._detector.detect_host),
            (SCRIPTING_GROUP, self._detector.detect_scripting),
        )
        for group, probe in layers:
            for name, value in probe().items():
                self.set(name, value, group)
            logger.debug("Detected %s features: %s", group, self._groups.get(group, {}))
        self._detected = True
        return self.snapshot()

    @property
    def detected(self) -> bool:
        return self._detected

    def snapshot(self) -> Dict[str, Dict[str, FeatureValue]]:
        return {group: dict(flags) for group, flags in self._groups.items()}
