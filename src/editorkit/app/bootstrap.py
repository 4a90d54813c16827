"""Application bootstrap for the editor shell.

Responsibilities:
 - Applying the configured log level to the ``editorkit`` logger
 - Constructing the session ``Helper`` with its EventBus and feature table
 - Attaching the LoggingService ring buffer
 - Running feature detection once
 - Registering the default components and reserving keys for modules that
   are constructed later (``file``, ``account``)
 - Optional headless bootstrap (for tests / environments without PyQt6)

The bootstrap avoids importing PyQt6 widgets at module import time to keep
test collection fast and allow running unit tests without a display.
"""

from __future__ import annotations

import logging
import sys
import time
from dataclasses import dataclass, field
from typing import Any, Optional

from editorkit.components import MessageCenter, Toggles, Translator
from editorkit.config.settings import ShellSettings
from editorkit.services.event_bus import EventBus
from editorkit.services.features import FeatureDetector, Features
from editorkit.services.helper import Helper
from editorkit.services.logging_service import LoggingService
from editorkit.services.manifest import load_manifest

try:  # Lazy / optional Qt import
    from PyQt6.QtWidgets import QApplication  # type: ignore

    _QT_AVAILABLE = True
except Exception:  # noqa: BLE001
    QApplication = None  # type: ignore
    _QT_AVAILABLE = False

__all__ = ["AppContext", "create_app", "DEFERRED_KEYS"]

logger = logging.getLogger(__name__)

# Modules constructed after bootstrap; reserved so lookups warn instead of error.
DEFERRED_KEYS = ("file", "account")


@dataclass
class AppContext:
    """Container with references created during bootstrap.

    Attributes
    ----------
    qt_app: The underlying QApplication instance (None if headless or Qt missing)
    headless: Whether headless bootstrap was used
    helper: Session component registry
    logging_service: Ring buffer capturing ``editorkit`` log records
    settings: Resolved shell settings
    started_at: Monotonic timestamp when bootstrap started
    duration_s: Total elapsed seconds for bootstrap
    metadata: Free-form dict for diagnostics
    """

    qt_app: Optional[Any]
    headless: bool
    helper: Helper
    logging_service: LoggingService
    settings: ShellSettings
    started_at: float
    duration_s: float
    metadata: dict[str, Any] = field(default_factory=dict)


def create_app(
    *,
    headless: bool | None = None,
    settings: ShellSettings | None = None,
) -> AppContext:
    """Create and wire the editor shell session.

    Parameters
    ----------
    headless: Force headless (no QApplication, dialog reserved). If None,
        inferred by Qt availability.
    settings: Explicit settings; defaults to ``ShellSettings.from_env()``.
    """
    started = time.perf_counter()
    settings = settings or ShellSettings.from_env()
    if headless is None:
        headless = not _QT_AVAILABLE

    logging.getLogger("editorkit").setLevel(
        getattr(logging, settings.log_level.upper(), logging.INFO)
    )

    bus = EventBus()
    features = Features()
    helper = Helper(
        settings,
        features=features,
        event_bus=bus,
        manifest_loader=lambda: load_manifest(settings.manifest_path, settings.dist_name),
    )
    # Read through the helper cache so the manifest is loaded once per session.
    features.use_detector(FeatureDetector(manifest_probe=lambda: helper.get_manifest() is not None))
    logging_service = LoggingService(bus)
    logging_service.attach()

    helper.detect_features()

    helper.register("message", MessageCenter(bus))
    helper.register("i18n", Translator())
    helper.register("debug", Toggles(settings.debug_enabled, dict(settings.debug_flags)))
    helper.register(
        "experimental",
        Toggles(settings.experimental_enabled, dict(settings.experimental_flags)),
    )

    qt_app = None
    if not headless and _QT_AVAILABLE:
        from editorkit.components.dialog import QtDialog  # local import keeps headless light

        qt_app = QApplication.instance() or QApplication(sys.argv[:1])  # minimal argv
        helper.register("dialog", QtDialog())
    else:
        helper.reserve("dialog")
    for key in DEFERRED_KEYS:
        helper.reserve(key)

    duration = time.perf_counter() - started
    logger.debug("Bootstrap finished in %.3fs (headless=%s)", duration, headless)
    return AppContext(
        qt_app=qt_app,
        headless=headless,
        helper=helper,
        logging_service=logging_service,
        settings=settings,
        started_at=started,
        duration_s=duration,
        metadata={
            "qt_available": _QT_AVAILABLE,
            "features": helper.get_features().snapshot(),
            "registered": helper.keys(),
            "log_levels": logging_service.level_counts(),
        },
    )
