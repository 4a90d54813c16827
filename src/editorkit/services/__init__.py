"""Service layer exports.

Responsibilities:
 - Component registry (`Helper`)
 - EventBus publish/subscribe core
 - Layered feature flags
 - Host manifest lookup and log capture
"""

from .event_bus import EditorEvent, Event, EventBus, Subscription  # noqa: F401
from .features import FeatureDetector, Features  # noqa: F401
from .helper import Helper, RequiredInstanceMissingError  # noqa: F401
from .logging_service import LogEntry, LoggingService  # noqa: F401
from .manifest import Manifest, load_manifest  # noqa: F401

__all__ = [
    "EditorEvent",
    "Event",
    "EventBus",
    "Subscription",
    "FeatureDetector",
    "Features",
    "Helper",
    "RequiredInstanceMissingError",
    "LogEntry",
    "LoggingService",
    "Manifest",
    "load_manifest",
]
