"""Default implementations of the well-known helper components.

The Qt dialog is imported lazily by the bootstrap so headless sessions never
load PyQt6 widgets.
"""

from .i18n import Translator  # noqa: F401
from .message import MessageCenter, MessageEntry  # noqa: F401
from .toggles import Toggles  # noqa: F401

__all__ = ["Translator", "MessageCenter", "MessageEntry", "Toggles"]
