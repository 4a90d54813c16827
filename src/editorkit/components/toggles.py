"""Named on/off switches for the ``debug`` and ``experimental`` components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

__all__ = ["Toggles"]


@dataclass
class Toggles:
    """A group switch plus individually named flags.

    Attributes:
        enabled: Group switch. When False every lookup reports False.
        flags: Named flags consulted while the group is enabled.
    """

    enabled: bool = False
    flags: Dict[str, bool] = field(default_factory=dict)

    def is_enabled(self, name: Optional[str] = None) -> bool:
        if not self.enabled:
            return False
        if name is None:
            return True
        return bool(self.flags.get(name, False))

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    def set_flag(self, name: str, value: bool = True) -> None:
        self.flags[name] = value
