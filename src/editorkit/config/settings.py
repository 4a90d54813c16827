"""Global configuration and constants for the editor shell."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, Final, Optional

PREFIX_GENERAL: Final = os.environ.get("EDITORKIT_PREFIX", "editorkit-")
PREFIX_CSS: Final = os.environ.get("EDITORKIT_CSS_PREFIX", "ek-")
LOG_LEVEL: Final = os.environ.get("EDITORKIT_LOG_LEVEL", "INFO")
MANIFEST_PATH: Final = os.environ.get("EDITORKIT_MANIFEST")
DIST_NAME: Final = os.environ.get("EDITORKIT_DIST_NAME", "editorkit")

# Comma separated flag names; "1" / "all" switches the whole group on.
DEBUG_FLAGS: Final = os.environ.get("EDITORKIT_DEBUG", "")
EXPERIMENTAL_FLAGS: Final = os.environ.get("EDITORKIT_EXPERIMENTAL", "")

_ALL_MARKERS = {"1", "all", "true", "yes"}


def parse_flag_list(raw: str | None) -> tuple[bool, Dict[str, bool]]:
    """Parse a comma separated flag list into ``(enabled, flags)``.

    ``enabled`` is True when any flag is present; an "all" marker enables the
    group without naming individual flags.
    """
    if not raw:
        return False, {}
    names = [part.strip() for part in raw.split(",") if part.strip()]
    flags = {name: True for name in names if name.lower() not in _ALL_MARKERS}
    return bool(names), flags


@dataclass
class ShellSettings:
    """Runtime settings resolved once at bootstrap.

    Attributes:
        prefix: General namespace prefix for widget object names.
        css_prefix: Namespace prefix for style classes / QSS selectors.
        log_level: Level name applied to the ``editorkit`` logger.
        manifest_path: Optional path to a JSON manifest with version info.
        dist_name: Installed distribution consulted when no manifest file exists.
        debug_enabled / debug_flags: Initial state of the ``debug`` toggles.
        experimental_enabled / experimental_flags: Initial state of the
            ``experimental`` toggles.
    """

    prefix: str = PREFIX_GENERAL
    css_prefix: str = PREFIX_CSS
    log_level: str = LOG_LEVEL
    manifest_path: Optional[str] = MANIFEST_PATH
    dist_name: str = DIST_NAME
    debug_enabled: bool = False
    debug_flags: Dict[str, bool] = field(default_factory=dict)
    experimental_enabled: bool = False
    experimental_flags: Dict[str, bool] = field(default_factory=dict)

    @classmethod
    def from_env(cls) -> "ShellSettings":
        debug_enabled, debug_flags = parse_flag_list(os.environ.get("EDITORKIT_DEBUG", DEBUG_FLAGS))
        exp_enabled, exp_flags = parse_flag_list(
            os.environ.get("EDITORKIT_EXPERIMENTAL", EXPERIMENTAL_FLAGS)
        )
        return cls(
            prefix=os.environ.get("EDITORKIT_PREFIX", PREFIX_GENERAL),
            css_prefix=os.environ.get("EDITORKIT_CSS_PREFIX", PREFIX_CSS),
            log_level=os.environ.get("EDITORKIT_LOG_LEVEL", LOG_LEVEL).upper(),
            manifest_path=os.environ.get("EDITORKIT_MANIFEST", MANIFEST_PATH),
            dist_name=os.environ.get("EDITORKIT_DIST_NAME", DIST_NAME),
            debug_enabled=debug_enabled,
            debug_flags=debug_flags,
            experimental_enabled=exp_enabled,
            experimental_flags=exp_flags,
        )
