"""Host packaging metadata.

The shell may ship a ``manifest.json`` next to the application with a
``version`` field and the file extensions it handles::

    {
      "version": "2.1.0",
      "file_handlers": {"supported": {"extensions": ["ek", "py"]}}
    }

When no manifest file is present the installed distribution's metadata is
consulted for the version only. Absence or corruption never raises; callers
get ``None`` and fall back on their own defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from importlib import metadata
from pathlib import Path
from typing import Any, Dict, List, Optional

__all__ = ["Manifest", "load_manifest"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Manifest:
    version: Optional[str] = None
    file_extensions: Optional[List[str]] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Manifest":
        extensions = None
        handlers = data.get("file_handlers")
        if isinstance(handlers, dict):
            supported = handlers.get("supported")
            if isinstance(supported, dict) and isinstance(supported.get("extensions"), list):
                extensions = [str(ext) for ext in supported["extensions"]]
        version = data.get("version")
        return cls(
            version=str(version) if version is not None else None,
            file_extensions=extensions,
            raw=data,
        )


def _read_manifest_file(path: Path) -> Optional[Manifest]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("Unable to read manifest %s: %s", path, exc)
        return None
    if not isinstance(data, dict):
        logger.warning("Manifest %s is not a JSON object", path)
        return None
    return Manifest.from_dict(data)


def load_manifest(
    path: str | Path | None = None, dist_name: str | None = None
) -> Optional[Manifest]:
    """Load the host manifest.

    Parameters
    ----------
    path: Manifest JSON file. Ignored when it does not exist.
    dist_name: Installed distribution used as version source when no file is found.
    """
    if path is not None:
        manifest_path = Path(path)
        if manifest_path.is_file():
            return _read_manifest_file(manifest_path)
        logger.debug("Manifest file %s not found", manifest_path)
    if dist_name:
        try:
            return Manifest(version=metadata.version(dist_name))
        except metadata.PackageNotFoundError:
            logger.debug("Distribution %s is not installed", dist_name)
    return None
