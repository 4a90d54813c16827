"""editorkit: component registry and shared services for a modular editor shell."""

from editorkit.services.helper import Helper, RequiredInstanceMissingError  # noqa: F401

__all__ = ["Helper", "RequiredInstanceMissingError"]
