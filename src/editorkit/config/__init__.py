"""Static configuration for the editor shell."""

from .settings import ShellSettings  # noqa: F401

__all__ = ["ShellSettings"]
