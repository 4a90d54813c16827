"""Helper: component registry for the editor shell.

One ``Helper`` is constructed per application session and passed to every
module at startup. Modules register themselves under a string key and look
each other up on demand, so no module needs a direct reference to another.

Besides the registry the helper owns:
 - the session ``EventBus`` (``dispatch`` / ``release_listeners``)
 - the layered ``Features`` table
 - the general and style prefixes used to namespace widget names
 - the unsaved-changes confirmation gate

Lookup semantics:
 - never registered key: error logged; ``RequiredInstanceMissingError`` when
   the lookup is required, ``None`` otherwise
 - registered but empty (``None``, see ``reserve``): warning logged, ``None``
 - live instance: returned

Usage pattern:
    helper = Helper()
    helper.register("message", MessageCenter(helper.get_event_bus()))
    helper.get("message").info("Ready")
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List, Literal, Optional, Sequence, overload

from editorkit.config.settings import ShellSettings

from .capabilities import (
    Account,
    DialogProvider,
    FileState,
    LanguageProvider,
    MessageSink,
    Toggle,
    YesNoAnswer,
)
from .event_bus import EditorEvent, EventBus, Subscription
from .features import FeatureValue, Features
from .manifest import Manifest, load_manifest

__all__ = ["Helper", "RequiredInstanceMissingError"]

logger = logging.getLogger(__name__)

_UNLOADED = object()


class RequiredInstanceMissingError(LookupError):
    """Raised when a required instance was never registered."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Required instance {key} is not defined!")
        self.key = key


class Helper:
    """Session registry for UI parts and modules."""

    def __init__(
        self,
        settings: Optional[ShellSettings] = None,
        *,
        features: Optional[Features] = None,
        event_bus: Optional[EventBus] = None,
        manifest_loader: Optional[Callable[[], Optional[Manifest]]] = None,
    ) -> None:
        self.name = "Helper"
        self._settings = settings or ShellSettings()
        self._log = logger
        self._features = features or Features()
        self._event_bus = event_bus or EventBus()
        self._prefix = self._settings.prefix or ""
        self._css_prefix = self._settings.css_prefix or ""
        self._instances: Dict[str, Any] = {}
        if manifest_loader is None:
            manifest_loader = lambda: load_manifest(  # noqa: E731
                self._settings.manifest_path, self._settings.dist_name
            )
        self._manifest_loader = manifest_loader
        self._manifest: Any = _UNLOADED

    # ------------------------------------------------------------------
    # Instance registry
    # ------------------------------------------------------------------
    def register(self, key: str, instance: Any, overwrite: bool = False) -> None:
        """Store ``instance`` under ``key``.

        Replacing a live instance without ``overwrite`` is reported as an
        error, but the replacement still happens.
        """
        if self._instances.get(key) is not None and not overwrite:
            self._log.error("Instance %s already exists!", key)
        self._log.debug("Set %s instance to %r", key, instance)
        self._instances[key] = instance

    def reserve(self, key: str) -> None:
        """Mark ``key`` as registered but not constructed yet."""
        self.register(key, None)

    @overload
    def get(self, key: Literal["file"], required: bool = ...) -> Optional[FileState]: ...

    @overload
    def get(self, key: Literal["dialog"], required: bool = ...) -> Optional[DialogProvider]: ...

    @overload
    def get(self, key: Literal["message"], required: bool = ...) -> Optional[MessageSink]: ...

    @overload
    def get(
        self, key: Literal["debug", "experimental"], required: bool = ...
    ) -> Optional[Toggle]: ...

    @overload
    def get(self, key: Literal["account"], required: bool = ...) -> Optional[Account]: ...

    @overload
    def get(self, key: Literal["i18n"], required: bool = ...) -> Optional[LanguageProvider]: ...

    @overload
    def get(self, key: str, required: bool = ...) -> Any: ...

    def get(self, key: str, required: bool = False) -> Any:
        if key not in self._instances:
            self._log.error("Instance %s is not defined!", key)
            if required:
                raise RequiredInstanceMissingError(key)
            return None
        instance = self._instances[key]
        if instance is None:
            self._log.warning("Instance %s is not initialized yet.", key)
            return None
        return instance

    def has(self, key: str) -> bool:
        return self._instances.get(key) is not None

    def keys(self) -> List[str]:
        return list(self._instances.keys())

    def decorate(
        self, key: str, node: Any, required: bool = False, prefix: Optional[str] = None
    ) -> Any:
        """Resolve ``key`` and hand ``node`` to the instance's ``decorate``.

        Returns the resolved instance (or ``None``) for chaining.
        """
        instance = self.get(key, required)
        if instance is None:
            return None
        decorate = getattr(instance, "decorate", None)
        if not callable(decorate):
            self._log.error("Instance %s can not be decorated.", key)
            return instance
        decorate(node, prefix or self.get_prefix())
        return instance

    def _optional(self, key: str) -> Any:
        # Quiet lookup for optional collaborators; absence is not an anomaly.
        return self._instances.get(key)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def get_event_bus(self) -> EventBus:
        return self._event_bus

    def dispatch(self, name: str | EditorEvent, data: Any = None) -> None:
        self._event_bus.publish(name, data)

    def release_listeners(
        self, listeners: Optional[Sequence[Subscription]], context_name: Optional[str] = None
    ) -> List[Subscription]:
        """Release every listener key in ``listeners``.

        Always returns a new empty list; call sites assign it back to their
        listener attribute.
        """
        if listeners:
            released = sum(1 for listener in listeners if self._event_bus.unlisten_by_key(listener))
            self._log.debug(
                "Clearing %d events listener%s",
                released,
                f" for {context_name}" if context_name else "",
            )
        return []

    # ------------------------------------------------------------------
    # Features
    # ------------------------------------------------------------------
    def get_features(self) -> Features:
        return self._features

    def set_feature(self, name: str, value: FeatureValue, group: Optional[str] = None) -> None:
        self._features.set(name, value, group)

    def check_feature(self, name: str, group: Optional[str] = None) -> FeatureValue:
        return self._features.get(name, group) or False

    def check_browser_feature(self, name: str) -> FeatureValue:
        return self._features.get_browser_feature(name)

    def check_host_feature(self, name: str) -> FeatureValue:
        return self._features.get_host_feature(name)

    def check_scripting_feature(self, name: str) -> FeatureValue:
        return self._features.get_scripting_feature(name)

    def detect_features(self) -> Dict[str, Dict[str, FeatureValue]]:
        detected = self._features.detect_features()
        self.dispatch(EditorEvent.FEATURES_DETECTED, detected)
        return detected

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------
    def show_error(self, text: str) -> None:
        sink = self._optional("message")
        if sink is not None:
            sink.error(text)
        else:
            self._log.error(text)

    def show_warning(self, text: str) -> None:
        sink = self._optional("message")
        if sink is not None:
            sink.warning(text)
        else:
            self._log.warning(text)

    def show_info(self, text: str) -> None:
        sink = self._optional("message")
        if sink is not None:
            sink.info(text)
        else:
            self._log.info(text)

    def show_success(self, text: str) -> None:
        sink = self._optional("message")
        if sink is not None:
            sink.success(text)
        else:
            self._log.info(text)

    # ------------------------------------------------------------------
    # Optional component passthroughs
    # ------------------------------------------------------------------
    def get_localized_data(self) -> Dict[str, str]:
        i18n = self._optional("i18n")
        if i18n is not None:
            return i18n.get_language_data()
        return {}

    def debug_enabled(self, name: Optional[str] = None) -> bool:
        toggle = self._optional("debug")
        if toggle is not None:
            return bool(toggle.is_enabled(name))
        return False

    def experimental_enabled(self, name: Optional[str] = None) -> bool:
        toggle = self._optional("experimental")
        if toggle is not None:
            return bool(toggle.is_enabled(name))
        return False

    def is_account_enabled(self) -> bool:
        account = self._optional("account")
        if account is not None:
            return bool(account.is_authenticated())
        return False

    # ------------------------------------------------------------------
    # Manifest / version
    # ------------------------------------------------------------------
    def get_manifest(self) -> Optional[Manifest]:
        if self._manifest is _UNLOADED:
            self._manifest = self._manifest_loader()
        return self._manifest

    def get_app_version(self) -> str:
        """Version from the host manifest.

        Unversioned builds fall back to the current time in milliseconds.
        That value changes on every call and must not be compared or stored
        as a release version.
        """
        manifest = self.get_manifest()
        if manifest is not None and manifest.version:
            return manifest.version
        return str(int(time.time() * 1000))

    def get_file_extensions(self) -> Optional[List[str]]:
        manifest = self.get_manifest()
        if manifest is not None:
            return manifest.file_extensions
        return None

    # ------------------------------------------------------------------
    # Prefixes
    # ------------------------------------------------------------------
    def set_prefix(self, prefix: Optional[str]) -> None:
        self._prefix = prefix or ""

    def get_prefix(self, extra: Optional[str] = None) -> str:
        if extra:
            return f"{self._prefix}{extra}-"
        return self._prefix

    def set_css_prefix(self, prefix: Optional[str]) -> None:
        self._css_prefix = prefix or ""

    def get_css_prefix(self, extra: Optional[str] = None) -> str:
        if extra:
            return f"{self._css_prefix}{extra}-"
        return self._css_prefix

    def get_logger(self) -> logging.Logger:
        return self._log

    # ------------------------------------------------------------------
    # Unsaved changes gate
    # ------------------------------------------------------------------
    def guard_unsaved_changes(self, continuation: Callable[[], Any]) -> None:
        """Run ``continuation`` once unsaved changes may be discarded.

        Unmodified (or no file module): runs immediately. Modified: runs only
        after the user confirms in the yes/no dialog. The call returns before
        the answer arrives; a negative answer drops ``continuation``.
        """
        file_name = ""
        modified = False
        file_state = self._optional("file")
        if file_state is not None:
            file_name = file_state.get_file_title()
            modified = bool(file_state.is_modified())
        self._log.debug("File %s was modified: %s", file_name, modified)

        if not modified:
            continuation()
            return

        dialog = self._optional("dialog")
        if dialog is None:
            self.show_warning(f"Unsaved changes for {file_name} were kept.")
            return

        def _on_answer(answer: YesNoAnswer) -> None:
            if answer.cancelled():
                self._log.warning("Unsaved changes dialog for %s was cancelled.", file_name)
                return
            error = answer.exception()
            if error is not None:
                self._log.warning("Unsaved changes dialog for %s failed: %s", file_name, error)
                return
            if answer.result():
                continuation()

        texts = self.get_localized_data()
        title = self._unsaved_title(texts.get("file.unsaved.title"), file_name)
        body = texts.get("file.unsaved.body", "Changes have not been saved. Exit?")
        dialog.show_yes_no(title, body).add_done_callback(_on_answer)

    def _unsaved_title(self, template: Optional[str], file_name: str) -> str:
        default = f"Unsaved Changes for {file_name}"
        if not template:
            return default
        try:
            return template.format(name=file_name)
        except (KeyError, IndexError, ValueError) as exc:
            self._log.warning("Unusable unsaved changes title %r: %s", template, exc)
            return default
