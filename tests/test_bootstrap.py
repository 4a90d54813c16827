import json
import logging

import pytest

from editorkit.app.bootstrap import DEFERRED_KEYS, create_app
from editorkit.components import MessageCenter, Toggles, Translator
from editorkit.config.settings import ShellSettings
from editorkit.services.helper import Helper


@pytest.fixture
def headless_ctx(tmp_path):
    manifest = tmp_path / "manifest.json"
    manifest.write_text(
        json.dumps({"version": "1.2.3", "file_handlers": {"supported": {"extensions": ["ek"]}}}),
        encoding="utf-8",
    )
    settings = ShellSettings(
        prefix="boot-",
        manifest_path=str(manifest),
        debug_enabled=True,
        debug_flags={"events": True},
    )
    ctx = create_app(headless=True, settings=settings)
    yield ctx
    ctx.logging_service.detach()


def test_headless_bootstrap_registers_defaults(headless_ctx):
    helper = headless_ctx.helper
    assert isinstance(helper, Helper)
    assert headless_ctx.headless is True
    assert headless_ctx.qt_app is None
    assert isinstance(helper.get("message"), MessageCenter)
    assert isinstance(helper.get("i18n"), Translator)
    assert isinstance(helper.get("debug"), Toggles)
    assert isinstance(helper.get("experimental"), Toggles)
    assert "ERROR" not in headless_ctx.metadata["log_levels"]
    for key in ("dialog",) + DEFERRED_KEYS:
        assert key in helper.keys()
        assert not helper.has(key)


def test_bootstrap_applies_settings(headless_ctx):
    helper = headless_ctx.helper
    assert helper.get_prefix() == "boot-"
    assert helper.debug_enabled("events") is True
    assert helper.experimental_enabled() is False
    assert helper.get_app_version() == "1.2.3"
    assert helper.get_file_extensions() == ["ek"]


def test_bootstrap_detects_features(headless_ctx):
    helper = headless_ctx.helper
    assert helper.get_features().detected
    assert helper.check_host_feature("manifest") is True
    assert helper.check_scripting_feature("asyncio") is True
    assert "host" in headless_ctx.metadata["features"]


def test_bootstrap_gate_runs_without_file_module(headless_ctx):
    calls = []
    headless_ctx.helper.guard_unsaved_changes(lambda: calls.append("new"))
    assert calls == ["new"]


def test_bootstrap_captures_registry_anomalies(headless_ctx):
    helper = headless_ctx.helper
    helper.get("not-there")
    errors = headless_ctx.logging_service.filter(level="ERROR")
    assert any("not-there is not defined" in e.message for e in errors)


def test_bootstrap_log_level(tmp_path):
    ctx = create_app(headless=True, settings=ShellSettings(log_level="warning", manifest_path=None))
    try:
        assert logging.getLogger("editorkit").level == logging.WARNING
    finally:
        ctx.logging_service.detach()
        logging.getLogger("editorkit").setLevel(logging.NOTSET)


def test_bootstrap_reads_manifest_once(tmp_path, monkeypatch):
    import editorkit.app.bootstrap as bootstrap

    manifest = tmp_path / "manifest.json"
    manifest.write_text(json.dumps({"version": "2.0.0"}), encoding="utf-8")
    reads = []
    real_loader = bootstrap.load_manifest

    def counting_loader(*args, **kwargs):
        reads.append(args)
        return real_loader(*args, **kwargs)

    monkeypatch.setattr(bootstrap, "load_manifest", counting_loader)
    ctx = create_app(headless=True, settings=ShellSettings(manifest_path=str(manifest)))
    try:
        assert ctx.helper.check_host_feature("manifest") is True
        assert ctx.helper.get_app_version() == "2.0.0"
        assert len(reads) == 1
    finally:
        ctx.logging_service.detach()
