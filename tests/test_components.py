import pytest

from editorkit.components import MessageCenter, Toggles, Translator
from editorkit.services.event_bus import EditorEvent, EventBus


def test_message_center_history_and_event():
    bus = EventBus()
    shown = []
    bus.subscribe(EditorEvent.MESSAGE_SHOWN, lambda evt: shown.append(evt.data))
    center = MessageCenter(bus, capacity=2)
    center.info("one")
    center.error("two")
    center.success("three")
    assert [m.text for m in center.history()] == ["two", "three"]
    assert [m.text for m in center.history("error")] == ["two"]
    assert center.last().level == "success"
    assert shown[-1] == {"level": "success", "text": "three"}


def test_message_center_without_bus():
    center = MessageCenter()
    assert center.last() is None
    center.warning("careful")
    assert center.last().text == "careful"


def test_toggles_group_switch():
    toggles = Toggles()
    assert toggles.is_enabled() is False
    toggles.set_flag("events")
    assert toggles.is_enabled("events") is False
    toggles.enable()
    assert toggles.is_enabled() is True
    assert toggles.is_enabled("events") is True
    assert toggles.is_enabled("layout") is False
    toggles.disable()
    assert toggles.is_enabled("events") is False


def test_translator_fallback_and_language_data():
    tr = Translator()
    assert tr.translate("dialog.yes") == "Yes"
    tr.register_catalog("de", {"dialog.yes": "Ja"})
    tr.set_locale("de")
    assert tr.get_locale() == "de"
    assert tr.t("dialog.yes") == "Ja"
    assert tr.translate("dialog.no") == "No"  # falls back to en
    assert tr.translate("unknown.key") == "unknown.key"
    data = tr.get_language_data()
    assert data["dialog.yes"] == "Ja" and data["dialog.no"] == "No"


def test_translator_plural_and_missing_variable():
    tr = Translator()
    assert tr.translate_plural("files.count.one", "files.count.other", 1) == "1 file"
    assert tr.translate_plural("files.count.one", "files.count.other", 3) == "3 files"
    with pytest.raises(KeyError) as exc_info:
        tr.translate("file.unsaved.title")
    assert "Missing interpolation variable" in str(exc_info.value)
