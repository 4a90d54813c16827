import logging

from editorkit.services.event_bus import EditorEvent


def test_dispatch_fans_out_type_and_data(helper):
    bus = helper.get_event_bus()
    seen = []
    bus.subscribe("file_saved", lambda evt: seen.append(("a", evt.type, evt.data)))
    bus.subscribe("file_saved", lambda evt: seen.append(("b", evt.type, evt.data)))
    helper.dispatch("file_saved", {"name": "demo.ek"})
    assert seen == [
        ("a", "file_saved", {"name": "demo.ek"}),
        ("b", "file_saved", {"name": "demo.ek"}),
    ]


def test_release_listeners_returns_empty_and_releases_each_once(helper):
    bus = helper.get_event_bus()
    calls = []
    listeners = [
        bus.subscribe("tick", lambda evt: calls.append("a")),
        bus.subscribe("tick", lambda evt: calls.append("b")),
        bus.subscribe("tock", lambda evt: calls.append("c")),
    ]
    result = helper.release_listeners(listeners, "Runner")
    assert result == []
    assert result is not listeners
    assert all(not sub.active for sub in listeners)
    assert bus.subscriber_count("tick") == 0
    assert bus.subscriber_count("tock") == 0

    # Second release of the same keys is a no-op
    assert helper.release_listeners(listeners) == []
    helper.dispatch("tick")
    helper.dispatch("tock")
    assert calls == []


def test_release_listeners_does_not_touch_other_subscribers(helper):
    bus = helper.get_event_bus()
    kept = []
    bus.subscribe("tick", lambda evt: kept.append(evt.type))
    released = [bus.subscribe("tick", lambda evt: kept.append("released"))]
    helper.release_listeners(released)
    helper.dispatch("tick")
    assert kept == ["tick"]


def test_release_listeners_accepts_none(helper):
    assert helper.release_listeners(None) == []


def test_release_listeners_logs_count_and_context(helper, caplog):
    bus = helper.get_event_bus()
    listeners = [bus.subscribe("tick", lambda evt: None) for _ in range(2)]
    with caplog.at_level(logging.DEBUG, logger="editorkit"):
        helper.release_listeners(listeners, "Preview")
    assert any("Clearing 2 events listener for Preview" in r.getMessage() for r in caplog.records)


def test_detect_features_dispatches_event(helper):
    payloads = []
    helper.get_event_bus().subscribe(
        EditorEvent.FEATURES_DETECTED, lambda evt: payloads.append(evt.data)
    )
    helper.detect_features()
    assert payloads and payloads[0]["browser"]["web_engine"] is True


def test_release_listeners_counts_only_live_keys(helper, caplog):
    bus = helper.get_event_bus()
    listeners = [bus.subscribe("tick", lambda evt: None) for _ in range(2)]
    helper.release_listeners(listeners)
    with caplog.at_level(logging.DEBUG, logger="editorkit"):
        helper.release_listeners(listeners, "Preview")
    assert any("Clearing 0 events listener for Preview" in r.getMessage() for r in caplog.records)
