# tests/core/test_event_bus.py

from rotate_towards.core.event_bus import EventBus


def test_event_bus_publish_subscribe():
    eb = EventBus()
    events = []

    eb.subscribe("test_event", events.append)
    count = eb.publish("test_event", {"data": 123}, "tests")

    assert count == 1
    assert events == [{"type": "test_event", "data": {"data": 123}, "source": "tests"}]


def test_event_bus_unsubscribe():
    eb = EventBus()
    events = []
    eb.subscribe("test_event", events.append)

    assert eb.unsubscribe("test_event", events.append)
    assert not eb.unsubscribe("test_event", events.append)
    assert eb.publish("test_event") == 0
    assert events == []


def test_failing_handler_does_not_block_others(caplog):
    eb = EventBus()
    events = []

    def broken(_event):
        raise RuntimeError("boom")

    eb.subscribe("test_event", broken)
    eb.subscribe("test_event", events.append)

    assert eb.publish("test_event", 1) == 1
    assert len(events) == 1
    assert "boom" in caplog.text


def test_wildcard_receives_every_event():
    eb = EventBus()
    seen = []
    eb.subscribe("*", lambda event: seen.append(event["type"]))

    eb.publish("a")
    eb.publish("b")

    assert seen == ["a", "b"]


def test_history_is_bounded_and_filterable():
    eb = EventBus(history=2)
    eb.publish("a", 1)
    eb.publish("b", 2)
    eb.publish("a", 3)

    assert [e["data"] for e in eb.recent()] == [2, 3]
    assert [e["data"] for e in eb.recent("a")] == [3]
    assert EventBus().recent() == []
