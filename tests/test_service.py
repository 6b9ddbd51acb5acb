from supermarket_checkout.checkout import Checkout
from supermarket_checkout.service import MqttStoreService


class FakeMqtt:
    """Records publishes instead of talking to a broker."""

    def __init__(self):
        self.published = []
        self.subscriptions = []
        self.handlers = []

    def subscribe(self, topic):
        self.subscriptions.append(topic)

    def add_handler(self, handler):
        self.handlers.append(handler)

    def publish(self, topic, message):
        self.published.append((topic, message))


def _service(registers=2):
    mqtt = FakeMqtt()
    svc = MqttStoreService(mqtt=mqtt, checkout=Checkout.with_registers(registers), namespace="t")
    return svc, mqtt


def _join(name, notes, normal):
    return {
        "type": "join_queue",
        "name": name,
        "notes": notes,
        "cart": [{"price": p} for p in normal],
        "corr_id": f"id-{name}",
        "reply_to": f"t/store/responses/{name}",
    }


def test_join_queue_assigns_register():
    svc, mqtt = _service()
    svc._handle_message("t/store/requests", _join("Alice", [5, 2], [7]))
    svc._handle_message("t/store/requests", _join("Bob", [10], [3]))

    (topic1, reply1), (topic2, reply2) = mqtt.published
    assert topic1 == "t/store/responses/Alice"
    assert reply1 == {"type": "assigned", "name": "Alice", "register_id": "R1", "position": 1, "corr_id": "id-Alice"}
    assert reply2["register_id"] == "R2"


def test_join_queue_reports_checkout_errors():
    svc, mqtt = _service()
    svc._handle_message("t/store/requests", _join("Eve", [5], [10]))
    svc._handle_message("t/store/requests", _join("Zed", [5], []))
    svc._handle_message("t/store/requests", _join("Mal", [3], [1]))

    codes = [msg["code"] for _topic, msg in mqtt.published]
    assert codes == ["insufficient_funds", "empty_cart", "invalid_denomination"]
    assert all(msg["type"] == "error" for _topic, msg in mqtt.published)


def test_join_queue_rejects_malformed_request():
    svc, mqtt = _service()
    msg = _join("Bad", [5], [1])
    msg["cart"] = [{"price": "one"}]
    svc._handle_message("t/store/requests", msg)
    assert mqtt.published[0][1]["code"] == "bad_request"


def test_flush_time_request():
    svc, mqtt = _service()
    svc._handle_message("t/store/requests", _join("Alice", [5, 2], [7]))
    svc._handle_message("t/store/requests", {"type": "flush_time", "corr_id": "f", "reply_to": "t/r/f"})

    topic, reply = mqtt.published[-1]
    assert topic == "t/r/f"
    assert reply["type"] == "flush_time"
    assert reply["seconds"] == 3
    assert reply["policy"] == "max"
    assert reply["corr_id"] == "f"


def test_unknown_request_type():
    svc, mqtt = _service()
    svc._handle_message("t/store/requests", {"type": "dance", "reply_to": "t/r/x"})
    assert mqtt.published[0][1]["code"] == "bad_request"


def test_messages_without_reply_topic_are_ignored():
    svc, mqtt = _service()
    svc._handle_message("t/store/requests", {"type": "flush_time"})
    assert mqtt.published == []


def test_start_subscribes_and_publishes_status():
    svc, mqtt = _service()
    svc.start(publish_status_every=60.0)
    svc.stop()
    assert mqtt.subscriptions == ["t/store/requests"]
    assert mqtt.handlers
    status = [msg for topic, msg in mqtt.published if topic == "t/status/updates"]
    assert status and status[0]["type"] == "status_response"


def test_status_broadcast_survives_a_failed_snapshot(monkeypatch):
    svc, mqtt = _service()
    real_status = svc.checkout.status
    calls = []

    def flaky_status():
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError("boom")
        return real_status()

    monkeypatch.setattr(svc.checkout, "status", flaky_status)

    def publish_then_stop(topic, message):
        mqtt.published.append((topic, message))
        svc._stop_event.set()

    mqtt.publish = publish_then_stop
    svc._status_publisher_loop(0)

    assert len(calls) == 2
    assert [topic for topic, _msg in mqtt.published] == ["t/status/updates"]
