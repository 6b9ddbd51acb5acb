"""JSON request/response on top of paho-mqtt.

paho-mqtt delivers messages through callbacks on its own network thread. The
store service is happy with that, but the command line clients want to send
one request and block until the answer arrives. `MqttClient.request()` does
that by tagging the message with a `corr_id` and a `reply_to` topic and
waiting for the matching reply.

QoS stays at 0: a lost request shows up as a `TimeoutError` on the caller.
"""

from __future__ import annotations

import json
import queue
import threading
import uuid
from typing import Any, Callable

import paho.mqtt.client as mqtt

MessageHandler = Callable[[str, dict[str, Any]], None]


class MqttClient:
    """paho-mqtt client speaking JSON objects."""

    def __init__(self, *, client_id: str, host: str, port: int, keepalive: int = 30) -> None:
        self.client_id = client_id
        self.host = host
        self.port = port
        self.keepalive = keepalive

        self._client = mqtt.Client(
            mqtt.CallbackAPIVersion.VERSION2,
            client_id=client_id,
            clean_session=True,
        )
        self._client.on_message = self._on_message

        self._handlers: list[MessageHandler] = []
        # corr_id -> single-slot queue the waiting request() reads from
        self._waiting: dict[str, "queue.Queue[dict[str, Any]]"] = {}
        self._lock = threading.Lock()
        self._connected = False

    def __enter__(self) -> MqttClient:
        self.start()
        return self

    def __exit__(self, *exc: object) -> None:
        self.stop()

    def start(self) -> None:
        if self._connected:
            return
        self._client.connect(self.host, self.port, keepalive=self.keepalive)
        self._client.loop_start()
        self._connected = True

    def stop(self) -> None:
        if not self._connected:
            return
        self._client.loop_stop()
        self._client.disconnect()
        self._connected = False

    def add_handler(self, handler: MessageHandler) -> None:
        self._handlers.append(handler)

    def subscribe(self, topic: str) -> None:
        self._client.subscribe(topic, qos=0)

    def publish(self, topic: str, message: dict[str, Any]) -> None:
        payload = json.dumps(message, separators=(",", ":")).encode("utf-8")
        self._client.publish(topic, payload=payload, qos=0)

    def request(self, *, request_topic: str, reply_to: str, message: dict[str, Any], timeout: float = 5.0) -> dict[str, Any]:
        """Publish `message` and block until its reply arrives on `reply_to`.

        The caller must already be subscribed to `reply_to`.
        """
        corr_id = uuid.uuid4().hex
        inbox: "queue.Queue[dict[str, Any]]" = queue.Queue(maxsize=1)
        with self._lock:
            self._waiting[corr_id] = inbox

        try:
            self.publish(request_topic, {**message, "corr_id": corr_id, "reply_to": reply_to})
            return inbox.get(timeout=timeout)
        except queue.Empty as e:
            raise TimeoutError(f"No reply on {reply_to} for corr_id={corr_id}") from e
        finally:
            with self._lock:
                self._waiting.pop(corr_id, None)

    # -------------------- paho callback (network thread) --------------------

    def _on_message(self, client: mqtt.Client, userdata: Any, msg: mqtt.MQTTMessage) -> None:
        try:
            data = json.loads(msg.payload.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            print(f"[mqtt {self.client_id}] dropped non-JSON payload on {msg.topic}")
            return
        if not isinstance(data, dict):
            return

        corr_id = data.get("corr_id")
        if isinstance(corr_id, str):
            with self._lock:
                inbox = self._waiting.get(corr_id)
            if inbox is not None:
                try:
                    inbox.put_nowait(data)
                except queue.Full:
                    pass
                return

        for handler in list(self._handlers):
            try:
                handler(msg.topic, data)
            except Exception as e:
                # An exception escaping here would kill paho's network loop.
                print(f"[mqtt {self.client_id}] handler failed on {msg.topic}: {e!r}")
