from __future__ import annotations

# Store service: the `Checkout` logic behind an MQTT request topic.
#
# Requests (on `<ns>/store/requests`, answered on their `reply_to` topic):
# - join_queue  -> admit one customer, reply with register and position
# - flush_time  -> reply with the store flush time and per-register times
#
# The service also broadcasts `Checkout.status()` on `<ns>/status/updates`.
#
# paho-mqtt runs handlers on its network thread and the status publisher has
# its own thread, so every access to the store goes through `self._lock`.

import argparse
import threading
import time
from typing import Any, TYPE_CHECKING

from .checkout import Checkout
from .config import add_mqtt_args, add_timing_args, timing_from_args
from .errors import CheckoutError, ErrorResponse
from .messages import customer_from_message
from .mqtt_topics import status_updates, store_requests

if TYPE_CHECKING:
    from .mqtt_client import MqttClient


class MqttStoreService:
    """MQTT adapter around a `Checkout`."""

    def __init__(self, *, mqtt: MqttClient, checkout: Checkout, namespace: str) -> None:
        self.mqtt = mqtt
        self.checkout = checkout
        self.namespace = namespace

        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._status_thread: threading.Thread | None = None

    def start(self, *, publish_status_every: float = 2.0) -> None:
        self.mqtt.subscribe(store_requests(self.namespace))
        self.mqtt.add_handler(self._handle_message)

        self._status_thread = threading.Thread(
            target=self._status_publisher_loop,
            args=(publish_status_every,),
            daemon=True,
        )
        self._status_thread.start()

    def stop(self) -> None:
        self._stop_event.set()
        t = self._status_thread
        if t and t.is_alive():
            t.join(timeout=1.0)

    def snapshot(self) -> dict[str, Any]:
        with self._lock:
            return self.checkout.status()

    def _status_publisher_loop(self, interval: float) -> None:
        # Publish once right away, then every `interval` until stopped.
        while True:
            try:
                self.mqtt.publish(status_updates(self.namespace), self.snapshot())
            except Exception as e:
                # One bad snapshot must not end the broadcast.
                print(f"[store] status update failed: {e!r}")
            if self._stop_event.wait(interval):
                return

    def _reply(self, reply_to: str, corr_id: str | None, message: dict[str, Any]) -> None:
        msg = dict(message)
        if corr_id is not None:
            msg["corr_id"] = corr_id
        self.mqtt.publish(reply_to, msg)

    def _handle_message(self, topic: str, msg: dict[str, Any]) -> None:
        mtype = msg.get("type")
        corr_id = msg.get("corr_id") if isinstance(msg.get("corr_id"), str) else None
        reply_to = msg.get("reply_to") if isinstance(msg.get("reply_to"), str) else None
        if not reply_to:
            return

        if mtype == "join_queue":
            self._reply(reply_to, corr_id, self.join_queue(msg))
            return

        if mtype == "flush_time":
            self._reply(reply_to, corr_id, self.flush_time())
            return

        self._reply(reply_to, corr_id, ErrorResponse("bad_request", f"unknown request type: {mtype!r}").to_message())

    # -------------------- request handlers --------------------

    def join_queue(self, msg: dict[str, Any]) -> dict[str, Any]:
        try:
            customer = customer_from_message(msg)
            with self._lock:
                register_id, position = self.checkout.admit(customer)
        except CheckoutError as e:
            return e.to_response().to_message()
        except ValueError as e:
            return ErrorResponse("bad_request", str(e)).to_message()

        return {
            "type": "assigned",
            "name": customer.name,
            "register_id": register_id,
            "position": position,
        }

    def flush_time(self) -> dict[str, Any]:
        snap = self.snapshot()
        return {
            "type": "flush_time",
            "seconds": snap["flush_time"],
            "policy": snap["policy"],
            "registers": snap["registers"],
        }


def main() -> None:
    from .mqtt_client import MqttClient

    parser = argparse.ArgumentParser(description="Checkout store service (MQTT)")
    add_mqtt_args(parser)
    parser.add_argument("--num-registers", type=int, required=True)
    add_timing_args(parser)
    parser.add_argument(
        "--publish-status-every",
        type=float,
        default=2.0,
        help="seconds between broadcast status updates",
    )
    args = parser.parse_args()

    checkout = Checkout.with_registers(args.num_registers, timing=timing_from_args(args))

    mqtt_client = MqttClient(client_id="store", host=args.mqtt_host, port=args.mqtt_port)
    mqtt_client.start()

    service = MqttStoreService(mqtt=mqtt_client, checkout=checkout, namespace=args.namespace)
    service.start(publish_status_every=args.publish_status_every)

    print(
        f"[store] connected to MQTT {args.mqtt_host}:{args.mqtt_port}, namespace={args.namespace}, "
        f"registers={args.num_registers}"
    )

    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        pass
    finally:
        service.stop()
        mqtt_client.stop()


if __name__ == "__main__":
    main()
