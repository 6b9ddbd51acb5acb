from __future__ import annotations

# Short-lived clients of the store service.
#
# Each call:
# - connects to the broker with a unique client id
# - subscribes to its own response topic
# - sends one request and waits for the reply
# - disconnects

import time
from typing import Any

from .messages import customer_to_message
from .models import Customer
from .mqtt_client import MqttClient
from .mqtt_topics import store_requests, store_responses


def _request(*, mqtt_host: str, mqtt_port: int, namespace: str, role: str, message: dict[str, Any]) -> dict[str, Any]:
    client_id = f"{role}-{int(time.time() * 1000)}"
    with MqttClient(client_id=client_id, host=mqtt_host, port=mqtt_port) as mqtt:
        reply_to = store_responses(client_id, namespace)
        mqtt.subscribe(reply_to)
        return mqtt.request(request_topic=store_requests(namespace), reply_to=reply_to, message=message)


def join_queue(*, mqtt_host: str, mqtt_port: int, namespace: str, customer: Customer) -> dict[str, Any]:
    return _request(
        mqtt_host=mqtt_host,
        mqtt_port=mqtt_port,
        namespace=namespace,
        role=f"customer-{customer.name or 'anon'}",
        message={"type": "join_queue", **customer_to_message(customer)},
    )


def query_flush_time(*, mqtt_host: str, mqtt_port: int, namespace: str) -> dict[str, Any]:
    return _request(
        mqtt_host=mqtt_host,
        mqtt_port=mqtt_port,
        namespace=namespace,
        role="flush",
        message={"type": "flush_time"},
    )


def parse_ints(text: str) -> list[int]:
    """Parse a comma separated list such as "5,2,2"; blank means empty."""
    return [int(part) for part in text.split(",") if part.strip()]
