"""MQTT topic helpers.

All topics live under a configurable namespace (default: `supermarket/checkout`):

Request/response:
- `<ns>/store/requests`
    Customers, generators and flush-time queries publish here.
- `<ns>/store/responses/<client_id>`
    The store answers each client on its own topic.

Broadcast:
- `<ns>/status/updates`
    The store publishes periodic snapshots (queue lengths, register times).

Running two stores on one broker only needs two namespaces.
"""

from __future__ import annotations

from .config import DEFAULT_NAMESPACE


def store_requests(namespace: str = DEFAULT_NAMESPACE) -> str:
    return f"{namespace}/store/requests"


def store_responses(client_id: str, namespace: str = DEFAULT_NAMESPACE) -> str:
    return f"{namespace}/store/responses/{client_id}"


def status_updates(namespace: str = DEFAULT_NAMESPACE) -> str:
    return f"{namespace}/status/updates"
