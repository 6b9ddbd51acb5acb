"""JSON message helpers for customers.

Wire format of a customer inside a `join_queue` request:

    {"name": "Alice", "notes": [5, 2], "cart": [{"price": 7, "kind": "perishable"}]}

`kind` defaults to "normal" when missing.
"""

from __future__ import annotations

from typing import Any

from .models import CartItem, Customer, ItemKind, Note, Wallet


def customer_to_message(customer: Customer) -> dict[str, Any]:
    return {
        "name": customer.name,
        "notes": [n.value for n in customer.wallet.notes],
        "cart": [{"price": item.price, "kind": item.kind.value} for item in customer.cart],
    }


def customer_from_message(msg: dict[str, Any]) -> Customer:
    """Decode a customer.

    Raises:
        InvalidDenomination: a note value is not a legal denomination.
        ValueError: anything else is malformed.
    """
    notes = msg.get("notes", [])
    items = msg.get("cart", [])
    if not isinstance(notes, list) or not isinstance(items, list):
        raise ValueError("notes and cart must be lists")

    wallet = Wallet(tuple(Note(_as_int(v, "note")) for v in notes))

    cart: list[CartItem] = []
    for item in items:
        if not isinstance(item, dict):
            raise ValueError("cart items must be objects")
        try:
            kind = ItemKind(item.get("kind", ItemKind.NORMAL.value))
        except ValueError as e:
            raise ValueError(f"unknown item kind: {item.get('kind')!r}") from e
        cart.append(CartItem(_as_int(item.get("price"), "price"), kind))

    return Customer(wallet=wallet, cart=tuple(cart), name=str(msg.get("name", "")))


def _as_int(value: Any, what: str) -> int:
    # bool is an int subclass; a JSON `true` is not a price.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{what} must be an integer, got {value!r}")
    return value
