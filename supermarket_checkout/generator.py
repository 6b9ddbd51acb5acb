from __future__ import annotations

# Random customer generator.
#
# Produces reproducible shoppers (seeded `random.Random`) for the local
# simulation and for loading a running store service over MQTT.
#
# Basket model:
# - the number of items is Poisson distributed around `mean_basket_size`
# - each item is perishable with probability `perishable_share`
# - prices are uniform in [0, max_price]
# Wallet model:
# - random legal notes are drawn until they cover the cart, then up to
#   `extra_notes` more are added so not every payment is tight

import argparse
import math
import random
from typing import Any

from .config import add_mqtt_args
from .models import DENOMINATIONS, CartItem, Customer, ItemKind, Note, Wallet

_NOTE_VALUES = sorted(DENOMINATIONS)


def generate_customer(
    rng: random.Random,
    *,
    name: str = "",
    mean_basket_size: float = 5.0,
    perishable_share: float = 0.3,
    max_price: int = 20,
    extra_notes: int = 2,
) -> Customer:
    if not 0.0 <= perishable_share <= 1.0:
        raise ValueError("perishable_share must be within [0, 1]")
    if max_price < 0:
        raise ValueError("max_price must be >= 0")

    size = _sample_basket_size(mean=mean_basket_size, rng=rng)
    cart = tuple(
        CartItem(
            rng.randint(0, max_price),
            ItemKind.PERISHABLE if rng.random() < perishable_share else ItemKind.NORMAL,
        )
        for _ in range(size)
    )

    price = sum(item.price for item in cart)
    notes: list[Note] = []
    while sum(n.value for n in notes) < price:
        notes.append(Note(rng.choice(_NOTE_VALUES)))
    for _ in range(rng.randint(0, extra_notes)):
        notes.append(Note(rng.choice(_NOTE_VALUES)))

    return Customer(wallet=Wallet(tuple(notes)), cart=cart, name=name)


def generate_customers(count: int, *, seed: int | None = None, name_prefix: str = "Cust", **kwargs: Any) -> list[Customer]:
    """Generate `count` customers named <prefix>1..<prefix>N."""
    if count < 0:
        raise ValueError("count must be >= 0")
    rng = random.Random(seed)
    return [generate_customer(rng, name=f"{name_prefix}{i}", **kwargs) for i in range(1, count + 1)]


def _sample_basket_size(*, mean: float, rng: random.Random) -> int:
    """Non-negative Poisson-ish basket size.

    Knuth's exact sampler for small means, N(mean, sqrt(mean)) above 30.
    """
    if mean <= 0:
        return 0

    if mean <= 30:
        limit = math.exp(-mean)
        k = 0
        p = 1.0
        while p > limit:
            k += 1
            p *= rng.random()
        return max(0, k - 1)

    return max(0, int(rng.gauss(mean, math.sqrt(mean))))


def run_generator(
    *,
    mqtt_host: str,
    mqtt_port: int,
    namespace: str,
    count: int,
    seed: int | None = None,
    mean_basket_size: float = 5.0,
) -> None:
    """Send `count` generated customers to a running store service."""
    from .client import join_queue

    print(f"[generator] sending {count} customers to MQTT {mqtt_host}:{mqtt_port}, namespace={namespace}")

    for customer in generate_customers(count, seed=seed, mean_basket_size=mean_basket_size):
        resp = join_queue(mqtt_host=mqtt_host, mqtt_port=mqtt_port, namespace=namespace, customer=customer)
        if resp.get("type") == "assigned":
            print(
                f"[generator] {customer.name} items={len(customer.cart)} price={customer.cart_price} "
                f"-> {resp['register_id']} (pos {resp['position']})"
            )
        else:
            print(f"[generator] {customer.name} -> error {resp.get('code')}: {resp.get('message')}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Customer generator (MQTT)")
    add_mqtt_args(parser)
    parser.add_argument("--count", type=int, required=True)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--mean-basket-size", type=float, default=5.0)
    args = parser.parse_args()

    run_generator(
        mqtt_host=args.mqtt_host,
        mqtt_port=args.mqtt_port,
        namespace=args.namespace,
        count=args.count,
        seed=args.seed,
        mean_basket_size=args.mean_basket_size,
    )


if __name__ == "__main__":
    main()
