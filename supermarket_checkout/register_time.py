from __future__ import annotations

# Register time model.
#
# A register needs time for two things:
#   scan_time    = normal_items * normal_seconds + perishable_items * perishable_seconds
#   payment_time = notes handed over * seconds_per_note, summed over the queue
#
# Chain reaction: when a customer pays the exact amount the cashier has no change
# to count and serves the next customer straight away, so that next customer's
# notes cost nothing. With ChainReaction.ONE_HOP the carried state is always the
# current customer's own outcome; with ChainReaction.COMPOUND it stays exact
# once reached.

from dataclasses import dataclass
from typing import Sequence

from .config import ChainReaction
from .models import Customer, ItemKind
from .settlement import settle


@dataclass(frozen=True)
class QueueTimes:
    scan_time: int
    payment_time: int

    @property
    def total(self) -> int:
        return self.scan_time + self.payment_time


def scan_time(customers: Sequence[Customer], *, normal_seconds: int, perishable_seconds: int) -> int:
    normal = sum(c.count(ItemKind.NORMAL) for c in customers)
    perishable = sum(c.count(ItemKind.PERISHABLE) for c in customers)
    return normal * normal_seconds + perishable * perishable_seconds


def payment_time(
    customers: Sequence[Customer],
    *,
    seconds_per_note: int,
    chain_reaction: ChainReaction = ChainReaction.ONE_HOP,
) -> int:
    """Seconds spent exchanging notes for a queue, in queue order.

    Customers who cannot afford their cart are skipped: they add nothing and
    the next customer does not get the exact-payment discount.
    """
    total = 0
    prev_exact = False

    for customer in customers:
        price = customer.cart_price
        if customer.funds < price:
            prev_exact = False
            continue

        result = settle(customer.wallet.notes, price)

        if prev_exact:
            if chain_reaction is ChainReaction.ONE_HOP:
                prev_exact = result.exact
            continue

        total += result.note_count * seconds_per_note
        prev_exact = result.exact

    return total


def queue_times(
    customers: Sequence[Customer],
    *,
    normal_seconds: int,
    perishable_seconds: int,
    seconds_per_note: int,
    chain_reaction: ChainReaction = ChainReaction.ONE_HOP,
) -> QueueTimes:
    return QueueTimes(
        scan_time=scan_time(customers, normal_seconds=normal_seconds, perishable_seconds=perishable_seconds),
        payment_time=payment_time(customers, seconds_per_note=seconds_per_note, chain_reaction=chain_reaction),
    )
