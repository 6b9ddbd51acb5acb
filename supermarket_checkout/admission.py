from __future__ import annotations

# Admission / load balancing.
#
# Policy: a new customer joins the register with the fewest queued customers.
# Ties go to the lowest register index. Already admitted customers are never
# moved.
#
# Registers are immutable; `admit` returns a new list where only the chosen
# register has changed.

from typing import Sequence

from .errors import EmptyCart, InsufficientFunds, NoRegisters
from .models import Customer, Register


def validate_customer(customer: Customer) -> None:
    """Reject customers that cannot be served at any register."""
    if not customer.cart:
        raise EmptyCart()
    funds = customer.funds
    price = customer.cart_price
    if funds < price:
        raise InsufficientFunds(funds=funds, price=price)


def shortest_queue_index(registers: Sequence[Register]) -> int:
    if not registers:
        raise NoRegisters()
    # min() keeps the first of equal keys.
    return min(range(len(registers)), key=lambda i: len(registers[i]))


def admit(registers: Sequence[Register], customer: Customer) -> list[Register]:
    """Validate `customer` and queue them at the shortest register."""
    validate_customer(customer)
    chosen = shortest_queue_index(registers)
    return [r.with_customer(customer) if i == chosen else r for i, r in enumerate(registers)]
