"""Value objects: notes, cart items, wallets and customers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from .errors import InvalidDenomination

# Legal note values.
DENOMINATIONS: frozenset[int] = frozenset({1, 2, 5, 10, 20, 50})


@dataclass(frozen=True)
class Note:
    value: int

    def __post_init__(self) -> None:
        if self.value not in DENOMINATIONS:
            raise InvalidDenomination(self.value)


class ItemKind(Enum):
    NORMAL = "normal"
    PERISHABLE = "perishable"

    @property
    def scan_weight(self) -> int:
        """Relative scan effort: perishables are handled twice as long."""
        return 2 if self is ItemKind.PERISHABLE else 1


@dataclass(frozen=True)
class CartItem:
    price: int
    kind: ItemKind = ItemKind.NORMAL

    def __post_init__(self) -> None:
        if self.price < 0:
            raise ValueError("price must be >= 0")


@dataclass(frozen=True)
class Wallet:
    notes: tuple[Note, ...] = ()

    def __post_init__(self) -> None:
        # Accept any iterable but store an immutable tuple.
        object.__setattr__(self, "notes", tuple(self.notes))

    @classmethod
    def of(cls, *values: int) -> Wallet:
        return cls(tuple(Note(v) for v in values))

    @property
    def funds(self) -> int:
        return sum(n.value for n in self.notes)


@dataclass(frozen=True)
class Customer:
    """A shopper: a wallet plus a cart.

    An empty cart is allowed here; admission is where it gets rejected.
    """

    wallet: Wallet
    cart: tuple[CartItem, ...] = ()
    name: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "cart", tuple(self.cart))

    @property
    def cart_price(self) -> int:
        return sum(item.price for item in self.cart)

    @property
    def funds(self) -> int:
        return self.wallet.funds

    def count(self, kind: ItemKind) -> int:
        return sum(1 for item in self.cart if item.kind is kind)


def cart(*, normal: Iterable[int] = (), perishable: Iterable[int] = ()) -> tuple[CartItem, ...]:
    """Build a cart from two price lists (normal items first)."""
    items = [CartItem(p, ItemKind.NORMAL) for p in normal]
    items += [CartItem(p, ItemKind.PERISHABLE) for p in perishable]
    return tuple(items)


@dataclass(frozen=True)
class Register:
    """One cash register and its queue, in arrival order."""

    register_id: str
    customers: tuple[Customer, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "customers", tuple(self.customers))

    def __len__(self) -> int:
        return len(self.customers)

    def with_customer(self, customer: Customer) -> Register:
        return Register(self.register_id, (*self.customers, customer))
