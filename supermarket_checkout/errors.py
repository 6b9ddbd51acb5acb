"""Checkout errors and the shared error envelope.

Every failure the store can report has a stable `code`, so the MQTT service
and the CLI print the same thing for the same problem.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ErrorResponse:
    code: str
    message: str

    def to_message(self, *, corr_id: str | None = None) -> dict[str, Any]:
        msg: dict[str, Any] = {"type": "error", "code": self.code, "message": self.message}
        if corr_id is not None:
            msg["corr_id"] = corr_id
        return msg


class CheckoutError(Exception):
    """Base class for all store failures."""

    code = "checkout_error"
    default_message = "Checkout failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(self.code, str(self))


class InvalidDenomination(CheckoutError, ValueError):
    code = "invalid_denomination"
    default_message = "Invalid note denomination"

    def __init__(self, value: int) -> None:
        super().__init__(f"Invalid note denomination: {value}")
        self.value = value


class EmptyCart(CheckoutError):
    code = "empty_cart"
    default_message = "Shopping cart must not be empty"


class InsufficientFunds(CheckoutError):
    code = "insufficient_funds"
    default_message = "Insufficient money to buy products"

    def __init__(self, *, funds: int, price: int) -> None:
        super().__init__(f"Insufficient money to buy products (funds={funds}, price={price})")
        self.funds = funds
        self.price = price


class NoRegisters(CheckoutError):
    code = "no_registers"
    default_message = "No cash registers available"


class SettlementUnreachable(CheckoutError, RuntimeError):
    # Raised only if settlement is asked for more than the notes can cover.
    code = "settlement_unreachable"
    default_message = "No combination of notes settles the amount"
