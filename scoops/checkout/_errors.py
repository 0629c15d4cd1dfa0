"""
Checkout errors.

All travel as `Error(...)` values; none is raised out of the orchestrator.
"""

from __future__ import annotations

from dataclasses import dataclass

from scoops.api import NetworkError, OrderResult

FAILURE_PROMPT = "Order failed. Please try again."


@dataclass(frozen=True, slots=True)
class FieldError:
    field: str
    message: str


@dataclass(frozen=True, slots=True)
class ValidationError(Exception):
    """Form rejected before any network call."""

    errors: tuple[FieldError, ...]

    def __str__(self) -> str:
        return "; ".join(e.message for e in self.errors)

    def message_for(self, field: str) -> str | None:
        for e in self.errors:
            if e.field == field:
                return e.message
        return None


@dataclass(frozen=True, slots=True)
class CheckoutBusy(Exception):
    """Submit while an attempt is already submitting."""

    order_id: str

    def __str__(self) -> str:
        return f"order {self.order_id} is already being submitted"


@dataclass(frozen=True, slots=True)
class SubmissionFailed(Exception):
    """
    The order did not go through.

    `cause` is the transport failure or the unsuccessful OrderResult.
    The cart is untouched; a retry mints a new order id.
    """

    order_id: str
    cause: NetworkError | OrderResult

    def __str__(self) -> str:
        return FAILURE_PROMPT

    @property
    def prompt(self) -> str:
        return FAILURE_PROMPT

    @property
    def detail(self) -> str:
        match self.cause:
            case NetworkError() as e:
                return e.message
            case OrderResult(message=message):
                return message


@dataclass(frozen=True, slots=True)
class EmptyCart(Exception):
    def __str__(self) -> str:
        return "cart is empty"


@dataclass(frozen=True, slots=True)
class InventoryShortfall(Exception):
    """Soft signal: fewer units in stock than in the cart. Checkout proceeds."""

    item_id: int
    name: str
    requested: int
    available: int

    def __str__(self) -> str:
        return f"{self.name}: requested {self.requested}, available {self.available}"


type CheckoutError = ValidationError | CheckoutBusy | SubmissionFailed


__all__ = (
    "FAILURE_PROMPT",
    "FieldError",
    "ValidationError",
    "CheckoutBusy",
    "SubmissionFailed",
    "EmptyCart",
    "InventoryShortfall",
    "CheckoutError",
)
