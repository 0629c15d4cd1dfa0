"""
CheckoutOrchestrator — one order attempt at a time.

    IDLE → VALIDATING → SUBMITTING → SUCCEEDED
                 │            └──────→ FAILED → IDLE
                 └→ IDLE (invalid form)

    orchestrator = CheckoutOrchestrator(cart, client)
    match await orchestrator.submit(form):
        case Ok(confirmation):
            print(confirmation.order_id, confirmation.estimated_delivery)
        case Error(SubmissionFailed() as failure):
            print(failure.prompt)
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Protocol

from kungfu import Error, Ok, Result

from scoops._types import LazyCoroResult, Money
from scoops.api import NetworkError, OrderRequest, OrderResult
from scoops.cart import CartStore
from scoops.checkout._errors import (
    CheckoutBusy,
    CheckoutError,
    FieldError,
    SubmissionFailed,
    ValidationError,
)
from scoops.checkout._form import CheckoutForm, validate

logger = logging.getLogger(__name__)

ORDER_SUBMITTED_EVENT = "order_submitted"
"""`event` attribute of the log record emitted per submission; carries
`order_id`, `ice_cream_count` and `customer_name`."""


class CheckoutState(Enum):
    IDLE = auto()
    VALIDATING = auto()
    SUBMITTING = auto()
    SUCCEEDED = auto()
    FAILED = auto()


@dataclass(frozen=True, slots=True)
class OrderConfirmation:
    order_id: str
    message: str
    estimated_delivery: str
    total: Money


class OrderSubmitter(Protocol):
    def submit_order(self, request: OrderRequest) -> LazyCoroResult[OrderResult, NetworkError]: ...


class CheckoutListener:
    """
    UI hooks for one attempt. Override what you need.

    Called synchronously from `submit()` on the event loop.
    """

    def on_invalid(self, error: ValidationError) -> None:
        pass

    def on_submitting(self, request: OrderRequest) -> None:
        pass

    def on_succeeded(self, confirmation: OrderConfirmation) -> None:
        pass

    def on_failed(self, failure: SubmissionFailed) -> None:
        pass


_EMPTY_CART = FieldError("cart", "Cart is empty")


class CheckoutOrchestrator:
    """
    Validates the form, submits the current cart, clears it on success.

    A second `submit()` while one is in flight returns `Error(CheckoutBusy)`
    without touching the network.
    """

    def __init__(
        self,
        cart: CartStore,
        api: OrderSubmitter,
        *,
        listener: CheckoutListener | None = None,
    ) -> None:
        self._cart = cart
        self._api = api
        self._listener = listener or CheckoutListener()
        self._state = CheckoutState.IDLE
        self._in_flight: OrderRequest | None = None
        self.last_confirmation: OrderConfirmation | None = None
        self.last_failure: SubmissionFailed | None = None

    @property
    def state(self) -> CheckoutState:
        return self._state

    @property
    def can_submit(self) -> bool:
        return self._state not in (CheckoutState.VALIDATING, CheckoutState.SUBMITTING)

    async def submit(self, form: CheckoutForm) -> Result[OrderConfirmation, CheckoutError]:
        if self._in_flight is not None:
            logger.info("submit ignored, order %s in flight", self._in_flight.order_id)
            return Error(CheckoutBusy(self._in_flight.order_id))

        self._state = CheckoutState.VALIDATING
        match validate(form):
            case Error(invalid):
                return self._reject(invalid)
            case Ok(customer):
                pass

        snapshot = self._cart.snapshot()
        if snapshot.is_empty:
            return self._reject(ValidationError((_EMPTY_CART,)))

        request = OrderRequest.create(snapshot, customer)
        self._state = CheckoutState.SUBMITTING
        self._in_flight = request
        self._listener.on_submitting(request)
        logger.info(
            "submitting order %s (%d items, total %s)",
            request.order_id,
            snapshot.item_count,
            request.total,
            extra={
                "event": ORDER_SUBMITTED_EVENT,
                "order_id": request.order_id,
                "ice_cream_count": snapshot.item_count,
                "customer_name": customer.name,
            },
        )

        try:
            outcome = await self._api.submit_order(request)
        except asyncio.CancelledError:
            self._state = CheckoutState.IDLE
            raise
        finally:
            self._in_flight = None

        match outcome:
            case Ok(OrderResult(success=True) as placed):
                return self._succeed(request, placed)
            case Ok(placed):
                return self._fail(SubmissionFailed(request.order_id, placed))
            case Error(e):
                return self._fail(SubmissionFailed(request.order_id, e))

    # ── Outcomes ────────────────────────────────────────────────────

    def _reject(self, invalid: ValidationError) -> Result[OrderConfirmation, CheckoutError]:
        self._state = CheckoutState.IDLE
        logger.info("checkout form rejected: %s", invalid)
        self._listener.on_invalid(invalid)
        return Error(invalid)

    def _succeed(self, request: OrderRequest, placed: OrderResult) -> Result[OrderConfirmation, CheckoutError]:
        self._cart.clear()
        confirmation = OrderConfirmation(
            order_id=placed.order_id,
            message=placed.message,
            estimated_delivery=placed.estimated_delivery,
            total=request.total,
        )
        self._state = CheckoutState.SUCCEEDED
        self.last_confirmation = confirmation
        self.last_failure = None
        logger.info("order %s placed, delivery in %s", placed.order_id, placed.estimated_delivery)
        self._listener.on_succeeded(confirmation)
        return Ok(confirmation)

    def _fail(self, failure: SubmissionFailed) -> Result[OrderConfirmation, CheckoutError]:
        self._state = CheckoutState.FAILED
        self.last_failure = failure
        logger.warning("order %s failed: %s", failure.order_id, failure.detail)
        self._listener.on_failed(failure)
        self._state = CheckoutState.IDLE
        return Error(failure)


__all__ = (
    "ORDER_SUBMITTED_EVENT",
    "CheckoutState",
    "OrderConfirmation",
    "OrderSubmitter",
    "CheckoutListener",
    "CheckoutOrchestrator",
)
