"""
Checkout — form validation, order submission, and the cart gate.

    from scoops import checkout as Co

    gate = Co.CartGate(cart, client)
    orchestrator = Co.CheckoutOrchestrator(cart, client)

    form = Co.CheckoutForm(name="Ann", email="ann@example.com",
                           address="1 Main St", card_number="4111111111111111")
    result = await orchestrator.submit(form)
"""

from __future__ import annotations

from scoops.checkout._errors import (
    FAILURE_PROMPT,
    FieldError,
    ValidationError,
    CheckoutBusy,
    SubmissionFailed,
    EmptyCart,
    InventoryShortfall,
    CheckoutError,
)
from scoops.checkout._form import (
    EMAIL_PATTERN,
    FormField,
    CheckoutForm,
    is_valid_email,
    validate,
)
from scoops.checkout._orchestrator import (
    ORDER_SUBMITTED_EVENT,
    CheckoutState,
    OrderConfirmation,
    OrderSubmitter,
    CheckoutListener,
    CheckoutOrchestrator,
)
from scoops.checkout._gate import (
    InventoryChecker,
    GateDecision,
    find_shortfalls,
    CartGate,
)

__all__ = (
    # Errors
    "FAILURE_PROMPT",
    "FieldError",
    "ValidationError",
    "CheckoutBusy",
    "SubmissionFailed",
    "EmptyCart",
    "InventoryShortfall",
    "CheckoutError",
    # Form
    "EMAIL_PATTERN",
    "FormField",
    "CheckoutForm",
    "is_valid_email",
    "validate",
    # Orchestrator
    "ORDER_SUBMITTED_EVENT",
    "CheckoutState",
    "OrderConfirmation",
    "OrderSubmitter",
    "CheckoutListener",
    "CheckoutOrchestrator",
    # Gate
    "InventoryChecker",
    "GateDecision",
    "find_shortfalls",
    "CartGate",
)
