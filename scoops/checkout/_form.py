"""
Checkout form and its validation.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

from kungfu import Error, Ok, Result

from scoops.api import Customer
from scoops.config import MIN_PAYMENT_TOKEN_LENGTH
from scoops.checkout._errors import FieldError, ValidationError

EMAIL_PATTERN = re.compile(
    r"[a-zA-Z0-9+._%\-]{1,256}"
    r"@"
    r"[a-zA-Z0-9][a-zA-Z0-9\-]{0,64}"
    r"(\.[a-zA-Z0-9][a-zA-Z0-9\-]{0,25})+"
)


class FormField(StrEnum):
    NAME = "name"
    EMAIL = "email"
    ADDRESS = "address"
    CARD_NUMBER = "card_number"


@dataclass(slots=True)
class CheckoutForm:
    """
    Values entered on the checkout screen.

    Mutable: a screen fills it field by field. A failed submission never
    touches it.
    """

    name: str = ""
    email: str = ""
    address: str = ""
    card_number: str = ""

    def fill(self, field: FormField, value: str) -> None:
        setattr(self, FormField(field).value, value)

    def value_of(self, field: FormField) -> str:
        return getattr(self, FormField(field).value)

    def customer(self) -> Customer:
        return Customer(
            name=self.name.strip(),
            email=self.email.strip(),
            address=self.address.strip(),
        )


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email.strip()) is not None


def validate(form: CheckoutForm) -> Result[Customer, ValidationError]:
    """
    Check every field, collecting all problems at once.

    Rules:
        name          non-blank
        email         address format
        address       non-blank
        card_number   at least 16 characters after trimming
    """
    errors: list[FieldError] = []
    if not form.name.strip():
        errors.append(FieldError(FormField.NAME, "Name is required"))
    if not is_valid_email(form.email):
        errors.append(FieldError(FormField.EMAIL, "Valid email is required"))
    if not form.address.strip():
        errors.append(FieldError(FormField.ADDRESS, "Address is required"))
    if len(form.card_number.strip()) < MIN_PAYMENT_TOKEN_LENGTH:
        errors.append(FieldError(FormField.CARD_NUMBER, "Valid card number is required"))

    if errors:
        return Error(ValidationError(tuple(errors)))
    return Ok(form.customer())


__all__ = (
    "EMAIL_PATTERN",
    "FormField",
    "CheckoutForm",
    "is_valid_email",
    "validate",
)
