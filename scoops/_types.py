"""
Core types for scoops.

Re-exports from kungfu + money helpers shared by cart, api and checkout.
"""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

# Re-export from kungfu
from kungfu import Result, Ok, Error, LazyCoroResult

# ═══════════════════════════════════════════════════════════════════════════════
# Lazy Computation Aliases
# ═══════════════════════════════════════════════════════════════════════════════

type Lazy[T, E] = LazyCoroResult[T, E]
"""Lazy async computation that may fail."""

type Fallible[T, E] = Lazy[T, E]
"""Lazy computation that can fail with E."""

# ═══════════════════════════════════════════════════════════════════════════════
# Money
# ═══════════════════════════════════════════════════════════════════════════════

type Money = Decimal
"""Currency amount. Never a float."""

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_cents(amount: Decimal) -> Money:
    """Round to whole cents, half away from zero."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def money(value: str | int | Decimal) -> Money:
    """
    Build a Money value.

    Strings keep their exact decimal digits; floats are refused so that
    binary rounding never leaks into totals.
    """
    if isinstance(value, float):
        raise TypeError("money() does not accept floats, pass a string")
    return to_cents(Decimal(value))


def format_money(amount: Decimal) -> str:
    return f"${to_cents(amount):.2f}"


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    # Re-exports from kungfu
    "Result",
    "Ok",
    "Error",
    "LazyCoroResult",
    # Type aliases
    "Lazy",
    "Fallible",
    "Money",
    # Money helpers
    "CENT",
    "ZERO",
    "to_cents",
    "money",
    "format_money",
)
