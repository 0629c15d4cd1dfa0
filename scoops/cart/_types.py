"""
Cart types — lines and derived snapshots.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from scoops._types import Money, ZERO, to_cents
from scoops.catalog import FlavorItem
from scoops.config import TAX_RATE

# ═══════════════════════════════════════════════════════════════════════════════
# CartLine — one item + quantity
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class CartLine:
    item: FlavorItem
    quantity: int

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError(f"line quantity must be >= 1, got {self.quantity}")

    @property
    def item_id(self) -> int:
        return self.item.id

    @property
    def line_total(self) -> Money:
        return self.item.unit_price * self.quantity


# ═══════════════════════════════════════════════════════════════════════════════
# CartSnapshot — aggregate read at one instant
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class CartSnapshot:
    """
    Immutable view of the cart.

    Aggregates are computed once at construction from `lines`:
        item_count = Σ quantity
        subtotal   = Σ line_total
        tax        = subtotal × tax_rate, rounded to cents
        total      = subtotal + tax
    """

    lines: tuple[CartLine, ...] = ()
    tax_rate: Decimal = TAX_RATE
    item_count: int = field(init=False)
    subtotal: Money = field(init=False)
    tax: Money = field(init=False)
    total: Money = field(init=False)

    def __post_init__(self) -> None:
        subtotal = to_cents(sum((line.line_total for line in self.lines), ZERO))
        tax = to_cents(subtotal * self.tax_rate)
        # frozen: assign derived fields through object.__setattr__
        object.__setattr__(self, "item_count", sum(line.quantity for line in self.lines))
        object.__setattr__(self, "subtotal", subtotal)
        object.__setattr__(self, "tax", tax)
        object.__setattr__(self, "total", subtotal + tax)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def item_ids(self) -> tuple[int, ...]:
        return tuple(line.item_id for line in self.lines)

    def line_for(self, item_id: int) -> CartLine | None:
        for line in self.lines:
            if line.item_id == item_id:
                return line
        return None

    def quantity_of(self, item_id: int) -> int:
        line = self.line_for(item_id)
        return line.quantity if line else 0


__all__ = ("CartLine", "CartSnapshot")
