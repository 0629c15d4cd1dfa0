"""
API request/response types.
"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from scoops._types import Money
from scoops.cart import CartLine, CartSnapshot

type InventoryLevels = dict[int, int]
"""item id → units available."""

# ═══════════════════════════════════════════════════════════════════════════════
# Order Request
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Customer:
    name: str
    email: str
    address: str


def new_order_id() -> str:
    """Client-minted order token: ICE-1A2B3C4D."""
    return f"ICE-{uuid.uuid4().hex[:8].upper()}"


@dataclass(frozen=True, slots=True)
class OrderRequest:
    """One checkout attempt. Built once, never modified."""

    order_id: str
    lines: tuple[CartLine, ...]
    customer: Customer
    subtotal: Money
    tax: Money
    total: Money
    timestamp: int  # epoch milliseconds

    @classmethod
    def create(
        cls,
        snapshot: CartSnapshot,
        customer: Customer,
        *,
        order_id: str | None = None,
        timestamp: int | None = None,
    ) -> OrderRequest:
        return cls(
            order_id=order_id or new_order_id(),
            lines=snapshot.lines,
            customer=customer,
            subtotal=snapshot.subtotal,
            tax=snapshot.tax,
            total=snapshot.total,
            timestamp=timestamp if timestamp is not None else int(time.time() * 1000),
        )

    def to_json(self) -> dict[str, Any]:
        """Wire body for POST order."""
        return {
            "orderId": self.order_id,
            "items": [
                {
                    "itemId": line.item.id,
                    "name": line.item.name,
                    "quantity": line.quantity,
                    "unitPrice": float(line.item.unit_price),
                    "totalPrice": float(line.line_total),
                }
                for line in self.lines
            ],
            "customer": {
                "name": self.customer.name,
                "email": self.customer.email,
                "address": self.customer.address,
            },
            "subtotal": float(self.subtotal),
            "tax": float(self.tax),
            "total": float(self.total),
            "timestamp": self.timestamp,
        }


# ═══════════════════════════════════════════════════════════════════════════════
# Responses
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class OrderResult:
    success: bool
    order_id: str
    message: str
    estimated_delivery: str


@dataclass(frozen=True, slots=True)
class PromoResult:
    valid: bool
    discount: Decimal
    code: str


@dataclass(frozen=True, slots=True)
class OrderStatus:
    order_id: str
    status: str
    updated_at: int  # epoch milliseconds


__all__ = (
    "InventoryLevels",
    "Customer",
    "new_order_id",
    "OrderRequest",
    "OrderResult",
    "PromoResult",
    "OrderStatus",
)
