"""
CartGate — "proceed to checkout" from the cart screen.

Checks stock for every cart line, then lets the customer through anyway:
a shortfall is logged, and a failed check is treated as "in stock".
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Protocol

from kungfu import Error, Ok, Result

from scoops._types import LazyCoroResult
from scoops.api import InventoryLevels, NetworkError
from scoops.cart import CartSnapshot, CartStore
from scoops.checkout._errors import EmptyCart, InventoryShortfall

logger = logging.getLogger(__name__)


class InventoryChecker(Protocol):
    def check_inventory(self, item_ids: Iterable[int]) -> LazyCoroResult[InventoryLevels, NetworkError]: ...


@dataclass(frozen=True, slots=True)
class GateDecision:
    """Outcome of the stock check. Checkout always proceeds."""

    snapshot: CartSnapshot
    shortfalls: tuple[InventoryShortfall, ...] = ()
    degraded: NetworkError | None = None

    @property
    def checked(self) -> bool:
        return self.degraded is None


def find_shortfalls(snapshot: CartSnapshot, levels: Mapping[int, int]) -> tuple[InventoryShortfall, ...]:
    """Lines asking for more than `levels` holds. Missing ids count as zero."""
    return tuple(
        InventoryShortfall(line.item_id, line.item.name, line.quantity, levels.get(line.item_id, 0))
        for line in snapshot.lines
        if levels.get(line.item_id, 0) < line.quantity
    )


class CartGate:
    def __init__(self, cart: CartStore, api: InventoryChecker) -> None:
        self._cart = cart
        self._api = api

    async def proceed(self) -> Result[GateDecision, EmptyCart]:
        snapshot = self._cart.snapshot()
        if snapshot.is_empty:
            return Error(EmptyCart())

        match await self._api.check_inventory(snapshot.item_ids):
            case Ok(levels):
                shortfalls = find_shortfalls(snapshot, levels)
                for shortfall in shortfalls:
                    logger.warning("inventory shortfall, proceeding: %s", shortfall)
                return Ok(GateDecision(snapshot, shortfalls))
            case Error(e):
                logger.warning("inventory check failed, assuming available: %s", e)
                return Ok(GateDecision(snapshot, degraded=e))


__all__ = (
    "InventoryChecker",
    "GateDecision",
    "find_shortfalls",
    "CartGate",
)
