"""
CartStore — the single owner of cart lines.

Every mutation recomputes the snapshot and publishes it to observers
synchronously, in registration order, before returning.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from decimal import Decimal

from scoops.catalog import FlavorItem
from scoops.config import TAX_RATE
from scoops.cart._types import CartLine, CartSnapshot

logger = logging.getLogger(__name__)

type CartListener = Callable[[CartSnapshot], None]
"""Receives the full snapshot after every mutation."""


class CartStore:
    """
    Mutable cart state with observer notification.

    Example:
        cart = CartStore()
        cart.subscribe(lambda snap: print(snap.item_count))
        cart.add(vanilla)          # prints 1
        cart.add(vanilla)          # prints 2
        cart.set_quantity(1, 0)    # prints 0
    """

    def __init__(self, *, tax_rate: Decimal = TAX_RATE) -> None:
        self._tax_rate = tax_rate
        self._lines: dict[int, CartLine] = {}
        self._listeners: list[CartListener] = []
        self._snapshot = CartSnapshot(tax_rate=tax_rate)

    # ── Observers ───────────────────────────────────────────────────

    def subscribe(self, listener: CartListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: CartListener) -> None:
        """Remove a listener. Unknown listeners are ignored."""
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    # ── Mutations ───────────────────────────────────────────────────

    def add(self, item: FlavorItem) -> None:
        line = self._lines.get(item.id)
        if line is None:
            self._lines[item.id] = CartLine(item, 1)
        else:
            self._lines[item.id] = CartLine(line.item, line.quantity + 1)
        logger.debug("cart add %s (id=%d)", item.name, item.id)
        self._publish()

    def set_quantity(self, item_id: int, quantity: int) -> None:
        if quantity <= 0:
            self.remove(item_id)
            return
        line = self._lines.get(item_id)
        if line is not None:
            self._lines[item_id] = CartLine(line.item, quantity)
        self._publish()

    def remove(self, item_id: int) -> None:
        self._lines.pop(item_id, None)
        self._publish()

    def clear(self) -> None:
        self._lines.clear()
        self._publish()

    # ── Reads ───────────────────────────────────────────────────────

    def snapshot(self) -> CartSnapshot:
        return self._snapshot

    @property
    def lines(self) -> tuple[CartLine, ...]:
        return self._snapshot.lines

    @property
    def item_count(self) -> int:
        return self._snapshot.item_count

    def __len__(self) -> int:
        return len(self._lines)

    def __bool__(self) -> bool:
        return bool(self._lines)

    # ── Internals ───────────────────────────────────────────────────

    def _publish(self) -> None:
        self._snapshot = CartSnapshot(tuple(self._lines.values()), self._tax_rate)
        for listener in tuple(self._listeners):
            listener(self._snapshot)


__all__ = ("CartListener", "CartStore")
