"""
Cart — mutable cart state with derived, immutable snapshots.

    from scoops import cart as Cart

    store = Cart.CartStore()
    store.subscribe(render)
    store.add(flavor)
    print(Cart.format_summary(store.snapshot()))
"""

from __future__ import annotations

from scoops.cart._types import CartLine, CartSnapshot
from scoops.cart._store import CartListener, CartStore
from scoops.cart._format import format_summary, badge_label

__all__ = (
    "CartLine",
    "CartSnapshot",
    "CartListener",
    "CartStore",
    "format_summary",
    "badge_label",
)
