"""
Plain-text rendering of cart state.
"""

from __future__ import annotations

from scoops._types import format_money
from scoops.cart._types import CartSnapshot


def format_summary(snapshot: CartSnapshot) -> str:
    """
    Order summary as shown on the checkout screen.

        2x Vanilla Dream - $9.98

        Subtotal: $9.98
        Tax (8%): $0.80
        Total: $10.78
    """
    lines = [
        f"{line.quantity}x {line.item.name} - {format_money(line.line_total)}"
        for line in snapshot.lines
    ]
    rate = f"{(snapshot.tax_rate * 100).normalize():f}"
    lines.append("")
    lines.append(f"Subtotal: {format_money(snapshot.subtotal)}")
    lines.append(f"Tax ({rate}%): {format_money(snapshot.tax)}")
    lines.append(f"Total: {format_money(snapshot.total)}")
    return "\n".join(lines)


def badge_label(count: int) -> str:
    return f"Cart ({count})" if count > 0 else "Cart"


__all__ = ("format_summary", "badge_label")
