"""
Catalog types.
"""

from __future__ import annotations

from dataclasses import dataclass

from scoops._types import Money, format_money


@dataclass(frozen=True, slots=True)
class FlavorItem:
    """
    A purchasable flavor.

    Reference data: built once when the catalog is created and shared
    read-only by the cart and the simulator.
    """

    id: int
    name: str
    description: str
    unit_price: Money
    color_tag: str
    icon_key: str

    def __post_init__(self) -> None:
        if self.id < 1:
            raise ValueError(f"flavor id must be >= 1, got {self.id}")
        if self.unit_price < 0:
            raise ValueError(f"unit price must be >= 0, got {self.unit_price}")

    @property
    def price_label(self) -> str:
        return format_money(self.unit_price)


__all__ = ("FlavorItem",)
