"""
Catalog — the flavor menu.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from scoops._types import money
from scoops.catalog._types import FlavorItem

# ═══════════════════════════════════════════════════════════════════════════════
# Sample Flavors
# ═══════════════════════════════════════════════════════════════════════════════

SAMPLE_FLAVORS: tuple[FlavorItem, ...] = (
    FlavorItem(
        id=1,
        name="Vanilla Dream",
        description="Classic Madagascar vanilla bean ice cream with a silky smooth texture",
        unit_price=money("4.99"),
        color_tag="#FFF8DC",
        icon_key="ic_vanilla",
    ),
    FlavorItem(
        id=2,
        name="Chocolate Fudge",
        description="Rich Belgian dark chocolate with swirls of fudge",
        unit_price=money("5.49"),
        color_tag="#5D4037",
        icon_key="ic_chocolate",
    ),
    FlavorItem(
        id=3,
        name="Strawberry Bliss",
        description="Fresh strawberry ice cream made with real berries",
        unit_price=money("5.29"),
        color_tag="#FF6B9D",
        icon_key="ic_strawberry",
    ),
    FlavorItem(
        id=4,
        name="Mint Chip",
        description="Cool peppermint ice cream loaded with chocolate chips",
        unit_price=money("5.49"),
        color_tag="#98FF98",
        icon_key="ic_mint",
    ),
    FlavorItem(
        id=5,
        name="Caramel Swirl",
        description="Buttery caramel ice cream with golden caramel ribbons",
        unit_price=money("5.79"),
        color_tag="#FFD700",
        icon_key="ic_caramel",
    ),
    FlavorItem(
        id=6,
        name="Double Chocolate Chip",
        description="Creamy milk chocolate loaded with chocolate chips and cocoa swirls",
        unit_price=money("5.99"),
        color_tag="#8B4513",
        icon_key="ic_double_chocolate",
    ),
)

# ═══════════════════════════════════════════════════════════════════════════════
# Catalog
# ═══════════════════════════════════════════════════════════════════════════════


class Catalog:
    """
    Immutable, ordered set of flavors keyed by id.

    Example:
        catalog = Catalog.sample()
        vanilla = catalog.get(1)
    """

    __slots__ = ("_flavors", "_by_id")

    def __init__(self, flavors: Iterable[FlavorItem]) -> None:
        self._flavors = tuple(flavors)
        self._by_id: dict[int, FlavorItem] = {}
        for flavor in self._flavors:
            if flavor.id in self._by_id:
                raise ValueError(f"duplicate flavor id {flavor.id}")
            self._by_id[flavor.id] = flavor

    @classmethod
    def sample(cls) -> Catalog:
        return cls(SAMPLE_FLAVORS)

    @property
    def flavors(self) -> tuple[FlavorItem, ...]:
        return self._flavors

    @property
    def ids(self) -> tuple[int, ...]:
        return tuple(f.id for f in self._flavors)

    def get(self, item_id: int) -> FlavorItem | None:
        return self._by_id.get(item_id)

    def __getitem__(self, item_id: int) -> FlavorItem:
        return self._by_id[item_id]

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._by_id

    def __iter__(self) -> Iterator[FlavorItem]:
        return iter(self._flavors)

    def __len__(self) -> int:
        return len(self._flavors)


__all__ = ("SAMPLE_FLAVORS", "Catalog")
