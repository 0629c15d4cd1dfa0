"""
Catalog — static flavor reference data.

    from scoops import catalog as K

    menu = K.Catalog.sample()
    vanilla = menu[1]
"""

from __future__ import annotations

from scoops.catalog._types import FlavorItem
from scoops.catalog._catalog import SAMPLE_FLAVORS, Catalog

__all__ = (
    "FlavorItem",
    "SAMPLE_FLAVORS",
    "Catalog",
)
