"""
scoops — the core of the Scoops & Smiles ice-cream shop.

    from scoops import cart as Cart        # Cart state + snapshots
    from scoops import api as A            # Lazy API client
    from scoops import checkout as Co      # Order submission
    from scoops import session as S        # Scripted customer sessions
"""

import logging

from scoops import catalog
from scoops import cart
from scoops import api
from scoops import checkout
from scoops import session
from scoops._types import (
    Lazy,
    Fallible,
    Money,
)
from scoops.config import Settings
from scoops.shop import Shop

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = (
    "catalog",
    "cart",
    "api",
    "checkout",
    "session",
    "Lazy",
    "Fallible",
    "Money",
    "Settings",
    "Shop",
)
