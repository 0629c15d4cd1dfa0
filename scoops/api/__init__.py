"""
API — lazy, never-raising client for the shop backend.

    from scoops import api as A

    client = A.ApiClient.from_config(config)
    match await client.check_inventory([1, 2]):
        case Ok(levels): ...
        case Error(A.NetworkError(message=msg)): ...
"""

from __future__ import annotations

from scoops.api._errors import NetworkError
from scoops.api._types import (
    InventoryLevels,
    Customer,
    new_order_id,
    OrderRequest,
    OrderResult,
    PromoResult,
    OrderStatus,
)
from scoops.api._client import PROMO_CODES, ORDER_STATUSES, evaluate_promo, ApiClient
from scoops.api._deliver import deliver

__all__ = (
    # Errors
    "NetworkError",
    # Types
    "InventoryLevels",
    "Customer",
    "new_order_id",
    "OrderRequest",
    "OrderResult",
    "PromoResult",
    "OrderStatus",
    # Client
    "PROMO_CODES",
    "ORDER_STATUSES",
    "evaluate_promo",
    "ApiClient",
    "deliver",
)
