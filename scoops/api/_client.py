"""
ApiClient — the shop's network calls as lazy results.

Every operation returns `LazyCoroResult[T, NetworkError]`. Nothing runs
until awaited; awaiting resolves to exactly one `Ok` or `Error`.

    client = ApiClient(config.http_client(), config=config)

    match await client.submit_order(request):
        case Ok(result):
            print(result.order_id)
        case Error(e):
            print(e.message)

The endpoints are an echo service: a 2xx proves the round trip, but the
bodies are not trusted. Menu content, stock levels, promo rules and
order status are produced locally.
"""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable, Iterable, Mapping
from decimal import Decimal
from typing import Any

import httpx

import combinators as C
from combinators import NoError, RetryPolicy
from combinators import lift as L

from scoops._types import LazyCoroResult
from scoops.catalog import Catalog, FlavorItem
from scoops.config import ApiConfig, Route
from scoops.api._errors import NetworkError
from scoops.api._types import (
    InventoryLevels,
    OrderRequest,
    OrderResult,
    OrderStatus,
    PromoResult,
)

logger = logging.getLogger(__name__)

# ═══════════════════════════════════════════════════════════════════════════════
# Local answers
# ═══════════════════════════════════════════════════════════════════════════════

PROMO_CODES: Mapping[str, Decimal] = {
    "SWEET10": Decimal("0.10"),
    "ICECREAM20": Decimal("0.20"),
    "SUMMER15": Decimal("0.15"),
}

ORDER_STATUSES = ("Preparing", "Ready", "Out for Delivery")

STOCK_RANGE = (10, 50)

ORDER_PLACED_MESSAGE = "Order placed successfully!"
ESTIMATED_DELIVERY = "15-20 minutes"


def evaluate_promo(code: str) -> PromoResult:
    """Case-insensitive whitelist lookup."""
    discount = PROMO_CODES.get(code.strip().upper())
    if discount is None:
        return PromoResult(valid=False, discount=Decimal("0"), code=code)
    return PromoResult(valid=True, discount=discount, code=code)


# ═══════════════════════════════════════════════════════════════════════════════
# ApiClient
# ═══════════════════════════════════════════════════════════════════════════════


class ApiClient:
    """
    Shop API over an `httpx.AsyncClient`.

    The client does not own `http` unless built with `from_config`;
    `aclose()` closes it only in that case.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        *,
        config: ApiConfig | None = None,
        catalog: Catalog | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._http = http
        self._config = config or ApiConfig()
        self._catalog = catalog or Catalog.sample()
        self._rng = rng or random.Random()
        self._clock = clock
        self._owns_http = False
        self._policy: RetryPolicy[NetworkError] = RetryPolicy.exponential(
            times=self._config.attempts,
            initial=self._config.retry_backoff,
            max_delay=max(self._config.retry_backoff, 5.0),
            retry_on=lambda e: e.retryable,
        )

    @classmethod
    def from_config(
        cls,
        config: ApiConfig,
        *,
        catalog: Catalog | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        rng: random.Random | None = None,
    ) -> ApiClient:
        client = cls(config.http_client(transport), config=config, catalog=catalog, rng=rng)
        client._owns_http = True
        return client

    @property
    def config(self) -> ApiConfig:
        return self._config

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()

    # ── Operations ──────────────────────────────────────────────────

    def fetch_menu(self) -> LazyCoroResult[tuple[FlavorItem, ...], NetworkError]:
        return self._call(self._config.routes.menu).map(lambda _: self._catalog.flavors)

    def fetch_menu_or_local(self) -> LazyCoroResult[tuple[FlavorItem, ...], NoError]:
        """Menu fetch that never fails: a NetworkError is logged and the local catalog served."""
        return C.recover(
            C.tap_err(
                self.fetch_menu(),
                effect=lambda e: logger.info("serving local catalog after: %s", e),
            ),
            default=self._catalog.flavors,
        )

    def check_inventory(
        self, item_ids: Iterable[int]
    ) -> LazyCoroResult[InventoryLevels, NetworkError]:
        ids = tuple(dict.fromkeys(item_ids))
        return self._call(
            self._config.routes.inventory,
            params={"ids": ",".join(str(i) for i in ids)},
        ).map(lambda _: {i: self._rng.randint(*STOCK_RANGE) for i in ids})

    def submit_order(self, request: OrderRequest) -> LazyCoroResult[OrderResult, NetworkError]:
        return self._call(self._config.routes.order, json=request.to_json()).map(
            lambda _: OrderResult(
                success=True,
                order_id=request.order_id,
                message=ORDER_PLACED_MESSAGE,
                estimated_delivery=ESTIMATED_DELIVERY,
            )
        )

    def validate_promo_code(self, code: str) -> LazyCoroResult[PromoResult, NetworkError]:
        return self._call(self._config.routes.promo, params={"code": code}).map(
            lambda _: evaluate_promo(code)
        )

    def get_order_status(self, order_id: str) -> LazyCoroResult[OrderStatus, NetworkError]:
        return self._call(
            self._config.routes.order_status, path_values={"order_id": order_id}
        ).map(
            lambda _: OrderStatus(
                order_id=order_id,
                status=self._rng.choice(ORDER_STATUSES),
                updated_at=int(self._clock() * 1000),
            )
        )

    # ── Transport ───────────────────────────────────────────────────

    def _call(
        self,
        route: Route,
        *,
        path_values: Mapping[str, str] | None = None,
        params: Mapping[str, str] | None = None,
        json: Any = None,
    ) -> LazyCoroResult[httpx.Response, NetworkError]:
        method, path, fixed = route.format(**(path_values or {}))
        query = {**fixed, **(params or {})}

        async def send() -> httpx.Response:
            response = await self._http.request(method, path, params=query or None, json=json)
            if not response.is_success:
                raise NetworkError(
                    f"HTTP {response.status_code}: {response.reason_phrase}",
                    status=response.status_code,
                )
            return response

        attempt = L.catching_async(send, on_error=NetworkError.from_exception)
        return C.tap_err(
            C.retry(attempt, policy=self._policy),
            effect=lambda e: logger.warning("%s %s failed: %s", method, path, e),
        )


__all__ = (
    "PROMO_CODES",
    "ORDER_STATUSES",
    "evaluate_promo",
    "ApiClient",
)
