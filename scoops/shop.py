"""
Shop — composition root.

Builds one of each component and wires them together by constructor.

    async with Shop(Settings.from_env()) as shop:
        await shop.simulator.start_multiple_sessions(3)
        print(shop.shell.notices)
"""

from __future__ import annotations

import random

import httpx

from scoops.api import ApiClient
from scoops.cart import CartStore
from scoops.catalog import Catalog
from scoops.checkout import CheckoutOrchestrator
from scoops.config import Settings
from scoops.session import SessionSimulator
from scoops.shell import HeadlessShell


class Shop:
    def __init__(
        self,
        settings: Settings | None = None,
        *,
        catalog: Catalog | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.catalog = catalog or Catalog.sample()
        self.cart = CartStore()
        self.api = ApiClient.from_config(
            self.settings.api, catalog=self.catalog, transport=transport, rng=rng
        )
        self.shell = HeadlessShell(self.cart, self.api)
        self.simulator = SessionSimulator(
            self.catalog,
            self.cart,
            self.shell,
            self.shell,
            timings=self.settings.timings,
            rng=rng,
        )

    @property
    def orchestrator(self) -> CheckoutOrchestrator:
        return self.shell.orchestrator

    async def aclose(self) -> None:
        self.simulator.stop()
        await self.api.aclose()

    async def __aenter__(self) -> Shop:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()


__all__ = ("Shop",)
