from __future__ import annotations

import random

import httpx
import pytest

from scoops.api import ApiClient
from scoops.cart import CartStore
from scoops.catalog import Catalog, FlavorItem
from scoops.config import ApiConfig


class EchoServer:
    """
    httpx.MockTransport handler standing in for postman-echo.

    Answers `status` unless `script` holds queued statuses or exceptions,
    which are consumed one per request.
    """

    def __init__(self, status: int = 200) -> None:
        self.status = status
        self.script: list[int | Exception] = []
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        step = self.script.pop(0) if self.script else self.status
        if isinstance(step, Exception):
            raise step
        return httpx.Response(step, json={"url": str(request.url)})


@pytest.fixture
def catalog() -> Catalog:
    return Catalog.sample()


@pytest.fixture
def vanilla(catalog: Catalog) -> FlavorItem:
    return catalog[1]


@pytest.fixture
def chocolate(catalog: Catalog) -> FlavorItem:
    return catalog[2]


@pytest.fixture
def cart() -> CartStore:
    return CartStore()


@pytest.fixture
def echo() -> EchoServer:
    return EchoServer()


@pytest.fixture
def api_config() -> ApiConfig:
    return ApiConfig(base_url="https://shop.test")


@pytest.fixture
async def client(echo: EchoServer, api_config: ApiConfig, catalog: Catalog):
    client = ApiClient.from_config(
        api_config,
        catalog=catalog,
        transport=httpx.MockTransport(echo),
        rng=random.Random(7),
    )
    yield client
    await client.aclose()
