from __future__ import annotations

import logging

from kungfu import Error, LazyCoroResult, Ok

from scoops.api import NetworkError
from scoops.checkout import CartGate, EmptyCart, find_shortfalls


class FixedInventory:
    def __init__(self, levels=None, error: NetworkError | None = None) -> None:
        self.levels = levels or {}
        self.error = error
        self.asked: list[tuple[int, ...]] = []

    def check_inventory(self, item_ids):
        async def run():
            self.asked.append(tuple(item_ids))
            if self.error is not None:
                return Error(self.error)
            return Ok(self.levels)

        return LazyCoroResult(run)


class TestFindShortfalls:
    def test_only_short_items(self, cart, vanilla, chocolate):
        for _ in range(3):
            cart.add(vanilla)
        cart.add(chocolate)

        shortfalls = find_shortfalls(cart.snapshot(), {1: 0, 2: 5})

        assert [(s.item_id, s.requested, s.available) for s in shortfalls] == [(1, 3, 0)]

    def test_missing_id_counts_as_zero(self, cart, vanilla):
        cart.add(vanilla)

        (shortfall,) = find_shortfalls(cart.snapshot(), {})

        assert shortfall.available == 0
        assert shortfall.name == "Vanilla Dream"


class TestCartGate:
    async def test_empty_cart_refused(self, cart):
        api = FixedInventory()

        result = await CartGate(cart, api).proceed()

        assert result == Error(EmptyCart())
        assert api.asked == []

    async def test_proceeds_with_shortfall(self, cart, vanilla, chocolate, caplog):
        for _ in range(3):
            cart.add(vanilla)
        cart.add(chocolate)
        api = FixedInventory({1: 0, 2: 5})

        with caplog.at_level(logging.WARNING, logger="scoops.checkout"):
            match await CartGate(cart, api).proceed():
                case Ok(decision):
                    assert decision.checked
                    assert [s.item_id for s in decision.shortfalls] == [1]
                case Error(e):
                    raise AssertionError(e)

        assert api.asked == [(1, 2)]
        assert "inventory shortfall" in caplog.text

    async def test_proceeds_when_check_fails(self, cart, vanilla, caplog):
        cart.add(vanilla)
        api = FixedInventory(error=NetworkError("HTTP 503: Service Unavailable", status=503))

        with caplog.at_level(logging.WARNING, logger="scoops.checkout"):
            match await CartGate(cart, api).proceed():
                case Ok(decision):
                    assert not decision.checked
                    assert decision.shortfalls == ()
                    assert decision.degraded.status == 503
                case Error(e):
                    raise AssertionError(e)

        assert "assuming available" in caplog.text

    async def test_with_real_client(self, cart, vanilla, client, echo):
        cart.add(vanilla)

        match await CartGate(cart, client).proceed():
            case Ok(decision):
                assert decision.checked
                assert decision.shortfalls == ()
            case Error(e):
                raise AssertionError(e)

        assert echo.requests[0].url.params["ids"] == "1"
