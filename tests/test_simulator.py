from __future__ import annotations

import asyncio
import logging
import random

import httpx
import pytest

from scoops.checkout import FAILURE_PROMPT, FormField
from scoops.config import Settings, SimulatorTimings
from scoops.session import (
    PHASE_ORDER,
    SAMPLE_ADDRESSES,
    SAMPLE_EMAILS,
    SAMPLE_NAMES,
    TEST_CARD_NUMBER,
    SessionPhase,
    SessionSimulator,
)
from scoops.shop import Shop

from tests.conftest import EchoServer

FAST = SimulatorTimings().scaled(0.001)
SESSION_BUDGET = 0.5


class FakeList:
    def __init__(self) -> None:
        self.positions: list[int] = []

    def scroll_to(self, position: int) -> None:
        self.positions.append(position)


class FakeForm:
    def __init__(self) -> None:
        self.filled: dict[FormField, str] = {}
        self.submitted = 0

    def fill(self, field: FormField, value: str) -> None:
        self.filled[field] = value

    def submit(self) -> None:
        self.submitted += 1


class FakeHost:
    def __init__(self) -> None:
        self.shown: list[str] = []
        self.menu = FakeList()
        self.form = FakeForm()
        self.screen: object = self.menu

    def show_menu(self) -> None:
        self.shown.append("menu")
        self.screen = self.menu

    def show_cart(self) -> None:
        self.shown.append("cart")
        self.screen = FakeList()

    def show_checkout(self) -> None:
        self.shown.append("checkout")
        self.screen = self.form

    def current_screen(self) -> object:
        return self.screen


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def sim(catalog, cart, host) -> SessionSimulator:
    return SessionSimulator(catalog, cart, host, host, timings=FAST, rng=random.Random(42))


class TestSession:
    async def test_full_session(self, sim, host, cart):
        completed = []

        task = sim.start_session(on_complete=lambda: completed.append(True))
        assert task is not None
        assert sim.is_running()
        await asyncio.wait_for(task, SESSION_BUDGET)

        assert completed == [True]
        assert not sim.is_running()
        assert sim.state is None
        assert host.shown == ["cart", "checkout", "menu"]
        assert host.menu.positions == [3, 0]
        assert 2 <= cart.snapshot().item_count <= 3
        assert all(sim.phase_entries[phase] == 1 for phase in SessionPhase)
        assert tuple(sim.phase_entries) == PHASE_ORDER

    async def test_fills_form_from_sample_pools(self, sim, host):
        await asyncio.wait_for(sim.start_session(), SESSION_BUDGET)

        filled = host.form.filled
        assert list(filled) == [FormField.NAME, FormField.EMAIL, FormField.ADDRESS, FormField.CARD_NUMBER]
        assert filled[FormField.NAME] in SAMPLE_NAMES
        assert filled[FormField.EMAIL] in SAMPLE_EMAILS
        assert filled[FormField.ADDRESS] in SAMPLE_ADDRESSES
        assert filled[FormField.CARD_NUMBER] == TEST_CARD_NUMBER
        assert host.form.submitted == 1

    async def test_session_clears_cart_first(self, sim, cart, catalog):
        for _ in range(5):
            cart.add(catalog[6])

        await asyncio.wait_for(sim.start_session(), SESSION_BUDGET)

        assert cart.snapshot().item_count <= 3

    async def test_start_while_running_is_ignored(self, sim, caplog):
        first = sim.start_session()

        with caplog.at_level(logging.WARNING, logger="scoops.session"):
            second = sim.start_session()

        assert second is None
        assert "already running" in caplog.text
        await asyncio.wait_for(first, SESSION_BUDGET)
        assert sim.phase_entries[SessionPhase.BROWSE] == 1
        assert sim.phase_entries[SessionPhase.CHECKOUT] == 1

    async def test_state_tracks_phase(self, sim):
        task = sim.start_session()

        assert sim.state is not None
        assert sim.state.session_id == 1
        await asyncio.sleep(0)
        assert sim.state.phase is SessionPhase.BROWSE
        await asyncio.wait_for(task, SESSION_BUDGET)

    async def test_skips_order_without_form(self, catalog, cart, host):
        host.form = None
        sim = SessionSimulator(catalog, cart, host, host, timings=FAST, rng=random.Random(1))

        await asyncio.wait_for(sim.start_session(), SESSION_BUDGET)

        assert host.shown[-1] == "menu"
        assert not sim.is_running()


class TestStop:
    async def test_stop_during_add_to_cart(self, sim, cart, host):
        completed = []

        def stop_on_first_item(snapshot):
            if snapshot.item_count == 1:
                sim.stop()

        cart.subscribe(stop_on_first_item)
        task = sim.start_session(on_complete=lambda: completed.append(True))
        await asyncio.sleep(SESSION_BUDGET / 5)

        assert task.done()
        assert not sim.is_running()
        assert sim.phase_entries[SessionPhase.ADD_TO_CART] == 1
        assert sim.phase_entries[SessionPhase.VIEW_CART] == 0
        assert sim.phase_entries[SessionPhase.CHECKOUT] == 0
        assert cart.snapshot().item_count == 1
        assert host.shown == []
        assert completed == []

    async def test_stop_then_restart(self, sim):
        sim.start_session()
        await asyncio.sleep(0)
        sim.stop()
        assert not sim.is_running()

        task = sim.start_session()
        assert task is not None
        await asyncio.wait_for(task, SESSION_BUDGET)
        assert sim.phase_entries[SessionPhase.CHECKOUT] == 1

    async def test_stop_when_idle(self, sim):
        sim.stop()
        sim.stop()
        assert not sim.is_running()

    async def test_external_cancel_clears_running(self, sim):
        task = sim.start_session()
        await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert not sim.is_running()


class TestMultipleSessions:
    async def test_runs_back_to_back(self, sim, host):
        done = []

        batch = sim.start_multiple_sessions(3, delay_between=0, on_all_complete=lambda: done.append(True))
        await asyncio.wait_for(batch, SESSION_BUDGET * 3)

        assert done == [True]
        assert sim.phase_entries[SessionPhase.BROWSE] == 3
        assert sim.phase_entries[SessionPhase.CHECKOUT] == 3
        assert host.shown == ["cart", "checkout", "menu"] * 3
        assert not sim.is_running()

    async def test_default_delay_from_timings(self, sim):
        batch = sim.start_multiple_sessions(2)
        await asyncio.wait_for(batch, SESSION_BUDGET * 2)
        assert sim.phase_entries[SessionPhase.CHECKOUT] == 2

    async def test_aborts_when_a_session_is_running(self, sim):
        done = []
        running = sim.start_session()

        batch = sim.start_multiple_sessions(2, delay_between=0, on_all_complete=lambda: done.append(True))
        await asyncio.wait_for(batch, SESSION_BUDGET)
        await asyncio.wait_for(running, SESSION_BUDGET)

        assert done == []
        assert sim.phase_entries[SessionPhase.BROWSE] == 1

    async def test_stop_ends_batch(self, sim):
        done = []
        batch = sim.start_multiple_sessions(5, delay_between=0, on_all_complete=lambda: done.append(True))
        await asyncio.sleep(0.01)

        sim.stop()
        await asyncio.sleep(0.05)

        assert batch.done()
        assert done == []
        assert sim.phase_entries[SessionPhase.BROWSE] < 5

    def test_count_must_be_positive(self, sim):
        with pytest.raises(ValueError):
            sim.start_multiple_sessions(0)


class HeldEcho(EchoServer):
    """Echo server that holds POST replies until `release` is set."""

    def __init__(self) -> None:
        super().__init__()
        self.posted = asyncio.Event()
        self.release = asyncio.Event()

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.method == "POST":
            self.posted.set()
            await self.release.wait()
        return super().__call__(request)


class TestShopSession:
    def _shop(self, echo: EchoServer) -> Shop:
        return Shop(
            Settings(timings=FAST),
            transport=httpx.MockTransport(echo),
            rng=random.Random(5),
        )

    async def test_session_places_order(self):
        echo = EchoServer()
        async with self._shop(echo) as shop:
            await asyncio.wait_for(shop.simulator.start_session(), SESSION_BUDGET)
            await shop.shell.menu_load

            assert shop.shell.confirmation is not None
            assert shop.cart.snapshot().is_empty
            assert shop.shell.badge == "Cart"
            assert shop.shell.history == ["cart", "checkout", "menu"]
            assert any(r.method == "POST" for r in echo.requests)

    async def test_failed_order_keeps_cart(self):
        echo = EchoServer(status=500)
        async with self._shop(echo) as shop:
            await asyncio.wait_for(shop.simulator.start_session(), SESSION_BUDGET)
            await shop.shell.menu_load

            assert shop.shell.confirmation is None
            assert shop.shell.notices[-1] == FAILURE_PROMPT
            assert not shop.cart.snapshot().is_empty

    async def test_stop_while_order_in_flight_abandons_it(self):
        echo = HeldEcho()
        async with self._shop(echo) as shop:
            shop.simulator.start_session()
            await asyncio.wait_for(echo.posted.wait(), SESSION_BUDGET)
            before = shop.cart.snapshot()

            shop.simulator.stop()
            echo.release.set()
            await asyncio.sleep(0.05)

            assert not before.is_empty
            assert shop.cart.snapshot() == before
            assert shop.shell.notices == []
            assert shop.shell.confirmation is None
            assert shop.orchestrator.can_submit
