"""
SessionSimulator — a scripted customer walking browse → cart → checkout.

One driver loop walks the phase list; each phase awaits its own delays.
At most one session runs at a time.

    sim = SessionSimulator(catalog, cart, shell, shell)
    sim.start_session(on_complete=lambda: print("done"))
    sim.start_session()          # ignored, already running
    sim.stop()                   # pending phases never run

Stopping cancels every tracked task, including an order the session
submitted, and bumps a generation counter. Each delay re-checks the
generation after sleeping, so a continuation that fires after `stop()`
does nothing.
"""

from __future__ import annotations

import asyncio
import logging
import random
from collections import Counter
from collections.abc import Awaitable, Callable, Coroutine
from typing import Any

from scoops.cart import CartStore
from scoops.catalog import Catalog
from scoops.checkout import FormField
from scoops.config import SimulatorTimings
from scoops.session._phases import PHASE_ORDER, SessionPhase, SessionState
from scoops.session._samples import SampleCustomer
from scoops.session._screen import FormScreen, Navigator, ScreenProvider, Scrollable

logger = logging.getLogger(__name__)

type Phase = Callable[[int, SessionState], Awaitable[None]]


class _Stale(Exception):
    """The session's generation is gone; unwind quietly."""


class SessionSimulator:
    def __init__(
        self,
        catalog: Catalog,
        cart: CartStore,
        navigator: Navigator,
        screens: ScreenProvider,
        *,
        timings: SimulatorTimings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._catalog = catalog
        self._cart = cart
        self._navigator = navigator
        self._screens = screens
        self._timings = timings or SimulatorTimings()
        self._rng = rng or random.Random()

        self._running = False
        self._generation = 0
        self._sessions = 0
        self._state: SessionState | None = None
        self._tasks: set[asyncio.Future[Any]] = set()

        self.phase_entries: Counter[SessionPhase] = Counter()
        runners: dict[SessionPhase, Phase] = {
            SessionPhase.BROWSE: self._browse,
            SessionPhase.ADD_TO_CART: self._add_to_cart,
            SessionPhase.VIEW_CART: self._view_cart,
            SessionPhase.CHECKOUT: self._checkout,
        }
        self._phases: tuple[tuple[SessionPhase, Phase], ...] = tuple(
            (phase, runners[phase]) for phase in PHASE_ORDER
        )

    # ── Control ─────────────────────────────────────────────────────

    def is_running(self) -> bool:
        return self._running

    @property
    def state(self) -> SessionState | None:
        return self._state

    @property
    def timings(self) -> SimulatorTimings:
        return self._timings

    def start_session(
        self, on_complete: Callable[[], None] | None = None
    ) -> asyncio.Task[None] | None:
        """
        Begin one session on the running loop.

        Returns the session task, or None when a session is already running.
        `on_complete` fires only for a session that reaches its end.
        """
        if self._running:
            logger.warning("session already running, start ignored")
            return None
        asyncio.get_running_loop()  # fail before touching state

        self._running = True
        self._sessions += 1
        state = SessionState(session_id=self._sessions)
        self._state = state
        self._cart.clear()
        logger.info("session %d started", state.session_id)

        return self._spawn(self._drive(self._generation, state, on_complete))

    def start_multiple_sessions(
        self,
        count: int,
        delay_between: float | None = None,
        on_all_complete: Callable[[], None] | None = None,
    ) -> asyncio.Task[None]:
        """
        Run `count` sessions back to back, pausing `delay_between` seconds
        (default `timings.between_sessions`) after each but the last.

        If a session cannot start because another is running, the batch ends
        there and `on_all_complete` is not called.
        """
        if count < 1:
            raise ValueError("count must be >= 1")
        delay = self._timings.between_sessions if delay_between is None else delay_between
        if delay < 0:
            raise ValueError("delay_between must be >= 0")
        return self._spawn(self._drive_batch(self._generation, count, delay, on_all_complete))

    def stop(self) -> None:
        """Cancel everything pending and clear the running flag."""
        self._generation += 1
        for task in tuple(self._tasks):
            task.cancel()
        self._tasks.clear()
        if self._running:
            logger.info("session %d stopped", self._sessions)
        self._running = False
        self._state = None

    # ── Drivers ─────────────────────────────────────────────────────

    async def _drive(
        self,
        token: int,
        state: SessionState,
        on_complete: Callable[[], None] | None,
    ) -> None:
        try:
            for phase, run in self._phases:
                self._check(token)
                state.phase = phase
                self.phase_entries[phase] += 1
                logger.debug("session %d: %s", state.session_id, phase.value)
                await run(token, state)
        except _Stale:
            return
        except asyncio.CancelledError:
            # cancelled by someone other than stop()
            if token == self._generation:
                self._running = False
                self._state = None
            raise

        self._running = False
        self._state = None
        logger.info(
            "session %d finished (%d items added)", state.session_id, state.items_added
        )
        if on_complete is not None:
            on_complete()

    async def _drive_batch(
        self,
        token: int,
        count: int,
        delay: float,
        on_all_complete: Callable[[], None] | None,
    ) -> None:
        try:
            for index in range(count):
                self._check(token)
                session = self.start_session()
                if session is None:
                    logger.warning("batch ended after %d of %d sessions", index, count)
                    return
                await session
                if index < count - 1:
                    await self._wait(token, delay)
            self._check(token)
        except _Stale:
            return

        logger.info("all %d sessions finished", count)
        if on_all_complete is not None:
            on_all_complete()

    # ── Phases ──────────────────────────────────────────────────────

    async def _browse(self, token: int, state: SessionState) -> None:
        t = self._timings
        await self._wait(token, t.medium)
        await self._wait(token, t.short)
        self._scroll(3)
        await self._wait(token, t.medium - t.short)
        self._scroll(0)
        await self._wait(token, t.long - t.medium)

    async def _add_to_cart(self, token: int, state: SessionState) -> None:
        t = self._timings
        flavors = self._catalog.flavors
        picks = [self._rng.choice(flavors) for _ in range(self._rng.randint(2, 3))]
        state.items_queued = len(picks)

        await self._wait(token, t.short)
        for item in picks:
            self._cart.add(item)
            state.items_added += 1
            await self._wait(token, t.medium)
        await self._wait(token, t.short)

    async def _view_cart(self, token: int, state: SessionState) -> None:
        t = self._timings
        await self._wait(token, t.short)
        self._navigator.show_cart()
        await self._wait(token, t.long)

    async def _checkout(self, token: int, state: SessionState) -> None:
        t = self._timings
        await self._wait(token, t.short)
        self._navigator.show_checkout()
        await self._wait(token, t.long)

        screen = self._screens.current_screen()
        await self._wait(token, t.short)

        if isinstance(screen, FormScreen):
            customer = SampleCustomer.pick(self._rng)
            for field, value in (
                (FormField.NAME, customer.name),
                (FormField.EMAIL, customer.email),
                (FormField.ADDRESS, customer.address),
                (FormField.CARD_NUMBER, customer.card_number),
            ):
                screen.fill(field, value)
                await self._wait(token, t.medium)
            await self._wait(token, t.medium)
            pending = screen.submit()
            if isinstance(pending, asyncio.Future):
                self._track(pending)
        else:
            logger.warning("session %d: no checkout form on screen, skipping order", state.session_id)

        await self._wait(token, t.order_settle)
        await self._wait(token, t.long)
        self._navigator.show_menu()
        await self._wait(token, t.medium)

    # ── Internals ───────────────────────────────────────────────────

    def _scroll(self, position: int) -> None:
        screen = self._screens.current_screen()
        if isinstance(screen, Scrollable):
            screen.scroll_to(position)

    def _check(self, token: int) -> None:
        if token != self._generation:
            raise _Stale

    async def _wait(self, token: int, seconds: float) -> None:
        await asyncio.sleep(seconds)
        self._check(token)

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task[None]:
        task = asyncio.get_running_loop().create_task(coro)
        self._track(task)
        return task

    def _track(self, task: asyncio.Future[Any]) -> None:
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)


__all__ = ("SessionSimulator",)
