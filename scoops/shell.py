"""
Headless shell — in-memory screens for running the shop without a UI.

Implements the simulator's host seams (`Navigator`, `ScreenProvider`) and
the checkout listener, so a whole session can run in a test or a script:

    shell = HeadlessShell(cart, client)
    shell.show_cart()
    await shell.cart_screen().proceed()      # gate, then checkout screen
    shell.current_screen().fill(FormField.NAME, "Ann")
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

from kungfu import Error, Ok, Result

from scoops.api import ApiClient, InventoryLevels
from scoops.cart import CartSnapshot, CartStore, badge_label, format_summary
from scoops.catalog import FlavorItem
from scoops.checkout import (
    CartGate,
    CheckoutError,
    CheckoutForm,
    CheckoutListener,
    CheckoutOrchestrator,
    EmptyCart,
    FormField,
    GateDecision,
    OrderConfirmation,
    SubmissionFailed,
    ValidationError,
)

logger = logging.getLogger(__name__)

# ═══════════════════════════════════════════════════════════════════════════════
# Screens
# ═══════════════════════════════════════════════════════════════════════════════


class MenuScreen:
    name = "menu"

    def __init__(self, flavors: tuple[FlavorItem, ...]) -> None:
        self.flavors = flavors
        self.stock: InventoryLevels = {}
        self.scroll_position = 0

    def scroll_to(self, position: int) -> None:
        self.scroll_position = position

    def show_flavors(self, result: Result[tuple[FlavorItem, ...], object]) -> None:
        match result:
            case Ok(flavors):
                self.flavors = flavors
            case Error(e):
                logger.warning("menu load failed: %s", e)


class CartScreen:
    name = "cart"

    def __init__(self, shell: HeadlessShell) -> None:
        self._shell = shell
        self.scroll_position = 0
        self.message: str | None = None

    @property
    def summary(self) -> str:
        return format_summary(self._shell.cart.snapshot())

    def scroll_to(self, position: int) -> None:
        self.scroll_position = position

    def increment(self, item_id: int) -> None:
        cart = self._shell.cart
        cart.set_quantity(item_id, cart.snapshot().quantity_of(item_id) + 1)

    def decrement(self, item_id: int) -> None:
        cart = self._shell.cart
        cart.set_quantity(item_id, cart.snapshot().quantity_of(item_id) - 1)

    async def proceed(self) -> Result[GateDecision, EmptyCart]:
        """Stock check, then on to checkout unless the cart is empty."""
        result = await self._shell.gate.proceed()
        match result:
            case Ok(_):
                self.message = None
                self._shell.show_checkout()
            case Error(e):
                self.message = "Your cart is empty"
                logger.info("proceed refused: %s", e)
        return result


class CheckoutScreen:
    name = "checkout"

    def __init__(self, shell: HeadlessShell) -> None:
        self._shell = shell
        self.form = CheckoutForm()
        self.error: str | None = None
        self.last_submission: asyncio.Task[Result[OrderConfirmation, CheckoutError]] | None = None

    @property
    def summary(self) -> str:
        return format_summary(self._shell.cart.snapshot())

    @property
    def submit_enabled(self) -> bool:
        return self._shell.orchestrator.can_submit

    def fill(self, field: FormField, value: str) -> None:
        self.form.fill(field, value)

    def submit(self) -> asyncio.Task[Result[OrderConfirmation, CheckoutError]] | None:
        """
        Start an order attempt in the background, like tapping "Place Order".

        Returns the attempt's task, or None when a submission is in flight.
        """
        if not self.submit_enabled:
            logger.info("place order tapped while submitting, ignored")
            return None
        self.error = None
        self.last_submission = self._shell.spawn(self._shell.orchestrator.submit(self.form))
        return self.last_submission


type Screen = MenuScreen | CartScreen | CheckoutScreen

# ═══════════════════════════════════════════════════════════════════════════════
# HeadlessShell
# ═══════════════════════════════════════════════════════════════════════════════


class HeadlessShell(CheckoutListener):
    """
    Navigation stack of one.

    `history` records every screen shown; `notices` every message a real
    UI would toast.
    """

    def __init__(self, cart: CartStore, api: ApiClient) -> None:
        self.cart = cart
        self.api = api
        self.gate = CartGate(cart, api)
        self.orchestrator = CheckoutOrchestrator(cart, api, listener=self)
        self.badge = badge_label(0)
        self.history: list[str] = []
        self.notices: list[str] = []
        self.confirmation: OrderConfirmation | None = None
        self.menu_load: asyncio.Task[None] | None = None
        self._tasks: set[asyncio.Task[Any]] = set()
        self._screen: Screen = MenuScreen(api.catalog.flavors)
        cart.subscribe(self._on_cart)

    # ── Navigator ───────────────────────────────────────────────────

    def show_menu(self) -> None:
        screen = MenuScreen(self.api.catalog.flavors)
        self._show(screen)
        self.menu_load = self.spawn(self._load_menu(screen))

    def show_cart(self) -> None:
        self._show(CartScreen(self))

    def show_checkout(self) -> None:
        self._show(CheckoutScreen(self))

    # ── ScreenProvider ──────────────────────────────────────────────

    def current_screen(self) -> Screen:
        return self._screen

    def cart_screen(self) -> CartScreen:
        if not isinstance(self._screen, CartScreen):
            raise LookupError(f"current screen is {self._screen.name}, not cart")
        return self._screen

    # ── CheckoutListener ────────────────────────────────────────────

    def on_invalid(self, error: ValidationError) -> None:
        if isinstance(self._screen, CheckoutScreen):
            self._screen.error = str(error)

    def on_succeeded(self, confirmation: OrderConfirmation) -> None:
        self.confirmation = confirmation
        self.notices.append(
            f"Order {confirmation.order_id} placed! Estimated delivery: {confirmation.estimated_delivery}"
        )

    def on_failed(self, failure: SubmissionFailed) -> None:
        if isinstance(self._screen, CheckoutScreen):
            self._screen.error = failure.prompt
        self.notices.append(failure.prompt)

    # ── Internals ───────────────────────────────────────────────────

    def spawn[T](self, coro: Coroutine[Any, Any, T]) -> asyncio.Task[T]:
        """Run `coro` on the loop, holding a reference until it finishes."""
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _load_menu(self, screen: MenuScreen) -> None:
        screen.show_flavors(await self.api.fetch_menu_or_local())
        match await self.api.check_inventory(f.id for f in screen.flavors):
            case Ok(levels):
                screen.stock = levels
                logger.debug("inventory check: %s", levels)
            case Error(e):
                logger.warning("inventory check failed: %s", e)

    def _show(self, screen: Screen) -> None:
        self._screen = screen
        self.history.append(screen.name)
        logger.debug("showing %s", screen.name)

    def _on_cart(self, snapshot: CartSnapshot) -> None:
        self.badge = badge_label(snapshot.item_count)


__all__ = (
    "MenuScreen",
    "CartScreen",
    "CheckoutScreen",
    "Screen",
    "HeadlessShell",
)
