"""
Host seams — what the simulator needs from whatever shows the screens.
"""

from __future__ import annotations

import asyncio
from typing import Protocol, runtime_checkable

from scoops.checkout import FormField


class Navigator(Protocol):
    def show_menu(self) -> None: ...
    def show_cart(self) -> None: ...
    def show_checkout(self) -> None: ...


class ScreenProvider(Protocol):
    def current_screen(self) -> object | None:
        """The foreground screen, or None when nothing is shown."""
        ...


@runtime_checkable
class Scrollable(Protocol):
    def scroll_to(self, position: int) -> None: ...


@runtime_checkable
class FormScreen(Protocol):
    def fill(self, field: FormField, value: str) -> None: ...
    def submit(self) -> asyncio.Future[object] | None:
        """Place the order. A returned task is cancelled if the session stops."""
        ...


__all__ = ("Navigator", "ScreenProvider", "Scrollable", "FormScreen")
