"""
Session phases and live session state.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SessionPhase(Enum):
    BROWSE = "browse"
    ADD_TO_CART = "add_to_cart"
    VIEW_CART = "view_cart"
    CHECKOUT = "checkout"


PHASE_ORDER = (
    SessionPhase.BROWSE,
    SessionPhase.ADD_TO_CART,
    SessionPhase.VIEW_CART,
    SessionPhase.CHECKOUT,
)


@dataclass(slots=True)
class SessionState:
    """Counters of the running session. Dropped on completion or stop."""

    session_id: int
    phase: SessionPhase | None = None
    items_queued: int = 0
    items_added: int = 0


__all__ = ("SessionPhase", "PHASE_ORDER", "SessionState")
