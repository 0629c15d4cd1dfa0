"""
Session — the scripted customer.

    from scoops import session as S

    sim = S.SessionSimulator(catalog, cart, shell, shell, timings=timings)
    await sim.start_multiple_sessions(3, on_all_complete=done)
"""

from __future__ import annotations

from scoops.checkout import FormField
from scoops.session._screen import Navigator, ScreenProvider, Scrollable, FormScreen
from scoops.session._phases import SessionPhase, PHASE_ORDER, SessionState
from scoops.session._samples import (
    SAMPLE_NAMES,
    SAMPLE_EMAILS,
    SAMPLE_ADDRESSES,
    TEST_CARD_NUMBER,
    SampleCustomer,
)
from scoops.session._simulator import SessionSimulator

__all__ = (
    # Host seams
    "FormField",
    "Navigator",
    "ScreenProvider",
    "Scrollable",
    "FormScreen",
    # Phases
    "SessionPhase",
    "PHASE_ORDER",
    "SessionState",
    # Samples
    "SAMPLE_NAMES",
    "SAMPLE_EMAILS",
    "SAMPLE_ADDRESSES",
    "TEST_CARD_NUMBER",
    "SampleCustomer",
    # Simulator
    "SessionSimulator",
)
