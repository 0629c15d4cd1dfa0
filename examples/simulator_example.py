"""
Simulator — three scripted customers, back to back, at 20x speed.

Level 5: scoops.session
Level 4: scoops.shell (headless screens)
"""

import asyncio
import random

from scoops import Settings, Shop
from scoops.config import ApiConfig, SimulatorTimings, configure_logging
from examples._infra import EchoServer, banner, run


async def main() -> None:
    configure_logging("INFO")
    settings = Settings(
        api=ApiConfig(base_url="https://echo.local"),
        timings=SimulatorTimings().scaled(0.05),
    )

    async with Shop(settings, transport=EchoServer().transport(), rng=random.Random(2024)) as shop:
        banner("Sessions")
        finished = asyncio.Event()
        shop.simulator.start_multiple_sessions(3, on_all_complete=finished.set)

        await asyncio.sleep(0.01)
        refused = shop.simulator.start_session() is None
        print(f"  second start while running refused: {refused}")

        await finished.wait()

        banner("Results")
        for notice in shop.shell.notices:
            print(f"  {notice}")
        print(f"  screens: {' → '.join(shop.shell.history)}")
        print(f"  phases:  {dict((p.value, n) for p, n in shop.simulator.phase_entries.items())}")


if __name__ == "__main__":
    run(main)
