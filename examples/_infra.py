"""Shared infrastructure for examples."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Callable, Coroutine

import httpx


# Offline stand-in for postman-echo: answers every request with its own echo
class EchoServer:
    def __init__(self, fail_first: int = 0, status: int = 200) -> None:
        self.fail_first = fail_first
        self.status = status
        self.seen = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.seen += 1
        if self.seen <= self.fail_first:
            return httpx.Response(503, text="busy")
        body = {"url": str(request.url), "args": dict(request.url.params)}
        if request.content:
            body["json"] = json.loads(request.content)
        return httpx.Response(self.status, json=body)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


# Helpers
def banner(title: str) -> None:
    print(f"\n{'─' * 50}\n{title}\n{'─' * 50}")


def run(main: Callable[[], Coroutine[object, object, None]]) -> None:
    asyncio.run(main())
