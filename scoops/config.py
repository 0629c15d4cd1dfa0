"""
Configuration — thin frozen settings objects.

    from scoops.config import ApiConfig, Routes, SimulatorTimings, Settings

    api = ApiConfig(base_url="https://postman-echo.com", routes=Routes.postman_echo())
    timings = SimulatorTimings().scaled(0.01)
    settings = Settings.from_env()
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from decimal import Decimal

import httpx

# ═══════════════════════════════════════════════════════════════════════════════
# Business Constants
# ═══════════════════════════════════════════════════════════════════════════════

TAX_RATE = Decimal("0.08")
MIN_PAYMENT_TOKEN_LENGTH = 16
API_VERSION = "1.0"
DEFAULT_BASE_URL = "https://postman-echo.com"
DEFAULT_TIMEOUT = 30.0

# ═══════════════════════════════════════════════════════════════════════════════
# Routes — where each API operation goes
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Route:
    """HTTP method + path template + query params always sent."""

    method: str
    path: str
    params: tuple[tuple[str, str], ...] = ()

    def format(self, **values: str) -> tuple[str, str, dict[str, str]]:
        """Fill `{placeholders}` in path and params."""
        path = self.path.format(**values)
        params = {k: v.format(**values) for k, v in self.params}
        return self.method, path, params


@dataclass(frozen=True, slots=True)
class Routes:
    """
    Endpoint layout of the shop API.

    `rest()` is the layout a real backend would expose. `postman_echo()`
    targets https://postman-echo.com, which echoes any request back; the
    client never trusts those bodies anyway.
    """

    menu: Route
    inventory: Route
    order: Route
    promo: Route
    order_status: Route

    @classmethod
    def rest(cls) -> Routes:
        return cls(
            menu=Route("GET", "/api/v1/menu"),
            inventory=Route("GET", "/api/v1/inventory"),
            order=Route("POST", "/api/v1/orders"),
            promo=Route("GET", "/api/v1/promo"),
            order_status=Route("GET", "/api/v1/orders/{order_id}/status"),
        )

    @classmethod
    def postman_echo(cls) -> Routes:
        return cls(
            menu=Route("GET", "/get", (("path", "api/v1/menu"),)),
            inventory=Route("GET", "/get", (("path", "api/v1/inventory"),)),
            order=Route("POST", "/post"),
            promo=Route("GET", "/get", (("path", "api/v1/promo"),)),
            order_status=Route(
                "GET", "/get", (("path", "api/v1/orders/{order_id}/status"),)
            ),
        )


# ═══════════════════════════════════════════════════════════════════════════════
# ApiConfig
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class ApiConfig:
    """
    Client settings.

    - timeout: per-request budget in seconds, enforced by httpx
    - retries: extra attempts after a transport failure or 5xx
    - retry_backoff: first retry delay, doubled on each further attempt
    """

    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    retries: int = 0
    retry_backoff: float = 0.1
    routes: Routes = field(default_factory=Routes.rest)

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError("timeout must be > 0")
        if self.retries < 0:
            raise ValueError("retries must be >= 0")
        if self.retry_backoff < 0:
            raise ValueError("retry_backoff must be >= 0")

    @property
    def attempts(self) -> int:
        return self.retries + 1

    def headers(self) -> dict[str, str]:
        return {"Accept": "application/json", "X-Api-Version": API_VERSION}

    def http_client(self, transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
        """Build the httpx client this config describes."""
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=self.headers(),
            timeout=httpx.Timeout(self.timeout),
            transport=transport,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# SimulatorTimings
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class SimulatorTimings:
    """Artificial delays of a simulated session, in seconds."""

    short: float = 0.5
    medium: float = 1.0
    long: float = 2.0
    order_settle: float = 3.0
    between_sessions: float = 5.0

    def __post_init__(self) -> None:
        for name in ("short", "medium", "long", "order_settle", "between_sessions"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0")

    def scaled(self, factor: float) -> SimulatorTimings:
        """
        Same shape, every delay multiplied by factor.

        Example:
            SimulatorTimings().scaled(0.001)  # millisecond sessions for tests
        """
        if factor < 0:
            raise ValueError("factor must be >= 0")
        return replace(
            self,
            short=self.short * factor,
            medium=self.medium * factor,
            long=self.long * factor,
            order_settle=self.order_settle * factor,
            between_sessions=self.between_sessions * factor,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Settings — environment loading
# ═══════════════════════════════════════════════════════════════════════════════


def _env_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _env_flag(environ: Mapping[str, str], name: str) -> bool:
    return environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True, slots=True)
class Settings:
    api: ApiConfig = field(default_factory=ApiConfig)
    timings: SimulatorTimings = field(default_factory=SimulatorTimings)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """
        Read SCOOPS_* variables.

            SCOOPS_API_BASE_URL   base URL of the shop API
            SCOOPS_API_TIMEOUT    seconds per request
            SCOOPS_API_RETRIES    extra attempts on transport failure
            SCOOPS_ECHO_ROUTES    1 to use the postman-echo layout
            SCOOPS_SIM_SPEED      simulator delay multiplier (0.1 = 10x faster)
            SCOOPS_LOG_LEVEL      logging level name
        """
        env = os.environ if environ is None else environ
        routes = Routes.postman_echo() if _env_flag(env, "SCOOPS_ECHO_ROUTES") else Routes.rest()
        api = ApiConfig(
            base_url=env.get("SCOOPS_API_BASE_URL") or DEFAULT_BASE_URL,
            timeout=_env_float(env, "SCOOPS_API_TIMEOUT", DEFAULT_TIMEOUT),
            retries=_env_int(env, "SCOOPS_API_RETRIES", 0),
            routes=routes,
        )
        speed = _env_float(env, "SCOOPS_SIM_SPEED", 1.0)
        return cls(
            api=api,
            timings=SimulatorTimings().scaled(speed),
            log_level=(env.get("SCOOPS_LOG_LEVEL") or "INFO").upper(),
        )


def configure_logging(level: str | int = "INFO") -> None:
    """Console logging for scripts and examples. Libraries never call this."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )


__all__ = (
    "TAX_RATE",
    "MIN_PAYMENT_TOKEN_LENGTH",
    "API_VERSION",
    "Route",
    "Routes",
    "ApiConfig",
    "SimulatorTimings",
    "Settings",
    "configure_logging",
)
