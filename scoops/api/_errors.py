"""
API errors.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class NetworkError(Exception):
    """
    Transport failure or non-2xx response.

    Delivered as `Error(NetworkError)`, never raised across an await
    boundary by the client.
    """

    message: str
    status: int | None = None

    def __str__(self) -> str:
        return self.message

    @property
    def retryable(self) -> bool:
        """Transport failures and 5xx are worth another attempt; 4xx is not."""
        return self.status is None or self.status >= 500

    @classmethod
    def from_exception(cls, exc: Exception) -> NetworkError:
        if isinstance(exc, NetworkError):
            return exc
        return cls(str(exc) or type(exc).__name__)


__all__ = ("NetworkError",)
