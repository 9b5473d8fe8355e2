from __future__ import annotations

from typing import Optional


class BitexError(Exception):
    """Base class for every failure raised by the exchange client."""


class TransportError(BitexError):
    """Connection failure, timeout or non-2xx HTTP status."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class ParseError(BitexError):
    """Response body is not JSON or does not have the expected shape."""


class NotFoundError(BitexError):
    """Well-formed response that lacks the requested entity."""
