# sdk/errors.py
"""Error kinds for catalog fetches and the steps that produce them."""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

import httpx
from pydantic import ValidationError

from .models import Product, decode_products

logger = logging.getLogger(__name__)

# how much of a bad body ends up in the log line
_LOGGED_BODY_LIMIT = 500


class FetchErrorKind(str, Enum):
    TIMEOUT = "timeout"
    NETWORK = "network"
    MALFORMED = "malformed"
    EMPTY_RESPONSE = "empty_response"
    CANCELLED = "cancelled"


_MESSAGES = {
    FetchErrorKind.TIMEOUT: "The product service did not respond in time. Please try again.",
    FetchErrorKind.NETWORK: "Could not reach the product service.",
    FetchErrorKind.MALFORMED: "The product service returned data in an unexpected format.",
    FetchErrorKind.EMPTY_RESPONSE: "The product service returned no data.",
    FetchErrorKind.CANCELLED: "The request was replaced by a newer one.",
}


class FetchError(Exception):
    """A classified failure of one product fetch."""

    def __init__(
        self,
        kind: FetchErrorKind,
        status_code: Optional[int] = None,
        raw_body: Optional[str] = None,
    ):
        self.kind = kind
        self.status_code = status_code
        self.raw_body = raw_body
        super().__init__(self.message)

    @property
    def message(self) -> str:
        if self.kind is FetchErrorKind.NETWORK and self.status_code is not None:
            return f"The product service answered with HTTP {self.status_code}."
        return _MESSAGES[self.kind]

    def __repr__(self) -> str:
        return f"FetchError(kind={self.kind.value!r}, status_code={self.status_code!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FetchError):
            return NotImplemented
        return (self.kind, self.status_code, self.raw_body) == (
            other.kind,
            other.status_code,
            other.raw_body,
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.status_code, self.raw_body))


@dataclass(frozen=True)
class FetchResult:
    """Outcome of `CatalogClient.get_products`: products or a FetchError."""

    products: Optional[Tuple[Product, ...]] = None
    error: Optional[FetchError] = None
    from_cache: bool = False

    @classmethod
    def success(cls, products: Tuple[Product, ...], from_cache: bool = False) -> "FetchResult":
        return cls(products=products, from_cache=from_cache)

    @classmethod
    def failure(cls, error: FetchError) -> "FetchResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Tuple[Product, ...]:
        if self.error is not None:
            raise self.error
        return self.products


def classify_exception(exc: BaseException) -> FetchError:
    """Map a transport-level exception onto a FetchError."""
    # httpx.TimeoutException is an HTTPError too, so check it first
    if isinstance(exc, (asyncio.TimeoutError, httpx.TimeoutException)):
        return FetchError(FetchErrorKind.TIMEOUT)
    if isinstance(exc, asyncio.CancelledError):
        return FetchError(FetchErrorKind.CANCELLED)
    if isinstance(exc, httpx.HTTPStatusError):
        return FetchError(FetchErrorKind.NETWORK, status_code=exc.response.status_code)
    if isinstance(exc, httpx.HTTPError):
        return FetchError(FetchErrorKind.NETWORK)
    raise TypeError(f"cannot classify {type(exc).__name__}") from exc


def classify_status(status_code: int) -> Optional[FetchError]:
    if 200 <= status_code < 300:
        return None
    return FetchError(FetchErrorKind.NETWORK, status_code=status_code)


def classify_body(raw_body: str) -> Union[Tuple[Product, ...], FetchError]:
    """Decode a response body, or say why it could not be used."""
    try:
        products = decode_products(raw_body)
    except ValidationError as exc:
        logger.warning(
            "Malformed product payload (%d errors): %s",
            exc.error_count(),
            raw_body[:_LOGGED_BODY_LIMIT],
        )
        return FetchError(FetchErrorKind.MALFORMED, raw_body=raw_body)
    if products is None:
        return FetchError(FetchErrorKind.EMPTY_RESPONSE)
    return products


__all__ = [
    "FetchErrorKind",
    "FetchError",
    "FetchResult",
    "classify_exception",
    "classify_status",
    "classify_body",
]
