# sdk/catalog.py
import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Tuple

import httpx

from .cache import CacheEntry, CacheStore
from .config import ClientConfig
from .errors import (
    FetchError,
    FetchErrorKind,
    FetchResult,
    classify_body,
    classify_exception,
    classify_status,
)
from .models import Product

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InFlightRequest:
    """One fetch attempt. Later generations supersede earlier ones."""

    generation: int
    task: "asyncio.Task[FetchResult]"

    @property
    def pending(self) -> bool:
        return not self.task.done()


@dataclass(frozen=True)
class CatalogStatus:
    has_data: bool
    cache_valid: bool
    cache_age: Optional[float]
    fetched_on: Optional[datetime]
    in_flight: bool
    last_error: Optional[FetchError]


class CatalogClient:
    """
    Fetches the product list and keeps the last good copy around.

    - Reads inside `cache_duration` of a successful fetch are served from the
      store with no request.
    - At most one fetch is in flight. Starting a new one cancels the old one,
      and anyone still waiting on the old one gets the new one's outcome.
    - Failures come back as FetchResult errors and never touch the store.

    A client is bound to the event loop it first fetches on.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        store: Optional[CacheStore] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config = config or ClientConfig()
        self.store = store if store is not None else CacheStore()
        self._clock = clock
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=self.config.fetch_timeout)
        self._url = self.config.base_url.rstrip("/") + self.config.resource_path
        self._generation = 0
        self._latest: Optional[InFlightRequest] = None
        self._last_error: Optional[FetchError] = None

    async def __aenter__(self) -> "CatalogClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    @property
    def in_flight(self) -> Optional[InFlightRequest]:
        request = self._latest
        if request is not None and request.pending:
            return request
        return None

    async def get_products(self, force_refresh: bool = False) -> FetchResult:
        if not force_refresh and self.store.is_valid(self._clock(), self.config.cache_duration):
            entry = self.store.read()
            logger.debug("Serving %d cached products", len(entry.data))
            return FetchResult.success(entry.data, from_cache=True)

        request = self._start_fetch()
        while True:
            result = await self._settle(request)
            if result.ok or result.error.kind is not FetchErrorKind.CANCELLED:
                return result
            latest = self._latest
            if latest is not None and latest.generation > request.generation:
                logger.debug("Fetch #%d superseded by #%d", request.generation, latest.generation)
                request = latest
                continue
            # cancelled outright, nothing newer to wait for
            return self._failed(request.generation, FetchError(FetchErrorKind.TIMEOUT))

    def cached_products(self) -> Optional[Tuple[Product, ...]]:
        """Last good product list, stale or not."""
        entry = self.store.read()
        return entry.data if entry is not None else None

    def cancel_pending(self) -> bool:
        request = self.in_flight
        if request is None:
            return False
        request.task.cancel()
        return True

    def status(self) -> CatalogStatus:
        now = self._clock()
        entry = self.store.read()
        return CatalogStatus(
            has_data=entry is not None,
            cache_valid=self.store.is_valid(now, self.config.cache_duration),
            cache_age=self.store.age(now),
            fetched_on=entry.fetched_on if entry is not None else None,
            in_flight=self.in_flight is not None,
            last_error=self._last_error,
        )

    async def aclose(self) -> None:
        request = self.in_flight
        if request is not None:
            request.task.cancel()
            await self._settle(request)
        if self._owns_http:
            await self._http.aclose()

    def _start_fetch(self) -> InFlightRequest:
        previous = self.in_flight
        if previous is not None:
            previous.task.cancel()
        self._generation += 1
        request = InFlightRequest(
            generation=self._generation,
            task=asyncio.create_task(self._fetch(self._generation)),
        )
        self._latest = request
        return request

    async def _settle(self, request: InFlightRequest) -> FetchResult:
        # shield: a waiter being cancelled must not cancel a fetch others share
        try:
            return await asyncio.shield(request.task)
        except asyncio.CancelledError as exc:
            current = asyncio.current_task()
            if not request.task.cancelled() or (current is not None and current.cancelling()):
                raise
            # cancelled before it reached the transport call
            return FetchResult.failure(classify_exception(exc))

    async def _fetch(self, generation: int) -> FetchResult:
        try:
            response = await asyncio.wait_for(
                self._http.get(self._url), timeout=self.config.fetch_timeout
            )
        except asyncio.CancelledError as exc:
            return FetchResult.failure(classify_exception(exc))
        except (asyncio.TimeoutError, httpx.HTTPError) as exc:
            return self._failed(generation, classify_exception(exc))

        error = classify_status(response.status_code)
        if error is not None:
            return self._failed(generation, error)

        outcome = classify_body(response.text)
        if isinstance(outcome, FetchError):
            return self._failed(generation, outcome)

        self.store.write(CacheEntry(data=outcome, fetched_at=self._clock()))
        self._last_error = None
        logger.info("Fetched %d products (fetch #%d)", len(outcome), generation)
        return FetchResult.success(outcome)

    def _failed(self, generation: int, error: FetchError) -> FetchResult:
        self._last_error = error
        logger.warning("Fetch #%d failed: %s", generation, error.message)
        return FetchResult.failure(error)


__all__ = ["CatalogClient", "CatalogStatus", "InFlightRequest"]
