# tests/conftest.py
from typing import Callable

import httpx
import pytest

from sdk.catalog import CatalogClient
from sdk.config import ClientConfig


class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def make_client(fake_clock: FakeClock) -> Callable[..., CatalogClient]:
    """
    Build a CatalogClient whose transport is an httpx.MockTransport.

    The handler may be sync or async. Extra keyword arguments go to
    ClientConfig.
    """

    def _make(handler, **config_kwargs) -> CatalogClient:
        config_kwargs.setdefault("base_url", "http://catalog.test")
        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return CatalogClient(ClientConfig(**config_kwargs), http_client=http, clock=fake_clock)

    return _make
