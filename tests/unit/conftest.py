"""
Unit Test Fixtures.

The shortener service is never contacted: every HTTP exchange goes through
an httpx.MockTransport backed by StubServer.
"""

import asyncio
from collections.abc import Callable
from urllib.parse import parse_qs

import httpx
import pytest

from shortener.cli.client import ShortenerClient

TEST_BASE_URL = "http://test:8080"


# =============================================================================
# Stub shortener service
# =============================================================================


class StubServer:
    """
    Scripted stand-in for the shortener service.

    Routes map "METHOD /path" to (status_code, body). Unrouted requests get
    a 500. Every request is recorded for assertions.

    Usage:
        server = StubServer({"POST /api/add": (200, "42 abc")})
        client = ShortenerClient(base_url=TEST_BASE_URL, transport=server.transport)
    """

    def __init__(
        self,
        routes: dict[str, tuple[int, str]] | None = None,
        offline: bool = False,
        delay: float = 0.0,
    ) -> None:
        self.routes = routes or {}
        self.offline = offline
        self.delay = delay
        self.requests: list[httpx.Request] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.transport = httpx.MockTransport(self._handle)

    async def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.offline:
            raise httpx.ConnectError("Connection refused", request=request)

        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            status_code, body = self.routes.get(
                f"{request.method} {request.url.path}", (500, "")
            )
            return httpx.Response(status_code, text=body)
        finally:
            self.in_flight -= 1

    @property
    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]

    def form(self, index: int = -1) -> dict[str, list[str]]:
        """Decoded form body of a recorded request."""
        return parse_qs(self.requests[index].content.decode())


@pytest.fixture
def stub_server() -> Callable[..., StubServer]:
    """Factory for StubServer instances."""
    return StubServer


@pytest.fixture
def make_client() -> Callable[[StubServer], ShortenerClient]:
    """Build a ShortenerClient talking to a StubServer."""

    def _make(server: StubServer) -> ShortenerClient:
        return ShortenerClient(
            base_url=TEST_BASE_URL,
            timeout=5.0,
            transport=server.transport,
        )

    return _make
