"""
HTTP Client for the shortener service.

One ShortenerClient owns one httpx.AsyncClient. All operations go through
that session under a single lock, so at most one request is in flight.

Each operation makes exactly one request and returns an Outcome:
    add(url)                -> Success[ShortLink] | Rejected(TOO_SHORT) | Unreachable
    add_with_id(url, strid) -> Success[ShortLink] | Rejected(STRID_NOT_UNIQUE) | Unreachable
    stats(strid)            -> Success[LinkStats] | Rejected(NOT_FOUND) | Unreachable

A response body missing an expected field raises ProtocolViolationError.
"""

import asyncio
from collections.abc import Callable
from typing import Any, TypeVar

import httpx

from shortener.cli.outcomes import Outcome, Rejected, RejectionReason, Success, Unreachable
from shortener.cli.strid import is_valid_strid
from shortener.core.config import get_server_base_url
from shortener.core.exceptions import (
    ConfigurationError,
    InvalidStridError,
    ProtocolViolationError,
)
from shortener.core.logging import get_logger, log_with_source
from shortener.schemas.link import LinkStats, LinkSubmission, ShortLink

logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_BASE_URL = "http://localhost:8080"
DEFAULT_TIMEOUT = 30.0

ADD_PATH = "/api/add"
STATS_PATH = "/api/stats"


def _get_client_config(base_url: str | None = None) -> tuple[str, float]:
    """
    Load base URL and timeout from application.yaml.

    Outside a project checkout the defaults are used. An invalid
    application.yaml is only tolerated when the caller supplies base_url.
    """
    try:
        return get_server_base_url()
    except (RuntimeError, FileNotFoundError):
        return base_url or DEFAULT_BASE_URL, DEFAULT_TIMEOUT
    except ConfigurationError:
        if base_url is None:
            raise
        return base_url, DEFAULT_TIMEOUT


class ShortenerClient:
    """
    Client for the shortener service API.

    Usage:
        async with ShortenerClient() as client:
            match await client.add("http://example.com"):
                case Success(link):
                    ...
                case Rejected(reason):
                    ...
                case Unreachable():
                    ...
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the shortener client.

        Args:
            base_url: Service base URL. If None, reads from config/settings/application.yaml.
            timeout: Request timeout in seconds. If None, reads from config/settings/application.yaml.
            transport: Optional httpx transport, e.g. httpx.MockTransport in tests.
        """
        if base_url is None or timeout is None:
            config_base_url, config_timeout = _get_client_config(base_url)
        else:
            config_base_url, config_timeout = base_url, timeout

        self.base_url = (base_url or config_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else config_timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._lock = asyncio.Lock()

    async def __aenter__(self) -> "ShortenerClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP session."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
                follow_redirects=True,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def _request(
        self,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> httpx.Response | None:
        """
        Send one request through the shared session.

        Returns:
            The response, or None if the transport failed to complete the exchange.
        """
        async with self._lock:
            client = self._get_client()

            log_with_source(logger, "cli", "debug", "API request", method=method, path=path)

            try:
                response = await client.request(method, path, **kwargs)
            except httpx.RequestError as e:
                log_with_source(
                    logger,
                    "cli",
                    "info",
                    "Shortener service unreachable",
                    method=method,
                    path=path,
                    error=str(e) or type(e).__name__,
                )
                return None

            log_with_source(
                logger,
                "cli",
                "debug",
                "API response",
                method=method,
                path=path,
                status_code=response.status_code,
            )
            return response

    def _parse(self, parser: Callable[[str], T], response: httpx.Response) -> T:
        """Parse a success body, logging and re-raising protocol violations."""
        try:
            return parser(response.text)
        except ProtocolViolationError as e:
            log_with_source(
                logger,
                "cli",
                "error",
                "Malformed response from shortener service",
                path=response.request.url.path,
                status_code=response.status_code,
                error=e.message,
            )
            raise

    async def add(self, url: str) -> Outcome[ShortLink]:
        """
        Shorten url, letting the service choose the string ID.

        A 414 answer means the link is too short to be worth shortening.
        """
        form = LinkSubmission(link=url).model_dump()
        response = await self._request("POST", ADD_PATH, data=form)
        if response is None:
            return Unreachable(f"{self.base_url} unreachable")
        if response.status_code == httpx.codes.REQUEST_URI_TOO_LONG:
            return Rejected(RejectionReason.TOO_SHORT)
        return Success(self._parse(ShortLink.from_body, response))

    async def add_with_id(self, url: str, strid: str) -> Outcome[ShortLink]:
        """
        Shorten url under the caller-chosen string ID.

        Raises:
            InvalidStridError: If strid contains characters the service rejects.
                No request is made in that case.
        """
        if not is_valid_strid(strid):
            raise InvalidStridError(strid)

        form = LinkSubmission(link=url).model_dump()
        response = await self._request("POST", f"{ADD_PATH}/{strid}", data=form)
        if response is None:
            return Unreachable(f"{self.base_url} unreachable")
        if response.status_code == httpx.codes.CONFLICT:
            return Rejected(RejectionReason.STRID_NOT_UNIQUE)
        return Success(self._parse(ShortLink.from_body, response))

    async def stats(self, strid: str) -> Outcome[LinkStats]:
        """
        Get click count and destination of the link with the given string ID.

        Raises:
            InvalidStridError: If strid contains characters the service rejects.
        """
        if not is_valid_strid(strid):
            raise InvalidStridError(strid)

        response = await self._request("GET", f"{STATS_PATH}/{strid}")
        if response is None:
            return Unreachable(f"{self.base_url} unreachable")
        if response.status_code == httpx.codes.NOT_FOUND:
            return Rejected(RejectionReason.NOT_FOUND)
        return Success(self._parse(LinkStats.from_body, response))

