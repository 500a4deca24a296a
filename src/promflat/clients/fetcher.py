from __future__ import annotations

import asyncio
import threading

import httpx
import structlog

from promflat import __version__
from promflat.core.errors import NetworkError, NetworkErrorReason

logger = structlog.get_logger()

DEFAULT_TIMEOUT = 10.0
DEFAULT_USER_AGENT = f"promflat/{__version__}"
EXPOSITION_ACCEPT = "text/plain;version=0.0.4;q=1,*/*;q=0.1"


class ExpositionFetcher:
    """Retrieves a raw exposition document with a single GET.

    Redirects are followed; only the final response must be 200.

    No retries are performed; a failed fetch raises ``NetworkError`` and
    the caller decides whether to try again. Each call opens and closes
    its own client, so one fetcher may be used from several threads.
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._timeout = timeout
        self._user_agent = user_agent

    def _headers(self) -> dict[str, str]:
        return {"Accept": EXPOSITION_ACCEPT, "User-Agent": self._user_agent}

    def fetch(self, url: str, *, cancel_event: threading.Event | None = None) -> bytes:
        """Fetch ``url`` and return the full response body.

        ``cancel_event`` is checked before connecting and between body
        chunks; once set, the request is abandoned with a ``cancelled``
        NetworkError.
        """
        logger.debug("exposition_fetch_started", url=url)
        _check_cancelled(url, cancel_event)

        chunks: list[bytes] = []
        try:
            with httpx.Client(
                timeout=self._timeout, headers=self._headers(), follow_redirects=True
            ) as client:
                with client.stream("GET", url) as response:
                    _check_status(url, response)
                    for chunk in response.iter_bytes():
                        _check_cancelled(url, cancel_event)
                        chunks.append(chunk)
        except (httpx.TransportError, httpx.TooManyRedirects) as exc:
            raise _transport_error(url, exc) from exc

        body = b"".join(chunks)
        logger.debug("exposition_fetched", url=url, bytes=len(body))
        return body

    async def afetch(self, url: str, *, deadline: float | None = None) -> bytes:
        """Async variant of ``fetch``.

        ``deadline`` bounds the whole call in seconds; exceeding it raises
        a ``cancelled`` NetworkError.
        """
        try:
            return await asyncio.wait_for(self._afetch(url), timeout=deadline)
        except asyncio.TimeoutError as exc:
            logger.warning("exposition_fetch_failed", url=url, reason="cancelled", deadline=deadline)
            raise NetworkError(url, NetworkErrorReason.CANCELLED) from exc

    async def _afetch(self, url: str) -> bytes:
        logger.debug("exposition_fetch_started", url=url)
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, headers=self._headers(), follow_redirects=True
            ) as client:
                response = await client.get(url)
                _check_status(url, response)
                body = response.content
        except (httpx.TransportError, httpx.TooManyRedirects) as exc:
            raise _transport_error(url, exc) from exc

        logger.debug("exposition_fetched", url=url, bytes=len(body))
        return body


def _check_status(url: str, response: httpx.Response) -> None:
    if response.status_code != httpx.codes.OK:
        logger.warning(
            "exposition_fetch_failed",
            url=url,
            reason="status",
            status=response.status_code,
        )
        raise NetworkError(url, NetworkErrorReason.STATUS, code=response.status_code)


def _check_cancelled(url: str, cancel_event: threading.Event | None) -> None:
    if cancel_event is not None and cancel_event.is_set():
        logger.warning("exposition_fetch_failed", url=url, reason="cancelled")
        raise NetworkError(url, NetworkErrorReason.CANCELLED)


def _transport_error(url: str, exc: httpx.RequestError) -> NetworkError:
    logger.warning("exposition_fetch_failed", url=url, reason="transport", error=str(exc))
    return NetworkError(
        url,
        NetworkErrorReason.TRANSPORT,
        message=f"transport failure fetching {url}: {exc}",
    )
