"""
Public entry points: fetch an exposition, map it, flatten it.

``parse`` is the blocking call most consumers want. Each call builds its
own fetcher, parser and result objects, so concurrent calls against
different URLs share nothing.
"""

from __future__ import annotations

import threading

import structlog

from promflat.clients.fetcher import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, ExpositionFetcher
from promflat.exposition.flattener import flatten
from promflat.exposition.mapper import map_families
from promflat.exposition.models import MetricFamily
from promflat.exposition.tokenizer import TextParser

logger = structlog.get_logger()


def fetch_metric_families(
    url: str,
    parser: TextParser | None = None,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    user_agent: str = DEFAULT_USER_AGENT,
    cancel_event: threading.Event | None = None,
) -> list[MetricFamily]:
    """Fetch ``url`` and return its metric families in document order.

    Raises:
        NetworkError: transport failure, non-200 status or cancellation.
        ParseError: the body is not valid exposition text.
        UnknownTypeError: a family declares an unsupported type.
    """
    parser = parser or TextParser()
    fetcher = ExpositionFetcher(timeout=timeout, user_agent=user_agent)
    body = fetcher.fetch(url, cancel_event=cancel_event)
    families = map_families(parser.text_to_metric_families(body))
    logger.info("metric_families_mapped", url=url, families=len(families))
    return families


def parse(
    url: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    user_agent: str = DEFAULT_USER_AGENT,
    cancel_event: threading.Event | None = None,
) -> dict[str, list[str]]:
    """Receive a Prometheus metrics URL and return the flattened mapping.

    Raises:
        NetworkError, ParseError, UnknownTypeError: see ``fetch_metric_families``.
        EmptyResultError: nothing in the document produced an entry.
    """
    families = fetch_metric_families(
        url,
        TextParser(),
        timeout=timeout,
        user_agent=user_agent,
        cancel_event=cancel_event,
    )
    return flatten(families)


async def aparse(
    url: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    user_agent: str = DEFAULT_USER_AGENT,
    deadline: float | None = None,
) -> dict[str, list[str]]:
    """Async variant of ``parse`` with an overall ``deadline`` in seconds."""
    fetcher = ExpositionFetcher(timeout=timeout, user_agent=user_agent)
    body = await fetcher.afetch(url, deadline=deadline)
    families = map_families(TextParser().text_to_metric_families(body))
    logger.info("metric_families_mapped", url=url, families=len(families))
    return flatten(families)
