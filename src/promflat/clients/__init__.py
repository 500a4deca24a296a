"""HTTP clients."""

from promflat.clients.fetcher import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, ExpositionFetcher

__all__ = ["ExpositionFetcher", "DEFAULT_TIMEOUT", "DEFAULT_USER_AGENT"]
