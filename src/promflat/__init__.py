"""Fetch a Prometheus text exposition and flatten it into a label/value mapping."""

__version__ = "0.1.0"

from promflat.core.errors import (  # noqa: E402
    EmptyResultError,
    NetworkError,
    NetworkErrorReason,
    ParseError,
    PromflatError,
    UnknownTypeError,
)
from promflat.exposition.models import MetricFamily, MetricType  # noqa: E402
from promflat.parser import aparse, fetch_metric_families, parse  # noqa: E402

__all__ = [
    "__version__",
    "parse",
    "aparse",
    "fetch_metric_families",
    "MetricFamily",
    "MetricType",
    "PromflatError",
    "NetworkError",
    "NetworkErrorReason",
    "ParseError",
    "UnknownTypeError",
    "EmptyResultError",
]
