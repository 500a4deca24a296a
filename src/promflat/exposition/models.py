"""
Data models for the exposition pipeline.

Two layers live here:

* ``Raw*`` records mirror what the tokenizer produces: one record per metric
  family carrying a declared type tag and, for each series, the label pairs
  plus a type-specific payload (scalar, summary or histogram).
* ``MetricFamily`` and the ``MetricValue`` variants are the normalized,
  string-valued model built from those records by the mapper.

All of them are frozen; a scrape builds fresh instances and never mutates
them afterwards.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class MetricType(str, Enum):
    """Prometheus metric family types."""

    COUNTER = "counter"
    GAUGE = "gauge"
    UNTYPED = "untyped"
    SUMMARY = "summary"
    HISTOGRAM = "histogram"


# Raw type tags as reported by the tokenizer. prometheus_client reports
# ``# TYPE x untyped`` as "unknown".
RAW_TYPE_TAGS: dict[str, MetricType] = {
    "counter": MetricType.COUNTER,
    "gauge": MetricType.GAUGE,
    "untyped": MetricType.UNTYPED,
    "unknown": MetricType.UNTYPED,
    "summary": MetricType.SUMMARY,
    "histogram": MetricType.HISTOGRAM,
}


@dataclass(frozen=True)
class LabelPair:
    name: str
    value: str


@dataclass(frozen=True)
class RawQuantile:
    quantile: float
    value: float


@dataclass(frozen=True)
class RawSummary:
    sample_count: float = 0.0
    sample_sum: float = 0.0
    quantile: tuple[RawQuantile, ...] = ()


@dataclass(frozen=True)
class RawBucket:
    upper_bound: float
    cumulative_count: float


@dataclass(frozen=True)
class RawHistogram:
    sample_count: float = 0.0
    sample_sum: float = 0.0
    bucket: tuple[RawBucket, ...] = ()


@dataclass(frozen=True)
class RawMetric:
    """A single series as tokenized: labels plus one populated payload."""

    label: tuple[LabelPair, ...] = ()
    gauge: float | None = None
    counter: float | None = None
    untyped: float | None = None
    summary: RawSummary | None = None
    histogram: RawHistogram | None = None


@dataclass(frozen=True)
class RawMetricFamily:
    """A metric family as tokenized, before type translation."""

    name: str
    help: str
    type: str
    metric: tuple[RawMetric, ...] = ()


@dataclass(frozen=True)
class SimpleMetric:
    """Single-value metric (counter, gauge, untyped)."""

    labels: dict[str, str]
    value: str

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.labels:
            data["labels"] = dict(self.labels)
        data["value"] = self.value
        return data


@dataclass(frozen=True)
class SummaryMetric:
    """Multiple-value metric keyed by quantile level."""

    labels: dict[str, str]
    quantiles: dict[str, str]
    count: str
    sum: str

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.labels:
            data["labels"] = dict(self.labels)
        if self.quantiles:
            data["quantiles"] = dict(self.quantiles)
        data["count"] = self.count
        data["sum"] = self.sum
        return data


@dataclass(frozen=True)
class HistogramMetric:
    """Multiple-value metric keyed by bucket upper bound."""

    labels: dict[str, str]
    buckets: dict[str, str]
    count: str
    sum: str

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.labels:
            data["labels"] = dict(self.labels)
        if self.buckets:
            data["buckets"] = dict(self.buckets)
        data["count"] = self.count
        data["sum"] = self.sum
        return data


MetricValue = Union[SimpleMetric, SummaryMetric, HistogramMetric]


@dataclass(frozen=True)
class MetricFamily:
    """A normalized metric family.

    ``type`` decides which ``MetricValue`` variant populates ``metrics``.
    """

    name: str
    help: str
    type: MetricType
    metrics: tuple[MetricValue, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "help": self.help,
            "type": self.type.name,
        }
        if self.metrics:
            data["metrics"] = [m.to_dict() for m in self.metrics]
        return data


def families_to_json(families: list[MetricFamily], *, indent: int | None = 2) -> str:
    """Serialize mapped families as a JSON array."""
    return json.dumps([family.to_dict() for family in families], indent=indent)
