"""Exposition-format object model, mapping and flattening."""

from promflat.exposition.flattener import flatten
from promflat.exposition.formatting import format_value
from promflat.exposition.mapper import map_families, new_metric_family
from promflat.exposition.models import (
    families_to_json,
    HistogramMetric,
    LabelPair,
    MetricFamily,
    MetricType,
    MetricValue,
    RawBucket,
    RawHistogram,
    RawMetric,
    RawMetricFamily,
    RawQuantile,
    RawSummary,
    SimpleMetric,
    SummaryMetric,
)
from promflat.exposition.tokenizer import TextParser

__all__ = [
    "flatten",
    "format_value",
    "families_to_json",
    "map_families",
    "new_metric_family",
    "TextParser",
    "MetricFamily",
    "MetricType",
    "MetricValue",
    "SimpleMetric",
    "SummaryMetric",
    "HistogramMetric",
    "RawMetricFamily",
    "RawMetric",
    "LabelPair",
    "RawSummary",
    "RawQuantile",
    "RawHistogram",
    "RawBucket",
]
