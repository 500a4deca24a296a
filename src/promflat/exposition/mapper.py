"""
Family mapper: tokenized records to normalized ``MetricFamily`` values.

This is the only place ``MetricValue`` variants are constructed. The
family's type picks the variant for every series in it.
"""

from __future__ import annotations

from typing import Iterable

import structlog

from promflat.core.errors import UnknownTypeError
from promflat.exposition.formatting import format_value
from promflat.exposition.models import (
    RAW_TYPE_TAGS,
    HistogramMetric,
    MetricFamily,
    MetricType,
    MetricValue,
    RawHistogram,
    RawMetric,
    RawMetricFamily,
    RawSummary,
    SimpleMetric,
    SummaryMetric,
)

logger = structlog.get_logger()


def map_families(records: Iterable[RawMetricFamily]) -> list[MetricFamily]:
    """Map tokenized families in input order.

    Raises:
        UnknownTypeError: a family declares a type other than counter,
            gauge, untyped, summary or histogram.
    """
    return [new_metric_family(record) for record in records]


def new_metric_family(record: RawMetricFamily) -> MetricFamily:
    metric_type = _translate_type(record)
    return MetricFamily(
        name=record.name,
        help=record.help,
        type=metric_type,
        metrics=tuple(_make_value(metric_type, m) for m in record.metric),
    )


def _translate_type(record: RawMetricFamily) -> MetricType:
    try:
        return RAW_TYPE_TAGS[record.type.lower()]
    except KeyError:
        logger.warning("unknown_metric_type", family=record.name, type=record.type)
        raise UnknownTypeError(record.name, record.type) from None


def _make_value(metric_type: MetricType, metric: RawMetric) -> MetricValue:
    if metric_type is MetricType.SUMMARY:
        summary = metric.summary or RawSummary()
        return SummaryMetric(
            labels=make_labels(metric),
            quantiles={format_value(q.quantile): format_value(q.value) for q in summary.quantile},
            count=format_value(summary.sample_count),
            sum=format_value(summary.sample_sum),
        )
    if metric_type is MetricType.HISTOGRAM:
        histogram = metric.histogram or RawHistogram()
        return HistogramMetric(
            labels=make_labels(metric),
            buckets={
                format_value(b.upper_bound): format_value(b.cumulative_count)
                for b in histogram.bucket
            },
            count=format_value(histogram.sample_count),
            # Sum comes from the histogram payload, not the summary one
            sum=format_value(histogram.sample_sum),
        )
    return SimpleMetric(labels=make_labels(metric), value=format_value(get_value(metric)))


def get_value(metric: RawMetric) -> float:
    """Return whichever scalar payload is populated, 0 if none is."""
    if metric.gauge is not None:
        return metric.gauge
    if metric.counter is not None:
        return metric.counter
    if metric.untyped is not None:
        return metric.untyped
    return 0.0


def make_labels(metric: RawMetric) -> dict[str, str]:
    result: dict[str, str] = {}
    for pair in metric.label:
        result[pair.name] = pair.value
    return result
