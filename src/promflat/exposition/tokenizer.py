"""
Tokenizer adapter for the Prometheus text exposition format.

The grammar itself is handled by ``prometheus_client.parser``; this module
regroups its per-sample output into family/series records (``RawMetricFamily``
and ``RawMetric``) that carry one type-specific payload per series.
"""

from __future__ import annotations

import re
from typing import Iterable

import structlog
from prometheus_client.parser import text_string_to_metric_families
from prometheus_client.samples import Sample

from promflat.core.errors import ParseError
from promflat.exposition.models import (
    LabelPair,
    RawBucket,
    RawHistogram,
    RawMetric,
    RawMetricFamily,
    RawQuantile,
    RawSummary,
)

logger = structlog.get_logger()

_TYPE_LINE = re.compile(r"^#\s+TYPE\s+(\S+)\s+counter\s*$", re.MULTILINE)

# Label consumed by the per-series payload rather than identifying the series
_PAYLOAD_LABELS = {"summary": "quantile", "histogram": "le"}

_CREATED_TYPES = ("counter", "summary", "histogram")


class TextParser:
    """Stateless text-format parser producing ``RawMetricFamily`` records.

    Instances hold no state between calls, so a single instance may be
    shared or a fresh one created per scrape.
    """

    def text_to_metric_families(self, data: bytes | str) -> list[RawMetricFamily]:
        if isinstance(data, bytes):
            try:
                text = data.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise ParseError(f"exposition is not valid UTF-8: {exc}") from exc
        else:
            text = data

        counter_names = set(_TYPE_LINE.findall(text))

        try:
            families = [
                _build_family(family.name, family.documentation, family.type, family.samples, counter_names)
                for family in text_string_to_metric_families(text)
            ]
        except (ValueError, IndexError) as exc:
            logger.warning("exposition_parse_failed", error=str(exc))
            raise ParseError(f"invalid exposition text: {exc}") from exc

        return families


def _build_family(
    name: str,
    documentation: str,
    typ: str,
    samples: Iterable[Sample],
    counter_names: set[str],
) -> RawMetricFamily:
    # Only these types carry an OpenMetrics creation timestamp sample
    created_name = f"{name}_created" if typ in _CREATED_TYPES else None

    if typ == "counter" and f"{name}_total" in counter_names:
        # prometheus_client drops the suffix from counter family names
        name = f"{name}_total"

    payload_label = _PAYLOAD_LABELS.get(typ)
    series: dict[tuple[tuple[str, str], ...], list[Sample]] = {}
    for sample in samples:
        if sample.name == created_name:
            continue
        key = tuple(sorted((k, v) for k, v in sample.labels.items() if k != payload_label))
        series.setdefault(key, []).append(sample)

    metrics = tuple(_build_metric(name, typ, group, payload_label) for group in series.values())
    return RawMetricFamily(name=name, help=documentation, type=typ, metric=metrics)


def _build_metric(
    name: str,
    typ: str,
    samples: list[Sample],
    payload_label: str | None,
) -> RawMetric:
    labels = tuple(
        LabelPair(name=k, value=v) for k, v in samples[0].labels.items() if k != payload_label
    )

    if typ == "summary":
        return RawMetric(label=labels, summary=_build_summary(name, samples))
    if typ == "histogram":
        return RawMetric(label=labels, histogram=_build_histogram(name, samples))

    if typ in ("counter", "gauge", "unknown", "untyped") and len(samples) > 1:
        raise ParseError(
            f"duplicate series in metric family {name!r}: {dict(samples[0].labels)}"
        )
    value = samples[0].value
    if typ == "counter":
        return RawMetric(label=labels, counter=value)
    if typ == "gauge":
        return RawMetric(label=labels, gauge=value)
    if typ in ("unknown", "untyped"):
        return RawMetric(label=labels, untyped=value)
    # Other tags carry no payload the mapper understands
    return RawMetric(label=labels)


def _build_summary(name: str, samples: list[Sample]) -> RawSummary:
    count = 0.0
    total = 0.0
    quantiles = []
    for sample in samples:
        if sample.name == f"{name}_count":
            count = sample.value
        elif sample.name == f"{name}_sum":
            total = sample.value
        elif "quantile" in sample.labels:
            quantiles.append(RawQuantile(quantile=float(sample.labels["quantile"]), value=sample.value))
    return RawSummary(sample_count=count, sample_sum=total, quantile=tuple(quantiles))


def _build_histogram(name: str, samples: list[Sample]) -> RawHistogram:
    count = 0.0
    total = 0.0
    buckets = []
    for sample in samples:
        if sample.name == f"{name}_count":
            count = sample.value
        elif sample.name == f"{name}_sum":
            total = sample.value
        elif sample.name == f"{name}_bucket":
            if "le" not in sample.labels:
                raise ParseError(f"histogram bucket {sample.name!r} has no 'le' label")
            buckets.append(
                RawBucket(upper_bound=float(sample.labels["le"]), cumulative_count=sample.value)
            )
    return RawHistogram(sample_count=count, sample_sum=total, bucket=tuple(buckets))
