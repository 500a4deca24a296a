"""
Flattener: normalized families to the legacy ``name -> [str, ...]`` mapping.

Per series:

* simple metrics append their label values, then the value
* summaries append only their sum
* histograms contribute nothing
"""

from __future__ import annotations

from typing import Iterable

import structlog

from promflat.core.errors import EmptyResultError
from promflat.exposition.models import HistogramMetric, MetricFamily, SimpleMetric, SummaryMetric

logger = structlog.get_logger()


def flatten(families: Iterable[MetricFamily]) -> dict[str, list[str]]:
    """Flatten mapped families into a fresh mapping owned by the caller.

    Raises:
        EmptyResultError: no family contributed an entry.
    """
    result: dict[str, list[str]] = {}

    for family in families:
        for metric in family.metrics:
            if isinstance(metric, SimpleMetric):
                entry = result.setdefault(family.name, [])
                entry.extend(metric.labels.values())
                entry.append(metric.value)
            elif isinstance(metric, SummaryMetric):
                result.setdefault(family.name, []).append(metric.sum)
            elif isinstance(metric, HistogramMetric):
                logger.debug("histogram_family_skipped", family=family.name)
                break
            else:
                raise TypeError(f"unsupported metric value {type(metric).__name__}")

    if not result:
        raise EmptyResultError()

    logger.debug("metric_families_flattened", entries=len(result))
    return result
