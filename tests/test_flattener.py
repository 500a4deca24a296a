import pytest

from promflat.core.errors import EmptyResultError
from promflat.exposition.flattener import flatten
from promflat.exposition.mapper import map_families
from promflat.exposition.models import (
    HistogramMetric,
    MetricFamily,
    MetricType,
    SimpleMetric,
    SummaryMetric,
)
from promflat.exposition.tokenizer import TextParser


def _families(doc: str) -> list[MetricFamily]:
    return map_families(TextParser().text_to_metric_families(doc))


def test_gauge_scenario(gauge_doc):
    assert flatten(_families(gauge_doc)) == {"metric_a": ["x", "5"]}


def test_simple_series_append_labels_then_value(node_exporter_doc):
    result = flatten(_families(node_exporter_doc))

    assert result == {
        "node_network_transmit_bytes": ["eth0", "1.2e+06", "lo", "4096"],
        "http_requests_total": ["get", "200", "1027", "post", "500", "3"],
        "node_load1": ["0.25"],
        "legacy_up": ["1"],
    }


def test_summary_contributes_only_sum(summary_doc):
    assert flatten(_families(summary_doc)) == {"rpc_duration_seconds": ["30"]}


def test_summary_sums_in_series_order():
    family = MetricFamily(
        name="rpc_seconds",
        help="",
        type=MetricType.SUMMARY,
        metrics=(
            SummaryMetric(labels={"s": "a"}, quantiles={"0.5": "1"}, count="1", sum="2"),
            SummaryMetric(labels={"s": "b"}, quantiles={"0.5": "7"}, count="4", sum="9"),
        ),
    )

    assert flatten([family]) == {"rpc_seconds": ["2", "9"]}


def test_histograms_are_skipped(gauge_doc, histogram_doc):
    result = flatten(_families(gauge_doc + histogram_doc))

    assert result == {"metric_a": ["x", "5"]}


def test_histogram_only_document_is_empty(histogram_doc):
    with pytest.raises(EmptyResultError):
        flatten(_families(histogram_doc))


def test_empty_document_is_empty():
    with pytest.raises(EmptyResultError):
        flatten([])


def test_family_without_series_contributes_nothing():
    with pytest.raises(EmptyResultError):
        flatten([MetricFamily(name="idle", help="", type=MetricType.GAUGE)])


def test_result_is_fresh_per_call(gauge_doc):
    families = _families(gauge_doc)

    first = flatten(families)
    first["metric_a"].append("mutated")

    assert flatten(families) == {"metric_a": ["x", "5"]}


def test_unsupported_value_type_rejected():
    family = MetricFamily(name="odd", help="", type=MetricType.GAUGE, metrics=("5",))  # type: ignore[arg-type]

    with pytest.raises(TypeError):
        flatten([family])


def test_histogram_values_never_flattened():
    family = MetricFamily(
        name="latency",
        help="",
        type=MetricType.HISTOGRAM,
        metrics=(HistogramMetric(labels={}, buckets={"+Inf": "1"}, count="1", sum="0.5"),),
    )
    other = MetricFamily(
        name="up",
        help="",
        type=MetricType.GAUGE,
        metrics=(SimpleMetric(labels={}, value="1"),),
    )

    assert flatten([family, other]) == {"up": ["1"]}


def test_gauge_with_created_suffix_is_flattened():
    doc = "# TYPE process_start_created gauge\nprocess_start_created 1.7e+09\n"

    assert flatten(_families(doc)) == {"process_start_created": ["1.7e+09"]}
