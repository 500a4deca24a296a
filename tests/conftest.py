"""Root test configuration."""

import logging

import pytest
import structlog

from promflat.config.settings import get_settings


def pytest_configure(config):
    """Configure structlog for tests to suppress debug/info output."""
    logging.basicConfig(level=logging.WARNING, force=True)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def gauge_doc() -> str:
    return """\
# HELP metric_a A gauge.
# TYPE metric_a gauge
metric_a{l="x"} 5
"""


@pytest.fixture
def summary_doc() -> str:
    return """\
# HELP rpc_duration_seconds RPC latency distributions.
# TYPE rpc_duration_seconds summary
rpc_duration_seconds{service="api",quantile="0.5"} 10
rpc_duration_seconds{service="api",quantile="0.9"} 20
rpc_duration_seconds_sum{service="api"} 30
rpc_duration_seconds_count{service="api"} 3
"""


@pytest.fixture
def histogram_doc() -> str:
    return """\
# HELP http_request_duration_seconds Request latency.
# TYPE http_request_duration_seconds histogram
http_request_duration_seconds_bucket{le="0.1"} 1
http_request_duration_seconds_bucket{le="0.5"} 2
http_request_duration_seconds_bucket{le="+Inf"} 3
http_request_duration_seconds_sum 1.25
http_request_duration_seconds_count 3
"""


@pytest.fixture
def node_exporter_doc() -> str:
    return """\
# HELP node_network_transmit_bytes Network device statistic transmit_bytes.
# TYPE node_network_transmit_bytes counter
node_network_transmit_bytes{device="eth0"} 1.2e+06
node_network_transmit_bytes{device="lo"} 4096
# HELP http_requests_total Total HTTP requests.
# TYPE http_requests_total counter
http_requests_total{method="get",code="200"} 1027
http_requests_total{method="post",code="500"} 3
# HELP node_load1 1m load average.
# TYPE node_load1 gauge
node_load1 0.25
# A bare sample without metadata is untyped
legacy_up 1
"""
