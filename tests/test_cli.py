"""Tests for the promflat command-line consumer."""

import json

import pytest
import respx
from httpx import Response

from promflat import cli
from promflat.core.errors import ExitCode

URL = "http://node.example.com:9100/metrics"


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    monkeypatch.setattr(cli, "configure_logging", lambda *args, **kwargs: None)


class TestRun:
    def test_prints_flattened_mapping(self, node_exporter_doc, capsys):
        with respx.mock:
            respx.get(URL).mock(return_value=Response(200, text=node_exporter_doc))

            assert cli.run([URL]) == ExitCode.SUCCESS

        output = json.loads(capsys.readouterr().out)
        assert output["node_load1"] == ["0.25"]
        assert output["http_requests_total"] == ["get", "200", "1027", "post", "500", "3"]

    def test_prints_single_metric(self, node_exporter_doc, capsys):
        with respx.mock:
            respx.get(URL).mock(return_value=Response(200, text=node_exporter_doc))

            code = cli.run([URL, "--metric", "node_network_transmit_bytes"])

        assert code == ExitCode.SUCCESS
        assert json.loads(capsys.readouterr().out) == ["eth0", "1.2e+06", "lo", "4096"]

    def test_missing_metric_is_warning(self, gauge_doc, capsys):
        with respx.mock:
            respx.get(URL).mock(return_value=Response(200, text=gauge_doc))

            code = cli.run([URL, "--metric", "does_not_exist"])

        assert code == ExitCode.WARNING
        assert "does_not_exist" in capsys.readouterr().err

    def test_prints_families(self, summary_doc, capsys):
        with respx.mock:
            respx.get(URL).mock(return_value=Response(200, text=summary_doc))

            assert cli.run([URL, "--families"]) == ExitCode.SUCCESS

        output = json.loads(capsys.readouterr().out)
        assert output == [
            {
                "name": "rpc_duration_seconds",
                "help": "RPC latency distributions.",
                "type": "SUMMARY",
                "metrics": [
                    {
                        "labels": {"service": "api"},
                        "quantiles": {"0.5": "10", "0.9": "20"},
                        "count": "3",
                        "sum": "30",
                    }
                ],
            }
        ]

    def test_default_url_from_settings(self, monkeypatch, gauge_doc, capsys):
        monkeypatch.setenv("PROMFLAT_DEFAULT_URL", URL)

        with respx.mock:
            respx.get(URL).mock(return_value=Response(200, text=gauge_doc))

            assert cli.run([]) == ExitCode.SUCCESS

        assert json.loads(capsys.readouterr().out) == {"metric_a": ["x", "5"]}


class TestExitCodes:
    def test_no_url_is_config_error(self, monkeypatch):
        monkeypatch.delenv("PROMFLAT_DEFAULT_URL", raising=False)
        monkeypatch.chdir("/")

        assert cli.run([]) == ExitCode.CONFIG_ERROR

    def test_http_error(self, capsys):
        with respx.mock:
            respx.get(URL).mock(return_value=Response(500))

            assert cli.run([URL]) == ExitCode.NETWORK_ERROR

        err = capsys.readouterr().err
        assert f"Error: {URL} not HTTP 200 OK (got 500)" in err
        assert "code=500" in err

    def test_empty_result(self):
        with respx.mock:
            respx.get(URL).mock(return_value=Response(200, text=""))

            assert cli.run([URL]) == ExitCode.EMPTY_RESULT

    def test_parse_error(self):
        with respx.mock:
            respx.get(URL).mock(return_value=Response(200, text="metric_a not_a_number\n"))

            assert cli.run([URL]) == ExitCode.PARSE_ERROR

    def test_main_exits_with_code(self):
        with respx.mock:
            respx.get(URL).mock(return_value=Response(500))

            with pytest.raises(SystemExit) as exc_info:
                cli.main([URL])

        assert exc_info.value.code == ExitCode.NETWORK_ERROR
