"""Tests for metric exporter factories."""

from pathlib import Path

import pytest
from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
from opentelemetry.sdk.metrics.export import ConsoleMetricExporter

from sizegen.exporters import (
    FileMetricExporter,
    create_console_metric_exporter,
    create_otlp_metric_exporter,
)
from sizegen.exporters.otlp_exporter import metrics_endpoint


@pytest.mark.parametrize(
    ("endpoint", "expected"),
    [
        ("http://localhost:4318", "http://localhost:4318/v1/metrics"),
        ("http://localhost:4318/", "http://localhost:4318/v1/metrics"),
        ("https://collector:4318/v1/metrics", "https://collector:4318/v1/metrics"),
        (" http://collector:4318/v1/metrics/ ", "http://collector:4318/v1/metrics"),
    ],
)
def test_metrics_endpoint_normalization(endpoint: str, expected: str) -> None:
    assert metrics_endpoint(endpoint) == expected


def test_create_otlp_metric_exporter() -> None:
    """The factory builds an HTTP exporter without contacting the collector."""
    exporter = create_otlp_metric_exporter("http://localhost:4318", headers={"x-tenant": "a"})
    assert isinstance(exporter, OTLPMetricExporter)
    exporter.shutdown()


def test_create_console_metric_exporter() -> None:
    assert isinstance(create_console_metric_exporter(), ConsoleMetricExporter)


def test_file_exporter_truncates_when_not_appending(tmp_path: Path) -> None:
    output = tmp_path / "nested" / "m.jsonl"
    output.parent.mkdir()
    output.write_text("stale\n", encoding="utf-8")
    FileMetricExporter(output, append=False)
    assert not output.exists()
