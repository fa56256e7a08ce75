"""
OTLP/HTTP metric exporter for shipping draw metrics to a collector.
"""

from typing import Any

from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter

_METRICS_PATH = "/v1/metrics"


def metrics_endpoint(endpoint: str) -> str:
    """Collector base URL -> metrics URL (http://host:4318 -> http://host:4318/v1/metrics)."""
    endpoint = endpoint.strip().rstrip("/")
    if endpoint.endswith(_METRICS_PATH):
        return endpoint
    return endpoint + _METRICS_PATH


def create_otlp_metric_exporter(
    endpoint: str = "http://localhost:4318",
    headers: dict[str, str] | None = None,
    **kwargs: Any,
) -> OTLPMetricExporter:
    """Create an OTLP/HTTP metric exporter posting to the collector at ``endpoint``."""
    return OTLPMetricExporter(endpoint=metrics_endpoint(endpoint), headers=headers, **kwargs)
