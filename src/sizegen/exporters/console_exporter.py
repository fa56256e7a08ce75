"""
Console exporter for debugging draw metrics.

Prints metrics to stdout for quick verification.
"""

from opentelemetry.sdk.metrics.export import ConsoleMetricExporter


def create_console_metric_exporter() -> ConsoleMetricExporter:
    """Create a metric exporter that prints to stdout."""
    return ConsoleMetricExporter()
