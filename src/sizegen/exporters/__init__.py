"""Metric exporters for generated draws."""

from .console_exporter import create_console_metric_exporter
from .file_exporter import FileMetricExporter
from .otlp_exporter import create_otlp_metric_exporter

__all__ = [
    "create_console_metric_exporter",
    "create_otlp_metric_exporter",
    "FileMetricExporter",
]
