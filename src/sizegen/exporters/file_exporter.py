"""
File-based metric exporter for offline analysis of generated draws.

Writes one JSON object per metric per export to a JSONL file.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from opentelemetry.sdk.metrics.export import MetricExporter, MetricExportResult, MetricsData


class FileMetricExporter(MetricExporter):
    """Export draw metrics to a JSONL file."""

    def __init__(self, output_path: str | Path, append: bool = True):
        """Initialize file exporter."""
        super().__init__()
        self.output_path = Path(output_path)
        self.append = append
        self.output_path.parent.mkdir(parents=True, exist_ok=True)

        if not append and self.output_path.exists():
            self.output_path.unlink()

    def export(
        self,
        metrics_data: MetricsData,
        timeout_millis: float = 10000,
        **kwargs,
    ) -> MetricExportResult:
        """Export metrics to file."""
        metric_dicts = []
        for resource_metrics in metrics_data.resource_metrics:
            resource_attrs = (
                dict(resource_metrics.resource.attributes) if resource_metrics.resource else {}
            )
            for scope_metrics in resource_metrics.scope_metrics:
                for metric in scope_metrics.metrics:
                    metric_dict: dict[str, Any] = {
                        "name": metric.name,
                        "description": metric.description,
                        "unit": metric.unit,
                        "resource": resource_attrs,
                        "timestamp": datetime.now().isoformat(),
                        "data_points": [_data_point(dp) for dp in metric.data.data_points],
                    }
                    metric_dicts.append(metric_dict)

        try:
            with open(self.output_path, "a", encoding="utf-8") as f:
                for metric_dict in metric_dicts:
                    f.write(json.dumps(metric_dict, default=str) + "\n")
        except OSError:
            return MetricExportResult.FAILURE
        return MetricExportResult.SUCCESS

    def shutdown(self, timeout_millis: float = 30000, **kwargs) -> None:
        """Shutdown exporter."""
        pass

    def force_flush(self, timeout_millis: float = 10000) -> bool:
        """Force flush."""
        return True


def _data_point(dp: Any) -> dict[str, Any]:
    """Counter points carry a value; histogram points carry count, sum, min and max."""
    point: dict[str, Any] = {
        "attributes": dict(dp.attributes) if dp.attributes else {},
        "start_time": getattr(dp, "start_time_unix_nano", None),
        "time": getattr(dp, "time_unix_nano", None),
    }
    for key in ("value", "count", "sum", "min", "max"):
        if hasattr(dp, key):
            point[key] = getattr(dp, key)
    return point
