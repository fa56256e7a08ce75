"""
Generate batches of draws from named samplers.

Each draw can be recorded as an OpenTelemetry metric so a load run leaves a
record of the sizes and counts it actually produced:
- sizegen.draw.count: number of draws per sampler
- sizegen.draw.value: distribution of drawn values per sampler
"""

import logging
import random

from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import MetricExporter, PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource

from .. import __version__
from ..statistics.distributions import Distribution
from ..statistics.histogram import WeightedBucketSampler
from ..statistics.poisson import PoissonSampler

logger = logging.getLogger(__name__)


def distribution_name(sampler: Distribution) -> str:
    """Short distribution label used as a metric attribute."""
    if isinstance(sampler, WeightedBucketSampler):
        return "histogram"
    if isinstance(sampler, PoissonSampler):
        return "poisson"
    return type(sampler).__name__


class DrawGenerator:
    """Draw from samplers and record the results as metrics."""

    def __init__(
        self,
        exporter: MetricExporter | None = None,
        service_name: str = "sizegen",
        export_interval_ms: int = 5000,
    ):
        """Initialize generator; without an exporter draws are not recorded."""
        self.provider: MeterProvider | None = None
        self.draw_count = None
        self.draw_value = None
        if exporter is None:
            return

        resource = Resource.create({"service.name": service_name, "service.version": __version__})
        reader = PeriodicExportingMetricReader(
            exporter,
            export_interval_millis=export_interval_ms,
        )
        self.provider = MeterProvider(resource=resource, metric_readers=[reader])
        meter = self.provider.get_meter(__name__)

        self.draw_count = meter.create_counter(
            "sizegen.draw.count",
            description="Count of draws per sampler",
            unit="1",
        )
        self.draw_value = meter.create_histogram(
            "sizegen.draw.value",
            description="Distribution of drawn values",
            unit="1",
        )

    def _record(self, name: str, sampler: Distribution, value: int) -> None:
        if self.draw_count is None or self.draw_value is None:
            return
        attrs = {"sampler.name": name, "sampler.distribution": distribution_name(sampler)}
        self.draw_count.add(1, attrs)
        self.draw_value.record(value, attrs)

    def generate(
        self,
        name: str,
        sampler: Distribution,
        rng: random.Random,
        count: int,
    ) -> list[int]:
        """Draw ``count`` values from the sampler."""
        values = []
        for _ in range(count):
            value = sampler.poll(rng)
            self._record(name, sampler, value)
            values.append(value)
        logger.debug("sampler %s: %d draws", name, count)
        return values

    def generate_at_scale(
        self,
        name: str,
        sampler: PoissonSampler,
        rng: random.Random,
        count: int,
        total: int,
        slice_: int,
    ) -> list[int]:
        """Draw ``count`` aggregate values, each over ``total`` units at a per-``slice_`` rate."""
        values = []
        for _ in range(count):
            value = sampler.poll_at_scale(rng, total, slice_)
            self._record(name, sampler, value)
            values.append(value)
        logger.debug("sampler %s: %d scaled draws (total=%d slice=%d)", name, count, total, slice_)
        return values

    def shutdown(self) -> None:
        """Flush pending metrics and shut down the meter provider."""
        if self.provider is not None:
            self.provider.shutdown()
            self.provider = None
