"""Discrete distributions for size and count generation."""

from .distributions import Distribution, SamplerFactory, seed_default_source
from .histogram import (
    WeightedBar,
    WeightedBucketSampler,
    build_weighted_sampler,
    parse_tokens,
    parse_weighted_sampler_from_csv,
)
from .poisson import (
    PoissonSampler,
    PoissonSlot,
    PoissonTable,
    build_poisson_sampler,
    build_poisson_table,
)

__all__ = [
    "Distribution",
    "SamplerFactory",
    "seed_default_source",
    "WeightedBar",
    "WeightedBucketSampler",
    "build_weighted_sampler",
    "parse_tokens",
    "parse_weighted_sampler_from_csv",
    "PoissonSampler",
    "PoissonSlot",
    "PoissonTable",
    "build_poisson_sampler",
    "build_poisson_table",
]
