"""
Weighted-bucket (histogram) sampler for integer sizes.

Each bar describes an "up to size X" class and its relative weight. A draw
picks a class by weight, then interpolates uniformly inside it so outputs are
not all quantized to the bucket boundaries.

Example:
    sampler = parse_weighted_sampler_from_csv("512:70, 4096:25, 65536:5")
    size = sampler.poll(random.Random(42))
"""

import logging
import random
from bisect import bisect_right
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from operator import attrgetter

from ..defaults import DEFAULT_SEPARATOR
from ..errors import (
    DegenerateDistribution,
    EmptyConfiguration,
    InvalidInteger,
    MalformedToken,
    NegativeSize,
    NegativeWeight,
)
from .distributions import Distribution, coerce_int

logger = logging.getLogger(__name__)

_weight = attrgetter("weight")


@dataclass(frozen=True)
class WeightedBar:
    """One histogram bucket: upper size bound and its weight."""

    size: int
    weight: int


@dataclass(frozen=True)
class WeightedBucketSampler(Distribution):
    """
    Histogram sampler over sorted bars.

    ``bars`` are sorted by size and their ``weight`` holds the running total of
    the original weights, so the last one is the boundary. Build instances with
    ``build_weighted_sampler``.
    """

    bars: tuple[WeightedBar, ...]

    @property
    def boundary(self) -> int:
        """Total weight mass."""
        return self.bars[-1].weight

    def poll(self, rng: random.Random) -> int:
        needle = rng.randrange(self.boundary)
        # First bar whose cumulative weight is strictly above the needle
        i = bisect_right(self.bars, needle, key=_weight)
        upper = self.bars[i].size
        lower = self.bars[i - 1].size if i > 0 else 0
        if upper <= lower:
            return lower
        return lower + rng.randrange(upper - lower)


def build_weighted_sampler(bars: Iterable[WeightedBar]) -> WeightedBucketSampler:
    """
    Validate bars and build an immutable sampler.

    Bars need not be sorted. Raises EmptyConfiguration, InvalidInteger,
    NegativeSize, NegativeWeight or DegenerateDistribution.
    """
    bars = list(bars)
    if not bars:
        raise EmptyConfiguration("at least one size/weight bar is required")
    for bar in bars:
        for what, value in (("size", bar.size), ("weight", bar.weight)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidInteger(f"bar {what} must be an integer, got {value!r}")
        if bar.size < 0:
            raise NegativeSize(f"bar size must be non-negative, got {bar.size}")
        if bar.weight < 0:
            raise NegativeWeight(f"bar weight must be non-negative, got {bar.weight}")

    total = 0
    cumulative = []
    for bar in sorted(bars, key=attrgetter("size")):
        total += bar.weight
        cumulative.append(WeightedBar(size=bar.size, weight=total))

    if total == 0:
        raise DegenerateDistribution("total bar weight is zero")

    logger.debug("built histogram: %d bars, boundary=%d", len(cumulative), total)
    return WeightedBucketSampler(bars=tuple(cumulative))


def parse_tokens(
    pairs: Sequence[str], separator: str = DEFAULT_SEPARATOR
) -> WeightedBucketSampler:
    """Build a sampler from "SIZE<separator>WEIGHT" tokens."""
    if not separator:
        raise MalformedToken("separator must not be empty")
    bars = []
    for pair in pairs:
        fields = pair.strip().split(separator)
        if len(fields) != 2:
            raise MalformedToken(f"expected SIZE{separator}WEIGHT, got {pair.strip()!r}")
        bars.append(
            WeightedBar(
                size=coerce_int(fields[0], "size"),
                weight=coerce_int(fields[1], "weight"),
            )
        )
    return build_weighted_sampler(bars)


def parse_weighted_sampler_from_csv(
    csv: str, separator: str = DEFAULT_SEPARATOR
) -> WeightedBucketSampler:
    """Build a sampler from a comma-separated list of size/weight tokens."""
    return parse_tokens(csv.split(","), separator)
