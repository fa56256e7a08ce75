"""
Discrete distributions for size and count generation.

Every sampler draws from a random source passed by the caller. A
process-lifetime source backs the no-argument ``sample()`` convenience; it is
not safe for concurrent use without external locking.
"""

import random
from abc import ABC, abstractmethod
from typing import Any

from ..defaults import get_default_seed
from ..errors import InvalidInteger, InvalidLambda

_default_source = random.Random(get_default_seed())


def seed_default_source(seed: int | None) -> None:
    """Reseed the process-lifetime random source used by ``sample()``."""
    _default_source.seed(seed)


def coerce_int(value: Any, what: str = "value") -> int:
    """Return value as an int, accepting ints and base-10 integer strings."""
    if isinstance(value, bool):
        raise InvalidInteger(f"{what} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text and "_" not in text:
            try:
                return int(text, 10)
            except ValueError:
                pass
    raise InvalidInteger(f"{what} must be a base-10 integer, got {value!r}")


class Distribution(ABC):
    """Base class for discrete distributions."""

    @abstractmethod
    def poll(self, rng: random.Random) -> int:
        """Draw a single integer using the given random source."""
        pass

    def poll_many(self, rng: random.Random, count: int) -> list[int]:
        """Draw ``count`` independent integers."""
        return [self.poll(rng) for _ in range(count)]

    def sample(self) -> int:
        """Draw from the process-lifetime random source."""
        return self.poll(_default_source)


class SamplerFactory:
    """Factory for creating samplers from configuration dictionaries."""

    @classmethod
    def create(cls, config: dict[str, Any]) -> Distribution:
        """
        Create a sampler from a configuration dictionary.

        Examples:
            # Histogram from explicit bars
            {"distribution": "histogram", "bars": [{"size": 512, "weight": 3}, [4096, 1]]}

            # Histogram from a CSV line
            {"distribution": "histogram", "csv": "512:3,4096:1"}

            # Poisson event counts
            {"distribution": "poisson", "lambda": 12}
        """
        from .histogram import WeightedBar, build_weighted_sampler, parse_weighted_sampler_from_csv
        from .poisson import build_poisson_sampler

        dist_type = str(config.get("distribution", "histogram")).lower().replace("-", "_")

        if dist_type in ("histogram", "weighted"):
            if "csv" in config:
                separator = config.get("separator")
                if separator:
                    return parse_weighted_sampler_from_csv(str(config["csv"]), str(separator))
                return parse_weighted_sampler_from_csv(str(config["csv"]))
            bars = []
            for raw in config.get("bars") or []:
                if isinstance(raw, dict):
                    size, weight = raw.get("size"), raw.get("weight")
                elif isinstance(raw, (list, tuple)) and len(raw) == 2:
                    size, weight = raw
                else:
                    raise InvalidInteger(f"bar must be a size/weight pair, got {raw!r}")
                bars.append(WeightedBar(coerce_int(size, "size"), coerce_int(weight, "weight")))
            return build_weighted_sampler(bars)

        if dist_type == "poisson":
            if "lambda" not in config:
                raise InvalidLambda("poisson sampler needs a 'lambda' value")
            try:
                lambda_ = coerce_int(config["lambda"], "lambda")
            except InvalidInteger as e:
                raise InvalidLambda(str(e)) from e
            return build_poisson_sampler(lambda_)

        raise ValueError(f"Unknown distribution type: {dist_type}")
