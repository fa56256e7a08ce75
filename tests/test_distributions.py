"""Tests for the sampler base class, integer coercion and the factory."""

import pytest

from sizegen.errors import EmptyConfiguration, InvalidInteger, InvalidLambda
from sizegen.statistics import (
    PoissonSampler,
    SamplerFactory,
    WeightedBar,
    WeightedBucketSampler,
    seed_default_source,
)
from sizegen.statistics.distributions import coerce_int


@pytest.mark.parametrize(("raw", "expected"), [(5, 5), ("42", 42), (" 7 ", 7), ("-3", -3)])
def test_coerce_int_accepts_integers(raw, expected: int) -> None:
    assert coerce_int(raw) == expected


@pytest.mark.parametrize("raw", [True, 1.0, "1.0", "", "0x10", None, [1]])
def test_coerce_int_rejects_non_integers(raw) -> None:
    with pytest.raises(InvalidInteger):
        coerce_int(raw)


def test_factory_histogram_from_bar_mappings_and_pairs() -> None:
    sampler = SamplerFactory.create(
        {"distribution": "histogram", "bars": [{"size": 4096, "weight": 1}, [512, "3"]]}
    )
    assert isinstance(sampler, WeightedBucketSampler)
    assert sampler.bars == (WeightedBar(512, 3), WeightedBar(4096, 4))


def test_factory_histogram_from_csv_with_separator() -> None:
    sampler = SamplerFactory.create({"distribution": "histogram", "csv": "10=1,20=1", "separator": "="})
    assert isinstance(sampler, WeightedBucketSampler)
    assert sampler.boundary == 2


def test_factory_defaults_to_histogram() -> None:
    assert isinstance(SamplerFactory.create({"csv": "10:1"}), WeightedBucketSampler)


def test_factory_histogram_without_bars_is_empty() -> None:
    with pytest.raises(EmptyConfiguration):
        SamplerFactory.create({"distribution": "histogram"})


def test_factory_rejects_malformed_bars() -> None:
    with pytest.raises(InvalidInteger):
        SamplerFactory.create({"distribution": "histogram", "bars": [[1, 2, 3]]})
    with pytest.raises(InvalidInteger):
        SamplerFactory.create({"distribution": "histogram", "bars": [{"size": 10}]})


def test_factory_poisson() -> None:
    sampler = SamplerFactory.create({"distribution": "Poisson", "lambda": "12"})
    assert isinstance(sampler, PoissonSampler)
    assert sampler.lambda_ == 12


def test_factory_poisson_negative_lambda() -> None:
    with pytest.raises(InvalidLambda):
        SamplerFactory.create({"distribution": "poisson", "lambda": -2})


@pytest.mark.parametrize(
    "definition",
    [
        {"distribution": "poisson"},
        {"distribution": "poisson", "mean": 12},
        {"distribution": "poisson", "lambda": "twelve"},
        {"distribution": "poisson", "lambda": 2.5},
    ],
)
def test_factory_poisson_requires_integer_lambda(definition: dict) -> None:
    """A missing or non-integer rate fails instead of drawing only zeros."""
    with pytest.raises(InvalidLambda):
        SamplerFactory.create(definition)


def test_factory_unknown_type() -> None:
    with pytest.raises(ValueError, match="Unknown distribution type"):
        SamplerFactory.create({"distribution": "log_normal"})


def test_sample_uses_the_default_source() -> None:
    """Reseeding the convenience source replays the same draws."""
    sampler = SamplerFactory.create({"distribution": "poisson", "lambda": 20})
    seed_default_source(99)
    first = [sampler.sample() for _ in range(10)]
    seed_default_source(99)
    second = [sampler.sample() for _ in range(10)]
    assert first == second
    assert all(v >= 0 for v in first)
