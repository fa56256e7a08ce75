"""
Construction-time errors for sampler configuration.

Every error is raised while building a sampler; a built sampler never raises
when polled.
"""


class SamplerConfigError(ValueError):
    """Base class for invalid sampler configuration."""


class EmptyConfiguration(SamplerConfigError):
    """No bars were supplied to the weighted sampler."""


class NegativeWeight(SamplerConfigError):
    """A bar carries a negative weight."""


class NegativeSize(SamplerConfigError):
    """A bar carries a negative size."""


class DegenerateDistribution(SamplerConfigError):
    """Total weight is zero, so there is nothing to select."""


class MalformedToken(SamplerConfigError):
    """A size/weight token does not split into exactly two fields."""


class InvalidInteger(SamplerConfigError):
    """A field that must be a base-10 integer is not one."""


class InvalidLambda(SamplerConfigError):
    """The Poisson rate is negative or not an integer."""
