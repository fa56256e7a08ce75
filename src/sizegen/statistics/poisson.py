"""
Poisson sampler backed by a truncated probability table.

The terms lambda**k, k! and e**lambda overflow a float long before the rates
used for load generation get large, so each term is computed with ``decimal``
and only the final ratio is narrowed to a float.

The infinite support is cut where the tail becomes negligible, and whatever
mass the cut leaves behind is folded into the slot at k = lambda so the table
still sums to one. This concentrates the truncation error at the mode; its
accuracy for large rates is implementation-defined (see
scripts/compare_poisson_table.py for a check against the exact PMF).
"""

import logging
import random
from bisect import bisect_left
from dataclasses import dataclass
from decimal import MAX_EMAX, MIN_EMIN, Decimal, localcontext
from operator import attrgetter

from ..defaults import DECIMAL_PRECISION, EPSILON_REMAINING, EPSILON_UNIT, MAX_K_FACTOR
from ..errors import InvalidLambda
from .distributions import Distribution

logger = logging.getLogger(__name__)

_cumulative = attrgetter("cumulative")


@dataclass(frozen=True)
class PoissonSlot:
    """Probability and cumulative probability of drawing k."""

    k: int
    probability: float
    cumulative: float


@dataclass(frozen=True)
class PoissonTable:
    """
    Truncated PMF/CDF for a Poisson rate.

    ``slots[k]`` describes outcome k. ``start`` is the first k at or below the
    rate whose probability is not negligible; sampling skips the slots before it.
    """

    lambda_: int
    slots: tuple[PoissonSlot, ...]
    start: int = 0

    @property
    def total_probability(self) -> float:
        return sum(slot.probability for slot in self.slots)


def _power(base: Decimal, exponent: int) -> Decimal:
    """base ** exponent by repeated squaring, in the active decimal context."""
    result = Decimal(1)
    while exponent > 0:
        if exponent % 2:
            result *= base
        base *= base
        exponent //= 2
    return result


class _Factorials:
    """Factorials as Decimals, each derived from the previous one."""

    def __init__(self):
        self._acc = [Decimal(1)]

    def ensure(self, n: int) -> Decimal:
        for i in range(len(self._acc), n + 1):
            self._acc.append(self._acc[i - 1] * i)
        return self._acc[n]


def _check_lambda(lambda_: int) -> None:
    if isinstance(lambda_, bool) or not isinstance(lambda_, int):
        raise InvalidLambda(f"lambda must be an integer, got {lambda_!r}")
    if lambda_ < 0:
        raise InvalidLambda(f"lambda must be non-negative, got {lambda_}")


def build_poisson_table(lambda_: int) -> PoissonTable:
    """
    Compute the truncated Poisson table for an integer rate.

    Stops at the first of: k reaching lambda * MAX_K_FACTOR, a term past the
    mode falling under EPSILON_REMAINING, or the unaccounted mass falling under
    EPSILON_UNIT. The table never holds more than lambda * MAX_K_FACTOR + 1 slots.
    """
    _check_lambda(lambda_)
    if lambda_ == 0:
        return PoissonTable(lambda_=0, slots=(PoissonSlot(k=0, probability=1.0, cumulative=1.0),))

    with localcontext() as ctx:
        ctx.prec = DECIMAL_PRECISION
        ctx.Emax = MAX_EMAX
        ctx.Emin = MIN_EMIN

        factorials = _Factorials()
        lam = Decimal(lambda_)
        exp_lambda = _power(Decimal(1).exp(), lambda_)
        max_k = lambda_ * MAX_K_FACTOR

        p0 = float(1 / exp_lambda)
        probabilities = [p0]
        remaining = 1.0 - p0
        start = 0 if p0 > EPSILON_UNIT else None

        k = 1
        lam_k = Decimal(1)
        while remaining > EPSILON_UNIT and k < max_k:
            lam_k *= lam
            p = float(lam_k / exp_lambda / factorials.ensure(k))
            if start is None and k <= lambda_ and p > EPSILON_UNIT:
                start = k
            remaining -= p
            probabilities.append(p)
            if k > lambda_ and p < EPSILON_REMAINING:
                break
            k += 1

    mode = min(lambda_, len(probabilities) - 1)
    probabilities[mode] += remaining

    slots = []
    cumulative = 0.0
    for k, p in enumerate(probabilities):
        cumulative += p
        slots.append(PoissonSlot(k=k, probability=p, cumulative=cumulative))

    logger.debug(
        "built poisson table: lambda=%d slots=%d start=%s folded=%.3g",
        lambda_,
        len(slots),
        start,
        remaining,
    )
    return PoissonTable(lambda_=lambda_, slots=tuple(slots), start=start or 0)


@dataclass(frozen=True)
class PoissonSampler(Distribution):
    """
    Poisson distribution - models count of events in a fixed interval.

    Good for: requests per tick, objects per batch, retries per session.
    """

    table: PoissonTable

    @property
    def lambda_(self) -> int:
        return self.table.lambda_

    def poll(self, rng: random.Random) -> int:
        if self.table.lambda_ <= 0:
            return 0
        r = rng.random()
        slots = self.table.slots
        i = bisect_left(slots, r, lo=self.table.start, key=_cumulative)
        if i >= len(slots):
            # Rounding left the last cumulative just under r
            return 0
        return slots[i].k

    def poll_at_scale(self, rng: random.Random, total: int, slice_: int) -> int:
        """
        Draw a count for an interval of ``total`` units when the rate is per ``slice_``.

        Sums one draw per whole slice, then adds a draw scaled by the leftover
        fraction and truncated. This is a heuristic: Poisson counts over a
        partial interval are not exactly a scaled draw.
        """
        if slice_ <= 0:
            raise ValueError(f"slice must be positive, got {slice_}")
        if total < 0:
            raise ValueError(f"total must be non-negative, got {total}")
        count, tail = divmod(total, slice_)
        result = sum(self.poll(rng) for _ in range(count))
        if tail > 0:
            result += (tail * self.poll(rng)) // slice_
        return result


def build_poisson_sampler(lambda_: int) -> PoissonSampler:
    """Build a sampler for an integer rate. Raises InvalidLambda."""
    return PoissonSampler(table=build_poisson_table(lambda_))
