"""
Numeric constants and environment-derived defaults.

SIZEGEN_SEED seeds random sources created by the CLI and the convenience
source when set; SIZEGEN_CSV_SEPARATOR overrides the size/weight separator.
"""

import os

# Poisson truncation thresholds.
EPSILON_UNIT = 0.0000001
EPSILON_REMAINING = 0.000001
# Hard cap on the Poisson support: k < lambda * MAX_K_FACTOR.
MAX_K_FACTOR = 10
# Decimal digits kept while computing Poisson terms.
DECIMAL_PRECISION = 50

DEFAULT_SEPARATOR = ":"


def get_default_separator() -> str:
    """Size/weight separator for CSV bars: SIZEGEN_CSV_SEPARATOR or ':'."""
    return os.environ.get("SIZEGEN_CSV_SEPARATOR", "") or DEFAULT_SEPARATOR


def get_default_seed() -> int | None:
    """Seed from SIZEGEN_SEED, or None to seed from the OS."""
    raw = os.environ.get("SIZEGEN_SEED", "").strip()
    if not raw:
        return None
    try:
        return int(raw, 10)
    except ValueError:
        raise SystemExit("SIZEGEN_SEED must be a base-10 integer.") from None
