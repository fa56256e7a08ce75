"""
sizegen - Discrete size and count generators for load simulation.

This package draws integer quantities (object sizes, event counts) that follow
a configured shape: a weighted histogram of size buckets, or a Poisson
distribution computed from an integer rate.
"""

__version__ = "1.0.0"
