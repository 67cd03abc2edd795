"""
Core Algorithm Modules

Contains the judgment-noise computation used by the services and CLI:
- calculate_variance: count, mean, population std dev and high-noise flag
- VarianceResult: Immutable noise summary
"""

from .variance_engine import DEFAULT_HIGH_NOISE_THRESHOLD, VarianceResult, calculate_variance, describe_noise

__all__ = [
    "DEFAULT_HIGH_NOISE_THRESHOLD",
    "VarianceResult",
    "calculate_variance",
    "describe_noise",
]
