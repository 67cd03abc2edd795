"""
Judgment Variance (Noise) Engine

Turns the blind scores submitted for one decision into a noise signal:
count, mean, population standard deviation and a high-noise flag.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

import numpy as np

# Std dev on the 1-10 scale above which the group is considered to disagree
DEFAULT_HIGH_NOISE_THRESHOLD = 2.0


@dataclass(frozen=True)
class VarianceResult:
    """
    Noise summary for a set of judgments.

    Attributes:
        count: Number of scores
        mean: Arithmetic mean (0.0 when there are no scores)
        std_dev: Population standard deviation (0.0 when count < 2)
        is_high_noise: True when std_dev exceeds the high-noise threshold
    """

    count: int
    mean: float
    std_dev: float
    is_high_noise: bool

    def to_dict(self) -> Dict[str, Any]:
        """Convert to API dictionary (camelCase keys)"""
        return {
            "count": self.count,
            "mean": self.mean,
            "stdDev": self.std_dev,
            "isHighNoise": self.is_high_noise,
        }


EMPTY_RESULT = VarianceResult(count=0, mean=0.0, std_dev=0.0, is_high_noise=False)


def _clean_scores(scores: Optional[Iterable[Any]]) -> np.ndarray:
    if scores is None:
        return np.empty(0, dtype=np.float64)

    values = []
    for score in scores:
        if score is None or isinstance(score, bool):
            continue
        try:
            value = float(score)
        except (TypeError, ValueError, OverflowError):
            continue
        if math.isfinite(value):
            values.append(value)

    # Sorted so that summation order, and therefore every output bit, is independent of input order
    return np.sort(np.asarray(values, dtype=np.float64))


def calculate_variance(
    scores: Optional[Iterable[Any]],
    high_noise_threshold: float = DEFAULT_HIGH_NOISE_THRESHOLD,
) -> VarianceResult:
    """
    Compute the noise signal for a sequence of judgment scores.

    Two-pass computation: mean first, then the mean squared deviation from it,
    then the square root (population form, divides by N).

    Range validation is left to the ingestion layer; entries that are not
    finite numbers are ignored so sparse or dirty rows never raise.

    Args:
        scores: Judgment scores, expected in [1, 10]
        high_noise_threshold: Std dev strictly above this value flags high noise

    Returns:
        VarianceResult

    Example:
        >>> calculate_variance([1, 10, 1, 10])
        VarianceResult(count=4, mean=5.5, std_dev=4.5, is_high_noise=True)
    """
    values = _clean_scores(scores)
    count = int(values.size)

    if count == 0:
        return EMPTY_RESULT

    mean = float(values.sum() / count)

    if count < 2:
        return VarianceResult(count=count, mean=mean, std_dev=0.0, is_high_noise=False)

    deviations = values - mean
    variance = float(np.sum(deviations * deviations) / count)
    std_dev = math.sqrt(variance)

    return VarianceResult(
        count=count,
        mean=mean,
        std_dev=std_dev,
        is_high_noise=std_dev > high_noise_threshold,
    )


def describe_noise(result: VarianceResult) -> str:
    """Human-readable one-liner used in logs and prompts"""
    if result.count == 0:
        return "No judgments submitted yet"
    if result.count == 1:
        return f"1 judgment (score {result.mean:g}), no spread yet"
    level = "HIGH noise" if result.is_high_noise else "within tolerance"
    return f"{result.count} judgments, mean {result.mean:.2f}, std dev {result.std_dev:.2f} ({level})"
