#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ScaffoldWeaver v0.1.0

Contact statistics: golden-ratio distance histograms, bounded harmonic means
and robust outlier cutoffs shared by the scaffolding engine.

Author: ScaffoldWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
import math
from typing import Sequence, Tuple

import numpy as np
from scipy.stats import median_abs_deviation

logger = logging.getLogger(__name__)


# ============================================================================
#                         CONSTANTS
# ============================================================================

GOLDEN_RATIO = (1 + math.sqrt(5)) / 2
LOG_GOLDEN_RATIO = math.log(GOLDEN_RATIO)

# Golden array covers exponents 18..29 of the golden ratio
GOLDEN_ARRAY_FIRST_EXPONENT = 18
GOLDEN_ARRAY_BINS = 12

# phi^18 and phi^29, the plausible link distance range
GRLB = 5778
GRUB = 1149851

# Iglewicz and Hoaglin modified z-score cutoff
OUTLIER_THRESHOLD = 3.5
MAD_NORMAL_CONSISTENCY = 0.67449
MIN_OUTLIER_SAMPLES = 3


# ============================================================================
#                         HISTOGRAMS & MEANS
# ============================================================================

def golden_array(distances: Sequence[int]) -> np.ndarray:
    """
    Bin link distances into a fixed-width exponential histogram.

    Each distance d falls into bin floor(log_phi(d)), clamped to the exponent
    range [18, 29] and shifted so the first bin is index 0. Non-positive
    distances land in the first bin.

    Args:
        distances: Raw inter-contig link distances

    Returns:
        Integer array of length GOLDEN_ARRAY_BINS
    """
    values = np.maximum(np.asarray(distances, dtype=float), 1.0)
    exponents = np.floor(np.log(values) / LOG_GOLDEN_RATIO).astype(np.int64)
    last_exponent = GOLDEN_ARRAY_FIRST_EXPONENT + GOLDEN_ARRAY_BINS - 1
    bins = np.clip(exponents, GOLDEN_ARRAY_FIRST_EXPONENT, last_exponent)
    bins -= GOLDEN_ARRAY_FIRST_EXPONENT
    return np.bincount(bins, minlength=GOLDEN_ARRAY_BINS)


def bounded_harmonic_mean(
    distances: Sequence[int],
    lower_bound: int = GRLB,
    upper_bound: int = GRUB,
) -> int:
    """
    Harmonic mean of distances clamped into [lower_bound, upper_bound].

    Args:
        distances: Raw link distances
        lower_bound: Smallest value a distance may contribute (must be > 0)
        upper_bound: Largest value a distance may contribute

    Returns:
        Floor of n / sum(1/x); 0 for an empty sequence
    """
    if lower_bound <= 0 or upper_bound < lower_bound:
        raise ValueError(
            f"Invalid distance bounds [{lower_bound}, {upper_bound}]"
        )

    values = np.clip(np.asarray(distances, dtype=float), lower_bound, upper_bound)
    if values.size == 0:
        return 0
    return int(math.floor(values.size / np.sum(1.0 / values)))


# ============================================================================
#                         OUTLIER BOUNDS
# ============================================================================

def outlier_cutoff(
    values: Sequence[float],
    threshold: float = OUTLIER_THRESHOLD,
) -> Tuple[float, float]:
    """
    Robust (median/MAD) lower and upper outlier bounds.

    Returns median -/+ threshold / 0.67449 * MAD. NaN values are ignored.
    Degenerate inputs (fewer than MIN_OUTLIER_SAMPLES usable values, or a
    non-finite median or MAD) yield (-inf, +inf) so that nothing is pruned.
    A constant vector yields (m, m), which also prunes nothing under a
    strict "< lower" test.

    Args:
        values: Sample to bound
        threshold: Modified z-score cutoff

    Returns:
        (lower_bound, upper_bound)
    """
    sample = np.asarray(values, dtype=float)
    sample = sample[~np.isnan(sample)]
    if sample.size < MIN_OUTLIER_SAMPLES:
        logger.debug(f"Outlier cutoff skipped: only {sample.size} values")
        return -math.inf, math.inf

    median = float(np.median(sample))
    if not math.isfinite(median):
        return -math.inf, math.inf

    mad = float(median_abs_deviation(sample, scale=1.0))
    if not math.isfinite(mad):
        return -math.inf, math.inf

    spread = threshold / MAD_NORMAL_CONSISTENCY * mad
    return median - spread, median + spread

# ScaffoldWeaver v0.1.0
# Any usage is subject to this software's license.
