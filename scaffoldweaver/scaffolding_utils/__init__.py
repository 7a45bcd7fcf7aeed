"""
Scaffolding utilities for ScaffoldWeaver.

Statistical helpers consumed by the scaffolding engine:
- Golden-ratio link distance histograms
- Bounded harmonic mean of link distances
- Robust outlier cutoffs
"""

from .contact_statistics import (
    golden_array,
    bounded_harmonic_mean,
    outlier_cutoff,
    GOLDEN_ARRAY_BINS,
    GRLB,
    GRUB,
    OUTLIER_THRESHOLD,
)

__all__ = [
    "golden_array",
    "bounded_harmonic_mean",
    "outlier_cutoff",
    "GOLDEN_ARRAY_BINS",
    "GRLB",
    "GRUB",
    "OUTLIER_THRESHOLD",
]
