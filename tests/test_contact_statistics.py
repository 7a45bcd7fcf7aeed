#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ScaffoldWeaver v0.1.0

Tests for contact statistics helpers.

Author: ScaffoldWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import math

import numpy as np
import pytest

from scaffoldweaver.scaffolding_utils.contact_statistics import (
    GOLDEN_ARRAY_BINS,
    GRLB,
    GRUB,
    bounded_harmonic_mean,
    golden_array,
    outlier_cutoff,
)


class TestGoldenArray:
    """Test golden-ratio distance binning."""

    def test_fixed_width(self):
        """Histogram always has the same number of bins."""
        assert len(golden_array([7000, 12000, 100000])) == GOLDEN_ARRAY_BINS
        assert len(golden_array([])) == GOLDEN_ARRAY_BINS

    def test_bin_placement(self):
        """Distances land in the bin of their golden-ratio exponent."""
        counts = golden_array([7000, 12000, 100000, 100000])
        assert counts[0] == 1  # phi^18 <= 7000 < phi^19
        assert counts[1] == 1  # phi^19 <= 12000 < phi^20
        assert counts[5] == 2  # phi^23 <= 100000 < phi^24
        assert counts.sum() == 4

    def test_out_of_range_distances_clamped(self):
        """Tiny, non-positive and huge distances go to the edge bins."""
        counts = golden_array([0, -5, 10, 10 ** 9])
        assert counts[0] == 3
        assert counts[-1] == 1

    def test_empty_is_zero(self):
        assert not golden_array([]).any()

    def test_deterministic(self):
        distances = [5800, 77000, 250000, 9000]
        np.testing.assert_array_equal(golden_array(distances), golden_array(distances))


class TestBoundedHarmonicMean:
    """Test bounded harmonic mean."""

    def test_identical_values(self):
        assert bounded_harmonic_mean([16384, 16384, 16384]) == 16384

    def test_harmonic_not_arithmetic(self):
        """Harmonic mean of 8192 and 32768 is 13107.2."""
        assert bounded_harmonic_mean([8192, 32768]) == 13107

    def test_values_clamped_to_bounds(self):
        """Values outside the bounds contribute the bound itself."""
        expected = math.floor(2 / (1 / GRLB + 1 / GRUB))
        assert bounded_harmonic_mean([1, 10 ** 9]) == expected

    def test_custom_bounds(self):
        assert bounded_harmonic_mean([1, 2, 3], 128, 256) == 128

    def test_empty_returns_zero(self):
        assert bounded_harmonic_mean([]) == 0

    def test_invalid_bounds(self):
        with pytest.raises(ValueError):
            bounded_harmonic_mean([10], 0, 100)
        with pytest.raises(ValueError):
            bounded_harmonic_mean([10], 100, 10)


class TestOutlierCutoff:
    """Test robust outlier bounds."""

    def test_known_values(self):
        """Median 3, MAD 1 gives 3 +/- 3.5 / 0.67449."""
        lower, upper = outlier_cutoff([1, 2, 3, 4, 100])
        spread = 3.5 / 0.67449
        assert lower == pytest.approx(3 - spread)
        assert upper == pytest.approx(3 + spread)

    def test_constant_vector_prunes_nothing(self):
        """A constant vector collapses to (m, m): no value is strictly below."""
        values = [2.0, 2.0, 2.0, 2.0]
        lower, upper = outlier_cutoff(values)
        assert lower == upper == 2.0
        assert not any(v < lower for v in values)

    def test_too_few_values(self):
        assert outlier_cutoff([]) == (-math.inf, math.inf)
        assert outlier_cutoff([1.0, 5.0]) == (-math.inf, math.inf)

    def test_nan_ignored(self):
        lower, upper = outlier_cutoff([1.0, 2.0, 3.0, float('nan')])
        spread = 3.5 / 0.67449
        assert lower == pytest.approx(2 - spread)
        assert upper == pytest.approx(2 + spread)

    def test_negative_infinity_is_an_outlier(self):
        """Unlinked contigs (log density -inf) fall below the bound."""
        lower, _ = outlier_cutoff([-math.inf, 1.0, 1.0, 1.0])
        assert -math.inf < lower

    def test_custom_threshold(self):
        lower, upper = outlier_cutoff([1, 2, 3, 4, 100], threshold=0.67449)
        assert lower == pytest.approx(2.0)
        assert upper == pytest.approx(4.0)

# ScaffoldWeaver v0.1.0
# Any usage is subject to this software's license.
