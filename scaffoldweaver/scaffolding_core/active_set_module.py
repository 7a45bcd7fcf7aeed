#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ScaffoldWeaver v0.1.0

Active-Set Selector: decides which contigs carry enough Hi-C signal to be
ordered.

Two independent passes, both of which only ever deactivate:
1. Link density: log10(total links / min(size, cap)) below the robust lower
   bound, for contigs smaller than 10 x min_size
2. Size: contigs shorter than min_size

The survivors seed the initial Tour in original order.

Author: ScaffoldWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
from typing import Callable, Sequence, Tuple

import numpy as np

from .contact_store_module import ContactStore
from .data_structures import Tour, TourEntry
from ..scaffolding_utils.contact_statistics import outlier_cutoff

logger = logging.getLogger(__name__)

MIN_SIZE = 10000
DENSITY_SIZE_CAP = 500000

OutlierFn = Callable[[Sequence[float]], Tuple[float, float]]


class ActiveSetSelector:
    """Statistical filter marking contigs eligible or ineligible for scaffolding."""

    def __init__(
        self,
        store: ContactStore,
        min_size: int = MIN_SIZE,
        density_size_cap: int = DENSITY_SIZE_CAP,
        outlier_fn: OutlierFn = outlier_cutoff,
    ):
        """
        Initialize the selector.

        Args:
            store: Populated contact store; its contigs are flagged in place
            min_size: Size cutoff; density pruning only touches contigs
                below 10 x min_size
            density_size_cap: Size cap in the density denominator
            outlier_fn: Robust bound function over the density vector
        """
        self.store = store
        self.contigs = store.contigs
        self.min_size = min_size
        self.density_size_cap = density_size_cap
        self.outlier_fn = outlier_fn
        self.logger = logging.getLogger(f"{__name__}.ActiveSetSelector")

    def compute_link_densities(self) -> np.ndarray:
        """
        Log10 inter-contig link density per contig.

        Contigs without links get -inf.
        """
        totals = self.store.link_totals().astype(float)
        sizes = np.array(
            [min(contig.size, self.density_size_cap) for contig in self.contigs],
            dtype=float,
        )
        with np.errstate(divide='ignore', invalid='ignore'):
            return np.log10(totals / sizes)

    def prune_by_density(self) -> int:
        """Deactivate low-density contigs that are not large. Returns the count."""
        densities = self.compute_link_densities()
        lower, upper = self.outlier_fn(densities)
        self.logger.info(f"Log10(link_densities) ~ [{lower:.5f}, {upper:.5f}]")

        invalid = 0
        for contig, density in zip(self.contigs, densities):
            if not contig.is_active:
                continue
            if density < lower and contig.size < self.min_size * 10:
                contig.is_active = False
                invalid += 1

        self.logger.info(
            f"Inactivated {invalid} tigs with log10_density < {lower:.5f}"
        )
        return invalid

    def prune_by_size(self) -> int:
        """Deactivate contigs shorter than min_size. Returns the count."""
        invalid = 0
        for contig in self.contigs:
            if contig.is_active and contig.size < self.min_size:
                contig.is_active = False
                invalid += 1

        self.logger.info(f"Inactivated {invalid} tigs with size < {self.min_size}")
        return invalid

    def report_active(self) -> Tuple[int, int]:
        """Log and return (number of active contigs, their total length)."""
        active = [contig for contig in self.contigs if contig.is_active]
        total_length = sum(contig.size for contig in active)
        self.logger.info(f"Active tigs: {len(active)} (length={total_length})")
        return len(active), total_length

    def build_tour(self) -> Tour:
        """Tour of the currently active contigs in original order."""
        tigs = [
            TourEntry(contig.idx, contig.size)
            for contig in self.contigs
            if contig.is_active
        ]
        return Tour(tigs=tigs, matrix=self.store.contact_matrix())

    def activate(self) -> Tour:
        """Run both pruning passes and seed the initial tour."""
        self.report_active()
        self.prune_by_density()
        self.prune_by_size()
        self.report_active()
        return self.build_tour()

# ScaffoldWeaver v0.1.0
# Any usage is subject to this software's license.
