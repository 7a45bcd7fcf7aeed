#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ScaffoldWeaver v0.1.0

Tour Refiner: leave-one-out pruning of a candidate contig ordering.

For each position of the tour, the contig is excised and the candidate is
re-scored in parallel. Contigs whose removal improves the score by an
outlying margin are deactivated, and the process repeats on the shrunken
tour for a bounded number of rounds.

Scoring convention: the scoring function returns a cost; the refiner
negates it so that larger is better.

Author: ScaffoldWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
import math
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from .data_structures import Contig, Tour
from ..scaffolding_utils.contact_statistics import outlier_cutoff

logger = logging.getLogger(__name__)

DISTANCE_LIMIT = 10000000
MIN_DELTA = 1e-9
LOG_DELTA_FLOOR = -9.0

ScoringFn = Callable[[Tour], float]
OutlierFn = Callable[[Sequence[float]], Tuple[float, float]]


class ScoringError(RuntimeError):
    """Raised when the tour scoring function fails or returns a non-finite value."""
    pass


def evaluate_tour(tour: Tour, limit: int = DISTANCE_LIMIT) -> float:
    """
    Cost of a tour under the link-density model.

    Contigs are laid end to end; each pair (i < j) whose midpoints are at
    most `limit` apart contributes links / midpoint distance. The negated
    sum is returned, so lower is better.

    Args:
        tour: Ordering to score
        limit: Maximum midpoint distance that contributes

    Returns:
        Cost (<= 0)
    """
    if len(tour) < 2:
        return 0.0

    sizes = np.array([tig.size for tig in tour.tigs], dtype=float)
    midpoints = np.cumsum(sizes) - sizes / 2
    links = tour.contact_matrix()

    rows, cols = np.triu_indices(len(sizes), k=1)
    distances = midpoints[cols] - midpoints[rows]
    mask = (distances > 0) & (distances <= limit)
    score = np.sum(links[rows[mask], cols[mask]] / distances[mask])
    return -float(score)


class TourRefiner:
    """
    Prunes contigs whose deletion clearly improves the tour score.

    The scoring function must be a pure function of the tour, since
    candidate tours are scored concurrently.
    """

    def __init__(
        self,
        contigs: Sequence[Contig],
        scoring_fn: ScoringFn = evaluate_tour,
        max_rounds: int = 2,
        num_workers: Optional[int] = None,
        min_delta: float = MIN_DELTA,
        log_delta_floor: float = LOG_DELTA_FLOOR,
        outlier_fn: OutlierFn = outlier_cutoff,
    ):
        """
        Initialize the refiner.

        Args:
            contigs: Contig universe; pruned contigs are deactivated in place
            scoring_fn: Tour cost function
            max_rounds: Maximum pruning rounds
            num_workers: Thread pool size (None lets the executor decide)
            min_delta: Smallest score gain treated as real
            log_delta_floor: Value recorded when the gain is below min_delta
            outlier_fn: Robust bound function over the log-delta vector
        """
        self.contigs = contigs
        self.scoring_fn = scoring_fn
        self.max_rounds = max_rounds
        self.num_workers = num_workers
        self.min_delta = min_delta
        self.log_delta_floor = log_delta_floor
        self.outlier_fn = outlier_fn
        self.logger = logging.getLogger(f"{__name__}.TourRefiner")

    def score(self, tour: Tour) -> float:
        """Negated cost of a tour; raises ScoringError on failure."""
        try:
            cost = self.scoring_fn(tour)
        except Exception as e:
            raise ScoringError(f"Scoring function failed: {e}") from e
        try:
            value = -float(cost)
        except (TypeError, ValueError) as e:
            raise ScoringError(f"Scoring function returned {cost!r}") from e
        if not math.isfinite(value):
            raise ScoringError(f"Scoring function returned non-finite value {cost!r}")
        return value

    def log_delta(self, delta_score: float) -> float:
        if delta_score > self.min_delta:
            return math.log10(delta_score)
        return self.log_delta_floor

    def compute_log_deltas(self, tour: Tour, tour_score: float) -> np.ndarray:
        """
        Log10 score gain of deleting each tour position, evaluated in parallel.

        Every task writes only its own slot; the executor joins all tasks
        before the vector is returned.
        """
        log_deltas = np.empty(len(tour), dtype=float)

        def run_single(position: int) -> float:
            candidate = tour.without(position)
            return tour_score - self.score(candidate)

        with ThreadPoolExecutor(max_workers=self.num_workers) as executor:
            futures = {executor.submit(run_single, i): i for i in range(len(tour))}
            for future in as_completed(futures):
                log_deltas[futures[future]] = self.log_delta(future.result())

        return log_deltas

    def drop_unknown_entries(self, tour: Tour) -> Tour:
        """Tour without entries whose idx falls outside the contig universe."""
        known = [tig for tig in tour.tigs if 0 <= tig.idx < len(self.contigs)]
        dropped = len(tour) - len(known)
        if dropped == 0:
            return tour
        self.logger.info(f"Dropped {dropped} tour entries naming unknown contigs")
        return Tour(tigs=known, matrix=tour.matrix)

    def prune_tour(self, tour: Tour) -> Tour:
        """
        Iteratively remove outlier contigs from a tour.

        Args:
            tour: Current ordering of active contigs

        Returns:
            The pruned tour (the input tour when nothing was removed)

        Raises:
            ScoringError: If the scoring function fails during a round
        """
        tour = self.drop_unknown_entries(tour)
        for round_number in range(1, self.max_rounds + 1):
            tour_score = self.score(tour)
            self.logger.info(f"Starting score: {tour_score:.5f}")

            log_deltas = self.compute_log_deltas(tour, tour_score)
            self.logger.debug(f"Round {round_number} log10 deltas: {log_deltas.tolist()}")

            lower, upper = self.outlier_fn(log_deltas)
            self.logger.info(f"Log10(delta_score) ~ [{lower:.5f}, {upper:.5f}]")

            invalid = 0
            for tig, value in zip(tour.tigs, log_deltas):
                if value < lower:
                    self.contigs[tig.idx].is_active = False
                    invalid += 1

            if invalid == 0:
                break
            self.logger.info(f"Inactivated {invalid} tigs with log10ds < {lower:.5f}")

            tour = Tour(
                tigs=[tig for tig in tour.tigs if self.contigs[tig.idx].is_active],
                matrix=tour.matrix,
            )
            self.report_active()

        return tour

    def report_active(self) -> Tuple[int, int]:
        active: List[Contig] = [contig for contig in self.contigs if contig.is_active]
        total_length = sum(contig.size for contig in active)
        self.logger.info(f"Active tigs: {len(active)} (length={total_length})")
        return len(active), total_length

# ScaffoldWeaver v0.1.0
# Any usage is subject to this software's license.
