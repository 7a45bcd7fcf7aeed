#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ScaffoldWeaver v0.1.0

Contact Store: aggregation of pairwise Hi-C link evidence.

Each incoming record describes the links between two contigs under one
orientation hypothesis (link count plus the list of implied distances).
The store keeps:
1. One best-evidence Contact per unordered contig pair (smallest bounded
   harmonic-mean distance wins, ties keep the existing record)
2. One golden-array histogram per oriented pair, materialized for both the
   forward key and its orientation-flipped reverse key

Author: ScaffoldWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .data_structures import (
    Contact,
    Contig,
    OrientedPair,
    Tour,
    TourEntry,
    flip_orientation,
)
from ..scaffolding_utils.contact_statistics import (
    GRLB,
    GRUB,
    bounded_harmonic_mean,
    golden_array,
)

logger = logging.getLogger(__name__)

HistogramFn = Callable[[Sequence[int]], np.ndarray]
MeanFn = Callable[[Sequence[int], int, int], int]


class ContactStore:
    """
    Aggregates contig-pair link records into contacts and oriented histograms.

    Records naming contigs outside the registered universe are dropped
    silently (counted in `discarded`); they are expected noise.
    """

    def __init__(
        self,
        contigs: Sequence[Contig],
        distance_lower_bound: int = GRLB,
        distance_upper_bound: int = GRUB,
        histogram_fn: HistogramFn = golden_array,
        mean_fn: MeanFn = bounded_harmonic_mean,
    ):
        """
        Initialize the store over a fixed contig universe.

        Args:
            contigs: Contigs in file order; contig.idx must equal its position
            distance_lower_bound: Lower clamp for the harmonic mean
            distance_upper_bound: Upper clamp for the harmonic mean
            histogram_fn: Distance binning function
            mean_fn: Bounded mean function (distances, lower, upper) -> int
        """
        self.contigs: List[Contig] = list(contigs)
        self.distance_lower_bound = distance_lower_bound
        self.distance_upper_bound = distance_upper_bound
        self.histogram_fn = histogram_fn
        self.mean_fn = mean_fn

        self.name_to_idx: Dict[str, int] = {}
        for position, contig in enumerate(self.contigs):
            if contig.idx != position:
                raise ValueError(
                    f"Contig {contig.name} has idx {contig.idx}, expected {position}"
                )
            self.name_to_idx[contig.name] = contig.idx

        self.contacts: Dict[Tuple[int, int], Contact] = {}
        self.oriented_contacts: Dict[OrientedPair, np.ndarray] = {}
        self.recorded = 0
        self.discarded = 0
        self.discarded_tour_entries = 0

        self.logger = logging.getLogger(f"{__name__}.ContactStore")

    def __len__(self) -> int:
        return len(self.contigs)

    # ========================================================================
    #                    INGESTION
    # ========================================================================

    def record_link(
        self,
        contig_a: str,
        contig_b: str,
        orient_a: str,
        orient_b: str,
        link_count: int,
        distances: Sequence[int],
    ) -> bool:
        """
        Record the links between two contigs under one orientation.

        Args:
            contig_a: Name of the first contig
            contig_b: Name of the second contig
            orient_a: '+' or '-' for contig_a
            orient_b: '+' or '-' for contig_b
            link_count: Number of links
            distances: Implied link distances under this orientation

        Returns:
            True if the record was stored, False if it was discarded
        """
        ai = self.name_to_idx.get(contig_a)
        bi = self.name_to_idx.get(contig_b)
        if ai is None or bi is None:
            self.discarded += 1
            self.logger.debug(
                f"Discarding link record {contig_a}{orient_a} {contig_b}{orient_b}: "
                f"contig not registered"
            )
            return False

        histogram = np.array(self.histogram_fn(distances))
        histogram.setflags(write=False)
        mean_distance = self.mean_fn(
            distances, self.distance_lower_bound, self.distance_upper_bound
        )
        strandedness = -1 if orient_a != orient_b else 1

        pair = (min(ai, bi), max(ai, bi))
        candidate = Contact(strandedness, link_count, mean_distance)
        existing = self.contacts.get(pair)
        if existing is None or existing.mean_distance > mean_distance:
            self.contacts[pair] = candidate

        self.oriented_contacts[OrientedPair(ai, bi, orient_a, orient_b)] = histogram
        self.oriented_contacts[
            OrientedPair(bi, ai, flip_orientation(orient_b), flip_orientation(orient_a))
        ] = histogram
        self.recorded += 1
        return True

    def ingest(self, records: Iterable) -> int:
        """
        Record a batch of pre-parsed link records.

        Each record exposes contig_a, contig_b, orient_a, orient_b,
        link_count and distances (see io_utils.ClmRecord).

        Returns:
            Number of records stored
        """
        stored = 0
        for record in records:
            if self.record_link(
                record.contig_a,
                record.contig_b,
                record.orient_a,
                record.orient_b,
                record.link_count,
                record.distances,
            ):
                stored += 1

        self.logger.info(
            f"Stored {stored} link records ({len(self.contacts)} contacts, "
            f"{len(self.oriented_contacts)} oriented contacts, "
            f"{self.discarded} discarded so far)"
        )
        return stored

    # ========================================================================
    #                    LOOKUPS
    # ========================================================================

    def best_contact(self, i: int, j: int) -> Optional[Contact]:
        """Best-evidence contact for the unordered pair (i, j), if any."""
        return self.contacts.get((min(i, j), max(i, j)))

    def oriented_histogram(self, i: int, j: int, oi: str, oj: str) -> Optional[np.ndarray]:
        """Golden-array histogram for contig i in orientation oi next to j in oj."""
        return self.oriented_contacts.get(OrientedPair(i, j, oi, oj))

    def link_totals(self) -> np.ndarray:
        """Sum of contact link counts touching each contig."""
        totals = np.zeros(len(self.contigs), dtype=np.int64)
        for (ai, bi), contact in self.contacts.items():
            totals[ai] += contact.link_count
            totals[bi] += contact.link_count
        return totals

    def contact_matrix(self) -> np.ndarray:
        """Symmetric N x N matrix of link counts indexed by contig idx."""
        n = len(self.contigs)
        matrix = np.zeros((n, n), dtype=np.int64)
        for (ai, bi), contact in self.contacts.items():
            matrix[ai, bi] = contact.link_count
            matrix[bi, ai] = contact.link_count
        return matrix

    # ========================================================================
    #                    TOURS
    # ========================================================================

    def resolve_tour_entry(self, entry: Any) -> Optional[int]:
        """
        Contig idx named by a tour entry, or None when the contig is unknown.

        Accepts a TourEntry, a contig name, or a (name, orientation) pair as
        produced by io_utils.parse_tour_lines.
        """
        if isinstance(entry, TourEntry):
            return entry.idx if 0 <= entry.idx < len(self.contigs) else None
        if isinstance(entry, tuple):
            entry = entry[0]
        return self.name_to_idx.get(entry)

    def tour_from_entries(self, entries: Iterable[Any]) -> Tour:
        """
        Build a Tour from an externally proposed ordering.

        Entries naming unregistered contigs are dropped and counted in
        `discarded_tour_entries`; they never abort the run.
        """
        tigs: List[TourEntry] = []
        dropped = 0
        for entry in entries:
            idx = self.resolve_tour_entry(entry)
            if idx is None:
                dropped += 1
                self.logger.debug(f"Dropping tour entry {entry!r}: contig not registered")
                continue
            tigs.append(TourEntry(idx, self.contigs[idx].size))

        self.discarded_tour_entries += dropped
        if dropped:
            self.logger.info(f"Dropped {dropped} tour entries naming unknown contigs")
        return Tour(tigs=tigs, matrix=self.contact_matrix())

# ScaffoldWeaver v0.1.0
# Any usage is subject to this software's license.
