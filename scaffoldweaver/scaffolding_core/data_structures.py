#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ScaffoldWeaver v0.1.0

Core data structures for Hi-C scaffolding.

Contains:
- Contig, Contact and oriented-pair keys built from link evidence
- TourEntry / Tour candidate orderings scored by the tour refiner
- ContigLink position-level Hi-C links used by the anchoring graph
- ScaffoldPath / ScaffoldLayout, an arena of Paths and their Ends

End handles: every Path with handle p owns Ends 2p (left) and 2p + 1 (right).
Singleton Paths reuse the contig index as their handle, so contig k starts
with Ends 2k and 2k + 1. The sister of End h is always h ^ 1.

Author: ScaffoldWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional, Sequence

import numpy as np

logger = logging.getLogger(__name__)


# ============================================================================
#                         ORIENTATION HELPERS
# ============================================================================

FORWARD = '+'
REVERSE = '-'
UNKNOWN = '?'
ORIENTATIONS = (FORWARD, REVERSE)


def flip_orientation(orientation: str) -> str:
    """Map '+' to '-' and anything else to '+'."""
    if orientation == REVERSE:
        return FORWARD
    return REVERSE


# ============================================================================
#                         CONTACT EVIDENCE
# ============================================================================

@dataclass
class Contig:
    """
    A contig to be ordered.

    Attributes:
        idx: Stable index, key into every matrix of the run
        name: Contig identifier
        size: Length in bases
        is_active: Whether the contig is retained for scaffolding
        recover: IDS 'recover' flag (less confident membership)
    """
    idx: int
    name: str
    size: int
    is_active: bool = True
    recover: bool = False


@dataclass(frozen=True)
class Contact:
    """
    Best-evidence contact for an unordered contig pair.

    Attributes:
        strandedness: +1 if the orientations agree, -1 otherwise
        link_count: Number of links of the chosen record
        mean_distance: Bounded harmonic mean of the link distances
    """
    strandedness: int
    link_count: int
    mean_distance: int


class OrientedPair(NamedTuple):
    """Key of an oriented contact: (contig_a, contig_b, orient_a, orient_b)."""
    ai: int
    bi: int
    ao: str
    bo: str


# ============================================================================
#                         TOURS
# ============================================================================

class TourEntry(NamedTuple):
    """A contig in a tour: its index and size."""
    idx: int
    size: int


@dataclass
class Tour:
    """
    Candidate ordering of active contigs.

    The matrix covers the whole contig universe and is indexed by contig idx;
    it is treated as read-only and shared by derived tours.
    """
    tigs: List[TourEntry] = field(default_factory=list)
    matrix: np.ndarray = field(default_factory=lambda: np.zeros((0, 0), dtype=np.int64))

    def __len__(self) -> int:
        return len(self.tigs)

    @property
    def indices(self) -> List[int]:
        return [tig.idx for tig in self.tigs]

    def without(self, position: int) -> "Tour":
        """Copy of the tour with the entry at `position` excised."""
        return Tour(
            tigs=self.tigs[:position] + self.tigs[position + 1:],
            matrix=self.matrix,
        )

    def contact_matrix(self) -> np.ndarray:
        """Contact counts restricted to the tour members, in tour order."""
        idx = self.indices
        if not idx:
            return np.zeros((0, 0), dtype=self.matrix.dtype)
        return self.matrix[np.ix_(idx, idx)]


# ============================================================================
#                         ANCHORING GRAPH
# ============================================================================

@dataclass(frozen=True)
class ContigLink:
    """
    A single Hi-C link between two contigs.

    Attributes:
        contig_a: Index of the first contig
        pos_a: 0-based position of the read on contig_a
        contig_b: Index of the second contig
        pos_b: 0-based position of the mate on contig_b
        score: Contribution to the edge weight
    """
    contig_a: int
    pos_a: int
    contig_b: int
    pos_b: int
    score: float = 1.0


def sister_end(end: int) -> int:
    return end ^ 1


def path_handle(end: int) -> int:
    return end >> 1


def is_right_end(end: int) -> bool:
    return bool(end & 1)


@dataclass
class ScaffoldPath:
    """
    Ordered, oriented chain of contigs.

    Attributes:
        handle: Arena handle; Ends are 2 * handle and 2 * handle + 1
        contigs: Contig indices, left to right
        length: Sum of member contig sizes
    """
    handle: int
    contigs: List[int] = field(default_factory=list)
    length: int = 0

    @property
    def left_end(self) -> int:
        return 2 * self.handle

    @property
    def right_end(self) -> int:
        return 2 * self.handle + 1

    @property
    def is_singleton(self) -> bool:
        return len(self.contigs) == 1


class ScaffoldLayout:
    """
    Arena of Paths plus the per-contig placement arrays.

    path_of[k] is the handle of the Path that owns contig k (None when the
    contig is not placed), orientation[k] is +1/-1 and offset[k] is the start
    coordinate of contig k inside its Path.
    """

    def __init__(self, contigs: Sequence[Contig]):
        self.contigs = list(contigs)
        n = len(self.contigs)
        self.sizes = [contig.size for contig in self.contigs]
        self.orientation = [1] * n
        self.offset = [0] * n
        self.path_of: List[Optional[int]] = [None] * n
        self.paths: Dict[int, ScaffoldPath] = {}
        self._next_handle = n

    def make_trivial_paths(self) -> List[ScaffoldPath]:
        """Reset the layout to one singleton Path per active contig."""
        n = len(self.contigs)
        self.orientation = [1] * n
        self.offset = [0] * n
        self.path_of = [None] * n
        self.paths = {}
        self._next_handle = n

        for contig in self.contigs:
            if not contig.is_active:
                continue
            path = ScaffoldPath(handle=contig.idx, contigs=[contig.idx])
            self.paths[path.handle] = path
            self.path_of[contig.idx] = path.handle
            self.bisect(path)
        return list(self.paths.values())

    def new_path(self, contig_ids: Sequence[int]) -> ScaffoldPath:
        """Create a Path over contig_ids and reassign them to it."""
        path = ScaffoldPath(handle=self._next_handle, contigs=list(contig_ids))
        self._next_handle += 1
        for k in path.contigs:
            previous = self.path_of[k]
            if previous is not None:
                self.paths.pop(previous, None)
            self.path_of[k] = path.handle
        self.paths[path.handle] = path
        self.bisect(path)
        return path

    def path_for_end(self, end: int) -> ScaffoldPath:
        return self.paths[path_handle(end)]

    def bisect(self, path: ScaffoldPath) -> None:
        """Recompute the Path length and the offset of every member."""
        position = 0
        for k in path.contigs:
            self.offset[k] = position
            position += self.sizes[k]
        path.length = position

    def reverse(self, path: ScaffoldPath) -> None:
        """Flip member order and each member's orientation."""
        path.contigs.reverse()
        for k in path.contigs:
            self.orientation[k] = -self.orientation[k]
        self.bisect(path)

    def end_for_position(self, contig: int, pos: int) -> Optional[int]:
        """
        End of the owning Path nearest to a position on a contig.

        Returns None when the contig is not placed in any Path.
        """
        handle = self.path_of[contig]
        if handle is None:
            return None
        path = self.paths[handle]
        if self.orientation[contig] > 0:
            path_pos = self.offset[contig] + pos
        else:
            path_pos = self.offset[contig] + self.sizes[contig] - pos
        if path_pos < path.length / 2:
            return path.left_end
        return path.right_end

    def unique_paths(self) -> List[ScaffoldPath]:
        """Paths currently owning at least one contig, in contig order."""
        seen = set()
        paths = []
        for handle in self.path_of:
            if handle is None or handle in seen:
                continue
            seen.add(handle)
            paths.append(self.paths[handle])
        return paths

# ScaffoldWeaver v0.1.0
# Any usage is subject to this software's license.
