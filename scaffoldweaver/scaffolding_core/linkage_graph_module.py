#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ScaffoldWeaver v0.1.0

Linkage Graph Builder: contig-end adjacency graph with confidence scoring.

Steps:
1. Map every Hi-C link to the pair of Path Ends nearest to its two reads
2. Accumulate link scores into symmetric End-End edges
3. Normalize each edge by the product of its two Path lengths
4. Confidence pass: divide each edge by the second largest weight around
   both of its Ends and keep only edges that stay above 1

Graphs are plain adjacency tables: {end: {end: weight}}.

Author: ScaffoldWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .data_structures import ContigLink, ScaffoldLayout, ScaffoldPath, sister_end

logger = logging.getLogger(__name__)

Graph = Dict[int, Dict[int, float]]


def get_second_largest(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Second largest value across two top-2 lists.

    The edge being scored usually appears as the maximum of both lists, so
    when the two largest values are equal the next one down is used instead,
    provided it is positive.

    Args:
        a: (first, second) largest weights around one End
        b: (first, second) largest weights around the other End

    Returns:
        Confidence denominator
    """
    values = sorted(list(a) + list(b))
    largest, second_largest = values[3], values[2]
    if largest == second_largest and values[1] > 0:
        second_largest = values[1]
    return second_largest


def two_largest(neighbors: Mapping[int, float]) -> Tuple[float, float]:
    """Largest and second largest weights of an adjacency row."""
    first, second = 0.0, 0.0
    for score in neighbors.values():
        if score > first:
            first, second = score, first
        elif score > second:
            second = score
    return first, second


class LinkageGraphBuilder:
    """
    Builds End-level linkage graphs from position-level Hi-C links.

    Links are grouped by their first contig; only links of placed contigs
    contribute.
    """

    def __init__(self, layout: ScaffoldLayout, links: Iterable[ContigLink]):
        """
        Initialize the builder.

        Args:
            layout: Path arena holding the current contig placement
            links: Hi-C links between contigs of the layout
        """
        self.layout = layout
        self.links_by_contig: Dict[int, List[ContigLink]] = defaultdict(list)
        for link in links:
            self.links_by_contig[link.contig_a].append(link)
        self.logger = logging.getLogger(f"{__name__}.LinkageGraphBuilder")

    def link_to_ends(self, link: ContigLink) -> Tuple[Optional[int], Optional[int]]:
        """Ends nearest to both reads of a link (None for unplaced contigs)."""
        n = len(self.layout.contigs)
        if not (0 <= link.contig_a < n and 0 <= link.contig_b < n):
            return None, None
        return (
            self.layout.end_for_position(link.contig_a, link.pos_a),
            self.layout.end_for_position(link.contig_b, link.pos_b),
        )

    def build(self, paths: Optional[Sequence[ScaffoldPath]] = None) -> Graph:
        """
        Build the length-normalized linkage graph.

        Args:
            paths: Paths to bisect first (defaults to all layout Paths)

        Returns:
            Symmetric adjacency table of normalized link densities
        """
        if paths is None:
            paths = list(self.layout.paths.values())
        for path in paths:
            self.layout.bisect(path)

        graph: Graph = defaultdict(dict)
        n_used = 0
        n_skipped = 0
        n_dropped = 0
        for k, handle in enumerate(self.layout.path_of):
            if handle is None:
                continue
            for link in self.links_by_contig.get(k, ()):
                a, b = self.link_to_ends(link)
                if a is None or b is None:
                    n_dropped += 1
                    continue
                if a == b or sister_end(a) == b:
                    # Intra-path information now
                    n_skipped += 1
                    continue
                n_used += 1
                graph[a][b] = graph[a].get(b, 0.0) + link.score
                graph[b][a] = graph[b].get(a, 0.0) + link.score

        for a, neighbors in graph.items():
            length_a = self.layout.path_for_end(a).length
            for b in neighbors:
                length_b = self.layout.path_for_end(b).length
                neighbors[b] /= float(length_a) * float(length_b)

        n_edges = sum(len(neighbors) for neighbors in graph.values()) // 2
        self.logger.info(
            f"Graph contains {len(graph)} nodes and {n_edges} edges "
            f"(from {n_used} links, {n_skipped} links skipped)"
        )
        if n_dropped:
            self.logger.debug(f"Dropped {n_dropped} links touching unplaced contigs")
        return dict(graph)

    def make_confidence_graph(self, graph: Graph) -> Graph:
        """
        Rescale edges to confidences and keep the unambiguous ones.

        Every edge of `graph` is divided in place by the second largest
        weight around its two Ends; edges whose confidence exceeds 1 are
        copied into the returned graph.
        """
        top = {a: two_largest(neighbors) for a, neighbors in graph.items()}

        confidence_graph: Graph = {}
        for a, neighbors in graph.items():
            for b in neighbors:
                denominator = get_second_largest(top[a], top[b])
                if denominator <= 0:
                    continue
                neighbors[b] /= denominator
                if neighbors[b] > 1:
                    confidence_graph.setdefault(a, {})[b] = neighbors[b]

        n_edges = sum(len(neighbors) for neighbors in confidence_graph.values()) // 2
        self.logger.info(
            f"Confidence graph contains {len(confidence_graph)} nodes and {n_edges} edges"
        )
        return confidence_graph

# ScaffoldWeaver v0.1.0
# Any usage is subject to this software's license.
