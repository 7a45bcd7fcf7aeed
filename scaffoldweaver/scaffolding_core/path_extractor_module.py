#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ScaffoldWeaver v0.1.0

Path Extractor: resolves a confidence graph over contig Ends into linear
scaffold Paths.

Walks alternate between sister edges (weight 0, joining the two Ends of a
Path) and confidence edges (weight > 1 in a confidence graph). For each
unvisited End the extractor walks upstream; a walk that runs into a visited
End is a cycle and is cut at its weakest qualifying edge, otherwise a second
downstream walk is stitched onto the reversed upstream walk. The sister
edges of the resulting edge sequence spell out the merged Path.

Neighbor choice: the heaviest remaining edge, ties going to the lowest End
handle. Start Ends are visited in ascending handle order, so the output is
reproducible for a given graph.

The Anchorer drives repeated build / confidence / extraction rounds.

Author: ScaffoldWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
from typing import Iterable, List, NamedTuple, Set, Tuple

from .data_structures import (
    ContigLink,
    ScaffoldLayout,
    ScaffoldPath,
    is_right_end,
    sister_end,
)
from .linkage_graph_module import Graph, LinkageGraphBuilder

logger = logging.getLogger(__name__)


# ============================================================================
#                         EDGE SEQUENCES
# ============================================================================

class Edge(NamedTuple):
    """Directed traversal step between two Ends."""
    a: int
    b: int
    weight: float

    @property
    def is_sister(self) -> bool:
        return self.weight == 0

    @property
    def is_reverse(self) -> bool:
        """True when the step leaves its Path through the right End."""
        return is_right_end(self.a)


def reverse_edges(edges: List[Edge]) -> List[Edge]:
    """The same walk traversed in the opposite direction."""
    return [Edge(edge.b, edge.a, edge.weight) for edge in reversed(edges)]


def break_cycle(edges: List[Edge]) -> List[Edge]:
    """
    Open a cyclic walk at its weakest edge with weight > 1.

    The walk is rotated to start right after the removed edge. When no edge
    qualifies, the first edge of the walk is removed.
    """
    min_i = 0
    min_weight = float('inf')
    for i, edge in enumerate(edges):
        if edge.weight > 1 and edge.weight < min_weight:
            min_i, min_weight = i, edge.weight
    return edges[min_i + 1:] + edges[:min_i]


def walk(
    graph: Graph,
    start: int,
    visited: Set[int],
    visit_sister: bool,
) -> Tuple[List[Edge], bool]:
    """
    Depth-first walk alternating sister and confidence edges.

    Args:
        graph: Confidence graph
        start: End to start from
        visited: Ends seen so far (updated in place)
        visit_sister: Whether the first step follows the sister edge

    Returns:
        (edges walked, whether the walk ran into a visited End)
    """
    edges: List[Edge] = []
    a = start
    while True:
        if a in visited:
            return edges, True
        visited.add(a)

        if visit_sister:
            b = sister_end(a)
            edges.append(Edge(a, b, 0.0))
        else:
            neighbors = graph.get(a)
            if not neighbors:
                return edges, False
            b, weight = max(neighbors.items(), key=lambda item: (item[1], -item[0]))
            edges.append(Edge(a, b, weight))
        a = b
        visit_sister = not visit_sister


# ============================================================================
#                         PATH EXTRACTION
# ============================================================================

class PathExtractor:
    """Turns confidence graphs into merged Paths on a ScaffoldLayout."""

    def __init__(self, layout: ScaffoldLayout):
        self.layout = layout
        self.logger = logging.getLogger(f"{__name__}.PathExtractor")

    def merge_path(self, edges: List[Edge]) -> ScaffoldPath:
        """
        Build a single Path from the sister edges of an edge sequence.

        Each sister edge contributes the contigs of its Path, reversed first
        when the edge runs right to left.
        """
        contigs: List[int] = []
        for edge in edges:
            if not edge.is_sister:
                continue
            path = self.layout.path_for_end(edge.a)
            if edge.is_reverse:
                self.layout.reverse(path)
            contigs.extend(path.contigs)
        return self.layout.new_path(contigs)

    def generate_path_and_cycle(self, graph: Graph) -> List[ScaffoldPath]:
        """
        Merge every chain of the confidence graph into one Path.

        Ends without confidence edges keep their current Path.

        Returns:
            All Paths currently owning contigs
        """
        visited: Set[int] = set()
        n_cycles = 0
        for a in sorted(graph):
            if a in visited:
                continue
            upstream, is_cycle = walk(graph, a, visited, True)
            if is_cycle:
                n_cycles += 1
                edges = break_cycle(upstream)
            else:
                visited.discard(a)
                downstream, _ = walk(graph, a, visited, False)
                edges = reverse_edges(upstream) + downstream
            self.merge_path(edges)

        if n_cycles:
            self.logger.info(f"Broke {n_cycles} cycles")
        return self.get_unique_paths()

    def get_unique_paths(self) -> List[ScaffoldPath]:
        """Deduplicated Paths, with singleton/complex summary counts logged."""
        paths = self.layout.unique_paths()
        n_singleton = sum(1 for path in paths if path.is_singleton)
        n_complex = len(paths) - n_singleton
        n_singleton_contigs = n_singleton
        n_complex_contigs = sum(len(path.contigs) for path in paths if not path.is_singleton)
        self.logger.info(
            f"{len(paths)} paths (nComplex={n_complex} nSingleton={n_singleton}), "
            f"{n_complex_contigs + n_singleton_contigs} contigs "
            f"(nComplex={n_complex_contigs} nSingleton={n_singleton_contigs})"
        )
        return paths


# ============================================================================
#                         ITERATIVE ANCHORING
# ============================================================================

class Anchorer:
    """
    Iterative merging of contigs into scaffolds.

    Starts from singleton Paths and repeats graph construction, confidence
    filtering and path extraction until the Path count stops shrinking.
    """

    def __init__(
        self,
        layout: ScaffoldLayout,
        links: Iterable[ContigLink],
        max_rounds: int = 8,
    ):
        self.layout = layout
        self.builder = LinkageGraphBuilder(layout, links)
        self.extractor = PathExtractor(layout)
        self.max_rounds = max_rounds
        self.logger = logging.getLogger(f"{__name__}.Anchorer")

    def run_round(self, paths: List[ScaffoldPath]) -> List[ScaffoldPath]:
        graph = self.builder.build(paths)
        confidence_graph = self.builder.make_confidence_graph(graph)
        return self.extractor.generate_path_and_cycle(confidence_graph)

    def run(self) -> List[ScaffoldPath]:
        """Anchor all active contigs. Returns the final Paths."""
        paths = self.layout.make_trivial_paths()
        self.logger.info(f"Starting anchoring with {len(paths)} singleton paths")

        for round_number in range(1, self.max_rounds + 1):
            merged = self.run_round(paths)
            self.logger.info(f"Round {round_number}: {len(paths)} -> {len(merged)} paths")
            if len(merged) >= len(paths):
                paths = merged
                break
            paths = merged
        return paths

# ScaffoldWeaver v0.1.0
# Any usage is subject to this software's license.
