#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ScaffoldWeaver v0.1.0

Linkage Graph Builder unit tests.

Author: ScaffoldWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from dataclasses import replace

import pytest

from scaffoldweaver.scaffolding_core import (
    ContigLink,
    LinkageGraphBuilder,
    ScaffoldLayout,
    get_second_largest,
)
from scaffoldweaver.scaffolding_core.linkage_graph_module import two_largest


class TestSecondLargest:
    """Test the confidence denominator rule."""

    def test_shared_maximum_falls_back(self):
        """The edge itself is the top of both lists: use the next value down."""
        assert get_second_largest([5.0, 2.0], [5.0, 1.0]) == 2.0

    def test_shared_maximum_without_alternative(self):
        """No positive alternative: the maximum itself is the denominator."""
        assert get_second_largest([5.0, 0.0], [5.0, 0.0]) == 5.0

    def test_distinct_maxima(self):
        assert get_second_largest([5.0, 2.0], [3.0, 1.0]) == 3.0

    def test_two_largest(self):
        assert two_largest({1: 3.0, 2: 7.0, 3: 5.0}) == (7.0, 5.0)
        assert two_largest({1: 4.0}) == (4.0, 0.0)
        assert two_largest({}) == (0.0, 0.0)


class TestBuild:
    """Test raw graph construction."""

    def test_link_maps_to_nearest_ends(self, four_contig_layout):
        builder = LinkageGraphBuilder(four_contig_layout, [ContigLink(0, 9000, 1, 1000)] * 10)
        graph = builder.build()
        # tig0 right End (1) to tig1 left End (2), normalized by 10 kb x 10 kb
        assert graph[1][2] == pytest.approx(10 / 1e8)
        assert graph[2][1] == pytest.approx(10 / 1e8)
        assert set(graph) == {1, 2}

    def test_intra_contig_links_skipped(self, four_contig_layout):
        links = [
            ContigLink(0, 100, 0, 9000),  # sister Ends
            ContigLink(1, 100, 1, 200),  # same End
        ]
        graph = LinkageGraphBuilder(four_contig_layout, links).build()
        assert graph == {}

    def test_links_to_inactive_contigs_dropped(self, contig_factory):
        contigs = contig_factory([10000, 10000, 10000])
        contigs[2].is_active = False
        layout = ScaffoldLayout(contigs)
        layout.make_trivial_paths()
        links = [ContigLink(0, 9000, 2, 1000), ContigLink(2, 9000, 1, 1000)]
        assert LinkageGraphBuilder(layout, links).build() == {}

    def test_unknown_contig_dropped(self, four_contig_layout):
        links = [ContigLink(0, 9000, 17, 1000)]
        assert LinkageGraphBuilder(four_contig_layout, links).build() == {}

    def test_reversed_contig_flips_end(self, four_contig_layout):
        """A read near the start of a reversed contig sits at the right End."""
        four_contig_layout.reverse(four_contig_layout.paths[0])
        graph = LinkageGraphBuilder(four_contig_layout, [ContigLink(0, 1000, 1, 1000)]).build()
        assert set(graph) == {1, 2}


class TestConfidenceGraph:
    """Test confidence scoring and filtering."""

    def test_expected_confident_edges(self, four_contig_layout, anchoring_links):
        builder = LinkageGraphBuilder(four_contig_layout, anchoring_links)
        confidence = builder.make_confidence_graph(builder.build())
        assert confidence == {
            1: {2: pytest.approx(5.0)},
            2: {1: pytest.approx(5.0)},
            3: {4: pytest.approx(4.0)},
            4: {3: pytest.approx(4.0)},
        }

    def test_scale_invariance(self, contig_factory, anchoring_links):
        """Multiplying every link score by a constant keeps the same edges."""

        def confident_edges(links):
            layout = ScaffoldLayout(contig_factory([10000] * 4))
            layout.make_trivial_paths()
            builder = LinkageGraphBuilder(layout, links)
            confidence = builder.make_confidence_graph(builder.build())
            return {(a, b) for a, nb in confidence.items() for b in nb}

        scaled = [replace(link, score=7.5) for link in anchoring_links]
        assert confident_edges(anchoring_links) == confident_edges(scaled)

    def test_isolated_pair_not_confident(self, four_contig_layout):
        """A lone edge has confidence exactly 1 and is not kept."""
        builder = LinkageGraphBuilder(four_contig_layout, [ContigLink(2, 9000, 3, 1000)])
        assert builder.make_confidence_graph(builder.build()) == {}

    def test_weights_rescaled_in_place(self, four_contig_layout, anchoring_links):
        builder = LinkageGraphBuilder(four_contig_layout, anchoring_links)
        graph = builder.build()
        builder.make_confidence_graph(graph)
        # Competing edge 1-4: 2 / 8
        assert graph[1][4] == pytest.approx(0.25)

# ScaffoldWeaver v0.1.0
# Any usage is subject to this software's license.
