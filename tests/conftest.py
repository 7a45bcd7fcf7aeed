#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ScaffoldWeaver v0.1.0

Pytest configuration and shared fixtures.

Author: ScaffoldWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import pytest

from scaffoldweaver.scaffolding_core import Contig, ContactStore, ContigLink, ScaffoldLayout


def make_contigs(sizes, prefix="tig"):
    """Contigs named tig0, tig1, ... with the given sizes."""
    return [Contig(idx=i, name=f"{prefix}{i}", size=size) for i, size in enumerate(sizes)]


@pytest.fixture
def contig_factory():
    """Factory building indexed contigs from a list of sizes."""
    return make_contigs


@pytest.fixture
def chain_store():
    """
    Five 10 kb contigs; tig0-tig1-tig2-tig3 linked in a chain, tig4 unlinked.
    """
    store = ContactStore(make_contigs([10000] * 5))
    for a, b in [(0, 1), (1, 2), (2, 3)]:
        store.record_link(f"tig{a}", f"tig{b}", '+', '+', 50, [20000, 30000])
    return store


@pytest.fixture
def anchoring_links():
    """
    Links over four 10 kb contigs.

    tig0(right) - tig1(left): 10 links
    tig1(right) - tig2(left): 8 links
    tig0(right) - tig2(left): 2 links (competing)
    tig2(right) - tig3(left): 1 link (isolated, never confident)
    """
    links = []
    links += [ContigLink(0, 9000, 1, 1000) for _ in range(10)]
    links += [ContigLink(1, 9000, 2, 1000) for _ in range(8)]
    links += [ContigLink(0, 9000, 2, 1000) for _ in range(2)]
    links += [ContigLink(2, 9000, 3, 1000)]
    return links


@pytest.fixture
def four_contig_layout():
    """Layout of four active 10 kb contigs with singleton paths."""
    layout = ScaffoldLayout(make_contigs([10000] * 4))
    layout.make_trivial_paths()
    return layout

# ScaffoldWeaver v0.1.0
# Any usage is subject to this software's license.
