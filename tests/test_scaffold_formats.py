#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ScaffoldWeaver v0.1.0

CLM / IDS / tour format unit tests.

Author: ScaffoldWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import pytest

from scaffoldweaver.io_utils import (
    ClmRecord,
    IdsRecord,
    ScaffoldFormatError,
    format_clm_record,
    format_tour,
    ids_path_for_clm,
    ids_to_contigs,
    parse_clm_line,
    parse_clm_lines,
    parse_ids_line,
    parse_ids_lines,
    parse_tour_lines,
    paths_to_tour_lines,
    read_clm_file,
    read_ids_file,
    read_tour_file,
    write_tour_file,
)
from scaffoldweaver.scaffolding_core import ScaffoldLayout


class TestClm:
    """Test CLM parsing."""

    def test_parse_line(self):
        record = parse_clm_line("tig00030676+ tig00077819-\t3\t126178 152952 35680\n")
        assert record == ClmRecord("tig00030676", "tig00077819", '+', '-', 3, [126178, 152952, 35680])

    def test_format_round_trip(self):
        line = "tigA- tigB+\t2\t100 200"
        assert format_clm_record(parse_clm_line(line)) == line

    def test_blank_lines_skipped(self):
        records = list(parse_clm_lines(["tigA+ tigB+\t1\t10\n", "\n", "tigA- tigB-\t1\t20\n"]))
        assert len(records) == 2

    def test_empty_distance_column(self):
        record = parse_clm_line("tigA+ tigB-\t0\t\n")
        assert record == ClmRecord("tigA", "tigB", '+', '-', 0, [])

    @pytest.mark.parametrize("line", [
        "tigA+ tigB+\t1",
        "tigA+\t1\t10",
        "tigA* tigB+\t1\t10",
        "tigA+ tigB+\tmany\t10",
        "tigA+ tigB+\t1\t10 x",
        "+ tigB+\t1\t10",
    ])
    def test_malformed_lines(self, line):
        with pytest.raises(ScaffoldFormatError):
            parse_clm_line(line)

    def test_format_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_clm_line("garbage")


class TestIds:
    """Test IDS parsing."""

    def test_parse_line(self):
        assert parse_ids_line("tig00015093\t46912") == IdsRecord("tig00015093", 46912, False)

    def test_recover_keyword(self):
        assert parse_ids_line("tig00035238\t46779\trecover").recover

    def test_malformed(self):
        with pytest.raises(ScaffoldFormatError):
            parse_ids_line("tig1")
        with pytest.raises(ScaffoldFormatError):
            parse_ids_line("tig1\tlong")

    def test_contigs_in_file_order(self):
        contigs = ids_to_contigs(parse_ids_lines(["b\t200\n", "\n", "a\t100\trecover\n"]))
        assert [(c.idx, c.name, c.size, c.recover) for c in contigs] == [
            (0, "b", 200, False),
            (1, "a", 100, True),
        ]
        assert all(c.is_active for c in contigs)

    def test_ids_path_for_clm(self, tmp_path):
        assert ids_path_for_clm(tmp_path / "group1.clm") == tmp_path / "group1.ids"


class TestTours:
    """Test tour parsing and formatting."""

    def test_parse_tours(self):
        tours = parse_tour_lines([
            "> first\n",
            "tig1+ tig2- tig3\n",
            ">second\n",
            "tig4?\n",
        ])
        assert list(tours) == ["first", "second"]
        assert tours["first"] == [("tig1", '+'), ("tig2", '-'), ("tig3", '?')]
        assert tours["second"] == [("tig4", '?')]

    def test_format_tour(self):
        assert format_tour("s", [("tig1", '+'), ("tig2", '-')]) == ["> s", "tig1+ tig2-"]

    def test_paths_to_tour_lines(self, contig_factory):
        layout = ScaffoldLayout(contig_factory([100, 100, 100]))
        layout.make_trivial_paths()
        layout.reverse(layout.paths[1])
        merged = layout.new_path([0, 1])
        lines = paths_to_tour_lines(layout, [merged, layout.paths[2]])
        assert lines == ["> scaffold_1", "tig0+ tig1-", "> scaffold_2", "tig2+"]


class TestFileHelpers:
    """Test filesystem readers and writers."""

    def test_read_files(self, tmp_path):
        clm = tmp_path / "g.clm"
        clm.write_text("tig0+ tig1-\t2\t100 200\n")
        ids = tmp_path / "g.ids"
        ids.write_text("tig0\t1000\ntig1\t2000\n")

        assert read_clm_file(clm) == [ClmRecord("tig0", "tig1", '+', '-', 2, [100, 200])]
        assert read_ids_file(ids_path_for_clm(clm)) == [
            IdsRecord("tig0", 1000), IdsRecord("tig1", 2000),
        ]

    def test_tour_file_round_trip(self, tmp_path):
        path = tmp_path / "out.tour"
        write_tour_file(path, format_tour("scaffold_1", [("tig0", '+'), ("tig1", '-')]))
        assert read_tour_file(path) == {"scaffold_1": [("tig0", '+'), ("tig1", '-')]}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_clm_file(tmp_path / "absent.clm")

# ScaffoldWeaver v0.1.0
# Any usage is subject to this software's license.
