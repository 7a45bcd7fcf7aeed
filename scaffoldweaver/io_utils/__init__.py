"""
I/O utilities for ScaffoldWeaver.

Parsers and formatters for the scaffolding boundary formats:
- CLM link evidence records
- IDS contig lists
- Tour orderings
"""

from .scaffold_formats import (
    ClmRecord,
    IdsRecord,
    ScaffoldFormatError,
    parse_clm_line,
    parse_clm_lines,
    format_clm_record,
    parse_ids_line,
    parse_ids_lines,
    ids_to_contigs,
    parse_tour_lines,
    format_tour,
    paths_to_tour_lines,
    ids_path_for_clm,
    read_ids_file,
    read_clm_file,
    read_tour_file,
    write_tour_file,
)

__all__ = [
    "ClmRecord",
    "IdsRecord",
    "ScaffoldFormatError",
    "parse_clm_line",
    "parse_clm_lines",
    "format_clm_record",
    "parse_ids_line",
    "parse_ids_lines",
    "ids_to_contigs",
    "parse_tour_lines",
    "format_tour",
    "paths_to_tour_lines",
    "ids_path_for_clm",
    "read_ids_file",
    "read_clm_file",
    "read_tour_file",
    "write_tour_file",
]
