#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ScaffoldWeaver v0.1.0

Scaffolding boundary formats.

CLM (link evidence), one record per oriented contig pair:
    tig00030676+ tig00077819-\t7\t126178 152952 152952 35680 118923 98367 98367

IDS (contigs to order), optional 'recover' keyword in the third column:
    tig00015093\t46912
    tig00035238\t46779\trecover

Tour (ordering), a header followed by oriented contigs:
    > name
    contig1+ contig2- contig3?

Line-level parsers and formatters are pure; the read_* helpers are the only
functions touching the filesystem.

Author: ScaffoldWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
from collections import OrderedDict
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, NamedTuple, Sequence, Tuple, Union

from ..scaffolding_core.data_structures import (
    FORWARD,
    ORIENTATIONS,
    REVERSE,
    UNKNOWN,
    Contig,
    ScaffoldLayout,
    ScaffoldPath,
)

logger = logging.getLogger(__name__)

TOUR_ORIENTATIONS = (FORWARD, REVERSE, UNKNOWN)


class ScaffoldFormatError(ValueError):
    """Raised when a CLM, IDS or tour line cannot be parsed."""
    pass


class ClmRecord(NamedTuple):
    """One CLM line: links between two oriented contigs."""
    contig_a: str
    contig_b: str
    orient_a: str
    orient_b: str
    link_count: int
    distances: List[int]


class IdsRecord(NamedTuple):
    """One IDS line: a contig to be ordered."""
    name: str
    size: int
    recover: bool = False


# ============================================================================
#                         CLM
# ============================================================================

def _split_oriented(token: str) -> Tuple[str, str]:
    return token[:-1], token[-1]


def parse_clm_line(line: str) -> ClmRecord:
    """
    Parse a single CLM line.

    Raises:
        ScaffoldFormatError: On malformed input
    """
    words = line.rstrip('\r\n').split('\t')
    if len(words) < 3:
        raise ScaffoldFormatError(f"Expected 3 tab-separated columns in CLM line: {line!r}")

    pair = words[0].split()
    if len(pair) != 2:
        raise ScaffoldFormatError(f"Expected two oriented contigs in CLM line: {line!r}")
    contig_a, orient_a = _split_oriented(pair[0])
    contig_b, orient_b = _split_oriented(pair[1])
    if orient_a not in ORIENTATIONS or orient_b not in ORIENTATIONS or not contig_a or not contig_b:
        raise ScaffoldFormatError(f"Invalid contig orientation in CLM line: {line!r}")

    try:
        link_count = int(words[1])
        distances = [int(d) for d in words[2].split()]
    except ValueError as e:
        raise ScaffoldFormatError(f"Invalid number in CLM line {line!r}: {e}") from e

    return ClmRecord(contig_a, contig_b, orient_a, orient_b, link_count, distances)


def format_clm_record(record: ClmRecord) -> str:
    distances = ' '.join(str(d) for d in record.distances)
    return (
        f"{record.contig_a}{record.orient_a} {record.contig_b}{record.orient_b}"
        f"\t{record.link_count}\t{distances}"
    )


def parse_clm_lines(lines: Iterable[str]) -> Iterator[ClmRecord]:
    for line in lines:
        if line.strip():
            yield parse_clm_line(line)


# ============================================================================
#                         IDS
# ============================================================================

def parse_ids_line(line: str) -> IdsRecord:
    """
    Parse a single IDS line.

    Raises:
        ScaffoldFormatError: On malformed input
    """
    words = line.split()
    if len(words) < 2:
        raise ScaffoldFormatError(f"Expected name and size in IDS line: {line!r}")
    try:
        size = int(words[1])
    except ValueError as e:
        raise ScaffoldFormatError(f"Invalid size in IDS line {line!r}") from e
    recover = len(words) > 2 and words[2] == 'recover'
    return IdsRecord(words[0], size, recover)


def parse_ids_lines(lines: Iterable[str]) -> List[IdsRecord]:
    return [parse_ids_line(line) for line in lines if line.strip()]


def ids_to_contigs(records: Sequence[IdsRecord]) -> List[Contig]:
    """Contigs in file order, indexed 0..N-1."""
    return [
        Contig(idx=i, name=record.name, size=record.size, recover=record.recover)
        for i, record in enumerate(records)
    ]


# ============================================================================
#                         TOURS
# ============================================================================

def parse_tour_lines(lines: Iterable[str]) -> Dict[str, List[Tuple[str, str]]]:
    """
    Parse tour text into name -> [(contig, orientation), ...].

    Tokens without an orientation suffix get '?'. Tokens before any header
    are collected under the empty name.
    """
    tours: Dict[str, List[Tuple[str, str]]] = OrderedDict()
    name = ''
    for line in lines:
        words = line.split()
        if not words:
            continue
        if words[0].startswith('>'):
            name = words[0][1:] or (words[1] if len(words) > 1 else '')
            tours.setdefault(name, [])
            continue
        entries = tours.setdefault(name, [])
        for token in words:
            contig, orientation = _split_oriented(token)
            if orientation in TOUR_ORIENTATIONS and contig:
                entries.append((contig, orientation))
            else:
                entries.append((token, UNKNOWN))
    return tours


def format_tour(name: str, entries: Sequence[Tuple[str, str]]) -> List[str]:
    """Tour text lines for one named ordering."""
    return [
        f"> {name}",
        ' '.join(f"{contig}{orientation}" for contig, orientation in entries),
    ]


def paths_to_tour_lines(
    layout: ScaffoldLayout,
    paths: Sequence[ScaffoldPath],
    prefix: str = 'scaffold',
) -> List[str]:
    """Render extracted Paths as tour text, one record per Path."""
    lines: List[str] = []
    for i, path in enumerate(paths, start=1):
        entries = [
            (
                layout.contigs[k].name,
                FORWARD if layout.orientation[k] > 0 else REVERSE,
            )
            for k in path.contigs
        ]
        lines.extend(format_tour(f"{prefix}_{i}", entries))
    return lines


# ============================================================================
#                         FILE READERS
# ============================================================================

def ids_path_for_clm(clm_path: Union[str, Path]) -> Path:
    """IDS file sitting next to a CLM file (<stem>.ids)."""
    return Path(clm_path).with_suffix('.ids')


def read_ids_file(path: Union[str, Path]) -> List[IdsRecord]:
    logger.info(f"Parse idsfile `{path}`")
    with open(path, 'r') as f:
        return parse_ids_lines(f)


def read_clm_file(path: Union[str, Path]) -> List[ClmRecord]:
    logger.info(f"Parse clmfile `{path}`")
    with open(path, 'r') as f:
        return list(parse_clm_lines(f))


def read_tour_file(path: Union[str, Path]) -> Dict[str, List[Tuple[str, str]]]:
    logger.info(f"Parse tourfile `{path}`")
    with open(path, 'r') as f:
        return parse_tour_lines(f)


def write_tour_file(path: Union[str, Path], lines: Sequence[str]) -> None:
    with open(path, 'w') as f:
        for line in lines:
            f.write(line + '\n')
    logger.info(f"Wrote {len(lines) // 2} tours to `{path}`")

# ScaffoldWeaver v0.1.0
# Any usage is subject to this software's license.
