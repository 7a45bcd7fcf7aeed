"""
Scaffolding Core module for ScaffoldWeaver.

This module reconstructs chromosome-scale scaffolds from Hi-C contact signal:
- Contact aggregation and oriented distance histograms
- Active contig selection from link density and size
- Contig-end linkage graphs with confidence scoring
- Path extraction with cycle breaking
- Leave-one-out tour pruning
"""

from .data_structures import (
    Contig,
    Contact,
    OrientedPair,
    TourEntry,
    Tour,
    ContigLink,
    ScaffoldPath,
    ScaffoldLayout,
    flip_orientation,
    sister_end,
)
from .contact_store_module import ContactStore
from .active_set_module import ActiveSetSelector
from .linkage_graph_module import LinkageGraphBuilder, get_second_largest
from .path_extractor_module import Anchorer, Edge, PathExtractor, break_cycle
from .tour_refiner_module import ScoringError, TourRefiner, evaluate_tour

__all__ = [
    # Data structures
    "Contig",
    "Contact",
    "OrientedPair",
    "TourEntry",
    "Tour",
    "ContigLink",
    "ScaffoldPath",
    "ScaffoldLayout",
    "flip_orientation",
    "sister_end",
    # Engines
    "ContactStore",
    "ActiveSetSelector",
    "LinkageGraphBuilder",
    "get_second_largest",
    "PathExtractor",
    "Anchorer",
    "Edge",
    "break_cycle",
    "TourRefiner",
    "ScoringError",
    "evaluate_tour",
]
