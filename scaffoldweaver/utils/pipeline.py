"""
ScaffoldWeaver Pipeline Orchestrator.

Wires the scaffolding engine together from configuration:
- Contacts: CLM/IDS records -> ContactStore
- Optimize setup: active contig selection -> initial tour -> tour pruning
- Anchor: position-level links -> iterative path extraction

File reading stays here and in io_utils; the engine only sees parsed records.
"""

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union
import logging
import time
from dataclasses import dataclass, field
from functools import partial

from ..config import ConfigParser
from ..io_utils import (
    ClmRecord,
    IdsRecord,
    ids_path_for_clm,
    ids_to_contigs,
    paths_to_tour_lines,
    read_clm_file,
    read_ids_file,
)
from ..scaffolding_core import (
    ActiveSetSelector,
    Anchorer,
    ContactStore,
    ContigLink,
    ScaffoldLayout,
    ScaffoldPath,
    Tour,
    TourRefiner,
    evaluate_tour,
)
from ..scaffolding_core.tour_refiner_module import ScoringFn
from ..scaffolding_utils import outlier_cutoff

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logger = logging.getLogger(__name__)


def configure_logging(level: Union[str, int] = 'INFO'):
    """Install the ScaffoldWeaver log format on the root logger."""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)


# ============================================================================
# Result containers
# ============================================================================

@dataclass
class OptimizeResult:
    """Outcome of activation plus tour pruning."""
    tour: Tour
    initial_size: int
    final_size: int
    runtime_seconds: float = 0.0
    stats: Dict[str, Any] = field(default_factory=dict)


@dataclass
class AnchorResult:
    """Outcome of iterative anchoring."""
    layout: ScaffoldLayout
    paths: List[ScaffoldPath]
    runtime_seconds: float = 0.0

    def tour_lines(self, prefix: str = 'scaffold') -> List[str]:
        return paths_to_tour_lines(self.layout, self.paths, prefix=prefix)


# ============================================================================
# Orchestrator
# ============================================================================

class ScaffoldingPipeline:
    """
    Configured entry point to the scaffolding engine.

    Example:
        pipeline = ScaffoldingPipeline(ConfigParser('scaffold.yaml'))
        store = pipeline.load_contacts_from_files('group1.clm')
        result = pipeline.optimize(store)
    """

    def __init__(self, config: Optional[ConfigParser] = None, setup_logging: bool = False):
        self.config = config or ConfigParser()
        self.config.validate()
        if setup_logging:
            configure_logging(self.config.get('logging.level', 'INFO'))
        self.logger = logging.getLogger(f"{__name__}.ScaffoldingPipeline")

    def _outlier_fn(self):
        return partial(outlier_cutoff, threshold=self.config.get('outliers.threshold'))

    def load_contacts(
        self,
        ids_records: Sequence[IdsRecord],
        clm_records: Iterable[ClmRecord],
    ) -> ContactStore:
        """Build a ContactStore over the IDS contigs from CLM records."""
        contacts = self.config.get_contacts_config()
        store = ContactStore(
            ids_to_contigs(ids_records),
            distance_lower_bound=contacts['distance_lower_bound'],
            distance_upper_bound=contacts['distance_upper_bound'],
        )
        store.ingest(clm_records)
        return store

    def load_contacts_from_files(
        self,
        clm_path: Union[str, Path],
        ids_path: Optional[Union[str, Path]] = None,
    ) -> ContactStore:
        """Read a CLM file and its IDS file (<stem>.ids by default)."""
        ids_path = ids_path or ids_path_for_clm(clm_path)
        return self.load_contacts(read_ids_file(ids_path), read_clm_file(clm_path))

    def activate(self, store: ContactStore) -> Tour:
        """Select active contigs and seed the initial tour."""
        active_set = self.config.get_active_set_config()
        selector = ActiveSetSelector(
            store,
            min_size=active_set['min_size'],
            density_size_cap=active_set['density_size_cap'],
            outlier_fn=self._outlier_fn(),
        )
        return selector.activate()

    def optimize(
        self,
        store: ContactStore,
        tour: Optional[Union[Tour, Sequence[Any]]] = None,
        scoring_fn: Optional[ScoringFn] = None,
    ) -> OptimizeResult:
        """
        Activate contigs (unless a tour is given) and prune the tour.

        Args:
            store: Populated contact store
            tour: Externally proposed ordering (a Tour, TourEntry items or
                parsed (name, orientation) pairs); defaults to the activation tour.
                Entries naming unknown contigs are dropped
            scoring_fn: Tour cost function; defaults to evaluate_tour

        Returns:
            OptimizeResult with the pruned tour
        """
        start_time = time.time()
        refine = self.config.get_refine_config()
        if tour is None:
            tour = self.activate(store)
        else:
            entries = tour.tigs if isinstance(tour, Tour) else tour
            tour = store.tour_from_entries(entries)
        if scoring_fn is None:
            scoring_fn = partial(evaluate_tour, limit=refine['distance_limit'])

        refiner = TourRefiner(
            store.contigs,
            scoring_fn=scoring_fn,
            max_rounds=refine['max_rounds'],
            num_workers=refine['num_workers'],
            min_delta=refine['min_delta'],
            log_delta_floor=refine['floor'],
            outlier_fn=self._outlier_fn(),
        )
        initial_size = len(tour)
        pruned = refiner.prune_tour(tour)

        runtime = time.time() - start_time
        self.logger.info(
            f"Tour pruning kept {len(pruned)}/{initial_size} tigs in {runtime:.3f}s"
        )
        return OptimizeResult(
            tour=pruned,
            initial_size=initial_size,
            final_size=len(pruned),
            runtime_seconds=runtime,
            stats={
                'store_records': store.recorded,
                'store_discarded': store.discarded,
                'tour_entries_discarded': store.discarded_tour_entries,
            },
        )

    def anchor(
        self,
        ids_records: Sequence[IdsRecord],
        links: Iterable[ContigLink],
    ) -> AnchorResult:
        """Anchor contigs into Paths from position-level links."""
        start_time = time.time()
        layout = ScaffoldLayout(ids_to_contigs(ids_records))
        anchorer = Anchorer(layout, links, max_rounds=self.config.get('anchor.max_rounds'))
        paths = anchorer.run()
        runtime = time.time() - start_time
        self.logger.info(f"Anchoring produced {len(paths)} paths in {runtime:.3f}s")
        return AnchorResult(layout=layout, paths=paths, runtime_seconds=runtime)
