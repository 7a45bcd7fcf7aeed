"""
Utilities module for ScaffoldWeaver.

This module provides pipeline orchestration for the scaffolding engine:
- Configured orchestration of contact loading, tour pruning and anchoring
- Logging setup
"""

from .pipeline import (
    ScaffoldingPipeline,
    OptimizeResult,
    AnchorResult,
    configure_logging,
)

__all__ = [
    "ScaffoldingPipeline",
    "OptimizeResult",
    "AnchorResult",
    "configure_logging",
]
