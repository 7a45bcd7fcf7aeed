"""
ScaffoldWeaver v0.1.0

Configuration schema for ScaffoldWeaver.

Defines all available configuration parameters with defaults and validation.

Author: ScaffoldWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from typing import Any, Dict, List
from pathlib import Path
import yaml


# Default configuration values
DEFAULT_CONFIG = {
    # ========================================================================
    # Contact aggregation
    # ========================================================================
    'contacts': {
        'distance_lower_bound': 5778,  # phi^18
        'distance_upper_bound': 1149851,  # phi^29
    },

    # ========================================================================
    # Active contig selection
    # ========================================================================
    'active_set': {
        'min_size': 10000,
        'density_size_cap': 500000,  # Large tigs are not penalized past this size
    },

    # ========================================================================
    # Outlier detection (median/MAD)
    # ========================================================================
    'outliers': {
        'threshold': 3.5,
    },

    # ========================================================================
    # Anchoring (linkage graph + path extraction)
    # ========================================================================
    'anchor': {
        'max_rounds': 8,
    },

    # ========================================================================
    # Tour refinement
    # ========================================================================
    'refine': {
        'max_rounds': 2,
        'min_delta': 1e-9,
        'floor': -9.0,
        'num_workers': None,  # Executor default
        'distance_limit': 10000000,
    },

    # ========================================================================
    # Logging
    # ========================================================================
    'logging': {
        'level': 'INFO',  # 'DEBUG', 'INFO', 'WARNING', 'ERROR'
    },
}

VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """Recursively layer `override` onto a shallow copy of `base`."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            value = _deep_merge(current, value)
        merged[key] = value
    return merged


def save_config_template(output_path: Path):
    """
    Save the default configuration as a YAML template.

    Args:
        output_path: Output file path
    """
    with open(output_path, 'w') as f:
        yaml.dump(DEFAULT_CONFIG, f, default_flow_style=False, sort_keys=False)


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration dictionary.

    Args:
        config: Configuration to validate

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    contacts = config.get('contacts', {})
    lower = contacts.get('distance_lower_bound', 0)
    upper = contacts.get('distance_upper_bound', 0)
    if not isinstance(lower, int) or lower <= 0:
        errors.append(f"contacts.distance_lower_bound must be a positive integer, got {lower!r}")
    elif not isinstance(upper, int) or upper < lower:
        errors.append(f"contacts.distance_upper_bound must be >= distance_lower_bound, got {upper!r}")

    active_set = config.get('active_set', {})
    for key in ('min_size', 'density_size_cap'):
        value = active_set.get(key)
        if not isinstance(value, int) or value <= 0:
            errors.append(f"active_set.{key} must be a positive integer, got {value!r}")

    threshold = config.get('outliers', {}).get('threshold')
    if not isinstance(threshold, (int, float)) or threshold <= 0:
        errors.append(f"outliers.threshold must be positive, got {threshold!r}")

    for section in ('anchor', 'refine'):
        rounds = config.get(section, {}).get('max_rounds')
        if not isinstance(rounds, int) or rounds < 1:
            errors.append(f"{section}.max_rounds must be >= 1, got {rounds!r}")

    workers = config.get('refine', {}).get('num_workers')
    if workers is not None and (not isinstance(workers, int) or workers < 1):
        errors.append(f"refine.num_workers must be null or >= 1, got {workers!r}")

    level = config.get('logging', {}).get('level', 'INFO')
    if str(level).upper() not in VALID_LOG_LEVELS:
        errors.append(f"Invalid logging level: {level}")

    return errors
