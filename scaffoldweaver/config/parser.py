#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ScaffoldWeaver v0.1.0

Configuration parser: layered YAML configuration for the scaffolding engine.

Layers, lowest to highest precedence:
1. DEFAULT_CONFIG (config/schema.py)
2. User YAML file, with ${VAR} / ${VAR:-default} environment references
3. Dotted overrides, e.g. {'refine.max_rounds': 3}

Author: ScaffoldWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import copy
import logging
import os
import re
import yaml
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from .schema import DEFAULT_CONFIG, _deep_merge, validate_config

logger = logging.getLogger(__name__)

_ENV_REFERENCE = re.compile(r'\$\{([^}:]+)(?::-(.*?))?\}')


class ConfigValidationError(Exception):
    """Raised when a configuration file cannot be read or fails validation."""
    pass


# ============================================================================
#                         HELPERS
# ============================================================================

def _coerce_scalar(value: str) -> Any:
    for cast in (int, float):
        try:
            return cast(value)
        except ValueError:
            continue
    return value


def expand_env_references(node: Any) -> Any:
    """
    Resolve ${VAR} and ${VAR:-default} references in a parsed YAML tree.

    Strings containing a reference are re-typed after expansion, so
    '${ROUNDS:-3}' becomes the integer 3.
    """
    if isinstance(node, Mapping):
        return {key: expand_env_references(value) for key, value in node.items()}
    if isinstance(node, list):
        return [expand_env_references(item) for item in node]
    if not isinstance(node, str) or not _ENV_REFERENCE.search(node):
        return node

    expanded = _ENV_REFERENCE.sub(
        lambda m: os.environ.get(m.group(1), m.group(2) or ''),
        node,
    )
    return _coerce_scalar(expanded)


def _lookup(tree: Mapping[str, Any], dotted_key: str) -> Any:
    node: Any = tree
    for part in dotted_key.split('.'):
        if not isinstance(node, Mapping) or part not in node:
            raise KeyError(dotted_key)
        node = node[part]
    return node


def _assign(tree: Dict[str, Any], dotted_key: str, value: Any) -> None:
    *parents, leaf = dotted_key.split('.')
    node = tree
    for part in parents:
        child = node.get(part)
        if not isinstance(child, dict):
            child = node[part] = {}
        node = child
    node[leaf] = value


# ============================================================================
#                         PARSER
# ============================================================================

class ConfigParser:
    """
    Layered ScaffoldWeaver configuration.

    Example:
        config = ConfigParser('scaffold.yaml')
        config.merge_cli_overrides({'active_set.min_size': 5000})
        config.validate()
        rounds = config.get('refine.max_rounds')
    """

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        """
        Args:
            config_file: Optional YAML file layered over DEFAULT_CONFIG
        """
        self.config_file = Path(config_file) if config_file else None
        self._config: Dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)
        if self.config_file is not None:
            self._config = _deep_merge(self._config, self._read_user_file(self.config_file))

    @staticmethod
    def _read_user_file(path: Path) -> Dict[str, Any]:
        """
        Parse a user YAML file into a mapping with environment references resolved.

        Raises:
            FileNotFoundError: If the file does not exist
            ConfigValidationError: If the YAML is malformed or not a mapping
        """
        if not path.is_file():
            raise FileNotFoundError(f"Config file does not exist: {path}")

        try:
            loaded = yaml.safe_load(path.read_text())
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Could not parse YAML in {path}: {e}") from e

        if loaded is None:
            logger.debug(f"Config file {path} is empty, using defaults")
            return {}
        if not isinstance(loaded, dict):
            raise ConfigValidationError(
                f"Config file {path} must contain a mapping, got {type(loaded).__name__}"
            )
        logger.debug(f"Loaded config sections {sorted(loaded)} from {path}")
        return expand_env_references(loaded)

    def merge_cli_overrides(self, overrides: Mapping[str, Any]):
        """Apply dotted-key overrides such as {'refine.max_rounds': 3}."""
        for dotted_key, value in overrides.items():
            _assign(self._config, dotted_key, value)

    def get(self, key: str, default: Any = None) -> Any:
        """Value at a dotted key, or `default` when any part is missing."""
        try:
            return _lookup(self._config, key)
        except KeyError:
            return default

    def get_contacts_config(self) -> Dict[str, Any]:
        return self._config.get('contacts', {})

    def get_active_set_config(self) -> Dict[str, Any]:
        return self._config.get('active_set', {})

    def get_anchor_config(self) -> Dict[str, Any]:
        return self._config.get('anchor', {})

    def get_refine_config(self) -> Dict[str, Any]:
        return self._config.get('refine', {})

    def to_dict(self) -> Dict[str, Any]:
        """Deep copy of the effective configuration."""
        return copy.deepcopy(self._config)

    def validate(self) -> bool:
        """
        Check the effective configuration against the schema.

        Raises:
            ConfigValidationError: Listing every problem found
        """
        problems = validate_config(self._config)
        if problems:
            raise ConfigValidationError(
                "Invalid configuration:\n  " + "\n  ".join(problems)
            )
        return True

    def __repr__(self) -> str:
        return f"ConfigParser(config_file={self.config_file})"

# ScaffoldWeaver v0.1.0
# Any usage is subject to this software's license.
