"""
Configuration management for homography estimation
"""

import copy
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

DEFAULT_CONFIG = {
    "solver": {
        "method": "svd",
        "normalize": True,
        "rank_tolerance": 1e-8,
        "min_equations": 8
    },
    "geometry": {
        "collinearity_tolerance": 1e-9
    },
    "logging": {
        "level": "INFO",
        "log_file": None
    }
}

SOLVER_METHODS = ("svd", "eigh", "inhomogeneous")


def merge_config(overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """
    Merge user overrides on top of DEFAULT_CONFIG.

    Args:
        overrides: Mapping of section name to a mapping of settings

    Returns:
        A new configuration dictionary; DEFAULT_CONFIG is never modified
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    if not overrides:
        return config

    for section, values in overrides.items():
        if section not in config:
            raise ValueError(f"Unknown configuration section: {section}")
        if not isinstance(values, Mapping):
            raise ValueError(f"Configuration section '{section}' must be a mapping")
        config[section].update(values)

    if config["solver"]["method"] not in SOLVER_METHODS:
        raise ValueError(f"Unknown solver method: {config['solver']['method']}")
    if config["solver"]["min_equations"] < 8:
        raise ValueError("solver.min_equations cannot be lower than 8")
    return config


def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    """Load configuration overrides from a YAML file."""
    with open(path, "r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle)
    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        raise ValueError(f"Configuration file {path} must contain a mapping")
    return merge_config(raw)
