"""
Run configuration.

Responsibility: load a YAML config, merge it over the defaults and reject
anything the benchmark script cannot use.
"""

import copy
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .algorithms import ALGORITHMS
from .errors import ConfigError

DEFAULT_CONFIG: Dict[str, Any] = {
    'K': 10**6,                        # bound for the timed run
    'validation_max_k': 1000,          # dense cross-check over [1, validation_max_k]
    'algorithms': list(ALGORITHMS),
    'slow_algorithms': ['naive'],      # skipped when K > naive_max_k
    'naive_max_k': 10**5,
    'num_workers': None,               # None -> cpu_count()
    'sweep_grid': [10**3, 10**4, 10**5, 10**6],
}

_INT_KEYS = ('K', 'validation_max_k', 'naive_max_k')
_LIST_KEYS = ('algorithms', 'slow_algorithms', 'sweep_grid')


def _check(config: Dict[str, Any]) -> None:
    unknown = set(config) - set(DEFAULT_CONFIG)
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(sorted(unknown))}")

    for key in _INT_KEYS:
        value = config[key]
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ConfigError(f"{key} must be a non-negative integer, got {value!r}")

    for key in _LIST_KEYS:
        if not isinstance(config[key], list):
            raise ConfigError(f"{key} must be a list, got {config[key]!r}")

    for name in config['algorithms'] + config['slow_algorithms']:
        if name not in ALGORITHMS:
            raise ConfigError(f"Unknown algorithm {name!r} in config")

    for k in config['sweep_grid']:
        if isinstance(k, bool) or not isinstance(k, int) or k < 0:
            raise ConfigError(f"sweep_grid entries must be non-negative integers, got {k!r}")

    workers = config['num_workers']
    if workers is not None and (isinstance(workers, bool) or not isinstance(workers, int)
                                or workers < 1):
        raise ConfigError(f"num_workers must be a positive integer or null, got {workers!r}")


def load_config(path: Optional[Union[str, Path]] = None,
                overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Build the run configuration.

    Parameters
    ----------
    path : str or Path, optional
        YAML file whose keys replace the defaults.
    overrides : dict, optional
        Values replacing both (e.g. from the command line). None values
        are ignored.

    Returns
    -------
    dict
        Complete, checked configuration.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if path is not None:
        with open(path) as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ConfigError(f"{path} must contain a mapping, got {type(loaded).__name__}")
        config.update(loaded)

    if overrides:
        config.update({key: value for key, value in overrides.items() if value is not None})

    _check(config)
    return config
