"""Configuration loading for StreamCopy Toolkit.

The configuration is a YAML mapping.  Missing keys fall back to
``DEFAULT_CONFIG``; see ``config/config.yml`` for a commented example.
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Dict

import yaml

from .errors import ConfigError
from .metadata.scanner import CHECKSUM_ALGOS
from .transfer.engine import BLOCK_SIZE
from .transfer.registry import STRATEGIES

DEFAULT_CONFIG: Dict[str, Any] = {
    'source_path': None,
    'destination_path': None,
    'block_size': BLOCK_SIZE,
    'strategies': list(STRATEGIES),
    'checksum_algo': None,
    'log_csv': None,
    'log_json': None,
}


def load_config(path: Path) -> Dict[str, Any]:
    """Read and validate the configuration at ``path``.

    Raises:
        ConfigError: If the file cannot be read or parsed, or holds invalid
            values.
    """
    try:
        with Path(path).open('r', encoding='utf-8') as f:
            raw = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigError(f'Cannot read config {path}: {exc}') from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f'Invalid YAML in {path}: {exc}') from exc
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f'Config {path} must be a mapping, got {type(raw).__name__}')
    unknown = set(raw) - set(DEFAULT_CONFIG)
    if unknown:
        raise ConfigError(f'Unknown config keys: {", ".join(sorted(unknown))}')
    cfg = {**copy.deepcopy(DEFAULT_CONFIG), **raw}
    validate_config(cfg)
    return cfg


def validate_config(cfg: Dict[str, Any]) -> None:
    block_size = cfg['block_size']
    if isinstance(block_size, bool) or not isinstance(block_size, int) or block_size <= 0:
        raise ConfigError(f'block_size must be a positive integer, got {block_size!r}')
    strategies = cfg['strategies']
    if not isinstance(strategies, list) or not strategies:
        raise ConfigError('strategies must be a non-empty list')
    for name in strategies:
        if name not in STRATEGIES:
            raise ConfigError(f'Unknown strategy {name!r}')
    algo = cfg['checksum_algo']
    if algo is not None and str(algo).lower() not in CHECKSUM_ALGOS:
        raise ConfigError(f'Unsupported checksum algorithm: {algo}')
    for key in ('source_path', 'destination_path', 'log_csv', 'log_json'):
        if cfg[key] is not None and not isinstance(cfg[key], str):
            raise ConfigError(f'{key} must be a string')
