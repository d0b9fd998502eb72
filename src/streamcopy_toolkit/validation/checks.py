"""Input validation shared by every copy and comparison operation."""

from __future__ import annotations

import os
from typing import Optional, Union

from ..errors import InvalidArgumentError

PathArg = Union[str, 'os.PathLike[str]']


def _require_path(value: Optional[PathArg], name: str) -> None:
    if value is None or os.fspath(value) == '':
        raise InvalidArgumentError(f'The {name} can not be None or empty.')


def validate_paths(
    source_path: Optional[PathArg],
    destination_path: Optional[PathArg],
    *,
    require_destination: bool = False,
) -> None:
    """Check a (source, destination) path pair.

    Args:
        source_path: File to read.  Must exist.
        destination_path: File to write or compare against.
        require_destination: Also require ``destination_path`` to exist.
            Only comparisons set this; copies create the destination and
            refuse one that is the source file itself.

    Raises:
        InvalidArgumentError: If a path is ``None``/empty, a required file
            does not exist, or a copy would overwrite its own source.
    """
    _require_path(source_path, 'source_path')
    _require_path(destination_path, 'destination_path')
    if not os.path.isfile(source_path):
        raise InvalidArgumentError(f'File does not exist for path {os.fspath(source_path)}.')
    if require_destination and not os.path.isfile(destination_path):
        raise InvalidArgumentError(f'File does not exist for path {os.fspath(destination_path)}.')
    if not require_destination and os.path.exists(destination_path) \
            and os.path.samefile(source_path, destination_path):
        raise InvalidArgumentError(
            f'Source and destination are the same file: {os.fspath(destination_path)}.'
        )


def validate_block_size(block_size: int) -> None:
    if isinstance(block_size, bool) or not isinstance(block_size, int) or block_size <= 0:
        raise InvalidArgumentError(f'block_size must be a positive integer, got {block_size!r}')
