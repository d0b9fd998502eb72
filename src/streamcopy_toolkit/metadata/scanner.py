"""File metadata for StreamCopy Toolkit.

Size and optional checksum of a single file, used to verify copies and to
report on them.  Hash algorithms are selected by name.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import xxhash

from ..errors import InvalidArgumentError, translate_io_errors

CHECKSUM_ALGOS = ('md5', 'sha1', 'sha256', 'xxh128')
READ_CHUNK = 8192


@dataclass
class FileMetadata:
    path: Path
    size_bytes: int
    checksum: Optional[str] = None


def _new_hash(algo: str):
    name = algo.lower()
    if name == 'xxh128':
        return xxhash.xxh3_128()
    if name in CHECKSUM_ALGOS:
        return hashlib.new(name)
    raise InvalidArgumentError(f'Unsupported checksum algorithm: {algo}')


@translate_io_errors
def compute_checksum(path: Path, algo: str) -> str:
    """Compute a checksum of a file using the given algorithm.

    Supported algorithms: ``md5``, ``sha1``, ``sha256``, ``xxh128``.
    """
    h = _new_hash(algo)
    with Path(path).open('rb') as f:
        for chunk in iter(lambda: f.read(READ_CHUNK), b''):
            h.update(chunk)
    return h.hexdigest()


@translate_io_errors
def get_file_metadata(path: Path, checksum_algo: Optional[str] = None) -> FileMetadata:
    """Gather file size and optional checksum.

    Args:
        path: The file path.
        checksum_algo: Name of checksum algorithm to compute (or ``None`` to skip).
    """
    path = Path(path)
    size = path.stat().st_size
    checksum = compute_checksum(path, checksum_algo) if checksum_algo else None
    return FileMetadata(path=path, size_bytes=size, checksum=checksum)
