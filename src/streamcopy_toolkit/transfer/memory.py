"""In-memory staging copies.

The source is read whole as ASCII text, encoded to bytes, drained through an
``io.BytesIO`` store and decoded again before it is written out.  Only
ASCII content survives unchanged: every byte outside that range comes out as
``?``.  Use :func:`~streamcopy_toolkit.transfer.engine.block_copy` for binary
files.
"""

from __future__ import annotations

import io
import logging

from ..errors import translate_io_errors
from ..validation.checks import PathArg, validate_block_size, validate_paths
from .engine import BLOCK_SIZE

logger = logging.getLogger(__name__)

STAGING_ENCODING = 'ascii'
REPLACEMENT = '?'


def _load_text(source_path: PathArg) -> str:
    with open(source_path, 'r', encoding=STAGING_ENCODING, errors='replace', newline='') as reader:
        text = reader.read()
    if '\ufffd' in text:
        logger.warning('%s holds non-ASCII bytes; they are replaced with %r', source_path, REPLACEMENT)
        text = text.replace('\ufffd', REPLACEMENT)
    return text


def _store_text(destination_path: PathArg, staged: bytes) -> int:
    text = staged.decode(STAGING_ENCODING, errors='replace')
    with open(destination_path, 'w', encoding=STAGING_ENCODING, errors='replace', newline='') as writer:
        for char in text:
            writer.write(char)
    return len(text)


@translate_io_errors
def in_memory_byte_copy(source_path: PathArg, destination_path: PathArg) -> int:
    """Stage the file through memory one byte at a time.

    Returns:
        Number of characters written, which equals the byte count for ASCII
        files.
    """
    validate_paths(source_path, destination_path)
    source_bytes = _load_text(source_path).encode(STAGING_ENCODING, errors='replace')
    staged = bytearray(len(source_bytes))
    with io.BytesIO(source_bytes) as store:
        for i in range(len(source_bytes)):
            staged[i] = store.read(1)[0]
    written = _store_text(destination_path, bytes(staged))
    logger.debug('in_memory_byte_copy %s -> %s: %d chars', source_path, destination_path, written)
    return written


@translate_io_errors
def in_memory_block_copy(source_path: PathArg, destination_path: PathArg, block_size: int = BLOCK_SIZE) -> int:
    """Stage the file through memory in ``block_size`` chunks.

    Same output as :func:`in_memory_byte_copy`; the final chunk is taken at
    the length actually read.
    """
    validate_paths(source_path, destination_path)
    validate_block_size(block_size)
    source_bytes = _load_text(source_path).encode(STAGING_ENCODING, errors='replace')
    buffer = bytearray(block_size)
    view = memoryview(buffer)
    staged = io.BytesIO()
    with io.BytesIO(source_bytes) as store:
        while True:
            read = store.readinto(view)
            if not read:
                break
            staged.write(view[:read])
    written = _store_text(destination_path, staged.getvalue())
    logger.debug('in_memory_block_copy %s -> %s: %d chars', source_path, destination_path, written)
    return written
