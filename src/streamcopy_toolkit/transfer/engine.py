"""Transfer engine for StreamCopy Toolkit.

File-stream copy strategies.  Each function validates its path pair, copies
``source_path`` to ``destination_path`` (creating or truncating the
destination) and returns the number of bytes written.

Handles are always released, including when a copy fails part way; the
destination is then left truncated.  Two calls writing the same destination
at the same time are not supported.
"""

from __future__ import annotations

import io
import logging
import os

from ..errors import translate_io_errors
from ..validation.checks import PathArg, validate_block_size, validate_paths

logger = logging.getLogger(__name__)

BLOCK_SIZE = 1024
LINE_ENCODING = 'utf-8'
LINE_ERRORS = 'surrogateescape'
LINE_TERMINATOR = '\n'


def _declared_length(stream) -> int:
    return os.fstat(stream.fileno()).st_size


def _copy_blocks(src, dst, length: int, block_size: int) -> int:
    """Copy ``length`` bytes from ``src`` to ``dst`` through one reusable buffer."""
    buffer = bytearray(block_size)
    view = memoryview(buffer)
    total = 0
    while total < length:
        read = src.readinto(view[:min(block_size, length - total)])
        if not read:
            logger.warning('Source ended after %d of %d declared bytes', total, length)
            break
        dst.write(view[:read])
        total += read
    return total


@translate_io_errors
def byte_copy(source_path: PathArg, destination_path: PathArg) -> int:
    """Copy one byte at a time.

    The slow reference strategy: every byte is read and written with its own
    call.
    """
    validate_paths(source_path, destination_path)
    written = 0
    with open(source_path, 'rb') as src, open(destination_path, 'wb') as dst:
        length = _declared_length(src)
        while written < length:
            byte = src.read(1)
            if not byte:
                logger.warning('Source ended after %d of %d declared bytes', written, length)
                break
            dst.write(byte)
            written += 1
    logger.debug('byte_copy %s -> %s: %d bytes', source_path, destination_path, written)
    return written


@translate_io_errors
def block_copy(source_path: PathArg, destination_path: PathArg, block_size: int = BLOCK_SIZE) -> int:
    """Copy in chunks of ``block_size`` bytes.

    Args:
        source_path: Source file path.
        destination_path: Destination file path.
        block_size: Size of the staging buffer.

    Returns:
        Total bytes written.  The final chunk is written at the length
        actually read, so sizes that are not a multiple of ``block_size``
        copy exactly.
    """
    validate_paths(source_path, destination_path)
    validate_block_size(block_size)
    with open(source_path, 'rb', buffering=0) as src, open(destination_path, 'wb') as dst:
        written = _copy_blocks(src, dst, _declared_length(src), block_size)
    logger.debug('block_copy %s -> %s: %d bytes', source_path, destination_path, written)
    return written


@translate_io_errors
def buffered_copy(source_path: PathArg, destination_path: PathArg, block_size: int = BLOCK_SIZE) -> int:
    """Copy in chunks, reading through a buffer sized to the whole file.

    Same result as :func:`block_copy`.  The source is wrapped in an
    ``io.BufferedReader`` large enough to hold the file, so the raw file is
    read with as few system calls as possible.
    """
    validate_paths(source_path, destination_path)
    validate_block_size(block_size)
    with io.FileIO(source_path, 'r') as raw:
        length = _declared_length(raw)
        src = io.BufferedReader(raw, buffer_size=max(length, 1))
        with src, open(destination_path, 'wb') as dst:
            written = _copy_blocks(src, dst, length, block_size)
    logger.debug('buffered_copy %s -> %s: %d bytes', source_path, destination_path, written)
    return written


@translate_io_errors
def line_copy(source_path: PathArg, destination_path: PathArg) -> int:
    """Copy line by line.

    Every line is written back with a single ``\\n`` terminator, whatever
    terminator it had (a last line without one gains one).

    Returns:
        The encoded byte length of all lines, terminators excluded.
    """
    validate_paths(source_path, destination_path)
    total = 0
    with open(source_path, 'r', encoding=LINE_ENCODING, errors=LINE_ERRORS) as src, \
            open(destination_path, 'w', encoding=LINE_ENCODING, errors=LINE_ERRORS, newline='') as dst:
        for line in src:
            line = line.rstrip('\r\n')
            dst.write(line)
            dst.write(LINE_TERMINATOR)
            total += len(line.encode(LINE_ENCODING, LINE_ERRORS))
    logger.debug('line_copy %s -> %s: %d bytes', source_path, destination_path, total)
    return total
