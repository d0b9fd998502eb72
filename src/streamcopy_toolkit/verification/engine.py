"""Verification module for StreamCopy Toolkit.

Two notions of "same content":

* :func:`content_equals` compares the files line by line, ignoring the
  terminators.  Files holding the same text broken into lines differently
  are reported as different.
* :func:`files_identical` compares raw bytes (or checksums).
"""

from __future__ import annotations

import logging
import os
from itertools import zip_longest
from typing import Optional

from ..errors import translate_io_errors
from ..metadata.scanner import READ_CHUNK, compute_checksum
from ..transfer.engine import LINE_ENCODING, LINE_ERRORS
from ..validation.checks import PathArg, validate_paths

logger = logging.getLogger(__name__)


@translate_io_errors
def content_equals(source_path: PathArg, destination_path: PathArg) -> bool:
    """Return ``True`` if both files hold the same lines in the same order.

    Lines are read in lockstep with their terminators stripped.  The first
    differing pair, or one file running out of lines before the other,
    gives ``False``.

    Raises:
        InvalidArgumentError: If either file does not exist.
    """
    validate_paths(source_path, destination_path, require_destination=True)
    with open(source_path, 'r', encoding=LINE_ENCODING, errors=LINE_ERRORS) as left, \
            open(destination_path, 'r', encoding=LINE_ENCODING, errors=LINE_ERRORS) as right:
        for number, (a, b) in enumerate(zip_longest(left, right), start=1):
            if a is None or b is None:
                logger.debug('Line count differs after line %d', number - 1)
                return False
            if a.rstrip('\r\n') != b.rstrip('\r\n'):
                logger.debug('Line %d differs', number)
                return False
    return True


@translate_io_errors
def files_identical(source_path: PathArg, destination_path: PathArg, checksum_algo: Optional[str] = None) -> bool:
    """Byte-exact comparison.

    Sizes are compared first.  With ``checksum_algo`` the checksums are
    compared, otherwise the raw bytes chunk by chunk.
    """
    validate_paths(source_path, destination_path, require_destination=True)
    with open(source_path, 'rb') as left, open(destination_path, 'rb') as right:
        if os.fstat(left.fileno()).st_size != os.fstat(right.fileno()).st_size:
            return False
        if checksum_algo:
            return compute_checksum(source_path, checksum_algo) == compute_checksum(destination_path, checksum_algo)
        for a, b in zip(iter(lambda: left.read(READ_CHUNK), b''), iter(lambda: right.read(READ_CHUNK), b'')):
            if a != b:
                return False
    return True
