"""Strategy table and timed runs for StreamCopy Toolkit."""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Optional

from ..errors import InvalidArgumentError
from ..validation.checks import PathArg
from ..verification.engine import files_identical
from .engine import BLOCK_SIZE, block_copy, buffered_copy, byte_copy, line_copy
from .memory import in_memory_block_copy, in_memory_byte_copy

STRATEGIES: Dict[str, Callable[..., int]] = {
    'byte': byte_copy,
    'in_memory_byte': in_memory_byte_copy,
    'block': block_copy,
    'in_memory_block': in_memory_block_copy,
    'buffered': buffered_copy,
    'line': line_copy,
}

BLOCK_STRATEGIES = frozenset({'block', 'in_memory_block', 'buffered'})


@dataclass
class TransferResult:
    strategy: str
    src: Path
    dst: Path
    bytes_written: int
    duration_ms: float
    verified: Optional[bool] = None


def get_strategy(name: str) -> Callable[..., int]:
    try:
        return STRATEGIES[name]
    except KeyError:
        raise InvalidArgumentError(
            f'Unknown strategy {name!r}; expected one of {", ".join(STRATEGIES)}'
        ) from None


def run_strategy(
    name: str,
    src: PathArg,
    dst: PathArg,
    block_size: int = BLOCK_SIZE,
    verify: bool = False,
    checksum_algo: Optional[str] = None,
) -> TransferResult:
    """Run one strategy and time it.

    With ``verify`` the destination is compared byte for byte with the
    source after the copy.
    """
    func = get_strategy(name)
    kwargs = {'block_size': block_size} if name in BLOCK_STRATEGIES else {}
    started = time.perf_counter()
    written = func(src, dst, **kwargs)
    duration_ms = (time.perf_counter() - started) * 1000
    verified = files_identical(src, dst, checksum_algo) if verify else None
    return TransferResult(
        strategy=name,
        src=Path(src),
        dst=Path(dst),
        bytes_written=written,
        duration_ms=duration_ms,
        verified=verified,
    )
