"""Logging utilities for StreamCopy Toolkit.

``setup_logging`` routes the package's log records to a rich console
handler.  ``CSVLogger`` writes one row per transfer immediately, while
``JSONLogger`` stores records in a list and writes them to disk when
flushed.
"""

from __future__ import annotations

import csv
import json
import logging
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.logging import RichHandler

from ..transfer.registry import TransferResult

PACKAGE_LOGGER = 'streamcopy_toolkit'

FIELDNAMES = (
    'run_id',
    'timestamp',
    'strategy',
    'src_path',
    'dst_path',
    'bytes_written',
    'duration_ms',
    'verified',
)


def setup_logging(level: int = logging.WARNING, console: Optional[Console] = None) -> logging.Logger:
    """Attach a ``RichHandler`` to the package logger (once)."""
    log = logging.getLogger(PACKAGE_LOGGER)
    log.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in log.handlers):
        handler = RichHandler(console=console or Console(stderr=True), show_path=False)
        handler.setFormatter(logging.Formatter('%(message)s'))
        log.addHandler(handler)
    return log


def _record(result: TransferResult, run_id: str) -> Dict[str, Any]:
    return {
        'run_id': run_id,
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'strategy': result.strategy,
        'src_path': str(result.src),
        'dst_path': str(result.dst),
        'bytes_written': result.bytes_written,
        'duration_ms': round(result.duration_ms, 3),
        'verified': '' if result.verified is None else result.verified,
    }


class CSVLogger:
    def __init__(self, path: Path):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        new_file = not self.path.exists() or self.path.stat().st_size == 0
        self.file = self.path.open('a', newline='', encoding='utf-8')
        self.writer = csv.DictWriter(self.file, fieldnames=FIELDNAMES)
        if new_file:
            self.writer.writeheader()

    def log_result(self, result: TransferResult, run_id: str) -> None:
        self.writer.writerow(_record(result, run_id))
        self.file.flush()

    def close(self) -> None:
        self.file.close()


class JSONLogger:
    def __init__(self, path: Path):
        self.path = Path(path)
        self.records: List[Any] = []

    def add_record(self, result: TransferResult, run_id: str) -> None:
        record = asdict(result)
        record['src'] = str(result.src)
        record['dst'] = str(result.dst)
        record['run_id'] = run_id
        self.records.append(record)

    def flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open('w', encoding='utf-8') as f:
            json.dump(self.records, f, indent=2)
