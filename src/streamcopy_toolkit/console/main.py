"""Command‑line interface for StreamCopy Toolkit.

``run`` reads a source and destination from the configuration file and
copies one to the other with every configured strategy, printing how many
bytes each one wrote.  ``copy`` and ``compare`` work on explicit paths.
"""

from __future__ import annotations

import json
import logging
import sys
import uuid
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config_loader import load_config
from ..errors import StreamCopyError
from ..logging.logger import CSVLogger, JSONLogger, setup_logging
from ..metadata.scanner import CHECKSUM_ALGOS
from ..transfer.engine import BLOCK_SIZE
from ..transfer.registry import STRATEGIES, TransferResult, run_strategy
from ..verification.engine import content_equals, files_identical


console = Console()
err_console = Console(stderr=True)

strategy_choice = click.Choice(list(STRATEGIES))
checksum_choice = click.Choice(list(CHECKSUM_ALGOS), case_sensitive=False)


def _fail(exc: Exception) -> None:
    err_console.print(f'[red]Error:[/red] {escape(str(exc))}', highlight=False)
    sys.exit(1)


def _results_table(results: List[TransferResult]) -> Table:
    table = Table(title='Transfers')
    table.add_column('Strategy')
    table.add_column('Bytes', justify='right')
    table.add_column('Duration (ms)', justify='right')
    table.add_column('Verified')
    for r in results:
        verified = '' if r.verified is None else ('[green]yes[/green]' if r.verified else '[red]no[/red]')
        table.add_row(r.strategy, str(r.bytes_written), f'{r.duration_ms:.2f}', verified)
    return table


def _result_line(r: TransferResult) -> str:
    line = f'{r.strategy} done. Total bytes: {r.bytes_written} ({r.duration_ms:.2f} ms)'
    if r.verified is not None:
        line += ' [green]verified[/green]' if r.verified else ' [red]differs[/red]'
    return line


def _run_all(
    names: Tuple[str, ...], src: Path, dst: Path, block_size: int, verify: bool, checksum_algo: Optional[str]
) -> Iterator[TransferResult]:
    for name in names:
        yield run_strategy(name, src, dst, block_size=block_size, verify=verify, checksum_algo=checksum_algo)


@click.group()
@click.option('-v', '--verbose', is_flag=True, help='Show debug logging.')
def cli(verbose: bool) -> None:
    """StreamCopy Toolkit CLI."""
    setup_logging(logging.DEBUG if verbose else logging.WARNING, console=err_console)


@cli.command()
@click.option('--config', 'config_path', type=click.Path(exists=True), default='config/config.yml', help='Path to configuration file.')
@click.option('--strategy', 'strategies', type=strategy_choice, multiple=True, help='Strategy to run (repeatable); defaults to the configured list.')
@click.option('--verify', is_flag=True, help='Compare destination with source after each copy.')
def run(config_path: str, strategies: Tuple[str, ...], verify: bool) -> None:
    """Copy the configured source to the configured destination with each strategy.

    Each result is printed and logged as soon as its strategy finishes.
    """
    try:
        cfg = load_config(Path(config_path))
    except StreamCopyError as exc:
        _fail(exc)
        return
    names = strategies or tuple(cfg['strategies'])
    src, dst = cfg['source_path'], cfg['destination_path']
    if not src or not dst:
        raise click.UsageError('source_path and destination_path must be set in the configuration')

    run_id = uuid.uuid4().hex
    csv_logger = CSVLogger(Path(cfg['log_csv'])) if cfg['log_csv'] else None
    json_logger = JSONLogger(Path(cfg['log_json'])) if cfg['log_json'] else None
    try:
        for result in _run_all(names, Path(src), Path(dst), cfg['block_size'], verify, cfg['checksum_algo']):
            console.print(_result_line(result), highlight=False)
            if csv_logger:
                csv_logger.log_result(result, run_id)
            if json_logger:
                json_logger.add_record(result, run_id)
    except StreamCopyError as exc:
        _fail(exc)
    finally:
        if csv_logger:
            csv_logger.close()
        if json_logger:
            json_logger.flush()


@cli.command()
@click.argument('source')
@click.argument('destination')
@click.option('--strategy', type=strategy_choice, default='block', show_default=True, help='Copy strategy.')
@click.option('--block-size', type=click.IntRange(min=1), default=BLOCK_SIZE, show_default=True, help='Chunk size in bytes.')
@click.option('--verify', is_flag=True, help='Compare destination with source after the copy.')
@click.option('--checksum', 'checksum_algo', type=checksum_choice, default=None, help='Checksum used by --verify.')
def copy(source: str, destination: str, strategy: str, block_size: int, verify: bool, checksum_algo: Optional[str]) -> None:
    """Copy SOURCE to DESTINATION."""
    try:
        result = run_strategy(strategy, source, destination, block_size=block_size, verify=verify, checksum_algo=checksum_algo)
    except StreamCopyError as exc:
        _fail(exc)
        return
    console.print(_results_table([result]))
    if result.verified is False:
        sys.exit(1)


@cli.command()
@click.argument('source')
@click.argument('destination')
@click.option('--byte-exact', is_flag=True, help='Compare raw bytes instead of lines.')
@click.option('--checksum', 'checksum_algo', type=checksum_choice, default=None, help='Compare checksums (implies --byte-exact).')
def compare(source: str, destination: str, byte_exact: bool, checksum_algo: Optional[str]) -> None:
    """Print whether SOURCE and DESTINATION hold the same content."""
    try:
        if byte_exact or checksum_algo:
            equal = files_identical(source, destination, checksum_algo)
        else:
            equal = content_equals(source, destination)
    except StreamCopyError as exc:
        _fail(exc)
        return
    console.print(str(equal))
    if not equal:
        sys.exit(1)


@cli.command()
def strategies() -> None:
    """List the available copy strategies."""
    for name in STRATEGIES:
        console.print(name)


@cli.command()
@click.option('--config', 'config_path', type=click.Path(exists=True), default='config/config.yml', help='Path to configuration file.')
def show_config(config_path: str) -> None:
    """Print the current configuration."""
    try:
        cfg = load_config(Path(config_path))
    except StreamCopyError as exc:
        _fail(exc)
        return
    console.print_json(json.dumps(cfg, indent=2))


if __name__ == '__main__':  # pragma: no cover
    cli()
