"""Tests for the command-line interface."""

import csv
import errno

import pytest
from click.testing import CliRunner

from streamcopy_toolkit.console.main import cli
from streamcopy_toolkit.errors import IOFailureError
from streamcopy_toolkit.transfer.registry import STRATEGIES


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def configured(tmp_path, make_file):
    src = make_file('source.txt', 'abc\ndef\n')
    dst = tmp_path / 'destination.txt'
    log_csv = tmp_path / 'logs' / 'runs.csv'
    config = tmp_path / 'config.yml'
    config.write_text(
        f'source_path: {src}\n'
        f'destination_path: {dst}\n'
        'block_size: 4\n'
        'strategies: [byte, block, line]\n'
        f'log_csv: {log_csv}\n',
        encoding='utf-8',
    )
    return config, src, dst, log_csv


def test_run_copies_with_each_configured_strategy(runner, configured):
    config, src, dst, log_csv = configured

    result = runner.invoke(cli, ['run', '--config', str(config), '--verify'])

    assert result.exit_code == 0, result.output
    for name in ('byte', 'block', 'line'):
        assert name in result.output
    assert dst.read_bytes() == src.read_bytes()
    with log_csv.open(newline='', encoding='utf-8') as f:
        rows = list(csv.DictReader(f))
    assert [r['strategy'] for r in rows] == ['byte', 'block', 'line']
    assert [r['bytes_written'] for r in rows] == ['8', '8', '6']
    assert len({r['run_id'] for r in rows}) == 1


def test_run_strategy_override(runner, configured):
    config, _, dst, log_csv = configured

    result = runner.invoke(cli, ['run', '--config', str(config), '--strategy', 'buffered'])

    assert result.exit_code == 0, result.output
    assert 'buffered' in result.output
    with log_csv.open(newline='', encoding='utf-8') as f:
        assert [r['strategy'] for r in csv.DictReader(f)] == ['buffered']


def test_run_with_missing_source(runner, tmp_path):
    config = tmp_path / 'config.yml'
    config.write_text(
        f'source_path: {tmp_path / "missing.txt"}\ndestination_path: {tmp_path / "out.txt"}\n',
        encoding='utf-8',
    )

    result = runner.invoke(cli, ['run', '--config', str(config)])

    assert result.exit_code == 1
    assert 'does not exist' in result.output


def test_run_without_paths(runner, tmp_path):
    config = tmp_path / 'config.yml'
    config.write_text('block_size: 8\n', encoding='utf-8')

    result = runner.invoke(cli, ['run', '--config', str(config)])

    assert result.exit_code != 0
    assert 'source_path and destination_path' in result.output


def test_run_with_invalid_config(runner, tmp_path):
    config = tmp_path / 'config.yml'
    config.write_text('block_size: -1\n', encoding='utf-8')

    result = runner.invoke(cli, ['run', '--config', str(config)])

    assert result.exit_code == 1
    assert 'block_size' in result.output


def test_copy(runner, make_file, tmp_path):
    src = make_file('in.bin', bytes(range(256)) * 5)
    dst = tmp_path / 'out.bin'

    result = runner.invoke(cli, ['copy', str(src), str(dst), '--strategy', 'buffered', '--block-size', '100', '--verify'])

    assert result.exit_code == 0, result.output
    assert '1280' in result.output
    assert dst.read_bytes() == src.read_bytes()


def test_copy_rejects_empty_source(runner, tmp_path):
    result = runner.invoke(cli, ['copy', '', str(tmp_path / 'out.txt')])

    assert result.exit_code == 1
    assert 'can not be None or empty' in result.output


def test_copy_lossy_verify_fails(runner, make_file, tmp_path):
    src = make_file('in.txt', b'caf\xc3\xa9')

    result = runner.invoke(
        cli, ['copy', str(src), str(tmp_path / 'out.txt'), '--strategy', 'in_memory_block', '--verify', '--checksum', 'md5']
    )

    assert result.exit_code == 1


def test_compare_equal_and_different(runner, make_file):
    a = make_file('a.txt', 'abc\ndef\n')
    b = make_file('b.txt', 'abc\ndef')
    c = make_file('c.txt', 'abc\nxyz\n')

    same = runner.invoke(cli, ['compare', str(a), str(b)])
    assert same.exit_code == 0
    assert 'True' in same.output

    different = runner.invoke(cli, ['compare', str(a), str(c)])
    assert different.exit_code == 1
    assert 'False' in different.output


def test_compare_byte_exact(runner, make_file):
    a = make_file('a.txt', 'abc\ndef\n')
    b = make_file('b.txt', 'abc\ndef')

    result = runner.invoke(cli, ['compare', str(a), str(b), '--byte-exact'])

    assert result.exit_code == 1
    assert 'False' in result.output


def test_compare_missing_destination(runner, make_file, tmp_path):
    a = make_file('a.txt', 'abc')

    result = runner.invoke(cli, ['compare', str(a), str(tmp_path / 'missing.txt')])

    assert result.exit_code == 1
    assert 'does not exist' in result.output


def test_strategies(runner):
    result = runner.invoke(cli, ['strategies'])
    assert result.exit_code == 0
    assert result.output.split() == ['byte', 'in_memory_byte', 'block', 'in_memory_block', 'buffered', 'line']


def test_show_config(runner, configured):
    config, *_ = configured

    result = runner.invoke(cli, ['show-config', '--config', str(config)])

    assert result.exit_code == 0, result.output
    assert '"block_size": 4' in result.output


def test_run_keeps_results_finished_before_a_failure(runner, configured, monkeypatch):
    config, _, _, log_csv = configured

    def disk_full(src, dst, **kwargs):
        raise IOFailureError(errno.ENOSPC, 'No space left on device', str(dst))

    monkeypatch.setitem(STRATEGIES, 'block', disk_full)

    result = runner.invoke(cli, ['run', '--config', str(config)])

    assert result.exit_code == 1
    assert 'byte done. Total bytes: 8' in result.output
    assert 'No space left on device' in result.output
    with log_csv.open(newline='', encoding='utf-8') as f:
        rows = list(csv.DictReader(f))
    assert [r['strategy'] for r in rows] == ['byte']
