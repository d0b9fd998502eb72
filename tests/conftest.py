from pathlib import Path

import pytest


@pytest.fixture
def make_file(tmp_path):
    """Factory writing ``content`` (bytes or str) to ``tmp_path / name``."""

    def _make(name: str, content=b'') -> Path:
        path = tmp_path / name
        if isinstance(content, str):
            content = content.encode('utf-8')
        path.write_bytes(content)
        return path

    return _make


@pytest.fixture
def binary_blob() -> bytes:
    # 2.5 blocks of every byte value, so the last chunk is partial
    return bytes(range(256)) * 10 + b'\x00\xff\x10'
