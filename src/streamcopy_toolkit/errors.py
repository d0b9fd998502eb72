"""Exceptions raised by StreamCopy Toolkit.

Argument problems (empty paths, missing files, bad chunk sizes) are reported
as ``InvalidArgumentError`` before any file is opened.  Failures that happen
while a file is being read or written are reported as ``IOFailureError``,
chained to the underlying ``OSError``.
"""

from __future__ import annotations

import functools
from typing import Callable, TypeVar

F = TypeVar('F', bound=Callable)


class StreamCopyError(Exception):
    """Base exception for copy and comparison failures."""
    pass


class InvalidArgumentError(StreamCopyError, ValueError):
    """Raised when a path or option is unusable."""
    pass


class IOFailureError(StreamCopyError, OSError):
    """Raised for I/O errors during a copy or comparison."""
    pass


class ConfigError(StreamCopyError):
    """Raised when the configuration file cannot be used."""
    pass


def translate_io_errors(func: F) -> F:
    """Re-raise ``OSError`` from ``func`` as ``IOFailureError``.

    ``errno``, ``strerror`` and ``filename`` of the original error are kept.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except IOFailureError:
            raise
        except OSError as exc:
            if exc.errno is None:
                raise IOFailureError(str(exc)) from exc
            raise IOFailureError(exc.errno, exc.strerror or str(exc), exc.filename) from exc

    return wrapper  # type: ignore[return-value]
