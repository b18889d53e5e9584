"""
Blocking read side of the self-pipe.

- read_marker(): wait for one marker byte of a trapped signal
"""

from __future__ import annotations

import os
from collections.abc import Callable, Container

from ctrlc.errors import SystemCallError, UnexpectedEofError


Reader = Callable[[int, int], bytes]


def read_marker(
    read_fd: int,
    accepted: Container[int],
    *,
    reader: Reader = os.read,
) -> None:
    """Block until one marker byte for an accepted signal is read from `read_fd`.

    The wakeup fd is process-wide, so any signal with a Python handler writes
    its number there; bytes for signals outside `accepted` are consumed and
    skipped. EINTR is retried, end-of-stream and other read errors are raised.
    """
    while True:
        try:
            data = reader(read_fd, 1)
        except InterruptedError:
            continue
        except OSError as exc:
            raise SystemCallError.from_os_error("read", exc) from exc

        if not data:
            raise UnexpectedEofError("notification channel closed while waiting")
        if data[0] in accepted:
            return
