"""
Self-pipe notification channel.

The write end is non-blocking so the signal handler can never stall on it;
the read end stays blocking for the waiter.
"""

from __future__ import annotations

import contextlib
import os
from dataclasses import dataclass, field

from ctrlc.errors import SystemCallError


@dataclass(slots=True)
class Channel:
    """Pair of pipe endpoints owned by the process-wide bridge."""

    read_fd: int
    write_fd: int

    # endpoints already released by close_read()/close_write()
    _closed: set[str] = field(default_factory=set, init=False, repr=False)

    @classmethod
    def open(cls) -> Channel:
        """Create the pipe and make its write end non-blocking.

        os.pipe() is atomic and its descriptors are close-on-exec. If the
        non-blocking switch fails both descriptors are closed before the
        error is raised.
        """
        try:
            read_fd, write_fd = os.pipe()
        except OSError as exc:
            raise SystemCallError.from_os_error("pipe", exc) from exc

        channel = cls(read_fd=read_fd, write_fd=write_fd)
        try:
            os.set_blocking(write_fd, False)
        except OSError as exc:
            channel.close()
            raise SystemCallError.from_os_error("fcntl(O_NONBLOCK)", exc) from exc
        return channel

    @property
    def is_closed(self) -> bool:
        return {"read", "write"} <= self._closed

    def close_write(self) -> None:
        """Close the write end; a blocked reader then sees end-of-stream."""
        if "write" in self._closed:
            return
        self._closed.add("write")
        with contextlib.suppress(OSError):
            os.close(self.write_fd)

    def close_read(self) -> None:
        if "read" in self._closed:
            return
        self._closed.add("read")
        with contextlib.suppress(OSError):
            os.close(self.read_fd)

    def close(self) -> None:
        """Best-effort close of both ends; close errors are swallowed."""
        self.close_write()
        self.close_read()
