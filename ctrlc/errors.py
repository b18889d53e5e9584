"""
Error taxonomy for the signal bridge.

- SystemCallError: an OS-level call failed (pipe, fcntl, sigaction, read).
- UnexpectedEofError: the read end saw end-of-stream.
- Lifecycle errors for misuse of initialize()/wait_for_signal()/shutdown().
"""

from __future__ import annotations

import os


class SignalBridgeError(RuntimeError):
    """Base class for everything the bridge raises."""


class SystemCallError(SignalBridgeError):
    """Wraps a failed OS call together with its errno."""

    def __init__(
        self, operation: str, errno: int | None = None, strerror: str | None = None
    ) -> None:
        self.operation = operation
        self.errno = errno
        if strerror is None and errno is not None:
            strerror = os.strerror(errno)
        self.strerror = strerror
        detail = f"[Errno {errno}] {strerror}" if errno is not None else (strerror or "failed")
        super().__init__(f"{operation}: {detail}")

    @classmethod
    def from_os_error(cls, operation: str, exc: OSError) -> SystemCallError:
        return cls(operation, exc.errno, exc.strerror)


class UnexpectedEofError(SignalBridgeError):
    """The notification channel was closed while waiting."""


class NotInitializedError(SignalBridgeError):
    """wait_for_signal() was called before initialize()."""


class AlreadyInitializedError(SignalBridgeError):
    """initialize() was called twice without shutdown() in between."""


class BridgeBusyError(SignalBridgeError):
    """shutdown() was attempted while a wait is in progress."""


__all__ = [
    "AlreadyInitializedError",
    "BridgeBusyError",
    "NotInitializedError",
    "SignalBridgeError",
    "SystemCallError",
    "UnexpectedEofError",
]
