"""
Handler installation with rollback.

The marker write itself happens in the interpreter's C-level signal handler:
signal.set_wakeup_fd() makes it write the signal number as one byte to the
channel's non-blocking write end, ignoring a full pipe or any error. The
Python-level handler only replaces the default disposition.
"""

from __future__ import annotations

import signal
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from types import FrameType
from typing import Any, TypeAlias

from structlog.typing import FilteringBoundLogger

from ctrlc.errors import SystemCallError

from .channel import Channel


SignalHandler: TypeAlias = Callable[[int, FrameType | None], Any] | int | signal.Handlers | None


def handle_signal(signum: int, frame: FrameType | None) -> None:
    """Python-level half of the handler: nothing to do, the byte is already written."""


@dataclass(slots=True)
class HandlerRegistration:
    """Dispositions replaced by install_handlers(), in installation order."""

    # wakeup fd that was active before ours, -1 if none
    previous_wakeup_fd: int = -1
    # whether set_wakeup_fd() succeeded and must be undone
    wakeup_fd_swapped: bool = False
    previous_handlers: dict[signal.Signals, SignalHandler] = field(default_factory=dict)

    def restore(self, log: FilteringBoundLogger) -> bool:
        """Put back the wakeup fd, then each captured handler (newest first).

        Every step is attempted even if an earlier one fails; failures are
        logged and reported by returning False.
        """
        ok = True
        if self.wakeup_fd_swapped:
            try:
                signal.set_wakeup_fd(self.previous_wakeup_fd)
                self.wakeup_fd_swapped = False
            except (OSError, ValueError) as exc:
                ok = False
                log.error("bridge.restore_failed", operation="set_wakeup_fd", error=str(exc))

        for sig, previous in reversed(list(self.previous_handlers.items())):
            try:
                # None: the previous handler was not installed from Python
                signal.signal(sig, signal.SIG_DFL if previous is None else previous)
            except (OSError, ValueError, TypeError) as exc:
                ok = False
                log.error(
                    "bridge.restore_failed", operation=f"sigaction({sig.name})", error=str(exc)
                )
        self.previous_handlers.clear()
        return ok


def install_handlers(
    channel: Channel,
    signals: Iterable[signal.Signals],
    log: FilteringBoundLogger,
) -> HandlerRegistration:
    """Route `signals` into `channel`; on failure undo everything done so far.

    Restart-on-interrupt (SA_RESTART) is requested for every trapped signal,
    so unrelated blocking calls are resumed rather than failing with EINTR.
    """
    registration = HandlerRegistration()
    operation = "set_wakeup_fd"
    try:
        registration.previous_wakeup_fd = signal.set_wakeup_fd(
            channel.write_fd, warn_on_full_buffer=False
        )
        registration.wakeup_fd_swapped = True

        for sig in signals:
            operation = f"sigaction({sig.name})"
            registration.previous_handlers[sig] = signal.signal(sig, handle_signal)
            signal.siginterrupt(sig, False)
    except (OSError, ValueError) as exc:
        log.error("bridge.install_failed", operation=operation, error=str(exc))
        if registration.restore(log):
            log.info("bridge.rollback", operation=operation)
        else:
            log.error("bridge.rollback_incomplete", operation=operation)
        if isinstance(exc, OSError):
            raise SystemCallError.from_os_error(operation, exc) from exc
        raise SystemCallError(operation, strerror=str(exc)) from exc

    _warn_on_replaced(registration, log)
    return registration


def _warn_on_replaced(registration: HandlerRegistration, log: FilteringBoundLogger) -> None:
    # Not an error: prior dispositions are overridden without validation.
    if registration.previous_wakeup_fd != -1:
        log.warning("bridge.wakeup_fd_replaced", previous_fd=registration.previous_wakeup_fd)
    for sig, previous in registration.previous_handlers.items():
        expected = signal.default_int_handler if sig == signal.SIGINT else signal.SIG_DFL
        if previous is not expected:
            log.warning("bridge.handler_replaced", signal=sig.name, previous=repr(previous))
