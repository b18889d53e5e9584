"""
Process-wide signal bridge.

- initialize(): create the channel and install handlers (once, main thread)
- wait_for_signal(): block until a trapped signal arrives
- shutdown(): restore previous handlers and release the channel
"""

from __future__ import annotations

import signal
import threading
from dataclasses import dataclass

from structlog.typing import FilteringBoundLogger

from ctrlc.config import get_settings
from ctrlc.errors import (
    AlreadyInitializedError,
    BridgeBusyError,
    NotInitializedError,
    SignalBridgeError,
)
from ctrlc.logger import get_logger

from .channel import Channel
from .installer import HandlerRegistration, install_handlers
from .waiter import read_marker


@dataclass(slots=True)
class SignalBridge:
    """Live bridge: the channel plus what it replaced."""

    channel: Channel
    registration: HandlerRegistration
    signals: frozenset[signal.Signals]
    # waits currently blocked on channel.read_fd
    active_waits: int = 0


_lock = threading.Lock()
_bridge: SignalBridge | None = None
_log: FilteringBoundLogger = get_logger("ctrlc.bridge")


def _require_main_thread(operation: str) -> None:
    if threading.current_thread() is not threading.main_thread():
        raise SignalBridgeError(f"{operation}() must be called from the main thread")


def initialize(trap_termination: bool | None = None) -> None:
    """Install the bridge for SIGINT and, optionally, SIGTERM.

    `trap_termination=None` takes the choice from settings. On any failure
    the channel is closed and previous handlers are restored before the
    error propagates.
    """
    global _bridge

    _require_main_thread("initialize")
    if trap_termination is None:
        trap_termination = get_settings().signals.trap_termination

    signals = [signal.SIGINT]
    if trap_termination:
        signals.append(signal.SIGTERM)

    with _lock:
        if _bridge is not None:
            raise AlreadyInitializedError("signal bridge is already initialized")

        channel = Channel.open()
        try:
            registration = install_handlers(channel, signals, _log)
        except SignalBridgeError:
            channel.close()
            raise

        _bridge = SignalBridge(
            channel=channel, registration=registration, signals=frozenset(signals)
        )

    _log.info(
        "bridge.initialized",
        signals=[sig.name for sig in signals],
        read_fd=channel.read_fd,
        write_fd=channel.write_fd,
    )


def wait_for_signal() -> None:
    """Block the calling thread until one trapped signal has been delivered.

    Each delivered signal releases exactly one wait.
    """
    with _lock:
        bridge = _bridge
        if bridge is None:
            raise NotInitializedError("initialize() must be called before wait_for_signal()")
        bridge.active_waits += 1

    try:
        read_marker(bridge.channel.read_fd, bridge.signals)
    except SignalBridgeError as exc:
        _log.error("bridge.wait_failed", error=str(exc))
        raise
    finally:
        with _lock:
            bridge.active_waits -= 1

    _log.debug("bridge.signal_received")


def shutdown() -> None:
    """Restore the previous dispositions and close the channel.

    Refuses while a wait is blocked on the channel. No-op if not initialized.
    """
    global _bridge

    _require_main_thread("shutdown")
    with _lock:
        bridge = _bridge
        if bridge is None:
            return
        if bridge.active_waits:
            raise BridgeBusyError(
                f"cannot shut down with {bridge.active_waits} wait(s) in progress"
            )
        restored = bridge.registration.restore(_log)
        bridge.channel.close()
        _bridge = None

    _log.info("bridge.shutdown", restored=restored)


def is_initialized() -> bool:
    return _bridge is not None


def current() -> SignalBridge | None:
    return _bridge
