"""
Block ordinary code until Ctrl-C (SIGINT, optionally SIGTERM) arrives.
"""

from __future__ import annotations

from .bridge import current, initialize, is_initialized, shutdown, wait_for_signal
from .config import BridgeConfig, get_settings
from .errors import (
    AlreadyInitializedError,
    BridgeBusyError,
    NotInitializedError,
    SignalBridgeError,
    SystemCallError,
    UnexpectedEofError,
)
from .logger import configure_logging, get_logger


__all__ = [
    "AlreadyInitializedError",
    "BridgeBusyError",
    "BridgeConfig",
    "NotInitializedError",
    "SignalBridgeError",
    "SystemCallError",
    "UnexpectedEofError",
    "configure_logging",
    "current",
    "get_logger",
    "get_settings",
    "initialize",
    "is_initialized",
    "shutdown",
    "wait_for_signal",
]
