"""
Self-pipe bridge from SIGINT/SIGTERM to a blocking wait.
"""

from __future__ import annotations

from .channel import Channel
from .installer import HandlerRegistration
from .state import SignalBridge, current, initialize, is_initialized, shutdown, wait_for_signal


__all__ = [
    "Channel",
    "HandlerRegistration",
    "SignalBridge",
    "current",
    "initialize",
    "is_initialized",
    "shutdown",
    "wait_for_signal",
]
