from __future__ import annotations

import errno
import os
import signal

import pytest

from ctrlc import main
from ctrlc.bridge import is_initialized, wait_for_signal
from ctrlc.errors import SystemCallError


def test_run_returns_after_sigint(monkeypatch: pytest.MonkeyPatch) -> None:
    def _interrupt_then_wait() -> None:
        assert is_initialized()
        os.kill(os.getpid(), signal.SIGINT)
        wait_for_signal()

    monkeypatch.setattr(main, "wait_for_signal", _interrupt_then_wait)

    assert main.run() == 0
    assert not is_initialized()


def test_run_reports_initialize_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def _fail(trap_termination: bool | None = None) -> None:
        raise SystemCallError("pipe", errno.EMFILE)

    monkeypatch.setattr(main, "initialize", _fail)
    assert main.run() == 1
