from __future__ import annotations

import sys
import threading
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
import structlog

from ctrlc.bridge import is_initialized, shutdown, wait_for_signal
from ctrlc.config import get_settings


if sys.platform == "win32":
    collect_ignore_glob = ["test_*.py"]


ENV_KEYS = ["CTRLC_CONFIG", "CTRLC_TRAP_TERMINATION", "CTRLC_LOG_LEVEL", "CTRLC_LOG_JSON"]


# ---- Env, cwd and bridge cleanup ----
@pytest.fixture(autouse=True)
def _isolate(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    for k in ENV_KEYS:
        monkeypatch.delenv(k, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    if is_initialized():
        shutdown()
    get_settings.cache_clear()
    structlog.reset_defaults()


class WaiterThread(threading.Thread):
    """Runs wait_for_signal() and records how it finished."""

    def __init__(self) -> None:
        super().__init__(name="waiter", daemon=True)
        self.error: BaseException | None = None
        self.returned = threading.Event()

    def run(self) -> None:
        try:
            wait_for_signal()
        except BaseException as exc:
            self.error = exc
        finally:
            self.returned.set()


@pytest.fixture
def start_waiter() -> Iterator[Callable[[], WaiterThread]]:
    started: list[WaiterThread] = []

    def _start() -> WaiterThread:
        thread = WaiterThread()
        thread.start()
        started.append(thread)
        return thread

    yield _start
    for thread in started:
        thread.join(timeout=5)

