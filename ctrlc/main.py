from ctrlc.bridge import initialize, shutdown, wait_for_signal
from ctrlc.config import get_settings
from ctrlc.errors import SignalBridgeError
from ctrlc.logger import configure_logging, get_logger


def run() -> int:
    settings = get_settings()
    configure_logging(settings.logging.level, json_output=settings.logging.json_output)
    log = get_logger("ctrlc.main")

    try:
        initialize(settings.signals.trap_termination)
    except SignalBridgeError as exc:
        log.error("main.initialize_failed", error=str(exc))
        return 1

    log.info("main.waiting", hint="press Ctrl-C")
    try:
        wait_for_signal()
        log.info("main.interrupted")
        return 0
    except SignalBridgeError as exc:
        log.error("main.wait_failed", error=str(exc))
        return 1
    finally:
        shutdown()


if __name__ == "__main__":
    raise SystemExit(run())
