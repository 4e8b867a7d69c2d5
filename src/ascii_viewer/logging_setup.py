import logging
import sys

LOGGER_NAME = "ascii_viewer"
LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def setup_logging(level: str = "WARNING", log_path: str | None = None) -> logging.Logger:
    """Route the package loggers to stderr and, optionally, a log file."""
    numeric_level = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING

    log = logging.getLogger(LOGGER_NAME)
    log.setLevel(logging.DEBUG if log_path else numeric_level)

    handlers: list[logging.Handler] = []

    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(numeric_level)
    sh.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    handlers.append(sh)

    if log_path:
        fh = logging.FileHandler(log_path, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s: %(message)s"))
        handlers.append(fh)

    for old in log.handlers:
        old.close()
    log.handlers[:] = handlers
    log.propagate = False  # prevent double logging via root logger
    return log
