import logging
import sys
from pathlib import Path


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the console readable:
    - allow every taskkeeper log
    - third-party loggers (sqlalchemy, uvicorn, httpx, ...) only at WARNING+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "taskkeeper" or record.name.startswith("taskkeeper."):
            return True
        return record.levelno >= logging.WARNING


def setup_logging(
    *,
    level: int | str = logging.INFO,
    log_file: str | Path | None = None,
    file_level: int = logging.DEBUG,
) -> None:
    """
    Configure the root logger with a filtered console handler and, when
    `log_file` is given, an unfiltered file handler.

    Call this once, before the first log record is emitted.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Drop handlers installed by a previous call or by the server runner.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level.upper() if isinstance(level, str) else level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_path), encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(fmt)
        root.addHandler(fh)

    logging.captureWarnings(True)
