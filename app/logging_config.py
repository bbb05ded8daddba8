import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(log_dir: str | None = None):
    """
    Console + rotating file (<LOG_DIR>/app.log).
    Safe to call more than once; handlers are only attached the first time.
    """
    level = os.getenv("LOG_LEVEL", "INFO").upper()

    root = logging.getLogger()
    root.setLevel(level)

    if root.handlers:
        return

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(formatter)
    root.addHandler(console)

    path = Path(log_dir or os.getenv("LOG_DIR", "logs"))
    path.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        path / "app.log",
        maxBytes=5 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)

    # SQL echo 太吵
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
