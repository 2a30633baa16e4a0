"""
Logging setup for the service.

``setup_logging`` attaches a console handler, and a file handler when
``LOG_FILE`` is configured, to the root logger.  Handlers are tagged
with a name, so calling it again (one call per ``create_app``) never
duplicates output, while handlers installed by others (uvicorn,
pytest) are left alone.  Modules log through
``logging.getLogger(__name__)``.
"""

import logging
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

CONSOLE_HANDLER_NAME = "crab_api.console"
FILE_HANDLER_NAME = "crab_api.file"


def _find_handler(logger: logging.Logger, name: str) -> Optional[logging.Handler]:
    for handler in logger.handlers:
        if handler.get_name() == name:
            return handler
    return None


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger.

    Parameters
    ----------
    level : str
        Logging level name such as ``"DEBUG"``.  Unknown names fall back
        to ``INFO``.
    logfile : Optional[str]
        File that receives the same records as the console, resolved
        against the current working directory.  A later call with a
        different path replaces the previous file handler.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    if _find_handler(root, CONSOLE_HANDLER_NAME) is None:
        console_handler = logging.StreamHandler()
        console_handler.set_name(CONSOLE_HANDLER_NAME)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    if not logfile:
        return
    log_path = str(Path(logfile).resolve())
    current = _find_handler(root, FILE_HANDLER_NAME)
    if current is not None:
        if current.baseFilename == log_path:
            return
        root.removeHandler(current)
        current.close()
    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.set_name(FILE_HANDLER_NAME)
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)
