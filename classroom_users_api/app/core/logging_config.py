"""
Logging configuration for the Classroom Users API.

``setup_logging`` attaches the API's console (and optional file)
handler to the root logger and aligns uvicorn's loggers with the
configured level.  Request access lines from ``uvicorn.access`` are
noisy during Postman exercises, so they can be silenced with
``ACCESS_LOG=false``.  Handlers installed here are tagged, so calling
the function again (for example once per ``create_app`` in the test
suite) never stacks duplicates.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

UVICORN_LOGGERS = ("uvicorn", "uvicorn.error")
ACCESS_LOGGER = "uvicorn.access"

_HANDLER_TAG = "classroom_users_api"


def _installed(logger: logging.Logger) -> bool:
    return any(getattr(handler, "_tag", None) == _HANDLER_TAG for handler in logger.handlers)


def _tagged(handler: logging.Handler, formatter: logging.Formatter) -> logging.Handler:
    handler.setFormatter(formatter)
    handler._tag = _HANDLER_TAG
    return handler


def setup_logging(level: str = "INFO", logfile: Optional[str] = None, access_log: bool = True) -> None:
    """Configure the root logger and uvicorn's loggers.

    Parameters
    ----------
    level : str
        Logging level name, case insensitive; unknown names mean ``INFO``.
    logfile : Optional[str]
        Extra file to write log records to, resolved against the
        current working directory.
    access_log : bool
        When ``False`` per‑request access lines are dropped and only
        warnings from ``uvicorn.access`` get through.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(numeric_level)

    for name in UVICORN_LOGGERS:
        logging.getLogger(name).setLevel(numeric_level)
    logging.getLogger(ACCESS_LOGGER).setLevel(numeric_level if access_log else logging.WARNING)

    if _installed(root):
        return

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    root.addHandler(_tagged(logging.StreamHandler(), formatter))
    if logfile:
        log_path = Path(logfile).resolve()
        root.addHandler(_tagged(logging.FileHandler(log_path, encoding="utf-8"), formatter))
