"""Logging setup for the texmark command line.

The library itself only creates module loggers; handlers are attached here,
once, by the command-line entry point.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, Union

PLAIN_FORMAT = "%(levelname)s: %(message)s"
TRACE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
TRACE_DATE_FORMAT = "%H:%M:%S"


def _console_handler(use_rich: bool, trace_mode: bool) -> logging.Handler:
    if use_rich:
        from rich.console import Console
        from rich.logging import RichHandler

        handler: logging.Handler = RichHandler(
            console=Console(stderr=True),
            show_time=trace_mode,
            show_path=trace_mode,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s" if trace_mode else "%(message)s"))
        return handler

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_plain_formatter(trace_mode))
    return handler


def _plain_formatter(trace_mode: bool) -> logging.Formatter:
    if trace_mode:
        return logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT)
    return logging.Formatter(PLAIN_FORMAT)


def configure_logging(
    log_level: Union[int, str],
    log_file: Optional[str] = None,
    trace_mode: bool = False,
    use_rich: bool = False,
) -> logging.Logger:
    """Replace the root logger's handlers with texmark's console (and file) handlers.

    Parameters
    ----------
    log_level : int or str
        Level for the root logger and every handler, e.g. ``logging.DEBUG``
        or ``"WARNING"``
    log_file : str, optional
        Also append log records to this file. A file that cannot be opened
        is reported as a warning and otherwise ignored.
    trace_mode : bool, default False
        Include timestamps and logger names
    use_rich : bool, default False
        Format console records with rich

    Returns
    -------
    logging.Logger
        The root logger

    """
    level = log_level.upper() if isinstance(log_level, str) else log_level

    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        root_logger.removeHandler(existing)
    root_logger.setLevel(level)

    handlers = [_console_handler(use_rich, trace_mode)]
    file_problem: Optional[OSError] = None
    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as e:
            file_problem = e
        else:
            file_handler.setFormatter(_plain_formatter(trace_mode=True))
            handlers.append(file_handler)

    for handler in handlers:
        handler.setLevel(level)
        root_logger.addHandler(handler)

    if file_problem is not None:
        root_logger.warning("Cannot write log file %s: %s", log_file, file_problem)
    elif log_file:
        root_logger.debug("Logging to file %s", log_file)
    return root_logger
