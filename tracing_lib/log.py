"""Logging setup for the tracing_lib package.

Library modules only create module loggers; nothing is configured on import.
The command line, or an application embedding the tracer, calls
``configure_logging`` once. Only the ``tracing_lib`` logger is touched, so
handlers the host application put on the root logger stay as they are.
"""

from __future__ import annotations

import logging

PACKAGE_LOGGER = 'tracing_lib'
LOG_FORMAT = '%(asctime)s %(levelname)-8s [%(name)s] %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

logger = logging.getLogger(__name__)


def configure_logging(level: str = 'INFO', log_file: str | None = None) -> logging.Logger:
    """Send tracing_lib log records to stderr and optionally a file.

    Calling it again swaps the handlers it installed earlier instead of
    stacking new ones. Records stop propagating to the root logger while
    these handlers are attached.

    Args:
        level: Level name such as 'DEBUG' or 'warning'. Unknown names fall
            back to INFO.
        log_file: Optional path of a file that receives the same records.

    Returns:
        The configured ``tracing_lib`` logger.
    """
    log_level = getattr(logging, level.upper(), None)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(log_level)
    for handler in [h for h in package_logger.handlers if getattr(h, '_tracing_lib', False)]:
        package_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setFormatter(formatter)
        handler._tracing_lib = True
        package_logger.addHandler(handler)
    package_logger.propagate = False

    logger.debug("Logging configured: level=%s, file=%s",
                 logging.getLevelName(log_level), log_file or 'stderr')
    return package_logger
