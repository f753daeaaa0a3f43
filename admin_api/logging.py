"""
Structured logging for the admin API.

Use :func:`getLogger` in place of :func:`logging.getLogger`. Records are
written to stderr as one JSON object per line, for example::

    {"timestamp": "2026-10-19 09:12:44,118", "level": "INFO",
     "name": "admin_api.factory", "message": "Request completed",
     "correlation_id": "req_...", "status": 200, "duration": 3}

Extra fields passed with ``extra=`` (or bound by a :class:`RequestLogger`)
are merged into the object.
"""

import logging
import os
import sys
from typing import Any, MutableMapping, Tuple

from pythonjsonlogger import jsonlogger

FORMAT = '%(asctime)s %(levelname)s %(name)s %(message)s'
RENAME = {'levelname': 'level', 'asctime': 'timestamp'}

_handler = logging.StreamHandler(sys.stderr)
_handler.setFormatter(jsonlogger.JsonFormatter(FORMAT, rename_fields=RENAME))


def getLogger(name: str) -> logging.Logger:
    """Get a logger that emits JSON, at the level set by ``LOGLEVEL``."""
    logger = logging.getLogger(name)
    if _handler not in logger.handlers:
        logger.addHandler(_handler)
    logger.setLevel(os.environ.get('LOGLEVEL', 'INFO').upper())
    logger.propagate = False
    return logger


class RequestLogger(logging.LoggerAdapter):
    """
    Logger bound to a single request.

    Every record carries the bound context (correlation id, method, path).
    Debug output is dropped when ``environment`` is ``production``.
    """

    def __init__(self, logger: logging.Logger, environment: str = 'development',
                 **context: Any) -> None:
        super(RequestLogger, self).__init__(logger, context)
        self.environment = environment

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) \
            -> Tuple[Any, MutableMapping[str, Any]]:
        kwargs['extra'] = {**self.extra, **kwargs.get('extra', {})}
        return msg, kwargs

    def debug(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        if self.environment == 'production':
            return
        super(RequestLogger, self).debug(msg, *args, **kwargs)
