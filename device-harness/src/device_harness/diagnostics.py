"""Debug logging helpers.

Components never reach for a module-level logger on their own; they accept a
``logger=`` argument and fall back to :func:`get_debug`. Records carry the
structured fields ``backend``, ``action`` and ``param`` via ``extra=`` so
handlers can route them without parsing the message text.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from device_harness.messaging import MessageChannel

ROOT_LOGGER_NAME = "device_harness"

_TIME_FORMATTER = logging.Formatter()


def get_debug(namespace: str) -> logging.Logger:
    """Return the debug logger for ``namespace`` (e.g. ``"mock-device"``)."""

    namespace = str(namespace).strip()
    if not namespace:
        return logging.getLogger(ROOT_LOGGER_NAME)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{namespace}")


def null_logger(name: str = "null") -> logging.Logger:
    logger = logging.getLogger(f"{ROOT_LOGGER_NAME}._null.{name}")
    if not any(isinstance(h, logging.NullHandler) for h in logger.handlers):
        logger.addHandler(logging.NullHandler())
    logger.propagate = False
    return logger


def resolve_logger(logger: Optional[logging.Logger], namespace: str) -> logging.Logger:
    return logger if logger is not None else get_debug(namespace)


def debug_extra(
    backend: str,
    *,
    action: str | None = None,
    param: Any = None,
) -> dict[str, Any]:
    return {"backend": backend, "action": action, "param": param}


class ChannelLogHandler(logging.Handler):
    """Publish formatted log records onto a :class:`MessageChannel`.

    Messages use the ``updateWebpageMessage`` envelope understood by
    :class:`device_harness.messaging.MessageBox`.
    """

    def __init__(self, channel: MessageChannel, level: int = logging.DEBUG) -> None:
        super().__init__(level=level)
        self._channel = channel

    def emit(self, record: logging.LogRecord) -> None:
        try:
            content = self.format(record)
            self._channel.publish(
                {
                    "action": "updateWebpageMessage",
                    "data": {
                        "content": content,
                        "time": (self.formatter or _TIME_FORMATTER).formatTime(
                            record, "%H:%M:%S"
                        ),
                        "type": record.levelname.lower(),
                    },
                }
            )
        except Exception:
            self.handleError(record)

