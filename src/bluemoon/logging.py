"""Package logger.

Every record carries the id of the process that emitted it so log lines from
concurrent Streamlit sessions and CLI runs can be told apart.
"""
import logging
import sys
import uuid

from bluemoon.config import settings

_SESSION_ID = uuid.uuid4().hex[:8]


def get_session_id() -> str:
    """Return the id stamped on every log record of this process."""
    return _SESSION_ID


class _SessionFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.session_id = _SESSION_ID
        return True


def _build_logger() -> logging.Logger:
    log = logging.getLogger("bluemoon")
    if log.handlers:
        return log
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s [%(session_id)s] %(levelname)s %(name)s: %(message)s"
    ))
    handler.addFilter(_SessionFilter())
    log.addHandler(handler)
    log.setLevel(settings.LOG_LEVEL.upper())
    log.propagate = False
    return log


logger = _build_logger()
