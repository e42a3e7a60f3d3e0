import logging
import os
import threading
import time
from typing import Dict, Tuple

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'

_SuppressionKey = Tuple[str, str, int]
_SuppressionState = Dict[str, float | int]

_SUPPRESSION_LOCK = threading.Lock()
_SUPPRESSION_STATE: Dict[_SuppressionKey, _SuppressionState] = {}


def configure_logging() -> int:
    """Configure root logging from the environment and return the level used.

    ``PROMPTSCAN_LOG_LEVEL`` picks the level (default ``WARNING`` so a prompt
    stays quiet). ``PROMPTSCAN_LOG_FILE`` attaches a rotating file handler.
    """
    level_name = os.environ.get('PROMPTSCAN_LOG_LEVEL', 'WARNING').upper()
    level = getattr(logging, level_name, logging.WARNING)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)
    log_file = os.environ.get('PROMPTSCAN_LOG_FILE')
    if log_file:
        try:
            from logging.handlers import RotatingFileHandler
            max_bytes = int(os.environ.get('PROMPTSCAN_LOG_MAX_BYTES', str(1024 * 1024)))
            backup = int(os.environ.get('PROMPTSCAN_LOG_BACKUP_COUNT', '3'))
            fh = RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup)
            fh.setLevel(level)
            fh.setFormatter(logging.Formatter(LOG_FORMAT))
            logging.getLogger().addHandler(fh)
            logging.getLogger(__name__).debug(
                'RotatingFileHandler attached path=%s max_bytes=%d backups=%d',
                log_file, max_bytes, backup)
        except (OSError, ValueError) as exc:
            logging.getLogger(__name__).warning('failed attaching RotatingFileHandler for %s: %s', log_file, exc)
    logging.getLogger(__name__).debug('Logging initialized at level %s', level_name)
    return level


def log_suppressed(
    logger: logging.Logger,
    exc: Exception,
    context: str,
    *,
    level: int = logging.DEBUG,
    sample: int = 5,
    cooldown: float = 120.0,
) -> int:
    """Emit a throttled log entry for repeated soft-failures.

    A prompt re-runs every module on each redraw, so a missing tool would
    otherwise log the same miss forever.

    Parameters
    ----------
    logger: logging.Logger
        Target logger to write into.
    exc: Exception
        Exception instance that triggered the suppression log.
    context: str
        Identifier of the failure site, e.g. ``exec r``.
    level: int
        Logging level; defaults to ``DEBUG``.
    sample: int
        Emit the first ``sample`` occurrences before throttling kicks in.
    cooldown: float
        Minimum seconds between emissions once the sample budget is exhausted.

    Returns
    -------
    int
        Total number of times this ``context`` has requested logging (including
        suppressed writes).
    """
    now = time.time()
    key: _SuppressionKey = (logger.name, context, level)
    with _SUPPRESSION_LOCK:
        state = _SUPPRESSION_STATE.setdefault(key, {'count': 0, 'last_emit': 0.0})
        state['count'] = int(state['count']) + 1
        count = int(state['count'])
        last_emit = float(state.get('last_emit', 0.0))
        should_emit = count <= sample or (now - last_emit) >= cooldown
        if should_emit:
            state['last_emit'] = now
    if should_emit:
        logger.log(level, '%s err=%s (suppressed=%d)', context, exc, max(0, count - 1))
    return count


def reset_suppressed_state() -> None:
    """Clear suppression counters. Useful for unit tests."""
    with _SUPPRESSION_LOCK:
        _SUPPRESSION_STATE.clear()
