"""Extract a normalized ``v<major>.<minor>.<patch>`` string from tool output.

Tool banners are multi-line and human oriented; only the first
whitespace-delimited numeric triplet in document order is used.
"""

import re
import logging
from functools import lru_cache
from typing import Optional

from .patterns import TRIPLET_PATTERN, get_query

logger = logging.getLogger('promptscan.versioning')


@lru_cache(maxsize=32)
def _compile(pattern: str) -> re.Pattern:
    return re.compile(pattern)


def parse_version(raw: str, pattern: str = TRIPLET_PATTERN) -> Optional[str]:
    """Return ``"v" + triplet`` for the first match of ``pattern`` in ``raw``.

    The numbers are taken verbatim, without range checks. Returns None when
    nothing matches.
    """
    if not raw:
        return None
    match = _compile(pattern).search(raw)
    if not match:
        return None
    version = match.group('version')
    logger.debug('matched version=%s span=%s', version, match.span())
    return f"v{version}".strip()


def extract_version(tool: str, raw: str) -> Optional[str]:
    """Parse ``raw`` with the pattern registered for ``tool``."""
    return parse_version(raw, get_query(tool)['pattern'])
