"""Version Detection Module.

- patterns.py: how each tool is asked for its version
- extractor.py: regex extraction of a normalized version string
"""

from .extractor import parse_version, extract_version
from .patterns import VERSION_QUERIES, VersionQuery, get_query

__all__ = ['parse_version', 'extract_version', 'VERSION_QUERIES', 'VersionQuery', 'get_query']
