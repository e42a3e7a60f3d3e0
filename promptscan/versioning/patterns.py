"""Version query table.

Each tool entry says how to ask the tool for its version:
- program / args: the command line to run
- stream: which captured stream carries the version text ('stdout' or 'stderr')
- pattern: regex with a named ``version`` group holding the bare number
"""

from typing import Dict, List, TypedDict


class VersionQuery(TypedDict):
    """How to obtain and parse a tool's version."""

    name: str
    program: str
    args: List[str]
    stream: str  # 'stdout' or 'stderr'
    pattern: str


# A triplet only counts when whitespace sits on both sides, so the numeric
# runs of a four-component version such as 3.6.5.2 never line up.
# A single "v" right before the triplet is tolerated and never doubled.
TRIPLET_PATTERN = r"\sv?(?P<version>\d+\.\d+\.\d+)\s"


VERSION_QUERIES: Dict[str, VersionQuery] = {
    "r": {
        "name": "R",
        "program": "r",
        "args": ["--version"],
        # R prints its banner to stderr
        "stream": "stderr",
        "pattern": TRIPLET_PATTERN,
    },
}


def get_query(tool: str) -> VersionQuery:
    """Return the query for ``tool`` (case-insensitive). Raises KeyError if unknown."""
    return VERSION_QUERIES[tool.strip().lower()]
