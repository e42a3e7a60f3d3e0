"""R module: shows the installed R version inside R projects."""

from typing import Optional

from ..config import RConfig
from ..context import Context
from ..exceptions import DetectionMiss, ToolUnavailableError, UnparsableVersionError
from ..formatter import StringFormatter
from ..module import Module
from ..versioning import get_query, parse_version
from .base import register, run_guarded

NAME = 'r'
DESCRIPTION = 'The currently installed version of R'
R_EXTENSIONS = ['R']


def build(context: Context) -> Module:
    """Detect an R project, query ``r --version`` and render the module.

    Raises one of the ModuleError kinds or FormatSyntaxError; use ``module``
    for the collapsed Optional result.
    """
    log = context.logger
    scan = context.try_begin_scan()
    if scan is None or not scan.set_extensions(R_EXTENSIONS).is_match():
        raise DetectionMiss(NAME, str(context.current_dir))
    log.debug('r: This is a R project; getting in...')

    query = get_query(NAME)
    output = context.exec_cmd(query['program'], query['args'])
    if output is None:
        raise ToolUnavailableError(NAME, query['program'])
    r_version = getattr(output, query['stream'])
    log.debug('r: r_version=%s', r_version)

    formatted_version = parse_version(r_version, query['pattern'])
    if formatted_version is None:
        raise UnparsableVersionError(NAME, r_version)
    log.debug('r: formatted_version=%s', formatted_version)

    module = context.new_module(NAME, DESCRIPTION)
    config = RConfig.try_load(module.config, log)
    formatter = StringFormatter(config.format)

    def resolve(variable: str) -> Optional[str]:
        if variable == 'version':
            return formatted_version
        log.debug('r: unknown format variable %r', variable)
        return None

    module.set_segments(formatter.parse(resolve))
    module.set_prefix('')
    module.set_suffix('')
    return module


@register(NAME, DESCRIPTION)
def module(context: Context) -> Optional[Module]:
    """Creates a module with the current R version, or None outside R projects."""
    return run_guarded(NAME, build, context)
