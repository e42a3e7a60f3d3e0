"""Prompt modules, looked up by name.

Each module is a ``handler(context) -> Optional[Module]``; None means the
module has nothing to show and should be left out of the prompt.
"""

from typing import Optional

from ..config import load_module_config
from ..context import Context
from ..exceptions import ConfigurationError
from ..module import Module
from . import r  # noqa: F401  registers the module
from .base import REGISTRY as ALL_MODULES, ModuleSpec, register, run_guarded

__all__ = ['ALL_MODULES', 'ModuleSpec', 'handle', 'register', 'run_guarded', 'is_disabled']


def is_disabled(name: str, context: Context) -> bool:
    try:
        config = load_module_config(name, context.module_config(name), context.logger)
    except ConfigurationError:
        return False
    return config.disabled


def handle(name: str, context: Context) -> Optional[Module]:
    """Build module ``name`` for ``context`` unless it is unknown or disabled."""
    spec = ALL_MODULES.get(name)
    if spec is None:
        context.logger.warning('Error: Unknown module %s. Use "promptscan modules" to list them.', name)
        return None
    if is_disabled(name, context):
        context.logger.debug('%s: disabled in config', name)
        return None
    return spec.handler(context)
