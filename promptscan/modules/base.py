"""Module registry and the guard that turns pipeline failures into absence."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .. import metrics
from ..context import Context
from ..exceptions import FormatSyntaxError, PromptScanException
from ..module import Module

ModuleHandler = Callable[[Context], Optional[Module]]


@dataclass(frozen=True)
class ModuleSpec:
    name: str
    description: str
    handler: ModuleHandler


REGISTRY: Dict[str, ModuleSpec] = {}


def register(name: str, description: str = ''):
    """Register ``handler(context) -> Optional[Module]`` under ``name``."""
    def decorator(handler: ModuleHandler) -> ModuleHandler:
        REGISTRY[name] = ModuleSpec(name, description, handler)
        return handler
    return decorator


def run_guarded(name: str, build: Callable[[Context], Module], context: Context) -> Optional[Module]:
    """Run ``build`` and collapse every pipeline failure to None.

    The host only ever sees a module or nothing; the failure kind decides the
    log level and the outcome label.
    """
    log = context.logger
    with metrics.Timer() as timer:
        try:
            module = build(context)
        except FormatSyntaxError as exc:
            log.log(exc.log_level, 'Error parsing format string in `%s.format`: %s', name, exc.message)
            outcome = exc.outcome
            module = None
        except PromptScanException as exc:
            log.log(exc.log_level, '%s', exc.message)
            outcome = exc.outcome
            module = None
        else:
            outcome = 'rendered'
    metrics.record_module(name, outcome, timer.duration)
    return module
