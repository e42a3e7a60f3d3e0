"""Module configuration records.

The host hands each module its already-parsed table (``{"format": ..., "disabled": ...}``).
Environment variables ``PROMPTSCAN_<MODULE>_<FIELD>`` override the table.
Loading never fails: bad keys or values are logged and the default is kept.
"""

import logging
import os
from dataclasses import dataclass, fields, replace
from typing import Any, ClassVar, Mapping, Optional

from .exceptions import ConfigurationError

logger = logging.getLogger('promptscan.config')

_TRUE = {'1', 'true', 'yes', 'on'}
_FALSE = {'0', 'false', 'no', 'off', ''}


def parse_bool(setting: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ConfigurationError(setting, f'expected a boolean, got {value!r}')


@dataclass(frozen=True)
class ModuleConfig:
    module_name: ClassVar[str] = ''

    @classmethod
    def try_load(cls, table: Optional[Mapping[str, Any]] = None, log: Optional[logging.Logger] = None):
        log = log or logger
        config = cls()
        known = {f.name: f for f in fields(cls)}
        updates = {}
        for key, value in (table or {}).items():
            f = known.get(key)
            if f is None:
                log.debug('%s: unknown config key %r', cls.module_name, key)
                continue
            default = getattr(config, key)
            if not isinstance(value, type(default)):
                log.debug('%s: expected %s for %r, got %r', cls.module_name,
                          type(default).__name__, key, value)
                continue
            updates[key] = value
        updates.update(cls._env_overrides(log))
        return replace(config, **updates) if updates else config

    @classmethod
    def _env_overrides(cls, log: logging.Logger) -> dict:
        overrides = {}
        defaults = cls()
        for f in fields(cls):
            env_name = f'PROMPTSCAN_{cls.module_name.upper()}_{f.name.upper()}'
            raw = os.environ.get(env_name)
            if raw is None:
                continue
            if isinstance(getattr(defaults, f.name), bool):
                try:
                    overrides[f.name] = parse_bool(env_name, raw)
                except ConfigurationError as exc:
                    log.debug('%s', exc.message)
            else:
                overrides[f.name] = raw
        return overrides


@dataclass(frozen=True)
class RConfig(ModuleConfig):
    module_name: ClassVar[str] = 'r'

    format: str = 'via [R $version](blue bold) '
    disabled: bool = False


MODULE_CONFIGS = {
    RConfig.module_name: RConfig,
}


def load_module_config(name: str, table: Optional[Mapping[str, Any]] = None, log: Optional[logging.Logger] = None):
    try:
        config_cls = MODULE_CONFIGS[name]
    except KeyError:
        raise ConfigurationError(name, 'no such module') from None
    return config_cls.try_load(table, log)
