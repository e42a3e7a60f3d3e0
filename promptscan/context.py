"""Directory scan context handed to every prompt module.

A ``Context`` is built once per prompt render by the host. It lists the
current directory lazily (one level, never recursive) and carries the
collaborators a module needs: module config tables, the command runner and
the logger diagnostics go to.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import Callable, Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence

from .module import Module
from .safe_subprocess import CommandOutput, exec_cmd

CommandRunner = Callable[[str, List[str]], Optional[CommandOutput]]

_LOG = logging.getLogger('promptscan.modules')


@dataclass(frozen=True)
class DirContents:
    """Snapshot of a single directory level."""

    files: FrozenSet[str] = field(default_factory=frozenset)
    folders: FrozenSet[str] = field(default_factory=frozenset)
    extensions: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def from_path(cls, path: Path) -> 'DirContents':
        files, folders, extensions = set(), set(), set()
        with os.scandir(path) as entries:
            for entry in entries:
                try:
                    is_dir = entry.is_dir()
                except OSError:
                    continue
                if is_dir:
                    folders.add(entry.name)
                    continue
                files.add(entry.name)
                ext = _extension(entry.name)
                if ext:
                    extensions.add(ext)
        return cls(frozenset(files), frozenset(folders), frozenset(extensions))

    def has_extension(self, ext: str) -> bool:
        return ext in self.extensions

    def has_file(self, name: str) -> bool:
        return name in self.files

    def has_folder(self, name: str) -> bool:
        return name in self.folders


def _extension(name: str) -> str:
    """Text after the last dot; dotfiles such as ``.Rprofile`` have none."""
    stem, dot, ext = name.rpartition('.')
    if not dot or not stem:
        return ''
    return ext


class ScanDir:
    """Builder for a "does this directory look like project X" question."""

    def __init__(self, contents: DirContents):
        self._contents = contents
        self._extensions: Sequence[str] = ()
        self._files: Sequence[str] = ()
        self._folders: Sequence[str] = ()

    def set_extensions(self, extensions: Iterable[str]) -> 'ScanDir':
        self._extensions = tuple(extensions)
        return self

    def set_files(self, files: Iterable[str]) -> 'ScanDir':
        self._files = tuple(files)
        return self

    def set_folders(self, folders: Iterable[str]) -> 'ScanDir':
        self._folders = tuple(folders)
        return self

    def is_match(self) -> bool:
        contents = self._contents
        return (
            any(contents.has_extension(ext) for ext in self._extensions)
            or any(contents.has_file(name) for name in self._files)
            or any(contents.has_folder(name) for name in self._folders)
        )


class Context:
    """Per-render view of the working directory and module collaborators."""

    def __init__(
        self,
        current_dir: Optional[str | os.PathLike] = None,
        config: Optional[Mapping[str, Mapping]] = None,
        runner: Optional[CommandRunner] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.current_dir = Path(current_dir if current_dir is not None else os.getcwd())
        self.config: Dict[str, Mapping] = dict(config or {})
        # The default runner executes inside current_dir
        self.runner: CommandRunner = runner or partial(exec_cmd, cwd=str(self.current_dir))
        self.logger = logger or _LOG
        self._contents: Optional[DirContents] = None
        self._listed = False

    def dir_contents(self) -> Optional[DirContents]:
        """List ``current_dir`` once; None if it cannot be read."""
        if not self._listed:
            self._listed = True
            try:
                self._contents = DirContents.from_path(self.current_dir)
            except OSError as exc:
                self.logger.debug('cannot list %s: %s', self.current_dir, exc)
                self._contents = None
        return self._contents

    def try_begin_scan(self) -> Optional[ScanDir]:
        contents = self.dir_contents()
        if contents is None:
            return None
        return ScanDir(contents)

    def module_config(self, name: str) -> Mapping:
        return self.config.get(name) or {}

    def new_module(self, name: str, description: str = '') -> Module:
        return Module(name=name, description=description, config=self.module_config(name))

    def exec_cmd(self, program: str, args: Sequence[str] = ()) -> Optional[CommandOutput]:
        return self.runner(program, list(args))


def matches(context: Context, extensions: Iterable[str]) -> bool:
    """True iff ``context``'s directory holds a file with one of ``extensions``."""
    scan = context.try_begin_scan()
    if scan is None:
        return False
    return scan.set_extensions(extensions).is_match()
