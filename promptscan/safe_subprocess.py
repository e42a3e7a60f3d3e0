from __future__ import annotations

import logging
import os
import subprocess  # nosec
import time

# Reason: central wrapper validates executables against an allow list before invocation
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from . import metrics
from .logging_utils import log_suppressed

_LOG = logging.getLogger("promptscan.subprocess")

DEFAULT_TIMEOUT = 2.0

_ALLOWED_EXECUTABLES = {
    "r",
    "r.exe",
    "rscript",
    "rscript.exe",
}


@dataclass(frozen=True)
class CommandOutput:
    """Captured streams of a finished command."""

    stdout: str
    stderr: str
    returncode: int = 0


def register_allowed_executable(executable: str) -> None:
    """Allow an additional executable name (case-insensitive)."""
    if executable:
        _ALLOWED_EXECUTABLES.add(Path(executable).name.lower())


def is_allowed_executable(executable: str) -> bool:
    if not executable:
        return False
    return Path(executable).name.lower() in _ALLOWED_EXECUTABLES


def _ensure_allowed(cmd: Sequence[str]) -> Sequence[str]:
    if not cmd:
        raise ValueError("empty command passed to safe subprocess wrapper")
    executable = Path(cmd[0]).name.lower()
    if executable not in _ALLOWED_EXECUTABLES:
        raise ValueError(f"executable {cmd[0]!r} is not permitted by allow list")
    return cmd


def default_timeout() -> float:
    try:
        return float(os.environ.get("PROMPTSCAN_CMD_TIMEOUT", str(DEFAULT_TIMEOUT)))
    except ValueError:
        return DEFAULT_TIMEOUT


def safe_run(
    cmd: Sequence[str],
    *,
    cwd: Optional[str] = None,
    timeout: Optional[float] = None,
) -> subprocess.CompletedProcess:
    _ensure_allowed(cmd)
    _LOG.debug("safe_run executing cmd=%s cwd=%s timeout=%s", list(cmd), cwd, timeout)
    return subprocess.run(  # nosec
        list(cmd),
        cwd=cwd,
        timeout=timeout,
        stdin=subprocess.DEVNULL,
        capture_output=True,
        text=True,
        errors="replace",
        check=False,
    )
    # Reason: _ensure_allowed enforces allow list, and shell is never enabled


def exec_cmd(
    program: str,
    args: Sequence[str] = (),
    *,
    cwd: Optional[str] = None,
    timeout: Optional[float] = None,
) -> Optional[CommandOutput]:
    """Run ``program`` with ``args`` and return both captured streams.

    A non-zero exit status still yields a value. ``None`` means the program
    could not be started or did not finish within ``timeout`` seconds.
    """
    cmd = [program, *args]
    if timeout is None:
        timeout = default_timeout()
    start = time.perf_counter()
    try:
        proc = safe_run(cmd, cwd=cwd, timeout=timeout)
    except subprocess.TimeoutExpired as exc:
        metrics.record_command_failure(program, "timeout")
        log_suppressed(_LOG, exc, f"exec {program}")
        return None
    except OSError as exc:
        metrics.record_command_failure(program, "not_found")
        log_suppressed(_LOG, exc, f"exec {program}")
        return None
    finally:
        metrics.record_command(program, time.perf_counter() - start)
    if proc.returncode != 0:
        _LOG.debug("exec %s exited with status %s", program, proc.returncode)
    _LOG.debug("exec %s stdout=%r stderr=%r", program, proc.stdout, proc.stderr)
    return CommandOutput(stdout=proc.stdout or "", stderr=proc.stderr or "", returncode=proc.returncode)
