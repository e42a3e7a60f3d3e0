import os
import sys
import pathlib

import pytest

# Ensure project root is on sys.path so 'import promptscan' works when pytest runs from
# different working directories or when running individual tests.
_ROOT = pathlib.Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from promptscan.logging_utils import reset_suppressed_state
from promptscan.safe_subprocess import CommandOutput

R_BANNER = '''R version 3.6.3 (2020-02-29) -- "Holding the Windsock"
Copyright (C) 2020 The R Foundation for Statistical Computing
Platform: x86_64-w64-mingw32/x64 (64-bit)

R is free software and comes with ABSOLUTELY NO WARRANTY.
You are welcome to redistribute it under the terms of the
GNU General Public License versions 2 or 3.
For more information about these matters see
https://www.gnu.org/licenses/.
'''


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith('PROMPTSCAN_'):
            monkeypatch.delenv(key, raising=False)
    reset_suppressed_state()
    yield


class SpyRunner:
    """Stands in for exec_cmd and records each invocation."""

    def __init__(self, result=None):
        self.result = result
        self.calls = []

    def __call__(self, program, args):
        self.calls.append((program, list(args)))
        return self.result


@pytest.fixture
def r_runner():
    return SpyRunner(CommandOutput(stdout='', stderr=R_BANNER, returncode=0))


@pytest.fixture
def r_project(tmp_path):
    (tmp_path / 'analysis.R').write_text('print("hello")\n', encoding='utf-8')
    return tmp_path


@pytest.fixture
def spy_runner():
    return SpyRunner
