"""Tests for promptscan.metrics: Prometheus counters for module pipelines."""
import os
import sys

from prometheus_client import REGISTRY

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from promptscan.context import Context
from promptscan.modules import r


def _outcomes(outcome):
    return REGISTRY.get_sample_value(
        "promptscan_module_outcomes_total", {"module": "r", "outcome": outcome}) or 0.0


class TestModuleOutcomes:
    def test_rendered_counted(self, r_project, r_runner):
        before = _outcomes("rendered")
        r.module(Context(r_project, runner=r_runner))
        assert _outcomes("rendered") == before + 1

    def test_not_a_project_counted(self, tmp_path, r_runner):
        before = _outcomes("not_a_project")
        r.module(Context(tmp_path, runner=r_runner))
        assert _outcomes("not_a_project") == before + 1

    def test_format_error_counted(self, r_project, r_runner):
        before = _outcomes("format_error")
        r.module(Context(r_project, config={"r": {"format": "[oops"}}, runner=r_runner))
        assert _outcomes("format_error") == before + 1


class TestHelpers:
    def test_record_command_failure(self):
        from promptscan.metrics import record_command_failure

        labels = {"program": "r", "reason": "timeout"}
        before = REGISTRY.get_sample_value("promptscan_command_failures_total", labels) or 0.0
        record_command_failure("r", "timeout")
        assert REGISTRY.get_sample_value("promptscan_command_failures_total", labels) == before + 1

    def test_timer(self):
        from promptscan.metrics import Timer

        with Timer() as t:
            pass
        assert t.duration >= 0

    def test_get_metrics_returns_bytes(self):
        from promptscan.metrics import get_metrics

        body = get_metrics()
        assert isinstance(body, bytes)
        assert b"promptscan_module_outcomes_total" in body
