"""Prometheus metrics for promptscan.

Counts how each module pipeline ends and how long the external version
commands take. A long-lived host (a prompt daemon) can expose ``get_metrics()``.
"""

import time

from prometheus_client import Counter, Histogram, generate_latest

# ============ Metrics Definitions ============

MODULE_OUTCOMES = Counter(
    'promptscan_module_outcomes_total',
    'Module pipeline results',
    ['module', 'outcome']  # outcome: rendered/not_a_project/command_failed/version_unparsable/format_error
)

MODULE_DURATION = Histogram(
    'promptscan_module_duration_seconds',
    'Time spent building a module',
    ['module'],
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1, 2, 5]
)

COMMAND_DURATION = Histogram(
    'promptscan_command_duration_seconds',
    'Time spent running external version commands',
    ['program'],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1, 2, 5]
)

COMMAND_FAILURES = Counter(
    'promptscan_command_failures_total',
    'External commands that produced no output',
    ['program', 'reason']  # reason: not_found/timeout
)


# ============ Helper Functions ============

def record_module(module: str, outcome: str, duration: float):
    """Record one module pipeline run.

    Args:
        module: Module name, e.g. 'r'
        outcome: Terminal state of the pipeline
        duration: Seconds spent in the pipeline
    """
    MODULE_OUTCOMES.labels(module=module, outcome=outcome).inc()
    MODULE_DURATION.labels(module=module).observe(duration)


def record_command(program: str, duration: float):
    COMMAND_DURATION.labels(program=program).observe(duration)


def record_command_failure(program: str, reason: str):
    COMMAND_FAILURES.labels(program=program, reason=reason).inc()


class Timer:
    """Context manager measuring wall time of a block."""

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        return False

    @property
    def duration(self):
        return time.perf_counter() - self.start_time


def get_metrics():
    """Get current metrics in Prometheus format.

    Returns:
        bytes: Prometheus-formatted metrics
    """
    return generate_latest()
