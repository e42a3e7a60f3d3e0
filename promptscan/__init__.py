"""promptscan: prompt modules that detect a project's toolchain and show its version."""

__version__ = '0.1.0'
