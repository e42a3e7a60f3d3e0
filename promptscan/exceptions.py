"""Custom exceptions for promptscan.

Provides the failure taxonomy of the module pipeline. None of these escape a
module to the prompt host: ``run_guarded`` collapses them to ``None`` and uses
``log_level`` and ``outcome`` only for diagnostics.
"""

import logging
from typing import Optional, Dict, Any


class PromptScanException(Exception):
    """Base exception for all promptscan errors.

    Provides structured error format with:
    - error_code: Machine-readable error identifier
    - message: Human-readable error description
    - details: Optional additional context
    """

    error_code: str = "PROMPTSCAN_ERROR"
    outcome: str = "error"
    log_level: int = logging.DEBUG

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Return structured error dict."""
        response = {
            "error": True,
            "error_code": self.error_code,
            "message": self.message,
        }
        if self.details:
            response["details"] = self.details
        return response


# ============ Module Pipeline Errors ============


class ModuleError(PromptScanException):
    """Base class for errors that end a module pipeline."""

    error_code = "MODULE_ERROR"


class DetectionMiss(ModuleError):
    """Current directory is not a project of this ecosystem."""

    error_code = "DETECTION_MISS"
    outcome = "not_a_project"

    def __init__(self, module: str, directory: str = ""):
        super().__init__(
            f"{module}: not a project in {directory or 'current directory'}",
            details={"module": module, "directory": directory},
        )


class ToolUnavailableError(ModuleError):
    """Tool binary is missing, not executable, or timed out."""

    error_code = "TOOL_UNAVAILABLE"
    outcome = "command_failed"

    def __init__(self, module: str, program: str):
        super().__init__(
            f"{module}: could not run {program!r}", details={"module": module, "program": program}
        )


class UnparsableVersionError(ModuleError):
    """Tool produced output but no recognizable version token."""

    error_code = "UNPARSABLE_VERSION"
    outcome = "version_unparsable"

    def __init__(self, module: str, output: str = ""):
        super().__init__(
            f"{module}: no version found in tool output",
            details={"module": module, "output": output[:200]},
        )


# ============ Format Errors ============


class FormatSyntaxError(PromptScanException):
    """Malformed format string. Surfaced as a warning since it is a config mistake."""

    error_code = "FORMAT_SYNTAX_ERROR"
    outcome = "format_error"
    log_level = logging.WARNING

    def __init__(self, reason: str, format_string: str = "", position: Optional[int] = None):
        where = f" at position {position}" if position is not None else ""
        super().__init__(
            f"{reason}{where}",
            details={"format": format_string, "position": position, "reason": reason},
        )
        self.reason = reason
        self.format_string = format_string
        self.position = position


# ============ Configuration Errors ============


class ConfigurationError(PromptScanException):
    """Configuration issue."""

    error_code = "CONFIGURATION_ERROR"

    def __init__(self, setting: str, message: str):
        super().__init__(f"Configuration error for {setting}: {message}", details={"setting": setting})
