"""Structured error types for the pom-scout CLI with recovery suggestions.

Every error carries a category, an actionable suggestion and an exit code
so the command line can report failures consistently.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(Enum):
    """Categories of CLI errors for organization and handling."""

    CONFIGURATION = "configuration"  # Invalid config file or values
    FILE_SYSTEM = "file_system"  # Unreadable or malformed input files
    VALIDATION = "validation"  # Invalid arguments
    NAVIGATION = "navigation"  # Browser could not load a page
    ANALYSIS = "analysis"  # Nothing to analyze
    RUNTIME = "runtime"  # Unexpected errors


@dataclass
class CLIError(Exception):
    """Base class for structured CLI errors with recovery suggestions.

    Attributes:
        category: Error category for grouping.
        message: Human-readable error message.
        suggestion: Optional actionable recovery suggestion.
        details: Optional additional details dict.
        exit_code: Exit code to use when this error causes termination.
    """

    category: ErrorCategory
    message: str
    suggestion: str | None = None
    details: dict[str, Any] | None = field(default_factory=dict)
    exit_code: int = 1

    def __post_init__(self) -> None:
        """Initialize the exception with the message."""
        super().__init__(self.message)

    def format(self, use_color: bool = True) -> str:
        """Format the error for display.

        Args:
            use_color: Whether to include ANSI color codes.

        Returns:
            Formatted error string with suggestion if available.
        """
        red = "\033[91m" if use_color else ""
        cyan = "\033[96m" if use_color else ""
        dim = "\033[2m" if use_color else ""
        reset = "\033[0m" if use_color else ""

        lines = [f"{red}Error:{reset} {self.message}"]

        if self.suggestion:
            lines.append(f"{cyan}Suggestion:{reset} {self.suggestion}")

        if self.details:
            for key, value in self.details.items():
                lines.append(f"{dim}  {key}: {value}{reset}")

        return "\n".join(lines)

    def __str__(self) -> str:
        """Return the formatted error message."""
        return self.format(use_color=False)


class ConfigurationError(CLIError):
    """Error in configuration file or settings."""

    def __init__(
        self,
        message: str,
        config_file: str | None = None,
        suggestion: str | None = None,
    ):
        default_suggestion = (
            "Check pom-scout.config.json syntax and value ranges"
        )
        super().__init__(
            category=ErrorCategory.CONFIGURATION,
            message=message,
            suggestion=suggestion or default_suggestion,
            details={"config_file": config_file} if config_file else None,
            exit_code=1,
        )


class ValidationError(CLIError):
    """Error for invalid CLI arguments or input."""

    def __init__(self, message: str, suggestion: str | None = None):
        super().__init__(
            category=ErrorCategory.VALIDATION,
            message=message,
            suggestion=suggestion or "Check the command syntax with --help",
            exit_code=2,
        )


class DescriptorFileError(CLIError):
    """Error reading a saved element descriptor file."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            category=ErrorCategory.FILE_SYSTEM,
            message=f"Cannot read descriptors from {path}: {reason}",
            suggestion=(
                "Provide a JSON list of element descriptors, or an object "
                "mapping each page URL to its list of descriptors"
            ),
            details={"path": path},
            exit_code=1,
        )


class NavigationError(CLIError):
    """Error loading a page in the browser."""

    def __init__(self, url: str, original_error: str | None = None):
        message = f"Failed to load {url}"
        if original_error:
            message = f"{message}: {original_error}"

        super().__init__(
            category=ErrorCategory.NAVIGATION,
            message=message,
            suggestion=(
                "Check the URL is reachable, or raise navigationTimeoutMs. "
                "Browsers are installed with: playwright install chromium"
            ),
            details={"url": url},
            exit_code=1,
        )


class NoPagesAnalyzedError(CLIError):
    """Error when no page yielded any elements."""

    def __init__(self, attempted: int, failures: list[str] | None = None):
        details: dict[str, Any] = {"attempted": attempted}
        if failures:
            details["failures"] = "; ".join(failures)

        super().__init__(
            category=ErrorCategory.ANALYSIS,
            message=f"No pages could be analyzed ({attempted} attempted)",
            suggestion="Pass at least two reachable URLs or set 'urls' in the config file",
            details=details,
            exit_code=1,
        )


def handle_exception(
    error: Exception,
    use_color: bool = True,
    verbose: bool = False,
) -> tuple[str, int]:
    """Convert any exception to formatted output and exit code.

    Args:
        error: The exception to handle.
        use_color: Whether to use color in output.
        verbose: Whether to include full traceback.

    Returns:
        Tuple of (formatted_message, exit_code).
    """
    import traceback

    if isinstance(error, CLIError):
        message = error.format(use_color=use_color)
        exit_code = error.exit_code
    else:
        red = "\033[91m" if use_color else ""
        reset = "\033[0m" if use_color else ""
        message = f"{red}Error:{reset} {str(error)}"
        exit_code = 1

    if verbose:
        message += "\n\nTraceback:\n" + "".join(
            traceback.format_exception(type(error), error, error.__traceback__)
        )

    return message, exit_code


__all__ = [
    "ErrorCategory",
    "CLIError",
    "ConfigurationError",
    "ValidationError",
    "DescriptorFileError",
    "NavigationError",
    "NoPagesAnalyzedError",
    "handle_exception",
]
