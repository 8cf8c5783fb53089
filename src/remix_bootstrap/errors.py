"""Error types for the bootstrap.

Only ``UnsupportedPlatformError`` leaves the component that raised it;
the others are turned into a plain success/failure result at the
component boundary.
"""
import logging
from typing import Any, Dict, Optional

EXIT_FAILURE = 1


def log_error(
    error: Exception,
    context: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None
) -> None:
    """Log an error with context."""
    logger = logger or logging.getLogger(__name__)

    error_info = {
        "error_type": error.__class__.__name__,
        "error_message": str(error)
    }
    if context:
        error_info["context"] = context
    if isinstance(error, BootstrapError):
        error_info["exit_code"] = error.exit_code
        error_info["details"] = error.details

    logger.error("Bootstrap error occurred", extra={"data": error_info})


class BootstrapError(Exception):
    """Base error class for the bootstrap."""
    def __init__(
        self,
        message: str,
        exit_code: int = EXIT_FAILURE,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.exit_code = exit_code
        self.details = details or {}


class UnsupportedPlatformError(BootstrapError):
    """Host OS or architecture is not one we publish binaries for."""
    def __init__(self, kind: str, value: str):
        super().__init__(
            f"Unsupported {kind}: {value}",
            details={"kind": kind, "value": value}
        )


class AcquisitionError(BootstrapError):
    """Release lookup, download or extraction failed."""


class BuildError(BootstrapError):
    """Toolchain missing or build exited non-zero."""
    def __init__(self, message: str, returncode: Optional[int] = None):
        super().__init__(message, details={"returncode": returncode})


class IntegrationError(BootstrapError):
    """PATH symlink could not be created or updated."""
