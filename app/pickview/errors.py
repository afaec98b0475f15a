"""Exception hierarchy for pickview.

Every failure that aborts the pipeline derives from PickviewError so the
CLI can report it uniformly. "No selection" is not an exception: it is
a normal outcome of an interactive pick.
"""

from enum import Enum


class ScanErrorReason(str, Enum):
    """Why a directory scan failed.

    Attributes:
        INVALID_PATTERN: The name pattern is not a valid regular expression.
        ROOT_UNREADABLE: The scan root cannot be opened as a directory.
        TRAVERSAL_FAILED: A directory below the root could not be read.
    """

    INVALID_PATTERN = "invalid_pattern"
    ROOT_UNREADABLE = "root_unreadable"
    TRAVERSAL_FAILED = "traversal_failed"


class PickerErrorReason(str, Enum):
    """Why an interactive pick failed."""

    SPAWN_FAILED = "spawn_failed"


class ActionErrorReason(str, Enum):
    """Why the viewer program could not be run."""

    SPAWN_FAILED = "spawn_failed"


class PickviewError(Exception):
    """Base exception for all pickview errors."""


class ScanError(PickviewError):
    """Raised when the candidate scan cannot complete.

    Attributes:
        reason: Machine-readable failure classification.
        path: Filesystem path involved in the failure, if any.
    """

    def __init__(self, reason: ScanErrorReason, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.reason = reason
        self.path = path


class PickerError(PickviewError):
    """Raised when the selector subprocess cannot be started."""

    def __init__(self, reason: PickerErrorReason, message: str) -> None:
        super().__init__(message)
        self.reason = reason


class ActionError(PickviewError):
    """Raised when the viewer program cannot be started."""

    def __init__(self, reason: ActionErrorReason, message: str) -> None:
        super().__init__(message)
        self.reason = reason


class ConfigError(PickviewError):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""
