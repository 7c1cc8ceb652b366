"""
Error Handling - Centralized error policies and custom exceptions.

Per-file failures (duplicate keys, failing caller functions) end that
file's unit of work and are reported at the end of the run. Directory
read failures are handled locally by the walker according to the
policies below.
"""

import logging
from enum import Enum, auto
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence


logger = logging.getLogger(__name__)


class ErrorAction(Enum):
    """What to do when an error occurs."""
    SKIP = auto()           # Skip this item, continue processing
    ABORT = auto()          # Re-raise and stop the walk


@dataclass
class ErrorPolicy:
    """Policy for handling a specific error type."""
    action: ErrorAction
    log_level: int
    message_template: str = "{file}: {error}"


class IndexingError(Exception):
    """Base exception for indexing errors."""
    pass


class DuplicateKeyError(IndexingError):
    """A file produced a key that is already taken under NO_DUPLICATES."""
    def __init__(self, key: Any, file: Path, existing: Sequence[Path]):
        self.key = key
        self.file = file
        self.existing = tuple(existing)
        existing_str = ", ".join(str(p) for p in self.existing)
        super().__init__(
            f"File {file} produced already existing key {key!r} "
            f"(indexed: {existing_str}); "
            f"collision strategy no_duplicates does not allow duplicated keys"
        )


class CallerFunctionError(IndexingError):
    """The inclusion predicate or key function raised for a file."""
    def __init__(self, file: Path, stage: str, cause: BaseException):
        self.file = file
        self.stage = stage
        self.cause = cause
        super().__init__(f"{stage} failed for {file}: {cause!r}")


class TraversalError(IndexingError):
    """A directory could not be listed."""
    def __init__(self, directory: Path, cause: OSError):
        self.directory = directory
        self.cause = cause
        super().__init__(f"Cannot read directory {directory}: {cause}")


class IndexingCancelled(IndexingError):
    """The run was cancelled before every file was dispatched."""
    pass


# Error type to policy mapping (first match wins, so subclasses come first)
ERROR_POLICIES: dict[type, ErrorPolicy] = {
    PermissionError: ErrorPolicy(
        action=ErrorAction.SKIP,
        log_level=logging.WARNING,
        message_template="Permission denied: {file}"
    ),
    FileNotFoundError: ErrorPolicy(
        action=ErrorAction.SKIP,
        log_level=logging.DEBUG,
        message_template="Directory vanished during walk: {file}"
    ),
    NotADirectoryError: ErrorPolicy(
        action=ErrorAction.SKIP,
        log_level=logging.DEBUG,
        message_template="Expected directory, got file: {file}"
    ),
    OSError: ErrorPolicy(
        action=ErrorAction.SKIP,
        log_level=logging.WARNING,
        message_template="OS error reading directory: {file} - {error}"
    ),
    DuplicateKeyError: ErrorPolicy(
        action=ErrorAction.SKIP,
        log_level=logging.ERROR,
        message_template="Duplicate key for {file}: {error}"
    ),
    CallerFunctionError: ErrorPolicy(
        action=ErrorAction.SKIP,
        log_level=logging.ERROR,
        message_template="Caller function failed for {file}: {error}"
    ),
}


def handle_error(
    error: Exception,
    file_path: Optional[Path] = None,
    context: str = ""
) -> ErrorAction:
    """
    Handle an error according to the defined policies.

    Traversal errors are looked up by their underlying OS error so a
    permission problem is reported as such.

    Args:
        error: The exception that occurred
        file_path: Path being processed (if applicable)
        context: Additional context for logging

    Returns:
        The action to take (SKIP or ABORT)
    """
    lookup = error.cause if isinstance(error, TraversalError) else error

    policy = None
    for error_type, p in ERROR_POLICIES.items():
        if isinstance(lookup, error_type):
            policy = p
            break

    # Default policy for unknown errors
    if policy is None:
        policy = ErrorPolicy(
            action=ErrorAction.SKIP,
            log_level=logging.ERROR,
            message_template="Unexpected error: {file} - {error}"
        )

    file_str = str(file_path) if file_path else "<unknown>"
    message = policy.message_template.format(file=file_str, error=str(error))
    if context:
        message = f"[{context}] {message}"

    logger.log(policy.log_level, message)

    return policy.action
