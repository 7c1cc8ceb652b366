"""
Data Models - Type definitions for the indexing run.

Files are plain ``pathlib.Path`` objects; keys are whatever hashable
value the caller's key function returns.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List


class CollisionStrategy(Enum):
    """What happens when a second file maps to an existing key."""
    NO_DUPLICATES = "no_duplicates"        # Second insert fails
    REPLACE = "replace"                    # Incoming file replaces the existing one
    ALLOW_DUPLICATES = "allow_duplicates"  # Incoming file is appended

    @classmethod
    def parse(cls, value: "CollisionStrategy | str") -> "CollisionStrategy":
        """Accept an enum member, its value or its name (any case)."""
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower().replace("-", "_")
        for member in cls:
            if normalized in (member.value, member.name.lower()):
                return member
        choices = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown collision strategy {value!r} (expected one of: {choices})")


@dataclass
class UnitFailure:
    """A unit of work (one file) that ended with an exception."""
    path: Path
    error: Exception


@dataclass
class IndexingStats:
    """Statistics from an indexing run."""
    files_seen: int = 0            # Yielded by the walker
    files_indexed: int = 0         # Inserted into the index
    files_skipped: int = 0         # Rejected by the inclusion predicate
    directories_skipped: int = 0   # Unreadable directories
    duration_seconds: float = 0.0
    cancelled: bool = False
    failures: List[UnitFailure] = field(default_factory=list)

    @property
    def errors(self) -> int:
        return len(self.failures)

    @property
    def succeeded(self) -> bool:
        return not self.failures and not self.cancelled

    def __str__(self) -> str:
        return (
            f"Indexed {self.files_indexed} files "
            f"({self.files_seen} seen, "
            f"{self.files_skipped} skipped, "
            f"{self.errors} errors) "
            f"in {self.duration_seconds:.1f}s"
        )
