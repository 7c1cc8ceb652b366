"""
Filters - Ready-made inclusion predicates.

Any ``Callable[[Path], bool]`` works as ``should_index``; these cover the
common cases and can be combined with ``all_of`` / ``any_of``.
"""

from pathlib import Path
from typing import Callable, Iterable


Predicate = Callable[[Path], bool]

SYSTEM_FILES = frozenset({".DS_Store", "Thumbs.db", "desktop.ini"})


def include_all(path: Path) -> bool:
    """Default predicate: index everything."""
    return True


def not_hidden(path: Path) -> bool:
    """Reject dotfiles."""
    return not path.name.startswith(".")


def skip_system_files(path: Path) -> bool:
    """Reject OS bookkeeping files such as .DS_Store."""
    return path.name not in SYSTEM_FILES


def has_extension(*extensions: str) -> Predicate:
    """
    Accept files whose suffix is one of ``extensions``.

    Matching is case-insensitive and the leading dot is optional:
    ``has_extension("txt", ".MD")`` accepts ``a.txt`` and ``b.md``.
    """
    wanted = {ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in extensions}

    def predicate(path: Path) -> bool:
        return path.suffix.lower() in wanted

    return predicate


def all_of(*predicates: Predicate) -> Predicate:
    """Accept a file only if every predicate accepts it."""
    def predicate(path: Path) -> bool:
        return all(p(path) for p in predicates)
    return predicate


def any_of(*predicates: Predicate) -> Predicate:
    """Accept a file if at least one predicate accepts it."""
    def predicate(path: Path) -> bool:
        return any(p(path) for p in predicates)
    return predicate


def excluding_dirs(names: Iterable[str]) -> Predicate:
    """Reject files below any directory called one of ``names``."""
    blocked = frozenset(names)

    def predicate(path: Path) -> bool:
        return not blocked.intersection(path.parent.parts)

    return predicate
