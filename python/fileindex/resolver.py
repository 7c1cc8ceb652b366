"""
Collision Resolver - Strategies for keys that already hold files.

A resolver is a pure function of ``(key, incoming, existing)`` returning
the new file tuple for the key. It is selected once per index and never
changes afterwards.
"""

from pathlib import Path
from typing import Any, Callable, Dict, Tuple

from .errors import DuplicateKeyError
from .models import CollisionStrategy


Files = Tuple[Path, ...]
Resolver = Callable[[Any, Path, Files], Files]


def _reject(key: Any, incoming: Path, existing: Files) -> Files:
    raise DuplicateKeyError(key, incoming, existing)


def _replace(key: Any, incoming: Path, existing: Files) -> Files:
    return (incoming,)


def _append(key: Any, incoming: Path, existing: Files) -> Files:
    return existing + (incoming,)


_RESOLVERS: Dict[CollisionStrategy, Resolver] = {
    CollisionStrategy.NO_DUPLICATES: _reject,
    CollisionStrategy.REPLACE: _replace,
    CollisionStrategy.ALLOW_DUPLICATES: _append,
}


def resolver_for(strategy: CollisionStrategy | str) -> Resolver:
    """Return the resolver implementing ``strategy``."""
    return _RESOLVERS[CollisionStrategy.parse(strategy)]
