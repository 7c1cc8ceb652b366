"""
Key Extractors - Ready-made functions mapping a file to its index key.

Any ``Callable[[Path], Hashable]`` works as ``extract_key``. Extractors
run on worker threads and must not share mutable state.
"""

from pathlib import Path
from typing import Callable, Hashable

import xxhash


KeyFunction = Callable[[Path], Hashable]

HASH_CHUNK_SIZE = 65536


def by_name(path: Path) -> str:
    """File name including extension: ``sub/a.txt`` -> ``a.txt``."""
    return path.name


def by_stem(path: Path) -> str:
    """File name without its last extension: ``sub/a.txt`` -> ``a``."""
    return path.stem


def by_extension(path: Path) -> str:
    """Lowercased suffix (``""`` when there is none)."""
    return path.suffix.lower()


def by_relative_path(root: Path | str) -> KeyFunction:
    """Key files by their POSIX-style path relative to ``root``."""
    base = Path(root)

    def extract(path: Path) -> str:
        return path.relative_to(base).as_posix()

    return extract


def by_content_hash(path: Path) -> str:
    """
    xxHash64 hex digest of the file bytes.

    Combined with ALLOW_DUPLICATES this groups byte-identical files.
    """
    hasher = xxhash.xxh64()
    with open(path, "rb") as f:
        while chunk := f.read(HASH_CHUNK_SIZE):
            hasher.update(chunk)
    return hasher.hexdigest()
