"""
Key Extractor and Filter Tests.
"""

from pathlib import Path

import pytest

from fileindex import CollisionStrategy, FileIndexer
from fileindex.filters import (
    all_of,
    any_of,
    excluding_dirs,
    has_extension,
    include_all,
    not_hidden,
    skip_system_files,
)
from fileindex.keys import by_content_hash, by_extension, by_name, by_relative_path, by_stem


class TestKeys:
    """Tests for the ready-made key extractors."""

    def test_name_stem_extension(self):
        path = Path("/data/sub/Report.Final.PDF")

        assert by_name(path) == "Report.Final.PDF"
        assert by_stem(path) == "Report.Final"
        assert by_extension(path) == ".pdf"

    def test_relative_path(self, temp_dir):
        key = by_relative_path(temp_dir)

        assert key(temp_dir / "sub" / "a.txt") == "sub/a.txt"

    def test_content_hash_matches_identical_files(self, temp_dir):
        """Identical bytes give identical hashes."""
        first = temp_dir / "one.bin"
        second = temp_dir / "two.bin"
        other = temp_dir / "three.bin"
        first.write_bytes(b"\x00\x01" * 50000)
        second.write_bytes(b"\x00\x01" * 50000)
        other.write_bytes(b"\x00\x02" * 50000)

        assert by_content_hash(first) == by_content_hash(second)
        assert by_content_hash(first) != by_content_hash(other)
        assert len(by_content_hash(first)) == 16  # xxh64 hex digest

    def test_content_hash_groups_duplicates(self, temp_dir, test_config):
        """Content hashing with ALLOW_DUPLICATES groups copies together."""
        (temp_dir / "original.txt").write_text("same content\n")
        (temp_dir / "copy.txt").write_text("same content\n")
        (temp_dir / "different.txt").write_text("other content\n")

        with FileIndexer(temp_dir, CollisionStrategy.ALLOW_DUPLICATES, config=test_config) as indexer:
            indexer.index(by_content_hash)

            groups = sorted(len(indexer.get_all(k)) for k in indexer.keys())
            assert groups == [1, 2]


class TestFilters:
    """Tests for the ready-made predicates."""

    def test_include_all(self):
        assert include_all(Path(".hidden"))

    def test_not_hidden(self):
        assert not_hidden(Path("/a/visible.txt"))
        assert not not_hidden(Path("/a/.hidden"))

    def test_skip_system_files(self):
        assert not skip_system_files(Path("/a/.DS_Store"))
        assert not skip_system_files(Path("/a/Thumbs.db"))
        assert skip_system_files(Path("/a/notes.txt"))

    @pytest.mark.parametrize("name, expected", [
        ("a.txt", True),
        ("b.MD", True),
        ("c.py", False),
        ("README", False),
    ])
    def test_has_extension(self, name, expected):
        predicate = has_extension("txt", ".md")

        assert predicate(Path(name)) is expected

    def test_excluding_dirs(self):
        predicate = excluding_dirs({"node_modules", ".git"})

        assert predicate(Path("/repo/src/app.js"))
        assert not predicate(Path("/repo/node_modules/pkg/index.js"))

    def test_combinators(self):
        txt_visible = all_of(has_extension(".txt"), not_hidden)
        txt_or_md = any_of(has_extension(".txt"), has_extension(".md"))

        assert txt_visible(Path("a.txt"))
        assert not txt_visible(Path(".a.txt"))
        assert txt_or_md(Path("b.md"))
        assert not txt_or_md(Path("c.py"))
