"""Tests for the lock file parser."""

import pytest

from lock_diff.lock_parser import LockParseError, LockParser, is_valid_lock_file
from lock_diff.models import PackageRecord


class TestParseText:
    """Tests for parsing lock file contents."""

    def test_parse_packages_in_order(self):
        text = '''
version = 3

[[package]]
name = "zlib"
version = "0.1.0"

[[package]]
name = "anyhow"
version = "1.0.75"
source = "registry+https://github.com/rust-lang/crates.io-index"
checksum = "abc"
dependencies = ["zlib"]
'''
        lock = LockParser().parse_text(text)

        assert lock.version == 3
        assert lock.packages == (
            PackageRecord("zlib", "0.1.0"),
            PackageRecord("anyhow", "1.0.75",
                          "registry+https://github.com/rust-lang/crates.io-index",
                          "abc", ("zlib",)),
        )

    def test_empty_document(self):
        """A lock file without packages is valid and empty."""
        lock = LockParser().parse_text("")

        assert lock.version is None
        assert lock.packages == ()

    def test_duplicates_pass_through(self):
        """Duplicate keys are left for the index to resolve."""
        text = '''
[[package]]
name = "a"
version = "1.0.0"

[[package]]
name = "a"
version = "1.0.0"
checksum = "later"
'''
        assert len(LockParser().parse_text(text).packages) == 2

    @pytest.mark.parametrize("text, message", [
        ('[[package]]\nname = "a"\n', "missing 'version'"),
        ('[[package]]\nversion = "1.0.0"\n', "missing 'name'"),
        ('[[package]]\nname = "a"\nversion = 1\n', "'version' must be a string"),
        ('[[package]]\nname = "a"\nversion = "1"\nchecksum = 5\n', "'checksum' must be a string"),
        ('[[package]]\nname = "a"\nversion = "1"\ndependencies = "b"\n', "'dependencies'"),
        ('package = "nope"\n', "'package' must be an array"),
        ('version = "3"\n', "'version' must be an integer"),
        ('[[package]\n', "invalid TOML"),
    ])
    def test_malformed_input(self, text, message):
        with pytest.raises(LockParseError, match=message):
            LockParser().parse_text(text, origin="Cargo.lock")

    def test_error_names_entry(self):
        """Errors point at the offending package entry."""
        text = '[[package]]\nname = "a"\nversion = "1"\n\n[[package]]\nname = "b"\n'

        with pytest.raises(LockParseError, match=r"Cargo.lock: package #2"):
            LockParser().parse_text(text, origin="Cargo.lock")


class TestLoadLock:
    """Tests for reading lock files from disk."""

    def test_load_fixture(self, old_lock_path):
        lock = LockParser().load_lock(old_lock_path)

        assert lock.version == 3
        assert len(lock.packages) == 8
        assert [p.name for p in lock.packages][:3] == ["anyhow", "bitflags", "bitflags"]

    def test_path_dependency_has_no_source(self, old_lock_path):
        lock = LockParser().load_lock(old_lock_path)
        local = next(p for p in lock.packages if p.name == "local-crate")

        assert local.source is None
        assert local.checksum is None
        assert local.dependencies == ("anyhow", "tokio")

    def test_missing_file(self, tmp_path):
        with pytest.raises(LockParseError, match="cannot read file"):
            LockParser().load_lock(tmp_path / "missing.lock")

    def test_broken_fixture(self, broken_lock_path):
        with pytest.raises(LockParseError, match="missing 'version'"):
            LockParser().load_lock(broken_lock_path)

    def test_extract_metadata(self, old_lock_path):
        parser = LockParser()
        lock = parser.load_lock(old_lock_path)

        metadata = parser.extract_metadata(lock, str(old_lock_path))

        assert metadata.filename == "old.lock"
        assert metadata.package_count == 8
        assert metadata.lock_version == 3
        assert metadata.file_size > 0
        assert metadata.get_summary().startswith("old.lock: 8 packages, format v3, ")


    def test_extract_metadata_unreadable_size(self, tmp_path):
        """A file that vanished after parsing is reported as a parse error."""
        parser = LockParser()

        with pytest.raises(LockParseError, match="cannot stat file"):
            parser.extract_metadata(parser.parse_text(""), str(tmp_path / "gone.lock"))


class TestIsValidLockFile:
    """Tests for is_valid_lock_file."""

    def test_existing_file(self, old_lock_path):
        assert is_valid_lock_file(str(old_lock_path))

    def test_missing_file(self, tmp_path):
        assert not is_valid_lock_file(str(tmp_path / "nope.lock"))

    def test_directory(self, tmp_path):
        assert not is_valid_lock_file(str(tmp_path))
