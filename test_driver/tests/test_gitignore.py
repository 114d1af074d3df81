"""Tests for repo_init.gitignore (validator, composer, append)."""

from __future__ import annotations

from pathlib import Path

import pytest

from repo_init.gitignore import (
    GitignoreChoice,
    append_entries,
    choose_entries,
    ensure_gitignore,
    is_valid_entry,
    parse_choice,
    propose_entries,
)


class TestIsValidEntry:
    @pytest.mark.parametrize("entry", ["dist/", "*.log", "node_modules/", ".env", "*.py[cod]", "!gradle-wrapper.jar", "/storage/logs/"])
    def test_accepts(self, entry: str):
        assert is_valid_entry(entry)

    @pytest.mark.parametrize("entry", ["", "a/b", "/.config", "ios/.symlinks", "a<b", "b>c", "x|y", "dir|/"])
    def test_rejects(self, entry: str):
        assert not is_valid_entry(entry)


class TestParseChoice:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("", GitignoreChoice.ACCEPT),
            ("  ", GitignoreChoice.ACCEPT),
            ("accept", GitignoreChoice.ACCEPT),
            ("custom", GitignoreChoice.CUSTOM),
            ("ADD", GitignoreChoice.ADD),
            ("skip", GitignoreChoice.SKIP),
        ],
    )
    def test_known(self, text, expected):
        assert parse_choice(text) is expected

    def test_unknown(self):
        assert parse_choice("yes please") is None


class TestChooseEntries:
    proposed = [".env", "*.log", "dist/"]

    def test_propose_general_only(self):
        assert propose_entries([".env"], None) == [".env"]

    def test_propose_general_plus_template(self):
        assert propose_entries([".env"], ("dist/", "build/")) == [".env", "dist/", "build/"]

    def test_accept(self):
        assert choose_entries(self.proposed, GitignoreChoice.ACCEPT) == self.proposed

    def test_custom_replaces(self):
        assert choose_entries(self.proposed, GitignoreChoice.CUSTOM, "out/  *.tmp\tcache/") == ["out/", "*.tmp", "cache/"]

    def test_add_appends(self):
        result = choose_entries(self.proposed, GitignoreChoice.ADD, "out/ *.tmp")
        assert result == [".env", "*.log", "dist/", "out/", "*.tmp"]

    def test_skip(self):
        assert choose_entries(self.proposed, GitignoreChoice.SKIP, "ignored") is None


class TestAppendEntries:
    """Unit tests for append_entries()."""

    def test_no_file(self, tmp_path: Path):
        gi = tmp_path / ".gitignore"
        result = append_entries(gi, [".env", "dist/"])

        assert gi.read_text() == ".env\ndist/\n"
        assert result.added == [".env", "dist/"]

    def test_existing_content_trailing_newline(self, tmp_path: Path):
        gi = tmp_path / ".gitignore"
        gi.write_text("node_modules/\n")
        append_entries(gi, ["dist/"])

        assert gi.read_text() == "node_modules/\ndist/\n"

    def test_existing_content_no_trailing_newline(self, tmp_path: Path):
        gi = tmp_path / ".gitignore"
        gi.write_text("node_modules/")
        append_entries(gi, ["dist/"])

        assert gi.read_text() == "node_modules/\ndist/\n"

    def test_skips_entries_already_in_file(self, tmp_path: Path, capture_logs):
        gi = tmp_path / ".gitignore"
        gi.write_text("dist/\n")
        result = append_entries(gi, ["dist/", "*.log"])

        assert gi.read_text() == "dist/\n*.log\n"
        assert result.duplicates == ["dist/"]
        assert "Skipping duplicate entry: dist/" in capture_logs.getvalue()

    def test_repeated_entry_in_one_batch_written_once(self, tmp_path: Path):
        gi = tmp_path / ".gitignore"
        result = append_entries(gi, [".env", "*.log", ".env"])

        assert gi.read_text().splitlines() == [".env", "*.log"]
        assert result.duplicates == [".env"]

    def test_duplicate_check_is_exact(self, tmp_path: Path):
        """A prefix or substring of an existing line is not a duplicate."""
        gi = tmp_path / ".gitignore"
        gi.write_text(".env.local\n")
        append_entries(gi, [".env"])

        assert gi.read_text().splitlines() == [".env.local", ".env"]

    def test_invalid_entries_dropped_in_order(self, tmp_path: Path, capture_logs):
        gi = tmp_path / ".gitignore"
        result = append_entries(gi, ["a/b", "*.log", "x|y", "build/"])

        assert gi.read_text() == "*.log\nbuild/\n"
        assert result.invalid == ["a/b", "x|y"]
        assert "Skipping invalid entry: a/b" in capture_logs.getvalue()

    def test_idempotent(self, tmp_path: Path):
        gi = tmp_path / ".gitignore"
        entries = [".env", "*.log", "dist/"]
        append_entries(gi, entries)
        before = gi.read_bytes()

        result = append_entries(gi, entries)
        assert result.added == []
        assert gi.read_bytes() == before

    def test_nothing_written_when_all_rejected(self, tmp_path: Path):
        gi = tmp_path / ".gitignore"
        gi.write_text("keep")
        append_entries(gi, ["a/b", ""])

        # No trailing newline was added either.
        assert gi.read_text() == "keep"

    def test_crlf_content(self, tmp_path: Path):
        """Preserves CRLF line endings when appending."""
        gi = tmp_path / ".gitignore"
        gi.write_bytes(b"node_modules/\r\n")
        append_entries(gi, ["dist/", "*.log"])

        assert gi.read_bytes() == b"node_modules/\r\ndist/\r\n*.log\r\n"


class TestEnsureGitignore:
    def test_creates_when_absent(self, tmp_path: Path):
        gi = tmp_path / ".gitignore"
        assert ensure_gitignore(gi) is True
        assert gi.read_text() == ""

    def test_leaves_existing_file(self, tmp_path: Path):
        gi = tmp_path / ".gitignore"
        gi.write_text("keep\n")
        assert ensure_gitignore(gi) is False
        assert gi.read_text() == "keep\n"
