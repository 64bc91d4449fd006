"""Tests for properties file parsing and writing."""

import os
import stat
from pathlib import Path

import pytest

from grabver.lib.properties import (
    FILE_MODE,
    escape_value,
    format_properties,
    parse_properties,
    read_properties,
    write_properties_atomic,
)


class TestParseProperties:
    """Tests for parse_properties."""

    def test_key_value_lines(self) -> None:
        """Should read simple key=value lines in order."""
        props = parse_properties("MAJOR=1\nMINOR=2\n")

        assert props == {"MAJOR": "1", "MINOR": "2"}
        assert list(props) == ["MAJOR", "MINOR"]

    def test_skips_comments_and_blank_lines(self) -> None:
        """Lines starting with # or ! and blank lines are ignored."""
        text = "#Tue Jun 06 10:00:00 CEST 2017\n\n! note\n   # indented\nBUILD=4\n"

        assert parse_properties(text) == {"BUILD": "4"}

    def test_all_separators(self) -> None:
        """Equals, colon and plain whitespace all separate key and value."""
        props = parse_properties("A=1\nB: 2\nC 3\nD = 4\n")

        assert props == {"A": "1", "B": "2", "C": "3", "D": "4"}

    def test_empty_value(self) -> None:
        """A key with nothing after the separator has an empty value."""
        assert parse_properties("PRE_RELEASE=\n") == {"PRE_RELEASE": ""}

    def test_escapes(self) -> None:
        """Backslash escapes and unicode escapes are decoded."""
        props = parse_properties("A=tab\\there\nB=\\u00e9t\\u00e9\nkey\\=x=y\n")

        assert props["A"] == "tab\there"
        assert props["B"] == "été"
        assert props["key=x"] == "y"

    def test_continuation_lines(self) -> None:
        """A trailing backslash joins the next line, minus its indentation."""
        props = parse_properties("LABELS=android, \\\n    versioning\nNEXT=1\n")

        assert props == {"LABELS": "android, versioning", "NEXT": "1"}

    def test_escaped_backslash_is_not_continuation(self) -> None:
        """An even number of trailing backslashes ends the line."""
        props = parse_properties("PATH=C:\\\\\nNEXT=1\n")

        assert props == {"PATH": "C:\\", "NEXT": "1"}

    def test_windows_line_endings(self) -> None:
        """CRLF line endings are handled like LF."""
        assert parse_properties("A=1\r\nB=2\r\n") == {"A": "1", "B": "2"}

    def test_duplicate_key_last_wins(self) -> None:
        """Later duplicates override earlier ones."""
        assert parse_properties("BUILD=1\nBUILD=2\n") == {"BUILD": "2"}

    def test_malformed_unicode_escape(self) -> None:
        """A truncated \\u escape is an error."""
        with pytest.raises(ValueError):
            parse_properties("A=\\u12\n")


class TestFormatProperties:
    """Tests for format_properties and escaping."""

    def test_keeps_given_order(self) -> None:
        """Lines come out in the order given, one per pair."""
        text = format_properties([("MINOR", "2"), ("MAJOR", "1")])

        assert text == "MINOR=2\nMAJOR=1\n"

    def test_escape_value_special_characters(self) -> None:
        """Leading spaces, newlines and backslashes are escaped."""
        assert escape_value(" beta") == "\\ beta"
        assert escape_value("a\nb") == "a\\nb"
        assert escape_value("a\\b") == "a\\\\b"

    def test_tricky_values_read_back_verbatim(self) -> None:
        """Values that need escaping survive a format then parse."""
        values = {
            "A": "  rc 1  ",
            "B": "line1\nline2",
            "C": "ends with \\",
            "D": "=starts:with#separators!",
        }

        assert parse_properties(format_properties(values.items())) == values


class TestFileIO:
    """Tests for read_properties and write_properties_atomic."""

    def test_write_then_read(self, tmp_path: Path) -> None:
        """Written file is readable and has the expected content."""
        path = tmp_path / "version.properties"
        write_properties_atomic(path, [("MAJOR", "1"), ("PRE_RELEASE", "beta")])

        assert path.read_text(encoding="utf-8") == "MAJOR=1\nPRE_RELEASE=beta\n"
        assert read_properties(path) == {"MAJOR": "1", "PRE_RELEASE": "beta"}

    def test_overwrites_existing_file(self, tmp_path: Path) -> None:
        """An existing file is replaced entirely."""
        path = tmp_path / "version.properties"
        path.write_text("OLD=1\nMAJOR=0\n", encoding="utf-8")

        write_properties_atomic(path, [("MAJOR", "3")])

        assert read_properties(path) == {"MAJOR": "3"}

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        """Only the target remains after a successful write."""
        path = tmp_path / "version.properties"
        write_properties_atomic(path, [("BUILD", "1")])

        assert [p.name for p in tmp_path.iterdir()] == ["version.properties"]

    def test_file_mode(self, tmp_path: Path) -> None:
        """The file is world readable, not private like a temp file."""
        path = tmp_path / "version.properties"
        write_properties_atomic(path, [("BUILD", "1")])

        assert stat.S_IMODE(os.stat(path).st_mode) == FILE_MODE

    def test_keeps_existing_file_mode(self, tmp_path: Path) -> None:
        """Rewriting a file keeps the permissions it already had."""
        path = tmp_path / "version.properties"
        path.write_text("BUILD=0\n", encoding="utf-8")
        path.chmod(0o600)

        write_properties_atomic(path, [("BUILD", "1")])

        assert stat.S_IMODE(os.stat(path).st_mode) == 0o600
        assert read_properties(path) == {"BUILD": "1"}

    def test_missing_directory_raises(self, tmp_path: Path) -> None:
        """Writing into a missing directory fails with OSError."""
        path = tmp_path / "missing" / "version.properties"

        with pytest.raises(OSError):
            write_properties_atomic(path, [("BUILD", "1")])
