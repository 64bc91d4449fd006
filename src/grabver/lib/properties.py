"""Flat ``key=value`` property files.

Reads the ``.properties`` dialect written by Java build tools (comments,
``=``/``:``/whitespace separators, backslash escapes and continuation
lines) and writes a plain, deterministic subset of it.

Writes go through a temporary file in the target directory that is renamed
over the target, so a reader never observes a half-written file.

Examples:
    Parse and format round-trip::

        >>> props = parse_properties("# comment\\nMAJOR=1\\nPRE_RELEASE = beta\\n")
        >>> props
        {'MAJOR': '1', 'PRE_RELEASE': 'beta'}
        >>> format_properties(props.items())
        'MAJOR=1\\nPRE_RELEASE=beta\\n'

    Atomic write::

        >>> write_properties_atomic(Path("version.properties"), [("BUILD", "3")])
"""

import logging
import os
import stat
import tempfile
from collections.abc import Iterable, Iterator
from pathlib import Path

logger = logging.getLogger(__name__)

COMMENT_CHARS = ("#", "!")
SEPARATORS = ("=", ":")
WHITESPACE = " \t\f"
FILE_MODE = 0o644

_UNESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_ESCAPES = {"\\": "\\\\", "\t": "\\t", "\n": "\\n", "\r": "\\r", "\f": "\\f"}


def _ends_with_continuation(line: str) -> bool:
    """True when the line ends in an odd number of backslashes."""
    count = len(line) - len(line.rstrip("\\"))
    return count % 2 == 1


def _logical_lines(text: str) -> Iterator[str]:
    """Join continuation lines and drop blanks and comments."""
    pending: str | None = None
    for raw in text.replace("\r\n", "\n").replace("\r", "\n").split("\n"):
        line = raw.lstrip(WHITESPACE)
        if pending is None:
            if not line or line.startswith(COMMENT_CHARS):
                continue
        else:
            line = pending + line
        if _ends_with_continuation(line):
            pending = line[:-1]
            continue
        pending = None
        yield line
    if pending is not None:
        yield pending


def _unescape(text: str) -> str:
    out: list[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch != "\\" or i + 1 >= len(text):
            out.append(ch)
            i += 1
            continue
        nxt = text[i + 1]
        if nxt == "u":
            digits = text[i + 2 : i + 6]
            if len(digits) != 4:
                raise ValueError(f"Malformed \\uXXXX escape: {text[i:]!r}")
            out.append(chr(int(digits, 16)))
            i += 6
            continue
        out.append(_UNESCAPES.get(nxt, nxt))
        i += 2
    return "".join(out)


def _split_entry(line: str) -> tuple[str, str]:
    """Split a logical line into its raw (still escaped) key and value."""
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == "\\":
            i += 2
            continue
        if ch in SEPARATORS or ch in WHITESPACE:
            break
        i += 1
    key = line[:i]
    rest = line[i:].lstrip(WHITESPACE)
    if rest and rest[0] in SEPARATORS:
        rest = rest[1:].lstrip(WHITESPACE)
    return key, rest


def parse_properties(text: str) -> dict[str, str]:
    """Parse properties text into an ordered dict.

    Later duplicates of a key win, as with ``java.util.Properties``.

    Raises:
        ValueError: On a malformed ``\\uXXXX`` escape.
    """
    props: dict[str, str] = {}
    for line in _logical_lines(text):
        raw_key, raw_value = _split_entry(line)
        props[_unescape(raw_key)] = _unescape(raw_value)
    return props


def escape_value(value: str) -> str:
    """Escape a value so that :func:`parse_properties` reads it back verbatim."""
    escaped = "".join(_ESCAPES.get(ch, ch) for ch in value)
    if escaped.startswith(" "):
        escaped = "\\" + escaped
    return escaped


def escape_key(key: str) -> str:
    """Escape a key, including any separator or comment characters in it."""
    escaped = "".join(_ESCAPES.get(ch, ch) for ch in key)
    return "".join(
        "\\" + ch if ch in SEPARATORS or ch in COMMENT_CHARS or ch == " " else ch
        for ch in escaped
    )


def format_properties(items: Iterable[tuple[str, str]]) -> str:
    """Format ``(key, value)`` pairs as ``KEY=value`` lines, in the given order."""
    return "".join(
        f"{escape_key(key)}={escape_value(value)}\n" for key, value in items
    )


def read_properties(path: Path) -> dict[str, str]:
    """Read and parse a properties file as UTF-8.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the content cannot be decoded or parsed.
    """
    return parse_properties(path.read_text(encoding="utf-8"))


def _target_mode(path: Path) -> int:
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        return FILE_MODE


def write_properties_atomic(path: Path, items: Iterable[tuple[str, str]]) -> None:
    """Write properties via temp file + rename in the target's directory.

    An existing target keeps its permission bits; a new file gets
    :data:`FILE_MODE`. The temp file is removed if anything fails before the
    rename.

    Raises:
        OSError: If the directory or the target is not writable.
    """
    content = format_properties(items)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
    )
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_path, _target_mode(path))
        os.replace(tmp_path, path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise
    logger.debug("Wrote %d bytes to %s", len(content), path)
