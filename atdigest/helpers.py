"""Formatting helpers for logging raw byte traffic."""

from __future__ import annotations

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\r": "\\r",
    "\n": "\\n",
    "\t": "\\t",
    "\0": "\\0",
}


def _escape_char(ch: str) -> str:
    if ch in _ESCAPES:
        return _ESCAPES[ch]
    if ord(ch) < 0x20 or ord(ch) == 0x7F:
        return f"\\u{{{ord(ch):x}}}"
    return ch


def lossy_str(data: bytes) -> str:
    """Render bytes as a quoted, escaped string if they are UTF-8, else as a byte list."""
    try:
        text = bytes(data).decode("utf-8")
    except UnicodeDecodeError:
        return "[" + ", ".join(str(b) for b in data) + "]"
    return '"' + "".join(_escape_char(ch) for ch in text) + '"'


def format_bytes(data: bytes) -> str:
    """Render bytes as a multi-line list of hexadecimal values."""
    if not data:
        return "[]"
    return "[\n" + "".join(f"    {b:#x},\n" for b in data) + "]"