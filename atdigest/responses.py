"""Matchers for the final result codes of an AT exchange.

Each matcher returns the digest result and the number of bytes it spans,
and raises NoMatch, or Incomplete when more input could still produce a
match.
"""

from __future__ import annotations

import re
from typing import Callable, Iterable, Tuple

from atdigest.errors import (
    CmsError,
    ConnectionFailure,
    ErrorKind,
    InternalError,
)
from atdigest.matchers import (
    DigestResult,
    Incomplete,
    NoMatch,
    take_until_including,
    trim_ascii_whitespace,
)

Match = Tuple[DigestResult, int]

# Whitespace skipped between an error token and its numeric code.
_MULTISPACE = b" \t\r\n"
_DIGITS = re.compile(rb"[0-9]+")
_U16_MAX = 0xFFFF

# CME errors that are reported without a code of their own.
CME_UNKNOWN = "Unknown"
CME_NOT_ALLOWED = "Operation not allowed"

_SUCCESS_TAGS = (b"\r\nOK\r\n", b"\r\nCONNECT\r\n")
_PROMPTS = (b">", b"@")
_GENERIC_ERROR_TAGS = (b"\r\nERROR\r\n", b"\r\nCOMMAND NOT SUPPORT\r\n")
_CONNECTION_TAGS = (
    (b"\r\nNO CARRIER\r\n", ConnectionFailure.NO_CARRIER),
    (b"\r\nBUSY\r\n", ConnectionFailure.BUSY),
    (b"\r\nNO ANSWER\r\n", ConnectionFailure.NO_ANSWER),
    (b"\r\nNO DIALTONE\r\n", ConnectionFailure.NO_DIALTONE),
)
_NOT_AVAILABLE = b"\r\nNA\r\n"


def _line_ending(buf: bytes) -> int:
    if buf.startswith(b"\n"):
        return 1
    if buf.startswith(b"\r\n"):
        return 2
    raise NoMatch("expected a line ending")


def _first_of(alternatives: Iterable[Callable[[bytes], Match]], buf: bytes) -> Match:
    """Return the first alternative that matches; Incomplete stops the search."""
    for alternative in alternatives:
        try:
            return alternative(buf)
        except NoMatch:
            continue
    raise NoMatch("no alternative matched")


def success_response(buf: bytes) -> Match:
    """Match data terminated by ``\\r\\nOK\\r\\n`` or ``\\r\\nCONNECT\\r\\n``."""
    buf = bytes(buf)
    for tag in _SUCCESS_TAGS:
        try:
            data, found, _ = take_until_including(tag, buf)
        except NoMatch:
            continue
        return DigestResult.response(trim_ascii_whitespace(data)), len(data) + len(found)
    raise NoMatch("no success result code")


def prompt_response(buf: bytes) -> Match:
    """Match a data prompt (``>`` or ``@``) followed only by whitespace."""
    buf = bytes(buf)
    for prompt in _PROMPTS:
        try:
            prefix, found, rest = take_until_including(prompt, buf)
        except NoMatch:
            continue
        if rest.lstrip(_MULTISPACE):
            continue
        return DigestResult.prompt_char(prompt), len(prefix) + len(found) + len(rest)
    raise NoMatch("no prompt")


def _numeric_error(token: bytes, buf: bytes) -> Tuple[int, int]:
    """Match ``{token}\\s*(\\d+)\\r\\n``, returning the code and the length."""
    prefix, found, rest = take_until_including(token, buf)
    stripped = rest.lstrip(_MULTISPACE)
    spaces = len(rest) - len(stripped)
    digits = _DIGITS.match(stripped)
    if digits is None:
        raise NoMatch("expected an error code")
    code = int(digits.group())
    if code > _U16_MAX:
        raise NoMatch("error code out of range")
    ending = _line_ending(stripped[digits.end():])
    return code, len(prefix) + len(found) + spaces + digits.end() + ending


def _string_error(token: bytes, buf: bytes) -> Tuple[bytes, int]:
    """Match ``{token}\\s*([^\\n\\r]+)\\r\\n``, returning the message and the length."""
    prefix, found, rest = take_until_including(token, buf)
    if not rest:
        raise Incomplete("error message not yet received")
    if rest.startswith(b"\r"):
        raise NoMatch("empty error message")
    message, terminator, _ = take_until_including(b"\r\n", rest)
    return (
        trim_ascii_whitespace(message + terminator),
        len(prefix) + len(found) + len(message) + len(terminator),
    )


def _cme_numeric(buf: bytes) -> Match:
    code, length = _numeric_error(b"\r\n+CME ERROR:", buf)
    return DigestResult.error(InternalError.cme(code)), length


def _cms_numeric(buf: bytes) -> Match:
    code, length = _numeric_error(b"\r\n+CMS ERROR:", buf)
    return DigestResult.error(InternalError.cms(CmsError.from_code(code))), length


def _cme_string(buf: bytes) -> Match:
    message, length = _string_error(b"\r\n+CME ERROR:", buf)
    text = message.decode("utf-8", errors="replace")
    return DigestResult.error(InternalError.cme(text)), length


def _cms_string(buf: bytes) -> Match:
    message, length = _string_error(b"\r\n+CMS ERROR:", buf)
    return DigestResult.error(InternalError.cms(CmsError.from_msg(message))), length


def _modem_error(buf: bytes) -> Match:
    _, length = _numeric_error(b"\r\nMODEM ERROR:", buf)
    return DigestResult.error(InternalError.cme(CME_UNKNOWN)), length


def _generic_error(buf: bytes) -> Match:
    for tag in _GENERIC_ERROR_TAGS:
        try:
            data, found, _ = take_until_including(tag, buf)
        except NoMatch:
            continue
        return DigestResult.error(InternalError(ErrorKind.ERROR)), len(data) + len(found)
    raise NoMatch("no generic error")


def _connection_error(buf: bytes) -> Match:
    for tag, failure in _CONNECTION_TAGS:
        try:
            data, found, _ = take_until_including(tag, buf)
        except NoMatch:
            continue
        return DigestResult.error(InternalError.connection(failure)), len(data) + len(found)
    raise NoMatch("no connection error")


def _not_available(buf: bytes) -> Match:
    # Some modems reply "NA" to report a not-available error.
    if buf.startswith(_NOT_AVAILABLE):
        return DigestResult.error(InternalError.cme(CME_NOT_ALLOWED)), len(_NOT_AVAILABLE)
    if len(buf) < len(_NOT_AVAILABLE) and _NOT_AVAILABLE.startswith(buf):
        raise Incomplete("partial NA reply")
    raise NoMatch("no NA reply")


_ERROR_ALTERNATIVES = (
    _cme_numeric,
    _cms_numeric,
    _cme_string,
    _cms_string,
    _modem_error,
    _generic_error,
    _connection_error,
    _not_available,
)


def error_response(buf: bytes) -> Match:
    """Match an error result code: CME, CMS, MODEM, generic, connection or NA."""
    return _first_of(_ERROR_ALTERNATIVES, bytes(buf))