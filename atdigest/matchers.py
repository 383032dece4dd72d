"""Building blocks for recognising AT traffic: results, errors and matchers."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Tuple, Union

from atdigest.errors import InternalError

# Whitespace as understood by the AT protocol: no vertical tab.
_ASCII_WHITESPACE = b" \t\n\r\x0c"

UrcMatcher = Callable[[bytes], Tuple[bytes, int]]


class ParseError(Exception):
    """Base class for matcher failures."""


class Incomplete(ParseError):
    """The input may match once more bytes have arrived."""


class NoMatch(ParseError):
    """The input does not match."""


class DigestKind(enum.Enum):
    """What a digest step found in the buffer."""

    NONE = "none"
    URC = "urc"
    RESPONSE = "response"
    ERROR = "error"
    PROMPT = "prompt"


Payload = Union[None, bytes, int, InternalError]


@dataclass(frozen=True)
class DigestResult:
    """The outcome of digesting a buffer.

    ``payload`` is the URC line or response bytes, the error of an error
    response, or the prompt character as an integer.
    """

    kind: DigestKind
    payload: Payload = None

    @classmethod
    def none(cls) -> DigestResult:
        return cls(DigestKind.NONE)

    @classmethod
    def urc(cls, line: bytes) -> DigestResult:
        return cls(DigestKind.URC, bytes(line))

    @classmethod
    def response(cls, data: bytes) -> DigestResult:
        return cls(DigestKind.RESPONSE, bytes(data))

    @classmethod
    def error(cls, error: InternalError) -> DigestResult:
        if not isinstance(error, InternalError):
            raise TypeError("error must be an InternalError")
        return cls(DigestKind.ERROR, error)

    @classmethod
    def prompt_char(cls, char: Union[int, bytes, str]) -> DigestResult:
        if isinstance(char, str):
            char = char.encode()
        if isinstance(char, (bytes, bytearray)):
            if len(char) != 1:
                raise ValueError("a prompt is a single byte")
            char = char[0]
        if not 0 <= char <= 0xFF:
            raise ValueError(f"prompt byte out of range: {char!r}")
        return cls(DigestKind.PROMPT, char)


def _as_bytes(value: Union[bytes, str]) -> bytes:
    return value.encode() if isinstance(value, str) else bytes(value)


def trim_ascii_whitespace(data: bytes) -> bytes:
    """Strip leading and trailing ASCII whitespace."""
    return bytes(data).strip(_ASCII_WHITESPACE)


def trim_start_ascii_space(data: bytes) -> bytes:
    """Strip leading space characters only."""
    return bytes(data).lstrip(b" ")


def _streaming_tag(tag: bytes, buf: bytes) -> bytes:
    """Consume ``tag`` from the start of ``buf`` and return what follows."""
    if buf.startswith(tag):
        return buf[len(tag):]
    if len(buf) < len(tag) and tag.startswith(buf):
        raise Incomplete(f"expected {tag!r}")
    raise NoMatch(f"expected {tag!r}")


def _line_ending(buf: bytes) -> int:
    if buf.startswith(b"\n"):
        return 1
    if buf.startswith(b"\r\n"):
        return 2
    raise NoMatch("expected a line ending")


def take_until_including(
    tag: Union[bytes, str], buf: bytes
) -> Tuple[bytes, bytes, bytes]:
    """Split ``buf`` at the first ``tag``.

    Returns the bytes before the tag, the tag itself and the rest.
    Raises NoMatch if the tag does not occur.
    """
    tag = _as_bytes(tag)
    buf = bytes(buf)
    index = buf.find(tag)
    if index < 0:
        raise NoMatch(f"{tag!r} not found")
    end = index + len(tag)
    return buf[:index], buf[index:end], buf[end:]


def echo(buf: bytes) -> Tuple[bytes, bytes]:
    """Split off an AT echo, such as ``AT+USORD=3,16``, before the next CRLF.

    Returns the echoed bytes and the rest, which starts with the CRLF.
    Buffers shorter than two bytes yield no echo. Raises NoMatch if there
    is no CRLF.
    """
    buf = bytes(buf)
    if len(buf) < 2:
        return b"", buf
    data, tag, rest = take_until_including(b"\r\n", buf)
    return data, tag + rest


def urc_helper(token: Union[bytes, str]) -> UrcMatcher:
    """Build a matcher for ``\\r\\n{token}(:.*)?\\r\\n``.

    The matcher returns the trimmed URC line and the number of bytes it
    spans, raising Incomplete or NoMatch.
    """
    token = _as_bytes(token)

    def match(buf: bytes) -> Tuple[bytes, int]:
        buf = bytes(buf)
        ending = _line_ending(buf)
        after = _streaming_tag(token, buf[ending:])
        try:
            params = _streaming_tag(b":", after)
            data, terminator, _ = take_until_including(b"\r\n", params)
            urc_tag = token + b":" + data + terminator
        except NoMatch:
            _streaming_tag(b"\r\n", after)
            urc_tag = token + b"\r\n"
        return trim_ascii_whitespace(urc_tag), ending + len(urc_tag)

    return match