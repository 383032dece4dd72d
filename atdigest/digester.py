"""Splits a stream of received AT traffic into URCs, responses and prompts."""

from __future__ import annotations

import abc
import copy
from typing import Callable, Optional, Tuple

from atdigest.errors import InternalError
from atdigest.matchers import (
    DigestKind,
    DigestResult,
    Incomplete,
    NoMatch,
    ParseError,
    echo,
    trim_start_ascii_space,
)
from atdigest.responses import error_response, prompt_response, success_response

Digest = Tuple[DigestResult, int]
UrcParser = Callable[[bytes], Tuple[bytes, int]]
ResponseMatcher = Callable[[bytes], Tuple[bytes, int]]
PromptMatcher = Callable[[bytes], Tuple[int, int]]


def _never_matches(buf: bytes):
    raise NoMatch("no custom matcher configured")


class Digester(abc.ABC):
    """Turns the start of a receive buffer into a digest result."""

    @abc.abstractmethod
    def digest(self, buf: bytes) -> Digest:
        """Return what was found and the number of bytes consumed."""


class AtDigester(Digester):
    """A digester following the basic AT standard, with or without echo.

    ``urc_parser`` takes a buffer and returns the URC line and the number of
    bytes it spans, raising Incomplete or NoMatch. Custom matchers for
    success responses, error responses and prompts may be added; they are
    tried before the built-in ones and follow the same convention, except
    that a prompt matcher returns the prompt byte as an integer.
    """

    def __init__(self, urc_parser: Optional[UrcParser] = None) -> None:
        self._urc_parser: UrcParser = urc_parser or _never_matches
        self._custom_success: ResponseMatcher = _never_matches
        self._custom_error: ResponseMatcher = _never_matches
        self._custom_prompt: PromptMatcher = _never_matches

    def with_custom_success(self, func: ResponseMatcher) -> AtDigester:
        """Return a copy that also recognises success responses with ``func``."""
        clone = copy.copy(self)
        clone._custom_success = func
        return clone

    def with_custom_error(self, func: ResponseMatcher) -> AtDigester:
        """Return a copy that also recognises error responses with ``func``."""
        clone = copy.copy(self)
        clone._custom_error = func
        return clone

    def with_custom_prompt(self, func: PromptMatcher) -> AtDigester:
        """Return a copy that also recognises data prompts with ``func``."""
        clone = copy.copy(self)
        clone._custom_prompt = func
        return clone

    def digest(self, buf: bytes) -> Digest:
        data = bytes(buf)

        # Discard leading spaces and any echoed command.
        trimmed = trim_start_ascii_space(data)
        skipped = len(data) - len(trimmed)
        try:
            echoed, rest = echo(trimmed)
        except NoMatch:
            echoed, rest = b"", trimmed
        skipped += len(echoed)

        incomplete = (DigestResult.none(), skipped)

        try:
            urc, length = self._urc_parser(rest)
        except Incomplete:
            return incomplete
        except ParseError:
            pass
        else:
            return DigestResult.urc(urc), length + skipped

        try:
            response, length = self._custom_success(rest)
        except Incomplete:
            return incomplete
        except ParseError:
            pass
        else:
            return DigestResult.response(response), length + skipped

        try:
            result, length = success_response(rest)
        except Incomplete:
            return incomplete
        except ParseError:
            pass
        else:
            return result, length + skipped

        try:
            prompt, length = self._custom_prompt(rest)
        except Incomplete:
            return incomplete
        except ParseError:
            pass
        else:
            return DigestResult.prompt_char(prompt), length + skipped

        try:
            result, length = prompt_response(rest)
        except ParseError:
            pass
        else:
            return result, length + skipped

        try:
            message, length = self._custom_error(rest)
        except Incomplete:
            return incomplete
        except ParseError:
            pass
        else:
            return (
                DigestResult.error(InternalError.custom_message(message)),
                length + skipped,
            )

        try:
            result, length = error_response(rest)
        except ParseError:
            pass
        else:
            return result, length + skipped

        # Echo only covers garbage before the first CRLF; look past a
        # leading CRLF for garbage followed by a valid line.
        if rest.startswith(b"\r\n") and len(rest) > 4:
            result, consumed = self.digest(rest[2:])
            if result.kind is not DigestKind.NONE:
                return result, skipped + 2 + consumed

        return incomplete