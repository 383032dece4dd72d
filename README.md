# atdigest

A small, dependency-free library for making sense of the byte stream that
comes back from an AT-command modem. It splits received bytes into command
responses, unsolicited result codes (URCs), data prompts and error result
codes, and reports how many bytes each piece used up, so that you can keep
a receive buffer and drop what has been handled.

## Installation

```
pip install atdigest
```

## Digesting a receive buffer

`AtDigester` takes a URC parser, a callable that is given the buffer and
returns the URC line and the number of bytes it spans, or raises
`Incomplete` or `NoMatch`. `urc_helper(token)` builds such a parser for
lines of the form `\r\n<token>` or `\r\n<token>:<parameters>\r\n`.

`digest` returns a `DigestResult` and the number of bytes consumed.

```python
from atdigest.digester import AtDigester
from atdigest.matchers import DigestKind, urc_helper

digester = AtDigester(urc_helper(b"+UUSORD"))

buf = bytearray(b"AT+CPIN?\r\r\n+CPIN: READY\r\n\r\nOK\r\n")
result, consumed = digester.digest(bytes(buf))
del buf[:consumed]

assert result.kind is DigestKind.RESPONSE
assert result.payload == b"+CPIN: READY"
assert consumed == 31
```

A `DigestResult` has a `kind` (`NONE`, `URC`, `RESPONSE`, `ERROR` or
`PROMPT`) and a `payload`: the URC line or response bytes, the
`InternalError` of an error reply, or the prompt byte (`>` or `@`) as an
integer.

When nothing complete is in the buffer yet, the result has kind `NONE` and
the count covers only an echoed command and leading spaces, which can be
dropped safely. Append more bytes and call `digest` again.

The digester tries, in order: the URC parser, success replies (`OK`,
`CONNECT`), data prompts, and error replies: `+CME ERROR:` and
`+CMS ERROR:` with a numeric code or a message, `MODEM ERROR:`, `ERROR`,
`COMMAND NOT SUPPORT`, `NO CARRIER`, `BUSY`, `NO ANSWER`, `NO DIALTONE`
and `NA`.

Custom matchers can be added with `AtDigester.with_custom_success`,
`with_custom_error` and `with_custom_prompt`. Each returns a new digester;
the matcher is tried before the built-in ones of its kind and follows the
same convention as a URC parser, except that a prompt matcher returns the
prompt byte as an integer. A custom error match is reported as an
`InternalError` of kind `ErrorKind.CUSTOM` carrying the matched bytes.

## Errors

`atdigest.errors` holds:

- `CmsError`: message service error codes, with `from_code`, `from_msg` and
  a readable `str()`; unrecognised codes or messages map to `UNKNOWN`.
- `ConnectionFailure`: `NO_CARRIER`, `NO_DIALTONE`, `BUSY`, `NO_ANSWER`
  and `UNKNOWN`.
- `ErrorKind` and `InternalError`: the error found in the stream. For CME
  errors the `detail` is the numeric code, or the message text when the
  modem reports one.
- `AtError`: an exception built with `AtError.from_internal`. Custom errors
  drop their bytes unless `keep_custom_message=True`, which keeps at most
  the first 64 bytes.

## Other pieces

- `atdigest.responses`: the individual matchers `success_response`,
  `prompt_response` and `error_response`.
- `atdigest.matchers`: `DigestResult`, `ParseError`, `Incomplete`,
  `NoMatch` and low-level helpers such as `echo`, `take_until_including`,
  `trim_ascii_whitespace` and `urc_helper`.
- `atdigest.config`: `Config`, a frozen record of the command cooldown,
  write and flush timeouts (in seconds) and the rule that computes a
  response deadline; `with_*` methods return modified copies.
- `atdigest.timer`: `BlockingTimer`, which expires at a point on the
  monotonic clock; `wait` sleeps until then.
- `atdigest.lengths`: upper bounds on the text length of command
  arguments (`primitive_len`, `hex_str_len`, `string_len`, `struct_len`,
  `enum_len` and others).
- `atdigest.helpers`: `lossy_str` and `format_bytes` for logging raw bytes.

## What this package does not do

It does not open serial ports, write commands to a modem or wait for
replies: there is no client that sends commands or retries them, and no
serialization of command structures into AT command lines. `Config` and
`BlockingTimer` hold the timing rules such a client would use, but nothing
in the package drives I/O with them. There is no command-line program.

## Running the tests

```
pip install -e ".[test]"
pytest
```