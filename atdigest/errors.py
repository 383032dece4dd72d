"""Error values produced while digesting AT traffic and raised to callers."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union

CUSTOM_MESSAGE_LIMIT = 64


class CmsError(enum.IntEnum):
    """Message service errors, as defined in 3GPP TS 27.005 section 3.2.5."""

    ME_FAILURE = 300
    SMS_SERVICE_RESERVED = 301
    NOT_ALLOWED = 302
    NOT_SUPPORTED = 303
    INVALID_PDU_PARAMETER = 304
    INVALID_TEXT_PARAMETER = 305
    SIM_NOT_INSERTED = 310
    SIM_PIN = 311
    PH_SIM_PIN = 312
    SIM_FAILURE = 313
    SIM_BUSY = 314
    SIM_WRONG = 315
    SIM_PUK = 316
    SIM_PIN2 = 317
    SIM_PUK2 = 318
    MEMORY_FAILURE = 320
    INVALID_INDEX = 321
    MEMORY_FULL = 322
    SMSC_ADDRESS_UNKNOWN = 330
    NO_NETWORK = 331
    NETWORK_TIMEOUT = 332
    NO_CNMA_ACK_EXPECTED = 340
    UNKNOWN = 500

    @classmethod
    def from_code(cls, code: int) -> CmsError:
        """Map a numeric error code; unrecognised codes become UNKNOWN."""
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN

    @classmethod
    def from_msg(cls, msg: Union[bytes, str]) -> CmsError:
        """Map a verbose error message; unrecognised messages become UNKNOWN."""
        if isinstance(msg, str):
            msg = msg.encode()
        return _CMS_FROM_MSG.get(msg, cls.UNKNOWN)

    def __str__(self) -> str:
        return _CMS_TEXT[self]


_CMS_TEXT = {
    CmsError.ME_FAILURE: "ME failure",
    CmsError.SMS_SERVICE_RESERVED: "SMS service reserved",
    CmsError.NOT_ALLOWED: "Operation not allowed",
    CmsError.NOT_SUPPORTED: "Operation not supported",
    CmsError.INVALID_PDU_PARAMETER: "Invalid PDU mode parameter",
    CmsError.INVALID_TEXT_PARAMETER: "Invalid text mode parameter",
    CmsError.SIM_NOT_INSERTED: "SIM not inserted",
    CmsError.SIM_PIN: "SIM PIN required",
    CmsError.PH_SIM_PIN: "PH-SIM PIN required",
    CmsError.SIM_FAILURE: "SIM failure",
    CmsError.SIM_BUSY: "SIM busy",
    CmsError.SIM_WRONG: "SIM wrong",
    CmsError.SIM_PUK: "SIM PUK required",
    CmsError.SIM_PIN2: "SIM PIN2 required",
    CmsError.SIM_PUK2: "SIM PUK2 required",
    CmsError.MEMORY_FAILURE: "Memory failure",
    CmsError.INVALID_INDEX: "Invalid index",
    CmsError.MEMORY_FULL: "Memory full",
    CmsError.SMSC_ADDRESS_UNKNOWN: "SMSC address unknown",
    CmsError.NO_NETWORK: "No network",
    CmsError.NETWORK_TIMEOUT: "Network timeout",
    CmsError.NO_CNMA_ACK_EXPECTED: "No CNMA acknowledgement expected",
    CmsError.UNKNOWN: "Unknown",
}

# Messages recognised when parsing verbose errors; a few codes have none.
_CMS_FROM_MSG = {
    _CMS_TEXT[error].encode(): error
    for error in (
        CmsError.ME_FAILURE,
        CmsError.SMS_SERVICE_RESERVED,
        CmsError.NOT_ALLOWED,
        CmsError.NOT_SUPPORTED,
        CmsError.INVALID_PDU_PARAMETER,
        CmsError.INVALID_TEXT_PARAMETER,
        CmsError.SIM_NOT_INSERTED,
        CmsError.SIM_PIN,
        CmsError.SIM_FAILURE,
        CmsError.SIM_BUSY,
        CmsError.SIM_WRONG,
        CmsError.SIM_PUK,
        CmsError.MEMORY_FAILURE,
        CmsError.INVALID_INDEX,
        CmsError.MEMORY_FULL,
        CmsError.SMSC_ADDRESS_UNKNOWN,
        CmsError.NO_NETWORK,
        CmsError.NETWORK_TIMEOUT,
    )
}


class ConnectionFailure(enum.IntEnum):
    """Connection-level result codes such as NO CARRIER or BUSY."""

    UNKNOWN = 0
    NO_CARRIER = 1
    NO_DIALTONE = 2
    BUSY = 3
    NO_ANSWER = 4

    @classmethod
    def from_code(cls, code: int) -> ConnectionFailure:
        """Map a numeric code; unrecognised codes become UNKNOWN."""
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN

    def __str__(self) -> str:
        return _CONNECTION_TEXT[self]


_CONNECTION_TEXT = {
    ConnectionFailure.UNKNOWN: "Unknown",
    ConnectionFailure.NO_CARRIER: "No carrier",
    ConnectionFailure.NO_DIALTONE: "No dialtone",
    ConnectionFailure.BUSY: "Busy",
    ConnectionFailure.NO_ANSWER: "No answer",
}


class ErrorKind(enum.Enum):
    """The categories of failure an AT exchange can end in."""

    READ = "read"
    WRITE = "write"
    TIMEOUT = "timeout"
    INVALID_RESPONSE = "invalid_response"
    ABORTED = "aborted"
    PARSE = "parse"
    ERROR = "error"
    CME_ERROR = "cme_error"
    CMS_ERROR = "cms_error"
    CONNECTION_ERROR = "connection_error"
    CUSTOM = "custom"
    CUSTOM_MESSAGE = "custom_message"


Detail = Union[None, int, str, bytes, CmsError, ConnectionFailure]


@dataclass(frozen=True)
class InternalError:
    """An error as found in the received stream, before it reaches the caller.

    ``detail`` holds the CME code or message, the CMS error, the connection
    failure or the raw bytes of a custom error, depending on ``kind``.
    """

    kind: ErrorKind
    detail: Detail = None

    @classmethod
    def cme(cls, code: Union[int, str]) -> InternalError:
        return cls(ErrorKind.CME_ERROR, code)

    @classmethod
    def cms(cls, error: CmsError) -> InternalError:
        return cls(ErrorKind.CMS_ERROR, CmsError(error))

    @classmethod
    def connection(cls, error: ConnectionFailure) -> InternalError:
        return cls(ErrorKind.CONNECTION_ERROR, ConnectionFailure(error))

    @classmethod
    def custom_message(cls, message: bytes) -> InternalError:
        return cls(ErrorKind.CUSTOM, bytes(message))


class AtError(Exception):
    """Raised when an AT command fails."""

    def __init__(self, kind: ErrorKind, detail: Detail = None) -> None:
        self.kind = kind
        self.detail = detail
        text = kind.value if detail is None else f"{kind.value}: {detail}"
        super().__init__(text)

    @classmethod
    def from_internal(
        cls, internal: InternalError, keep_custom_message: bool = False
    ) -> AtError:
        """Convert a stream-level error into the error raised to callers.

        Custom errors drop their bytes unless ``keep_custom_message`` is set,
        in which case at most the first 64 bytes are kept.
        """
        if internal.kind is ErrorKind.CUSTOM:
            if keep_custom_message:
                message = bytes(internal.detail or b"")[:CUSTOM_MESSAGE_LIMIT]
                return cls(ErrorKind.CUSTOM_MESSAGE, message)
            return cls(ErrorKind.CUSTOM)
        return cls(internal.kind, internal.detail)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AtError):
            return NotImplemented
        return (self.kind, self.detail) == (other.kind, other.detail)

    def __hash__(self) -> int:
        return hash((self.kind, self.detail))

    def __repr__(self) -> str:
        return f"AtError({self.kind!r}, {self.detail!r})"