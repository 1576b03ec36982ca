# Copyright (c) 2026 The denounce developers
#
# MIT License - See LICENSE file accompanying this package.
#

from __future__ import annotations

from enum import Enum

from ..internal_types import *
from ..exceptions import HeosDecodeError, HeosProtocolError

PayloadT = TypeVar('PayloadT')

class HeosResult(Enum):
    """The result discriminator in the header of every HEOS response."""

    SUCCESS = 'success'
    FAIL = 'fail'

    @classmethod
    def from_wire(cls, value: Jsonable) -> HeosResult:
        """Decodes a wire result string, ignoring case."""
        if isinstance(value, str):
            lower_value = value.lower()
            for result in cls:
                if result.value == lower_value:
                    return result
        raise HeosDecodeError(f"Invalid HEOS result value (expected 'success' or 'fail'): {value!r}")

class HeosHeader:
    """The "heos" object at the top of a HEOS response.

    The message is a query-string-like set of fields, e.g.
    "eid=2&text=ID Not Valid&pid=-1". It may be empty.
    """

    command: str
    result: HeosResult
    message: str

    def __init__(self, command: str, result: HeosResult, message: str=''):
        self.command = command
        self.result = result
        self.message = message

    @classmethod
    def from_jsonable(cls, data: Jsonable) -> HeosHeader:
        if not isinstance(data, dict):
            raise HeosDecodeError(f"HEOS response header must be a JSON object: {data!r}")
        command = data.get('command')
        if not isinstance(command, str):
            raise HeosDecodeError(f"HEOS response header field 'command' must be a string: {data!r}")
        result = HeosResult.from_wire(data.get('result'))
        message = data.get('message', '')
        if message is None:
            message = ''
        if not isinstance(message, str):
            raise HeosDecodeError(f"HEOS response header field 'message' must be a string: {data!r}")
        return cls(command, result, message)

    @property
    def is_success(self) -> bool:
        return self.result == HeosResult.SUCCESS

    def message_fields(self) -> Dict[str, str]:
        """Splits the message into its name=value fields. Fields without
           an '=' map to an empty string."""
        result: Dict[str, str] = {}
        if self.message == '':
            return result
        for part in self.message.split('&'):
            name, _, value = part.partition('=')
            result[name] = value
        return result

    @property
    def error_id(self) -> Optional[str]:
        """The "eid" field of a failure message, if present."""
        return self.message_fields().get('eid')

    @property
    def error_text(self) -> Optional[str]:
        """The "text" field of a failure message, if present."""
        return self.message_fields().get('text')

    def to_jsonable(self) -> JsonableDict:
        return dict(command=self.command, result=self.result.value, message=self.message)

    def __str__(self) -> str:
        return f"HeosHeader(command='{self.command}', result={self.result.value}, message='{self.message}')"

    def __repr__(self) -> str:
        return str(self)

class HeosResponse(Generic[PayloadT]):
    """A decoded HEOS response envelope:

        {"heos": {"command": ..., "result": "success"|"fail", "message": ...}, "payload": ...}

    The header is decoded first. The payload is only decoded (with the
    caller-supplied payload decoder) when the result is "success"; a failed
    response keeps its raw payload, whatever its shape, and
    raise_for_result() raises HeosProtocolError.
    """

    header: HeosHeader
    payload: Optional[PayloadT]
    raw_payload: Jsonable

    def __init__(self, header: HeosHeader, payload: Optional[PayloadT]=None, raw_payload: Jsonable=None):
        self.header = header
        self.payload = payload
        self.raw_payload = raw_payload

    @classmethod
    def from_jsonable(
            cls,
            data: Jsonable,
            payload_decoder: Optional[Callable[[Jsonable], PayloadT]]=None,
          ) -> HeosResponse[PayloadT]:
        """Decodes a response envelope.

        Args:
            data: The parsed JSON response.
            payload_decoder: Converts the raw payload of a successful response
                into PayloadT. If None, the payload is not decoded and
                payload is None (a unit response).
        """
        if not isinstance(data, dict):
            raise HeosDecodeError(f"HEOS response must be a JSON object: {data!r}")
        if 'heos' not in data:
            raise HeosDecodeError(f"HEOS response has no 'heos' header: {data!r}")
        header = HeosHeader.from_jsonable(data['heos'])
        raw_payload = data.get('payload')
        payload: Optional[PayloadT] = None
        if header.is_success and payload_decoder is not None:
            payload = payload_decoder(raw_payload)
        return cls(header, payload=payload, raw_payload=raw_payload)

    @property
    def command(self) -> str:
        return self.header.command

    @property
    def result(self) -> HeosResult:
        return self.header.result

    @property
    def message(self) -> str:
        return self.header.message

    @property
    def is_success(self) -> bool:
        return self.header.is_success

    def raise_for_result(self) -> None:
        """Raises HeosProtocolError if the device reported a failure."""
        if not self.is_success:
            raise HeosProtocolError(self.header)

    def __str__(self) -> str:
        return f"HeosResponse({self.header}, payload={self.raw_payload!r})"

    def __repr__(self) -> str:
        return str(self)
