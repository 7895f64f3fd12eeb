"""SSH wire primitives (RFC 4251 section 5): uint32, string and mpint."""
from __future__ import annotations

from typing import Union

from .errors import InvalidInput

_U32_MAX = 0xFFFFFFFF


def encode_uint32(value: int) -> bytes:
    if value is None or isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInput("uint32 value is missing or not an integer")
    if value < 0 or value > _U32_MAX:
        raise InvalidInput(f"uint32 value out of range: {value}")
    return value.to_bytes(4, "big")


def encode_string(data: Union[bytes, bytearray, str]) -> bytes:
    """Length-prefixed byte string. No escaping, no terminator."""
    if data is None:
        raise InvalidInput("string field is missing")
    if isinstance(data, str):
        data = data.encode("utf-8")
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise InvalidInput(f"string field must be bytes, got {type(data).__name__}")
    raw = bytes(data)
    return encode_uint32(len(raw)) + raw


def mpint_bytes(value: int) -> bytes:
    """Minimal big-endian magnitude of ``value`` with the sign-padding rule applied.

    Zero is a single 0x00 byte. A leading 0x00 is prepended whenever the high
    bit of the first byte is set, so the value never reads as negative.
    """
    if value is None or isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInput("mpint value is missing or not an integer")
    if value < 0:
        raise InvalidInput("mpint value must be non-negative")
    raw = value.to_bytes(max(1, (value.bit_length() + 7) // 8), "big")
    if raw[0] & 0x80:
        raw = b"\x00" + raw
    return raw


def encode_mpint(value: int) -> bytes:
    raw = mpint_bytes(value)
    return encode_uint32(len(raw)) + raw


class WireBuffer:
    """Append-only buffer for building SSH wire blobs field by field."""

    def __init__(self) -> None:
        self._buf = bytearray()

    def put_raw(self, data: bytes) -> "WireBuffer":
        self._buf += data
        return self

    def put_uint32(self, value: int) -> "WireBuffer":
        return self.put_raw(encode_uint32(value))

    def put_string(self, data: Union[bytes, bytearray, str]) -> "WireBuffer":
        return self.put_raw(encode_string(data))

    def put_mpint(self, value: int) -> "WireBuffer":
        return self.put_raw(encode_mpint(value))

    def getvalue(self) -> bytes:
        return bytes(self._buf)

    def __len__(self) -> int:
        return len(self._buf)


class WireReader:
    """Sequential decoder over an SSH wire blob."""

    def __init__(self, data: bytes) -> None:
        if data is None:
            raise InvalidInput("nothing to decode")
        self._data = bytes(data)
        self._pos = 0

    def _take(self, n: int) -> bytes:
        end = self._pos + n
        if end > len(self._data):
            raise InvalidInput(
                f"truncated blob: need {n} bytes at offset {self._pos}, have {len(self._data) - self._pos}"
            )
        out = self._data[self._pos : end]
        self._pos = end
        return out

    def read_uint32(self) -> int:
        return int.from_bytes(self._take(4), "big")

    def read_string(self) -> bytes:
        return self._take(self.read_uint32())

    def read_mpint(self) -> int:
        raw = self.read_string()
        if raw and raw[0] & 0x80:
            raise InvalidInput("negative mpint")
        return int.from_bytes(raw, "big")

    def remaining(self) -> int:
        return len(self._data) - self._pos

    def at_end(self) -> bool:
        return self._pos == len(self._data)

