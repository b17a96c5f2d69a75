"""
Hexadecimal encoding and the three decoding policies used by `boxknife.units.encoding.unhex`:

1. The strict decoder accepts only a (trimmed) buffer of an even number of hex digits.
2. The hex-only decoder assumes that the input is intended to be hex, but it removes spaces and
   degrades to copying the remainder of the input verbatim when it encounters a problem.
3. The find-anywhere decoder decodes every pair of adjacent hex digits in arbitrary data and
   copies all other bytes unchanged.

The strict decoder raises `boxknife.lib.hexcodec.OddLengthError` or
`boxknife.lib.hexcodec.InvalidCharacterError`; the other two never fail on input content.
"""
from __future__ import annotations

import base64

from typing import NamedTuple

from boxknife.lib.exceptions import BoxKnifeCriticalException, BoxKnifePotentialUserError
from boxknife.lib.tools import ishexdigit, trim
from boxknife.lib.types import buf

__all__ = [
    'DecodePolicy',
    'HexDecodeError',
    'InvalidCharacterError',
    'OddLengthError',
    'RecoveryExhausted',
    'decode',
    'decode_anywhere',
    'decode_hex_only',
    'decode_strict',
    'encode',
    'split_hex_only',
]


class HexDecodeError(BoxKnifePotentialUserError):
    """
    Base class for errors of the strict hex decoder.
    """


class OddLengthError(HexDecodeError):
    def __init__(self, length: int):
        super().__init__(F'Invalid hex input: Odd number of digits ({length})')
        self.length = length


class InvalidCharacterError(HexDecodeError):
    def __init__(self, index: int, char: int):
        super().__init__(F'Invalid hex input: Invalid character {chr(char)!r} at position {index}')
        self.index = index
        self.char = char


class RecoveryExhausted(BoxKnifeCriticalException):
    """
    Raised by the hex-only decoder when strict decoding failed in a way it cannot recover from.
    """


class _PolicyFlags(NamedTuple):
    hex_only: bool
    strict: bool


class DecodePolicy(_PolicyFlags):
    """
    Selects one of the three decoding algorithms. Strict decoding implies hex-only decoding, the
    constructor sets `hex_only` whenever `strict` is set.
    """
    __slots__ = ()

    def __new__(cls, hex_only: bool = False, strict: bool = False):
        return super().__new__(cls, bool(hex_only or strict), bool(strict))


def encode(data: buf) -> bytes:
    """
    Encode the input as lowercase hex without separators.
    """
    return base64.b16encode(data).lower()


def _decode_exact(data: bytes) -> bytes:
    if len(data) % 2:
        raise OddLengthError(len(data))
    for index, byte in enumerate(data):
        if not ishexdigit(byte):
            raise InvalidCharacterError(index, byte)
    return base64.b16decode(data, casefold=True)


def decode_strict(data: buf) -> bytes:
    """
    Trim whitespace from both ends of the input and decode it as hex. The length check is done
    before any character is inspected; the index of an invalid character is relative to the
    trimmed input.
    """
    return _decode_exact(trim(data))


def split_hex_only(data: buf) -> tuple[bytes, bytes]:
    """
    Implements the lenient part of `boxknife.lib.hexcodec.decode_hex_only`. The input is trimmed
    and all spaces are removed. The function returns a tuple of the decoded prefix and the tail
    of the input that could not be decoded. Whenever decoding fails due to an odd length, the
    last byte is moved to the tail; when it fails due to an invalid character, everything from
    that character onwards is moved to the tail. Hex decoding does not resume after an invalid
    character.
    """
    work = trim(data).replace(B'\x20', B'')
    tail = []
    while True:
        try:
            head = _decode_exact(work)
        except InvalidCharacterError as error:
            tail.append(work[error.index:])
            work = work[:error.index]
        except OddLengthError:
            tail.append(work[-1:])
            work = work[:-1]
        except Exception as error:
            raise RecoveryExhausted(F'unexpected error during hex recovery: {error!s}') from error
        else:
            break
    tail.reverse()
    return head, B''.join(tail)


def decode_hex_only(data: buf, strict: bool = False) -> bytes:
    """
    Decode input that is expected to consist only of hex digits and spaces. With `strict` set,
    this is the same as `boxknife.lib.hexcodec.decode_strict`; otherwise, see
    `boxknife.lib.hexcodec.split_hex_only` for how invalid input is handled.
    """
    if strict:
        return decode_strict(data)
    head, tail = split_hex_only(data)
    return head + tail


def decode_anywhere(data: buf) -> bytes:
    """
    Scan the input from left to right and decode every pair of adjacent hex digits into a byte.
    All other bytes are copied to the output. Once a pair was decoded, the scan continues after
    it, so overlapping pairs are never decoded twice.
    """
    view = bytes(data)
    size = len(view)
    result = bytearray()
    cursor = 0
    while cursor + 1 < size:
        a = view[cursor]
        b = view[cursor + 1]
        if ishexdigit(a) and ishexdigit(b):
            result.append(int(view[cursor:cursor + 2], 16))
            cursor += 2
        else:
            result.append(a)
            cursor += 1
    # the last byte is carried over when it did not become part of a pair
    result.extend(view[cursor:])
    return bytes(result)


def decode(data: buf, policy: DecodePolicy = DecodePolicy()) -> bytes:
    """
    Decode the input using the algorithm selected by the given policy.
    """
    if policy.hex_only or policy.strict:
        return decode_hex_only(data, policy.strict)
    return decode_anywhere(data)
