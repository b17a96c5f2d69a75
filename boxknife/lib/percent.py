"""
Table-driven percent encoding. An `EncodingTable` has one entry for each byte value, and a byte
is encoded as `%xx` exactly when its entry is `True`. Characters given to the table builders are
matched by code point, so only characters below U+0100 have an effect.
"""
from __future__ import annotations

from typing import Tuple
from urllib.parse import unquote_to_bytes

from boxknife.lib.tools import trim
from boxknife.lib.types import buf

EncodingTable = Tuple[bool, ...]

RFC3986_RESERVED = '!#$%&\'()*+,/:;=?@[]'


def _isgraphic(code: int) -> bool:
    return 0x21 <= code <= 0x7E


def rfc3986_table(excluded: str = '') -> EncodingTable:
    """
    Encode all non-graphic bytes and the reserved characters of RFC 3986. Reserved characters
    listed in `excluded` are kept as they are.
    """
    return tuple(
        not _isgraphic(b) or (chr(b) not in excluded and chr(b) in RFC3986_RESERVED)
        for b in range(0x100))


def custom_table(custom: str, excluded: str = '') -> EncodingTable:
    """
    Encode exactly the characters in `custom` that do not occur in `excluded`.
    """
    return tuple(chr(b) in custom and chr(b) not in excluded for b in range(0x100))


def default_table(excluded: str = '') -> EncodingTable:
    """
    Encode everything except ASCII letters and digits, and except the characters in `excluded`.
    """
    return tuple(
        not (b < 0x80 and chr(b).isalnum()) and chr(b) not in excluded
        for b in range(0x100))


def percent_encode(data: buf, table: EncodingTable) -> bytes:
    encoded = bytearray()
    for byte in bytes(data):
        if table[byte]:
            encoded.extend(B'%%%02x' % byte)
        else:
            encoded.append(byte)
    return bytes(encoded)


def percent_decode(data: buf) -> bytes:
    """
    Trim the input and decode all percent escapes. A percent sign that is not followed by two hex
    digits is copied to the output.
    """
    return unquote_to_bytes(trim(data))
