"""
Small helpers for byte buffers and for the command line interface.
"""
from __future__ import annotations

import inspect
import os
import re
import sys

from boxknife.lib.environment import environment
from boxknife.lib.types import buf

# ASCII whitespace as understood by the WHATWG infra standard; vertical tab is not part of it.
_WHITESPACE = B'\x20\t\n\f\r'
_HEXDIGITS = frozenset(B'0123456789abcdefABCDEF')


def trim(data: buf) -> bytes:
    """
    Returns a copy of the input with all leading and trailing ASCII whitespace removed, this
    includes line breaks. The input buffer is never modified.
    """
    return bytes(data).strip(_WHITESPACE)


def ishexdigit(byte: int) -> bool:
    """
    Test whether the given byte value is the ASCII code of a hexadecimal digit.
    """
    return byte in _HEXDIGITS


def isbuffer(obj) -> bool:
    """
    Test whether `obj` supports the buffer protocol, like `bytes`, `bytearray` or `memoryview`.
    """
    try:
        memoryview(obj).release()
    except TypeError:
        return False
    return True


def dashed(name: str) -> str:
    """
    Replace underscores in an identifier by dashes. Unit names and long options are displayed in
    this form on the command line.
    """
    return name.strip('_').replace('_', '-')


def get_terminal_size(default: int = 0) -> int:
    """
    Returns the usable width of the terminal that is attached to standard error or standard
    output. A positive value of `BOXKNIFE_TERM_SIZE` takes precedence, and `default` is returned
    when neither stream is a terminal.
    """
    override = environment.term_size.value
    if override > 0:
        return override
    for stream in (sys.stderr, sys.stdout):
        try:
            if not stream.isatty():
                continue
            columns = os.get_terminal_size(stream.fileno()).columns
        except (AttributeError, OSError, ValueError):
            continue
        if columns > 1:
            return columns - 1
    return default


def documentation(unit) -> str:
    """
    The docstring of a unit as it is shown in the help output. Code references are reduced to
    the last component of the name and backticks are removed.
    """
    docs = inspect.getdoc(unit) or ''
    docs = re.sub(R'`boxknife(?:\.\w+)*\.(\w+)`', R'\1', docs)
    return docs.replace('`', '')
