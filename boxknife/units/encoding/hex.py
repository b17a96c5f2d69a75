from __future__ import annotations

from boxknife.lib.hexcodec import encode
from boxknife.units import Unit


class hex(Unit):
    """
    Hex encode the input. Every byte is converted to two lowercase hex digits and no separators
    are inserted.
    """

    def process(self, data):
        return encode(data)
