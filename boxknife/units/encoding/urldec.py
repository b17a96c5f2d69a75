from __future__ import annotations

from boxknife.lib.percent import default_table, percent_decode, percent_encode
from boxknife.units import Unit


class urldec(Unit):
    """
    URL decode the input. Leading and trailing whitespace is removed before all percent escapes
    are decoded; a percent sign that does not start a valid escape is copied unchanged. The reverse
    operation encodes all non alphanumeric characters.
    """

    def process(self, data):
        return percent_decode(data)

    def reverse(self, data):
        return percent_encode(data, default_table())
