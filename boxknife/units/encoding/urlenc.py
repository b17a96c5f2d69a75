from __future__ import annotations

from boxknife.lib.percent import custom_table, default_table, percent_encode, rfc3986_table
from boxknife.lib.types import Param
from boxknife.units import Arg, Unit


class urlenc(Unit):
    """
    URL encode the input. Every byte that is selected for encoding is replaced by a percent sign
    followed by two lowercase hex digits. By default, encode all non alphanumeric characters in
    the input.
    """

    def __init__(
        self,
        rfc3986: Param[bool, Arg.Switch('-u', group='TBL',
            help='use RFC3986 (URL) list of chars to encode')] = False,
        custom: Param[str, Arg.String('-c', group='TBL', metavar='custom',
            help='string specifying chars to encode')] = None,
        exclude_chars: Param[str, Arg.String('-e', metavar='chars',
            help='a string of chars to exclude from encoding')] = '',
    ):
        super().__init__(rfc3986=rfc3986, custom=custom, exclude_chars=exclude_chars)
        excluded = exclude_chars or ''
        if rfc3986:
            self.table = rfc3986_table(excluded)
        elif custom is not None:
            self.table = custom_table(custom, excluded)
        else:
            self.table = default_table(excluded)

    def process(self, data):
        return percent_encode(data, self.table)
