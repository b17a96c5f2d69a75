from __future__ import annotations

from boxknife.lib.hexcodec import DecodePolicy, decode, decode_strict, encode, split_hex_only
from boxknife.lib.types import Param
from boxknife.units import Arg, Unit


class unhex(Unit):
    """
    Hex decode the input. By default, decode all hex data in the input, regardless of garbage
    in-between: Every pair of adjacent hex digits is decoded into one byte and all other bytes are
    copied to the output unchanged.

    In hex-only mode, the input is expected to be hex, possibly separated by spaces. Spaces are
    removed and decoding stops at the first byte that is not a hex digit, the remainder of the
    input is copied unchanged. A trailing odd hex digit is also copied. In strict mode, any of
    these conditions is an error.
    """

    def __init__(
        self,
        hex_only: Param[bool, Arg.Switch('-o', help=(
            'expect only hex data, stop at first non-hex byte (but copy the rest, except spaces)'))] = False,
        strict: Param[bool, Arg.Switch('-s', help='strict decoding, error on invalid data')] = False,
    ):
        super().__init__(hex_only=hex_only or strict, strict=strict)

    @property
    def policy(self) -> DecodePolicy:
        return DecodePolicy(self.args.hex_only, self.args.strict)

    def process(self, data):
        policy = self.policy
        if policy.strict:
            self.log_debug('decoding in strict mode')
            return decode_strict(data)
        if policy.hex_only:
            self.log_debug('decoding in hex-only mode')
            head, tail = split_hex_only(data)
            if tail:
                self.log_info(F'decoded {len(head)} bytes, copied {len(tail)} bytes of trailing non-hex data')
            return head + tail
        return decode(data, policy)

    def reverse(self, data):
        return encode(data)
