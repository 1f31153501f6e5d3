# two's complement over exactly `bits` bits: the stored magnitude u stands
# for u - 2**bits when its top bit is set. to_bigint() and the radix strings
# still show the stored pattern, to_signed() and int() the signed value.

from sizedint import (
    MAX_INT32, MAX_UINT32, MIN_INT32, NATIVE_BITS, RangeError, SizedInt,
    unsigned_bigint_to_list, unsigned_int_to_list,
)


def _check_fits(bits, value):
    if bits < 1:
        raise RangeError(f'bits must be >= 1, given {bits}', bits=bits)
    half = 1 << (bits - 1)
    if value < -half or value >= half:
        raise RangeError(f'value {value} will not fit in {bits} signed bits',
                         value=value, bits=bits)
    return value + (1 << bits) if value < 0 else value


class IntX(SizedInt):
    kind = 'signed'

    @classmethod
    def from_int(cls, bits, value, *, _xp=None):
        if value < MIN_INT32 or value > MAX_INT32:
            raise RangeError(
                f'value must be in range [-2^{NATIVE_BITS - 1}, '
                f'2^{NATIVE_BITS - 1}-1], given: {value}',
                value=value, bits=bits)
        pattern = _check_fits(bits, value)
        if pattern > MAX_UINT32:
            # sign extension of a negative value past 32 bits
            return cls(bits, unsigned_bigint_to_list(bits, pattern, _xp))
        return cls(bits, unsigned_int_to_list(bits, pattern, _xp))

    @classmethod
    def from_bigint(cls, bits, value, *, _xp=None):
        return cls(bits, unsigned_bigint_to_list(bits, _check_fits(bits, value), _xp))

    @property
    def suffix(self):
        return f'_i{self.bits}'

    @property
    def is_negative(self):
        return self.bit_length == self.bits

    def to_signed(self):
        value = self.to_bigint()
        if self.is_negative:
            value -= 1 << self.bits
        return value

    def to_int(self):
        value = self.to_signed()
        if value < MIN_INT32 or value > MAX_INT32:
            raise RangeError(
                f'not safe to return {value} as int, use to_signed() instead',
                value=value, bits=self.bits)
        return value

    def _value(self):
        return self.to_signed()


if __name__ == '__main__':
    import array_api_strict as xp
    m = IntX.from_int(12, -1, _xp=xp)
    assert m.elements == (0x0f, 0xff)
    assert m.to_int() == -1
    assert m.hex == 'fff_i12'
    w = IntX.from_int(40, -2)
    assert w.to_bigint() == (1 << 40) - 2
    assert int(IntX.from_int(8, 127) + IntX.from_int(8, 1)) == -128
    print(m, w, int(w))
