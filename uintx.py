from sizedint import (
    SizedInt, unsigned_bigint_to_list, unsigned_int_to_list,
)


class UintX(SizedInt):
    '''
    Unsigned integer of any bit width.

    The stored magnitude is the value. from_int takes the native path and
    refuses anything outside 32 unsigned bits; from_bigint takes any
    non-negative int and leaves the width check to construction.
    '''
    kind = 'unsigned'

    @classmethod
    def from_int(cls, bits, value, *, _xp=None):
        return cls(bits, unsigned_int_to_list(bits, value, _xp))

    @classmethod
    def from_bigint(cls, bits, value, *, _xp=None):
        return cls(bits, unsigned_bigint_to_list(bits, value, _xp))

    @property
    def suffix(self):
        return f'_u{self.bits}'

    def to_int(self):
        return self.to_unsigned_int()

    def _value(self):
        return self.to_bigint()


if __name__ == '__main__':
    import array_api_strict as xp
    a = UintX.from_int(12, 0xfff, _xp=xp)
    assert a.elements == (0x0f, 0xff)
    assert a.bit_length == 12
    assert a.binary == '0b00001111_11111111_u12'
    b = UintX.from_bigint(40, (1 << 40) - 1)
    assert b.to_bigint() == (1 << 40) - 1
    assert int(UintX.from_int(8, 255) + UintX.from_int(8, 1)) == 0
    print(a, a.hex, b)
