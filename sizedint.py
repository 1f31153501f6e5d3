# representation:
#  unsigned magnitude, N elements of ELEMENT_BITS each, most significant first,
#  as a 1-D array of an array api namespace (numpy unless the caller's data
#  or _xp says otherwise).
#  N = ceil(bits / ELEMENT_BITS). only the low mod_bit_size(bits) bits of the
#  first element may be set, so e.g. a 12-bit value is 0x0f 0xff at most.
#  the array is private and never written after __init__; copies go out.
#  how the magnitude is read (unsigned or two's complement) is up to the
#  subclass, see uintx.py and intx.py.

import logging
import operator

import numpy as np

logger = logging.getLogger(__name__)

# Change this section to use a different bit size for elements of the list
ELEMENT_BITS = 8
ELEMENT_DTYPE = 'uint8'
# Everything about bit size of elements should be encapsulated here ^^^

ELEMENT_MOD = 1 << ELEMENT_BITS
ELEMENT_MASK = ELEMENT_MOD - 1

NATIVE_BITS = 32
MAX_UINT32 = (1 << NATIVE_BITS) - 1
MAX_INT32 = (1 << (NATIVE_BITS - 1)) - 1
MIN_INT32 = -(1 << (NATIVE_BITS - 1))


class SizedIntError(Exception):
    pass


class ConstructionError(SizedIntError, ValueError):
    '''An element store does not match its declared bit width.'''
    def __init__(self, message, *, expected=None, actual=None):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class RangeError(SizedIntError, ValueError):
    '''A value cannot be held by the requested representation.'''
    def __init__(self, message, *, value=None, bits=None):
        super().__init__(message)
        self.value = value
        self.bits = bits


class TypeMismatchError(SizedIntError, TypeError):
    '''Two sized ints of different width or signedness were combined.'''
    def __init__(self, message, a=None, b=None):
        super().__init__(message)
        self.a = a
        self.b = b


def mod_bit_size(bits):
    # number of (rightmost) bits that count in the most significant element
    mod = bits % ELEMENT_BITS
    return ELEMENT_BITS if mod == 0 else mod

def expected_list_length(bits):
    return -(-bits // ELEMENT_BITS)

def max_unsigned(bits):
    if bits < 1 or bits > NATIVE_BITS:
        raise RangeError(
            f'bits must be in range [1, {NATIVE_BITS}], given: {bits}; '
            'use max_unsigned_as_bigint for larger values',
            bits=bits)
    return 1 << bits

def _check_bits(bits):
    if bits < 1:
        raise RangeError(f'bits must be >= 1, given {bits}', bits=bits)

def max_unsigned_as_bigint(bits):
    _check_bits(bits)
    return 1 << bits


def _element_dtype(xp):
    return getattr(xp, ELEMENT_DTYPE)

def new_list(length, xp=None):
    if xp is None:
        xp = np
    return xp.zeros(length, dtype=_element_dtype(xp))

def unsigned_int_to_list(bits, value, xp=None):
    _check_bits(bits)
    if value < 0 or value > MAX_UINT32:
        raise RangeError(
            f'value must be in range [0, 2^{NATIVE_BITS}-1], given: {value}',
            value=value, bits=bits)
    if bits < value.bit_length():
        raise RangeError(f'value {value} will not fit in {bits} bits',
                         value=value, bits=bits)
    data = new_list(expected_list_length(bits), xp)
    index = data.shape[0] - 1
    while value > 0:
        data[index] = value % ELEMENT_MOD
        value >>= ELEMENT_BITS
        index -= 1
    return data

def unsigned_bigint_to_list(bits, value, xp=None):
    # the width is checked when the list is wrapped, except for a value
    # that runs past the first element entirely
    _check_bits(bits)
    if value < 0:
        raise RangeError(f'value must be >= 0, given: {value}',
                         value=value, bits=bits)
    data = new_list(expected_list_length(bits), xp)
    index = data.shape[0] - 1
    remaining = value
    while remaining > 0:
        if index < 0:
            raise ConstructionError(
                f'value {value} will not fit in {bits} bits',
                expected=bits, actual=value.bit_length())
        data[index] = remaining % ELEMENT_MOD
        remaining >>= ELEMENT_BITS
        index -= 1
    return data


def check_compatible(a, b):
    if a.bits != b.bits:
        raise TypeMismatchError(
            'receiver and argument must have same number of bits, '
            f'given: {a.bits} and {b.bits}', a, b)
    if a.kind != b.kind:
        raise TypeMismatchError(
            'receiver and argument must be same type, given: '
            f'receiver: {type(a).__name__}, argument: {type(b).__name__}',
            a, b)


class SizedInt:
    kind = None

    def __init__(self, bits, uints, *, _xp=None):
        if hasattr(uints, '__array_namespace__'):
            # read with the array's own namespace, store with _xp if given
            source = uints.__array_namespace__()
            xp = self.xp = source if _xp is None else _xp
            if not source.isdtype(uints.dtype, 'integral'):
                raise TypeError(uints.dtype)
            if len(uints.shape) != 1:
                raise TypeError(uints.shape)
            elements = [int(item) for item in source.unstack(uints)]
        else:
            xp = self.xp = np if _xp is None else _xp
            elements = [operator.index(item) for item in uints]

        if bits < 1:
            self._reject(f'bits must be 1 or greater, given: {bits}', 1, bits)
        expected_length = expected_list_length(bits)
        if len(elements) != expected_length:
            self._reject(
                f'uints argument must have length of {expected_length}, '
                f'given: {len(elements)}',
                expected_length, len(elements))
        first_bits = elements[0].bit_length()
        if first_bits > mod_bit_size(bits):
            self._reject(
                'significant bits in first element must be '
                f'<= {mod_bit_size(bits)}, given: {first_bits}',
                mod_bit_size(bits), first_bits)
        for element in elements:
            if element < 0 or element > ELEMENT_MASK:
                self._reject(
                    'all elements in list must be in range '
                    f'[0, {ELEMENT_MASK}], given: {element}',
                    ELEMENT_MASK, element)

        self.bits = bits
        self._data = xp.asarray(elements, dtype=_element_dtype(xp))
        self._bit_length = None
        self._is_nonzero = None

    def _reject(self, message, expected, actual):
        logger.debug('rejected %s construction: %s', type(self).__name__, message)
        raise ConstructionError(message, expected=expected, actual=actual)

    @classmethod
    def _from_pattern(cls, bits, pattern, xp=None):
        return cls(bits, unsigned_bigint_to_list(bits, pattern, xp))

    def _wrap(self, value):
        # reduce any int into this width and variant
        return self._from_pattern(self.bits, value % (1 << self.bits), self.xp)

    @property
    def uints(self):
        return self.xp.asarray(self._data, copy=True)
    @property
    def elements(self):
        return tuple(int(item) for item in self.xp.unstack(self._data))

    @property
    def bit_length(self):
        if self._bit_length is None:
            self._bit_length = self._calculate_bit_length()
        return self._bit_length
    def _calculate_bit_length(self):
        elements = self.elements
        for idx, element in enumerate(elements):
            bl = element.bit_length()
            if bl > 0:
                return bl + ELEMENT_BITS * (len(elements) - idx - 1)
        return 0

    @property
    def is_nonzero(self):
        if self._is_nonzero is None:
            self._is_nonzero = bool(self.xp.any(self._data != 0))
        return self._is_nonzero
    @property
    def is_zero(self):
        return not self.is_nonzero
    def __bool__(self):
        return self.is_nonzero

    def to_bigint(self):
        value = 0
        for element in self.elements:
            value = value * ELEMENT_MOD + element
        return value

    def to_unsigned_int(self):
        if self.bit_length > NATIVE_BITS:
            logger.debug('refusing to narrow %d-bit magnitude', self.bit_length)
            raise RangeError(
                f'not safe to return {self} as int, use to_bigint() instead',
                value=self, bits=self.bit_length)
        elements = self.elements
        last_int_index = max(len(elements) - NATIVE_BITS // ELEMENT_BITS, 0)
        value = elements[last_int_index]
        for element in elements[last_int_index + 1:]:
            value = (value << ELEMENT_BITS) + element
        return value

    def to_int(self):
        raise NotImplementedError
    def _value(self):
        # the int this pattern stands for, used by int() and the operators
        raise NotImplementedError
    @property
    def suffix(self):
        raise NotImplementedError

    def to_radix_string(self, radix):
        return np.base_repr(self.to_bigint(), radix).lower() + self.suffix
    def __str__(self):
        return self.to_radix_string(10)
    def __repr__(self):
        digits = np.base_repr(self.to_bigint(), 16).lower()
        return f'{type(self).__name__}(bits={self.bits}, 0x{digits})'
    @property
    def hex(self):
        return self.to_radix_string(16)
    @property
    def binary(self):
        groups = [np.binary_repr(element, width=ELEMENT_BITS)
                  for element in self.elements]
        return '0b' + '_'.join(groups) + self.suffix

    def check_bits_are_same(self, other):
        check_compatible(self, other)

    def __int__(self):
        return self._value()
    def __index__(self):
        return self._value()

    def __eq__(x, y):
        if not isinstance(y, SizedInt):
            return NotImplemented
        return x.kind == y.kind and x.bits == y.bits and x.elements == y.elements
    def __hash__(self):
        return hash((self.kind, self.bits, self.elements))

    def __invert__(x):
        return x._from_pattern(x.bits, x.to_bigint() ^ ((1 << x.bits) - 1), x.xp)
    def __neg__(x):
        return x._wrap(-x._value())
    def __lshift__(x, count):
        # bits shifted past the width are dropped
        return x._wrap(x.to_bigint() << operator.index(count))
    def __rshift__(x, count):
        # logical for unsigned, arithmetic for signed
        return x._wrap(x._value() >> operator.index(count))


# + - * // % are taken on the interpreted values and wrapped into the width
def __SizedIntOpWrapping(opname):
    op = getattr(int, opname)
    def method(a, b):
        if not isinstance(b, SizedInt):
            return NotImplemented
        check_compatible(a, b)
        return a._wrap(op(a._value(), b._value()))
    method.__name__ = opname
    return method
# & | ^ are taken on the stored patterns, which always fit
def __SizedIntOpBitwise(opname):
    op = getattr(int, opname)
    def method(a, b):
        if not isinstance(b, SizedInt):
            return NotImplemented
        check_compatible(a, b)
        return a._from_pattern(a.bits, op(a.to_bigint(), b.to_bigint()), a.xp)
    method.__name__ = opname
    return method
def __SizedIntOpCompare(opname):
    op = getattr(int, opname)
    def method(a, b):
        if not isinstance(b, SizedInt):
            return NotImplemented
        check_compatible(a, b)
        return op(a._value(), b._value())
    method.__name__ = opname
    return method
for opname, factory in [
        [f'__{opname}__', factory]
        for opnames, factory in [
            [['add', 'sub', 'mul', 'floordiv', 'mod'], __SizedIntOpWrapping],
            [['and', 'xor', 'or'], __SizedIntOpBitwise],
            [['lt', 'le', 'gt', 'ge'], __SizedIntOpCompare],
        ]
        for opname in opnames
]:
    setattr(SizedInt, opname, factory(opname))
