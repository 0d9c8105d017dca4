# Licensed under the GPLv3 - see LICENSE
"""Base36 codec.

Blocks of 4 bytes are interpreted as a big-endian unsigned integer and
written as 7 digits in radix 36, using '0' to '9' and 'A' to 'Z'.  Seven
digits are needed since six can only hold values up to ``36**6 - 1``,
which is less than ``2**32 - 1``.  A short final block of 1, 2, or 3 bytes
is written as 3, 4, or 6 symbols, respectively.  There is no padding.
"""
from ..base.alphabet import Alphabet
from ..base.codec import CodecBase


__all__ = ['BASE36_ALPHABET', 'Base36Codec', 'encode', 'decode']


BASE36_ALPHABET = Alphabet('0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ')


class Base36Codec(CodecBase):
    """Codec for Base36, with upper-case letters."""
    alphabet = BASE36_ALPHABET
    radix = 36
    block_nbytes = 4
    block_nchars = 7


def encode(data):
    """Encode bytes as Base36.

    Examples
    --------
    >>> encode(b'\\x7f\\xff\\xff\\xff')
    '0ZIK0ZJ'
    """
    return Base36Codec().encode(data)


def decode(text):
    """Decode Base36 text to bytes.

    Raises
    ------
    ~basecodec.base.codec.BadLengthError
        If the final group has 1, 2, or 5 symbols.
    ~basecodec.base.codec.BadCharacterError
        If a symbol is not in the alphabet, or a group encodes a value that
        does not fit in 4 bytes.
    """
    return Base36Codec().decode(text)
