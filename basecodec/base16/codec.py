# Licensed under the GPLv3 - see LICENSE
"""Base16 codec, following RFC 4648, section 8."""
from ..base.alphabet import Alphabet
from ..base.codec import BitPackCodecBase


__all__ = ['BASE16_ALPHABET', 'Base16Codec', 'encode', 'decode']


BASE16_ALPHABET = Alphabet('0123456789ABCDEF')
"""Upper-case hexadecimal digits."""


class Base16Codec(BitPackCodecBase):
    """Codec for Base16, i.e., upper-case hexadecimal.

    Every byte is written as two symbols, the high nibble first.  Only
    upper-case symbols are accepted when decoding, and the input should
    have an even number of symbols.
    """
    alphabet = BASE16_ALPHABET
    bits = 4
    _whole_blocks = True


def encode(data):
    """Encode bytes as Base16.

    Examples
    --------
    >>> encode(b'foobar')
    '666F6F626172'
    """
    return Base16Codec().encode(data)


def decode(text):
    """Decode Base16 text to bytes.

    Raises
    ------
    ~basecodec.base.codec.BadLengthError
        If the number of symbols is odd.
    ~basecodec.base.codec.BadCharacterError
        If a symbol is not an upper-case hexadecimal digit.
    """
    return Base16Codec().decode(text)
