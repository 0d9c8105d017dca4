# Licensed under the GPLv3 - see LICENSE
"""Base32 codec, following RFC 4648, section 6.

Blocks of 5 bytes are written as 8 symbols of 5 bits each.  A short final
block of 1, 2, 3, or 4 bytes needs 2, 4, 5, or 7 symbols, respectively, and
is filled up to 8 symbols with '='.
"""
from ..base.alphabet import Alphabet
from ..base.codec import BitPackCodecBase


__all__ = ['BASE32_ALPHABET', 'Base32Codec', 'encode', 'decode']


BASE32_ALPHABET = Alphabet('ABCDEFGHIJKLMNOPQRSTUVWXYZ234567', padding='=')


class Base32Codec(BitPackCodecBase):
    """Codec for Base32.

    Parameters
    ----------
    optional_padding : bool, optional
        Whether, when decoding, a short final block can lack its padding.
        Default: `False`.  Encoding always adds padding.
    """
    alphabet = BASE32_ALPHABET
    bits = 5
    _options = ('optional_padding',)

    def __init__(self, optional_padding=False):
        self.optional_padding = bool(optional_padding)

    @property
    def _whole_blocks(self):
        return not self.optional_padding


def encode(data):
    """Encode bytes as Base32.

    Examples
    --------
    >>> encode(b'foob')
    'MZXW6YQ='
    """
    return Base32Codec().encode(data)


def decode(text, optional_padding=False):
    """Decode Base32 text to bytes.

    Parameters
    ----------
    text : str or bytes-like
        Encoded data.
    optional_padding : bool, optional
        Whether a short final block can lack its padding.  Default: `False`.

    Returns
    -------
    data : bytes

    Raises
    ------
    ~basecodec.base.codec.BadLengthError
        If the text does not consist of whole blocks (or, with optional
        padding, ends in a block of impossible length).
    ~basecodec.base.codec.BadCharacterError
        If a symbol is not in the alphabet, or padding is misplaced.
    """
    return Base32Codec(optional_padding=optional_padding).decode(text)
