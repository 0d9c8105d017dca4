# Licensed under the GPLv3 - see LICENSE
"""Base64 codec, following RFC 4648, section 4.

Blocks of 3 bytes are written as 4 symbols of 6 bits each, using the
standard alphabet (with '+' and '/').  A short final block of 1 or 2 bytes
needs 2 or 3 symbols, and is filled up with '='.
"""
from ..base.alphabet import Alphabet
from ..base.codec import BitPackCodecBase


__all__ = ['BASE64_ALPHABET', 'Base64Codec', 'encode', 'decode']


BASE64_ALPHABET = Alphabet('ABCDEFGHIJKLMNOPQRSTUVWXYZ'
                           'abcdefghijklmnopqrstuvwxyz0123456789+/',
                           padding='=')


class Base64Codec(BitPackCodecBase):
    """Codec for Base64.

    Parameters
    ----------
    optional_padding : bool, optional
        Whether, when decoding, a short final block can lack its padding.
        Default: `False`.  Encoding always adds padding.
    """
    alphabet = BASE64_ALPHABET
    bits = 6
    _options = ('optional_padding',)

    def __init__(self, optional_padding=False):
        self.optional_padding = bool(optional_padding)

    @property
    def _whole_blocks(self):
        return not self.optional_padding


def encode(data):
    """Encode bytes as Base64.

    Examples
    --------
    >>> encode(b'foobar')
    'Zm9vYmFy'
    >>> encode(b'foob')
    'Zm9vYg=='
    """
    return Base64Codec().encode(data)


def decode(text, optional_padding=False):
    """Decode Base64 text to bytes.

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
        padding, ends in a single symbol).
    ~basecodec.base.codec.BadCharacterError
        If a symbol is not in the alphabet, or padding is misplaced.
    """
    return Base64Codec(optional_padding=optional_padding).decode(text)
