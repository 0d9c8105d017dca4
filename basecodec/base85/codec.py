# Licensed under the GPLv3 - see LICENSE
"""Base85 codec, in the Ascii85 variant.

Blocks of 4 bytes are interpreted as a big-endian unsigned integer and
written as 5 digits in radix 85, with digit ``d`` represented by the ASCII
character with code ``33 + d``, i.e., '!' to 'u'.  A short final block of
``j`` bytes is written as ``j + 1`` symbols.  Optionally, a full block that
is all zero is written as the single symbol 'z'.

No delimiters ('<~' and '~>') are written or expected, and whitespace is
not allowed.
"""
import numpy as np

from ..base.alphabet import INVALID
from ..base.codec import CodecBase, BadCharacterError


__all__ = ['FIRST_SYMBOL', 'ZERO_SYMBOL', 'Base85Codec', 'encode', 'decode']


FIRST_SYMBOL = ord('!')
"""ASCII code of the symbol for digit 0."""
ZERO_SYMBOL = ord('z')
"""ASCII code of the abbreviation for a block of zeros."""


class Base85Codec(CodecBase):
    """Codec for Ascii85.

    Parameters
    ----------
    fold_zero : bool, optional
        Whether to abbreviate full blocks of zeros as 'z'.  If `False`, such
        blocks are written as '!!!!!', and 'z' is not accepted when decoding.
        Default: `True`.
    """
    radix = 85
    block_nbytes = 4
    block_nchars = 5
    _options = ('fold_zero',)

    def __init__(self, fold_zero=True):
        self.fold_zero = bool(fold_zero)

    # Symbols follow directly from ASCII codes.
    def _to_symbols(self, digits):
        return digits + FIRST_SYMBOL

    def _to_digits(self, codes):
        valid = (codes >= FIRST_SYMBOL) & (codes < FIRST_SYMBOL + self.radix)
        return np.where(valid, codes - FIRST_SYMBOL,
                        INVALID).astype(np.uint8)

    def _symbol(self, digit):
        return digit + FIRST_SYMBOL

    def _digit(self, code):
        if FIRST_SYMBOL <= code < FIRST_SYMBOL + self.radix:
            return code - FIRST_SYMBOL
        return INVALID

    def _fold(self, values, chars, keep):
        if self.fold_zero:
            zero = np.flatnonzero(values == 0)
            chars[zero, 0] = ZERO_SYMBOL
            keep[zero, 1:] = False

    def _decode_codes(self, codes):
        if not self.fold_zero:
            return super()._decode_codes(codes)

        # Decode the pieces between abbreviated zero blocks separately.
        pieces = []
        start = 0
        for zero in np.flatnonzero(codes == ZERO_SYMBOL):
            pieces.append(self._decode_digits(
                self._to_digits(codes[start:zero]), start, final=False))
            pieces.append(np.zeros(self.block_nbytes, np.uint8))
            start = int(zero) + 1

        pieces.append(self._decode_digits(self._to_digits(codes[start:]),
                                          start))
        return np.concatenate(pieces)

    def _encode_block(self, state, out):
        if (self.fold_zero and state.block_size == self.block_nbytes
                and state.accumulator == 0):
            out.append(ZERO_SYMBOL)
            state.reset()
        else:
            super()._encode_block(state, out)

    def decode_char(self, state, code, out):
        if self.fold_zero and code == ZERO_SYMBOL:
            if state.block_size:
                raise BadCharacterError(state.offset)
            state.offset += 1
            out += bytes(self.block_nbytes)
        else:
            super().decode_char(state, code, out)

    decode_char.__doc__ = CodecBase.decode_char.__doc__


def encode(data, fold_zero=True):
    """Encode bytes as Ascii85.

    Parameters
    ----------
    data : bytes-like
        Data to be encoded.
    fold_zero : bool, optional
        Whether to abbreviate full blocks of zeros as 'z'.  Default: `True`.

    Returns
    -------
    text : str

    Examples
    --------
    >>> encode(b'Man ')
    '9jqo^'
    >>> encode(bytes(4)), encode(bytes(4), fold_zero=False)
    ('z', '!!!!!')
    """
    return Base85Codec(fold_zero=fold_zero).encode(data)


def decode(text, fold_zero=True):
    """Decode Ascii85 text to bytes.

    Parameters
    ----------
    text : str or bytes-like
        Encoded data.
    fold_zero : bool, optional
        Whether 'z' is accepted as abbreviation of a full block of zeros.
        Default: `True`.

    Returns
    -------
    data : bytes

    Raises
    ------
    ~basecodec.base.codec.BadLengthError
        If the final group consists of a single symbol.
    ~basecodec.base.codec.BadCharacterError
        If a symbol is outside of '!' to 'u' (and is not an allowed 'z'), or
        a group encodes a value that does not fit in 4 bytes.
    """
    return Base85Codec(fold_zero=fold_zero).decode(text)
