# Licensed under the GPLv3 - see LICENSE
"""
Symbol tables for the base encodings.

Each encoding maps digits to printable ASCII symbols.  An `Alphabet` holds
the ordered symbols and, optionally, a padding symbol which is given the
digit value just beyond the last regular symbol.  Look-up tables for
encoding (digit to symbol) and decoding (symbol to digit) are created on
first use and are read-only afterwards, so that alphabets can be shared
between any number of codecs.
"""
import numpy as np
from astropy.utils import lazyproperty


__all__ = ['INVALID', 'build_tables', 'Alphabet']


INVALID = 0xff
"""Marker in decode tables for symbols that are not in the alphabet."""


def build_tables(charset):
    """Sets up the look-up tables for a given set of symbols.

    Parameters
    ----------
    charset : str
        Symbols in digit order.  Should consist of distinct ASCII characters.

    Returns
    -------
    encode_table : `~numpy.ndarray`
        ASCII codes of the symbols, indexed by digit value.
    decode_table : `~numpy.ndarray`
        Digit values indexed by ASCII code (0 to 127), with `INVALID` for
        codes that are not in ``charset``.

    Examples
    --------
    The tables are inverses of each other::

        >>> encode_table, decode_table = build_tables('0123456789ABCDEF')
        >>> int(decode_table[encode_table[11]])
        11
    """
    encode_table = np.frombuffer(charset.encode('ascii'), dtype=np.uint8)
    if encode_table.size >= INVALID:
        raise ValueError("charset too long for 8-bit digits.")
    if np.any(encode_table >= 128):
        raise ValueError("charset should only contain ASCII characters.")
    if np.unique(encode_table).size != encode_table.size:
        raise ValueError("charset contains duplicate symbols.")

    decode_table = np.full(128, INVALID, dtype=np.uint8)
    decode_table[encode_table] = np.arange(encode_table.size, dtype=np.uint8)
    encode_table = encode_table.copy()
    encode_table.flags.writeable = False
    decode_table.flags.writeable = False
    return encode_table, decode_table


class Alphabet:
    """Ordered symbols of a base encoding.

    Parameters
    ----------
    charset : str
        Symbols in digit order.
    padding : str, optional
        Symbol used to pad short final blocks.  If given, it is decoded to
        digit value ``radix``.
    """

    def __init__(self, charset, padding=None):
        self.charset = charset
        self.padding = padding

    @property
    def radix(self):
        """Number of regular symbols, i.e., the base of the encoding."""
        return len(self.charset)

    @property
    def pad_digit(self):
        """Digit value of the padding symbol, or `None` if there is none."""
        return None if self.padding is None else self.radix

    @lazyproperty
    def _tables(self):
        return build_tables(self.charset + (self.padding or ''))

    @property
    def encode_table(self):
        """ASCII codes of the symbols, indexed by digit (including padding)."""
        return self._tables[0]

    @property
    def decode_table(self):
        """Digit values, indexed by ASCII code."""
        return self._tables[1]

    @lazyproperty
    def symbols(self):
        # Plain python versions, for per-symbol use in streams.
        return bytes(self.encode_table)

    @lazyproperty
    def digits(self):
        return tuple(self.decode_table.tolist())

    def lookup(self, codes):
        """Convert an array of character codes to digit values.

        Codes outside of the ASCII range map to `INVALID`.
        """
        digits = np.full(codes.shape, INVALID, dtype=np.uint8)
        ascii = codes < 128
        digits[ascii] = self.decode_table[codes[ascii]]
        return digits

    def __repr__(self):
        return ("{0}(charset={1!r}, padding={2!r})"
                .format(self.__class__.__name__, self.charset, self.padding))
