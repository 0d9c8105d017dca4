# Licensed under the GPLv3 - see LICENSE
"""
Base definitions for block codecs.

All encodings are handled by one engine: a block of ``block_nbytes`` bytes
is packed big-endian into an integer, which is then written as
``block_nchars`` digits in the radix of the encoding, most significant
first.  A short final block is zero-extended, and only as many digits as
are needed to recover its bytes are kept; encodings with a padding symbol
fill up the block with it.  On decoding, missing digits are taken to be the
largest possible digit, so that any carry stays within the dropped bytes.

Each codec can be used in two ways:

- Array mode, via `~basecodec.base.codec.CodecBase.encode` and
  `~basecodec.base.codec.CodecBase.decode`, which convert all blocks at once
  using numpy.
- Streaming mode, via the ``encode_byte``/``encode_end`` and
  ``decode_char``/``decode_end`` methods, which process one unit at a time,
  keeping track of partial blocks in a `~basecodec.base.codec.BlockState`
  owned by the caller.

Both modes produce the same output and raise the same errors, with the
exception that array mode checks the total length of the input first for
codecs that only accept complete blocks.
"""
import numpy as np
from astropy.utils import lazyproperty

from .alphabet import INVALID
from .utils import lcm, significant_chars, bytes_for_chars


__all__ = ['DecodeError', 'BadLengthError', 'BadCharacterError',
           'char_codes', 'BlockState', 'CodecBase', 'BitPackCodecBase']


class DecodeError(ValueError):
    """Error in decoding text that is not a valid encoding.

    Parameters
    ----------
    message : str
        Description of the problem.
    offset : int
        Position in the input at which the problem was found.
    """
    def __init__(self, message, offset):
        super().__init__(message)
        self.offset = offset


class BadLengthError(DecodeError):
    """Length of the input is not possible for the encoding."""
    def __init__(self, offset):
        super().__init__("encoding has bad length: {0}".format(offset),
                         offset)


class BadCharacterError(DecodeError):
    """Symbol not in the alphabet, or not allowed at its position."""
    def __init__(self, offset):
        super().__init__("bad character at offset {0}".format(offset),
                         offset)


def char_codes(text):
    """Get the character codes of encoded text as an array.

    Parameters
    ----------
    text : str or bytes-like
        Encoded text.  Strings are converted per character, so that codes
        can exceed 127 for non-ASCII characters.

    Returns
    -------
    codes : `~numpy.ndarray` of unsigned int
    """
    if isinstance(text, str):
        return np.frombuffer(text.encode('utf-32-le', 'surrogatepass'),
                             dtype='<u4')
    return np.frombuffer(text, dtype=np.uint8)


class BlockState:
    """Progress of a codec through a stream.

    An instance is created by the caller for each stream to be encoded or
    decoded, and passed on to every call of the codec's step methods.

    Attributes
    ----------
    offset : int
        Number of units (bytes when encoding, symbols when decoding)
        consumed so far.
    block_size : int
        Number of bytes or significant symbols in the current block.
    accumulator : int
        Value of the current block so far.
    padding : int
        Number of padding symbols in the current block.
    pad_offset : int or None
        Offset of the first padding symbol in the current block.
    closed_at : int or None
        Offset of the first padding symbol of an earlier, complete block.
        If set, no further symbols are allowed.
    """
    __slots__ = ('offset', 'block_size', 'accumulator', 'padding',
                 'pad_offset', 'closed_at')

    def __init__(self):
        self.offset = 0
        self.closed_at = None
        self.reset()

    def reset(self):
        """Start a new block."""
        self.block_size = 0
        self.accumulator = 0
        self.padding = 0
        self.pad_offset = None

    def __repr__(self):
        return ("{0}(offset={1}, block_size={2}, padding={3})"
                .format(self.__class__.__name__, self.offset,
                        self.block_size, self.padding))


class CodecBase:
    """Base for codecs between bytes and text of ASCII symbols.

    Subclasses should define ``radix``, ``block_nbytes`` and ``block_nchars``,
    and usually an ``alphabet``.  If the alphabet has a padding symbol, short
    final blocks are filled up with it on encoding.

    Digits are obtained from block values by repeated division by the
    radix; see `~basecodec.base.codec.BitPackCodecBase` for radices that
    are a power of two.
    """
    radix = None
    block_nbytes = None
    block_nchars = None
    alphabet = None
    # Whether decoding requires the input to consist of complete blocks.
    _whole_blocks = False
    # Names of the options passed to the initializer, for repr.
    _options = ()

    @property
    def pad_digit(self):
        """Digit value of the padding symbol, `None` if there is none."""
        return None if self.alphabet is None else self.alphabet.pad_digit

    @lazyproperty
    def _nchars(self):
        # Significant symbols, indexed by the number of bytes in the block.
        return significant_chars(self.radix, self.block_nbytes,
                                 self.block_nchars)

    @lazyproperty
    def _nbytes(self):
        # Number of bytes, indexed by the number of significant symbols.
        return bytes_for_chars(self._nchars)

    @lazyproperty
    def _pad_positions(self):
        # Number of significant symbols after which padding may start.
        return frozenset(self._nchars[1:-1])

    @lazyproperty
    def _powers(self):
        return self.radix ** np.arange(self.block_nchars - 1, -1, -1,
                                       dtype=np.uint64)

    @lazyproperty
    def _byte_shifts(self):
        return np.arange(8 * (self.block_nbytes - 1), -1, -8,
                         dtype=np.uint64)

    # Conversion between digits and symbols.
    def _to_symbols(self, digits):
        return self.alphabet.encode_table[digits]

    def _to_digits(self, codes):
        return self.alphabet.lookup(codes)

    def _symbol(self, digit):
        return self.alphabet.symbols[digit]

    def _digit(self, code):
        return self.alphabet.digits[code] if code < 128 else INVALID

    # Conversion between block values and digits.
    def _split(self, values):
        """Split block values into digits, most significant first."""
        return ((values[:, np.newaxis] // self._powers)
                % self.radix).astype(np.uint8)

    def _combine(self, digits):
        """Combine rows of digits into block values."""
        return (digits.astype(np.uint64) * self._powers).sum(axis=1)

    def _split_value(self, value):
        digits = []
        for _ in range(self.block_nchars):
            value, digit = divmod(value, self.radix)
            digits.append(digit)
        return digits[::-1]

    # Arrays
    def encode(self, data):
        """Encode bytes as text.

        Parameters
        ----------
        data : bytes-like
            Data to be encoded.

        Returns
        -------
        text : str
            Encoded data, consisting of ASCII symbols only.
        """
        data = np.frombuffer(data, dtype=np.uint8)
        if data.size == 0:
            return ''

        nfull, tail = divmod(data.size, self.block_nbytes)
        if tail:
            padded = np.zeros((nfull + 1) * self.block_nbytes, np.uint8)
            padded[:data.size] = data
            data = padded

        blocks = data.reshape(-1, self.block_nbytes).astype(np.uint64)
        values = np.bitwise_or.reduce(blocks << self._byte_shifts, axis=1)
        chars = self._to_symbols(self._split(values))
        keep = np.ones(chars.shape, bool)
        if tail:
            nchars = self._nchars[tail]
            if self.pad_digit is None:
                keep[-1, nchars:] = False
            else:
                chars[-1, nchars:] = self._symbol(self.pad_digit)

        self._fold(values[:nfull], chars, keep)
        return chars[keep].tobytes().decode('ascii')

    def _fold(self, values, chars, keep):
        """Abbreviate full blocks.

        Can be overridden by subclasses; by default, nothing is done.

        Parameters
        ----------
        values : `~numpy.ndarray`
            Values of the full blocks.
        chars : `~numpy.ndarray`
            Symbol codes for all blocks, which can be changed in-place.
        keep : `~numpy.ndarray`
            Whether to keep symbols, which can be changed in-place.
        """
        pass

    def decode(self, text):
        """Decode text to bytes.

        Parameters
        ----------
        text : str or bytes-like
            Encoded data.

        Returns
        -------
        data : bytes
            Decoded data.

        Raises
        ------
        BadLengthError
            If the length of ``text`` is impossible for the encoding.
        BadCharacterError
            If ``text`` contains a symbol not in the alphabet, or a symbol
            where it is not allowed.
        """
        codes = char_codes(text)
        if codes.size == 0:
            return b''

        if self._whole_blocks and codes.size % self.block_nchars:
            raise BadLengthError(codes.size)

        return self._decode_codes(codes).tobytes()

    def _decode_codes(self, codes):
        return self._decode_digits(self._to_digits(codes))

    def _check_padding(self, digits, first_bad):
        """Find the first misplaced padding symbol.

        Returns the lowest offset at which a problem is found, and the
        number of significant symbols in the final block, if it contains
        padding (`None` otherwise).
        """
        is_pad = digits == self.pad_digit
        pads = np.flatnonzero(is_pad)
        if pads.size == 0 or pads[0] > first_bad:
            return first_bad, None

        pad = int(pads[0])
        position = pad % self.block_nchars
        block_end = min(pad - position + self.block_nchars, digits.size)
        if position not in self._pad_positions:
            return pad, None

        after = np.flatnonzero(~is_pad[pad:block_end])
        if after.size:
            return pad + int(after[0]), None

        if block_end < digits.size:
            # Data after a padded block.
            return pad, None

        return first_bad, position

    def _decode_digits(self, digits, start=0, final=True):
        """Decode digits to bytes.

        Parameters
        ----------
        digits : `~numpy.ndarray`
            Digit values, with `INVALID` for symbols not in the alphabet.
        start : int, optional
            Offset of the first digit in the input.  Default: 0.
        final : bool, optional
            Whether the digits end the input.  If not, they should form
            complete blocks.  Default: `True`.

        Returns
        -------
        data : `~numpy.ndarray` of uint8
        """
        n = digits.size
        if n == 0:
            return np.empty(0, np.uint8)

        m = self.block_nchars
        bad = np.flatnonzero(digits == INVALID)
        first_bad = int(bad[0]) if bad.size else n
        nchars = None
        if self.pad_digit is not None:
            first_bad, nchars = self._check_padding(digits, first_bad)

        nblocks = -(-n // m)
        if nchars is None:
            nchars = n - (nblocks - 1) * m
        filled = np.full(nblocks * m, self.radix - 1, np.uint8)
        filled[:n] = digits
        if self.pad_digit is not None:
            filled[filled == self.pad_digit] = self.radix - 1
        values = self._combine(filled.reshape(-1, m))

        # Report problems in the order a sequential reader would find them:
        # values of complete blocks, bad symbols, then the final block.
        limit = 256 ** self.block_nbytes
        ncomplete = first_bad // m
        overflow = np.flatnonzero(values[:ncomplete] >= limit)
        if overflow.size:
            raise BadCharacterError(start + int(overflow[0]) * m)

        if first_bad < n:
            raise BadCharacterError(start + first_bad)

        if ncomplete < nblocks:
            if not final:
                raise BadCharacterError(start + n)
            if nchars not in self._nbytes:
                raise BadLengthError(start + n)
            if values[-1] >= limit:
                raise BadCharacterError(start + (nblocks - 1) * m)

        data = ((values[:, np.newaxis] >> self._byte_shifts)
                & 0xff).astype(np.uint8).ravel()
        return data[:(nblocks - 1) * self.block_nbytes + self._nbytes[nchars]]

    # Streams
    def encode_byte(self, state, byte, out):
        """Add a byte to the current block, encoding it if complete.

        Parameters
        ----------
        state : `~basecodec.base.codec.BlockState`
            State of the stream being encoded.
        byte : int
            Value of the byte.
        out : bytearray
            Buffer to which symbols are appended.
        """
        state.offset += 1
        state.accumulator = (state.accumulator << 8) | byte
        state.block_size += 1
        if state.block_size == self.block_nbytes:
            self._encode_block(state, out)

    def encode_chunk(self, state, data, out):
        """Encode a chunk of bytes, carrying partial blocks over.

        Equivalent to calling `encode_byte` for every byte, but with
        complete blocks encoded as arrays.
        """
        data = bytes(data)
        i = 0
        while state.block_size and i < len(data):
            self.encode_byte(state, data[i], out)
            i += 1

        nwhole = (len(data) - i) // self.block_nbytes * self.block_nbytes
        if nwhole:
            out += self.encode(data[i:i+nwhole]).encode('ascii')
            state.offset += nwhole

        for byte in data[i+nwhole:]:
            self.encode_byte(state, byte, out)

    def encode_end(self, state, out):
        """Encode any remaining short block."""
        if state.block_size:
            self._encode_block(state, out)

    def _encode_block(self, state, out):
        nbytes = state.block_size
        value = state.accumulator << 8 * (self.block_nbytes - nbytes)
        nchars = self._nchars[nbytes]
        out.extend(self._symbol(digit)
                   for digit in self._split_value(value)[:nchars])
        if self.pad_digit is not None:
            out.extend([self._symbol(self.pad_digit)]
                       * (self.block_nchars - nchars))
        state.reset()

    def decode_char(self, state, code, out):
        """Add a symbol to the current block, decoding it if complete.

        Parameters
        ----------
        state : `~basecodec.base.codec.BlockState`
            State of the stream being decoded.
        code : int
            Character code of the symbol.
        out : bytearray
            Buffer to which decoded bytes are appended.

        Raises
        ------
        BadCharacterError
            If the symbol is not in the alphabet or not allowed at its
            position.
        """
        offset = state.offset
        state.offset += 1
        if state.closed_at is not None:
            raise BadCharacterError(state.closed_at)

        digit = self._digit(code)
        if digit == self.pad_digit:
            if not state.padding:
                if state.block_size not in self._pad_positions:
                    raise BadCharacterError(offset)
                state.pad_offset = offset
            state.padding += 1

        elif digit == INVALID or state.padding:
            raise BadCharacterError(offset)

        else:
            state.accumulator = state.accumulator * self.radix + digit
            state.block_size += 1

        if state.block_size + state.padding == self.block_nchars:
            self._decode_block(state, out)

    def decode_end(self, state, out):
        """Decode any remaining short block.

        Raises
        ------
        BadLengthError
            If the final block is incomplete and cannot be decoded.
        """
        size = state.block_size + state.padding
        if size == 0:
            return

        if ((self._whole_blocks and size != self.block_nchars)
                or state.block_size not in self._nbytes):
            raise BadLengthError(state.offset)

        self._decode_block(state, out)

    def _decode_block(self, state, out):
        nchars = state.block_size
        nmissing = self.block_nchars - nchars
        scale = self.radix ** nmissing
        value = state.accumulator * scale + scale - 1
        if value >= 256 ** self.block_nbytes:
            raise BadCharacterError(state.offset - nchars - state.padding)

        out += value.to_bytes(self.block_nbytes, 'big')[:self._nbytes[nchars]]
        if state.pad_offset is not None:
            state.closed_at = state.pad_offset
        state.reset()

    def __repr__(self):
        return "{0}({1})".format(
            self.__class__.__name__,
            ', '.join('{0}={1!r}'.format(option, getattr(self, option))
                      for option in self._options))


class BitPackCodecBase(CodecBase):
    """Base for codecs with a radix that is a power of two.

    Subclasses should define ``bits``, the number of bits per symbol; the
    block sizes follow from it, as the smallest number of bytes that fill
    a whole number of symbols.
    """
    bits = None

    @property
    def radix(self):
        return 1 << self.bits

    @property
    def block_nbytes(self):
        return lcm(8, self.bits) // 8

    @property
    def block_nchars(self):
        return lcm(8, self.bits) // self.bits

    @lazyproperty
    def _shifts(self):
        return np.arange(self.bits * (self.block_nchars - 1), -1, -self.bits,
                         dtype=np.uint64)

    def _split(self, values):
        return ((values[:, np.newaxis] >> self._shifts)
                & (self.radix - 1)).astype(np.uint8)

    def _combine(self, digits):
        return np.bitwise_or.reduce(digits.astype(np.uint64) << self._shifts,
                                    axis=1)

    def _split_value(self, value):
        mask = self.radix - 1
        return [(value >> shift) & mask
                for shift in range(self.bits * (self.block_nchars - 1), -1,
                                   -self.bits)]
