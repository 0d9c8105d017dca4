# Licensed under the GPLv3 - see LICENSE
"""Common classes and functions for transcoding streams.

The `~basecodec.base.base.encode_stream` and
`~basecodec.base.base.decode_stream` functions pull chunks from one file and
push the result to another, letting a codec carry partial blocks from one
chunk to the next.

For access as files, the `~basecodec.base.base.StreamWriterBase` class
encodes whatever bytes are written to it, and the
`~basecodec.base.base.StreamReaderBase` class decodes encoded text as it is
read.  The `~basecodec.base.base.FileOpener` helps create the ``open``
function that is expected to exist for each encoding.
"""
import io
import functools
import operator
import textwrap
import warnings

from .codec import BlockState, DecodeError


__all__ = ['DEFAULT_BUFFER_SIZE', 'check_buffer_size',
           'encode_stream', 'decode_stream',
           'StreamBase', 'StreamReaderBase', 'StreamWriterBase',
           'FileOpener']


DEFAULT_BUFFER_SIZE = 1 << 20
"""Number of bytes or symbols read from an input file at a time."""


def check_buffer_size(buffer_size):
    """Ensure the buffer size is an integer of at least 1."""
    buffer_size = operator.index(buffer_size)
    if buffer_size < 1:
        raise ValueError("buffer_size should be at least 1, not {0}."
                         .format(buffer_size))
    return buffer_size


def _is_text(fh):
    return isinstance(fh, io.TextIOBase)


def _write_symbols(fh, out, text):
    if out:
        fh.write(out.decode('ascii') if text else bytes(out))


def _codes(chunk):
    return map(ord, chunk) if isinstance(chunk, str) else chunk


def encode_stream(codec, fh_in, fh_out, *, buffer_size=DEFAULT_BUFFER_SIZE):
    """Encode all data from one file, writing the symbols to another.

    Parameters
    ----------
    codec : `~basecodec.base.codec.CodecBase` instance
        Codec used for the encoding.
    fh_in : filehandle
        Binary file with the data to be encoded.
    fh_out : filehandle
        File to write the symbols to.  Symbols are written as `str` if it is
        opened in text mode, and as ASCII `bytes` otherwise.
    buffer_size : int, optional
        Number of bytes to read at a time.  Default: 1 MiB.

    Returns
    -------
    nbytes : int
        Number of bytes encoded.
    """
    buffer_size = check_buffer_size(buffer_size)
    if _is_text(fh_in):
        raise TypeError("data to be encoded should be read from a file "
                        "opened in binary mode.")

    text = _is_text(fh_out)
    state = BlockState()
    while True:
        chunk = fh_in.read(buffer_size)
        if not chunk:
            break
        out = bytearray()
        codec.encode_chunk(state, chunk, out)
        _write_symbols(fh_out, out, text)

    out = bytearray()
    codec.encode_end(state, out)
    _write_symbols(fh_out, out, text)
    return state.offset


def decode_stream(codec, fh_in, fh_out, *, buffer_size=DEFAULT_BUFFER_SIZE):
    """Decode all symbols from one file, writing the data to another.

    Parameters
    ----------
    codec : `~basecodec.base.codec.CodecBase` instance
        Codec used for the decoding.
    fh_in : filehandle
        File with the encoded symbols, opened in text or binary mode.
    fh_out : filehandle
        Binary file to write the decoded data to.
    buffer_size : int, optional
        Number of symbols to read at a time.  Default: 1 MiB.

    Returns
    -------
    nchars : int
        Number of symbols decoded.

    Raises
    ------
    BadLengthError, BadCharacterError
        If the input is not a valid encoding.  Data decoded from chunks
        before the one with the problem will have been written already.
    """
    buffer_size = check_buffer_size(buffer_size)
    if _is_text(fh_out):
        raise TypeError("decoded data should be written to a file "
                        "opened in binary mode.")

    state = BlockState()
    while True:
        chunk = fh_in.read(buffer_size)
        if not chunk:
            break
        out = bytearray()
        for code in _codes(chunk):
            codec.decode_char(state, code, out)
        fh_out.write(bytes(out))

    out = bytearray()
    codec.decode_end(state, out)
    fh_out.write(bytes(out))
    return state.offset


class StreamBase:
    """File wrapper, transcoding data on the fly.

    The underlying file is stored in ``fh_raw``; the codec in ``codec``.
    """

    def __init__(self, fh_raw, codec):
        self.fh_raw = fh_raw
        self.codec = codec
        self._state = BlockState()
        self.offset = 0

    def __getattr__(self, attr):
        """Try to get things on the current open file if it is not on self."""
        if attr in {'readable', 'writable', 'seekable', 'closed', 'name'}:
            return getattr(self.fh_raw, attr)
        #  __getattribute__ to raise appropriate error.
        return self.__getattribute__(attr)

    def _check_open(self):
        if self.fh_raw.closed:
            raise ValueError("I/O operation on closed stream.")

    def tell(self):
        """Number of decoded bytes read or written so far."""
        return self.offset

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        self.fh_raw.close()

    def __repr__(self):
        return ("<{s.__class__.__name__} name={name} offset={s.offset}\n"
                "    codec={s.codec}>"
                .format(s=self, name=getattr(self.fh_raw, 'name', None)))


class StreamReaderBase(StreamBase):
    """Base for stream readers, decoding symbols from a raw file.

    Parameters
    ----------
    fh_raw : filehandle
        File with the encoded symbols, opened in text or binary mode.
    codec : `~basecodec.base.codec.CodecBase` instance
        Codec used to decode the symbols.
    buffer_size : int, optional
        Number of symbols to read from ``fh_raw`` at a time.  Default: 1 MiB.
    """

    def __init__(self, fh_raw, codec, *, buffer_size=DEFAULT_BUFFER_SIZE):
        self.buffer_size = check_buffer_size(buffer_size)
        super().__init__(fh_raw, codec)
        self._buffer = bytearray()
        self._at_end = False

    def read(self, count=None):
        """Read and decode data.

        Parameters
        ----------
        count : int, optional
            Maximum number of bytes to return.  If `None` (default) or
            negative, return all remaining data.

        Returns
        -------
        data : bytes
            Decoded data; shorter than ``count`` only at the end of the file.

        Raises
        ------
        BadLengthError, BadCharacterError
            If the input is not a valid encoding.
        """
        self._check_open()
        if count is None or count < 0:
            while not self._at_end:
                self._fill()
            count = len(self._buffer)
        else:
            while len(self._buffer) < count and not self._at_end:
                self._fill()

        data = bytes(self._buffer[:count])
        del self._buffer[:count]
        self.offset += len(data)
        return data

    def _fill(self):
        chunk = self.fh_raw.read(self.buffer_size)
        if not chunk:
            self.codec.decode_end(self._state, self._buffer)
            self._at_end = True
            return

        for code in _codes(chunk):
            self.codec.decode_char(self._state, code, self._buffer)

    def close(self):
        if not self.fh_raw.closed:
            try:
                if not (self._buffer or self._at_end):
                    # All decoded data was read; check the input is done.
                    self._fill()
            except DecodeError as exc:
                warnings.warn(f"closing with undecoded data remaining: {exc}")
            else:
                if self._buffer or not self._at_end:
                    warnings.warn("closing with undecoded data remaining.")
        return super().close()


class StreamWriterBase(StreamBase):
    """Base for stream writers, encoding data to a raw file.

    Parameters
    ----------
    fh_raw : filehandle
        File to write the symbols to.  Symbols are written as `str` if it is
        opened in text mode, and as ASCII `bytes` otherwise.
    codec : `~basecodec.base.codec.CodecBase` instance
        Codec used to encode the data.

    Notes
    -----
    Any final, short block is only encoded on closing.
    """

    def __init__(self, fh_raw, codec):
        super().__init__(fh_raw, codec)
        self._text = _is_text(fh_raw)

    def write(self, data):
        """Encode data, buffering a possible partial block.

        Parameters
        ----------
        data : bytes-like
            Data to be encoded.

        Returns
        -------
        nbytes : int
            Number of bytes written.
        """
        self._check_open()
        out = bytearray()
        self.codec.encode_chunk(self._state, data, out)
        _write_symbols(self.fh_raw, out, self._text)
        nbytes = self._state.offset - self.offset
        self.offset = self._state.offset
        return nbytes

    def close(self):
        if not self.fh_raw.closed:
            out = bytearray()
            self.codec.encode_end(self._state, out)
            _write_symbols(self.fh_raw, out, self._text)
        return super().close()


class FileOpener:
    """File opener for an encoding.

    Each instance can be used as a function to open an encoded stream.
    It is probably best used inside a wrapper, so that the documentation
    can reflect the docstring of ``__call__`` rather than of this class.

    Parameters
    ----------
    fmt : str
        Name of the encoding.
    classes : dict
        With the stream reader and writer classes keyed by 'r' and 'w'.
    """

    def __init__(self, fmt, classes):
        self.fmt = fmt
        self.classes = classes

    def normalize_mode(self, mode):
        if mode in {'r', 'w'}:
            return mode + 'b'
        if mode in {'rb', 'wb', 'rt', 'wt'}:
            return mode
        if mode in {'br', 'bw', 'tr', 'tw'}:
            return mode[::-1]

        raise ValueError(f'invalid mode: {mode} '
                         f"({self.fmt} supports 'r' and 'w', possibly "
                         f"with 'b' or 't').")

    def is_fh(self, name):
        """Whether name is a filehandle."""
        return hasattr(name, 'read') or hasattr(name, 'write')

    def get_fh(self, name, mode):
        """Ensure name is a filehandle, opening it if necessary."""
        if self.is_fh(name):
            return name

        if mode[1] == 't':
            return io.open(name, mode, encoding='ascii', newline='')
        return io.open(name, mode)

    def __call__(self, name, mode='r', **kwargs):
        """
        Open an encoded file for reading or writing.

        Opened for writing, bytes written to the file are encoded; opened
        for reading, the encoded symbols in the file are decoded on reading.

        Parameters
        ----------
        name : str or filehandle
            File name or filehandle.
        mode : {'r', 'w', 'rb', 'wb', 'rt', 'wt'}, optional
            Whether to open for reading or writing, and whether the symbols
            are stored in a binary file (default) or a text file.
            Default: 'r'.
        **kwargs
            Additional arguments for the stream reader or writer.
        """
        mode = self.normalize_mode(mode)
        fh = self.get_fh(name, mode)
        try:
            return self.classes[mode[0]](fh, **kwargs)
        except Exception:
            if fh is not name:
                fh.close()
            raise

    def wrapped(self, module=None, doc=None):
        """Wrap as a function named open, replacing docstring and module."""

        @functools.wraps(self.__call__)
        def open(*args, **kwargs):
            return self(*args, **kwargs)

        if doc:
            open.__doc__ = doc

        # This ensures the function becomes visible to sphinx.
        if module:
            open.__module__ = module

        # Allow the stream classes to be looked up by mode.
        open.classes = self.classes
        return open

    @classmethod
    def create(cls, ns, doc=None):
        """Create a standard opener for the given namespace.

        This assumes that the namespace contains a stream reader and writer
        with standard names, ``<fmt>StreamReader`` and ``<fmt>StreamWriter``,
        where ``fmt`` is the name of the encoding (which is inferred by
        looking for a ``*StreamReader`` entry).

        Parameters
        ----------
        ns : dict
            Namespace to look in.  Generally, pass in ``globals()`` at the
            call site.
        doc : str, optional
            Extra documentation to add to that of the opener's ``__call__``
            method.
        """
        module = ns.get('__name__', None)
        for key in ns:
            if key.endswith('StreamReader'):
                fmt = key.replace('StreamReader', '')
                break
        else:  # noqa
            raise ValueError('namespace does not contain a StreamReader, '
                             'so fmt cannot be guessed.')

        classes = {'r': ns[fmt + 'StreamReader'],
                   'w': ns[fmt + 'StreamWriter']}
        opener = cls(fmt, classes)
        if doc is not None:
            doc = (textwrap.dedent(opener.__call__.__doc__)
                   .replace('Open an encoded file',
                            f'Open a {fmt} encoded file') + doc)
        return opener.wrapped(module=module, doc=doc)
