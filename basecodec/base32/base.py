# Licensed under the GPLv3 - see LICENSE
from ..base.base import (DEFAULT_BUFFER_SIZE,
                         StreamReaderBase, StreamWriterBase, FileOpener,
                         encode_stream as _encode_stream,
                         decode_stream as _decode_stream)
from .codec import Base32Codec


__all__ = ['Base32StreamReader', 'Base32StreamWriter', 'open',
           'encode_stream', 'decode_stream']


def encode_stream(fh_in, fh_out, *, buffer_size=DEFAULT_BUFFER_SIZE):
    """Encode all data in a binary file as Base32 symbols in another.

    See `~basecodec.base.base.encode_stream` for details.
    """
    return _encode_stream(Base32Codec(), fh_in, fh_out,
                          buffer_size=buffer_size)


def decode_stream(fh_in, fh_out, *, optional_padding=False,
                  buffer_size=DEFAULT_BUFFER_SIZE):
    """Decode all Base32 symbols in a file, writing the data to another.

    Parameters
    ----------
    fh_in : filehandle
        File with the symbols, opened in text or binary mode.
    fh_out : filehandle
        Binary file to write the decoded data to.
    optional_padding : bool, optional
        Whether a short final block can lack its padding.  Default: `False`.
    buffer_size : int, optional
        Number of symbols to read at a time.  Default: 1 MiB.
    """
    return _decode_stream(Base32Codec(optional_padding=optional_padding),
                          fh_in, fh_out, buffer_size=buffer_size)


class Base32StreamReader(StreamReaderBase):
    """Base32 reader, decoding symbols as they are read.

    Parameters
    ----------
    fh_raw : filehandle
        File with the symbols, opened in text or binary mode.
    optional_padding : bool, optional
        Whether a short final block can lack its padding.  Default: `False`.
    buffer_size : int, optional
        Number of symbols to read at a time.  Default: 1 MiB.
    """

    def __init__(self, fh_raw, *, optional_padding=False,
                 buffer_size=DEFAULT_BUFFER_SIZE):
        super().__init__(fh_raw,
                         Base32Codec(optional_padding=optional_padding),
                         buffer_size=buffer_size)


class Base32StreamWriter(StreamWriterBase):
    """Base32 writer, encoding data as it is written.

    A final, short block is padded when the writer is closed.

    Parameters
    ----------
    fh_raw : filehandle
        File for the symbols, opened in text or binary mode.
    """

    def __init__(self, fh_raw):
        super().__init__(fh_raw, Base32Codec())


open = FileOpener.create(globals(), doc="""
--- For reading a stream : (see `~basecodec.base32.base.Base32StreamReader`)

optional_padding : bool, optional
    Whether a short final block can lack its padding.  Default: `False`.
buffer_size : int, optional
    Number of symbols to read at a time.  Default: 1 MiB.

Returns
-------
Filehandle
    :class:`~basecodec.base32.base.Base32StreamReader` or
    :class:`~basecodec.base32.base.Base32StreamWriter`.
""")
