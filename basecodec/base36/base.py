# Licensed under the GPLv3 - see LICENSE
from ..base.base import (DEFAULT_BUFFER_SIZE,
                         StreamReaderBase, StreamWriterBase, FileOpener,
                         encode_stream as _encode_stream,
                         decode_stream as _decode_stream)
from .codec import Base36Codec


__all__ = ['Base36StreamReader', 'Base36StreamWriter', 'open',
           'encode_stream', 'decode_stream']


def encode_stream(fh_in, fh_out, *, buffer_size=DEFAULT_BUFFER_SIZE):
    """Encode all data in a binary file as Base36 symbols in another.

    See `~basecodec.base.base.encode_stream` for details.
    """
    return _encode_stream(Base36Codec(), fh_in, fh_out,
                          buffer_size=buffer_size)


def decode_stream(fh_in, fh_out, *, buffer_size=DEFAULT_BUFFER_SIZE):
    """Decode all Base36 symbols in a file, writing the data to another.

    See `~basecodec.base.base.decode_stream` for details.
    """
    return _decode_stream(Base36Codec(), fh_in, fh_out,
                          buffer_size=buffer_size)


class Base36StreamReader(StreamReaderBase):
    """Base36 reader, decoding symbols as they are read.

    Parameters
    ----------
    fh_raw : filehandle
        File with the symbols, opened in text or binary mode.
    buffer_size : int, optional
        Number of symbols to read at a time.  Default: 1 MiB.
    """

    def __init__(self, fh_raw, *, buffer_size=DEFAULT_BUFFER_SIZE):
        super().__init__(fh_raw, Base36Codec(), buffer_size=buffer_size)


class Base36StreamWriter(StreamWriterBase):
    """Base36 writer, encoding data as it is written."""

    def __init__(self, fh_raw):
        super().__init__(fh_raw, Base36Codec())


open = FileOpener.create(globals(), doc="""
--- For reading a stream : (see `~basecodec.base36.base.Base36StreamReader`)

buffer_size : int, optional
    Number of symbols to read at a time.  Default: 1 MiB.

Returns
-------
Filehandle
    :class:`~basecodec.base36.base.Base36StreamReader` or
    :class:`~basecodec.base36.base.Base36StreamWriter`.
""")
