# Licensed under the GPLv3 - see LICENSE
from ..base.base import (DEFAULT_BUFFER_SIZE,
                         StreamReaderBase, StreamWriterBase, FileOpener,
                         encode_stream as _encode_stream,
                         decode_stream as _decode_stream)
from .codec import Base64Codec


__all__ = ['Base64StreamReader', 'Base64StreamWriter', 'open',
           'encode_stream', 'decode_stream']


def encode_stream(fh_in, fh_out, *, buffer_size=DEFAULT_BUFFER_SIZE):
    """Encode all data in a binary file as Base64 symbols in another.

    See `~basecodec.base.base.encode_stream` for details.
    """
    return _encode_stream(Base64Codec(), fh_in, fh_out,
                          buffer_size=buffer_size)


def decode_stream(fh_in, fh_out, *, optional_padding=False,
                  buffer_size=DEFAULT_BUFFER_SIZE):
    """Decode all Base64 symbols in a file, writing the data to another.

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
    return _decode_stream(Base64Codec(optional_padding=optional_padding),
                          fh_in, fh_out, buffer_size=buffer_size)


class Base64StreamReader(StreamReaderBase):
    """Base64 reader, decoding symbols as they are read.

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
                         Base64Codec(optional_padding=optional_padding),
                         buffer_size=buffer_size)


class Base64StreamWriter(StreamWriterBase):
    """Base64 writer, encoding data as it is written.

    A final, short block is padded when the writer is closed.

    Parameters
    ----------
    fh_raw : filehandle
        File for the symbols, opened in text or binary mode.
    """

    def __init__(self, fh_raw):
        super().__init__(fh_raw, Base64Codec())


open = FileOpener.create(globals(), doc="""
--- For reading a stream : (see `~basecodec.base64.base.Base64StreamReader`)

optional_padding : bool, optional
    Whether a short final block can lack its padding.  Default: `False`.
buffer_size : int, optional
    Number of symbols to read at a time.  Default: 1 MiB.

Returns
-------
Filehandle
    :class:`~basecodec.base64.base.Base64StreamReader` or
    :class:`~basecodec.base64.base.Base64StreamWriter`.
""")
