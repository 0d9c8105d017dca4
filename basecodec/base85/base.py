# Licensed under the GPLv3 - see LICENSE
from ..base.base import (DEFAULT_BUFFER_SIZE,
                         StreamReaderBase, StreamWriterBase, FileOpener,
                         encode_stream as _encode_stream,
                         decode_stream as _decode_stream)
from .codec import Base85Codec


__all__ = ['Base85StreamReader', 'Base85StreamWriter', 'open',
           'encode_stream', 'decode_stream']


def encode_stream(fh_in, fh_out, *, fold_zero=True,
                  buffer_size=DEFAULT_BUFFER_SIZE):
    """Encode all data in a binary file as Ascii85 symbols in another.

    Parameters
    ----------
    fh_in : filehandle
        Binary file with the data to be encoded.
    fh_out : filehandle
        File to write the symbols to, opened in text or binary mode.
    fold_zero : bool, optional
        Whether to abbreviate full blocks of zeros as 'z'.  Default: `True`.
    buffer_size : int, optional
        Number of bytes to read at a time.  Default: 1 MiB.
    """
    return _encode_stream(Base85Codec(fold_zero=fold_zero), fh_in, fh_out,
                          buffer_size=buffer_size)


def decode_stream(fh_in, fh_out, *, fold_zero=True,
                  buffer_size=DEFAULT_BUFFER_SIZE):
    """Decode all Ascii85 symbols in a file, writing the data to another.

    Parameters
    ----------
    fh_in : filehandle
        File with the symbols, opened in text or binary mode.
    fh_out : filehandle
        Binary file to write the decoded data to.
    fold_zero : bool, optional
        Whether 'z' is accepted as abbreviation of a full block of zeros.
        Default: `True`.
    buffer_size : int, optional
        Number of symbols to read at a time.  Default: 1 MiB.
    """
    return _decode_stream(Base85Codec(fold_zero=fold_zero), fh_in, fh_out,
                          buffer_size=buffer_size)


class Base85StreamReader(StreamReaderBase):
    """Ascii85 reader, decoding symbols as they are read.

    Parameters
    ----------
    fh_raw : filehandle
        File with the symbols, opened in text or binary mode.
    fold_zero : bool, optional
        Whether 'z' is accepted as abbreviation of a full block of zeros.
        Default: `True`.
    buffer_size : int, optional
        Number of symbols to read at a time.  Default: 1 MiB.
    """

    def __init__(self, fh_raw, *, fold_zero=True,
                 buffer_size=DEFAULT_BUFFER_SIZE):
        super().__init__(fh_raw, Base85Codec(fold_zero=fold_zero),
                         buffer_size=buffer_size)


class Base85StreamWriter(StreamWriterBase):
    """Ascii85 writer, encoding data as it is written.

    Parameters
    ----------
    fh_raw : filehandle
        File for the symbols, opened in text or binary mode.
    fold_zero : bool, optional
        Whether to abbreviate full blocks of zeros as 'z'.  Default: `True`.
    """

    def __init__(self, fh_raw, *, fold_zero=True):
        super().__init__(fh_raw, Base85Codec(fold_zero=fold_zero))


open = FileOpener.create(globals(), doc="""
--- For reading a stream : (see `~basecodec.base85.base.Base85StreamReader`)

fold_zero : bool, optional
    Whether 'z' is accepted as abbreviation of a full block of zeros.
    Default: `True`.
buffer_size : int, optional
    Number of symbols to read at a time.  Default: 1 MiB.

--- For writing a stream : (see `~basecodec.base85.base.Base85StreamWriter`)

fold_zero : bool, optional
    Whether to abbreviate full blocks of zeros as 'z'.  Default: `True`.

Returns
-------
Filehandle
    :class:`~basecodec.base85.base.Base85StreamReader` or
    :class:`~basecodec.base85.base.Base85StreamWriter`.
""")
