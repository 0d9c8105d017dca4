# Licensed under the GPLv3 - see LICENSE
"""Base85 encoding, in the Ascii85 variant used by btoa and PostScript.

Symbols run from '!' to 'u', and a block of four zero bytes can be
abbreviated as 'z'.  No '<~' and '~>' delimiters are used.
"""
from .codec import Base85Codec, encode, decode  # noqa
from .base import open, encode_stream, decode_stream  # noqa
