# Licensed under the GPLv3 - see LICENSE
"""Base32 encoding.

For the definition, see RFC 4648, https://www.rfc-editor.org/rfc/rfc4648
"""
from .codec import Base32Codec, encode, decode  # noqa
from .base import open, encode_stream, decode_stream  # noqa
