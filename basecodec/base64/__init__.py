# Licensed under the GPLv3 - see LICENSE
"""Base64 encoding, with the standard alphabet.

For the definition, see RFC 4648, https://www.rfc-editor.org/rfc/rfc4648
"""
from .codec import Base64Codec, encode, decode  # noqa
from .base import open, encode_stream, decode_stream  # noqa
