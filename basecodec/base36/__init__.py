# Licensed under the GPLv3 - see LICENSE
"""Base36 encoding, using digits and upper-case letters."""
from .codec import Base36Codec, encode, decode  # noqa
from .base import open, encode_stream, decode_stream  # noqa
