# Licensed under the GPLv3 - see LICENSE
"""Binary-to-text encodings: Base16, Base32, Base64, Base85, and Base36."""

from .io import encode, decode, open  # noqa
from .base.codec import (DecodeError, BadLengthError,  # noqa
                         BadCharacterError)

try:
    from .version import version as __version__
except ImportError:
    __version__ = ''

# Define minima for the documentation, but do not bother to explicitly check.
__minimum_python_version__ = '3.10'
__minimum_astropy_version__ = '5.1'
__minimum_numpy_version__ = '1.24'
