# Licensed under the GPLv3 - see LICENSE
from operator import index
from math import gcd


__all__ = ['lcm', 'significant_chars', 'bytes_for_chars']


def lcm(a, b):
    """Calculate the least common multiple of a and b."""
    return abs(a * b) // gcd(a, b)


def significant_chars(radix, block_nbytes, block_nchars):
    """Number of symbols needed to represent a possibly short block.

    For a block holding ``j`` bytes (zero-extended to ``block_nbytes``), the
    number of significant symbols is the smallest ``s`` such that the digits
    dropped at the end can never carry into the bytes that are kept, i.e.,
    ``radix**(block_nchars - s) <= 256**(block_nbytes - j)``.

    Parameters
    ----------
    radix : int
        Number of distinct digits.
    block_nbytes : int
        Number of bytes in a full block.
    block_nchars : int
        Number of symbols in a full block.

    Returns
    -------
    nchars : tuple of int
        Indexed by the number of bytes in the block, from 0 to
        ``block_nbytes``.

    Examples
    --------
    For Base32, the short blocks of 1 to 4 bytes need 2, 4, 5, and 7
    symbols, respectively::

        >>> significant_chars(32, 5, 8)
        (0, 2, 4, 5, 7, 8)
    """
    radix = index(radix)
    if radix ** block_nchars < 256 ** block_nbytes:
        raise ValueError("{0} symbols of radix {1} cannot hold {2} bytes."
                         .format(block_nchars, radix, block_nbytes))
    nchars = [0]
    for nbytes in range(1, block_nbytes + 1):
        s = 1
        while radix ** (block_nchars - s) > 256 ** (block_nbytes - nbytes):
            s += 1
        nchars.append(s)
    return tuple(nchars)


def bytes_for_chars(nchars):
    """Invert the result of `significant_chars`.

    Returns a dict mapping the number of significant symbols in a block
    to the number of bytes they encode.  Symbol counts that cannot occur
    are absent.
    """
    return {s: nbytes for nbytes, s in enumerate(nchars) if nbytes}
