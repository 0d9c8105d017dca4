# Licensed under the GPLv3 - see LICENSE
"""Base implementations shared between all encodings.

Every encoding converts blocks of bytes to blocks of symbols of an
alphabet.  The symbol tables are defined in `~basecodec.base.alphabet`, and
the engine that does the conversion, for whole arrays as well as one byte
or symbol at a time, in `~basecodec.base.codec`.  Helpers to determine the
shapes of (short) blocks are in `~basecodec.base.utils`.

The `~basecodec.base.base` module defines functions that transcode
whole files, as well as base classes for stream readers and writers that
encode or decode on the fly, and a helper to create the ``open`` functions
of the encodings.
"""
