# Licensed under the GPLv3 - see LICENSE
"""General encode, decode and open functions, and codec entry point.

Contains ``encode``, ``decode`` and ``open`` functions that dispatch to the
module of a codec selected by name.  Besides the built-in codecs, any
module registered under the entry point group 'basecodec.codecs' (e.g.,
'ascii85 = mypackage.ascii85') is used as a codec; it should define
``encode``, ``decode`` and ``open`` functions.  Entries naming an object
rather than a module are ignored.

Modules are only imported when a codec is first used.  A module that
fails to import is dropped from the registry and not tried again.

Attributes
----------
CODECS : list
    Names of the available codecs.

"""
import inspect
import warnings

import entrypoints


__all__ = ['CODECS', 'encode', 'decode', 'open']


ENTRY_POINT_GROUP = 'basecodec.codecs'

BUILTIN_CODECS = ('base16', 'base32', 'base64', 'base85', 'base36')

CODECS = []

_entries = {}
"""Entry points of codecs that have not yet been loaded."""
_modules = {}
"""Codec modules that have been loaded, by name."""
_bad_entries = set()
"""Names of codecs whose modules could not be imported."""


def _update_entries():
    """Register any new codec entry points, adding their names to CODECS.

    The built-in codecs are always registered first, so that they are
    available in source checkouts without installed entry points.
    """
    found = {name: entrypoints.EntryPoint(name, 'basecodec.' + name, None)
             for name in BUILTIN_CODECS}
    found.update(entrypoints.get_group_named(ENTRY_POINT_GROUP))
    for name, entry in found.items():
        if (entry.object_name or name in _bad_entries
                or name in _modules or name in _entries):
            continue
        _entries[name] = entry
        CODECS.append(name)


_update_entries()


def _get_codec(codec):
    """Get the module for the given codec, importing it if needed."""
    try:
        return _modules[codec]
    except KeyError:
        pass

    if codec not in _entries:
        _update_entries()
        if codec not in _entries:
            raise ValueError(f"unknown codec {codec!r} "
                             f"(available: {', '.join(CODECS)}).")

    entry = _entries.pop(codec)
    try:
        module = entry.load()
    except Exception as exc:
        _bad_entries.add(codec)
        CODECS.remove(codec)
        raise ValueError(f"codec {codec!r} could not be loaded from "
                         f"{entry.module_name!r}; it is now removed.") from exc

    _modules[codec] = module
    return module


def _select_options(function, options, codec):
    """Select the options that a function can use.

    Any others are dropped, with a warning.
    """
    parameters = inspect.signature(function).parameters
    if any(parameter.kind == parameter.VAR_KEYWORD
           for parameter in parameters.values()):
        return options

    used = {key: value for key, value in options.items()
            if key in parameters}
    if len(used) < len(options):
        warnings.warn(f"options not used by {codec}: "
                      f"{', '.join(sorted(set(options) - set(used)))}.")
    return used


def encode(data, codec='base64', **options):
    """Encode bytes with the given codec.

    Parameters
    ----------
    data : bytes-like
        Data to be encoded.
    codec : str, optional
        Name of the codec, one of `CODECS`.  Default: 'base64'.
    **options
        Options for the codec, such as ``fold_zero`` for 'base85'.  Options
        the codec does not use are ignored, with a warning.

    Returns
    -------
    text : str
    """
    module = _get_codec(codec)
    return module.encode(data, **_select_options(module.encode, options,
                                                 codec))


def decode(text, codec='base64', **options):
    """Decode text with the given codec.

    Parameters
    ----------
    text : str or bytes-like
        Encoded data.
    codec : str, optional
        Name of the codec, one of `CODECS`.  Default: 'base64'.
    **options
        Options for the codec, such as ``optional_padding`` for 'base32' and
        'base64'.  Options the codec does not use are ignored, with a
        warning.

    Returns
    -------
    data : bytes

    Raises
    ------
    ~basecodec.base.codec.DecodeError
        If the text is not a valid encoding.
    """
    module = _get_codec(codec)
    return module.decode(text, **_select_options(module.decode, options,
                                                 codec))


def open(name, mode='r', codec='base64', **options):
    """Open an encoded file for reading or writing.

    Parameters
    ----------
    name : str or filehandle
        File name or filehandle.
    mode : {'r', 'w', 'rb', 'wb', 'rt', 'wt'}, optional
        Whether to open for reading or writing, and whether the symbols
        are stored in a binary file (default) or a text file.
        Default: 'r'.
    codec : str, optional
        Name of the codec, one of `CODECS`.  Default: 'base64'.
    **options
        Options for the stream reader or writer.  Options it does not use
        are ignored, with a warning.
    """
    module = _get_codec(codec)
    function = module.open
    classes = getattr(function, 'classes', None)
    if classes is not None and mode[:1] in classes:
        function = classes[mode[:1]]
    return module.open(name, mode, **_select_options(function, options,
                                                     codec))
