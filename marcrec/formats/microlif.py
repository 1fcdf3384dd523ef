"""MicroLIF text format support (read only).

MicroLIF is a line-oriented text layout used by some school library
systems for record exchange. Records decode into the same Record/Field
objects as binary MARC and can be written out with ``formats.marc``.

>>> from marcrec.formats import microlif
>>> for record in microlif.read("records.lif"):
...     print(record.subfield("245", "a"))
"""

import os

from ..microlif import MicroLIFReader, decode_microlif

__all__ = ["MicroLIFReader", "decode_microlif", "read"]


def read(source, encoding="utf-8"):
    """Read MicroLIF records from a file path or a file-like object.

    Returns:
        Iterator over Record objects.
    """
    if isinstance(source, (str, os.PathLike)):
        return MicroLIFReader(open(source, "r", encoding=encoding, newline=""), encoding)
    return MicroLIFReader(source, encoding)
