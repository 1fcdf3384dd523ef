"""ISO 2709 binary MARC format support.

Records are stored back to back, each one prefixed by its own five-digit
length, so a file can be streamed one record at a time.

Examples
--------
Read records from a MARC file:

>>> from marcrec.formats import marc
>>> for record in marc.read("records.mrc"):
...     print(record.subfield("245", "a"))

Write records to a MARC file:

>>> from marcrec.formats import marc
>>> count = marc.write(records, "output.mrc")
>>> print(f"Wrote {count} records")

Read from a file-like object:

>>> with open("records.mrc", "rb") as f:
...     for record in marc.read(f):
...         process(record)
"""

import os

from ..reader import MARCReader, MARCWriter

__all__ = ["MARCReader", "MARCWriter", "read", "write"]


def read(source, encoding="utf-8"):
    """Read MARC records from an ISO 2709 file or file-like object.

    Args:
        source: File path (str or pathlib.Path) or file-like object opened
            in binary mode.
        encoding: Character encoding of field data.

    Returns:
        Iterator over Record objects.
    """
    if isinstance(source, (str, os.PathLike)):
        return MARCReader(open(source, "rb"), encoding)
    return MARCReader(source, encoding)


def write(records, dest, encoding="utf-8"):
    """Write MARC records in ISO 2709 form.

    Args:
        records: Iterable of Record objects.
        dest: File path (str or pathlib.Path) or file-like object opened in
            binary mode. File objects passed in are left open.
        encoding: Character encoding of field data.

    Returns:
        Number of records written.
    """
    if isinstance(dest, (str, os.PathLike)):
        with MARCWriter(open(dest, "wb"), encoding) as writer:
            return _write_all(writer, records)
    return _write_all(MARCWriter(dest, encoding), records)


def _write_all(writer, records):
    count = 0
    for record in records:
        writer.write(record)
        count += 1
    return count
