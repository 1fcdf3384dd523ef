"""Read/write entry points, one module per on-disk format.

- ``marc``: ISO 2709 binary records, read and write.
- ``microlif``: MicroLIF text records, read only.

Every module exposes ``read(source, encoding)``; writable formats also
expose ``write(records, dest, encoding)``. ``source`` and ``dest`` may be
paths or open file objects.

>>> from marcrec.formats import marc, microlif
>>> records = list(microlif.read("school.lif"))
>>> marc.write(records, "school.mrc")
"""

from . import marc, microlif

__all__ = [
    "marc",
    "microlif",
]
