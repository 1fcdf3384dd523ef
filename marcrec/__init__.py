"""
marcrec: MARC record handling in pure Python.

This package reads, writes, and manipulates MARC bibliographic records in
the ISO 2709 (USMARC/MARC21) binary format, and checks them against a
field/subfield rule table.

The API keeps close to pymarc where the two overlap.
"""

import os
from typing import Optional, Union, Any

from .exceptions import (
    FieldNotFound,
    FieldOwnershipError,
    InvalidIndicatorCoerced,
    InvalidLeader,
    InvalidTag,
    LengthMismatch,
    MalformedDirectory,
    MalformedLength,
    MarcError,
    MarcWarning,
    MissingSubfields,
    NotARecord,
    NotControlField,
    NotDataField,
    NotIndicatorField,
    OrphanFieldData,
    TruncatedRecord,
)
from .field import Field, Subfield
from .lint import IndicatorRule, Lint, LintRule, default_rules, load_rules
from .microlif import MicroLIFReader, decode_microlif
from .reader import MARCReader, MARCWriter, read_record_bytes
from .record import DEFAULT_LEADER, Record, decode, encode
from .tags import TagPattern
from .formats import marc as _marc_format, microlif as _microlif_format

__version__ = "0.1.0"
__author__ = "marcrec Contributors"

_EXTENSION_MAP = {
    'mrc': 'marc',
    'marc': 'marc',
    'lif': 'microlif',
    'microlif': 'microlif',
}

_FORMAT_ALIASES = {
    'mrc': 'marc',
    'usmarc': 'marc',
    'lif': 'microlif',
}


def _resolve_format(path: str, format: Optional[str]) -> str:
    if format is None:
        _, ext = os.path.splitext(path)
        ext = ext.lower().lstrip('.')
        format = _EXTENSION_MAP.get(ext)
        if format is None:
            raise ValueError(
                f"Cannot determine format from extension '.{ext}'. "
                f"Supported extensions: {', '.join(sorted(_EXTENSION_MAP))}. "
                f"Use format= parameter to specify explicitly."
            )
    format = format.lower()
    return _FORMAT_ALIASES.get(format, format)


def read(path: Union[str, Any], format: Optional[str] = None, encoding: str = "utf-8"):
    """Read MARC records from a file, auto-detecting format from extension.

    Args:
        path: File path (str or pathlib.Path) to read from.
        format: Optional format override. If not specified, format is inferred
            from the file extension. Supported values:
            - "marc" or "mrc": ISO 2709 binary MARC
            - "microlif" or "lif": MicroLIF text
        encoding: Character encoding of field data.

    Returns:
        An iterator over Record objects from the file.

    Raises:
        ValueError: If format cannot be determined or is unsupported.
        FileNotFoundError: If the file does not exist.

    Example:
        >>> for record in marcrec.read("data.mrc"):
        ...     print(record.subfield("245", "a"))
    """
    path = os.fspath(path)
    format = _resolve_format(path, format)
    if format == 'marc':
        return _marc_format.read(path, encoding)
    if format == 'microlif':
        return _microlif_format.read(path, encoding)
    raise ValueError(
        f"Unsupported format '{format}'. Supported formats: marc, microlif"
    )


def write(records, path: Union[str, Any], format: Optional[str] = None, encoding: str = "utf-8") -> int:
    """Write MARC records to a file, auto-detecting format from extension.

    Only ISO 2709 output is supported.

    Returns:
        The number of records written.

    Raises:
        ValueError: If format cannot be determined or is unsupported.

    Example:
        >>> records = list(marcrec.read("input.mrc"))
        >>> marcrec.write(records, "output.mrc")
        100
    """
    path = os.fspath(path)
    format = _resolve_format(path, format)
    if format == 'marc':
        return _marc_format.write(records, path, encoding)
    raise ValueError(
        f"Unsupported format '{format}' for writing. Supported formats: marc"
    )


__all__ = [
    # Core classes
    "Field",
    "Subfield",
    "Record",
    "TagPattern",
    "DEFAULT_LEADER",
    # Codec
    "decode",
    "encode",
    # Validation
    "Lint",
    "LintRule",
    "IndicatorRule",
    "default_rules",
    "load_rules",
    # Readers and writers
    "MARCReader",
    "MARCWriter",
    "MicroLIFReader",
    "decode_microlif",
    "read_record_bytes",
    # Errors
    "MarcError",
    "InvalidTag",
    "MissingSubfields",
    "NotIndicatorField",
    "NotDataField",
    "NotControlField",
    "InvalidLeader",
    "MalformedLength",
    "LengthMismatch",
    "MalformedDirectory",
    "OrphanFieldData",
    "TruncatedRecord",
    "FieldNotFound",
    "FieldOwnershipError",
    "NotARecord",
    "MarcWarning",
    "InvalidIndicatorCoerced",
    # Format-agnostic helpers
    "read",
    "write",
]
