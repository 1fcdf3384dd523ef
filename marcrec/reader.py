"""
Sequential reading and writing of ISO 2709 record streams.

A stream is a plain concatenation of records. Each record starts with its
own 5-digit length, so the reader pulls five bytes, then the rest of the
record, and hands the buffer to ``Record.decode``.
"""

import logging
from typing import BinaryIO, Iterator, Optional

from .exceptions import MalformedLength, TruncatedRecord
from .record import Record

logger = logging.getLogger(__name__)


def read_record_bytes(stream: BinaryIO) -> Optional[bytes]:
    """Read one whole record's raw bytes from ``stream``.

    Returns:
        The record bytes, or None at end of stream.

    Raises:
        MalformedLength: If the length prefix is not five digits.
        TruncatedRecord: If the stream ends inside a record.
    """
    head = stream.read(5)
    if not head:
        return None
    if len(head) < 5:
        raise TruncatedRecord(f"Stream ended inside a record length: {head!r}")
    if not head.isdigit():
        raise MalformedLength(f'Invalid record length "{head.decode("ascii", "replace")}"')

    length = int(head)
    if length < 5:
        raise MalformedLength(f"Record length {length} is too short")
    body = stream.read(length - 5)
    if len(body) != length - 5:
        raise TruncatedRecord(
            f"Error reading {length} byte record: got only {len(body) + 5} bytes"
        )
    return head + body


class MARCReader:
    """Iterate over the records of a binary MARC stream.

    Example:
        >>> with open("records.mrc", "rb") as f:
        ...     for record in MARCReader(f):
        ...         print(record.subfield("245", "a"))
    """

    def __init__(self, file_obj: BinaryIO, encoding: str = "utf-8"):
        self._file = file_obj
        self._encoding = encoding
        self._eof = False

    def __iter__(self) -> Iterator[Record]:
        return self

    def _next_bytes(self) -> Optional[bytes]:
        if self._eof:
            return None
        data = read_record_bytes(self._file)
        if data is None:
            logger.debug("End of MARC stream reached")
            self._eof = True
        return data

    def __next__(self) -> Record:
        data = self._next_bytes()
        if data is None:
            raise StopIteration
        return Record.decode(data, self._encoding)

    def read_record(self) -> Optional[Record]:
        """Read next record, or None at end of stream (pymarc compatibility)."""
        try:
            return next(self)
        except StopIteration:
            return None

    def skip(self) -> bool:
        """Skip the next record without decoding it.

        Returns:
            True if a record was skipped, False at end of stream.
        """
        return self._next_bytes() is not None

    def close(self) -> None:
        self._file.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class MARCWriter:
    """Write records to a binary stream."""

    def __init__(self, file_obj: BinaryIO, encoding: str = "utf-8"):
        self._file = file_obj
        self._encoding = encoding

    def write(self, record: Record) -> None:
        """Write a record."""
        self._file.write(record.encode(self._encoding))

    def write_record(self, record: Record) -> None:
        """Write a record (alias for write)."""
        self.write(record)

    def close(self) -> None:
        """Close the writer."""
        self._file.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
