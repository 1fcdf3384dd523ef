"""
MicroLIF text records.

MicroLIF is a line-oriented, human-editable layout. Each line holds a tag
(or ``LDR``) followed by the field content and a trailing caret; a record
ends with a backtick. Data fields carry two indicator characters and then
``_``-prefixed subfields::

    HDR
    LDR00000nam  2200000   4500^
    001ocm12345^
    24510_aRaccoons and ripe corn /_cJim Arnosky.^
    650 0_aRaccoons.^`
"""

import logging
import re
from typing import BinaryIO, Iterator, Optional, TextIO, Union

from .exceptions import InvalidTag
from .field import Field, valid_indicator
from .record import LEADER_LEN, Record
from .tags import is_control_tag

logger = logging.getLogger(__name__)

END_OF_RECORD = "`"

_TAG = re.compile(r"^(\d\d\d|LDR)")
_SUBFIELD_SPLIT = re.compile(r"_(?=[a-z0-9])")


def decode_microlif(text: str) -> Record:
    """Build a Record from the text of one MicroLIF record.

    A missing trailing caret is kept as a record warning.

    Raises:
        InvalidTag: If a line does not start with a tag or ``LDR``.
        MissingSubfields: If a data field line holds no subfields.
    """
    record = Record()
    text = text.rstrip("\r\n")
    if text.endswith(END_OF_RECORD):
        text = text[:-1]

    for line in text.split("\n"):
        line = line.rstrip("\r")
        if not line or line.startswith("HDR"):
            continue

        match = _TAG.match(line)
        if match is None:
            raise InvalidTag(f"Invalid tag number: {line[:3]}")
        tag = match.group(1)
        line = line[3:]

        if line.endswith("^"):
            line = line[:-1]
        else:
            record._warn(f"Tag {tag} is missing a trailing caret.")

        if tag == "LDR":
            record.leader = line[:LEADER_LEN].ljust(LEADER_LEN)
        elif is_control_tag(tag):
            record.add_field(Field(tag, data=line))
        else:
            ind1, ind2 = line[:1], line[1:2]
            if not (valid_indicator(ind1) and valid_indicator(ind2)):
                record._warn(f'Invalid indicators "{ind1}{ind2}" forced to blanks')
                ind1, ind2 = " ", " "
            # The leading underscore leaves an empty first chunk.
            chunks = _SUBFIELD_SPLIT.split(line[2:])[1:]
            record.add_field(Field(tag, ind1, ind2, [(c[:1], c[1:]) for c in chunks]))

    return record


class MicroLIFReader:
    """Iterate over the records of a MicroLIF file.

    Accepts text streams, or binary streams decoded with ``encoding``.
    """

    def __init__(self, file_obj: Union[TextIO, BinaryIO], encoding: str = "utf-8"):
        self._file = file_obj
        self._encoding = encoding
        self._eof = False

    def __iter__(self) -> Iterator[Record]:
        return self

    def _next_text(self) -> Optional[str]:
        if self._eof:
            return None
        lines = []
        for line in self._file:
            if isinstance(line, bytes):
                line = line.decode(self._encoding)
            lines.append(line)
            if line.rstrip("\r\n").endswith(END_OF_RECORD):
                break
        # Trailing blank lines or a lone header are not a record.
        if not any(l.strip() and not l.startswith("HDR") for l in lines):
            logger.debug("End of MicroLIF stream reached")
            self._eof = True
            return None
        return "".join(lines)

    def __next__(self) -> Record:
        text = self._next_text()
        if text is None:
            raise StopIteration
        return decode_microlif(text)

    def read_record(self) -> Optional[Record]:
        try:
            return next(self)
        except StopIteration:
            return None

    def skip(self) -> bool:
        return self._next_text() is not None

    def close(self) -> None:
        self._file.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
