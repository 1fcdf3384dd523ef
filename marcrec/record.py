"""
MARC records and the ISO 2709 binary codec.

Wire layout of a single record::

    leader (24) | directory entries (12 each) | 0x1E | field data ... | 0x1D

Each directory entry is ``TTTLLLLOOOOO``: tag, field length including its
terminator, and offset from the base address of data.
"""

import logging
from typing import Any, Dict, Iterator, List, Optional, Sequence, Union

from .exceptions import (
    FieldNotFound,
    FieldOwnershipError,
    InvalidLeader,
    LengthMismatch,
    MalformedDirectory,
    MalformedLength,
    MarcError,
    OrphanFieldData,
)
from .field import Field, Subfield, valid_indicator
from .tags import TagLike, is_control_tag, tag_pattern

logger = logging.getLogger(__name__)

SUBFIELD_INDICATOR = b"\x1f"
END_OF_FIELD = b"\x1e"
END_OF_RECORD = b"\x1d"

LEADER_LEN = 24
DIRECTORY_ENTRY_LEN = 12

DEFAULT_LEADER = "00000nam a2200000   4500"

_DIGITS = b"0123456789"


def _is_digits(chunk: bytes) -> bool:
    return bool(chunk) and all(b in _DIGITS for b in chunk)


class Record:
    """A MARC record: a leader plus an ordered collection of fields.

    Fields live in an arena keyed by integer handles. Handles are stable for
    the lifetime of the record and are never reused, so deleting one field
    never disturbs the handle of another, and two value-equal fields are
    always distinguishable.
    """

    def __init__(self, leader: Optional[str] = None, fields: Optional[Sequence[Any]] = None):
        """Create a new Record.

        Args:
            leader: Optional 24-character leader (defaults to DEFAULT_LEADER).
            fields: Optional list of Field objects (or Field argument tuples).
        """
        self._leader = DEFAULT_LEADER
        self._fields: Dict[int, Field] = {}
        self._next_handle = 0
        self._warnings: List[str] = []
        if leader is not None:
            self.leader = leader
        if fields:
            self.add_fields(*fields)

    # ------------------------------------------------------------------
    # Leader
    # ------------------------------------------------------------------

    @property
    def leader(self) -> str:
        """The 24-character leader."""
        return self._leader

    @leader.setter
    def leader(self, text: str) -> None:
        if not isinstance(text, str) or len(text) != LEADER_LEN:
            raise InvalidLeader(f"Leader must be {LEADER_LEN} characters long, got {text!r}")
        self._leader = text

    def _set_lengths(self, record_length: int, base_address: int) -> None:
        if record_length > 99999:
            raise MarcError(f"Record length {record_length} does not fit in the leader")
        self._leader = (
            f"{record_length:05d}" + self._leader[5:12] + f"{base_address:05d}" + self._leader[17:]
        )

    def update_leader(self) -> None:
        """Recompute the record length and base address in the leader."""
        _, _, base_address, total = self._build_tag_directory()
        self._set_lengths(total, base_address)

    # ------------------------------------------------------------------
    # Fields
    # ------------------------------------------------------------------

    def add_field(self, field: Field) -> int:
        """Append ``field`` and return its handle.

        Raises:
            FieldOwnershipError: If the field already belongs to a record.
        """
        if not isinstance(field, Field):
            raise TypeError(f"Expected a Field, got {type(field).__name__}")
        if field._record is not None:
            raise FieldOwnershipError(f"{field.tag}: Field already belongs to a record")
        handle = self._next_handle
        self._next_handle += 1
        self._fields[handle] = field
        field._record = self
        return handle

    def add_fields(self, *items: Any) -> int:
        """Append fields and return how many were added.

        Each item is either a Field, or a tuple/list of Field constructor
        arguments::

            record.add_fields(
                Field('100', '1', ' ', [('a', 'Arnosky, Jim.')]),
                ('250', ' ', ' ', [('a', '1st ed.')]),
                ('001', 'ocm12345'),
            )
        """
        count = 0
        for item in items:
            if isinstance(item, Field):
                field = item
            elif isinstance(item, (tuple, list)):
                field = Field(*item)
            else:
                raise TypeError(f"Unknown item of type {type(item).__name__} passed to add_fields()")
            self.add_field(field)
            count += 1
        return count

    def fields(self) -> List[Field]:
        """All fields in record order."""
        return list(self._fields.values())

    def handles(self) -> List[int]:
        """Handles of all fields, in record order."""
        return list(self._fields)

    def field_by_handle(self, handle: int) -> Field:
        try:
            return self._fields[handle]
        except KeyError:
            raise FieldNotFound(f"No field with handle {handle} in this record") from None

    def handle_of(self, field: Field) -> int:
        """Handle of ``field``, matched by identity."""
        for handle, candidate in self._fields.items():
            if candidate is field:
                return handle
        raise FieldNotFound(f"{field.tag}: Field is not part of this record")

    def delete_field(self, field: Union[Field, int]) -> Field:
        """Remove a field by identity or by handle and return it.

        A value-equal copy of a field in this record is not a match.

        Raises:
            FieldNotFound: If the field or handle is not in this record.
            TypeError: If ``field`` is neither a Field nor an integer handle.
        """
        if isinstance(field, bool) or not isinstance(field, (Field, int)):
            raise TypeError(f"Expected a Field or an integer handle, got {type(field).__name__}")
        handle = field if isinstance(field, int) else self.handle_of(field)
        removed = self._fields.pop(handle, None)
        if removed is None:
            raise FieldNotFound(f"No field with handle {handle} in this record")
        removed._record = None
        return removed

    def get_fields(self, *tagspecs: TagLike) -> List[Field]:
        """Fields matching any of ``tagspecs`` (``X`` is a wildcard digit).

        With no arguments, returns all fields.
        """
        if not tagspecs:
            return self.fields()
        patterns = [tag_pattern(spec) for spec in tagspecs]
        return [f for f in self._fields.values() if any(p.matches(f.tag) for p in patterns)]

    def get_field(self, tagspec: TagLike) -> Optional[Field]:
        """First field matching ``tagspec``, or None."""
        pattern = tag_pattern(tagspec)
        for field in self._fields.values():
            if pattern.matches(field.tag):
                return field
        return None

    def subfield(self, tagspec: TagLike, code: str) -> Optional[str]:
        """Shortcut for ``record.get_field(tag).subfield(code)``."""
        field = self.get_field(tagspec)
        if field is None or field.is_control_field():
            return None
        return field.subfield(code)

    def warnings(self) -> List[str]:
        """Advisories collected while the record was decoded."""
        return list(self._warnings)

    def _warn(self, message: str) -> None:
        self._warnings.append(message)

    def __len__(self) -> int:
        return len(self._fields)

    def __iter__(self) -> Iterator[Field]:
        return iter(self.fields())

    def __contains__(self, tagspec: TagLike) -> bool:
        return self.get_field(tagspec) is not None

    def __getitem__(self, tagspec: TagLike) -> Optional[Field]:
        return self.get_field(tagspec)

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def as_string(self) -> str:
        """Human-readable dump, leader first."""
        lines = [f"LDR {self._leader}"]
        lines.extend(field.as_string() for field in self._fields.values())
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.as_string()

    def __repr__(self) -> str:
        return f"Record(leader={self._leader!r}, fields={len(self._fields)})"

    # ------------------------------------------------------------------
    # Binary codec
    # ------------------------------------------------------------------

    def _build_tag_directory(self, encoding: str = "utf-8"):
        """Serialize every field and build the matching directory.

        Returns the field blocks, the directory entries, the base address
        and the total record length.
        """
        blocks = []
        directory = []
        offset = 0
        for field in self._fields.values():
            block = field.as_marc(encoding)
            blocks.append(block)
            # Lengths over 9999 do not fit the entry and wrap.
            entry = f"{field.tag}{len(block) % 10000:04d}{offset:05d}"
            directory.append(entry.encode("ascii"))
            offset += len(block)

        base_address = LEADER_LEN + len(directory) * DIRECTORY_ENTRY_LEN + 1
        total = base_address + offset + 1
        return blocks, directory, base_address, total

    def encode(self, encoding: str = "utf-8") -> bytes:
        """Serialize to ISO 2709 bytes.

        The leader's record length and base address are rewritten as a side
        effect; field content is untouched.
        """
        blocks, directory, base_address, total = self._build_tag_directory(encoding)
        self._set_lengths(total, base_address)
        data = b"".join(
            [self._leader.encode(encoding, "surrogateescape")]
            + directory
            + [END_OF_FIELD]
            + blocks
            + [END_OF_RECORD]
        )
        logger.debug("Encoded %d fields into %d bytes", len(blocks), len(data))
        return data

    def as_marc(self, encoding: str = "utf-8") -> bytes:
        """Alias for encode() (pymarc compatibility)."""
        return self.encode(encoding)

    @classmethod
    def decode(cls, data: bytes, encoding: str = "utf-8") -> "Record":
        """Build a Record from one record's worth of ISO 2709 bytes.

        Non-fatal problems (bad terminator, inconsistent directory lengths or
        offsets, invalid indicators) are kept in ``warnings()``.

        Raises:
            MalformedLength: If the first five bytes are not digits.
            LengthMismatch: If the declared length differs from len(data).
            MalformedDirectory: If the directory is missing, is not a multiple
                of 12 bytes, holds non-digits or points past the field data.
            OrphanFieldData: If field data is left after the directory.
            MarcError: Any field-level construction failure (InvalidTag,
                MissingSubfields).
        """
        data = bytes(data)
        head = data[:5]
        if len(head) != 5 or not _is_digits(head):
            raise MalformedLength(
                f'Record length "{head.decode("ascii", "replace")}" is not numeric'
            )
        declared = int(head)
        if declared != len(data):
            raise LengthMismatch(
                f"Invalid record length: Leader says {declared} bytes, but it's actually {len(data)}"
            )
        if len(data) < LEADER_LEN:
            raise MalformedLength(f"Record of {len(data)} bytes is too short to hold a leader")

        record = cls()
        record.leader = data[:LEADER_LEN].decode(encoding, "surrogateescape")

        blocks = data[LEADER_LEN:].split(END_OF_FIELD)
        if len(blocks) < 2:
            raise MalformedDirectory("No directory found")
        directory = blocks.pop(0)
        if len(directory) % DIRECTORY_ENTRY_LEN != 0:
            raise MalformedDirectory(
                f"Invalid directory length {len(directory)}: not a multiple of {DIRECTORY_ENTRY_LEN}"
            )
        if directory and not _is_digits(directory):
            raise MalformedDirectory("Directory holds non-digit characters")

        final = blocks.pop()
        if final != END_OF_RECORD:
            record._warn(f'Invalid record terminator: "{final.decode(encoding, "surrogateescape")}"')

        used = 0
        for start in range(0, len(directory), DIRECTORY_ENTRY_LEN):
            entry = directory[start:start + DIRECTORY_ENTRY_LEN]
            tag = entry[:3].decode("ascii")
            length = int(entry[3:7])
            offset = int(entry[7:12])
            if not blocks:
                raise MalformedDirectory(f"Directory entry for tag {tag} has no field data")
            block = blocks.pop(0)

            if length != len(block) + 1:
                record._warn(f"Invalid length in the directory for tag {tag}")
            if offset != used:
                record._warn("Directory offsets are out of whack")
            used += length

            record.add_field(record._decode_field(tag, block, encoding))

        if blocks:
            raise OrphanFieldData(
                f"Found {len(blocks)} leftover field(s) that weren't in the directory"
            )

        logger.debug("Decoded %d byte record with %d fields", len(data), len(record))
        return record

    def _decode_field(self, tag: str, block: bytes, encoding: str) -> Field:
        if is_control_tag(tag):
            return Field(tag, data=block.decode(encoding, "surrogateescape"))

        chunks = block.split(SUBFIELD_INDICATOR)
        # Everything before the first delimiter is the indicator string.
        indicators = chunks[0].decode(encoding, "surrogateescape")
        if len(indicators) == 2 and valid_indicator(indicators[0]) and valid_indicator(indicators[1]):
            ind1, ind2 = indicators
        else:
            self._warn(f'Invalid indicators "{indicators}" forced to blanks')
            ind1, ind2 = " ", " "

        subfields = []
        for chunk in chunks[1:]:
            text = chunk.decode(encoding, "surrogateescape")
            subfields.append(Subfield(text[:1], text[1:]))
        return Field(tag, ind1, ind2, subfields)


def decode(data: bytes, encoding: str = "utf-8") -> Record:
    """Module-level shortcut for ``Record.decode``."""
    return Record.decode(data, encoding)


def encode(record: Record, encoding: str = "utf-8") -> bytes:
    """Module-level shortcut for ``Record.encode``."""
    if not isinstance(record, Record):
        raise MarcError(f"Expected a Record, got {type(record).__name__}")
    return record.encode(encoding)
