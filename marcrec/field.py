"""
MARC fields.

A field is either a control field (tag below 010) holding a single data
string, or a data field holding two indicators and an ordered list of
subfields. Subfield codes may repeat.
"""

import warnings as _warnings
from typing import Any, Iterable, List, NamedTuple, Optional, Sequence, Tuple, Union

from .exceptions import (
    InvalidIndicatorCoerced,
    MissingSubfields,
    NotControlField,
    NotDataField,
    NotIndicatorField,
)
from .tags import TagLike, is_control_tag, normalize_tag

SUBFIELD_INDICATOR = "\x1f"
END_OF_FIELD = "\x1e"

VALID_INDICATORS = frozenset("0123456789 ")


class Subfield(NamedTuple):
    """A (code, value) pair within a data field."""

    code: str
    value: str


SubfieldLike = Union[Subfield, Tuple[str, str], Sequence[str]]


def _to_subfield(pair: SubfieldLike) -> Subfield:
    if isinstance(pair, Subfield):
        return pair
    code, value = pair
    return Subfield(code, value)


def valid_indicator(value: Any) -> bool:
    """True if ``value`` is a single digit or a blank."""
    return isinstance(value, str) and len(value) == 1 and value in VALID_INDICATORS


class Field:
    """A single tagged unit of a MARC record.

    Control field::

        Field('001', data='ocm12345')

    Data field::

        Field('245', '1', '0', [('a', 'Raccoons and ripe corn /'),
                                ('c', 'Jim Arnosky.')])
        Field('245', indicators=['1', '0'], subfields=[Subfield('a', 'Title')])
    """

    def __init__(
        self,
        tag: TagLike,
        indicator1: Optional[str] = None,
        indicator2: Optional[str] = None,
        subfields: Optional[Iterable[SubfieldLike]] = None,
        *,
        indicators: Optional[Sequence[str]] = None,
        data: Optional[str] = None,
    ):
        """Create a new Field.

        Args:
            tag: 3-digit tag, as a string or an integer.
            indicator1: First indicator (data fields only, default blank).
            indicator2: Second indicator (data fields only, default blank).
            subfields: Subfield objects or (code, value) pairs. Required for
                data fields.
            indicators: Optional [ind1, ind2], overrides indicator1/indicator2.
            data: Payload of a control field. For control tags the second
                positional argument is taken as the data when this is omitted.

        Raises:
            InvalidTag: If the tag is not exactly three digits.
            MissingSubfields: If a data field gets no subfields.
            ValueError: If a control field gets indicators or subfields.
        """
        self._tag = normalize_tag(tag)
        self._record = None
        self.warnings: List[str] = []

        if is_control_tag(self._tag):
            if indicator2 is not None or subfields is not None or indicators is not None:
                raise ValueError(f"{self._tag}: Control fields take data, not indicators or subfields")
            if data is not None and indicator1 is not None:
                raise ValueError(f"{self._tag}: Pass control field data once, positionally or as data=")
            if data is None:
                data = indicator1 if indicator1 is not None else ""
            self._data = data
            self._indicators: Optional[List[str]] = None
            self._subfields: Optional[List[Subfield]] = None
            return

        if indicators is not None:
            if len(indicators) != 2:
                raise ValueError("indicators must be a pair [ind1, ind2]")
            indicator1, indicator2 = indicators
        self._data = None
        self._indicators = [
            self._check_indicator(1, indicator1),
            self._check_indicator(2, indicator2),
        ]
        self._subfields = [_to_subfield(pair) for pair in (subfields or ())]
        if not self._subfields:
            raise MissingSubfields(f"{self._tag}: Must pass at least one subfield")

    def _check_indicator(self, number: int, value: Optional[str]) -> str:
        if value is None:
            return " "
        if valid_indicator(value):
            return value
        message = f'Invalid indicator {number} "{value}" forced to blank'
        self.warnings.append(message)
        _warnings.warn(f"{self._tag}: {message}", InvalidIndicatorCoerced, stacklevel=3)
        return " "

    @property
    def tag(self) -> str:
        """The 3-digit tag."""
        return self._tag

    def is_control_field(self) -> bool:
        return self._indicators is None

    def indicator(self, number: int) -> str:
        """Return indicator 1 or 2.

        Raises:
            NotIndicatorField: If this is a control field.
            ValueError: If ``number`` is not 1 or 2.
        """
        if self._indicators is None:
            raise NotIndicatorField("Fields below 010 do not have indicators")
        if number not in (1, 2):
            raise ValueError("Indicator number must be 1 or 2")
        return self._indicators[number - 1]

    @property
    def indicator1(self) -> str:
        return self.indicator(1)

    @property
    def indicator2(self) -> str:
        return self.indicator(2)

    @property
    def indicators(self) -> Tuple[str, str]:
        return (self.indicator(1), self.indicator(2))

    def subfield(self, code: str) -> Optional[str]:
        """Return the value of the first subfield with ``code``, or None.

        Raises:
            NotDataField: If this is a control field.
        """
        if self._subfields is None:
            raise NotDataField("Fields below 010 do not have subfields")
        for sf in self._subfields:
            if sf.code == code:
                return sf.value
        return None

    def subfields(self) -> List[Subfield]:
        """All subfields, in order. Empty for control fields."""
        return list(self._subfields or ())

    def get_subfields(self, *codes: str) -> List[str]:
        """Values of every subfield whose code is in ``codes``, in field order."""
        if self._subfields is None:
            raise NotDataField("Fields below 010 do not have subfields")
        return [sf.value for sf in self._subfields if sf.code in codes]

    def add_subfields(self, *pairs: SubfieldLike) -> int:
        """Append subfields and return how many were added.

        Raises:
            NotDataField: If this is a control field.
        """
        if self._subfields is None:
            raise NotDataField("Subfields are only for tags >= 010")
        added = [_to_subfield(pair) for pair in pairs]
        self._subfields.extend(added)
        return len(added)

    def add_subfield(self, code: str, value: str) -> None:
        """Append a single subfield (pymarc compatibility)."""
        self.add_subfields(Subfield(code, value))

    @property
    def data(self) -> str:
        """Payload of a control field.

        Raises:
            NotControlField: If this is a data field.
        """
        if self._indicators is not None:
            raise NotControlField("data is only for tags less than 010")
        return self._data

    @data.setter
    def data(self, text: str) -> None:
        if self._indicators is not None:
            raise NotControlField("data is only for tags less than 010")
        self._data = text

    def __getitem__(self, code: str) -> Optional[str]:
        """First subfield value for ``code`` (None if absent)."""
        return self.subfield(code)

    def __contains__(self, code: str) -> bool:
        return self._subfields is not None and any(sf.code == code for sf in self._subfields)

    def as_string(self) -> str:
        """Human-readable rendering, one subfield per line."""
        if self.is_control_field():
            return f"{self._tag}     {self._data}"

        lines = []
        hanger = f"{self._tag} {self._indicators[0]:1.1}{self._indicators[1]:1.1}"
        for code, value in self._subfields:
            lines.append(f"{hanger:<6.6} _{code:1.1}{value}")
            hanger = ""
        return "\n".join(lines)

    def as_marc(self, encoding: str = "utf-8") -> bytes:
        """Binary form of the field, including its trailing field terminator."""
        if self.is_control_field():
            text = self._data + END_OF_FIELD
        else:
            parts = [self._indicators[0], self._indicators[1]]
            for code, value in self._subfields:
                parts.append(SUBFIELD_INDICATOR + code + value)
            parts.append(END_OF_FIELD)
            text = "".join(parts)
        return text.encode(encoding, "surrogateescape")

    def __str__(self) -> str:
        return self.as_string()

    def __repr__(self) -> str:
        if self.is_control_field():
            return f"Field(tag='{self._tag}', data={self._data!r})"
        return (
            f"Field(tag='{self._tag}', indicators={self.indicators!r}, "
            f"subfields={self._subfields!r})"
        )

    def __eq__(self, other: Any) -> bool:
        """Compare fields by content."""
        if not isinstance(other, Field):
            return NotImplemented
        return (
            self._tag == other._tag
            and self._data == other._data
            and self._indicators == other._indicators
            and self._subfields == other._subfields
        )

    __hash__ = None
