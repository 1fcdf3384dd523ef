"""
Exceptions and warning categories raised by marcrec.

Fatal conditions (a malformed tag, a broken directory, ...) are raised as
subclasses of ``MarcError``, which is itself a ``ValueError`` so callers
that already guard MARC input with ``except ValueError`` keep working.

Advisory conditions never stop processing. They are collected on the
record (``Record.warnings()``) and, for conditions detected while building
a ``Field`` by hand, emitted through the ``warnings`` module under a
``MarcWarning`` category.
"""


class MarcError(ValueError):
    """Base class for all fatal marcrec errors."""


class InvalidTag(MarcError):
    """Tag is not exactly three digits."""


class MissingSubfields(MarcError):
    """A data field was built without any subfields."""


class NotIndicatorField(MarcError):
    """Indicators were requested from a control field."""


class NotDataField(MarcError):
    """A subfield operation was attempted on a control field."""


class NotControlField(MarcError):
    """Control data was requested from a data field."""


class InvalidLeader(MarcError):
    """Leader is not exactly 24 characters."""


class MalformedLength(MarcError):
    """The record length in the first five bytes is not numeric."""


class LengthMismatch(MarcError):
    """The declared record length differs from the buffer length."""


class MalformedDirectory(MarcError):
    """The directory is missing, has a bad length or non-digit entries."""


class OrphanFieldData(MarcError):
    """Field data is left over after every directory entry was consumed."""


class TruncatedRecord(MarcError):
    """A stream ended before the declared record length was read."""


class FieldNotFound(MarcError, KeyError):
    """The field (or handle) does not belong to this record."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class FieldOwnershipError(MarcError):
    """The field is already owned by another record."""


class NotARecord(MarcError, TypeError):
    """Something other than a Record was handed to the linter."""


class MarcWarning(UserWarning):
    """Base category for non-fatal marcrec advisories."""


class InvalidIndicatorCoerced(MarcWarning):
    """An indicator outside ``[0-9 ]`` was replaced with a blank."""
