"""
Tag helpers: validation and wildcard matching.

A tag specifier is either an exact tag (``"245"``) or a pattern where
``X`` stands for any digit (``"6XX"``, ``"1XX"``, ``"X00"``). Patterns are
split into fixed digits and wildcard positions once and cached.
"""

from typing import Dict, Optional, Tuple, Union

from .exceptions import InvalidTag

# Tags below this are control fields.
CONTROL_TAG_LIMIT = 10

TagLike = Union[str, int]


def normalize_tag(tag: TagLike) -> str:
    """Return ``tag`` as a 3-digit string or raise ``InvalidTag``.

    Integers are converted with ``str()`` first, so ``245`` is accepted and
    ``1`` is not.
    """
    if isinstance(tag, bool) or not isinstance(tag, (str, int)):
        raise InvalidTag(f'Tag "{tag}" is not a valid tag number.')
    text = str(tag)
    if len(text) != 3 or not all(c in "0123456789" for c in text):
        raise InvalidTag(f'Tag "{text}" is not a valid tag number.')
    return text


def is_control_tag(tag: str) -> bool:
    """True for tags below 010 (no indicators, no subfields)."""
    return int(tag) < CONTROL_TAG_LIMIT


class TagPattern:
    """Digit-by-digit matcher for a tag specifier such as ``"6XX"``."""

    __slots__ = ("spec", "_positions")

    def __init__(self, spec: TagLike):
        text = str(spec)
        if len(text) != 3:
            raise InvalidTag(f'Tag specifier "{text}" must be 3 characters.')
        positions = []
        for c in text:
            if c in "Xx":
                positions.append(None)
            elif c in "0123456789":
                positions.append(c)
            else:
                raise InvalidTag(f'Tag specifier "{text}" may only hold digits and X.')
        self.spec = text
        self._positions: Tuple[Optional[str], ...] = tuple(positions)

    @property
    def is_exact(self) -> bool:
        return None not in self._positions

    def matches(self, tag: str) -> bool:
        if len(tag) != 3:
            return False
        for want, have in zip(self._positions, tag):
            if want is None:
                if have not in "0123456789":
                    return False
            elif want != have:
                return False
        return True

    def __repr__(self) -> str:
        return f"TagPattern('{self.spec}')"


_PATTERNS: Dict[str, TagPattern] = {}


def tag_pattern(spec: TagLike) -> TagPattern:
    """Return the cached ``TagPattern`` for ``spec``."""
    key = str(spec)
    pattern = _PATTERNS.get(key)
    if pattern is None:
        pattern = _PATTERNS[key] = TagPattern(key)
    return pattern
