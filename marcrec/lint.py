"""
Rule-driven validation of MARC records.

The rule table is a declarative text file (``data/lint_rules.txt``), one
paragraph per tag::

    245	NR
    ind1	01
    ind2	0-9
    a	NR
    n	R

Given the following record::

    100 14 _aWall, Larry.
    110 1  _aO'Reilly & Associates.
    245 90 _aProgramming Perl /
           _aBig Book of Perl /
           _cLarry Wall, Tom Christiansen & Jon Orwant.
    250    _a3rd ed.
    250    _a3rd ed.
    260    _aCambridge, Mass. :
           _bO'Reilly,
           _r2000.

``Lint().check_record(record)`` returns::

    1XX: Only one 1XX tag is allowed, but I found 2 of them.
    100: Indicator 2 must be blank but it's "4"
    245: Indicator 1 must be 0 or 1 but it's "9"
    245: Subfield _a is not repeatable.
    250: Field is not repeatable.
    260: Subfield _r is not allowed.
    260: Must have a subfield _c.
"""

import logging
from dataclasses import dataclass, field as dataclass_field
from functools import lru_cache
from importlib import resources
from types import MappingProxyType
from typing import Callable, Dict, FrozenSet, List, Mapping, Optional

from .exceptions import NotARecord
from .field import Field
from .record import Record
from .tags import is_control_tag, normalize_tag

logger = logging.getLogger(__name__)

RULES_RESOURCE = "lint_rules.txt"

FieldCheck = Callable[["Lint", Field], None]


@dataclass(frozen=True)
class IndicatorRule:
    """Allowed characters for one indicator position."""

    allowed: FrozenSet[str]
    description: str

    @classmethod
    def parse(cls, spec: str) -> "IndicatorRule":
        """Build a rule from ``blank``, ``013`` or ``0-9``."""
        if spec == "blank":
            return cls(frozenset(" "), "blank")

        allowed = set()
        chars = list(spec)
        i = 0
        while i < len(chars):
            if i + 2 < len(chars) and chars[i + 1] == "-":
                allowed.update(chr(c) for c in range(ord(chars[i]), ord(chars[i + 2]) + 1))
                i += 3
            else:
                allowed.add(chars[i])
                i += 1
        return cls(frozenset(allowed), _nice_list(spec))

    def accepts(self, value: str) -> bool:
        return value in self.allowed


def _nice_list(spec: str) -> str:
    """``"0-9"`` -> ``"0 thru 9"``, ``"013"`` -> ``"0, 1 or 3"``."""
    if "-" in spec:
        return spec.replace("-", " thru ", 1)
    if len(spec) == 1:
        return spec
    return ", ".join(spec[:-1]) + " or " + spec[-1]


@dataclass(frozen=True)
class LintRule:
    """Rules for one tag."""

    tag: str
    repeatable: bool
    ind1: Optional[IndicatorRule] = None
    ind2: Optional[IndicatorRule] = None
    # subfield code -> repeatable
    subfields: Mapping[str, bool] = dataclass_field(default_factory=lambda: MappingProxyType({}))

    def indicator(self, number: int) -> Optional[IndicatorRule]:
        return self.ind1 if number == 1 else self.ind2


def _repeatability(flag: str, where: str) -> bool:
    if flag == "R":
        return True
    if flag == "NR":
        return False
    raise ValueError(f'{where}: repeatability must be "R" or "NR", got "{flag}"')


def load_rules(text: str) -> Mapping[str, LintRule]:
    """Parse rule-table text into a read-only ``tag -> LintRule`` mapping.

    Raises:
        ValueError: On a malformed paragraph.
    """
    rules: Dict[str, LintRule] = {}
    paragraph: List[List[str]] = []

    def flush():
        if not paragraph:
            return
        head = paragraph[0]
        if len(head) != 2:
            raise ValueError(f"Bad rule header: {' '.join(head)!r}")
        tag = normalize_tag(head[0])
        repeatable = _repeatability(head[1], tag)
        indicators = {}
        subfields = {}
        for parts in paragraph[1:]:
            if len(parts) != 2:
                raise ValueError(f"{tag}: bad rule line {' '.join(parts)!r}")
            key, value = parts
            if key in ("ind1", "ind2"):
                indicators[key] = IndicatorRule.parse(value)
            else:
                subfields[key] = _repeatability(value, f"{tag} _{key}")
        rules[tag] = LintRule(
            tag=tag,
            repeatable=repeatable,
            ind1=indicators.get("ind1"),
            ind2=indicators.get("ind2"),
            subfields=MappingProxyType(subfields),
        )
        paragraph.clear()

    for line in text.splitlines():
        stripped = line.strip()
        if stripped.startswith("#"):
            continue
        if not stripped:
            flush()
            continue
        paragraph.append(stripped.split())
    flush()

    return MappingProxyType(rules)


@lru_cache(maxsize=None)
def default_rules() -> Mapping[str, LintRule]:
    """The packaged rule table, loaded once."""
    text = (resources.files(__package__) / "data" / RULES_RESOURCE).read_text(encoding="utf-8")
    rules = load_rules(text)
    logger.debug("Loaded %d lint rules from %s", len(rules), RULES_RESOURCE)
    return rules


def check_245(lint: "Lint", field: Field) -> None:
    if not field.subfield("a"):
        lint.warn("245: Must have a subfield _a.")


def check_260(lint: "Lint", field: Field) -> None:
    if not field.subfield("c"):
        lint.warn("260: Must have a subfield _c.")


DEFAULT_CHECKS: Mapping[str, FieldCheck] = MappingProxyType({
    "245": check_245,
    "260": check_260,
})


class Lint:
    """Checks records against a rule table.

    Extra per-tag checks are plain callables taking ``(lint, field)``; they
    report problems through ``lint.warn()``. Passing a check for a tag that
    already has one replaces it, passing ``None`` removes it::

        def check_020(lint, field):
            if not field.subfield("a"):
                lint.warn("020: Must have a subfield _a.")

        lint = Lint(checks={"020": check_020, "260": None})

    Checks only run on fields whose tag is in the rule table.

    The rule table is never modified and may be shared between instances.
    The warnings list belongs to the instance, so use one Lint per thread.
    """

    def __init__(
        self,
        rules: Optional[Mapping[str, LintRule]] = None,
        checks: Optional[Mapping[str, Optional[FieldCheck]]] = None,
    ):
        self._rules = default_rules() if rules is None else MappingProxyType(dict(rules))
        table = dict(DEFAULT_CHECKS)
        for tag, check in (checks or {}).items():
            tag = normalize_tag(tag)
            if check is None:
                table.pop(tag, None)
            else:
                table[tag] = check
        self._checks: Mapping[str, FieldCheck] = MappingProxyType(table)
        self._warnings: List[str] = []

    @property
    def rules(self) -> Mapping[str, LintRule]:
        return self._rules

    @property
    def checks(self) -> Mapping[str, FieldCheck]:
        return self._checks

    def warnings(self) -> List[str]:
        """Warnings found by the last check_record() call."""
        return list(self._warnings)

    def clear_warnings(self) -> None:
        self._warnings = []

    def warn(self, *parts: object) -> None:
        """Append a warning built from ``parts``, like ``print``."""
        self._warnings.append("".join(str(p) for p in parts))

    def check_record(self, record: Record) -> List[str]:
        """Check the record as a whole and each field in it.

        Returns the warnings for this record; they stay available through
        ``warnings()`` until the next call.

        Raises:
            NotARecord: If ``record`` is not a Record.
        """
        if not isinstance(record, Record):
            raise NotARecord(f"Must pass a Record object to check_record, got {type(record).__name__}")
        self.clear_warnings()

        one_xx = record.get_fields("1XX")
        if len(one_xx) > 1:
            self.warn("1XX: Only one 1XX tag is allowed, but I found ", len(one_xx), " of them.")

        if record.get_field("245") is None:
            self.warn("245: No 245 tag.")

        seen: Dict[str, int] = {}
        for field in record.fields():
            tag = field.tag
            rule = self._rules.get(tag)
            if rule is None:
                continue

            if not rule.repeatable and seen.get(tag):
                self.warn(tag, ": Field is not repeatable.")

            if not is_control_tag(tag):
                self._check_indicators(rule, field)
                self._check_subfields(rule, field)

            check = self._checks.get(tag)
            if check is not None:
                check(self, field)

            seen[tag] = seen.get(tag, 0) + 1

        return self.warnings()

    def _check_indicators(self, rule: LintRule, field: Field) -> None:
        for number in (1, 2):
            ind_rule = rule.indicator(number)
            if ind_rule is None:
                continue
            value = field.indicator(number)
            if not ind_rule.accepts(value):
                self.warn(
                    f'{field.tag}: Indicator {number} must be {ind_rule.description} '
                    f'but it\'s "{value}"'
                )

    def _check_subfields(self, rule: LintRule, field: Field) -> None:
        seen = set()
        for code, _ in field.subfields():
            repeatable = rule.subfields.get(code)
            if repeatable is None:
                self.warn(f"{field.tag}: Subfield _{code} is not allowed.")
            elif not repeatable and code in seen:
                self.warn(f"{field.tag}: Subfield _{code} is not repeatable.")
            seen.add(code)
