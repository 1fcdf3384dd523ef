#!/usr/bin/env python3
"""
Checking records with Lint

This example runs the packaged rule table over a record with several
problems, then adds a local rule and a custom per-tag check.
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

try:
    from marcrec import Field, Lint, Record, default_rules, load_rules
except ImportError:
    print("Error: marcrec not installed")
    print("Install with: pip install marcrec")
    sys.exit(1)


LOCAL_RULES = """
952	R
ind1	blank
ind2	blank
a	NR
b	NR
"""


def problem_record():
    return Record(fields=[
        Field('100', '1', '4', [('a', 'Wall, Larry.')]),
        Field('110', '1', ' ', [('a', "O'Reilly & Associates.")]),
        Field('245', '9', '0', [
            ('a', 'Programming Perl /'),
            ('a', 'Big Book of Perl /'),
            ('c', 'Larry Wall, Tom Christiansen & Jon Orwant.'),
        ]),
        Field('250', ' ', ' ', [('a', '3rd ed.')]),
        Field('250', ' ', ' ', [('a', '3rd ed.')]),
        Field('260', ' ', ' ', [
            ('a', 'Cambridge, Mass. :'),
            ('b', "O'Reilly,"),
            ('r', '2000.'),
        ]),
        Field('952', ' ', ' ', [('b', 'Main stacks')]),
    ])


def default_checks(record):
    print("=== Default rule table ===\n")
    for warning in Lint().check_record(record):
        print(f"  {warning}")
    print()


def local_checks(record):
    print("=== With local 952 rule and check ===\n")

    def check_952(lint, field):
        if not field.subfield('a'):
            lint.warn('952: Must have a call number in subfield _a.')

    rules = dict(default_rules())
    rules.update(load_rules(LOCAL_RULES))

    lint = Lint(rules=rules, checks={'952': check_952})
    for warning in lint.check_record(record):
        print(f"  {warning}")
    print()


def main():
    record = problem_record()
    print(record.as_string())
    print()
    default_checks(record)
    local_checks(record)


if __name__ == '__main__':
    main()
