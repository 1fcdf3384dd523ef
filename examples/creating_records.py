#!/usr/bin/env python3
"""
Creating MARC records

This example builds records from scratch, writes them to an ISO 2709
file, and reads them back. Fields can be passed as Field objects or as
tuples of Field constructor arguments.
"""

import sys
import tempfile
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

try:
    import marcrec
    from marcrec import Field, MARCWriter, Record, Subfield
except ImportError:
    print("Error: marcrec not installed")
    print("Install with: pip install marcrec")
    sys.exit(1)


def simple_record():
    """
    Create a simple bibliographic record.

    Demonstrates:
    - Control fields (001, 008)
    - Author and title fields (100, 245)
    - Subject headings (650) added in a loop
    """
    print("\n" + "=" * 70)
    print("1. SIMPLE BIBLIOGRAPHIC RECORD")
    print("=" * 70 + "\n")

    record = Record(fields=[
        Field('001', data='9780061120084'),
        Field('008', data='051029s2005    xxu||||||||||||||||eng||'),
        Field('100', '1', ' ', [
            Subfield('a', 'Lee, Harper,'),
            Subfield('d', '1926-2016,'),
            Subfield('e', 'author.'),
        ]),
        Field('245', indicators=['1', '0'], subfields=[
            Subfield('a', 'To Kill a Mockingbird /'),
            Subfield('c', 'Harper Lee.'),
        ]),
    ])

    for subject in ['Psychological fiction.', 'Legal stories.']:
        record.add_field(Field('650', ' ', '0', [('a', subject)]))

    print(record.as_string())
    print()
    return record


def record_from_argument_tuples():
    """
    Create a record with add_fields() and constructor tuples.

    Shorter than building each Field by hand when the data comes from a
    spreadsheet or a database row.
    """
    print("\n" + "=" * 70)
    print("2. RECORD FROM ARGUMENT TUPLES")
    print("=" * 70 + "\n")

    record = Record()
    count = record.add_fields(
        ('001', '12345678'),
        ('020', ' ', ' ', [('a', '9780596004957')]),
        ('100', '1', ' ', [('a', 'Griffiths, David J.,'), ('d', '1942-')]),
        ('245', '1', '0', [
            ('a', 'Introduction to quantum mechanics /'),
            ('c', 'David J. Griffiths.'),
        ]),
        ('260', ' ', ' ', [('a', 'Boston :'), ('b', 'Pearson,'), ('c', '2005.')]),
        ('650', ' ', '0', [('a', 'Quantum mechanics'), ('v', 'Textbooks.')]),
    )
    print(f"Added {count} fields")
    print(f"Title:   {record.subfield('245', 'a')}")
    print(f"Author:  {record.subfield('100', 'a')}")
    print(f"Date:    {record.subfield('260', 'c')}")
    print()
    return record


def editing_fields(record):
    """
    Delete fields by identity and keep editing.

    Two fields with the same content are still two fields: deleting one
    leaves the other in place.
    """
    print("\n" + "=" * 70)
    print("3. EDITING FIELDS")
    print("=" * 70 + "\n")

    duplicate = Field('650', ' ', '0', [('a', 'Legal stories.')])
    record.add_field(duplicate)
    print(f"Subjects before: {len(record.get_fields('6XX'))}")

    record.delete_field(duplicate)
    print(f"Subjects after:  {len(record.get_fields('6XX'))}")

    record.get_field('245').add_subfield('h', '[electronic resource]')
    print(record.get_field('245').as_string())
    print()


def write_and_read_back(records):
    """Write records to a .mrc file and read them back."""
    print("\n" + "=" * 70)
    print("4. WRITING AND READING")
    print("=" * 70 + "\n")

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / 'records.mrc'
        with MARCWriter(open(path, 'wb')) as writer:
            for record in records:
                writer.write(record)
        print(f"Wrote {path.stat().st_size} bytes")

        for record in marcrec.read(path):
            print(f"  {record.leader}  {record.subfield('245', 'a')}")
    print()


def main():
    first = simple_record()
    second = record_from_argument_tuples()
    editing_fields(first)
    write_and_read_back([first, second])


if __name__ == '__main__':
    main()
