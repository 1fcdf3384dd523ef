"""
Hand-built ISO 2709 records for the test suite.

The bytes are assembled here field by field, independently of
marcrec's encoder, so that codec tests compare against a known layout.
"""

FIELD_TERMINATOR = b'\x1e'
SUBFIELD_DELIMITER = b'\x1f'
RECORD_TERMINATOR = b'\x1d'


def data_field(ind1, ind2, *subfields):
    """Build the bytes of a data field from (code, value) pairs."""
    body = (ind1 + ind2).encode('ascii')
    for code, value in subfields:
        body += SUBFIELD_DELIMITER + code.encode('ascii') + value.encode('utf-8')
    return body + FIELD_TERMINATOR


def control_field(value):
    return value.encode('utf-8') + FIELD_TERMINATOR


def build_directory_and_data(fields_data):
    """Build directory and data area from (tag, field_bytes) pairs.

    Fields are kept in the order given.

    Returns:
        Tuple of (data_area, directory)
    """
    data_area = b''
    directory = b''
    current_pos = 0

    for tag, field_bytes in fields_data:
        field_length = len(field_bytes)

        # Directory entry: tag(3) + length(4) + offset(5)
        directory += tag.encode('ascii')
        directory += f'{field_length:04d}'.encode('ascii')
        directory += f'{current_pos:05d}'.encode('ascii')

        data_area += field_bytes
        current_pos += field_length

    directory += FIELD_TERMINATOR
    return data_area, directory


def build_leader(record_length, base_address, record_type='a', bib_level='m'):
    """Build a 24-byte MARC leader."""
    leader = bytearray()
    leader.extend(f'{record_length:05d}'.encode('ascii'))      # 0-4: record length
    leader.append(ord('n'))                                     # 5: status
    leader.append(ord(record_type))                             # 6: record type
    leader.append(ord(bib_level))                               # 7: bibliographic level
    leader.append(ord(' '))                                     # 8: control type
    leader.append(ord('a'))                                     # 9: character coding
    leader.append(ord('2'))                                     # 10: indicator count
    leader.append(ord('2'))                                     # 11: subfield code count
    leader.extend(f'{base_address:05d}'.encode('ascii'))        # 12-16: base address
    leader.extend(b'   ')                                       # 17-19
    leader.extend(b'4500')                                      # 20-23
    return bytes(leader)


def build_marc_record(fields_data, record_type='a'):
    """Build a complete MARC record from (tag, field_bytes) pairs."""
    data_area, directory = build_directory_and_data(fields_data)
    base_address = 24 + len(directory)
    record_length = base_address + len(data_area) + 1

    leader = build_leader(record_length, base_address, record_type)
    return leader + directory + data_area + RECORD_TERMINATOR


def simple_book_fields():
    return [
        ('001', control_field('ocm12345')),
        ('100', data_field('1', ' ', ('a', 'Arnosky, Jim.'))),
        ('245', data_field('1', '0', ('a', 'Raccoons and ripe corn /'), ('c', 'Jim Arnosky.'))),
        ('260', data_field(' ', ' ', ('a', 'New York :'), ('b', 'Lothrop,'), ('c', '1987.'))),
        ('650', data_field(' ', '0', ('a', 'Raccoons.'))),
        ('650', data_field(' ', '0', ('a', 'Corn.'))),
    ]


def create_simple_book_record():
    """A small, well-formed book record."""
    return build_marc_record(simple_book_fields())


def create_music_record():
    """A record for a musical score with non-ASCII data."""
    return build_marc_record([
        ('008', control_field('200101s2020    xxua   j      000 0 eng d')),
        ('100', data_field('1', ' ', ('a', 'Dvořák, Antonín,'), ('d', '1841-1904.'))),
        ('245', data_field('1', '0', ('a', 'Symphonie Nr. 9'))),
    ], record_type='c')


def create_lint_sample_record():
    """The classic lint example: every kind of problem at least once."""
    return build_marc_record([
        ('100', data_field('1', '4', ('a', 'Wall, Larry.'))),
        ('110', data_field('1', ' ', ('a', "O'Reilly & Associates."))),
        ('245', data_field('9', '0',
                           ('a', 'Programming Perl /'),
                           ('a', 'Big Book of Perl /'),
                           ('c', 'Larry Wall, Tom Christiansen & Jon Orwant.'))),
        ('250', data_field(' ', ' ', ('a', '3rd ed.'))),
        ('250', data_field(' ', ' ', ('a', '3rd ed.'))),
        ('260', data_field(' ', ' ',
                           ('a', 'Cambridge, Mass. :'),
                           ('b', "O'Reilly,"),
                           ('r', '2000.'))),
    ])
