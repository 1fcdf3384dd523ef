"""
Unit tests for Field construction, accessors and rendering.
"""

import warnings

import pytest

from marcrec import (
    Field,
    InvalidIndicatorCoerced,
    InvalidTag,
    MissingSubfields,
    NotControlField,
    NotDataField,
    NotIndicatorField,
    Subfield,
)


class TestFieldConstruction:
    """Test creating control and data fields."""

    def test_control_field_with_data_keyword(self):
        field = Field('001', data='ocm12345')
        assert field.tag == '001'
        assert field.data == 'ocm12345'
        assert field.is_control_field()

    def test_control_field_with_positional_data(self):
        field = Field('008', '200101s2020    xxu')
        assert field.data == '200101s2020    xxu'

    def test_control_field_rejects_data_field_arguments(self):
        with pytest.raises(ValueError):
            Field('001', '1', '0', [('a', 'x')])
        with pytest.raises(ValueError):
            Field('001', subfields=[('a', 'x')])
        with pytest.raises(ValueError):
            Field('001', indicators=['1', '0'], data='x')
        with pytest.raises(ValueError):
            Field('001', 'x', data='y')

    def test_integer_tag_is_accepted(self):
        field = Field(245, '1', '0', [('a', 'Title')])
        assert field.tag == '245'

    @pytest.mark.parametrize('tag', ['1', '01', '0011', 'abc', '24a', '', 1, None])
    def test_invalid_tag_fails(self, tag):
        with pytest.raises(InvalidTag):
            Field(tag, data='x')

    def test_data_field_with_pairs(self):
        field = Field('245', '1', '0', [('a', 'Raccoons and ripe corn /'), ('c', 'Jim Arnosky.')])
        assert field.indicator(1) == '1'
        assert field.indicator(2) == '0'
        assert field.subfields() == [
            Subfield('a', 'Raccoons and ripe corn /'),
            Subfield('c', 'Jim Arnosky.'),
        ]

    def test_data_field_with_indicators_keyword(self):
        field = Field('245', indicators=['0', '4'], subfields=[Subfield('a', 'The title')])
        assert field.indicators == ('0', '4')

    def test_default_indicators_are_blank(self):
        field = Field('500', subfields=[('a', 'General note')])
        assert field.indicators == (' ', ' ')

    def test_data_field_requires_subfields(self):
        with pytest.raises(MissingSubfields):
            Field('245', '1', '0')

    def test_data_field_with_empty_subfield_list(self):
        with pytest.raises(MissingSubfields):
            Field('245', '1', '0', [])

    def test_invalid_indicator_is_coerced_with_warning(self):
        with pytest.warns(InvalidIndicatorCoerced):
            field = Field('245', 'x', '0', [('a', 'Title')])
        assert field.indicator(1) == ' '
        assert field.indicator(2) == '0'
        assert len(field.warnings) == 1
        assert '"x"' in field.warnings[0]

    def test_valid_indicators_raise_no_warning(self):
        with warnings.catch_warnings():
            warnings.simplefilter('error')
            field = Field('245', '9', '0', [('a', 'Title')])
        assert field.indicator(1) == '9'
        assert field.warnings == []


class TestFieldAccessors:
    """Test subfield and indicator access."""

    def test_subfield_returns_first_match(self):
        field = Field('245', '1', '0', [('a', 'First'), ('b', 'Other'), ('a', 'Second')])
        assert field.subfield('a') == 'First'
        assert field['a'] == 'First'

    def test_subfield_not_found_returns_none(self):
        field = Field('245', '1', '0', [('a', 'Title')])
        assert field.subfield('z') is None
        assert field['z'] is None
        assert 'z' not in field
        assert 'a' in field

    def test_get_subfields_keeps_order(self):
        field = Field('650', ' ', '0', [('a', 'Corn.'), ('x', 'History'), ('a', 'Maize.')])
        assert field.get_subfields('a') == ['Corn.', 'Maize.']
        assert field.get_subfields('a', 'x') == ['Corn.', 'History', 'Maize.']

    def test_subfields_returns_copy(self):
        field = Field('245', '1', '0', [('a', 'Title')])
        field.subfields().append(Subfield('b', 'Nope'))
        assert len(field.subfields()) == 1

    def test_add_subfields_returns_count(self):
        field = Field('245', '1', '0', [('a', 'Raccoons')])
        assert field.add_subfields(('a', '1st ed.'), Subfield('c', 'Jim Arnosky.')) == 2
        assert [sf.code for sf in field.subfields()] == ['a', 'a', 'c']

    def test_add_subfield_single(self):
        field = Field('245', '1', '0', [('a', 'Raccoons')])
        field.add_subfield('b', 'and corn')
        assert field.subfield('b') == 'and corn'

    def test_indicator_number_out_of_range(self):
        field = Field('245', '1', '0', [('a', 'Title')])
        with pytest.raises(ValueError):
            field.indicator(3)

    def test_set_data_on_control_field(self):
        field = Field('001', data='old')
        field.data = 'new'
        assert field.data == 'new'


class TestFieldKindErrors:
    """Operations that only make sense for one kind of field."""

    def test_indicator_on_control_field(self):
        with pytest.raises(NotIndicatorField):
            Field('001', data='x').indicator(1)

    def test_subfield_on_control_field(self):
        with pytest.raises(NotDataField):
            Field('001', data='x').subfield('a')

    def test_add_subfields_on_control_field(self):
        with pytest.raises(NotDataField):
            Field('001', data='x').add_subfields(('a', 'y'))

    def test_data_on_data_field(self):
        field = Field('245', '1', '0', [('a', 'Title')])
        with pytest.raises(NotControlField):
            field.data
        with pytest.raises(NotControlField):
            field.data = 'x'

    def test_tag_is_read_only(self):
        field = Field('245', '1', '0', [('a', 'Title')])
        with pytest.raises(AttributeError):
            field.tag = '246'


class TestFieldRendering:
    """Test display and binary forms."""

    def test_control_field_as_string(self):
        assert Field('001', data='ocm12345').as_string() == '001     ocm12345'

    def test_data_field_as_string(self):
        field = Field('245', '1', '0', [('a', 'Raccoons and ripe corn /'), ('c', 'Jim Arnosky.')])
        assert field.as_string() == (
            '245 10 _aRaccoons and ripe corn /\n'
            '       _cJim Arnosky.'
        )
        assert str(field) == field.as_string()

    def test_control_field_as_marc(self):
        assert Field('001', data='ocm12345').as_marc() == b'ocm12345\x1e'

    def test_data_field_as_marc(self):
        field = Field('245', '1', '0', [('a', 'Title'), ('c', 'Author')])
        assert field.as_marc() == b'10\x1faTitle\x1fcAuthor\x1e'

    def test_as_marc_encodes_utf8(self):
        field = Field('100', '1', ' ', [('a', 'Dvořák')])
        assert field.as_marc() == b'1 \x1fa' + 'Dvořák'.encode('utf-8') + b'\x1e'

    def test_equality_is_by_content(self):
        a = Field('650', ' ', '0', [('a', 'Corn.')])
        b = Field('650', ' ', '0', [('a', 'Corn.')])
        assert a == b
        assert a is not b
        assert a != Field('650', ' ', '0', [('a', 'Maize.')])
