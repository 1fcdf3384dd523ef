"""
Pytest configuration and fixtures for the marcrec test suite.
"""

import io

import pytest

import sample_data


@pytest.fixture(scope="session")
def simple_book_bytes():
    """A well-formed record built by hand."""
    return sample_data.create_simple_book_record()


@pytest.fixture(scope="session")
def music_bytes():
    """A well-formed record with non-ASCII subfield data."""
    return sample_data.create_music_record()


@pytest.fixture(scope="session")
def lint_sample_bytes():
    """The classic lint example record."""
    return sample_data.create_lint_sample_record()


@pytest.fixture(scope="session")
def multi_records_bytes(simple_book_bytes, music_bytes, lint_sample_bytes):
    """Three records back to back, as in a .mrc file."""
    return simple_book_bytes + music_bytes + lint_sample_bytes


@pytest.fixture
def multi_records_io(multi_records_bytes):
    """Return the three-record stream as a file-like object."""
    return io.BytesIO(multi_records_bytes)


@pytest.fixture
def microlif_text():
    """Two MicroLIF records behind a file header."""
    return (
        "HDR\n"
        "LDR00000nam  2200000   4500^\n"
        "001ocm12345^\n"
        "1001 _aArnosky, Jim.^\n"
        "24510_aRaccoons and ripe corn /_cJim Arnosky.^\n"
        "650 0_aRaccoons.^`\n"
        "LDR00000nam  2200000   4500^\n"
        "24500_aCorn.^\n"
        "260  _aNew York :_c1987^`\n"
    )
