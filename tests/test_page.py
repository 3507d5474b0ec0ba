"""
Page codec tests.

Tests cover:
- Header encoding and decoding
- Index page entries
- Record page owner line and value chunks
- Malformed page text
"""
import pytest
from msgdb.core.exceptions import ParseError
from msgdb.core.page import (
    Header, IndexPage, RecordPage,
    encode_header, decode_header,
    encode_index_page, decode_index_page,
    encode_record_page, decode_record_page,
    split_value,
)


class TestHeader:
    """Test header line encoding."""

    def test_encode_chain_ends(self):
        assert encode_header(Header('users', 0, None, None)) == 'users 0 null null'

    def test_encode_interior(self):
        assert encode_header(Header('users', 2, 11, 15)) == 'users 2 11 15'

    def test_decode(self):
        header = decode_header('settings 1 7 null')
        assert header == Header('settings', 1, 7, None)

    def test_non_numeric_pointers_decode_to_none(self):
        header = decode_header('k 0 undefined NaN')
        assert header.prev_id is None
        assert header.next_id is None

    def test_malformed_pointer(self):
        with pytest.raises(ParseError):
            decode_header('k 0 12x null')

    def test_malformed_page_index(self):
        with pytest.raises(ParseError):
            decode_header('k zero null null')

    def test_missing_fields(self):
        with pytest.raises(ParseError):
            decode_header('k 0 null')


class TestIndexPage:
    """Test index page encoding."""

    def test_encode_entries(self):
        page = IndexPage(Header('db', 0, None, None), {'users': 4, 'posts': 9})
        assert encode_index_page(page) == 'db 0 null null\nusers 4\nposts 9'

    def test_encode_empty(self):
        assert encode_index_page(IndexPage(Header('users', 0, None, None))) == 'users 0 null null'

    def test_decode(self):
        page = decode_index_page('users 1 3 null\nalice 10\nbob 12\n')
        assert page.header == Header('users', 1, 3, None)
        assert page.entries == {'alice': 10, 'bob': 12}

    def test_decode_malformed_entry(self):
        with pytest.raises(ParseError):
            decode_index_page('users 0 null null\nalice ten')

    def test_decode_empty_text(self):
        with pytest.raises(ParseError):
            decode_index_page('')


class TestRecordPage:
    """Test record page encoding."""

    def test_head_page_has_owner_line(self):
        page = RecordPage(Header('alice', 0, None, 31), '{"age": 3', owner=('users', 4))
        assert encode_record_page(page) == 'alice 0 null 31\nusers 4\n{"age": 3'

    def test_continuation_page_has_no_owner_line(self):
        page = RecordPage(Header('alice', 1, 30, None), '0}')
        assert encode_record_page(page) == 'alice 1 30 null\n0}'

    def test_decode_head(self):
        page = decode_record_page('alice 0 null null\nusers 4\n[1, 2]')
        assert page.owner == ('users', 4)
        assert page.value == '[1, 2]'
        assert page.is_head

    def test_decode_continuation_keeps_newlines(self):
        page = decode_record_page('alice 1 30 null\nfirst\nsecond')
        assert page.owner is None
        assert page.value == 'first\nsecond'

    def test_decode_head_without_owner(self):
        with pytest.raises(ParseError):
            decode_record_page('alice 0 null null')

    def test_head_requires_owner(self):
        with pytest.raises(ValueError):
            encode_record_page(RecordPage(Header('alice', 0, None, None), '1'))


class TestSplitValue:
    """Test value chunking."""

    def test_small_value_is_one_chunk(self):
        assert split_value('"hello"', 3072) == ['"hello"']

    def test_exact_multiple(self):
        chunks = split_value('x' * 6144, 3072)
        assert [len(c) for c in chunks] == [3072, 3072]

    def test_large_value(self):
        chunks = split_value('x' * 10000, 3072)
        assert len(chunks) == 4
        assert ''.join(chunks) == 'x' * 10000
