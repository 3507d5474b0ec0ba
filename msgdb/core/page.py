"""Page encoding and decoding.

Every page is one message in the store. Its text looks like::

    <label> <page_index> <prev_id|null> <next_id|null>
    <payload lines...>

Index pages carry one ``<name> <message_id>`` line per entry. Record pages
carry the owner line ``<db_name> <db_entry_id>`` on the head page only,
followed by a chunk of the serialized value.
"""
import re
from dataclasses import dataclass, field, replace
from typing import Dict, Optional, Tuple

from .exceptions import ParseError

NULL = 'null'

_INT_RE = re.compile(r'-?\d+')


@dataclass(frozen=True)
class Header:
    """Linked-list header shared by every page."""
    label: str
    page_index: int
    prev_id: Optional[int] = None
    next_id: Optional[int] = None

    def with_next(self, next_id: Optional[int]) -> 'Header':
        return replace(self, next_id=next_id)


@dataclass
class IndexPage:
    """A fragment of a name -> message id mapping."""
    header: Header
    entries: Dict[str, int] = field(default_factory=dict)

    @property
    def body(self) -> str:
        return '\n'.join(f"{name} {message_id}" for name, message_id in self.entries.items())


@dataclass
class RecordPage:
    """A chunk of a record's serialized value.

    ``owner`` is only present on the head page (``page_index == 0``).
    """
    header: Header
    value: str
    owner: Optional[Tuple[str, int]] = None

    @property
    def is_head(self) -> bool:
        return self.header.page_index == 0


def _format_id(message_id: Optional[int]) -> str:
    return NULL if message_id is None else str(message_id)


def _parse_id(token: str) -> Optional[int]:
    """Parse a prev/next pointer. Non-numeric tokens mean "no page"."""
    if _INT_RE.fullmatch(token):
        return int(token)
    if token[:1].isdigit() or (token[:1] == '-' and token[1:2].isdigit()):
        raise ParseError(f"Malformed message id in header: '{token}'")
    return None


def _parse_int(token: str, what: str) -> int:
    if not _INT_RE.fullmatch(token):
        raise ParseError(f"Malformed {what}: '{token}'")
    return int(token)


def encode_header(header: Header) -> str:
    """Encode a header as a single line."""
    return ' '.join([
        header.label,
        str(header.page_index),
        _format_id(header.prev_id),
        _format_id(header.next_id),
    ])


def decode_header(line: str) -> Header:
    """Decode a header line."""
    parts = line.strip().split(' ')
    if len(parts) < 4 or not parts[0]:
        raise ParseError(f"Malformed page header: '{line[:80]}'")
    return Header(
        label=parts[0],
        page_index=_parse_int(parts[1], 'page index'),
        prev_id=_parse_id(parts[2]),
        next_id=_parse_id(parts[3]),
    )


def _split(text: str) -> list:
    if text is None or not text.strip():
        raise ParseError("Page text is empty: missing header line")
    return text.split('\n')


def encode_index_page(page: IndexPage) -> str:
    """Encode an index page: header line followed by entry lines."""
    header = encode_header(page.header)
    body = page.body
    return f"{header}\n{body}" if body else header


def decode_index_page(text: str) -> IndexPage:
    """Decode an index page."""
    lines = _split(text)
    header = decode_header(lines[0])
    entries = {}
    for line in lines[1:]:
        if not line.strip():
            continue
        parts = line.strip().split(' ')
        if len(parts) != 2:
            raise ParseError(f"Malformed index entry: '{line[:80]}'")
        entries[parts[0]] = _parse_int(parts[1], 'index entry id')
    return IndexPage(header=header, entries=entries)


def encode_record_page(page: RecordPage) -> str:
    """Encode a record page. The owner line is written on the head page only."""
    lines = [encode_header(page.header)]
    if page.is_head:
        if page.owner is None:
            raise ValueError("Record head page requires an owner")
        db_name, db_entry_id = page.owner
        lines.append(f"{db_name} {db_entry_id}")
    lines.append(page.value)
    return '\n'.join(lines)


def decode_record_page(text: str) -> RecordPage:
    """Decode a record page."""
    lines = _split(text)
    header = decode_header(lines[0])
    owner = None
    body_start = 1
    if header.page_index == 0:
        if len(lines) < 2:
            raise ParseError("Record head page is missing its owner line")
        parts = lines[1].strip().split(' ')
        if len(parts) != 2:
            raise ParseError(f"Malformed record owner line: '{lines[1][:80]}'")
        owner = (parts[0], _parse_int(parts[1], 'owner entry id'))
        body_start = 2
    return RecordPage(header=header, value='\n'.join(lines[body_start:]), owner=owner)


def split_value(value_text: str, capacity: int) -> list:
    """Split serialized value text into page-sized chunks (at least one)."""
    if not value_text:
        return ['']
    return [value_text[i:i + capacity] for i in range(0, len(value_text), capacity)]
