"""Core storage engine components."""
from .exceptions import (
    MsgDBError, ValidationError, NotFoundError, DatabaseNotFoundError,
    MessageNotFoundError, AlreadyExistsError, ParseError, DecodeError, StoreError,
)
from .page import Header, IndexPage, RecordPage
from .index import IndexChain
from .record import RecordChain, WriteStats
from .database import Database
from .catalog import MessageDB

__all__ = [
    'MessageDB', 'Database', 'IndexChain', 'RecordChain', 'WriteStats',
    'Header', 'IndexPage', 'RecordPage',
    'MsgDBError', 'ValidationError', 'NotFoundError', 'DatabaseNotFoundError',
    'MessageNotFoundError', 'AlreadyExistsError', 'ParseError', 'DecodeError', 'StoreError',
]
