"""msgdb - Key/Value databases on top of an append/edit/delete message store."""
__version__ = '1.0.0'

from .core.exceptions import (
    MsgDBError, ValidationError, NotFoundError, DatabaseNotFoundError,
    MessageNotFoundError, AlreadyExistsError, ParseError, DecodeError, StoreError,
)
from .core.catalog import MessageDB
from .core.database import Database
from .store import Message, MessageStore, MessageLog, LocalMessageStore
from .network.server import MessageServer
from .network.client import RemoteMessageStore

__all__ = [
    'MessageDB', 'Database',
    'Message', 'MessageStore', 'MessageLog', 'LocalMessageStore',
    'MessageServer', 'RemoteMessageStore',
    'MsgDBError', 'ValidationError', 'NotFoundError', 'DatabaseNotFoundError',
    'MessageNotFoundError', 'AlreadyExistsError', 'ParseError', 'DecodeError', 'StoreError',
]
