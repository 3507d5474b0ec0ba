"""Message store backends."""
from .base import Message, MessageStore
from .log import MessageLog
from .local import LocalMessageStore

__all__ = ['Message', 'MessageStore', 'MessageLog', 'LocalMessageStore']
