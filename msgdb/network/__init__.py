"""Network layer components."""
from .server import MessageServer
from .client import RemoteMessageStore
from .protocol import Protocol

__all__ = ['MessageServer', 'RemoteMessageStore', 'Protocol']
