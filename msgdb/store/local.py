"""In-process message store."""
from typing import Optional

from .base import Message, MessageStore
from .log import MessageLog


class LocalMessageStore(MessageStore):
    """MessageStore over a MessageLog living in this process.

    Pass ``path`` to persist messages across restarts, or an existing
    ``log`` to share one table between several stores.
    """

    def __init__(self, path: Optional[str] = None, log: Optional[MessageLog] = None):
        self.log = log or MessageLog(path)

    async def fetch(self, message_id: int) -> Message:
        return Message(message_id, self.log.fetch(message_id))

    async def post(self, text: str) -> Message:
        return Message(self.log.post(text), text)

    async def replace(self, message_id: int, text: str) -> Message:
        self.log.edit(message_id, text)
        return Message(message_id, text)

    async def remove(self, message_id: int) -> None:
        self.log.delete(message_id)

    async def close(self):
        self.log.close()
