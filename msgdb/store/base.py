"""Message store interface."""
from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Message:
    """A text blob held by the message store under an immutable id."""
    id: int
    text: str


class MessageStore(ABC):
    """Async append/edit/delete store of text messages.

    Implementations raise MessageNotFoundError from fetch, replace and remove
    when the id is unknown, and StoreError when the backend itself fails.
    """

    @abstractmethod
    async def fetch(self, message_id: int) -> Message:
        """Return the message with the given id."""

    @abstractmethod
    async def post(self, text: str) -> Message:
        """Store a new message and return it with its assigned id."""

    @abstractmethod
    async def replace(self, message_id: int, text: str) -> Message:
        """Replace the text of an existing message in place."""

    @abstractmethod
    async def remove(self, message_id: int) -> None:
        """Delete a message."""

    async def close(self):
        """Release backend resources."""
