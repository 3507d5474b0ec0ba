"""Exceptions raised by the msgdb engine and message stores."""


class MsgDBError(Exception):
    """Base class for all msgdb errors."""
    pass


class ValidationError(MsgDBError, ValueError):
    """Raised when a database or key name contains disallowed characters."""
    pass


class NotFoundError(MsgDBError):
    """Raised when a key, database or message does not exist."""
    pass


class DatabaseNotFoundError(NotFoundError):
    """Raised when a database is no longer listed in the catalog."""
    pass


class MessageNotFoundError(NotFoundError):
    """Raised by a message store when a message id is unknown or deleted."""

    def __init__(self, message_id: int):
        super().__init__(f"Message {message_id} does not exist")
        self.message_id = message_id


class AlreadyExistsError(MsgDBError):
    """Raised when inserting a key or creating a database that already exists."""
    pass


class ParseError(MsgDBError):
    """Raised when page text read from the store is structurally invalid."""
    pass


class DecodeError(MsgDBError):
    """Raised when a stored value is not valid JSON."""
    pass


class StoreError(MsgDBError):
    """Raised when the message store itself fails (network, permissions, ...)."""
    pass
