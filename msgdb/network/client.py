"""Async client for a message store server."""
import asyncio
import socket

from ..core.exceptions import MessageNotFoundError, StoreError
from ..store.base import Message, MessageStore
from ..utils.config import Config
from .protocol import Protocol


class RemoteMessageStore(MessageStore):
    """MessageStore talking to a MessageServer, one connection per request."""

    def __init__(self, host: str = None, port: int = None, timeout: float = None):
        self.host = host or Config.CLIENT_HOST
        self.port = port or Config.CLIENT_PORT
        self.timeout = timeout or Config.CLIENT_TIMEOUT

    async def _send_command(self, command: bytes) -> bytes:
        """Send command and receive response."""
        try:
            reader, writer = await asyncio.wait_for(
                asyncio.open_connection(self.host, self.port), self.timeout
            )
        except socket.gaierror as e:
            raise StoreError(f"Cannot resolve hostname '{self.host}': {e}") from e
        except (OSError, asyncio.TimeoutError) as e:
            raise StoreError(f"Cannot connect to server at {self.host}:{self.port}: {e}") from e

        try:
            writer.write(command + Config.MESSAGE_DELIMITER)
            await writer.drain()
            response = await asyncio.wait_for(
                reader.readuntil(Config.MESSAGE_DELIMITER), self.timeout
            )
        except asyncio.IncompleteReadError as e:
            raise StoreError("Server closed the connection before responding") from e
        except (OSError, asyncio.TimeoutError, asyncio.LimitOverrunError) as e:
            raise StoreError(f"Request to {self.host}:{self.port} failed: {e}") from e
        finally:
            writer.close()
            try:
                await writer.wait_closed()
            except OSError:
                pass

        return response[:-len(Config.MESSAGE_DELIMITER)]

    def _check(self, response: bytes, message_id: int = None) -> bytes:
        if response == Protocol.format_not_found():
            raise MessageNotFoundError(message_id)
        if response.startswith(b'ERROR'):
            raise StoreError(response.decode('utf-8', errors='replace'))
        return response

    async def _request_message(self, command: str, message_id: int = None, text: str = None) -> Message:
        response = await self._send_command(Protocol.format_request(command, message_id, text))
        response = self._check(response, message_id)
        try:
            return Message(*Protocol.parse_message(response))
        except (ValueError, UnicodeDecodeError) as e:
            raise StoreError(f"Malformed server response: {response[:50]!r}") from e

    async def fetch(self, message_id: int) -> Message:
        return await self._request_message('FETCH', message_id)

    async def post(self, text: str) -> Message:
        return await self._request_message('POST', text=text)

    async def replace(self, message_id: int, text: str) -> Message:
        return await self._request_message('EDIT', message_id, text)

    async def remove(self, message_id: int) -> None:
        response = await self._send_command(Protocol.format_request('DELETE', message_id))
        self._check(response, message_id)
