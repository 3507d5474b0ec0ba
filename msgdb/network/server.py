"""Network server exposing a message log."""
import logging
import socket
import threading
from pathlib import Path

from ..core.exceptions import MessageNotFoundError, StoreError
from ..store.log import MessageLog
from ..utils.config import Config
from .connection import ConnectionHandler
from .protocol import Protocol

logger = logging.getLogger(__name__)


class MessageServer:
    """Message store server using a simple text protocol.

    Messages are persisted to ``<data_dir>/messages.log``; pass
    ``data_dir=None`` together with ``in_memory=True`` to keep them in memory.
    """

    def __init__(self, host: str = None, port: int = None, data_dir: str = None, in_memory: bool = False):
        self.host = host or Config.HOST
        self.port = Config.PORT if port is None else port
        if in_memory:
            self.messages = MessageLog()
        else:
            self.data_dir = Path(data_dir or Config.DATA_DIR)
            self.data_dir.mkdir(parents=True, exist_ok=True)
            self.messages = MessageLog(str(self.data_dir / Config.LOG_FILENAME))
        self.server_socket = None
        self.protocol = Protocol()
        self.running = False
        self.ready = threading.Event()

    @property
    def address(self):
        """(host, port) the server is bound to."""
        return self.server_socket.getsockname()[:2]

    def _handle_post(self, text: str) -> bytes:
        message_id = self.messages.post(text)
        return self.protocol.format_message(message_id, text)

    def _handle_fetch(self, message_id: int) -> bytes:
        text = self.messages.fetch(message_id)
        return self.protocol.format_message(message_id, text)

    def _handle_edit(self, message_id: int, text: str) -> bytes:
        self.messages.edit(message_id, text)
        return self.protocol.format_message(message_id, text)

    def _handle_delete(self, message_id: int) -> bytes:
        self.messages.delete(message_id)
        return self.protocol.format_ok()

    def _process_message(self, message: bytes) -> bytes:
        """Process client message."""
        try:
            command, message_id, text = self.protocol.parse_command(message)

            command_handlers = {
                'POST': lambda: self._handle_post(text),
                'FETCH': lambda: self._handle_fetch(message_id),
                'EDIT': lambda: self._handle_edit(message_id, text),
                'DELETE': lambda: self._handle_delete(message_id),
            }

            handler = command_handlers.get(command)
            if handler:
                return handler()

            return self.protocol.format_error(f'Unknown command: {command}')

        except MessageNotFoundError:
            return self.protocol.format_not_found()
        except (ValueError, UnicodeDecodeError) as e:
            return self.protocol.format_error(str(e))
        except StoreError as e:
            return self.protocol.format_error(f'Store error: {e}')

    def _handle_client(self, client_socket: socket.socket, addr):
        """Handle individual client connection."""
        handler = ConnectionHandler(client_socket, addr, self._process_message)
        handler.handle()

    def start(self):
        """Start the server and block until stopped."""
        try:
            self.server_socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
            self.server_socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            # Timeout lets the accept loop notice stop()
            self.server_socket.settimeout(Config.SERVER_TIMEOUT)
            self.server_socket.bind((self.host, self.port))
            self.server_socket.listen(Config.SERVER_BACKLOG)

            self.running = True
            self.ready.set()
            logger.info("[MessageServer] Listening on %s:%s", *self.address)

            try:
                while self.running:
                    try:
                        client_socket, addr = self.server_socket.accept()
                        client_thread = threading.Thread(
                            target=self._handle_client,
                            args=(client_socket, addr),
                            daemon=True
                        )
                        client_thread.start()
                    except socket.timeout:
                        continue
                    except OSError:
                        # Socket was closed
                        break
            except KeyboardInterrupt:
                logger.info("[MessageServer] Shutting down...")
        finally:
            self.stop()

    def stop(self):
        """Stop the server."""
        self.running = False
        if self.server_socket:
            try:
                self.server_socket.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass
            try:
                self.server_socket.close()
            except OSError:
                pass
        self.messages.close()
        self.ready.set()
        logger.info("[MessageServer] Server stopped")
