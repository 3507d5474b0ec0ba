"""Connection handler for individual clients."""
import logging
import socket
from typing import Callable

from ..utils.config import Config

logger = logging.getLogger(__name__)


class ConnectionHandler:
    """Reads newline-delimited requests from one client and writes responses."""

    def __init__(self, client_socket: socket.socket, addr, message_processor: Callable[[bytes], bytes]):
        self.socket = client_socket
        self.addr = addr
        self.process_message = message_processor
        self.buffer = b''

    def handle(self):
        """Handle client connection until the peer closes it."""
        try:
            with self.socket:
                while True:
                    chunk = self.socket.recv(Config.CONNECTION_RECV_BUFFER)
                    if not chunk:
                        break

                    self.buffer += chunk

                    while Config.MESSAGE_DELIMITER in self.buffer:
                        message, self.buffer = self.buffer.split(Config.MESSAGE_DELIMITER, 1)
                        response = self.process_message(message)
                        if response is None:
                            logger.warning("[MessageServer] No response for request: %r", message[:50])
                            response = b'ERROR: Internal server error'
                        self.socket.sendall(response + Config.MESSAGE_DELIMITER)
        except OSError as e:
            logger.warning("[MessageServer] Connection error with %s: %s", self.addr, e)
