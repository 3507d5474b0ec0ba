"""Protocol parsing and formatting."""
from typing import Tuple, Optional


class Protocol:
    """Newline-delimited text protocol for message store commands.

    Requests::

        POST <text>
        FETCH <id>
        EDIT <id> <text>
        DELETE <id>

    Responses are ``OK``, ``OK <id> <text>``, ``NOT_FOUND`` or
    ``ERROR: <message>``. Message text is escaped so it never contains a
    raw newline.
    """

    @staticmethod
    def escape(data: bytes) -> bytes:
        """Escape special characters in data."""
        return data.replace(b'\\', b'\\\\').replace(b'\n', b'\\n').replace(b'\r', b'\\r').replace(b'\t', b'\\t')

    @staticmethod
    def unescape(data: bytes) -> bytes:
        """Unescape special characters in data."""
        out = bytearray()
        i = 0
        mapping = {ord('n'): b'\n', ord('r'): b'\r', ord('t'): b'\t', ord('\\'): b'\\'}
        while i < len(data):
            byte = data[i]
            if byte == ord('\\') and i + 1 < len(data) and data[i + 1] in mapping:
                out += mapping[data[i + 1]]
                i += 2
            else:
                out.append(byte)
                i += 1
        return bytes(out)

    @staticmethod
    def _parse_id(token: bytes) -> int:
        try:
            return int(token)
        except ValueError:
            raise ValueError(f'Invalid message id: {token[:20]!r}') from None

    @staticmethod
    def parse_command(message: bytes) -> Tuple[str, Optional[int], Optional[str]]:
        """
        Parse protocol message.
        Returns (command, message_id, text)
        """
        command, _, rest = message.partition(b' ')
        command = command.upper().decode('utf-8')

        if command == 'POST':
            return 'POST', None, Protocol.unescape(rest).decode('utf-8')
        elif command in ('FETCH', 'DELETE'):
            if not rest:
                raise ValueError(f'{command} requires message id')
            return command, Protocol._parse_id(rest.strip()), None
        elif command == 'EDIT':
            id_part, sep, text = rest.partition(b' ')
            if not id_part or not sep:
                raise ValueError('EDIT requires message id and text')
            return 'EDIT', Protocol._parse_id(id_part), Protocol.unescape(text).decode('utf-8')
        else:
            raise ValueError(f'Unknown command: {command}')

    @staticmethod
    def format_request(command: str, message_id: Optional[int] = None, text: Optional[str] = None) -> bytes:
        """Format a request line (without delimiter)."""
        parts = [command.encode()]
        if message_id is not None:
            parts.append(str(message_id).encode())
        if text is not None:
            parts.append(Protocol.escape(text.encode('utf-8')))
        return b' '.join(parts)

    @staticmethod
    def format_message(message_id: int, text: str) -> bytes:
        """Format a message response."""
        return b'OK ' + str(message_id).encode() + b' ' + Protocol.escape(text.encode('utf-8'))

    @staticmethod
    def parse_message(response: bytes) -> Tuple[int, str]:
        """Parse an ``OK <id> <text>`` response."""
        _, _, rest = response.partition(b' ')
        id_part, _, text = rest.partition(b' ')
        return Protocol._parse_id(id_part), Protocol.unescape(text).decode('utf-8')

    @staticmethod
    def format_ok() -> bytes:
        return b'OK'

    @staticmethod
    def format_not_found() -> bytes:
        """Format NOT_FOUND response."""
        return b'NOT_FOUND'

    @staticmethod
    def format_error(message: str) -> bytes:
        """Format error message."""
        return f'ERROR: {message}'.encode()
