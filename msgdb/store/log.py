"""Message table backed by an append-only operation log."""
import os
import struct
import threading
import pickle
import time
from pathlib import Path
from typing import Dict, List, Any, Optional

from ..core.exceptions import MessageNotFoundError, StoreError


class MessageLog:
    """Thread-safe id -> text table with monotonically increasing ids.

    When a path is given every post/edit/delete is appended to the log file
    as ``[len(4)][pickle]`` and fsynced; opening an existing file replays it.
    Without a path the table lives in memory only.
    """

    def __init__(self, path: Optional[str] = None):
        self.path = Path(path) if path else None
        self.messages: Dict[int, str] = {}
        self.last_id = 0
        self.lock = threading.Lock()
        self.file = None

        if self.path is not None:
            self._recover()
            self.file = open(self.path, 'ab', buffering=0)

    def _recover(self):
        """Rebuild the table by replaying the log."""
        for entry in self.replay():
            op = entry['op']
            message_id = entry['id']
            if op in ('post', 'edit'):
                self.messages[message_id] = entry['text']
            elif op == 'delete':
                self.messages.pop(message_id, None)
            self.last_id = max(self.last_id, message_id)

    def replay(self) -> List[Dict[str, Any]]:
        """Read every logged operation in order."""
        if self.path is None or not self.path.exists() or self.path.stat().st_size == 0:
            return []

        entries = []
        with open(self.path, 'rb') as f:
            while True:
                length_bytes = f.read(4)
                if not length_bytes:
                    break
                length = struct.unpack('!I', length_bytes)[0]
                entry_bytes = f.read(length)
                if len(entry_bytes) < length:
                    # Torn write at the tail of the log
                    break
                entries.append(pickle.loads(entry_bytes))
        return entries

    def _log(self, operation: str, message_id: int, text: Optional[str] = None):
        if self.file is None:
            return
        entry = {
            'op': operation,
            'id': message_id,
            'text': text,
            'timestamp': time.time()
        }
        serialized = pickle.dumps(entry)
        length = struct.pack('!I', len(serialized))
        try:
            self.file.write(length + serialized)
            os.fsync(self.file.fileno())
        except (OSError, ValueError) as e:
            raise StoreError(f"Failed to write message log: {e}") from e

    def post(self, text: str) -> int:
        """Store a new message and return its id."""
        with self.lock:
            message_id = self.last_id + 1
            self._log('post', message_id, text)
            self.last_id = message_id
            self.messages[message_id] = text
            return message_id

    def fetch(self, message_id: int) -> str:
        """Return the text of a message."""
        with self.lock:
            try:
                return self.messages[message_id]
            except KeyError:
                raise MessageNotFoundError(message_id) from None

    def edit(self, message_id: int, text: str):
        """Replace the text of an existing message."""
        with self.lock:
            if message_id not in self.messages:
                raise MessageNotFoundError(message_id)
            self._log('edit', message_id, text)
            self.messages[message_id] = text

    def delete(self, message_id: int):
        """Delete a message."""
        with self.lock:
            if message_id not in self.messages:
                raise MessageNotFoundError(message_id)
            self._log('delete', message_id)
            del self.messages[message_id]

    def __contains__(self, message_id: int) -> bool:
        with self.lock:
            return message_id in self.messages

    def __len__(self) -> int:
        with self.lock:
            return len(self.messages)

    def close(self):
        """Close the log file."""
        if self.file is not None:
            try:
                self.file.close()
            except (ValueError, OSError):
                pass
            self.file = None
