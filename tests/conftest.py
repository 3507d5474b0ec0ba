import threading
from collections import Counter

import pytest
from msgdb import MessageDB, MessageLog, LocalMessageStore, MessageServer
from msgdb.store.base import MessageStore
from msgdb.utils.config import Config


class CountingStore(MessageStore):
    """Wraps a store and counts calls per operation."""

    def __init__(self, inner: MessageStore):
        self.inner = inner
        self.calls = Counter()

    def reset(self):
        self.calls.clear()

    async def fetch(self, message_id):
        self.calls['fetch'] += 1
        return await self.inner.fetch(message_id)

    async def post(self, text):
        self.calls['post'] += 1
        return await self.inner.post(text)

    async def replace(self, message_id, text):
        self.calls['replace'] += 1
        return await self.inner.replace(message_id, text)

    async def remove(self, message_id):
        self.calls['remove'] += 1
        return await self.inner.remove(message_id)


@pytest.fixture
def message_log():
    """In-memory message table holding a fresh sentinel entry point (id 1)."""
    log = MessageLog()
    log.post(Config.ENTRY_SENTINEL)
    return log


@pytest.fixture
def store(message_log):
    """Counting store over the in-memory message table."""
    return CountingStore(LocalMessageStore(log=message_log))


@pytest.fixture
def mdb(store):
    """MessageDB rooted at the sentinel entry point."""
    return MessageDB(store, entry_point=1)


@pytest.fixture
def running_server():
    """In-memory message server running in a background thread."""
    server = MessageServer(host='localhost', port=0, in_memory=True)
    thread = threading.Thread(target=server.start, daemon=True)
    thread.start()
    server.ready.wait(timeout=5)
    yield server
    server.stop()
    thread.join(timeout=2)
