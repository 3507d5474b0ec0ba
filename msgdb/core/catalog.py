"""Top-level catalog of databases rooted at the entry point message."""
from typing import Dict, Optional

from ..store.base import MessageStore
from ..utils.config import Config
from ..utils.log import DebugLog, LogSink
from ..utils.validation import validate_name
from .database import Database
from .exceptions import AlreadyExistsError, DatabaseNotFoundError, NotFoundError, ParseError
from .index import IndexChain
from .page import Header, IndexPage, decode_index_page, encode_index_page

DUPLICATE_POLICIES = ('error', 'ignore')


class MessageDB:
    """Named databases stored in a message store.

    Args:
        store: an initialized MessageStore client.
        entry_point: id of the root message. It holds either the sentinel
            text (uninitialized) or the head page of the catalog index.
        debug: emit debug messages to log_sink.
        log_sink: callable receiving debug messages (default: logging).
        on_duplicate: 'error' to raise AlreadyExistsError on a duplicate
            insert, 'ignore' to log and skip it.
        page_capacity: payload characters per page.
    """

    def __init__(self, store: MessageStore, entry_point: int, debug: Optional[bool] = None,
                 log_sink: Optional[LogSink] = None, on_duplicate: Optional[str] = None,
                 page_capacity: Optional[int] = None):
        self.store = store
        self.entry_point = entry_point
        self.on_duplicate = on_duplicate or Config.ON_DUPLICATE
        if self.on_duplicate not in DUPLICATE_POLICIES:
            raise ValueError(f"on_duplicate must be one of {DUPLICATE_POLICIES}")
        self.page_capacity = page_capacity or Config.PAGE_CAPACITY
        self.log = DebugLog('MessageDB', Config.DEBUG if debug is None else debug, log_sink)
        self.catalog = IndexChain(store, entry_point, self.page_capacity, self.log)
        self.initialized = False

    @staticmethod
    async def create_entry_point(store: MessageStore) -> int:
        """Post a fresh sentinel entry point and return its id."""
        message = await store.post(Config.ENTRY_SENTINEL)
        return message.id

    async def initialize(self):
        """Turn a sentinel entry point into an empty catalog."""
        if self.initialized:
            return
        message = await self.store.fetch(self.entry_point)
        if message.text.strip().lower() == Config.ENTRY_SENTINEL:
            self.log("Initiating new database catalog")
            head = IndexPage(header=Header(Config.CATALOG_LABEL, 0, None, None))
            await self.store.replace(self.entry_point, encode_index_page(head))
            self.log("Created entry point")
        else:
            try:
                decode_index_page(message.text)
            except ParseError as e:
                raise ParseError(f"Entry point {self.entry_point} is not a catalog page: {e}") from e
            self.log("Connected to catalog")
        self.initialized = True

    async def databases(self) -> Dict[str, int]:
        """Return the database name -> index head id mapping."""
        await self.initialize()
        return await self.catalog.resolve()

    async def has_database(self, name: str) -> bool:
        validate_name(name, 'database name')
        return name in await self.databases()

    async def create_database(self, name: str) -> Database:
        """Create an empty database."""
        validate_name(name, 'database name')
        self.catalog.check_fits(name)
        databases = await self.databases()
        if name in databases:
            raise AlreadyExistsError(f"Database '{name}' already exists")

        head = IndexPage(header=Header(name, 0, None, None))
        message = await self.store.post(encode_index_page(head))
        await self.catalog.append(name, message.id)

        self.log(f"Created database '{name}'")
        return Database(self, name, message.id)

    async def database(self, name: str) -> Database:
        """Select a database, creating it if it does not exist."""
        validate_name(name, 'database name')
        self.catalog.check_fits(name)
        databases = await self.databases()
        if name not in databases:
            self.log(f"Database '{name}' does not exist. Creating...")
            return await self.create_database(name)
        return Database(self, name, databases[name])

    async def get_database(self, name: str) -> Database:
        """Select an existing database without creating it."""
        validate_name(name, 'database name')
        databases = await self.databases()
        if name not in databases:
            raise DatabaseNotFoundError(f"Database '{name}' does not exist")
        return Database(self, name, databases[name])

    async def delete_database(self, name: str):
        """Delete a database with all of its records and index pages."""
        validate_name(name, 'database name')
        databases = await self.databases()
        if name not in databases:
            raise NotFoundError(f"Database '{name}' does not exist")

        database = Database(self, name, databases[name])
        await database.clear()
        await self.store.remove(database.entry_id)
        await self.catalog.remove(name)
        self.log(f"Deleted database '{name}'")
