"""A named database: string keys mapped to JSON values."""
import json
from typing import TYPE_CHECKING, Any, Dict, Optional

from ..utils.validation import validate_name
from .exceptions import AlreadyExistsError, DatabaseNotFoundError, DecodeError, NotFoundError
from .index import IndexChain
from .record import RecordChain, WriteStats

if TYPE_CHECKING:
    from .catalog import MessageDB


class Database:
    """Key/value operations on one database.

    Every call re-reads the catalog and the key index from the store. There
    is no locking: two writers on the same key can race, and a store failure
    in the middle of a multi-page write leaves the chain as far as it got.
    """

    def __init__(self, db: 'MessageDB', name: str, entry_id: int):
        self.db = db
        self.name = name
        self.entry_id = entry_id
        self.store = db.store
        self.log = db.log.child(f"db:{name}")
        self.index = IndexChain(self.store, entry_id, db.page_capacity, self.log)
        self.records = RecordChain(self.store, db.page_capacity, self.log)

    def __repr__(self):
        return f"Database(name={self.name!r}, entry_id={self.entry_id})"

    @property
    def owner(self):
        return (self.name, self.entry_id)

    async def _check_exists(self):
        """Fail if the database has been dropped from the catalog."""
        databases = await self.db.databases()
        if databases.get(self.name) != self.entry_id:
            raise DatabaseNotFoundError(f"Database '{self.name}' does not exist")

    async def get_record_ids(self) -> Dict[str, int]:
        """Return the key -> head page id mapping of this database."""
        await self._check_exists()
        return await self.index.resolve()

    async def _lookup(self, key: str) -> int:
        validate_name(key, 'key')
        records = await self.get_record_ids()
        if key not in records:
            raise NotFoundError(f"Key '{key}' does not exist in '{self.name}'")
        return records[key]

    def _decode(self, key: str, text: str) -> Any:
        try:
            return json.loads(text)
        except ValueError as e:
            raise DecodeError(f"Value of '{key}' is not valid JSON: {e}") from e

    async def get(self, key: str) -> Any:
        """Return the value stored under key."""
        head_id = await self._lookup(key)
        return self._decode(key, await self.records.read(head_id))

    async def get_all(self) -> Dict[str, Any]:
        """Return every key and its value."""
        records = await self.get_record_ids()
        result = {}
        for key, head_id in records.items():
            result[key] = self._decode(key, await self.records.read(head_id))
        return result

    async def exists(self, key: str) -> bool:
        """Return True if key is present."""
        validate_name(key, 'key')
        return key in await self.get_record_ids()

    async def insert(self, key: str, value: Any) -> Optional[int]:
        """Add a new record. Returns the id of its head page.

        With the 'ignore' duplicate policy an existing key is left untouched
        and None is returned.
        """
        validate_name(key, 'key')
        self.index.check_fits(key)
        records = await self.get_record_ids()
        if key in records:
            if self.db.on_duplicate == 'ignore':
                self.log(f"Key '{key}' already exists. Cannot be re-added")
                return None
            raise AlreadyExistsError(f"Key '{key}' already exists in '{self.name}'")

        value_text = json.dumps(value)
        head_id = await self.records.create(key, value_text, self.owner)
        await self.index.append(key, head_id)

        self.log(f"New record added: '{key}' {len(value_text.encode())} bytes")
        return head_id

    async def modify(self, key: str, value: Any) -> WriteStats:
        """Replace the value of an existing record."""
        head_id = await self._lookup(key)
        value_text = json.dumps(value)
        stats = await self.records.write(head_id, value_text, self.owner)

        self.log(f"Record modified: '{key}' {len(value_text.encode())} bytes")
        return stats

    async def delete(self, key: str):
        """Delete a record and its index entry."""
        head_id = await self._lookup(key)
        await self.records.delete_chain(head_id)
        await self.index.remove(key)
        self.log(f"Deleted '{key}'")

    async def clear(self) -> int:
        """Delete every record. Returns the number of deleted records."""
        records = await self.get_record_ids()
        for head_id in records.values():
            await self.records.delete_chain(head_id)
        await self.index.truncate()
        self.log(f"Cleared {len(records)} records")
        return len(records)
