"""Record values stored as chains of fixed-capacity record pages."""
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..store.base import MessageStore
from ..utils.config import Config
from ..utils.log import DebugLog
from .page import Header, RecordPage, decode_record_page, encode_record_page, split_value


@dataclass
class WriteStats:
    """Store calls issued by a record write."""
    created: int = 0
    replaced: int = 0
    deleted: int = 0


@dataclass
class StoredPage:
    """A record page together with the text currently held by the store."""
    id: int
    text: str
    page: RecordPage


class RecordChain:
    """Reads and reshapes record page chains.

    Writes reuse existing pages whenever the page count does not change and
    skip pages whose text would be identical.
    """

    def __init__(self, store: MessageStore, capacity: Optional[int] = None, log: Optional[DebugLog] = None):
        self.store = store
        self.capacity = capacity or Config.PAGE_CAPACITY
        self.log = log or DebugLog('record')

    async def pages(self, head_id: int) -> List[StoredPage]:
        """Return every page of the chain starting at head_id, in order."""
        pages = []
        message_id = head_id
        while message_id is not None:
            message = await self.store.fetch(message_id)
            page = decode_record_page(message.text)
            pages.append(StoredPage(message_id, message.text, page))
            message_id = page.header.next_id
        return pages

    async def read(self, head_id: int) -> str:
        """Concatenate the value chunks of a chain."""
        return ''.join(stored.page.value for stored in await self.pages(head_id))

    async def _extend(self, tail_id: int, tail: RecordPage, chunks: List[str],
                      stats: WriteStats) -> Tuple[int, RecordPage]:
        """Post one page per chunk, each linked after the current tail."""
        for chunk in chunks:
            header = Header(tail.header.label, tail.header.page_index + 1, tail_id, None)
            page = RecordPage(header=header, value=chunk)
            message = await self.store.post(encode_record_page(page))
            stats.created += 1

            tail.header = tail.header.with_next(message.id)
            await self.store.replace(tail_id, encode_record_page(tail))
            stats.replaced += 1

            tail_id, tail = message.id, page
        return tail_id, tail

    async def create(self, key: str, value_text: str, owner: Tuple[str, int]) -> int:
        """Store a new value and return the id of its head page."""
        chunks = split_value(value_text, self.capacity)
        head = RecordPage(header=Header(key, 0, None, None), value=chunks[0], owner=owner)
        message = await self.store.post(encode_record_page(head))
        await self._extend(message.id, head, chunks[1:], WriteStats(created=1))
        return message.id

    async def write(self, head_id: int, value_text: str,
                    owner: Optional[Tuple[str, int]] = None) -> WriteStats:
        """Overwrite the value of an existing chain, growing or shrinking it."""
        stats = WriteStats()
        chunks = split_value(value_text, self.capacity)
        pages = await self.pages(head_id)
        old_count, new_count = len(pages), len(chunks)

        if new_count > old_count:
            # Link the new pages first. The old tail gets its new chunk in the
            # same write that updates its next pointer.
            tail = pages[-1]
            tail.page.value = chunks[old_count - 1]
            if tail.page.is_head and owner is not None:
                tail.page.owner = owner
            await self._extend(tail.id, tail.page, chunks[old_count:], stats)
            tail.text = encode_record_page(tail.page)
        elif new_count < old_count:
            for stored in pages[new_count:]:
                await self.store.remove(stored.id)
                stats.deleted += 1
            pages = pages[:new_count]
            last = pages[-1].page
            last.header = last.header.with_next(None)

        for stored, chunk in zip(pages, chunks):
            stored.page.value = chunk
            if stored.page.is_head and owner is not None:
                stored.page.owner = owner
            text = encode_record_page(stored.page)
            if text != stored.text:
                await self.store.replace(stored.id, text)
                stored.text = text
                stats.replaced += 1

        self.log(
            f"Chain {head_id}: {old_count} -> {new_count} pages "
            f"(+{stats.created} -{stats.deleted} ~{stats.replaced})"
        )
        return stats

    async def delete_chain(self, head_id: int) -> int:
        """Delete every page of a chain, head to tail. Returns the page count."""
        pages = await self.pages(head_id)
        for stored in pages:
            await self.store.remove(stored.id)
        return len(pages)
