"""Name -> message id index stored as a chain of index pages."""
from typing import Dict, List, Optional, Tuple

from ..store.base import MessageStore
from ..utils.config import Config
from ..utils.log import DebugLog
from .exceptions import ValidationError
from .page import Header, IndexPage, decode_index_page, encode_index_page

MAX_ID_WIDTH = 20  # Digits of the largest 64-bit message id


class IndexChain:
    """Index spread over a singly-linked chain of index pages.

    The chain is re-read from the store on every call; nothing is cached.
    """

    def __init__(self, store: MessageStore, head_id: int, capacity: Optional[int] = None,
                 log: Optional[DebugLog] = None):
        self.store = store
        self.head_id = head_id
        self.capacity = capacity or Config.PAGE_CAPACITY
        self.log = log or DebugLog('index')

    def check_fits(self, name: str):
        """Raise ValidationError if an entry for name could not fit on one page."""
        longest = len(name) + 1 + MAX_ID_WIDTH
        if longest > self.capacity:
            raise ValidationError(
                f"Name '{name[:20]}' is too long for a {self.capacity} character index page"
            )

    async def load(self, message_id: int) -> IndexPage:
        """Fetch and decode one index page."""
        message = await self.store.fetch(message_id)
        return decode_index_page(message.text)

    async def pages(self) -> List[Tuple[int, IndexPage]]:
        """Return every page of the chain in order as (message_id, page)."""
        pages = []
        message_id = self.head_id
        while message_id is not None:
            page = await self.load(message_id)
            pages.append((message_id, page))
            message_id = page.header.next_id
        return pages

    async def resolve(self) -> Dict[str, int]:
        """Merge the entries of every page into one mapping."""
        table = {}
        for _, page in await self.pages():
            table.update(page.entries)
        return table

    async def append(self, name: str, target_id: int):
        """Add an entry to the tail page, splitting into a new page when full.

        An entry longer than a whole page is rejected before any store call.
        """
        line = f"{name} {target_id}"
        if len(line) > self.capacity:
            raise ValidationError(
                f"Index entry for '{name[:20]}' is {len(line)} characters, "
                f"more than the page capacity of {self.capacity}"
            )
        pages = await self.pages()
        tail_id, tail = pages[-1]
        body = tail.body
        grown = f"{body}\n{line}" if body else line

        if len(grown) <= self.capacity:
            tail.entries[name] = target_id
            await self.store.replace(tail_id, encode_index_page(tail))
            return

        page = IndexPage(
            header=Header(tail.header.label, tail.header.page_index + 1, tail_id, None),
            entries={name: target_id},
        )
        message = await self.store.post(encode_index_page(page))
        tail.header = tail.header.with_next(message.id)
        await self.store.replace(tail_id, encode_index_page(tail))
        self.log(f"Index page {page.header.page_index} added to '{tail.header.label}'")

    async def remove(self, name: str) -> bool:
        """Remove an entry. Returns False if no page holds it."""
        message_id = self.head_id
        while message_id is not None:
            page = await self.load(message_id)
            if name in page.entries:
                del page.entries[name]
                await self.store.replace(message_id, encode_index_page(page))
                return True
            message_id = page.header.next_id
        return False

    async def truncate(self) -> int:
        """Empty the head page and delete every overflow page.

        Returns the number of deleted pages.
        """
        pages = await self.pages()
        head_id, head = pages[0]
        before = encode_index_page(head)
        head.entries = {}
        head.header = head.header.with_next(None)
        text = encode_index_page(head)
        if text != before:
            await self.store.replace(head_id, text)

        for message_id, _ in pages[1:]:
            await self.store.remove(message_id)
        return len(pages) - 1
