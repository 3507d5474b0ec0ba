"""
Index chain tests.

Tests cover:
- Appending to the tail page
- Splitting into a new page when the tail is full
- Removing entries from any page
- Truncating a chain
"""
import pytest
from msgdb import ValidationError
from msgdb.core.index import IndexChain
from msgdb.core.page import decode_index_page


@pytest.fixture
def chain(message_log, store):
    """Index chain with room for two 'keyN NN' entries per page."""
    head_id = message_log.post('users 0 null null')
    return IndexChain(store, head_id, capacity=16)


class TestIndexAppend:
    """Test index append and split."""

    @pytest.mark.asyncio
    async def test_append_to_empty_head(self, chain, message_log):
        await chain.append('key1', 10)
        assert await chain.resolve() == {'key1': 10}
        assert message_log.fetch(chain.head_id) == 'users 0 null null\nkey1 10'

    @pytest.mark.asyncio
    async def test_append_splits_when_full(self, chain, store):
        await chain.append('key1', 10)
        await chain.append('key2', 11)
        store.reset()

        await chain.append('key3', 12)

        assert store.calls['post'] == 1
        pages = await chain.pages()
        assert len(pages) == 2
        (head_id, head), (tail_id, tail) = pages
        assert head.header.next_id == tail_id
        assert tail.header.prev_id == head_id
        assert tail.header.next_id is None
        assert tail.header.page_index == 1
        assert tail.header.label == 'users'
        assert tail.entries == {'key3': 12}

    @pytest.mark.asyncio
    async def test_resolve_merges_all_pages(self, chain):
        for i in range(7):
            await chain.append(f'key{i}', 20 + i)

        assert len(await chain.pages()) == 4
        assert await chain.resolve() == {f'key{i}': 20 + i for i in range(7)}

    @pytest.mark.asyncio
    async def test_append_always_targets_tail(self, chain):
        for i in range(4):
            await chain.append(f'key{i}', 20 + i)
        await chain.remove('key0')

        await chain.append('key9', 29)

        pages = await chain.pages()
        assert 'key9' not in pages[0][1].entries
        assert 'key9' in pages[-1][1].entries


class TestIndexRemove:
    """Test index removal."""

    @pytest.mark.asyncio
    async def test_remove_from_second_page(self, chain, store):
        for i in range(4):
            await chain.append(f'key{i}', 20 + i)
        store.reset()

        assert await chain.remove('key3')

        assert store.calls['replace'] == 1
        assert await chain.resolve() == {'key0': 20, 'key1': 21, 'key2': 22}

    @pytest.mark.asyncio
    async def test_remove_keeps_empty_page(self, chain):
        for i in range(3):
            await chain.append(f'key{i}', 20 + i)

        await chain.remove('key2')

        pages = await chain.pages()
        assert len(pages) == 2
        assert pages[1][1].entries == {}

    @pytest.mark.asyncio
    async def test_remove_missing_name(self, chain, store):
        await chain.append('key1', 10)
        store.reset()

        assert not await chain.remove('nope')
        assert store.calls['replace'] == 0

    @pytest.mark.asyncio
    async def test_append_entry_larger_than_page(self, chain, store):
        with pytest.raises(ValidationError):
            await chain.append('a_very_long_key_name', 10)

        assert sum(store.calls.values()) == 0
        assert await chain.resolve() == {}


class TestIndexTruncate:
    """Test index truncation."""

    @pytest.mark.asyncio
    async def test_truncate_deletes_overflow_pages(self, chain, message_log):
        for i in range(5):
            await chain.append(f'key{i}', 20 + i)
        overflow = [message_id for message_id, _ in (await chain.pages())[1:]]

        assert await chain.truncate() == 2

        head = decode_index_page(message_log.fetch(chain.head_id))
        assert head.entries == {}
        assert head.header.next_id is None
        for message_id in overflow:
            assert message_id not in message_log

    @pytest.mark.asyncio
    async def test_truncate_empty_chain_writes_nothing(self, chain, store):
        assert await chain.truncate() == 0
        assert store.calls['replace'] == 0
