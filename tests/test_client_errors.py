"""Tests for remote store error handling."""
import pytest
from msgdb import MessageDB, RemoteMessageStore, StoreError


class TestClientErrors:
    """Test client error handling."""

    @pytest.mark.asyncio
    async def test_connection_refused(self):
        """Test that connection refused raises StoreError."""
        store = RemoteMessageStore(host='localhost', port=59999)  # Port unlikely to be in use

        with pytest.raises(StoreError) as exc_info:
            await store.fetch(1)

        assert "Cannot connect to server" in str(exc_info.value)
        assert "59999" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_invalid_hostname(self):
        """Test that invalid hostname raises StoreError."""
        store = RemoteMessageStore(host='this-hostname-definitely-does-not-exist-12345.invalid')

        with pytest.raises(StoreError) as exc_info:
            await store.post('x')

        assert "Cannot resolve hostname" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_store_errors_reach_engine_callers(self):
        """Test that the engine propagates store failures unmodified."""
        mdb = MessageDB(RemoteMessageStore(host='localhost', port=59998), entry_point=1)

        with pytest.raises(StoreError):
            await mdb.database('users')

    @pytest.mark.asyncio
    async def test_server_error_response(self, running_server):
        """Test that an ERROR response becomes a StoreError."""
        host, port = running_server.address
        store = RemoteMessageStore(host=host, port=port)

        response = await store._send_command(b'PING')

        with pytest.raises(StoreError) as exc_info:
            store._check(response)

        assert "Unknown command" in str(exc_info.value)
