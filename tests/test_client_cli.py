"""
Client CLI handler tests.

Tests cover:
- Read and update commands on a missing database
- INSERT creating the database it targets
"""
from types import SimpleNamespace

import pytest
from msgdb import DatabaseNotFoundError
from msgdb.cli.client_cli import (
    build_parser, handle_clear, handle_delete, handle_get, handle_insert,
    handle_keys, handle_modify,
)


def command(name='ghost', key='alice', value='1'):
    return SimpleNamespace(name=name, key=key, value=value)


class TestMissingDatabase:
    """Test commands against a database that does not exist."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize('handler', [handle_keys, handle_get, handle_modify, handle_delete, handle_clear])
    async def test_command_does_not_create_database(self, mdb, handler):
        with pytest.raises(DatabaseNotFoundError):
            await handler(mdb, command())

        assert await mdb.databases() == {}


class TestInsert:
    """Test INSERT through the CLI handlers."""

    @pytest.mark.asyncio
    async def test_insert_creates_database(self, mdb, capsys):
        assert await handle_insert(mdb, command(value='{"age": 30}')) == 0
        assert list(await mdb.databases()) == ['ghost']

        assert await handle_get(mdb, command()) == 0
        assert capsys.readouterr().out.splitlines() == ['OK', '{"age": 30}']

    @pytest.mark.asyncio
    async def test_keys_lists_existing_database(self, mdb, capsys):
        await handle_insert(mdb, command(key='bob'))
        await handle_insert(mdb, command(key='alice'))
        capsys.readouterr()

        await handle_keys(mdb, command())
        assert capsys.readouterr().out.splitlines() == ['alice', 'bob']

    def test_parser_reads_insert_arguments(self):
        args = build_parser().parse_args(['--entry-point', '7', 'insert', 'users', 'alice', '[1, 2]'])
        assert (args.command, args.entry_point, args.name, args.key, args.value) == \
            ('insert', 7, 'users', 'alice', '[1, 2]')
