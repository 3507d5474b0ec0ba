"""Client CLI."""
import argparse
import asyncio
import json
import logging
import sys

from msgdb.core.catalog import MessageDB
from msgdb.core.exceptions import MsgDBError
from msgdb.network.client import RemoteMessageStore
from msgdb.utils.config import Config


def _parse_value(text):
    try:
        return json.loads(text)
    except ValueError:
        raise SystemExit(f"Error: value is not valid JSON: {text}")


async def handle_databases(db, args):
    """Handle DATABASES command."""
    for name, entry_id in sorted((await db.databases()).items()):
        print(f"{name} {entry_id}")
    return 0


async def handle_create(db, args):
    """Handle CREATE command."""
    database = await db.create_database(args.name)
    print(f"{database.name} {database.entry_id}")
    return 0


async def handle_drop(db, args):
    """Handle DROP command."""
    await db.delete_database(args.name)
    print("OK")
    return 0


async def handle_keys(db, args):
    """Handle KEYS command."""
    database = await db.get_database(args.name)
    for key in sorted(await database.get_record_ids()):
        print(key)
    return 0


async def handle_get(db, args):
    """Handle GET command."""
    database = await db.get_database(args.name)
    print(json.dumps(await database.get(args.key)))
    return 0


async def handle_insert(db, args):
    """Handle INSERT command."""
    value = _parse_value(args.value)
    database = await db.database(args.name)
    head_id = await database.insert(args.key, value)
    print("EXISTS" if head_id is None else "OK")
    return 0


async def handle_modify(db, args):
    """Handle MODIFY command."""
    value = _parse_value(args.value)
    database = await db.get_database(args.name)
    await database.modify(args.key, value)
    print("OK")
    return 0


async def handle_delete(db, args):
    """Handle DELETE command."""
    database = await db.get_database(args.name)
    await database.delete(args.key)
    print("OK")
    return 0


async def handle_clear(db, args):
    """Handle CLEAR command."""
    database = await db.get_database(args.name)
    count = await database.clear()
    print(f"Deleted {count} records")
    return 0


HANDLERS = {
    'databases': handle_databases,
    'create': handle_create,
    'drop': handle_drop,
    'keys': handle_keys,
    'get': handle_get,
    'insert': handle_insert,
    'modify': handle_modify,
    'delete': handle_delete,
    'clear': handle_clear,
}


def build_parser():
    parser = argparse.ArgumentParser(description='msgdb client')
    parser.add_argument('--host', default=Config.CLIENT_HOST, help=f'Server host (default: {Config.CLIENT_HOST})')
    parser.add_argument('--port', type=int, default=Config.CLIENT_PORT, help=f'Server port (default: {Config.CLIENT_PORT})')
    parser.add_argument('--entry-point', type=int, help='Id of the root entry point message')
    parser.add_argument('--on-duplicate', choices=['error', 'ignore'], default=Config.ON_DUPLICATE,
                        help='What insert does with an existing key')
    parser.add_argument('--debug', action='store_true', help='Print engine debug messages')

    commands = parser.add_subparsers(dest='command', required=True)
    commands.add_parser('init', help='Create a new entry point and print its id')
    commands.add_parser('databases', help='List databases')
    for name in ('create', 'drop', 'keys', 'clear'):
        commands.add_parser(name).add_argument('name', help='Database name')
    for name in ('get', 'delete'):
        sub = commands.add_parser(name)
        sub.add_argument('name', help='Database name')
        sub.add_argument('key', help='Record key')
    for name in ('insert', 'modify'):
        sub = commands.add_parser(name)
        sub.add_argument('name', help='Database name')
        sub.add_argument('key', help='Record key')
        sub.add_argument('value', help='JSON value')
    return parser


async def run(args):
    store = RemoteMessageStore(args.host, args.port)

    if args.command == 'init':
        entry_point = await MessageDB.create_entry_point(store)
        print(f"Your entry point: {entry_point}")
        return 0

    if args.entry_point is None:
        print("Error: --entry-point is required (create one with 'init')", file=sys.stderr)
        return 1

    db = MessageDB(store, args.entry_point, debug=args.debug, log_sink=lambda m: print(m, file=sys.stderr),
                   on_duplicate=args.on_duplicate)
    return await HANDLERS[args.command](db, args)


def main():
    """Main entry point for client CLI."""
    args = build_parser().parse_args()
    logging.basicConfig(level=logging.WARNING)
    try:
        return asyncio.run(run(args))
    except MsgDBError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
