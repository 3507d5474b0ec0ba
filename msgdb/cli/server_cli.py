"""Server CLI."""
import argparse
import logging
import sys

from msgdb.network.server import MessageServer
from msgdb.utils.config import Config


def main():
    """Main entry point for server CLI."""
    parser = argparse.ArgumentParser(description='msgdb message store server')
    parser.add_argument('--host', default=Config.HOST, help=f'Server host (default: {Config.HOST})')
    parser.add_argument('--port', type=int, default=Config.PORT, help=f'Server port (default: {Config.PORT})')
    parser.add_argument('--data-dir', default=Config.DATA_DIR, help=f'Data directory (default: {Config.DATA_DIR})')
    parser.add_argument('--in-memory', action='store_true', help='Keep messages in memory only')
    parser.add_argument('--verbose', '-v', action='store_true', help='Log every connection error')
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(message)s',
    )

    try:
        server = MessageServer(args.host, args.port, args.data_dir, in_memory=args.in_memory)
        server.start()
    except KeyboardInterrupt:
        print("\nShutdown requested... exiting")
        sys.exit(0)
    except OSError as e:
        print(f"Error starting server: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
