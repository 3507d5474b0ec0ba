"""Configuration management."""


class Config:
    """Configuration management."""

    # Paging settings
    PAGE_CAPACITY = 3072  # Max payload characters per page (header excluded)
    ENTRY_SENTINEL = 'msgdb:entry'  # Text of an uninitialized root entry point
    CATALOG_LABEL = 'db'  # Header label of catalog index pages
    NAME_PATTERN = r'^[A-Za-z0-9_-]+$'  # Allowed database and key names
    MAX_NAME_LENGTH = 255  # Longest database or key name

    # Engine settings
    ON_DUPLICATE = 'error'  # 'error' or 'ignore' for insert on an existing key
    DEBUG = False  # Emit engine debug messages to the log sink

    # Server settings
    HOST = '0.0.0.0'
    PORT = 5556
    SERVER_BACKLOG = 128  # Max queued connections
    SERVER_TIMEOUT = 1.0  # Socket timeout in seconds for shutdown responsiveness

    # Client settings
    CLIENT_HOST = 'localhost'
    CLIENT_PORT = 5556
    CLIENT_TIMEOUT = 10.0  # Seconds to wait for a server response

    # Storage settings
    DATA_DIR = './msgdb_data'
    LOG_FILENAME = 'messages.log'  # Append-only message operation log

    # Network settings
    CONNECTION_RECV_BUFFER = 4096  # Buffer size for connection handler
    MESSAGE_DELIMITER = b'\n'  # Message delimiter in protocol
