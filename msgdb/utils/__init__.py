"""Shared utilities: configuration, name validation and debug logging."""
from .config import Config
from .log import DebugLog
from .validation import is_clean, validate_name

__all__ = ['Config', 'DebugLog', 'is_clean', 'validate_name']
