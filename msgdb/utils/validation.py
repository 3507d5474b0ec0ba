"""Name validation for databases and keys."""
import re

from ..core.exceptions import ValidationError
from .config import Config

_NAME_RE = re.compile(Config.NAME_PATTERN)


def is_clean(name: str) -> bool:
    """Return True if name only contains A-Z, a-z, 0-9, - and _."""
    return isinstance(name, str) and _NAME_RE.fullmatch(name) is not None


def validate_name(name: str, kind: str = 'key') -> str:
    """Raise ValidationError unless name is a valid database or key name."""
    if not is_clean(name):
        raise ValidationError(
            f"Invalid {kind} '{name}'. A {kind} can only contain A-Z, a-z, 0-9, - and _"
        )
    if len(name) > Config.MAX_NAME_LENGTH:
        raise ValidationError(
            f"Invalid {kind} '{name[:20]}...'. A {kind} can be at most "
            f"{Config.MAX_NAME_LENGTH} characters long"
        )
    return name
