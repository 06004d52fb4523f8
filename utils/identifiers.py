import re
from typing import Tuple

from core.exceptions import InvalidArgument

IDENTIFIER_PATTERN = re.compile(r"[A-Za-z0-9_-]{1,64}")

def validate_identifier(value, field: str = "user_id") -> str:
    """Return the identifier unchanged, or raise InvalidArgument if it is malformed."""
    if not isinstance(value, str) or not IDENTIFIER_PATTERN.fullmatch(value):
        raise InvalidArgument(f"Malformed identifier for {field}: {value!r}")
    return value

def dyad_key(user_a: str, user_b: str) -> str:
    """Key shared by both orderings of a pair."""
    first, second = sorted_pair(user_a, user_b)
    return f"{first}:{second}"

def sorted_pair(user_a: str, user_b: str) -> Tuple[str, str]:
    return (user_a, user_b) if user_a <= user_b else (user_b, user_a)
