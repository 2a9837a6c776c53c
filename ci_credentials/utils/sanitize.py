import unicodedata
from typing import Optional

SANITIZATION_CHARACTER = "_"
ALLOWED_SYMBOLS = frozenset("_.:/=+-@")


def _is_allowed(char: str) -> bool:
    # Letters, numbers and space separators
    return unicodedata.category(char)[0] in ("L", "N", "Z") or char in ALLOWED_SYMBOLS


def sanitize(value: str, max_length: Optional[int] = None) -> str:
    """
    Replace characters that are unsafe in identifiers with an underscore.

    Brackets are always replaced, so a sanitized value can never be read as
    a profile header.

    Args:
        value: The raw string, e.g. a GitHub actor or workflow name
        max_length: Optional maximum length of the result

    Returns:
        str: The sanitized string
    """
    sanitized = "".join(
        char if _is_allowed(char) else SANITIZATION_CHARACTER for char in value
    )
    if max_length is not None:
        sanitized = sanitized[:max_length]
    return sanitized
