"""Free-text sanitisation"""

import re

_UNSAFE_CHARS = re.compile(r"[<>]")


def sanitize_text(value: str) -> str:
    """Trim whitespace and drop angle brackets"""
    return _UNSAFE_CHARS.sub("", value.strip())
