"""
ANSI Detection - Fast check for escape sequences so plain text can skip conversion
"""

import re

from ansi_tokenizer import ESC

# ESC [ parameters terminating letter
ANSI_REGEX = re.compile(r'\x1b\[[0-9;]*[A-Za-z]')


def has_ansi_codes(text: str) -> bool:
    """Return True if text contains at least one ESC [ ... letter sequence"""
    if ESC not in text:
        return False
    return ANSI_REGEX.search(text) is not None
