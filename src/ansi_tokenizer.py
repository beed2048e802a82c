"""
ANSI Tokenizer - Splits terminal output into literal text and escape sequence segments
Single left-to-right pass; never fails and never lets a raw ESC byte through as text
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterator, List

logger = logging.getLogger(__name__)

ESC = '\x1b'

# OSC (window title etc.) terminated by BEL or ST; a nested ESC aborts it
OSC_REGEX = re.compile(r'\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)')


@dataclass(frozen=True)
class Segment:
    """One run of input: literal text or an escape sequence"""
    kind: str
    text: str
    params: str = ''
    command: str = ''

    @property
    def is_text(self) -> bool:
        return self.kind == 'text'

    @property
    def is_sgr(self) -> bool:
        return self.kind == 'escape' and self.command == 'm'


def _is_param_byte(ch: str) -> bool:
    return '\x30' <= ch <= '\x3f'


def _is_intermediate_byte(ch: str) -> bool:
    return '\x20' <= ch <= '\x2f'


def _is_final_byte(ch: str) -> bool:
    return 'A' <= ch <= 'Z' or 'a' <= ch <= 'z'


def tokenize(text: str) -> Iterator[Segment]:
    """
    Yield segments of text in order
    Adjacent literal characters are coalesced into a single text segment
    """
    pending: List[str] = []
    length = len(text)
    i = 0

    def flush():
        if pending:
            run = ''.join(pending)
            pending.clear()
            return Segment('text', run)
        return None

    while i < length:
        if text[i] != ESC:
            j = text.find(ESC, i)
            if j == -1:
                j = length
            pending.append(text[i:j])
            i = j
            continue

        nxt = text[i + 1] if i + 1 < length else ''

        if nxt == '[':
            j = i + 2
            while j < length and _is_param_byte(text[j]):
                j += 1
            params_end = j
            while j < length and _is_intermediate_byte(text[j]):
                j += 1

            if j < length and _is_final_byte(text[j]):
                segment = flush()
                if segment:
                    yield segment
                yield Segment('escape', text[i:j + 1], params=text[i + 2:params_end], command=text[j])
                i = j + 1
            else:
                # Unterminated: keep what was consumed as text, minus the ESC byte
                logger.debug(f"Unterminated escape sequence at offset {i}")
                pending.append(text[i + 1:j])
                i = j

        elif nxt == ']':
            match = OSC_REGEX.match(text, i)
            if match:
                segment = flush()
                if segment:
                    yield segment
                yield Segment('escape', match.group(0))
                i = match.end()
            else:
                logger.debug(f"Unterminated OSC sequence at offset {i}")
                i += 1

        elif nxt and '\x40' <= nxt <= '\x5f':
            # Two-byte escape (ESC 7, ESC M, ...)
            segment = flush()
            if segment:
                yield segment
            yield Segment('escape', text[i:i + 2])
            i += 2

        else:
            # Lone ESC
            i += 1

    segment = flush()
    if segment:
        yield segment
