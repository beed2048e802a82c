#!/usr/bin/env python3
"""
ANSI to HTML Converter - Escaped, balanced, non-nested style regions
Tokenizes the input, tracks SGR style state and hands each text run to an emitter
"""

import logging
from typing import List, Optional

from ansi_detect import has_ansi_codes
from ansi_tokenizer import ESC, tokenize
from converter_config import ConverterConfig
from html_emitter import HtmlEmitter, PlainTextEmitter, StyleEmitter
from sgr_state import DEFAULT_STATE, apply_sgr, parse_params

logger = logging.getLogger(__name__)

__all__ = ["AnsiToHtml", "ansi_to_html", "has_ansi_codes", "strip_ansi_codes"]


class AnsiToHtml:
    """
    Convert ANSI escape sequences to styled markup

    The instance only holds configuration and the emitter; all scan state lives
    inside convert(), so one instance can serve concurrent callers.
    """

    def __init__(self, config: Optional[ConverterConfig] = None, emitter: Optional[StyleEmitter] = None):
        self.config = config or ConverterConfig()
        self.emitter = emitter or HtmlEmitter(self.config)

    def _render_text(self, text: str) -> str:
        """Escape a literal run, turning newlines into line breaks when configured"""
        if self.config.newline and '\n' in text:
            return self.emitter.line_break().join(self.emitter.escape(part) for part in text.split('\n'))
        return self.emitter.escape(text)

    def convert(self, text: str) -> str:
        """Convert ANSI text to markup"""
        if not text:
            return ''

        # No escape byte at all: escaped input, zero added markup
        if ESC not in text:
            return self._render_text(text)

        result: List[str] = []
        state = DEFAULT_STATE
        region = None  # state of the currently open region, if any

        for segment in tokenize(text):
            if segment.is_text:
                if region is not None and region != state:
                    result.append(self.emitter.close_region(region))
                    region = None
                if region is None and not state.is_default():
                    result.append(self.emitter.open_region(state))
                    region = state
                result.append(self._render_text(segment.text))
            elif segment.is_sgr:
                state = apply_sgr(state, parse_params(segment.params))
            else:
                logger.debug(f"Dropping non-SGR escape sequence {segment.text!r}")

        if region is not None:
            result.append(self.emitter.close_region(region))

        return ''.join(result)


# Global instances
converter = AnsiToHtml()
plain_converter = AnsiToHtml(emitter=PlainTextEmitter())


def ansi_to_html(text: str) -> str:
    """Convert ANSI escape codes to HTML spans with inline styles; always HTML-safe"""
    return converter.convert(text)


def strip_ansi_codes(text: str) -> str:
    """Remove all escape sequences, returning the plain (unescaped) text"""
    return plain_converter.convert(text)
