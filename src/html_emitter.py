"""
Style Emitters - Turn style state and literal text into output fragments
HTML emitter produces inline-styled spans; plain emitter produces bare text
"""

import html
from abc import ABC, abstractmethod
from typing import List, Optional

from converter_config import ConverterConfig
from sgr_state import Color, StyleState, build_256_color_palette


class StyleEmitter(ABC):
    """Rendering target for the converter: escaping plus region open/close markup"""

    @abstractmethod
    def escape(self, text: str) -> str:
        """Make literal text safe for the target format"""

    @abstractmethod
    def open_region(self, state: StyleState) -> str:
        """Markup that starts a region rendered with state"""

    @abstractmethod
    def close_region(self, state: StyleState) -> str:
        """Markup that ends a region opened with state"""

    def line_break(self) -> str:
        return '\n'


class PlainTextEmitter(StyleEmitter):
    """Emit literal text only, dropping all styling"""

    def escape(self, text: str) -> str:
        return text

    def open_region(self, state: StyleState) -> str:
        return ''

    def close_region(self, state: StyleState) -> str:
        return ''


class HtmlEmitter(StyleEmitter):
    """Emit HTML-escaped text wrapped in <span style="..."> regions"""

    def __init__(self, config: Optional[ConverterConfig] = None):
        self.config = config or ConverterConfig()

        # 256-color palette with configured overrides applied
        self.color_palette = build_256_color_palette()
        for index, color in self.config.colors.items():
            if 0 <= index < len(self.color_palette):
                self.color_palette[index] = color

    def escape(self, text: str) -> str:
        return html.escape(text, quote=True)

    def line_break(self) -> str:
        return '<br/>'

    def resolve_color(self, color: Color) -> str:
        """Turn a palette index or RGB triple into a CSS color"""
        if isinstance(color, tuple):
            r, g, b = color
            return f'#{r:02x}{g:02x}{b:02x}'
        return self.color_palette[color]

    def style_declarations(self, state: StyleState) -> List[str]:
        """CSS declarations for a style state, in a stable order"""
        fg = self.resolve_color(state.fg) if state.fg is not None else None
        bg = self.resolve_color(state.bg) if state.bg is not None else None

        if state.inverse:
            fg, bg = (bg or self.config.bg), (fg or self.config.fg)

        declarations = []
        if fg:
            declarations.append(f'color: {fg}')
        if bg:
            declarations.append(f'background-color: {bg}')
        if state.bold:
            declarations.append('font-weight: bold')
        if state.dim:
            declarations.append('opacity: 0.5')
        if state.italic:
            declarations.append('font-style: italic')

        decorations = []
        if state.underline:
            decorations.append('underline')
        if state.strikethrough:
            decorations.append('line-through')
        if decorations:
            declarations.append(f'text-decoration: {" ".join(decorations)}')

        return declarations

    def open_region(self, state: StyleState) -> str:
        style = '; '.join(self.style_declarations(state))
        return f'<span style="{html.escape(style, quote=True)}">'

    def close_region(self, state: StyleState) -> str:
        return '</span>'
