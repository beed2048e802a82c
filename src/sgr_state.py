"""
SGR State - Style state machine for ANSI Select Graphic Rendition codes
Applies color/style parameters to an immutable style state, ignoring anything it does not know
"""

import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple, Union

logger = logging.getLogger(__name__)

# A color is either a palette index (0-255) or a literal (r, g, b) triple
Color = Union[int, Tuple[int, int, int]]

# Standard 16 system colors of the xterm palette
STANDARD_COLORS = [
    '#000000', '#800000', '#008000', '#808000', '#000080', '#800080', '#008080', '#c0c0c0',
    '#808080', '#ff0000', '#00ff00', '#ffff00', '#0000ff', '#ff00ff', '#00ffff', '#ffffff'
]


def build_256_color_palette() -> List[str]:
    """Build the xterm 256-color palette as hex strings"""
    colors = list(STANDARD_COLORS)

    # 16-231: 6x6x6 color cube
    def to_level(n):
        return 0 if n == 0 else 55 + n * 40

    for i in range(216):
        r = to_level(i // 36)
        g = to_level((i % 36) // 6)
        b = to_level(i % 6)
        colors.append(f'#{r:02x}{g:02x}{b:02x}')

    # 232-255: Grayscale ramp
    for i in range(24):
        gray = 8 + i * 10
        colors.append(f'#{gray:02x}{gray:02x}{gray:02x}')

    return colors


@dataclass(frozen=True)
class StyleState:
    """Active rendering attributes at one point of the scan"""
    fg: Optional[Color] = None
    bg: Optional[Color] = None
    bold: bool = False
    dim: bool = False
    italic: bool = False
    underline: bool = False
    inverse: bool = False
    strikethrough: bool = False

    def is_default(self) -> bool:
        return self == DEFAULT_STATE


DEFAULT_STATE = StyleState()

# Parameters with more digits than this never name a code or color
MAX_PARAM_DIGITS = 9
OUT_OF_RANGE = -1

# Single-code attribute toggles
_ATTRIBUTE_CODES = {
    1: {'bold': True},
    2: {'dim': True},
    3: {'italic': True},
    4: {'underline': True},
    7: {'inverse': True},
    9: {'strikethrough': True},
    22: {'bold': False, 'dim': False},
    23: {'italic': False},
    24: {'underline': False},
    27: {'inverse': False},
    29: {'strikethrough': False},
    39: {'fg': None},
    49: {'bg': None},
}


def _parse_param(p: str) -> int:
    if not (p.isascii() and p.isdigit()):
        return 0
    if len(p) > MAX_PARAM_DIGITS:
        return OUT_OF_RANGE
    return int(p)


def parse_params(raw: str) -> List[int]:
    """
    Split an SGR parameter string on ';'
    Empty or non-numeric parameters count as 0 (reset); overlong numbers are OUT_OF_RANGE
    """
    if not raw:
        return [0]
    return [_parse_param(p) for p in raw.split(';')]


def _extended_color(params: List[int], i: int) -> Tuple[Optional[Color], int, bool]:
    """
    Read a 38/48 extended color unit starting at params[i]
    Returns (color, number of params consumed, valid)
    """
    if i + 1 >= len(params):
        return None, 1, False

    mode = params[i + 1]
    if mode == 5:
        if i + 2 >= len(params):
            return None, len(params) - i, False
        index = params[i + 2]
        return index, 3, 0 <= index <= 255

    if mode == 2:
        if i + 4 >= len(params):
            return None, len(params) - i, False
        rgb = (params[i + 2], params[i + 3], params[i + 4])
        return rgb, 5, all(0 <= c <= 255 for c in rgb)

    return None, 1, False


def apply_sgr(state: StyleState, params: List[int]) -> StyleState:
    """Apply SGR parameters left to right and return the resulting state"""
    i = 0
    while i < len(params):
        code = params[i]

        if code == 0:
            state = DEFAULT_STATE
        elif code in _ATTRIBUTE_CODES:
            state = replace(state, **_ATTRIBUTE_CODES[code])
        elif 30 <= code <= 37:
            state = replace(state, fg=code - 30)
        elif 90 <= code <= 97:
            state = replace(state, fg=code - 90 + 8)
        elif 40 <= code <= 47:
            state = replace(state, bg=code - 40)
        elif 100 <= code <= 107:
            state = replace(state, bg=code - 100 + 8)
        elif code in (38, 48):
            color, consumed, valid = _extended_color(params, i)
            if valid:
                target = 'fg' if code == 38 else 'bg'
                state = replace(state, **{target: color})
            else:
                logger.debug(f"Ignoring malformed extended color: {params[i:i + consumed]}")
            i += consumed
            continue
        else:
            logger.debug(f"Ignoring unsupported SGR code {code}")

        i += 1

    return state
