import colorsys
import logging
import re
from typing import Dict, Sequence, Tuple, Union
from ..core.errors import InvalidArgumentError
from ..core.modes import ColorMode

logger = logging.getLogger(__name__)

# A fully resolved, render-ready RGBA color.
ColorRGBA = Tuple[float, float, float, float]

ColorSpec = Union[str, float, Sequence[float]]

# Returned for names that cannot be resolved.
FALLBACK_COLOR: ColorRGBA = (1.0, 0.0, 1.0, 1.0)

NAMED_COLORS: Dict[str, Tuple[int, int, int]] = {
    "black": (0, 0, 0),
    "white": (255, 255, 255),
    "red": (255, 0, 0),
    "green": (0, 128, 0),
    "lime": (0, 255, 0),
    "blue": (0, 0, 255),
    "yellow": (255, 255, 0),
    "cyan": (0, 255, 255),
    "magenta": (255, 0, 255),
    "orange": (255, 165, 0),
    "purple": (128, 0, 128),
    "violet": (238, 130, 238),
    "gray": (128, 128, 128),
    "grey": (128, 128, 128),
    "hotpink": (255, 105, 180),
    "ghostwhite": (248, 248, 255),
    "dodgerblue": (30, 144, 255),
}

_FUNC_RE = re.compile(r"^(rgba?)\(([^)]*)\)$")

# Component maxima per color mode, as (c1, c2, c3, alpha).
_MODE_MAXES = {
    ColorMode.RGB: (255.0, 255.0, 255.0, 255.0),
    ColorMode.HSB: (360.0, 100.0, 100.0, 1.0),
}


def _parse_string(value: str) -> ColorRGBA:
    text = value.strip().lower()
    if text in NAMED_COLORS:
        r, g, b = NAMED_COLORS[text]
        return r / 255, g / 255, b / 255, 1.0

    if text.startswith("#"):
        digits = text[1:]
        if len(digits) == 3:
            digits = "".join(d * 2 for d in digits)
        if len(digits) in (6, 8):
            try:
                parts = [
                    int(digits[i:i + 2], 16) / 255
                    for i in range(0, len(digits), 2)
                ]
            except ValueError:
                parts = []
            if parts:
                if len(parts) == 3:
                    parts.append(1.0)
                return parts[0], parts[1], parts[2], parts[3]

    match = _FUNC_RE.match(text.replace(" ", ""))
    if match:
        func, args = match.groups()
        try:
            nums = [float(a) for a in args.split(",")]
        except ValueError:
            nums = []
        if func == "rgb" and len(nums) == 3:
            return nums[0] / 255, nums[1] / 255, nums[2] / 255, 1.0
        if func == "rgba" and len(nums) == 4:
            return nums[0] / 255, nums[1] / 255, nums[2] / 255, nums[3]

    logger.warning(f"Color '{value}' not recognized. Returning default.")
    return FALLBACK_COLOR


def parse_color(
    value: ColorSpec, mode: ColorMode = ColorMode.RGB
) -> ColorRGBA:
    """
    Resolves a color specification into a render-ready RGBA tuple.

    Strings may be a CSS color name, a hex value or an rgb()/rgba()
    function; they are not affected by the color mode. Numbers follow the
    color mode: a single value is a gray level, two values are gray and
    alpha, three or four values are full color components.
    """
    if isinstance(value, str):
        return _parse_string(value)

    if isinstance(value, (int, float)):
        components = [float(value)]
    else:
        components = [float(c) for c in value]

    m1, m2, m3, ma = _MODE_MAXES[mode]
    if len(components) in (1, 2):
        # Gray levels use the brightness (or blue) maximum.
        gray = components[0] / m3
        alpha = components[1] / ma if len(components) == 2 else 1.0
        return gray, gray, gray, alpha
    if len(components) not in (3, 4):
        raise InvalidArgumentError(
            f"Colors need 1 to 4 components, got {len(components)}"
        )

    c1, c2, c3 = components[0] / m1, components[1] / m2, components[2] / m3
    alpha = components[3] / ma if len(components) == 4 else 1.0
    if mode is ColorMode.HSB:
        c1, c2, c3 = colorsys.hsv_to_rgb(c1 % 1.0, c2, c3)
    return c1, c2, c3, alpha
