"""Hex colour helpers for theme variations."""

from __future__ import annotations

import math
import re

from ..models import ColorVariations

_HEX_PATTERN = re.compile(r"^[0-9A-F]{6}$", re.IGNORECASE)

VARIATION_PERCENT = 20
FALLBACK_VARIATIONS = ColorVariations(primary="#D4AF37", light="#E8C547", dark="#B89F2E")


def is_valid_hex(value: str) -> bool:
    """Return True for ``#RRGGBB`` strings (case-insensitive)."""
    return isinstance(value, str) and value.startswith("#") and bool(_HEX_PATTERN.match(value[1:]))


def lighten_hex(hex_color: str, percent: float) -> str:
    """Shift every channel toward 255 by ``percent`` of the full range."""
    return _shift(hex_color, _amount(percent))


def darken_hex(hex_color: str, percent: float) -> str:
    """Shift every channel toward 0 by ``percent`` of the full range."""
    return _shift(hex_color, -_amount(percent))


def generate_color_variations(hex_color: str) -> ColorVariations:
    """Return primary/light/dark variants, or the gold fallback for invalid input."""
    digits = hex_color.replace("#", "") if isinstance(hex_color, str) else ""
    if not _HEX_PATTERN.match(digits):
        return FALLBACK_VARIATIONS
    primary = f"#{digits.upper()}"
    return ColorVariations(
        primary=primary,
        light=lighten_hex(primary, VARIATION_PERCENT),
        dark=darken_hex(primary, VARIATION_PERCENT),
    )


def _amount(percent: float) -> int:
    # Half-up rounding, not Python's banker's rounding.
    return int(math.floor(255 * percent / 100 + 0.5))


def _shift(hex_color: str, amount: int) -> str:
    digits = hex_color.lstrip("#")
    if not _HEX_PATTERN.match(digits):
        raise ValueError(f"Invalid hex colour: {hex_color!r}")
    channels = [int(digits[index : index + 2], 16) for index in (0, 2, 4)]
    shifted = [min(255, max(0, channel + amount)) for channel in channels]
    return "#" + "".join(f"{channel:02X}" for channel in shifted)


__all__ = [
    "FALLBACK_VARIATIONS",
    "darken_hex",
    "generate_color_variations",
    "is_valid_hex",
    "lighten_hex",
]
