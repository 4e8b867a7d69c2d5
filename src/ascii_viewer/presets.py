"""Built-in palettes, colour themes and the per-conversion options."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from .errors import ConfigurationError

DEFAULT_WIDTH = 150
DEFAULT_ASPECT_CORRECTION = 0.5


# -----------------------------
# Presets
# -----------------------------

class Palette(Enum):
    # ordered darkest -> brightest
    SIMPLE = " .:-=+*#%@"
    DETAILED = (
        " .'`^\",:;Il!i><~+_-?][}{1)(|\\/"
        "tfjrxnuvczXYUJCLQ0OZmwqpdbkhao*#MW&8%B@$"
    )

    @property
    def chars(self) -> str:
        return self.value


class Theme(Enum):
    DARK = ("#1a1a1a", "#e0e0e0", False)
    LIGHT = ("#f0f0f0", "#111111", True)

    def __init__(self, background: str, foreground: str, invert: bool):
        self.background = background
        self.foreground = foreground
        # dark text on a light page needs the ramp reversed
        self.invert = invert


# -----------------------------
# Options
# -----------------------------

@dataclass(frozen=True)
class RenderOptions:
    width: int = DEFAULT_WIDTH
    full_resolution: bool = False
    palette: Sequence[str] = Palette.SIMPLE.chars
    invert: bool = False
    aspect_correction: float = DEFAULT_ASPECT_CORRECTION
    background: str = Theme.DARK.background
    foreground: str = Theme.DARK.foreground

    def __post_init__(self):
        palette = "".join(self.palette)
        if not palette:
            raise ConfigurationError("character palette must not be empty")
        object.__setattr__(self, "palette", palette)

        if not self.full_resolution and (
            isinstance(self.width, bool) or not isinstance(self.width, int) or self.width <= 0
        ):
            raise ConfigurationError(f"target width must be a positive integer, got {self.width!r}")
        if not (math.isfinite(self.aspect_correction) and self.aspect_correction > 0):
            raise ConfigurationError(
                f"aspect correction must be a positive finite number, got {self.aspect_correction!r}"
            )

    @classmethod
    def from_presets(
        cls,
        width: int = DEFAULT_WIDTH,
        full_resolution: bool = False,
        palette: Palette = Palette.SIMPLE,
        theme: Theme = Theme.DARK,
        aspect_correction: float = DEFAULT_ASPECT_CORRECTION,
    ) -> "RenderOptions":
        """Build options the way the upload form describes them."""
        return cls(
            width=width,
            full_resolution=full_resolution,
            palette=palette.chars,
            invert=theme.invert,
            aspect_correction=aspect_correction,
            background=theme.background,
            foreground=theme.foreground,
        )
