"""Linear color scale mapping daily revenue to a cell color."""
from __future__ import annotations

import re
from dataclasses import dataclass

from .models import Dataset

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

RGB = tuple[int, int, int]


def parse_color(value: str) -> RGB:
    text = str(value).strip()
    if not _HEX_COLOR.match(text):
        raise ValueError(f"Unsupported color {value!r}; expected #rgb or #rrggbb")
    digits = text[1:]
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def format_color(rgb: RGB) -> str:
    return "#{:02x}{:02x}{:02x}".format(*rgb)


@dataclass(frozen=True)
class ColorScale:
    """Maps values in ``[domain_min, domain_max]`` onto a two-color ramp.

    Out-of-domain values are clamped to the nearest endpoint color. When the
    domain is a single point every value maps to ``color_low``.
    """

    domain_min: float
    domain_max: float
    color_low: str
    color_high: str

    def __post_init__(self) -> None:
        if self.domain_max < self.domain_min:
            raise ValueError(f"Color domain is inverted: ({self.domain_min}, {self.domain_max})")
        # Normalise both endpoints to #rrggbb so map() output compares equal.
        object.__setattr__(self, "color_low", format_color(parse_color(self.color_low)))
        object.__setattr__(self, "color_high", format_color(parse_color(self.color_high)))

    @classmethod
    def from_dataset(cls, dataset: Dataset, color_low: str, color_high: str) -> "ColorScale":
        # Refund-only data has a negative maximum; keep the domain anchored at zero.
        domain_max = max(0.0, dataset.max_total())
        return cls(domain_min=0.0, domain_max=domain_max, color_low=color_low, color_high=color_high)

    def domain(self) -> tuple[float, float]:
        return self.domain_min, self.domain_max

    def is_degenerate(self) -> bool:
        return self.domain_max == self.domain_min

    def map(self, value: float) -> str:
        if self.is_degenerate():
            return self.color_low
        t = (value - self.domain_min) / (self.domain_max - self.domain_min)
        t = min(1.0, max(0.0, t))
        low = parse_color(self.color_low)
        high = parse_color(self.color_high)
        return format_color(tuple(round(a + (b - a) * t) for a, b in zip(low, high)))

    def legend_values(self, steps: int = 5) -> list[float]:
        if steps < 2:
            raise ValueError("A legend needs at least two steps")
        span = self.domain_max - self.domain_min
        return [self.domain_min + span * i / (steps - 1) for i in range(steps)]

    def legend(self, steps: int = 5) -> list[tuple[float, str]]:
        return [(value, self.map(value)) for value in self.legend_values(steps)]
