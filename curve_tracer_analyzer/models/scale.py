from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional


# SI-like prefix characters understood by the instrument. Anything else scales by 1.
PREFIX_MULTIPLIERS: Dict[str, float] = {
    "m": 1e-3,
    "k": 1e3,
}


def prefix_multiplier(prefix: Optional[str]) -> float:
    """Return the multiplier for a prefix character (1.0 for None or unknown prefixes)."""
    if prefix is None:
        return 1.0
    return PREFIX_MULTIPLIERS.get(prefix, 1.0)


@dataclass(frozen=True)
class ScaleField:
    """
    One 8-byte scale record of the CURVE header (e.g. horizontal volts/div).

    magnitude: decimal value of the 6-character numeric text (e.g. 1.00, 500.0)
    prefix:    'm', 'k' or None; unknown prefix bytes are stored as None
    unit:      one unit character as written by the instrument ('V', 'A', ...)
    """
    magnitude: float
    prefix: Optional[str]
    unit: str

    @property
    def multiplier(self) -> float:
        return prefix_multiplier(self.prefix)

    @property
    def scale(self) -> float:
        """Physical value of one division: magnitude * multiplier(prefix)."""
        return self.magnitude * self.multiplier

    @property
    def label(self) -> str:
        return f"{self.prefix or ''}{self.unit}"
