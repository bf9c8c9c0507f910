from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from curve_tracer_analyzer.models.scale import ScaleField


# The instrument stores at most 255 samples per file, shared between all traces.
SAMPLE_BUDGET = 255


@dataclass(frozen=True)
class CurveHeader:
    """
    Decoded CURVE file header.

    Notes
    - trace_count is the number of bias steps (1..255).
    - gate_step / gate_initial are None when the step generator was off and the
      instrument left both gate fields blank.
    """
    trace_count: int
    horizontal: ScaleField
    vertical: ScaleField
    gate_step: Optional[ScaleField] = None
    gate_initial: Optional[ScaleField] = None

    @property
    def samples_per_trace(self) -> int:
        return SAMPLE_BUDGET // int(self.trace_count)

    @property
    def unused_samples(self) -> int:
        return SAMPLE_BUDGET % int(self.trace_count)

    @property
    def has_gate(self) -> bool:
        return self.gate_step is not None and self.gate_initial is not None

    def gate_value(self, index: int) -> Optional[float]:
        """Bias value of trace ``index`` (0-based), or None without gate fields."""
        if not self.has_gate:
            return None
        return self.gate_initial.scale + self.gate_step.scale * int(index)
