from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import numpy as np
import pandas as pd

from curve_tracer_analyzer.models.header import CurveHeader


def bias_axis_label(unit: str) -> str:
    """
    Section label for the bias axis.

    A unit ending in 'V' means the gate-source voltage was stepped ([Vgs]);
    anything else is treated as base-current stepping ([Ib]).
    """
    if unit and unit[-1] == "V":
        return "[Vgs]"
    return "[Ib]"


@dataclass(frozen=True)
class Trace:
    """
    One sweep captured at a single bias step.

    Notes
    - voltage/current are read-only float64 arrays of equal length, in the order
      the instrument recorded them (not sorted by voltage).
    - gate_value is None when the file carries no gate fields.
    """
    index: int
    gate_value: Optional[float]
    gate_unit: str
    voltage: np.ndarray
    current: np.ndarray

    @property
    def n_samples(self) -> int:
        return int(self.voltage.shape[0])

    @property
    def samples(self) -> np.ndarray:
        """(n_samples, 2) array of (voltage, current) pairs."""
        return np.column_stack([self.voltage, self.current])


@dataclass(frozen=True)
class CurveDataset:
    """
    Everything decoded from one CURVE file.

    Traces keep the physical bias-step order of the file (index 0 first).
    horizontal_scale / vertical_scale are the per-division scales used to size
    plot axes downstream.
    """
    traces: Tuple[Trace, ...]
    horizontal_scale: float
    vertical_scale: float
    header: Optional[CurveHeader] = None
    source_path: Optional[Path] = None
    warnings: Tuple[str, ...] = ()

    @property
    def n_traces(self) -> int:
        return len(self.traces)

    @property
    def samples_per_trace(self) -> int:
        if not self.traces:
            return 0
        return self.traces[0].n_samples

    @property
    def has_gate_values(self) -> bool:
        return any(tr.gate_value is not None for tr in self.traces)

    @property
    def gate_values(self) -> np.ndarray:
        return np.array(
            [np.nan if tr.gate_value is None else tr.gate_value for tr in self.traces],
            dtype=np.float64,
        )

    @property
    def gate_unit(self) -> str:
        if not self.traces:
            return ""
        return self.traces[0].gate_unit

    @property
    def bias_label(self) -> Optional[str]:
        """[Vgs] / [Ib], or None when the file has no gate values."""
        if not self.has_gate_values:
            return None
        return bias_axis_label(self.gate_unit)

    def to_frame(self) -> pd.DataFrame:
        """Long-format table with one row per sample: trace, gate, voltage, current."""
        n = self.samples_per_trace
        gates = self.gate_values
        return pd.DataFrame(
            {
                "trace": np.repeat(np.arange(self.n_traces, dtype=np.int64), n),
                "gate": np.repeat(gates, n),
                "voltage": np.concatenate([tr.voltage for tr in self.traces]) if self.traces else np.empty(0),
                "current": np.concatenate([tr.current for tr in self.traces]) if self.traces else np.empty(0),
            }
        )
