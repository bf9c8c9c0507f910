from .scale import ScaleField, prefix_multiplier
from .header import CurveHeader, SAMPLE_BUDGET
from .curves import CurveDataset, Trace, bias_axis_label

__all__ = [
    "ScaleField",
    "prefix_multiplier",
    "CurveHeader",
    "SAMPLE_BUDGET",
    "CurveDataset",
    "Trace",
    "bias_axis_label",
]
