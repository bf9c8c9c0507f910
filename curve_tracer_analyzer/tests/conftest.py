from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Sequence, Tuple

import matplotlib

matplotlib.use("Agg")

import pytest


HEADER_FIELDS = {"horizontal": 34, "vertical": 42, "gate_step": 50, "gate_initial": 58}


def build_curve_bytes(
    trace_count: int,
    *,
    horizontal: bytes = b"  1.00mV",
    vertical: bytes = b"  1.00mA",
    gate_step: bytes = b"  0.50 V",
    gate_initial: bytes = b"  1.00 V",
    samples: Optional[Dict[Tuple[int, int], Sequence[int]]] = None,
    size: int = 128 + 255 * 4,
) -> bytes:
    """
    Synthetic CURVE file: zeroed buffer with the header fields and selected samples set.

    samples maps (trace, sample) -> (b0, b1, b2, b3) using the per-file samples_per_trace.
    """
    buf = bytearray(size)
    buf[5] = trace_count
    fields = {
        "horizontal": horizontal,
        "vertical": vertical,
        "gate_step": gate_step,
        "gate_initial": gate_initial,
    }
    for name, off in HEADER_FIELDS.items():
        rec = fields[name]
        assert len(rec) == 8, name
        buf[off:off + 8] = rec
    if samples:
        ns = 255 // trace_count
        for (t, k), quad in samples.items():
            off = 128 + (t * ns + k) * 4
            buf[off:off + 4] = bytes(quad)
    return bytes(buf)


@pytest.fixture
def make_curve():
    return build_curve_bytes


@pytest.fixture
def write_curve(tmp_path: Path):
    def _write(name: str = "CURVE.C01", **kwargs) -> Path:
        trace_count = kwargs.pop("trace_count", 2)
        p = tmp_path / name
        p.write_bytes(build_curve_bytes(trace_count, **kwargs))
        return p

    return _write
