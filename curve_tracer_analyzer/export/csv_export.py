from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import logging

import numpy as np
import pandas as pd

from curve_tracer_analyzer.errors import WriteFailed
from curve_tracer_analyzer.models.curves import CurveDataset


logger = logging.getLogger(__name__)

DATA_SECTION = "[Data]"


@dataclass(frozen=True)
class CsvExportConfig:
    """
    float_format: printf-style format for every number (None -> pandas repr).
    delimiter:    column separator.
    line_terminator: written after every row and section line.
    """
    float_format: Optional[str] = "%.10g"
    delimiter: str = ","
    line_terminator: str = "\n"


def interlace(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Column-interlace two equally shaped 2D arrays: a0, b0, a1, b1, ..."""
    a = np.atleast_2d(a)
    b = np.atleast_2d(b)
    if a.shape != b.shape:
        raise ValueError(f"cannot interlace shapes {a.shape} and {b.shape}")
    out = np.empty((a.shape[0], 2 * a.shape[1]), dtype=np.float64)
    out[:, 0::2] = a
    out[:, 1::2] = b
    return out


def gate_frame(dataset: CurveDataset) -> pd.DataFrame:
    """One row: every gate value followed by an empty placeholder cell."""
    gates = dataset.gate_values.reshape(1, -1)
    return pd.DataFrame(interlace(gates, np.full_like(gates, np.nan)))


def interlaced_frame(dataset: CurveDataset) -> pd.DataFrame:
    """
    Data table with one row per sample index and column pairs per trace:
    V0, I0, V1, I1, ...
    """
    if not dataset.traces:
        return pd.DataFrame()
    v = np.column_stack([tr.voltage for tr in dataset.traces])
    i = np.column_stack([tr.current for tr in dataset.traces])
    columns = []
    for tr in dataset.traces:
        columns += [f"V{tr.index}", f"I{tr.index}"]
    return pd.DataFrame(interlace(v, i), columns=columns)


def csv_path(source_path: Path, out_dir: Optional[Path] = None, name: Optional[str] = None) -> Path:
    src = Path(source_path)
    folder = Path(out_dir) if out_dir is not None else src.parent
    return folder / f"{name or src.stem}.csv"


def write_csv(
    dataset: CurveDataset,
    path: Optional[Path] = None,
    config: Optional[CsvExportConfig] = None,
    *,
    out_dir: Optional[Path] = None,
    name: Optional[str] = None,
) -> Path:
    """
    Write the dataset in the curve tracer CSV layout and return the path.

    Layout:
      [Vgs] or [Ib]          (only when gate values exist)
      g0,,g1,,...,gN,        (gate values interlaced with blank cells)
      [Data]
      v0,i0,v1,i1,...        (one row per sample index)

    Any existing file at the target path is replaced.
    """
    cfg = config or CsvExportConfig()
    if path is None:
        if dataset.source_path is None:
            raise ValueError("path is required for a dataset without source_path")
        path = csv_path(dataset.source_path, out_dir, name)
    path = Path(path)

    opts = dict(
        sep=cfg.delimiter,
        header=False,
        index=False,
        na_rep="",
        float_format=cfg.float_format,
        lineterminator=cfg.line_terminator,
    )
    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            label = dataset.bias_label
            if label is not None:
                f.write(label + cfg.line_terminator)
                gate_frame(dataset).to_csv(f, **opts)
            f.write(DATA_SECTION + cfg.line_terminator)
            interlaced_frame(dataset).to_csv(f, **opts)
    except OSError as e:
        raise WriteFailed(f"cannot write {path}: {e}") from e

    logger.info("wrote %s", path)
    return path
