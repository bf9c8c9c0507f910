from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple
import logging

import numpy as np

from curve_tracer_analyzer.errors import (
    SourceNotFound,
    SourcePermissionDenied,
    SourceUnreadable,
    TruncatedData,
)
from curve_tracer_analyzer.ingest.header import parse_header
from curve_tracer_analyzer.models.curves import CurveDataset, Trace
from curve_tracer_analyzer.models.header import SAMPLE_BUDGET, CurveHeader


logger = logging.getLogger(__name__)

DATA_OFFSET = 16 * 8
BYTES_PER_SAMPLE = 4
RAW_DIVISOR = 100.0


@dataclass(frozen=True)
class Tek371ReaderConfig:
    """
    Reader configuration for 371A CURVE files.

    allow_blank_gate:
      - True: a file whose two gate fields are both blank decodes with gate values None.
      - False: blank gate fields raise InvalidNumericField.
    warn_trailing_bytes:
      Record a dataset warning when bytes remain after the data block.
    """
    allow_blank_gate: bool = True
    warn_trailing_bytes: bool = True


def data_block_size(header: CurveHeader) -> int:
    """Number of bytes the data block must hold for ``header``."""
    return int(header.trace_count) * header.samples_per_trace * BYTES_PER_SAMPLE


def decode_traces(buf: bytes, header: CurveHeader) -> Tuple[Trace, ...]:
    """
    Decode the packed sample block that starts at offset 128.

    Each sample is 4 unsigned bytes b0 b1 b2 b3:
      voltage = (b0*256 + b1) / 100 * horizontal.scale
      current = (b2*256 + b3) / 100 * vertical.scale

    The block is consumed trace by trace, samples_per_trace samples each, in file order.
    Slots beyond trace_count * samples_per_trace (255 % trace_count of them) are ignored.
    """
    n_traces = int(header.trace_count)
    ns = header.samples_per_trace
    need = data_block_size(header)
    have = max(0, len(buf) - DATA_OFFSET)
    if have < need:
        raise TruncatedData(
            f"data block needs {need} bytes for {n_traces} traces x {ns} samples; {have} available"
        )

    # b0*256+b1 is a big-endian uint16; two words per sample: (voltage, current)
    words = np.frombuffer(buf, dtype=">u2", count=need // 2, offset=DATA_OFFSET)
    words = words.reshape((n_traces, ns, 2))

    h_scale = header.horizontal.scale
    v_scale = header.vertical.scale
    gate_unit = header.gate_initial.unit if header.gate_initial is not None else ""

    traces: List[Trace] = []
    for t in range(n_traces):
        voltage = words[t, :, 0].astype(np.float64) / RAW_DIVISOR * h_scale
        current = words[t, :, 1].astype(np.float64) / RAW_DIVISOR * v_scale
        voltage.setflags(write=False)
        current.setflags(write=False)
        traces.append(
            Trace(
                index=t,
                gate_value=header.gate_value(t),
                gate_unit=gate_unit,
                voltage=voltage,
                current=current,
            )
        )
    return tuple(traces)


def assemble_dataset(
    header: CurveHeader,
    traces: Sequence[Trace],
    *,
    source_path: Optional[Path] = None,
    warnings: Sequence[str] = (),
) -> CurveDataset:
    """Wrap decoded traces with the axis scales into one CurveDataset."""
    return CurveDataset(
        traces=tuple(traces),
        horizontal_scale=header.horizontal.scale,
        vertical_scale=header.vertical.scale,
        header=header,
        source_path=source_path,
        warnings=tuple(warnings),
    )


def read_bytes(file_path: str | Path) -> bytes:
    """Read a whole file, mapping OS failures onto the SourceError family."""
    path = Path(file_path)
    try:
        with open(path, "rb") as f:
            return f.read()
    except FileNotFoundError as e:
        raise SourceNotFound(f"file not found: {path}") from e
    except PermissionError as e:
        raise SourcePermissionDenied(f"permission denied: {path}") from e
    except IsADirectoryError as e:
        raise SourceUnreadable(f"not a regular file: {path}") from e
    except OSError as e:
        raise SourceUnreadable(f"cannot read {path}: {e}") from e
    except ValueError as e:
        # e.g. embedded NUL in the path
        raise SourceUnreadable(f"invalid path {path!r}: {e}") from e


def resolve_source(file_path: str | Path) -> Path:
    try:
        return Path(file_path).expanduser().resolve()
    except (OSError, ValueError) as e:
        raise SourceUnreadable(f"invalid path {str(file_path)!r}: {e}") from e


class Tek371Reader:
    """
    STRICT reader for Tektronix 371A curve tracer binaries (CURVE.Cxx).

    Contract:
      - The header is parsed from fixed absolute offsets (5, 34, 42, 50, 58).
      - The data block starts at offset 128 and must hold every sample of every trace.
      - No partial dataset: any format error aborts the whole file.
      - The file is read in one go and closed before decoding starts.
    """

    def __init__(self, config: Optional[Tek371ReaderConfig] = None):
        self.config = config or Tek371ReaderConfig()

    def read(self, file_path: str | Path) -> CurveDataset:
        path = resolve_source(file_path)
        buf = read_bytes(path)
        logger.debug("read %d bytes from %s", len(buf), path)
        return self.decode(buf, source_path=path)

    def decode(self, buf: bytes, source_path: Optional[Path] = None) -> CurveDataset:
        header = parse_header(buf, allow_blank_gate=self.config.allow_blank_gate)
        traces = decode_traces(buf, header)

        warnings: List[str] = []
        if header.unused_samples:
            warnings.append(
                f"{header.trace_count} traces x {header.samples_per_trace} samples: "
                f"{header.unused_samples} of {SAMPLE_BUDGET} sample slots ignored"
            )
        if not header.has_gate:
            warnings.append("gate fields blank: step generator off, no gate values")
        extra = len(buf) - DATA_OFFSET - SAMPLE_BUDGET * BYTES_PER_SAMPLE
        if self.config.warn_trailing_bytes and extra > 0:
            warnings.append(f"{extra} trailing bytes after the data block ignored")

        for msg in warnings:
            logger.debug("%s: %s", source_path if source_path is not None else "<buffer>", msg)

        return assemble_dataset(header, traces, source_path=source_path, warnings=warnings)


def read_curves(file_path: str | Path, config: Optional[Tek371ReaderConfig] = None) -> CurveDataset:
    """Decode one CURVE file and return its dataset without producing any output."""
    return Tek371Reader(config).read(file_path)
