"""Curve Tracer Analyzer -- Python tooling for Tektronix 371A curve tracer files.

This package provides tools for:
- Decoding CURVE.Cxx binaries (fixed-offset header + packed 255-sample block)
- Rebuilding physically scaled (voltage, current) traces per bias step
- Plotting curve families with the instrument's fixed axis ranges
- Saving plots as image files and exporting the curve tracer CSV layout
- Converting batches of files with per-file error isolation

Key principles:
- No partial data: a malformed file raises, it is never half-decoded
- No reordering: traces and samples keep the order the instrument wrote them
- The decoder never depends on the requested output

Main subpackages:
- ingest: Scale-field, header and trace decoding; input selection
- models: Data models (ScaleField, CurveHeader, Trace, CurveDataset)
- export: Plot renderer, image saver, CSV serializer
"""

from curve_tracer_analyzer.ingest.readers_371a import Tek371Reader, Tek371ReaderConfig, read_curves
from curve_tracer_analyzer.models.curves import CurveDataset, Trace

__all__ = [
    "Tek371Reader",
    "Tek371ReaderConfig",
    "read_curves",
    "CurveDataset",
    "Trace",
]
