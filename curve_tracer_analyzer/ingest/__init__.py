"""Ingest package - CURVE file decoding and input selection.

This package handles:
- Decoding the 8-byte scale records of the header
- Parsing the fixed-offset header (trace count + four scale fields)
- Decoding the packed sample block into per-bias-step traces
- Resolving input paths, or asking for them interactively

Key entry points:
- Tek371Reader: reads one file into a CurveDataset
- read_curves: one-call decode without output

Design principle:
- Readers produce complete CurveDataset objects or raise; never partial data
- The decoder never looks at the requested output format
"""
from .scale_field import read_scale_field
from .header import parse_header
from .readers_371a import (
    Tek371Reader,
    Tek371ReaderConfig,
    assemble_dataset,
    decode_traces,
    read_curves,
)
from .discovery import resolve_input_paths, select_files_interactively

__all__ = [
    "read_scale_field",
    "parse_header",
    "Tek371Reader",
    "Tek371ReaderConfig",
    "assemble_dataset",
    "decode_traces",
    "read_curves",
    "resolve_input_paths",
    "select_files_interactively",
]
