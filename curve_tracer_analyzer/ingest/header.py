from __future__ import annotations

import logging

from curve_tracer_analyzer.errors import InvalidNumericField, InvalidTraceCount, TruncatedHeader
from curve_tracer_analyzer.ingest.scale_field import read_scale_field
from curve_tracer_analyzer.models.header import CurveHeader


logger = logging.getLogger(__name__)

TRACE_COUNT_OFFSET = 5
HORIZONTAL_OFFSET = 34
VERTICAL_OFFSET = 42
GATE_STEP_OFFSET = 50
GATE_INITIAL_OFFSET = 58
HEADER_MIN_SIZE = 66  # last scale field ends at 58 + 8


def parse_header(buf: bytes, *, allow_blank_gate: bool = True) -> CurveHeader:
    """
    Parse the fixed-offset CURVE header.

    Every field is read at its absolute offset; nothing depends on the order of reads.
    Raises TruncatedHeader (< 66 bytes), InvalidTraceCount (count byte is 0) or
    InvalidNumericField (unparseable scale text).

    With ``allow_blank_gate`` both gate fields may be blank together (step generator
    off). A single blank gate field is still an error.
    """
    if len(buf) < HEADER_MIN_SIZE:
        raise TruncatedHeader(f"header needs {HEADER_MIN_SIZE} bytes; file has {len(buf)}")

    trace_count = int(buf[TRACE_COUNT_OFFSET])
    if trace_count == 0:
        raise InvalidTraceCount("trace count byte at offset 5 is zero")

    horizontal = read_scale_field(buf, HORIZONTAL_OFFSET)
    vertical = read_scale_field(buf, VERTICAL_OFFSET)
    gate_step = read_scale_field(buf, GATE_STEP_OFFSET, allow_blank=allow_blank_gate)
    gate_initial = read_scale_field(buf, GATE_INITIAL_OFFSET, allow_blank=allow_blank_gate)

    if (gate_step is None) != (gate_initial is None):
        missing = GATE_STEP_OFFSET if gate_step is None else GATE_INITIAL_OFFSET
        raise InvalidNumericField(f"blank gate field at offset {missing} while the other gate field is set")

    logger.debug(
        "header: traces=%d horizontal=%s vertical=%s gate_step=%s gate_initial=%s",
        trace_count, horizontal, vertical, gate_step, gate_initial,
    )
    return CurveHeader(
        trace_count=trace_count,
        horizontal=horizontal,
        vertical=vertical,
        gate_step=gate_step,
        gate_initial=gate_initial,
    )
