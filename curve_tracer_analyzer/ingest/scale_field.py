from __future__ import annotations

from typing import Optional
import re

from curve_tracer_analyzer.errors import InvalidNumericField, TruncatedHeader
from curve_tracer_analyzer.models.scale import PREFIX_MULTIPLIERS, ScaleField


SCALE_FIELD_SIZE = 8
NUMERIC_WIDTH = 6

# Plain decimal literal: no exponent-only, nan/inf or underscore forms that float() would accept.
_DECIMAL = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")
_PADDING = " \t\x00"


def _parse_magnitude(raw: bytes, offset: int) -> Optional[float]:
    try:
        text = raw.decode("ascii")
    except UnicodeDecodeError as e:
        raise InvalidNumericField(f"non-ASCII numeric field at offset {offset}: {raw!r}") from e
    text = text.strip(_PADDING)
    if not text:
        return None
    if not _DECIMAL.match(text):
        raise InvalidNumericField(f"invalid numeric field at offset {offset}: {raw!r}")
    return float(text)


def read_scale_field(buf: bytes, offset: int, *, allow_blank: bool = False) -> Optional[ScaleField]:
    """
    Decode the 8-byte scale record starting at absolute ``offset`` of ``buf``.

    Layout:
      bytes 0..5  ASCII decimal text (space/NUL padding tolerated)
      byte  6     scale prefix ('m', 'k'; anything else means x1)
      byte  7     unit character

    Returns None for an all-blank numeric text when ``allow_blank`` is set.
    """
    offset = int(offset)
    end = offset + SCALE_FIELD_SIZE
    if offset < 0 or len(buf) < end:
        raise TruncatedHeader(
            f"scale field at offset {offset} needs {SCALE_FIELD_SIZE} bytes; buffer has {len(buf)}"
        )
    rec = bytes(buf[offset:end])

    magnitude = _parse_magnitude(rec[:NUMERIC_WIDTH], offset)
    if magnitude is None:
        if allow_blank:
            return None
        raise InvalidNumericField(f"blank numeric field at offset {offset}")

    prefix = chr(rec[NUMERIC_WIDTH])
    unit = chr(rec[NUMERIC_WIDTH + 1])
    return ScaleField(
        magnitude=magnitude,
        prefix=prefix if prefix in PREFIX_MULTIPLIERS else None,
        unit=unit,
    )
