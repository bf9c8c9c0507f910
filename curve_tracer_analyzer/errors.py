"""Error taxonomy for curve tracer decoding and export.

Three families, all derived from :class:`CurveTracerError`:

- FormatError: the bytes do not follow the CURVE file layout.
- SourceError: the file could not be opened or read.
- ExportError: decoding succeeded but an output could not be produced.

Each class carries a ``kind`` string naming its member of the taxonomy, so
batch reports can be grouped without isinstance ladders.
"""

from __future__ import annotations


class CurveTracerError(Exception):
    kind = "CurveTracerError"


# -----------------------------------------------------------------------
# Format errors (fatal for the file being decoded)
# -----------------------------------------------------------------------


class FormatError(CurveTracerError, ValueError):
    kind = "FormatError"


class InvalidNumericField(FormatError):
    kind = "InvalidNumericField"


class InvalidTraceCount(FormatError):
    kind = "InvalidTraceCount"


class TruncatedHeader(FormatError):
    kind = "TruncatedHeader"


class TruncatedData(FormatError):
    kind = "TruncatedData"


# -----------------------------------------------------------------------
# Source errors
# -----------------------------------------------------------------------


class SourceError(CurveTracerError, OSError):
    kind = "SourceError"


class SourceNotFound(SourceError, FileNotFoundError):
    kind = "NotFound"


class SourcePermissionDenied(SourceError, PermissionError):
    kind = "PermissionDenied"


class SourceUnreadable(SourceError):
    kind = "Unreadable"


# -----------------------------------------------------------------------
# Export errors
# -----------------------------------------------------------------------


class ExportError(CurveTracerError):
    kind = "ExportError"


class UnsupportedFormat(ExportError, ValueError):
    kind = "UnsupportedFormat"


class WriteFailed(ExportError, OSError):
    kind = "WriteFailed"


__all__ = [
    "CurveTracerError",
    "FormatError",
    "InvalidNumericField",
    "InvalidTraceCount",
    "TruncatedHeader",
    "TruncatedData",
    "SourceError",
    "SourceNotFound",
    "SourcePermissionDenied",
    "SourceUnreadable",
    "ExportError",
    "UnsupportedFormat",
    "WriteFailed",
]
