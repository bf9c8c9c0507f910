from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple
import logging

from matplotlib.figure import Figure

from curve_tracer_analyzer.errors import UnsupportedFormat, WriteFailed


logger = logging.getLogger(__name__)

# Raster and vector formats matplotlib writes without extra backends.
IMAGE_FORMATS: Tuple[str, ...] = ("png", "pdf", "svg", "eps", "ps", "jpg", "tif")


def image_path(
    source_path: Path,
    fmt: str,
    out_dir: Optional[Path] = None,
    name: Optional[str] = None,
) -> Path:
    """<out_dir or source dir>/<name or source stem>.<fmt>"""
    src = Path(source_path)
    folder = Path(out_dir) if out_dir is not None else src.parent
    return folder / f"{name or src.stem}.{fmt}"


def save_figure(
    figure: Figure,
    source_path: Path,
    fmt: str,
    out_dir: Optional[Path] = None,
    *,
    dpi: Optional[float] = None,
    name: Optional[str] = None,
) -> Path:
    """
    Write ``figure`` next to its input file (or into ``out_dir``), named after the
    input's base name (or ``name``). Returns the written path.
    """
    fmt = str(fmt).lower().lstrip(".")
    if fmt not in IMAGE_FORMATS:
        raise UnsupportedFormat(f"unsupported image format {fmt!r}; expected one of {', '.join(IMAGE_FORMATS)}")

    path = image_path(source_path, fmt, out_dir, name)
    try:
        figure.savefig(str(path), format=fmt, dpi=dpi if dpi is not None else "figure")
    except OSError as e:
        raise WriteFailed(f"cannot write {path}: {e}") from e
    logger.info("saved %s", path)
    return path
