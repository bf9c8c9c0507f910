"""Exporters consuming a decoded CurveDataset: plot, image file, CSV."""

from .plots import PlotConfig, render_curves
from .images import IMAGE_FORMATS, save_figure
from .csv_export import CsvExportConfig, interlaced_frame, write_csv

__all__ = [
    "PlotConfig",
    "render_curves",
    "IMAGE_FORMATS",
    "save_figure",
    "CsvExportConfig",
    "interlaced_frame",
    "write_csv",
]
