"""
Batch conversion of CURVE files.

Each file is decoded independently; a failure is recorded on that file's
outcome and never stops its siblings. Decoding runs in a thread pool (one task
per file, no shared state). Exports run afterwards on the calling thread, in
input order, because pyplot figures are not thread safe.
"""

from __future__ import annotations

from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple
import logging
import os

from matplotlib.figure import Figure

from curve_tracer_analyzer.errors import CurveTracerError, UnsupportedFormat
from curve_tracer_analyzer.export.csv_export import CsvExportConfig, write_csv
from curve_tracer_analyzer.export.images import IMAGE_FORMATS, save_figure
from curve_tracer_analyzer.export.plots import PlotConfig, render_curves
from curve_tracer_analyzer.ingest.readers_371a import Tek371Reader, Tek371ReaderConfig
from curve_tracer_analyzer.models.curves import CurveDataset


logger = logging.getLogger(__name__)

OUTPUT_PLOT = "plot"
OUTPUT_CSV = "csv"
OUTPUT_NONE = "none"
OUTPUT_MODES: Tuple[str, ...] = (OUTPUT_PLOT, OUTPUT_CSV, OUTPUT_NONE) + IMAGE_FORMATS


def check_output_mode(output: str) -> str:
    mode = str(output).strip().lower()
    if mode not in OUTPUT_MODES:
        raise UnsupportedFormat(f"unknown output mode {output!r}; expected one of {', '.join(OUTPUT_MODES)}")
    return mode


@dataclass(frozen=True)
class BatchConfig:
    """
    output:      one of OUTPUT_MODES ('plot', 'csv', 'none' or an image format tag)
    out_dir:     directory for written files (None -> next to each input file)
    max_workers: decode threads (None -> ThreadPoolExecutor default)
    """
    output: str = OUTPUT_PLOT
    out_dir: Optional[Path] = None
    max_workers: Optional[int] = None
    reader: Tek371ReaderConfig = field(default_factory=Tek371ReaderConfig)
    plot: PlotConfig = field(default_factory=PlotConfig)
    csv: CsvExportConfig = field(default_factory=CsvExportConfig)


@dataclass
class FileOutcome:
    """Result for one input file: the dataset and written file, or the error."""
    path: Path
    dataset: Optional[CurveDataset] = None
    output_path: Optional[Path] = None
    figure: Optional[Figure] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchReport:
    outcomes: List[FileOutcome]

    @property
    def succeeded(self) -> List[FileOutcome]:
        return [o for o in self.outcomes if o.ok]

    @property
    def failed(self) -> List[FileOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def datasets(self) -> List[CurveDataset]:
        return [o.dataset for o in self.outcomes if o.ok and o.dataset is not None]

    @property
    def figures(self) -> List[Figure]:
        return [o.figure for o in self.outcomes if o.figure is not None]


def _decode_one(reader: Tek371Reader, path: Path) -> FileOutcome:
    try:
        return FileOutcome(path=path, dataset=reader.read(path))
    except CurveTracerError as e:
        logger.warning("%s: %s: %s", path, e.kind, e)
        return FileOutcome(path=path, error=e)
    except Exception as e:
        logger.exception("%s: unexpected decode failure", path)
        return FileOutcome(path=path, error=e)


def output_names(files: Sequence[Path], out_dir: Optional[Path] = None) -> Dict[Path, Optional[str]]:
    """
    Output base name per input file.

    Inputs whose outputs would land in the same folder under the same stem
    (CURVE.C01, CURVE.C02, ...) are named after their full file name instead
    (CURVE.C01.csv, CURVE.C02.csv). None means the plain stem.
    """
    def key(p: Path) -> Tuple[str, str]:
        folder = Path(out_dir) if out_dir is not None else p.parent
        return (os.path.normpath(os.path.abspath(str(folder))), p.stem)

    counts = Counter(key(p) for p in files)
    return {p: (p.name if counts[key(p)] > 1 else None) for p in files}


def _export_one(outcome: FileOutcome, cfg: BatchConfig, mode: str, name: Optional[str]) -> None:
    ds = outcome.dataset
    try:
        if mode == OUTPUT_NONE:
            return
        if mode == OUTPUT_CSV:
            outcome.output_path = write_csv(ds, config=cfg.csv, out_dir=cfg.out_dir, name=name)
        elif mode == OUTPUT_PLOT:
            outcome.figure = render_curves(ds, replace(cfg.plot, visible=True))
        else:
            fig = render_curves(ds, replace(cfg.plot, visible=False))
            outcome.output_path = save_figure(fig, ds.source_path, mode, cfg.out_dir, name=name)
    except CurveTracerError as e:
        logger.warning("%s: %s: %s", outcome.path, e.kind, e)
        outcome.error = e
    except Exception as e:
        logger.exception("%s: unexpected export failure", outcome.path)
        outcome.error = e


def process_files(paths: Iterable[str | Path], config: Optional[BatchConfig] = None) -> BatchReport:
    """
    Decode and export every file in ``paths``.

    The output mode is validated before any file is read. Outcomes are returned
    in input order regardless of decode completion order. Any failure, expected
    or not, is recorded on that file's outcome only.
    """
    cfg = config or BatchConfig()
    mode = check_output_mode(cfg.output)
    files = [Path(p).expanduser() for p in paths]
    reader = Tek371Reader(cfg.reader)
    names = output_names(files, cfg.out_dir)

    if len(files) <= 1:
        outcomes = [_decode_one(reader, p) for p in files]
    else:
        with ThreadPoolExecutor(max_workers=cfg.max_workers) as executor:
            outcomes = list(executor.map(lambda p: _decode_one(reader, p), files))

    for outcome in outcomes:
        if outcome.ok:
            _export_one(outcome, cfg, mode, names.get(outcome.path))

    report = BatchReport(outcomes=outcomes)
    logger.info("processed %d files: %d ok, %d failed", len(outcomes), len(report.succeeded), len(report.failed))
    return report
