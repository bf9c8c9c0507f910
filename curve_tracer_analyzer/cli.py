from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence
import logging

from curve_tracer_analyzer.batch import OUTPUT_MODES, OUTPUT_NONE, OUTPUT_PLOT, BatchConfig, BatchReport, process_files
from curve_tracer_analyzer.ingest.discovery import resolve_input_paths, select_files_interactively


def _positive_int(text: str) -> int:
    import argparse

    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}")
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be > 0: {value}")
    return value


def _print_summary(report: BatchReport, mode: str) -> None:
    for o in report.outcomes:
        if not o.ok:
            print(f"[error] {o.path}: {getattr(o.error, 'kind', type(o.error).__name__)}: {o.error}")
            continue
        ds = o.dataset
        h_unit = ds.header.horizontal.unit if ds.header is not None else "V"
        v_unit = ds.header.vertical.unit if ds.header is not None else "A"
        line = (
            f"[info] {o.path.name}: {ds.n_traces} traces x {ds.samples_per_trace} samples, "
            f"{ds.horizontal_scale:g} {h_unit}/div, {ds.vertical_scale:g} {v_unit}/div"
        )
        if ds.has_gate_values:
            line += f", bias {ds.bias_label} {ds.gate_values[0]:g}..{ds.gate_values[-1]:g}"
        print(line)
        if o.output_path is not None:
            print(f"  wrote: {o.output_path}")
        if mode == OUTPUT_NONE:
            for w in ds.warnings:
                print(f"  [warn] {w}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    import argparse
    import textwrap

    p = argparse.ArgumentParser(
        prog="curve-tracer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=textwrap.dedent(
            """\
            Convert Tektronix 371A curve tracer binaries (CURVE.Cxx).

            Without FILE arguments a file dialog asks for the input files.
            Output modes:
              plot   show the curve family on screen (default)
              csv    write <name>.csv next to each input
              none   decode only and print a summary
              png/pdf/svg/eps/ps/jpg/tif   save the plot as <name>.<fmt>

            Inputs that would write to the same <name> (CURVE.C01, CURVE.C02)
            are named after the full file name instead (CURVE.C01.csv).
            """
        ),
    )
    p.add_argument("files", nargs="*", help="CURVE files (glob patterns allowed)")
    p.add_argument("-o", "--output", default=OUTPUT_PLOT, choices=OUTPUT_MODES, help="Output mode (default: plot)")
    p.add_argument("--out-dir", default=None, help="Directory for written files (default: next to each input)")
    p.add_argument("--workers", type=_positive_int, default=None, help="Decode threads for multi-file batches")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    ns = p.parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(
        level=logging.DEBUG if ns.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if ns.files:
        files = resolve_input_paths(ns.files)
    else:
        picked = select_files_interactively()
        if not picked:
            print("[error] no input files selected")
            return 2
        files = picked

    out_dir = Path(ns.out_dir).expanduser() if ns.out_dir else None
    if out_dir is not None:
        out_dir.mkdir(parents=True, exist_ok=True)

    cfg = BatchConfig(output=ns.output, out_dir=out_dir, max_workers=ns.workers)
    report = process_files(files, cfg)
    _print_summary(report, ns.output)

    if ns.output == OUTPUT_PLOT and report.figures:
        import matplotlib.pyplot as plt

        plt.show()

    return 1 if report.failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
