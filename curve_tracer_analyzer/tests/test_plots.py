from __future__ import annotations

from pathlib import Path

import pytest
from matplotlib.figure import Figure

from curve_tracer_analyzer.errors import UnsupportedFormat
from curve_tracer_analyzer.export.images import IMAGE_FORMATS, image_path, save_figure
from curve_tracer_analyzer.export.plots import PlotConfig, legend_order, render_curves
from curve_tracer_analyzer.ingest.readers_371a import read_curves


def test_one_line_per_trace_with_fixed_axes(write_curve) -> None:
    ds = read_curves(write_curve(trace_count=4, horizontal=b"  2.00 V", vertical=b"  5.00mA"))
    fig = render_curves(ds)
    assert isinstance(fig, Figure)
    ax = fig.axes[0]
    assert len(ax.get_lines()) == 4
    assert ax.get_xlim() == pytest.approx((0.0, 20.0))
    assert ax.get_ylim() == pytest.approx((0.0, 0.05))
    assert ax.get_xlabel() == "Voltage [V]"
    assert ax.get_ylabel() == "Current [A]"


def test_polyline_keeps_sample_order(write_curve) -> None:
    ds = read_curves(
        write_curve(
            trace_count=5,
            horizontal=b"  1.00 V",
            vertical=b"  1.00 A",
            samples={(0, 0): (0, 30, 0, 1), (0, 1): (0, 10, 0, 2)},
        )
    )
    line = render_curves(ds).axes[0].get_lines()[0]
    x = line.get_xdata()
    assert x[0] == pytest.approx(0.3)
    assert x[1] == pytest.approx(0.1)


def test_legend_descending_gate(write_curve) -> None:
    ds = read_curves(write_curve(trace_count=3, gate_step=b"  1.00 V", gate_initial=b"  0.00 V"))
    assert legend_order(ds) == [2, 1, 0]
    leg = render_curves(ds).axes[0].get_legend()
    assert leg is not None
    assert [t.get_text() for t in leg.get_texts()] == ["2", "1", "0"]


def test_no_legend_without_gate(write_curve) -> None:
    ds = read_curves(write_curve(trace_count=3, gate_step=b"        ", gate_initial=b"        "))
    assert render_curves(ds).axes[0].get_legend() is None


def test_title_only_when_configured(write_curve) -> None:
    ds = read_curves(write_curve("CURVE.C05", trace_count=2))
    assert render_curves(ds).axes[0].get_title() == ""
    assert render_curves(ds, PlotConfig(title="npn")).axes[0].get_title() == "npn"


@pytest.mark.parametrize("fmt", ["png", "svg", "pdf"])
def test_save_figure_named_after_input(write_curve, fmt: str) -> None:
    src = write_curve("CURVE.C03", trace_count=2)
    out = save_figure(render_curves(read_curves(src)), src, fmt)
    assert out == src.parent / f"CURVE.{fmt}"
    assert out.exists() and out.stat().st_size > 0


def test_save_figure_out_dir(write_curve, tmp_path: Path) -> None:
    src = write_curve("CURVE.C04", trace_count=2)
    out_dir = tmp_path / "images"
    out_dir.mkdir()
    out = save_figure(render_curves(read_curves(src)), src, ".PNG", out_dir)
    assert out == image_path(src, "png", out_dir)
    assert out.exists()


def test_save_figure_rejects_unknown_format(write_curve) -> None:
    src = write_curve(trace_count=2)
    with pytest.raises(UnsupportedFormat):
        save_figure(render_curves(read_curves(src)), src, "fig")
    assert "fig" not in IMAGE_FORMATS
