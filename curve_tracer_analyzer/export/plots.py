"""
Plot renderer for decoded curve families.

Design goals:
- One connected polyline per trace, in recorded sample order.
- Fixed axes sized from the per-division scales (10 divisions each way), like the
  instrument screen.
- Legend lists gate values highest first so the lowest bias sits at the bottom,
  next to its curve.
- No process-wide figure state: visibility is a PlotConfig field.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from matplotlib.figure import Figure

from curve_tracer_analyzer.models.curves import CurveDataset


SCREEN_DIVISIONS = 10


@dataclass(frozen=True)
class PlotConfig:
    """
    visible:
      - False: build a detached matplotlib Figure (no pyplot registration); for saving.
      - True: build a pyplot-managed figure that plt.show() will display.
    """
    visible: bool = False
    figsize: Tuple[float, float] = (6.4, 4.8)
    dpi: float = 100.0
    linewidth: float = 1.0
    legend: bool = True
    title: Optional[str] = None


def format_gate(value: float) -> str:
    return f"{value:g}"


def _new_figure(cfg: PlotConfig) -> Figure:
    if cfg.visible:
        import matplotlib.pyplot as plt

        return plt.figure(figsize=cfg.figsize, dpi=cfg.dpi)
    return Figure(figsize=cfg.figsize, dpi=cfg.dpi)


def render_curves(dataset: CurveDataset, config: Optional[PlotConfig] = None) -> Figure:
    cfg = config or PlotConfig()
    fig = _new_figure(cfg)
    ax = fig.add_subplot(111)

    lines = []
    for tr in dataset.traces:
        (ln,) = ax.plot(tr.voltage, tr.current, linewidth=cfg.linewidth)
        lines.append(ln)

    ax.set_xlim(0.0, SCREEN_DIVISIONS * dataset.horizontal_scale)
    ax.set_ylim(0.0, SCREEN_DIVISIONS * dataset.vertical_scale)
    ax.set_xlabel("Voltage [V]")
    ax.set_ylabel("Current [A]")
    if cfg.title:
        ax.set_title(cfg.title)

    if cfg.legend and dataset.has_gate_values:
        order = legend_order(dataset)
        ax.legend(
            [lines[i] for i in order],
            [format_gate(dataset.traces[i].gate_value) for i in order],
            loc="lower right",
            frameon=False,
        )
    return fig


def legend_order(dataset: CurveDataset) -> List[int]:
    """Trace indices in legend order: last bias step first."""
    return [tr.index for tr in reversed(dataset.traces) if tr.gate_value is not None]
