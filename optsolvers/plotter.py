"""Three-dimensional plots of objectives and solver iterates."""

from __future__ import annotations

import html
import io
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

import numpy as np
from matplotlib.figure import Figure
from matplotlib.patches import Patch


@dataclass
class SurfaceTrace:
    """Objective values on a grid; ``z[j][i]`` belongs to ``(x[i], y[j])``."""

    x: List[float]
    y: List[float]
    z: List[List[float]]
    name: str
    opacity: float


@dataclass
class ScatterTrace:
    """Points in 3-D space with a text label each."""

    x: List[float]
    y: List[float]
    z: List[float]
    name: str
    labels: List[str] = field(default_factory=list)


Trace = Union[SurfaceTrace, ScatterTrace]


class Plotter3d:
    """Builder for a 3-D figure of surfaces and scattered points.

    Files ending in ``.html`` or ``.htm`` get an HTML page with an embedded
    SVG; any other extension is written in the format it names.
    """

    _DPI = 100

    def __init__(self, xmin: float, xmax: float, ymin: float, ymax: float, mesh_size: int) -> None:
        self.mesh_size = int(mesh_size)
        self.mesh_x = [xmin + (xmax - xmin) * i / mesh_size for i in range(mesh_size)]
        self.mesh_y = [ymin + (ymax - ymin) * i / mesh_size for i in range(mesh_size)]
        self.traces: List[Trace] = []
        self.title: Optional[str] = None
        self.show_legend = False
        self.width = 1600
        self.height = 1000

    def with_mesh_x(self, mesh_x) -> "Plotter3d":
        self.mesh_x = [float(v) for v in mesh_x]
        return self

    def with_mesh_y(self, mesh_y) -> "Plotter3d":
        self.mesh_y = [float(v) for v in mesh_y]
        return self

    def append_plot(self, oracle, title: str, opacity: float) -> "Plotter3d":
        """Add the surface of the oracle's value over the mesh."""
        x = list(self.mesh_x)
        y = list(self.mesh_y)
        z = [[float(oracle(np.array([xi, yj])).f) for xi in x] for yj in y]
        self.traces.append(SurfaceTrace(x, y, z, title, float(opacity)))
        return self

    def append_scatter_points(self, oracle, points, title: str) -> "Plotter3d":
        """Add points in the plane, raised to the oracle's value at each."""
        points = [np.asarray(p, dtype=float) for p in points]
        z = [float(oracle(p).f) for p in points]
        labels = [f"Point {i}" for i in range(len(points))]
        self.traces.append(
            ScatterTrace(
                [float(p[0]) for p in points],
                [float(p[1]) for p in points],
                z,
                title,
                labels,
            )
        )
        return self

    def set_title(self, title: str) -> "Plotter3d":
        self.title = title
        self.show_legend = True
        return self

    def set_layout_size(self, width: int, height: int) -> "Plotter3d":
        self.width = int(width)
        self.height = int(height)
        return self

    def _figure(self) -> Figure:
        fig = Figure(figsize=(self.width / self._DPI, self.height / self._DPI), dpi=self._DPI)
        ax = fig.add_subplot(projection="3d")
        handles = []
        for trace in self.traces:
            if isinstance(trace, SurfaceTrace):
                grid_x, grid_y = np.meshgrid(trace.x, trace.y)
                surface = ax.plot_surface(
                    grid_x, grid_y, np.asarray(trace.z), cmap="viridis", alpha=trace.opacity
                )
                fig.colorbar(surface, ax=ax, shrink=0.6)
                handles.append(Patch(label=trace.name, alpha=trace.opacity))
            else:
                scatter = ax.scatter(trace.x, trace.y, trace.z, label=trace.name, depthshade=False)
                for xi, yi, zi, label in zip(trace.x, trace.y, trace.z, trace.labels):
                    ax.text(xi, yi, zi, label, fontsize=7)
                handles.append(scatter)
        if self.title is not None:
            ax.set_title(self.title)
        if self.show_legend and handles:
            ax.legend(handles=handles)
        return fig

    def build(self, filename) -> None:
        """Render the figure and write it to ``filename``."""
        path = Path(filename)
        fig = self._figure()
        if path.suffix.lower() in (".html", ".htm"):
            buffer = io.StringIO()
            fig.savefig(buffer, format="svg")
            svg = buffer.getvalue()
            svg = svg[svg.find("<svg"):]
            page_title = html.escape(self.title or "Plot")
            path.write_text(
                "<!DOCTYPE html>\n<html>\n<head>\n<meta charset=\"utf-8\">\n"
                f"<title>{page_title}</title>\n</head>\n<body>\n{svg}\n</body>\n</html>\n",
                encoding="utf-8",
            )
        else:
            fig.savefig(path)