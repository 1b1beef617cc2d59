# src/steering_sims/render/plotting.py

from __future__ import annotations

from typing import TYPE_CHECKING
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import Polygon

if TYPE_CHECKING:
    from matplotlib.axes import Axes
    from steering_sims.core.recording import AgentStaticSnapshot, FrameSnapshot
    from steering_sims.core.flow_field import FlowField
    from steering_sims.core.path import Path


def vehicle_outline(pos, heading: float, r: float) -> np.ndarray:
    """
    Triangle for a vehicle of size r, nose along its heading.

    Local shape is (0, -2r), (-r, 2r), (r, 2r). heading is atan2(vx, vy), so
    the nose direction (sin h, cos h) needs a rotation of pi - h.
    """
    local = np.array([[0.0, -2 * r], [-r, 2 * r], [r, 2 * r]])
    angle = np.pi - heading
    c, s = np.cos(angle), np.sin(angle)
    rot = np.array([[c, -s], [s, c]])
    return local @ rot.T + np.asarray(pos, dtype=float)


def plot_flow_field(field: "FlowField", ax: "Axes", **kwargs) -> None:
    cols, rows, res = field.cols, field.rows, field.resolution
    xs = (np.arange(cols) + 0.5) * res
    ys = (np.arange(rows) + 0.5) * res
    X, Y = np.meshgrid(xs, ys, indexing="ij")
    kwargs.setdefault("color", "lightgray")
    ax.quiver(X, Y, field.field[..., 0], field.field[..., 1], **kwargs)


def plot_path(path: "Path", ax: "Axes", corridor_color: str = "lightgray", line_color: str = "black") -> None:
    pts = path.points
    # corridor drawn as a thick line; linewidth is in points, so it is approximate
    ax.plot(pts[:, 0], pts[:, 1], color=corridor_color, linewidth=max(path.radius, 1.0),
            solid_capstyle="round", zorder=0)
    ax.plot(pts[:, 0], pts[:, 1], color=line_color, linewidth=1.0, zorder=1)


def plot_frame(
    frame: "FrameSnapshot",
    ax: "Axes | None" = None,
    *,
    static: "dict[int, AgentStaticSnapshot] | None" = None,
    flow_field: "FlowField | None" = None,
    path: "Path | None" = None,
    bounds: tuple[float, float, float, float] | None = None,
    facecolor: str = "#afafaf",
    default_radius: float = 3.0,
):
    """
    Draw one recorded frame. Coordinate system: x-right, y-down.

    Returns (fig, ax).
    """
    if ax is None:
        fig, ax = plt.subplots()
    else:
        fig = ax.figure

    if flow_field is not None:
        plot_flow_field(flow_field, ax)
    if path is not None:
        plot_path(path, ax)

    for agent_id, state in frame.agents.items():
        r = static[agent_id].radius if static and agent_id in static else default_radius
        tri = Polygon(vehicle_outline(state.pos, state.heading, r), closed=True,
                      facecolor=facecolor, edgecolor="black", linewidth=0.5)
        ax.add_patch(tri)

    if bounds is not None:
        xmin, xmax, ymin, ymax = bounds
        ax.set_xlim(xmin, xmax)
        ax.set_ylim(ymin, ymax)
    else:
        ax.autoscale_view()
    ax.set_aspect("equal", adjustable="box")
    ax.invert_yaxis()
    ax.set_title(f"t = {frame.t:.2f}")
    return fig, ax
