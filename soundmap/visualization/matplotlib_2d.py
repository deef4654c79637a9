"""
Matplotlib Sound Map Renderer

Draws a Projection's primitives onto a matplotlib figure in canvas pixel
coordinates (origin top-left, y pointing down) and writes PNG/SVG/PDF.
"""

import logging
import os

import matplotlib.pyplot as plt
from matplotlib.patches import Circle as CirclePatch
from matplotlib.patches import FancyBboxPatch

from soundmap.physics.constants import PlotColors

from .projection import Circle, Line, Projection, Rect, Text

logger = logging.getLogger(__name__)

SCREEN_DPI = 100.0
"""Canvas pixels per inch of figure size"""

EXPORT_DPI = 150.0
"""Default resolution of saved images"""

_PX_TO_PT = 72.0 / SCREEN_DPI

_ANCHOR_TO_HA = {"start": "left", "middle": "center", "end": "right"}


def _draw_circle(ax, prim: Circle) -> None:
    ax.add_patch(
        CirclePatch(
            (prim.cx, prim.cy),
            prim.r,
            facecolor=prim.fill if prim.fill else "none",
            edgecolor=prim.stroke if prim.stroke else "none",
            linewidth=prim.stroke_width * _PX_TO_PT,
            linestyle=(0, prim.dash) if prim.dash else "solid",
            alpha=prim.opacity,
        )
    )


def _draw_line(ax, prim: Line) -> None:
    ax.plot(
        [prim.x1, prim.x2],
        [prim.y1, prim.y2],
        color=prim.stroke,
        linewidth=prim.stroke_width * _PX_TO_PT,
        alpha=prim.opacity,
        solid_capstyle="butt",
    )


def _draw_rect(ax, prim: Rect) -> None:
    ax.add_patch(
        FancyBboxPatch(
            (prim.x, prim.y),
            prim.width,
            prim.height,
            boxstyle=f"round,pad=0,rounding_size={prim.corner_radius}",
            facecolor=prim.fill if prim.fill else "none",
            edgecolor=prim.stroke if prim.stroke else "none",
            linewidth=_PX_TO_PT,
        )
    )


def _draw_text(ax, prim: Text) -> None:
    ax.text(
        prim.x,
        prim.y,
        prim.text,
        color=prim.color,
        fontsize=prim.font_size * _PX_TO_PT,
        fontweight="bold" if prim.bold else "normal",
        ha=_ANCHOR_TO_HA.get(prim.anchor, "center"),
        va="baseline",
    )


_DRAWERS = {
    Circle: _draw_circle,
    Line: _draw_line,
    Rect: _draw_rect,
    Text: _draw_text,
}


def render_projection(projection: Projection, ax=None):
    """
    Draw all primitives of a projection.

    Args:
        projection: Diagram to draw
        ax: Existing axes (optional); a borderless figure sized to the
            canvas is created when omitted

    Returns:
        The matplotlib Figure
    """
    if ax is None:
        fig = plt.figure(
            figsize=(projection.width / SCREEN_DPI, projection.height / SCREEN_DPI),
            dpi=SCREEN_DPI,
        )
        ax = fig.add_axes([0.0, 0.0, 1.0, 1.0])
    else:
        fig = ax.figure

    ax.set_facecolor(PlotColors.BACKGROUND)
    ax.set_xlim(0.0, projection.width)
    ax.set_ylim(projection.height, 0.0)  # y axis points down
    ax.set_aspect("equal")
    ax.set_axis_off()

    for prim in projection.primitives:
        _DRAWERS[type(prim)](ax, prim)

    return fig


def save_sound_map(projection: Projection, filepath: str, dpi: float = EXPORT_DPI) -> str:
    """
    Render a projection to an image file.

    The format follows the file suffix (.png, .svg, .pdf).

    Args:
        projection: Diagram to draw
        filepath: Output file path
        dpi: Output resolution (default: 150, 1.5 image pixels per canvas pixel)

    Returns:
        The written file path

    Raises:
        ValueError: If the suffix names an unsupported format
        OSError: If the file cannot be written
    """
    directory = os.path.dirname(filepath)
    if directory:
        os.makedirs(directory, exist_ok=True)

    fig = render_projection(projection)
    try:
        fig.patch.set_facecolor(PlotColors.BACKGROUND)
        fig.savefig(filepath, dpi=dpi, facecolor=fig.get_facecolor())
    finally:
        plt.close(fig)

    logger.info("Sound map saved to %s", filepath)
    return filepath
