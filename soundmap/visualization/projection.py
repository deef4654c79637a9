"""
Sound Map Coordinate Projection

Maps physical distances [m] onto a square drawing surface [px] and lays
out the diagram as plain draw primitives:

    - Regulatory contour rings (dashed) with labels on top
    - Source marker at the origin
    - Observer marker on the positive x axis, joined to the source
    - Observer label with the pressure level and distance

The domain is symmetric, [-D, +D] on both axes, with
D = 1.2 * max(observer distance, largest contour radius), so every element
is visible with a fixed 20% margin.

Primitives carry canvas coordinates with the y axis pointing down
(SVG convention). Any backend can draw them; see matplotlib_2d.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

from soundmap.physics.constants import (
    CANVAS_SIZE_PX,
    DOMAIN_MARGIN_FACTOR,
    MIN_DOMAIN_HALF_WIDTH_M,
    PlotColors,
)
from soundmap.physics.contours import ContourLevel
from soundmap.physics.propagation import format_number

# =============================================================================
# LINEAR SCALE
# =============================================================================


@dataclass(frozen=True)
class LinearScale:
    """
    Linear mapping from a domain [m] to a pixel range [px].

    Accepts scalars (returns float) or array-likes (returns ndarray).

    Attributes:
        domain: (d0, d1) input interval [m]
        range: (r0, r1) output interval [px]
    """

    domain: Tuple[float, float]
    range: Tuple[float, float]

    def __call__(self, value_m: Union[float, Sequence[float], np.ndarray]):
        d0, d1 = self.domain
        r0, r1 = self.range
        t = (np.asarray(value_m, dtype=np.float64) - d0) / (d1 - d0)
        result = r0 + t * (r1 - r0)
        return float(result) if result.ndim == 0 else result

    def invert(self, value_px: Union[float, Sequence[float], np.ndarray]):
        """Map pixels back to metres."""
        d0, d1 = self.domain
        r0, r1 = self.range
        t = (np.asarray(value_px, dtype=np.float64) - r0) / (r1 - r0)
        result = d0 + t * (d1 - d0)
        return float(result) if result.ndim == 0 else result

    @property
    def pixels_per_meter(self) -> float:
        """Scale factor [px/m]."""
        return (self.range[1] - self.range[0]) / (self.domain[1] - self.domain[0])


# =============================================================================
# DRAW PRIMITIVES
# =============================================================================


class PrimitiveRole(Enum):
    """What a primitive represents in the diagram."""

    CONTOUR = "contour"
    CONTOUR_LABEL = "contour_label"
    SOURCE = "source"
    SOURCE_LABEL = "source_label"
    CONNECTOR = "connector"
    OBSERVER = "observer"
    OBSERVER_LABEL_BOX = "observer_label_box"
    OBSERVER_PRESSURE = "observer_pressure"
    OBSERVER_DISTANCE = "observer_distance"


@dataclass(frozen=True)
class Circle:
    cx: float
    cy: float
    r: float
    role: PrimitiveRole
    fill: Optional[str] = None
    stroke: Optional[str] = None
    stroke_width: float = 1.0
    dash: Optional[Tuple[float, float]] = None
    opacity: float = 1.0


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    role: PrimitiveRole
    stroke: str = PlotColors.OBSERVER
    stroke_width: float = 1.0
    opacity: float = 1.0


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float
    role: PrimitiveRole
    fill: Optional[str] = None
    stroke: Optional[str] = None
    corner_radius: float = 0.0


@dataclass(frozen=True)
class Text:
    x: float
    y: float
    text: str
    role: PrimitiveRole
    color: str = PlotColors.TEXT_PRIMARY
    font_size: float = 12.0
    bold: bool = False
    anchor: str = "middle"


Primitive = Union[Circle, Line, Rect, Text]


# =============================================================================
# PROJECTION
# =============================================================================


@dataclass(frozen=True)
class Projection:
    """
    Complete diagram: scale plus ordered draw primitives.

    Attributes:
        scale: Metres -> pixels along one axis, range [0, min(width, height)]
        domain_max: Half-width D of the symmetric domain [m]
        width: Canvas width [px]
        height: Canvas height [px]
        offset_x: Horizontal shift centring the square plot area [px]
        offset_y: Vertical shift centring the square plot area [px]
        primitives: Draw instructions, back to front
    """

    scale: LinearScale
    domain_max: float
    width: float
    height: float
    offset_x: float = 0.0
    offset_y: float = 0.0
    primitives: Tuple[Primitive, ...] = field(default_factory=tuple)

    def to_canvas(self, x_m: float, y_m: float = 0.0) -> Tuple[float, float]:
        """Physical position [m] -> canvas position [px], y pointing down."""
        return (self.offset_x + self.scale(x_m), self.offset_y + self.scale(-y_m))

    def by_role(self, role: PrimitiveRole) -> List[Primitive]:
        """All primitives with the given role, in draw order."""
        return [p for p in self.primitives if p.role is role]


def compute_domain_max(distance_m: float, contours: Iterable[ContourLevel]) -> float:
    """
    Half-width of the symmetric plot domain.

    D = 1.2 * max(|distance|, largest contour radius), with a small positive
    floor when everything sits at the origin.

    Args:
        distance_m: Observer distance [m]
        contours: Contour rings (any order)

    Returns:
        Domain half-width [m], always > 0
    """
    max_contour_radius = max((c.radius_m for c in contours), default=0.0)
    relevant_max = max(abs(distance_m), max_contour_radius)
    domain_max = relevant_max * DOMAIN_MARGIN_FACTOR

    # Also catches NaN
    if not domain_max > MIN_DOMAIN_HALF_WIDTH_M:
        return MIN_DOMAIN_HALF_WIDTH_M
    return domain_max


def project(
    distance_m: float,
    contours: Sequence[ContourLevel],
    pressure_db: Optional[float] = None,
    width: float = CANVAS_SIZE_PX,
    height: float = CANVAS_SIZE_PX,
) -> Projection:
    """
    Build the sound map diagram.

    Args:
        distance_m: Observer distance [m], placed at (distance, 0)
        contours: Contour rings, sorted ascending by radius
        pressure_db: Rounded pressure level at the observer [dB]; the
            pressure text is omitted when None
        width: Canvas width [px]
        height: Canvas height [px]

    Returns:
        Projection with scale and primitives
    """
    domain_max = compute_domain_max(distance_m, contours)
    size = min(width, height)
    scale = LinearScale(domain=(-domain_max, domain_max), range=(0.0, float(size)))

    # Centre the square plot area on the canvas
    origin_px = scale(0.0)
    offset_x = width / 2 - origin_px
    offset_y = height / 2 - origin_px

    cx = offset_x + origin_px
    cy = offset_y + origin_px
    observer_x = offset_x + scale(distance_m)

    primitives: List[Primitive] = []

    # 1. Regulatory contours (dashed red rings)
    for contour in contours:
        r_px = scale(contour.radius_m) - origin_px
        primitives.append(
            Circle(
                cx=cx,
                cy=cy,
                r=r_px,
                role=PrimitiveRole.CONTOUR,
                stroke=PlotColors.CONTOUR,
                stroke_width=2.0,
                dash=(6.0, 4.0),
                opacity=0.8,
            )
        )
        label = contour.display_label
        primitives.append(
            Text(
                x=cx,
                y=cy - r_px - 6.0,
                text=label,
                role=PrimitiveRole.CONTOUR_LABEL,
                color=PlotColors.CONTOUR_LABEL,
                font_size=11.0,
                bold=True,
            )
        )

    # 2. Source at the origin
    primitives.append(
        Circle(
            cx=cx,
            cy=cy,
            r=8.0,
            role=PrimitiveRole.SOURCE,
            fill=PlotColors.SOURCE,
            stroke=PlotColors.MARKER_EDGE,
            stroke_width=2.0,
        )
    )
    primitives.append(
        Text(
            x=cx,
            y=cy + 20.0,
            text="Source",
            role=PrimitiveRole.SOURCE_LABEL,
            color=PlotColors.SOURCE,
            bold=True,
        )
    )

    # 3. Observer on the positive x axis
    primitives.append(
        Line(
            x1=cx,
            y1=cy,
            x2=observer_x,
            y2=cy,
            role=PrimitiveRole.CONNECTOR,
            stroke=PlotColors.OBSERVER,
            stroke_width=2.0,
            opacity=0.3,
        )
    )
    primitives.append(
        Circle(
            cx=observer_x,
            cy=cy,
            r=6.0,
            role=PrimitiveRole.OBSERVER,
            fill=PlotColors.OBSERVER,
            stroke=PlotColors.MARKER_EDGE,
            stroke_width=2.0,
        )
    )

    # 4. Observer label
    primitives.append(
        Rect(
            x=observer_x + 10.0,
            y=cy - 15.0,
            width=60.0,
            height=30.0,
            role=PrimitiveRole.OBSERVER_LABEL_BOX,
            fill=PlotColors.LABEL_BACKGROUND,
            stroke=PlotColors.LABEL_BORDER,
            corner_radius=4.0,
        )
    )
    if pressure_db is not None:
        primitives.append(
            Text(
                x=observer_x + 40.0,
                y=cy - 4.0,
                text=f"{pressure_db:.1f} dB",
                role=PrimitiveRole.OBSERVER_PRESSURE,
                color=PlotColors.TEXT_PRIMARY,
                bold=True,
            )
        )
    primitives.append(
        Text(
            x=observer_x + 40.0,
            y=cy + 8.0,
            text=f"{format_number(distance_m)}m",
            role=PrimitiveRole.OBSERVER_DISTANCE,
            color=PlotColors.TEXT_SECONDARY,
            font_size=10.0,
        )
    )

    return Projection(
        scale=scale,
        domain_max=domain_max,
        width=float(width),
        height=float(height),
        offset_x=offset_x,
        offset_y=offset_y,
        primitives=tuple(primitives),
    )


def projection_to_dict(projection: Projection) -> Dict:
    """Convert projection to dictionary for logging/serialization."""
    return {
        "domain_max_m": projection.domain_max,
        "width_px": projection.width,
        "height_px": projection.height,
        "pixels_per_meter": projection.scale.pixels_per_meter,
        "primitives": [
            {"type": type(p).__name__.lower(), "role": p.role.value}
            for p in projection.primitives
        ],
    }
