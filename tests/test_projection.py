"""
SoundMap Projection Test Suite

Tests for the adaptive scale and primitive layout of the sound map.

Test ID | Description                    | Reference             | Tolerance
--------|--------------------------------|-----------------------|------------
1       | Domain from furthest element   | D = 1.2 * max(r, R)   | ±0.001 m
2       | Scale endpoints and centre     | [-D, D] -> [0, 600]   | Exact centre
3       | Degenerate all-zero domain     | Epsilon floor         | Finite
4       | Primitive layout               | Draw order            | Exact
5       | Non-square canvas              | Centred square plot   | Exact
"""

import math
import os
import sys

import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from soundmap.physics.constants import MIN_DOMAIN_HALF_WIDTH_M
from soundmap.physics.contours import ContourLevel, Threshold, generate_contours
from soundmap.visualization.projection import (
    Circle,
    LinearScale,
    Line,
    PrimitiveRole,
    Rect,
    Text,
    compute_domain_max,
    project,
    projection_to_dict,
)


@pytest.fixture
def reference_contours():
    """Flanders rings for a 60 dB hemispherical source (2.239 m, 7.079 m)."""
    return generate_contours(
        60.0, [Threshold(db=45.0, label="Day"), Threshold(db=35.0, label="Night")]
    )


# =============================================================================
# TEST 1: Domain Derivation
# =============================================================================


class TestDomain:
    def test_reference_domain(self, reference_contours):
        """distance 5 m, outer ring 7.079 m -> D ≈ 8.495 m"""
        domain_max = compute_domain_max(5.0, reference_contours)
        assert domain_max == pytest.approx(8.495, abs=0.001)

    def test_distance_dominates(self, reference_contours):
        """Observer beyond the outer ring sets the domain"""
        assert compute_domain_max(20.0, reference_contours) == pytest.approx(24.0)

    def test_no_contours(self):
        assert compute_domain_max(10.0, []) == pytest.approx(12.0)

    def test_unsorted_contours_use_max_radius(self):
        contours = [ContourLevel(9.0, 30.0), ContourLevel(1.0, 50.0)]
        assert compute_domain_max(2.0, contours) == pytest.approx(10.8)

    def test_fixed_twenty_percent_margin(self, reference_contours):
        projection = project(5.0, reference_contours)
        outer = projection.by_role(PrimitiveRole.CONTOUR)[-1]

        # Outer ring spans exactly 1/1.2 of the half canvas
        assert outer.r == pytest.approx(300.0 / 1.2)


# =============================================================================
# TEST 2: Linear Scale
# =============================================================================


class TestLinearScale:
    def test_reference_scale_span(self, reference_contours):
        projection = project(5.0, reference_contours)
        scale = projection.scale
        domain_max = projection.domain_max

        assert scale(-domain_max) == pytest.approx(0.0, abs=1e-9)
        assert scale(domain_max) == pytest.approx(600.0)
        assert scale(0.0) == 300.0

    def test_scale_accepts_arrays(self):
        scale = LinearScale(domain=(-10.0, 10.0), range=(0.0, 600.0))
        result = scale(np.array([-10.0, 0.0, 5.0]))

        assert isinstance(result, np.ndarray)
        np.testing.assert_allclose(result, [0.0, 300.0, 450.0])

    def test_scalar_returns_float(self):
        scale = LinearScale(domain=(-10.0, 10.0), range=(0.0, 600.0))
        assert isinstance(scale(2.0), float)

    def test_invert(self):
        scale = LinearScale(domain=(-10.0, 10.0), range=(0.0, 600.0))
        assert scale.invert(450.0) == pytest.approx(5.0)
        assert scale.invert(scale(-3.3)) == pytest.approx(-3.3)

    def test_pixels_per_meter(self):
        scale = LinearScale(domain=(-10.0, 10.0), range=(0.0, 600.0))
        assert scale.pixels_per_meter == pytest.approx(30.0)


# =============================================================================
# TEST 3: Degenerate Domain
# =============================================================================


class TestDegenerateDomain:
    def test_all_zero(self):
        """Zero distance and zero radii never divide by zero"""
        domain_max = compute_domain_max(0.0, [ContourLevel(0.0, 45.0)])
        assert domain_max == MIN_DOMAIN_HALF_WIDTH_M

    def test_all_zero_projection_is_finite(self):
        projection = project(0.0, [], pressure_db=72.0)

        assert projection.domain_max > 0
        assert projection.scale(0.0) == 300.0
        for prim in projection.primitives:
            for value in vars(prim).values():
                if isinstance(value, float):
                    assert math.isfinite(value)

    def test_nan_distance_falls_back(self):
        assert compute_domain_max(float("nan"), []) == MIN_DOMAIN_HALF_WIDTH_M


# =============================================================================
# TEST 4: Primitive Layout
# =============================================================================


class TestPrimitiveLayout:
    def test_draw_order(self, reference_contours):
        projection = project(5.0, reference_contours, pressure_db=38.0)
        roles = [p.role for p in projection.primitives]

        assert roles == [
            PrimitiveRole.CONTOUR,
            PrimitiveRole.CONTOUR_LABEL,
            PrimitiveRole.CONTOUR,
            PrimitiveRole.CONTOUR_LABEL,
            PrimitiveRole.SOURCE,
            PrimitiveRole.SOURCE_LABEL,
            PrimitiveRole.CONNECTOR,
            PrimitiveRole.OBSERVER,
            PrimitiveRole.OBSERVER_LABEL_BOX,
            PrimitiveRole.OBSERVER_PRESSURE,
            PrimitiveRole.OBSERVER_DISTANCE,
        ]

    def test_contour_rings(self, reference_contours):
        projection = project(5.0, reference_contours)
        rings = projection.by_role(PrimitiveRole.CONTOUR)
        labels = projection.by_role(PrimitiveRole.CONTOUR_LABEL)

        assert all(isinstance(r, Circle) for r in rings)
        assert [ring.r for ring in rings] == sorted(ring.r for ring in rings)
        for ring, contour in zip(rings, reference_contours):
            assert (ring.cx, ring.cy) == (300.0, 300.0)
            assert ring.r == pytest.approx(contour.radius_m * projection.scale.pixels_per_meter)
            assert ring.dash is not None

        # Labels sit just above the top of each ring
        for ring, label in zip(rings, labels):
            assert isinstance(label, Text)
            assert label.x == ring.cx
            assert label.y == pytest.approx(ring.cy - ring.r - 6.0)
        assert [label.text for label in labels] == ["Day", "Night"]

    def test_source_at_origin(self, reference_contours):
        projection = project(5.0, reference_contours)
        (source,) = projection.by_role(PrimitiveRole.SOURCE)

        assert (source.cx, source.cy) == projection.to_canvas(0.0, 0.0) == (300.0, 300.0)
        assert source.r == 8.0

    def test_observer_on_positive_axis(self, reference_contours):
        projection = project(5.0, reference_contours)
        (observer,) = projection.by_role(PrimitiveRole.OBSERVER)
        (connector,) = projection.by_role(PrimitiveRole.CONNECTOR)

        expected_x = 300.0 + 5.0 * projection.scale.pixels_per_meter
        assert observer.cx == pytest.approx(expected_x)
        assert observer.cy == 300.0
        assert isinstance(connector, Line)
        assert (connector.x1, connector.y1) == (300.0, 300.0)
        assert connector.x2 == pytest.approx(expected_x)
        assert connector.y2 == 300.0

    def test_observer_label(self, reference_contours):
        projection = project(5.0, reference_contours, pressure_db=38.0)
        (box,) = projection.by_role(PrimitiveRole.OBSERVER_LABEL_BOX)
        (pressure,) = projection.by_role(PrimitiveRole.OBSERVER_PRESSURE)
        (distance,) = projection.by_role(PrimitiveRole.OBSERVER_DISTANCE)
        (observer,) = projection.by_role(PrimitiveRole.OBSERVER)

        assert isinstance(box, Rect)
        assert box.x == pytest.approx(observer.cx + 10.0)
        assert (box.width, box.height) == (60.0, 30.0)
        assert pressure.text == "38.0 dB"
        assert distance.text == "5m"

    def test_fractional_distance_label(self):
        projection = project(2.5, [])
        (distance,) = projection.by_role(PrimitiveRole.OBSERVER_DISTANCE)
        assert distance.text == "2.5m"

    def test_pressure_omitted(self, reference_contours):
        projection = project(5.0, reference_contours)
        assert projection.by_role(PrimitiveRole.OBSERVER_PRESSURE) == []

    def test_unlabelled_contour(self):
        projection = project(5.0, [ContourLevel(radius_m=3.0, threshold_db=45.0)])
        (label,) = projection.by_role(PrimitiveRole.CONTOUR_LABEL)
        assert label.text == "45 dB"

    def test_recomputed_identically(self, reference_contours):
        """Same inputs always give the same frame"""
        first = project(5.0, reference_contours, pressure_db=38.0)
        second = project(5.0, reference_contours, pressure_db=38.0)
        assert first == second
        assert first is not second

    def test_to_dict(self, reference_contours):
        data = projection_to_dict(project(5.0, reference_contours, pressure_db=38.0))

        assert data["domain_max_m"] == pytest.approx(8.495, abs=0.001)
        assert data["primitives"][0] == {"type": "circle", "role": "contour"}
        assert len(data["primitives"]) == 11


# =============================================================================
# TEST 5: Non-square Canvas
# =============================================================================


class TestCanvasSize:
    def test_wide_canvas_centred(self, reference_contours):
        projection = project(5.0, reference_contours, width=800, height=600)
        (source,) = projection.by_role(PrimitiveRole.SOURCE)

        assert (source.cx, source.cy) == (400.0, 300.0)
        assert projection.offset_x == 100.0
        assert projection.scale.range == (0.0, 600.0)

    def test_tall_canvas_uses_width(self, reference_contours):
        projection = project(5.0, reference_contours, width=400, height=900)
        (source,) = projection.by_role(PrimitiveRole.SOURCE)

        assert (source.cx, source.cy) == (200.0, 450.0)
        assert projection.scale.range == (0.0, 400.0)
