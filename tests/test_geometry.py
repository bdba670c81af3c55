import math

import pytest

from fractal_explorer.core.geometry import (
    AffineTransform, Point, Vector, ViewAreaTransformer, cpow, deg2rad, distance, point_at,
)


class TestPointsAndVectors:
    def test_distance(self) -> None:
        assert distance(Point(0.0, 0.0), Point(3.0, 4.0)) == 5.0
        assert Point(1.0, 1.0).distance_to(Point(1.0, 1.0)) == 0.0

    def test_point_at(self) -> None:
        assert point_at(Point(1.0, 1.0), Vector(0.0, 2.0)) == Point(3.0, 1.0)

        moved = Point(0.0, 0.0).point_at(Vector(math.pi / 2.0, 1.0))
        assert moved.x == pytest.approx(0.0, abs=1e-12)
        assert moved.y == pytest.approx(1.0)

    def test_vector_deltas(self) -> None:
        vector = Vector(math.pi, 2.0)
        assert vector.delta_x == pytest.approx(-2.0)
        assert vector.delta_y == pytest.approx(0.0, abs=1e-12)

    def test_deg2rad(self) -> None:
        assert deg2rad(180.0) == pytest.approx(math.pi)
        assert deg2rad(-90.0) == pytest.approx(-math.pi / 2.0)

    def test_complex_conversion(self) -> None:
        assert Point(1.5, -2.0).to_complex() == complex(1.5, -2.0)
        assert Point.from_complex(complex(-0.5, 0.25)) == Point(-0.5, 0.25)


class TestAffineTransform:
    def test_apply(self) -> None:
        transform = AffineTransform(((1.0, 2.0, 3.0), (4.0, 5.0, 6.0)))
        assert transform.apply(Point(1.0, 1.0)) == Point(6.0, 15.0)

    def test_identity(self) -> None:
        identity = AffineTransform(((1.0, 0.0, 0.0), (0.0, 1.0, 0.0)))
        assert identity.apply(Point(-0.25, 7.0)) == Point(-0.25, 7.0)


class TestCpow:
    c = complex(5.5, 1.0)

    def test_small_powers(self) -> None:
        assert cpow(self.c, 0) == complex(1.0, 0.0)
        assert cpow(self.c, 1) == self.c
        assert cpow(self.c, 2) == self.c * self.c

    def test_cube_matches_repeated_multiplication(self) -> None:
        assert cpow(self.c, 3) == self.c * self.c * self.c
        assert cpow(self.c, 3) == complex(5.5 ** 3 - 3 * 5.5, 3 * 5.5 ** 2 - 1.0)

    def test_higher_powers(self) -> None:
        expected = self.c
        for _ in range(6):
            expected = expected * self.c
        assert cpow(self.c, 7) == expected

    def test_negative_exponent(self) -> None:
        with pytest.raises(ValueError):
            cpow(self.c, -1)


class TestViewAreaTransformer:
    def test_wide_window_square_area(self) -> None:
        vat = ViewAreaTransformer((800, 600), Point(-1.0, 1.0), Point(1.0, -1.0))

        assert vat.map_pixel_to_point((0, 300)).y == pytest.approx(0.0, abs=1e-12)
        assert vat.map_pixel_to_point((100, 0)).x == pytest.approx(-1.0)
        assert vat.map_pixel_to_point((0, 0)).x == pytest.approx(-4.0 / 3.0)
        assert vat.map_point_to_pixel(Point(1.0, 1.0)) == pytest.approx((700.0, 0.0), abs=1e-9)
        assert vat.map_point_to_pixel(Point(-1.0, -1.0)) == pytest.approx((100.0, 600.0))

    def test_tall_window_square_area(self) -> None:
        vat = ViewAreaTransformer((600, 800), Point(-1.0, 1.0), Point(1.0, -1.0))

        assert vat.map_pixel_to_point((0, 0)).y == pytest.approx(4.0 / 3.0)
        assert vat.map_point_to_pixel(Point(1.0, 1.0)) == pytest.approx((600.0, 100.0))
        assert vat.map_point_to_pixel(Point(-1.0, -1.0)) == pytest.approx((0.0, 700.0), abs=1e-9)

    @pytest.mark.parametrize("corners", [
        (Point(3.0, 12.0), Point(12.0, 3.0)),
        (Point(12.0, 3.0), Point(3.0, 12.0)),
        (Point(3.0, 3.0), Point(12.0, 12.0)),
    ])
    def test_corner_order_does_not_matter(self, corners) -> None:
        vat = ViewAreaTransformer((3, 4), *corners)

        assert vat.map_pixel_to_point((0, 0.5)).y == pytest.approx(12.0)
        assert vat.map_pixel_to_point((0, 3.5)).y == pytest.approx(3.0)
        assert vat.map_pixel_to_point((3, 0)).x == pytest.approx(12.0)
        assert vat.map_point_to_pixel(Point(3.0, 3.0)) == pytest.approx((0.0, 3.5), abs=1e-9)
        assert vat.map_point_to_pixel(Point(12.0, 12.0)) == pytest.approx((3.0, 0.5))

    def test_wide_area_centers_vertically(self) -> None:
        vat = ViewAreaTransformer((800, 600), Point(-2.0, 1.0), Point(1.0, -1.0))

        assert vat.map_pixel_to_point((0, 0)).y == pytest.approx(1.125)
        assert vat.map_pixel_to_point((0, 600)).y == pytest.approx(-1.125)
        assert vat.map_pixel_to_point((0, 0)).x == pytest.approx(-2.0)
        assert vat.map_pixel_to_point((800, 0)).x == pytest.approx(1.0)

    def test_round_trip(self) -> None:
        vat = ViewAreaTransformer((640, 480), Point(-2.5, 1.0), Point(1.0, -1.0))
        for px in range(0, 641, 64):
            for py in range(0, 481, 48):
                back = vat.map_point_to_pixel(vat.map_pixel_to_point((px, py)))
                assert back == pytest.approx((px, py), abs=1e-9)

    def test_degenerate_area(self) -> None:
        with pytest.raises(ValueError):
            ViewAreaTransformer((800, 600), Point(1.0, -1.0), Point(1.0, 1.0))
        with pytest.raises(ValueError):
            ViewAreaTransformer((800, 600), Point(-1.0, 0.5), Point(1.0, 0.5))

    def test_empty_viewport(self) -> None:
        with pytest.raises(ValueError):
            ViewAreaTransformer((0, 600), Point(-1.0, -1.0), Point(1.0, 1.0))
