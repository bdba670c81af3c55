import numpy as np
import pytest

from fractal_explorer.rendering.coloring import AEBLUE_U8, BLACK_U8, WHITE_U8
from fractal_explorer.rendering.surfaces import DrawingCanvas, Raster


class TestRaster:
    def test_background(self) -> None:
        raster = Raster(4, 3)
        assert raster.size == (4, 3)
        assert raster.get_pixel(3, 2) == WHITE_U8.to_tuple()

    def test_put_pixel(self) -> None:
        raster = Raster(4, 3)
        raster.put_pixel(1, 2, AEBLUE_U8)
        assert raster.get_pixel(1, 2) == (0, 0, 48, 255)

    def test_write_column(self) -> None:
        raster = Raster(4, 3)
        column = np.zeros((3, 4), dtype=np.uint8)
        raster.write_column(2, column)
        snapshot = raster.snapshot()
        assert snapshot.shape == (3, 4, 4)
        assert (snapshot[:, 2] == 0).all()
        assert (snapshot[:, 1] == 255).all()

    def test_write_column_shape(self) -> None:
        with pytest.raises(ValueError):
            Raster(4, 3).write_column(0, np.zeros((4, 4), dtype=np.uint8))

    def test_snapshot_is_a_copy(self) -> None:
        raster = Raster(2, 2)
        snapshot = raster.snapshot()
        raster.fill(BLACK_U8)
        assert (snapshot == 255).all()

    def test_to_image(self) -> None:
        image = Raster(5, 2).to_image()
        assert image.size == (5, 2)
        assert image.mode == 'RGBA'

    def test_empty_raster(self) -> None:
        with pytest.raises(ValueError):
            Raster(0, 5)


class TestDrawingCanvas:
    def test_draw_line(self) -> None:
        canvas = DrawingCanvas(10, 10)
        canvas.draw_line((0, 5), (9, 5), BLACK_U8)
        pixels = canvas.to_array()
        assert canvas.segments_drawn == 1
        assert tuple(pixels[5, 4]) == BLACK_U8.to_tuple()
        assert tuple(pixels[0, 0]) == WHITE_U8.to_tuple()

    def test_draw_dot(self) -> None:
        canvas = DrawingCanvas(10, 10)
        canvas.draw_dot((3.2, 7.9), AEBLUE_U8)
        assert canvas.dots_drawn == 1
        assert tuple(canvas.to_array()[7, 3]) == AEBLUE_U8.to_tuple()

    def test_clear(self) -> None:
        canvas = DrawingCanvas(10, 10)
        canvas.draw_line((0, 0), (9, 9))
        canvas.clear()
        assert canvas.segments_drawn == 0
        assert (canvas.to_array() == 255).all()

    def test_resize(self) -> None:
        canvas = DrawingCanvas(10, 10)
        canvas.resize(20, 5)
        assert canvas.size == (20, 5)
        assert canvas.to_array().shape == (5, 20, 4)
