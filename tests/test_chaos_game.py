import pytest

from fractal_explorer.core.chaos_game import (
    BARNSLEY_TRANSFORMS, BarnsleyFern, CHAOS_GAMES, PointSink, SierpinskiTriangle,
    lookup_chaos_game,
)
from fractal_explorer.core.geometry import AffineTransform, Point


class LimitedSink(PointSink):
    def __init__(self, limit: int):
        self.limit = limit
        self.points = []

    def send(self, point: Point) -> bool:
        if len(self.points) >= self.limit:
            return False
        self.points.append(point)
        return True


class TestBarnsleyFern:
    def test_seeded_games_are_reproducible(self) -> None:
        assert BarnsleyFern(seed=42).take(200) == BarnsleyFern(seed=42).take(200)

    def test_points_stay_on_the_fern(self) -> None:
        for point in BarnsleyFern(seed=7).take(5000):
            assert -0.3 <= point.x <= 0.3
            assert -0.01 <= point.y <= 1.01

    def test_weighted_choice(self) -> None:
        fern = BarnsleyFern(seed=1)
        draws = 10000
        stem_leaflets = sum(fern.choose_transform() is BARNSLEY_TRANSFORMS[1] for _ in range(draws))
        assert stem_leaflets / draws == pytest.approx(0.85, abs=0.03)

    def test_reset_returns_to_origin(self) -> None:
        fern = BarnsleyFern(seed=3)
        fern.take(10)
        fern.reset()
        assert fern.current == Point(0.0, 0.0)

    def test_custom_transforms(self) -> None:
        halve = AffineTransform(((0.5, 0.0, 5.0), (0.0, 0.5, 0.0)))
        fern = BarnsleyFern(transforms=(halve,), weights=(1,), seed=0)
        assert fern.next_point() == Point(0.5, 0.0)

    def test_mismatched_weights(self) -> None:
        with pytest.raises(ValueError):
            BarnsleyFern(weights=(1, 2, 3))

    def test_non_positive_weights(self) -> None:
        with pytest.raises(ValueError):
            BarnsleyFern(weights=(1, 0, 7, 7))

    def test_empty_transforms(self) -> None:
        with pytest.raises(ValueError):
            BarnsleyFern(transforms=(), weights=())


class TestSierpinskiTriangle:
    def test_vertices_in_range(self) -> None:
        game = SierpinskiTriangle(seed=11)
        assert len(game.vertices) == 3
        for vertex in game.vertices:
            assert -1.0 <= vertex.x < 1.0
            assert -1.0 <= vertex.y < 1.0

    def test_each_point_is_halfway_to_a_vertex(self) -> None:
        game = SierpinskiTriangle(seed=5)
        previous = game.current
        for _ in range(100):
            point = game.next_point()
            target = Point(2.0 * point.x - previous.x, 2.0 * point.y - previous.y)
            assert any(target.distance_to(vertex) < 1e-9 for vertex in game.vertices)
            previous = point

    def test_reset_picks_new_vertices(self) -> None:
        game = SierpinskiTriangle(seed=2)
        before = game.vertices
        game.reset()
        assert game.vertices != before

    def test_seeded_games_are_reproducible(self) -> None:
        assert SierpinskiTriangle(seed=9).take(50) == SierpinskiTriangle(seed=9).take(50)


class TestGenerate:
    def test_stops_when_sink_refuses(self) -> None:
        sink = LimitedSink(25)
        SierpinskiTriangle(seed=4).generate(sink)
        assert len(sink.points) == 25

    def test_generate_matches_take(self) -> None:
        sink = LimitedSink(20)
        BarnsleyFern(seed=8).generate(sink)
        assert sink.points == BarnsleyFern(seed=8).take(20)


class TestLookup:
    def test_every_game(self) -> None:
        for name, game_class in CHAOS_GAMES.items():
            assert isinstance(lookup_chaos_game(name, seed=0), game_class)

    def test_unknown(self) -> None:
        with pytest.raises(ValueError, match="Unknown chaos game"):
            lookup_chaos_game('mandelbrot')
