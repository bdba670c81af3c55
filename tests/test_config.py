import pytest

from fractal_explorer.config import (
    ChaosGameConfig, EscapeTimeConfig, RenderConfig, TurtleCurveConfig,
)


class TestFractalConfigs:
    def test_defaults_are_valid(self) -> None:
        for config in (ChaosGameConfig(), EscapeTimeConfig(), TurtleCurveConfig(), RenderConfig()):
            config.validate()

    @pytest.mark.parametrize("config", [
        EscapeTimeConfig(max_iterations=0),
        EscapeTimeConfig(power=0),
        EscapeTimeConfig(max_iterations=True),
        EscapeTimeConfig(workers=0),
        TurtleCurveConfig(iteration=-1),
        TurtleCurveConfig(draw_rate=0),
        ChaosGameConfig(draw_rate=0),
        ChaosGameConfig(points=-10),
        ChaosGameConfig(seed=-1),
    ])
    def test_invalid_values(self, config) -> None:
        with pytest.raises(ValueError):
            config.validate()

    def test_iteration_zero_is_valid(self) -> None:
        TurtleCurveConfig(iteration=0).validate()

    def test_error_message_names_the_field(self) -> None:
        with pytest.raises(ValueError, match="max_iterations must be positive"):
            EscapeTimeConfig(max_iterations=-3).validate()


class TestDictConversion:
    def test_round_trip(self) -> None:
        config = EscapeTimeConfig(max_iterations=250, power=3, workers=2)
        assert EscapeTimeConfig.from_dict(config.to_dict()) == config

    def test_unknown_keys(self) -> None:
        with pytest.raises(ValueError, match="Unknown TurtleCurveConfig options: depth"):
            TurtleCurveConfig.from_dict({'depth': 3})

    def test_from_dict_validates(self) -> None:
        with pytest.raises(ValueError):
            ChaosGameConfig.from_dict({'points': 0})


class TestRenderConfig:
    def test_invalid_size(self) -> None:
        with pytest.raises(ValueError):
            RenderConfig(width=0).validate()

    def test_invalid_format(self) -> None:
        with pytest.raises(ValueError, match="Unsupported output_format"):
            RenderConfig(output_format='bmp').validate()

    def test_invalid_quality(self) -> None:
        with pytest.raises(ValueError):
            RenderConfig(jpeg_quality=101).validate()
