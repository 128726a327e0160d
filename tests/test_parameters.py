import pytest

from galaxy import GalaxyParameters, InvalidParameter, parse_color
from galaxy.parameters import color_to_hex
from config import galaxy as config


def test_defaults_match_config():
    params = GalaxyParameters.from_config(config.GALAXY)
    assert params.count == 100_000
    assert params.branches == 3
    assert params.radius == 5.0
    assert params.inside_color == parse_color("#ff6030")
    assert params.show_lines is False


def test_parse_color_forms():
    assert parse_color("#ffffff") == (1.0, 1.0, 1.0)
    assert parse_color("#000") == (0.0, 0.0, 0.0)
    assert parse_color((0.25, 0.5, 1.0)) == (0.25, 0.5, 1.0)
    assert color_to_hex(parse_color("#1b3984")) == "#1b3984"


@pytest.mark.parametrize("bad", ["#12", "#gggggg", (0.1, 0.2), (0.0, 2.0, 0.0)])
def test_parse_color_rejects(bad):
    with pytest.raises(InvalidParameter):
        parse_color(bad)


def test_parameters_are_immutable_and_replace_returns_new_value():
    params = GalaxyParameters(count=500, seed=1)
    changed = params.replace(branches=5)
    assert params.branches == 3
    assert changed.branches == 5
    with pytest.raises(Exception):
        params.count = 10


@pytest.mark.parametrize("changes", [
    {"count": 0},
    {"radius": 0.0},
    {"radius": -1.0},
    {"branches": 0},
    {"max_connections": 0},
    {"randomness_power": 0.0},
])
def test_validate_rejects_structural_violations(changes):
    with pytest.raises(InvalidParameter):
        GalaxyParameters(**changes).validate()


def test_validate_lines_rejects_nonpositive_distance():
    with pytest.raises(InvalidParameter):
        GalaxyParameters(line_distance=0.0).validate_lines()


def test_invalid_parameter_is_value_error():
    with pytest.raises(ValueError):
        GalaxyParameters(count=-3).validate()


def test_to_dict_round_trips_through_from_config():
    params = GalaxyParameters(count=1234, inside_color="#abcdef", seed=9)
    assert GalaxyParameters.from_config(params.to_dict()) == params
