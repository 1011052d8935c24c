from dataclasses import replace

import pytest

from radial_layout import LayoutConfig


def test_defaults() -> None:
    config = LayoutConfig()
    assert config.reference_radius == 120.0
    assert config.item_base_size == 56.0
    assert config.relaxation_iterations == 10
    assert config.max_orbit_radius == pytest.approx(360.0)
    assert config.solver == "force"


def test_from_dict_round_trip_and_unknown_keys() -> None:
    config = LayoutConfig.from_dict({"reference_radius": 90.0, "solver": "arc"})
    assert config.reference_radius == 90.0
    assert config.solver == "arc"
    assert LayoutConfig.from_dict(config.to_dict()) == config

    with pytest.raises(KeyError):
        LayoutConfig.from_dict({"orbit": 90.0})


@pytest.mark.parametrize(
    "overrides",
    [
        {"damping": 0.0},
        {"damping": 1.5},
        {"relaxation_iterations": -1},
        {"angular_resolution": 0},
        {"radius_increment": 0.0},
        {"max_radius_factor": 0.5},
        {"item_margin": -1.0},
        {"hover_intent_delay": -0.1},
        {"solver": "spring"},
    ],
)
def test_invalid_values_rejected(overrides: dict) -> None:
    with pytest.raises(ValueError):
        LayoutConfig(**overrides)


def test_non_positive_reference_radius_is_allowed() -> None:
    config = replace(LayoutConfig(), reference_radius=0.0)
    assert config.reference_radius == 0.0
