import json

import numpy as np
import pytest

from envsel.config import DEFAULT_DIVISIONS, SelectionConfig, SelectionConfigData
from envsel.exceptions import ConfigurationError


def test_default_divisions_depend_on_objective_count():
    assert SelectionConfig.default(n_obj=3).divisions == 12
    assert SelectionConfig.default(n_obj=5).divisions == DEFAULT_DIVISIONS == 6
    assert SelectionConfig.default(n_obj=2, target_size=50).target_size == 50


def test_builder_produces_frozen_data():
    cfg = (
        SelectionConfig()
        .target_size(92)
        .divisions(12)
        .maximize([True, False, False])
        .max_reference_points(500)
        .seed(3)
        .fixed()
    )
    assert isinstance(cfg, SelectionConfigData)
    assert cfg.maximize == (True, False, False)
    assert SelectionConfig().maximize(np.True_).fixed().maximize is True
    assert SelectionConfig().maximize(np.array([True, False])).fixed().maximize == (True, False)
    with pytest.raises(AttributeError):
        cfg.divisions = 4  # type: ignore[misc]


def test_config_roundtrip_to_json():
    cfg = SelectionConfig().target_size(10).reference_points("refs.csv").fixed()
    data = json.loads(cfg.to_json())
    assert data["target_size"] == 10
    assert data["divisions"] == DEFAULT_DIVISIONS
    assert data["reference_points_path"] == "refs.csv"
    assert SelectionConfigData(**cfg.to_dict()) == cfg


@pytest.mark.parametrize(
    "builder",
    [
        lambda: SelectionConfig().divisions(-1),
        lambda: SelectionConfig().target_size(0),
        lambda: SelectionConfig().target_size(9.7),
        lambda: SelectionConfig().max_reference_points(0),
    ],
)
def test_invalid_values_raise(builder):
    with pytest.raises(ConfigurationError) as excinfo:
        builder().fixed()
    assert "must be" in excinfo.value.message
