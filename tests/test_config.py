"""Tests for benchmark config loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from fenwick_bit_tree.utils.config import (
    load_config,
    load_yaml,
    merge_layers,
    parse_override,
    resolve_tree_preset,
    set_path,
    validate_config,
)


def _valid() -> dict:
    return {
        "tree": {"type": "growing", "capacity": 0, "growth": "exact"},
        "bench": {"sizes": [8, 16], "operations": 10},
    }


def test_load_default_config(configs_dir: Path) -> None:
    config = load_yaml(configs_dir / "default.yaml")
    assert config["tree"]["type"] == "growing"
    assert config["tree"]["value"]["type"] == "additive"
    assert "mlflow" in config


def test_load_empty_yaml(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_yaml(path) == {}


def test_merge_layers_nested_sections() -> None:
    base = {"tree": {"type": "growing", "capacity": 0}, "seed": 1}
    preset = {"tree": {"type": "fixed"}}
    merged = merge_layers(base, preset)
    assert merged == {"tree": {"type": "fixed", "capacity": 0}, "seed": 1}
    assert base["tree"]["type"] == "growing"


def test_merge_layers_later_scalar_replaces_section() -> None:
    assert merge_layers({"bench": {"sizes": [1]}}, {"bench": None}) == {"bench": None}


def test_parse_override_reads_yaml_values() -> None:
    assert parse_override("tree.capacity=64") == (["tree", "capacity"], 64)
    assert parse_override("bench.sizes=[8, 16]") == (["bench", "sizes"], [8, 16])
    assert parse_override("mlflow.enabled=false") == (["mlflow", "enabled"], False)


@pytest.mark.parametrize("text", ["tree.capacity", "=5"])
def test_parse_override_rejects_malformed(text: str) -> None:
    with pytest.raises(ValueError, match="key=value"):
        parse_override(text)


def test_set_path_creates_sections() -> None:
    config: dict = {}
    set_path(config, ["tree", "value", "type"], "array")
    assert config == {"tree": {"value": {"type": "array"}}}


def test_resolve_preset_by_name(configs_dir: Path) -> None:
    assert resolve_tree_preset("fixed", configs_dir) == configs_dir / "trees" / "fixed.yaml"


def test_resolve_preset_by_path(tmp_path: Path) -> None:
    path = tmp_path / "mine.yaml"
    path.write_text("tree:\n  type: fixed\n")
    assert resolve_tree_preset(path) == path


def test_resolve_unknown_preset(configs_dir: Path) -> None:
    with pytest.raises(ValueError, match="No tree preset 'segment'"):
        resolve_tree_preset("segment", configs_dir)


def test_validate_accepts_valid_config() -> None:
    config = _valid()
    assert validate_config(config) is config


@pytest.mark.parametrize(
    "key_path,value,message",
    [
        (["tree", "type"], "segment", "tree.type"),
        (["tree", "capacity"], -1, "tree.capacity"),
        (["tree", "capacity"], True, "tree.capacity"),
        (["tree", "growth"], "double", "tree.growth"),
        (["tree", "value"], {"type": "median"}, "tree.value"),
        (["bench", "sizes"], [], "bench.sizes"),
        (["bench", "sizes"], [8, 0], "bench.sizes"),
        (["bench", "operations"], None, "bench.operations"),
    ],
)
def test_validate_rejects_bad_values(key_path: list[str], value: object, message: str) -> None:
    config = _valid()
    set_path(config, key_path, value)
    with pytest.raises(ValueError, match=message):
        validate_config(config)


def test_validate_reports_missing_sections() -> None:
    with pytest.raises(ValueError, match="missing 'tree' section.*missing 'bench' section"):
        validate_config({})


def test_load_config_defaults(configs_dir: Path) -> None:
    config = load_config(configs_dir=configs_dir)
    assert config["tree"]["type"] == "growing"
    assert config["bench"]["operations"] == 10000


def test_load_config_with_named_preset(configs_dir: Path) -> None:
    config = load_config(tree="fixed", configs_dir=configs_dir)
    assert config["tree"]["type"] == "fixed"
    # Other defaults should be preserved
    assert config["tree"]["value"]["type"] == "additive"


def test_load_config_with_overrides(configs_dir: Path) -> None:
    config = load_config(
        tree="growing",
        overrides=["seed=99", "bench.sizes=[32]"],
        configs_dir=configs_dir,
    )
    assert config["seed"] == 99
    assert config["bench"]["sizes"] == [32]
    assert config["tree"]["growth"] == "power_of_two"


def test_load_config_rejects_invalid_override(configs_dir: Path) -> None:
    with pytest.raises(ValueError, match="tree.capacity"):
        load_config(overrides=["tree.capacity=-4"], configs_dir=configs_dir)
