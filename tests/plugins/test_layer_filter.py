"""Tests for the built-in layer-filter extension."""

from __future__ import annotations

from pathlib import Path

import pytest
import structlog
from pydantic import ValidationError

from planext.domain.buildplan import BuildPlan, Layer
from planext.domain.errors import ConfigurationError
from planext.plugins.builtins.layer_filter import (
    LayerFilter,
    LayerFilterConfig,
    LayerFilterExtension,
)
from tests.conftest import entry, make_project


def _plan() -> BuildPlan:
    return BuildPlan(
        layers=(
            Layer(
                name="dependencies",
                entries=(
                    entry("/app/libs/google-http.jar"),
                    entry("/app/libs/in-house-core.jar"),
                    entry("/app/libs/slf4j.jar"),
                ),
            ),
            Layer(
                name="resources",
                entries=(entry("/app/resources/app.properties"), entry("/app/resources/log.xml")),
            ),
            Layer(name="classes", entries=(entry("/app/classes/Main.class"),)),
        )
    )


def _config(*filters: tuple[str, str]) -> LayerFilterConfig:
    return LayerFilterConfig(filters=[LayerFilter(glob=g, to_layer=t) for g, t in filters])


def _run(plan: BuildPlan, config: LayerFilterConfig | None, build_dir: Path) -> BuildPlan:
    return LayerFilterExtension().extend_container_build_plan(
        build_plan=plan,
        properties={},
        config=config,
        project=make_project(build_dir),
        logger=structlog.get_logger("test"),
    )


def _destinations(layer: Layer) -> list[str]:
    return [e.destination for e in layer.entries]


class TestLayerFilterConfig:
    def test_to_layer_alias(self) -> None:
        cfg = LayerFilterConfig.model_validate({"filters": [{"glob": "**", "toLayer": "all"}]})
        assert cfg.filters[0].to_layer == "all"

    def test_to_layer_defaults_to_delete(self) -> None:
        cfg = LayerFilterConfig.model_validate({"filters": [{"glob": "**"}]})
        assert cfg.filters[0].to_layer == ""

    def test_empty_glob_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LayerFilterConfig.model_validate({"filters": [{"glob": ""}]})

    def test_extra_config_type(self) -> None:
        assert LayerFilterExtension().extra_config_type() is LayerFilterConfig


class TestLayerFilterExtension:
    def test_move_to_new_layer(self, build_dir: Path) -> None:
        plan = _run(_plan(), _config(("**/google-*.jar", "google libraries")), build_dir)
        assert plan.layer_names() == ["dependencies", "resources", "classes", "google libraries"]
        assert _destinations(plan.layers[0]) == [
            "/app/libs/in-house-core.jar",
            "/app/libs/slf4j.jar",
        ]
        assert _destinations(plan.layers[3]) == ["/app/libs/google-http.jar"]

    def test_delete_with_empty_to_layer(self, build_dir: Path) -> None:
        plan = _run(_plan(), _config(("**/*.xml", "")), build_dir)
        assert _destinations(plan.layers[1]) == ["/app/resources/app.properties"]

    def test_last_matching_filter_wins(self, build_dir: Path) -> None:
        plan = _run(
            _plan(),
            _config(("/app/libs/*.jar", "jars"), ("**/in-house-*.jar", "in-house")),
            build_dir,
        )
        assert plan.layer_names() == ["resources", "classes", "jars", "in-house"]
        assert _destinations(plan.layers[2]) == [
            "/app/libs/google-http.jar",
            "/app/libs/slf4j.jar",
        ]
        assert _destinations(plan.layers[3]) == ["/app/libs/in-house-core.jar"]

    def test_later_delete_overrides_move(self, build_dir: Path) -> None:
        plan = _run(_plan(), _config(("/app/libs/*.jar", "jars"), ("**/slf4j.jar", "")), build_dir)
        jars = plan.layers[-1]
        assert jars.name == "jars"
        assert "/app/libs/slf4j.jar" not in _destinations(jars)

    def test_new_layers_in_first_appearance_order(self, build_dir: Path) -> None:
        plan = _run(
            _plan(),
            _config(
                ("**/*.class", "b-layer"),
                ("**/*.properties", "a-layer"),
                ("**/Main.class", "b-layer"),
            ),
            build_dir,
        )
        assert plan.layer_names()[-2:] == ["b-layer", "a-layer"]

    def test_empty_layers_dropped(self, build_dir: Path) -> None:
        plan = _run(_plan(), _config(("/app/classes/**", "")), build_dir)
        assert "classes" not in plan.layer_names()

    def test_new_layer_with_no_matches_not_created(self, build_dir: Path) -> None:
        plan = _run(_plan(), _config(("**/*.so", "natives")), build_dir)
        assert plan.layer_names() == ["dependencies", "resources", "classes"]

    def test_no_filters_is_identity(self, build_dir: Path) -> None:
        original = _plan()
        assert _run(original, LayerFilterConfig(), build_dir) == original

    def test_entry_attributes_preserved(self, build_dir: Path) -> None:
        original = _plan()
        plan = _run(original, _config(("**/slf4j.jar", "logging")), build_dir)
        assert plan.layers[-1].entries[0] == original.layers[0].entries[2]


class TestLayerFilterErrors:
    def test_missing_configuration(self, build_dir: Path) -> None:
        with pytest.raises(ConfigurationError, match="requires configuration"):
            _run(_plan(), None, build_dir)

    def test_moving_into_existing_layer_prohibited(self, build_dir: Path) -> None:
        with pytest.raises(ConfigurationError, match="existing layer 'classes'") as exc_info:
            _run(_plan(), _config(("**/*.jar", "classes")), build_dir)
        assert exc_info.value.extension == "layer-filter"

    def test_invalid_glob(self, build_dir: Path) -> None:
        with pytest.raises(ConfigurationError, match="invalid glob"):
            _run(_plan(), _config(("/app/{a,b", "x")), build_dir)

    def test_malformed_character_class(self, build_dir: Path) -> None:
        with pytest.raises(ConfigurationError, match="invalid glob") as exc_info:
            _run(_plan(), _config(("/app/[z-a]", "x")), build_dir)
        assert exc_info.value.extension == "layer-filter"
