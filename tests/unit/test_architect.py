"""
Unit tests for Architect target resolution and workspace loading.
"""

from pathlib import Path

import pytest

from relay.architect.architect import Architect
from relay.architect.workspace import discover_workspace, find_workspace_file, load_workspace
from relay.builders import register_builtin_builders
from relay.builders.dev_server import DevServerOptions
from relay.core.container import get_container
from relay.core.exceptions import ConfigFileError, InvalidServiceConfig, WorkspaceNotFoundError
from relay.core.interfaces.builder import TargetSpecifier

WORKSPACE_TOML = """
[projects.app]
root = "app"

[projects.app.targets.serve]
builder = "relay:dev-server"
options = { command = ["serve", "{port}"], port = 4200 }

[projects.app.targets.serve.configurations.production]
port = 8080
ssl = true
"""


class TestParseTargetString:
    def test_project_and_target(self):
        spec = Architect.parse_target_string("app:serve")

        assert spec == TargetSpecifier(project="app", target="serve")

    def test_with_configuration_and_overrides(self):
        spec = Architect.parse_target_string("app:serve:production", {"watch": False})

        assert spec.configuration == "production"
        assert spec.overrides == {"watch": False}
        assert str(spec) == "app:serve:production"

    @pytest.mark.parametrize("reference", ["app", ":serve", "app:", "a:b:c:d", ""])
    def test_malformed_references_are_rejected(self, reference):
        with pytest.raises(InvalidServiceConfig) as exc_info:
            Architect.parse_target_string(reference)

        assert exc_info.value.hint


class TestBuilderConfiguration:
    def test_target_options_configuration_and_overrides_merge_in_order(self, architect):
        spec = Architect.parse_target_string("app:serve:production", {"port": 9000})

        config = architect.get_builder_configuration(spec)

        assert config.builder == "relay:dev-server"
        assert config.root == "app"
        assert config.options == {"command": ["serve", "--port", "{port}"], "port": 9000, "ssl": False}

    def test_unknown_project(self, architect):
        with pytest.raises(InvalidServiceConfig, match="Project 'nope'"):
            architect.get_builder_configuration(TargetSpecifier("nope", "serve"))

    def test_unknown_target(self, architect):
        with pytest.raises(InvalidServiceConfig, match="no target 'build'"):
            architect.get_builder_configuration(TargetSpecifier("app", "build"))

    def test_unknown_configuration(self, architect):
        with pytest.raises(InvalidServiceConfig, match="no configuration 'staging'"):
            architect.get_builder_configuration(TargetSpecifier("app", "serve", "staging"))


class TestBuilderResolution:
    def test_unknown_builder(self, architect):
        config = architect.get_builder_configuration(TargetSpecifier("app", "serve"))

        with pytest.raises(InvalidServiceConfig, match="Unknown builder"):
            architect.get_builder_description(config)

    def test_valid_options_become_the_options_model(self, architect):
        register_builtin_builders(get_container())
        config = architect.get_builder_configuration(TargetSpecifier("app", "serve"))
        description = architect.get_builder_description(config)

        validated = architect.validate_builder_options(config, description)

        assert isinstance(validated.options, DevServerOptions)
        assert validated.options.port == 4200
        assert validated.options.watch is True

    def test_invalid_options_carry_validation_errors(self, architect):
        register_builtin_builders(get_container())
        spec = TargetSpecifier("app", "serve", overrides={"port": "not-a-port", "bogus": 1})
        config = architect.get_builder_configuration(spec)
        description = architect.get_builder_description(config)

        with pytest.raises(InvalidServiceConfig) as exc_info:
            architect.validate_builder_options(config, description)

        errors = exc_info.value.validation_errors
        assert any(error.startswith("port:") for error in errors)
        assert any(error.startswith("bogus:") for error in errors)

    def test_get_builder_hands_over_the_context(self, architect):
        register_builtin_builders(get_container())
        description = get_container().get_builder_description("relay:dev-server")

        builder = architect.get_builder(description)

        assert builder.context.architect is architect
        assert builder.context.processes is architect.processes

    def test_list_targets(self, architect):
        assert architect.list_targets() == [
            ("app", "e2e", "relay:e2e"),
            ("app", "serve", "relay:dev-server"),
        ]


class TestWorkspaceFile:
    def test_load_workspace(self, tmp_path: Path):
        path = tmp_path / "workspace.toml"
        path.write_text(WORKSPACE_TOML)

        workspace = load_workspace(path)

        assert workspace.root == tmp_path.resolve()
        target = workspace.definition.projects["app"].targets["serve"]
        assert target.configurations["production"] == {"port": 8080, "ssl": True}

    def test_discover_walks_up_from_nested_directory(self, tmp_path: Path):
        (tmp_path / "workspace.toml").write_text(WORKSPACE_TOML)
        nested = tmp_path / "app" / "src"
        nested.mkdir(parents=True)

        assert find_workspace_file(nested) == tmp_path / "workspace.toml"
        assert discover_workspace(nested).root == tmp_path.resolve()

    def test_missing_workspace_has_a_hint(self, tmp_path: Path):
        with pytest.raises(WorkspaceNotFoundError) as exc_info:
            discover_workspace(tmp_path, "no-such-workspace.toml")

        assert exc_info.value.hint

    def test_invalid_toml(self, tmp_path: Path):
        path = tmp_path / "workspace.toml"
        path.write_text("[projects.app\n")

        with pytest.raises(ConfigFileError):
            load_workspace(path)

    def test_target_without_builder_is_invalid(self, tmp_path: Path):
        path = tmp_path / "workspace.toml"
        path.write_text("[projects.app.targets.serve]\noptions = {}\n")

        with pytest.raises(ConfigFileError, match="invalid"):
            load_workspace(path)
