import json
import os

import pytest
from pydantic import ValidationError

from nodebuilder.config import Config
from nodebuilder.constants import Environment, Restart
from nodebuilder.exceptions import (
    ConfigFileMissingError,
    ConfigParsingError,
    ConfigValidationError,
)


def _drop(data: dict, dotted: str):
    *parents, last = dotted.split(".")
    node = data
    for key in parents:
        node = node[key]
    del node[last]


def _set(data: dict, dotted: str, value):
    *parents, last = dotted.split(".")
    node = data
    for key in parents:
        node = node[key]
    node[last] = value


class TestConfigLoading:
    """Tests for basic loading and normalization."""

    def test_load_valid_manifest(self, load_config, manifest_data, tmp_path):
        config = load_config(manifest_data)
        assert config.name == "@scope/my-app"
        assert config.version == "1.2.3"
        assert config.node == "14.15.3"
        assert config.entry == "index.js"
        assert config.environments == ()
        assert config.copy_rules == ()

    def test_dirs_are_resolved_against_manifest_dir(self, load_config, manifest_data, tmp_path):
        config = load_config(manifest_data)
        assert config.dirs.root.__path__() == str(tmp_path)
        assert config.dirs.build.__path__() == str(tmp_path / "dist")
        assert config.dirs.src.__path__() == str(tmp_path / "src")
        assert config.dirs.temp.__path__() == str(tmp_path / "dist" / "temp")

    def test_custom_temp_dir(self, load_config, manifest_data, tmp_path):
        manifest_data["builder"]["dirs"]["temp"] = ".cache/build"
        config = load_config(manifest_data)
        assert config.dirs.temp.__path__() == str(tmp_path / ".cache" / "build")

    @pytest.mark.parametrize(
        "name, shortcut",
        [
            ("@scope/my-app", "my-app"),
            ("my-app", "my-app"),
            ("@invipo/gateway", "gateway"),
        ],
    )
    def test_shortcut_strips_scope(self, load_config, manifest_data, name, shortcut):
        manifest_data["name"] = name
        config = load_config(manifest_data)
        assert config.shortcut == shortcut
        assert config.bundle_name == f"{shortcut}.js"

    def test_unknown_keys_are_ignored(self, load_config, manifest_data):
        manifest_data["dependencies"] = {"express": "^4.0.0"}
        manifest_data["builder"]["unknown"] = True
        config = load_config(manifest_data)
        assert config.name == "@scope/my-app"

    def test_environments_are_deduplicated_in_order(self, load_config, manifest_data):
        manifest_data["builder"]["environments"] = ["docker", "linux-x64", "docker"]
        config = load_config(manifest_data)
        assert config.environments == (Environment.DOCKER, Environment.LINUX_X64)
        assert config.binary_environments == [Environment.LINUX_X64]
        assert config.has(Environment.DOCKER)
        assert not config.has(Environment.WIN_X64)

    def test_docker_defaults_when_section_missing(self, load_config, manifest_data):
        config = load_config(manifest_data)
        assert config.docker.image is None
        assert config.docker.run == []
        assert config.docker.restart is None

    def test_docker_section_aliases(self, load_config, manifest_data):
        manifest_data["builder"]["docker"] = {
            "restart": "on-failure",
            "volumes": [{"hostPath": "./data", "servicePath": "/data"}],
            "ports": [{"hostPort": 8080, "containerPort": 80}],
        }
        config = load_config(manifest_data)
        assert config.docker.restart == Restart.ON_FAILURE
        assert config.docker.volumes[0].host_path == "./data"
        assert config.docker.ports[0].container_port == 80

    def test_copy_rules_use_from_to_keys(self, load_config, manifest_data):
        manifest_data["builder"]["copy"] = [{"from": "config.json", "to": "config.json"}]
        config = load_config(manifest_data)
        assert config.copy_rules[0].from_path == "config.json"
        assert config.copy_rules[0].to_path == "config.json"

    def test_service_defaults(self, load_config, manifest_data):
        config = load_config(manifest_data)
        assert config.service.root == "/srv/invipo"
        assert config.service.description is None

    def test_normalized_config_is_frozen(self, load_config, manifest_data):
        config = load_config(manifest_data)
        with pytest.raises(ValidationError):
            config.model.name = "other"


class TestConfigRejection:
    """A rejected manifest never leaves anything on disk."""

    @pytest.mark.parametrize(
        "field",
        [
            "name",
            "version",
            "builder",
            "builder.dirs",
            "builder.entry",
            "builder.node",
            "builder.dirs.build",
            "builder.dirs.src",
        ],
    )
    def test_missing_required_field(self, load_config, manifest_data, tmp_path, field):
        _drop(manifest_data, field)
        with pytest.raises(ConfigValidationError, match=f"`{field}` property is missing"):
            load_config(manifest_data)
        assert not (tmp_path / "dist").exists()

    @pytest.mark.parametrize("field", ["name", "version", "builder.entry", "builder.node", "builder.dirs.src"])
    @pytest.mark.parametrize("value", ["", 42])
    def test_empty_or_non_string_field(self, load_config, manifest_data, field, value):
        _set(manifest_data, field, value)
        with pytest.raises(ConfigValidationError, match=f"`{field}` is empty or not a string"):
            load_config(manifest_data)

    def test_message_points_to_documentation(self, load_config, manifest_data):
        del manifest_data["version"]
        with pytest.raises(ConfigValidationError, match="Please check documentation"):
            load_config(manifest_data)

    def test_unknown_environment(self, load_config, manifest_data):
        manifest_data["builder"]["environments"] = ["macos-arm64"]
        with pytest.raises(ConfigValidationError, match="builder.environments.0"):
            load_config(manifest_data)

    def test_invalid_restart_policy(self, load_config, manifest_data):
        manifest_data["builder"]["docker"] = {"restart": "sometimes"}
        with pytest.raises(ConfigValidationError, match="builder.docker.restart"):
            load_config(manifest_data)

    @pytest.mark.parametrize("port", [0, 70000])
    def test_port_out_of_range(self, load_config, manifest_data, port):
        manifest_data["builder"]["docker"] = {"ports": [{"hostPort": port, "containerPort": 80}]}
        with pytest.raises(ConfigValidationError):
            load_config(manifest_data)

    def test_build_dir_must_not_be_project_root(self, load_config, manifest_data):
        manifest_data["builder"]["dirs"]["build"] = "."
        with pytest.raises(ConfigValidationError, match="must not contain the project root"):
            load_config(manifest_data)

    def test_build_dir_must_not_contain_root(self, load_config, manifest_data):
        manifest_data["builder"]["dirs"]["build"] = ".."
        with pytest.raises(ConfigValidationError, match="must not contain the project root"):
            load_config(manifest_data)

    def test_src_dir_must_not_live_in_build_dir(self, load_config, manifest_data):
        manifest_data["builder"]["dirs"]["src"] = "dist/src"
        with pytest.raises(ConfigValidationError, match="must not be inside"):
            load_config(manifest_data)

    @pytest.mark.parametrize("temp", [".", "..", "src", "dist"])
    def test_temp_dir_must_not_hold_project_files(self, load_config, manifest_data, temp):
        manifest_data["builder"]["dirs"]["temp"] = temp
        with pytest.raises(ConfigValidationError, match="builder.dirs.temp"):
            load_config(manifest_data)

    def test_temp_dir_must_not_contain_build_dir(self, load_config, manifest_data):
        manifest_data["builder"]["dirs"]["build"] = "out/dist"
        manifest_data["builder"]["dirs"]["temp"] = "out"
        with pytest.raises(ConfigValidationError, match="builder.dirs.temp"):
            load_config(manifest_data)

    def test_temp_dir_inside_src_is_allowed(self, load_config, manifest_data, tmp_path):
        manifest_data["builder"]["dirs"]["temp"] = "src/.nodeb"
        config = load_config(manifest_data)
        assert config.dirs.temp.__path__() == str(tmp_path / "src" / ".nodeb")

    def test_missing_manifest(self, tmp_path):
        with pytest.raises(ConfigFileMissingError):
            Config(str(tmp_path / "package.json"))

    def test_malformed_json(self, tmp_path):
        manifest = tmp_path / "package.json"
        manifest.write_text("{ not json")
        with pytest.raises(ConfigParsingError):
            Config(str(manifest))

    def test_manifest_not_utf8(self, tmp_path):
        manifest = tmp_path / "package.json"
        manifest.write_bytes(b'{"name": "\xff\xfe"}')
        with pytest.raises(ConfigParsingError, match="not valid UTF-8"):
            Config(str(manifest))

    def test_non_object_document(self, tmp_path):
        manifest = tmp_path / "package.json"
        manifest.write_text(json.dumps(["a", "b"]))
        with pytest.raises(ConfigParsingError):
            Config(str(manifest))

    def test_relative_manifest_path_is_made_absolute(self, project, manifest_data, tmp_path, monkeypatch):
        project(manifest_data)
        monkeypatch.chdir(tmp_path)
        config = Config("package.json")
        assert os.path.isabs(config.path)
        assert config.dirs.root.__path__() == str(tmp_path)
