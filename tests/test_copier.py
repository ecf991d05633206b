import asyncio

import pytest

from nodebuilder.copier import CopyHandler
from nodebuilder.exceptions import ConfigValidationError
from nodebuilder.io import NBPath, create_app_fs


class TestCopyHandler:

    def test_plan_skips_missing_sources(self, load_config, manifest_data, tmp_path):
        (tmp_path / "present.txt").write_text("x")
        manifest_data["builder"]["copy"] = [
            {"from": "present.txt", "to": "present.txt"},
            {"from": "absent.txt", "to": "absent.txt"},
        ]
        handler = CopyHandler(load_config(manifest_data), create_app_fs())
        target = NBPath(str(tmp_path / "out"))
        assert handler.plan(target) == [
            (NBPath(str(tmp_path / "present.txt")), target / "present.txt"),
        ]

    def test_absolute_source(self, load_config, manifest_data, tmp_path):
        outside = tmp_path / "elsewhere" / "secret.env"
        outside.parent.mkdir()
        outside.write_text("KEY=1")
        manifest_data["builder"]["copy"] = [{"from": str(outside), "to": ".env"}]
        handler = CopyHandler(load_config(manifest_data), create_app_fs())
        target = NBPath(str(tmp_path / "out"))
        asyncio.run(handler.copy_into(target))
        assert (tmp_path / "out" / ".env").read_text() == "KEY=1"

    def test_destination_stays_inside_target(self, load_config, manifest_data, tmp_path):
        (tmp_path / "a.txt").write_text("a")
        manifest_data["builder"]["copy"] = [{"from": "a.txt", "to": "/etc/a.txt"}]
        handler = CopyHandler(load_config(manifest_data), create_app_fs())
        target = NBPath(str(tmp_path / "out"))
        written = asyncio.run(handler.copy_into(target))
        assert written == [target / "etc" / "a.txt"]
        assert (tmp_path / "out" / "etc" / "a.txt").read_text() == "a"

    def test_destination_is_normalized(self, load_config, manifest_data, tmp_path):
        (tmp_path / "a.txt").write_text("a")
        manifest_data["builder"]["copy"] = [{"from": "a.txt", "to": "conf/../a.txt"}]
        handler = CopyHandler(load_config(manifest_data), create_app_fs())
        target = NBPath(str(tmp_path / "out"))
        assert asyncio.run(handler.copy_into(target)) == [target / "a.txt"]
        assert (tmp_path / "out" / "a.txt").read_text() == "a"

    @pytest.mark.parametrize("destination", ["../../escaped.json", "..", "/../escaped.json", "a/../../b"])
    def test_destination_cannot_leave_target(self, load_config, manifest_data, tmp_path, destination):
        (tmp_path / "a.txt").write_text("a")
        manifest_data["builder"]["copy"] = [{"from": "a.txt", "to": destination}]
        with pytest.raises(ConfigValidationError, match="leaves the target directory"):
            load_config(manifest_data)
        assert not (tmp_path / "escaped.json").exists()

    def test_no_rules(self, load_config, manifest_data, tmp_path):
        handler = CopyHandler(load_config(manifest_data), create_app_fs())
        assert asyncio.run(handler.copy_into(NBPath(str(tmp_path / "out")))) == []
        assert not (tmp_path / "out").exists()
