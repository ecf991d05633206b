import copy
import json
from pathlib import Path

import pytest

from nodebuilder.config import Config
from nodebuilder.datacls import BuildContext
from nodebuilder.io import NBPath, create_app_fs

BASE_MANIFEST = {
    "name": "@scope/my-app",
    "version": "1.2.3",
    "description": "unrelated fields are ignored",
    "scripts": {"build": "nodeb build"},
    "builder": {
        "dirs": {"build": "dist", "src": "src"},
        "node": "14.15.3",
        "entry": "index.js",
    },
}

BUNDLE_CONTENT = "console.log('my-app');\n"


class FakeBundler:
    """Writes a fixed bundle where webpack would."""

    def __init__(self):
        self.calls = 0

    def bundle(self, config, fs):
        self.calls += 1
        path = config.dirs.temp / config.bundle_name
        fs.write_text(path, BUNDLE_CONTENT)
        return path


class FakeCompiler:
    """Records nexe invocations and writes a placeholder executable."""

    def __init__(self):
        self.calls = []

    def compile(self, bundle, output, target, cwd):
        self.calls.append({"bundle": bundle, "output": output, "target": target, "cwd": cwd})
        suffix = ".exe" if target.startswith("windows") else ""
        Path(output.__path__() + suffix).write_bytes(b"\x7fBIN" + target.encode())


@pytest.fixture
def manifest_data():
    return copy.deepcopy(BASE_MANIFEST)


@pytest.fixture
def project(tmp_path: Path):
    """Create a project directory with sources and return a manifest writer."""
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "index.js").write_text("console.log('hello');\n")

    def _write(data: dict) -> Path:
        manifest = tmp_path / "package.json"
        manifest.write_text(json.dumps(data))
        return manifest
    return _write


@pytest.fixture
def load_config(project):
    def _load(data: dict) -> Config:
        return Config(str(project(data)), create_app_fs())
    return _load


@pytest.fixture
def make_context(load_config):
    """Config plus a bundle already sitting in the temp directory."""
    def _make(data: dict) -> BuildContext:
        config = load_config(data)
        fs = create_app_fs()
        bundle = config.dirs.temp / config.bundle_name
        fs.write_text(bundle, BUNDLE_CONTENT)
        return BuildContext(config=config, bundle=bundle, fs=fs)
    return _make


@pytest.fixture
def fake_bundler():
    return FakeBundler()


@pytest.fixture
def fake_compiler():
    return FakeCompiler()


@pytest.fixture
def winsw(tmp_path: Path, monkeypatch):
    """A stand-in WinSW executable exposed through NODEB_WINSW."""
    exe = tmp_path / "tools" / "WinSW.NET4.exe"
    exe.parent.mkdir()
    exe.write_bytes(b"MZ-winsw")
    monkeypatch.setenv("NODEB_WINSW", str(exe))
    return exe


@pytest.fixture(autouse=True)
def _no_winsw_env(monkeypatch):
    monkeypatch.delenv("NODEB_WINSW", raising=False)
