import pytest

from nodebuilder.io import NBPath, create_app_fs, AppFileSystem
from nodebuilder.exceptions import (
    ReadOnlyError,
    NBPathNotFoundError,
    ProtocolError,
    UnsupportedFeatureError,
)


@pytest.fixture
def fs():
    return create_app_fs()


@pytest.fixture
def disk(tmp_path):
    return NBPath(str(tmp_path))


class TestDiskFileSystem:

    def test_write_creates_parents(self, fs, disk, tmp_path):
        fs.write_text(disk / "a" / "b" / "c.txt", "hello")
        assert (tmp_path / "a" / "b" / "c.txt").read_text() == "hello"
        assert fs.read_text(disk / "a" / "b" / "c.txt") == "hello"
        assert fs.is_dir(disk / "a")

    def test_read_missing_raises(self, fs, disk):
        with pytest.raises(NBPathNotFoundError):
            fs.read_text(disk / "nope.txt")

    def test_copy_and_copytree(self, fs, disk, tmp_path):
        (tmp_path / "src" / "nested").mkdir(parents=True)
        (tmp_path / "src" / "nested" / "f.bin").write_bytes(b"\x00\x01")
        fs.copytree(disk / "src", disk / "dst")
        assert (tmp_path / "dst" / "nested" / "f.bin").read_bytes() == b"\x00\x01"
        fs.copy(disk / "src" / "nested" / "f.bin", disk / "single" / "f.bin")
        assert (tmp_path / "single" / "f.bin").read_bytes() == b"\x00\x01"

    def test_rmtree_missing_is_noop(self, fs, disk):
        fs.rmtree(disk / "not-there")

    def test_chmod(self, fs, disk, tmp_path):
        fs.write_text(disk / "run.sh", "#!/bin/sh\n")
        fs.chmod(disk / "run.sh", 0o755)
        assert (tmp_path / "run.sh").stat().st_mode & 0o777 == 0o755


class TestResourceFileSystem:

    @pytest.mark.parametrize(
        "template", ["Dockerfile", "service", "install.sh", "webpack.config.js"]
    )
    def test_templates_are_packaged(self, fs, template):
        path = NBPath(f"resource:/templates/{template}")
        assert fs.exists(path)
        assert fs.read_text(path)

    def test_is_read_only(self, fs):
        with pytest.raises(ReadOnlyError):
            fs.write_text(NBPath("resource:/templates/new"), "x")

    def test_cross_filesystem_copy(self, fs, disk, tmp_path):
        fs.copy(NBPath("resource:/templates/service"), disk / "unit")
        assert "[Unit]" in (tmp_path / "unit").read_text()

    def test_cross_filesystem_copytree_is_unsupported(self, fs, disk):
        with pytest.raises(UnsupportedFeatureError):
            fs.copytree(NBPath("resource:/templates"), disk / "templates")


class TestMemoryFileSystem:

    def test_roundtrip(self, fs):
        path = NBPath("memory:/nodeb-test/app.js")
        fs.write_text(path, "bundle")
        assert fs.exists(path)
        assert fs.read_bytes(path) == b"bundle"
        fs.rmtree(NBPath("memory:/nodeb-test"))
        assert not fs.exists(path)


class TestAppFileSystem:

    def test_unregistered_protocol(self):
        app_fs = AppFileSystem()
        del app_fs._handlers["memory"]
        with pytest.raises(ProtocolError):
            app_fs.read_text(NBPath("memory:/x"))

    def test_chmod_is_ignored_off_disk(self, fs):
        path = NBPath("memory:/nodeb-test/run.sh")
        fs.write_text(path, "#!/bin/sh\n")
        fs.chmod(path, 0o755)
        assert fs.read_text(path) == "#!/bin/sh\n"
