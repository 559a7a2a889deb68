"""
Tests for storage and printer adapters.
"""

from pathlib import Path

import pytest

from stencil.adapters.console import CollectingPrinter, ConsolePrinter, SilentPrinter
from stencil.adapters.filesystem import FilesystemStorage
from stencil.adapters.memory import MemoryStorage
from stencil.core.errors import StorageError, TargetMissingError

# ── Filesystem ──────────────────────────────────────────────────────


class TestFilesystemStorage:
    def test_write_creates_parents(self, tmp_path: Path):
        fs = FilesystemStorage()
        target = tmp_path / "a" / "b" / "c.txt"
        fs.write(target, "hello")
        assert target.read_text() == "hello"
        assert fs.exists(target)

    def test_read(self, tmp_path: Path):
        (tmp_path / "f.txt").write_text("content")
        assert FilesystemStorage().read(tmp_path / "f.txt") == "content"

    def test_read_missing(self, tmp_path: Path):
        with pytest.raises(TargetMissingError) as exc:
            FilesystemStorage().read(tmp_path / "nope.txt")
        assert exc.value.path == tmp_path / "nope.txt"

    def test_read_keeps_crlf(self, tmp_path: Path):
        (tmp_path / "f.txt").write_bytes(b"a\r\nb")
        assert FilesystemStorage().read(tmp_path / "f.txt") == "a\r\nb"

    def test_write_keeps_lf(self, tmp_path: Path):
        FilesystemStorage().write(tmp_path / "f.txt", "a\nb\n")
        assert (tmp_path / "f.txt").read_bytes() == b"a\nb\n"

    def test_write_failure(self, tmp_path: Path):
        (tmp_path / "blocker").write_text("file, not dir")
        with pytest.raises(StorageError):
            FilesystemStorage().write(tmp_path / "blocker" / "x.txt", "x")

    def test_read_not_utf8(self, tmp_path: Path):
        (tmp_path / "bin").write_bytes(b"\xff\xfe\xfa")
        with pytest.raises(StorageError):
            FilesystemStorage().read(tmp_path / "bin")

    def test_glob(self, tmp_path: Path):
        (tmp_path / "m").mkdir()
        (tmp_path / "m" / "001_post.rs").write_text("")
        (tmp_path / "m" / "002_user.rs").write_text("")
        matches = FilesystemStorage().glob(str(tmp_path / "m" / "*_post.rs"))
        assert matches == [tmp_path / "m" / "001_post.rs"]

    def test_glob_no_match(self, tmp_path: Path):
        assert FilesystemStorage().glob(str(tmp_path / "*.nothing")) == []


# ── In-memory ───────────────────────────────────────────────────────


class TestMemoryStorage:
    def test_round_trip(self):
        s = MemoryStorage()
        s.write(Path("a/b.txt"), "x")
        assert s.read(Path("a/b.txt")) == "x"
        assert s.write_log == [("a/b.txt", "x")]

    def test_directories_exist(self):
        s = MemoryStorage({"a/b/c.txt": ""})
        assert s.exists(Path("a/b"))
        assert s.exists(Path("a"))
        assert not s.exists(Path("a/bc"))

    def test_read_missing(self):
        with pytest.raises(TargetMissingError):
            MemoryStorage().read(Path("x"))

    def test_read_only(self):
        s = MemoryStorage({"ro.txt": "a"}, read_only={"ro.txt"})
        with pytest.raises(StorageError):
            s.write(Path("ro.txt"), "b")
        assert s.read(Path("ro.txt")) == "a"

    def test_glob(self):
        s = MemoryStorage({"m/001_post.rs": "", "m/002_user.rs": ""})
        assert s.glob("m/*_post.rs") == [Path("m/001_post.rs")]

    def test_reset_log(self):
        s = MemoryStorage()
        s.write(Path("a"), "x")
        s.reset_log()
        assert s.write_count == 0
        assert s.files == {"a": "x"}


# ── Printers ────────────────────────────────────────────────────────


class TestPrinters:
    def test_collecting(self):
        p = CollectingPrinter()
        p.on_added(Path("a"))
        p.on_overwritten(Path("b"))
        p.on_skipped_existing(Path("c"))
        p.on_injected(Path("d"))
        assert p.events == [("added", "a"), ("overwritten", "b"), ("skipped", "c"), ("injected", "d")]
        assert p.of("injected") == ["d"]

    def test_console(self, capsys):
        p = ConsolePrinter()
        p.on_added(Path("a.txt"))
        p.on_overwritten(Path("b.txt"))
        p.on_skipped_existing(Path("c.txt"))
        p.on_injected(Path("d.txt"))
        out = capsys.readouterr().out
        assert "added: a.txt" in out
        assert "overwritten: b.txt" in out
        assert "skipped (exists): c.txt" in out
        assert "injected: d.txt" in out

    def test_silent(self, capsys):
        p = SilentPrinter()
        p.on_added(Path("a.txt"))
        p.on_injected(Path("a.txt"))
        assert capsys.readouterr().out == ""
