#!/usr/bin/env python3
"""
Unit tests for the jail-fs command line.
"""

import io

import pytest

from jail_fs.main import run


class TestMain:
    """Tests for the run() entry point"""

    @pytest.fixture
    def jail(self, tmp_path):
        """Creates the --root arguments for a jail in tmp_path"""
        return ["--root", str(tmp_path)]

    def test_put_then_cat(self, jail, tmp_path, monkeypatch, capsys):
        """Test stdin written with put is printed back by cat"""
        monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(b"hello jail")))

        assert run(jail + ["put", "..\\..\\greeting.txt"]) == 0
        assert (tmp_path / "greeting.txt").read_bytes() == b"hello jail"

        assert run(jail + ["cat", "greeting.txt"]) == 0
        assert capsys.readouterr().out == "hello jail"

    def test_mkdir_and_ls(self, jail, tmp_path, capsys):
        """Test mkdir prints the created path and ls lists entries"""
        assert run(jail + ["mkdir", "docs"]) == 0
        (tmp_path / "docs" / "a.txt").write_bytes(b"abc")

        assert run(jail + ["--cwd", "/docs", "ls"]) == 0

        out = capsys.readouterr().out
        assert str(tmp_path / "docs") in out
        assert out.rstrip().endswith("a.txt")

    def test_pwd(self, jail, capsys):
        """Test pwd prints the normalized cwd"""
        assert run(jail + ["--cwd", "pub\\", "pwd"]) == 0
        assert capsys.readouterr().out == "/pub\n"

    def test_mv_chmod_rm(self, jail, tmp_path):
        """Test mv, chmod and rm act on the jailed files"""
        (tmp_path / "a.txt").write_bytes(b"a")

        assert run(jail + ["mv", "a.txt", "b.txt"]) == 0
        assert run(jail + ["chmod", "600", "b.txt"]) == 0
        assert (tmp_path / "b.txt").stat().st_mode & 0o777 == 0o600
        assert run(jail + ["rm", "b.txt"]) == 0
        assert not (tmp_path / "b.txt").exists()

    def test_uuid(self, jail, capsys):
        """Test uuid prints a 32-character token"""
        assert run(jail + ["uuid"]) == 0
        assert len(capsys.readouterr().out.strip()) == 32

    def test_errors_exit_non_zero(self, jail, tmp_path, capsys):
        """Test failures are reported on stderr with exit code 1"""
        (tmp_path / "sub").mkdir()

        assert run(jail + ["rm", "missing.txt"]) == 1
        assert run(jail + ["cat", "sub"]) == 1

        err = capsys.readouterr().err
        assert "jail-fs:" in err
        assert "Cannot read a directory: sub" in err

    def test_invalid_path_exits_non_zero(self, jail, capsys):
        """Test a path holding a NUL byte is reported instead of crashing"""
        assert run(jail + ["stat", "a\x00b"]) == 1
        assert "Invalid path: a\\x00b" in capsys.readouterr().err
