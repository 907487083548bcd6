"""Unit tests for disk-usage providers."""

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest
from macclean.providers.disk_usage import (
    DuDiskUsage,
    WalkDiskUsage,
    get_disk_usage_provider,
)
from macclean.utils.shell import CommandResult


class TestDuDiskUsage:
    """Tests for DuDiskUsage."""

    def test_parses_kilobytes(self) -> None:
        """du -sk output is converted to bytes."""
        result = CommandResult(stdout="2048\t/Users/me/Library/Caches/x\n", stderr="", returncode=0)
        with patch("macclean.providers.disk_usage.run_command", return_value=result) as mock_run:
            size = DuDiskUsage().measure(Path("/Users/me/Library/Caches/x"))

        assert size == 2048 * 1024
        assert mock_run.call_args.args[0] == ["du", "-sk", "/Users/me/Library/Caches/x"]

    def test_partial_output_on_nonzero_exit(self) -> None:
        """A total printed alongside permission errors is still used."""
        result = CommandResult(stdout="8\t/x\n", stderr="du: /x/y: Permission denied", returncode=1)
        with patch("macclean.providers.disk_usage.run_command", return_value=result):
            assert DuDiskUsage().measure(Path("/x")) == 8 * 1024

    def test_unparseable_output_is_zero(self) -> None:
        """Garbage output degrades to 0."""
        result = CommandResult(stdout="", stderr="du: /x: No such file", returncode=1)
        with patch("macclean.providers.disk_usage.run_command", return_value=result):
            assert DuDiskUsage().measure(Path("/x")) == 0

    def test_timeout_is_zero(self) -> None:
        """A timed-out du degrades to 0."""
        with patch(
            "macclean.providers.disk_usage.run_command",
            side_effect=subprocess.TimeoutExpired(["du"], 120),
        ):
            assert DuDiskUsage().measure(Path("/x")) == 0


class TestWalkDiskUsage:
    """Tests for WalkDiskUsage."""

    def test_missing_path_is_zero(self, tmp_path: Path) -> None:
        """A path that does not exist measures 0."""
        assert WalkDiskUsage().measure(tmp_path / "missing") == 0

    def test_directory_includes_children(self, tmp_path: Path) -> None:
        """A directory measures at least as much as its files."""
        target = tmp_path / "data"
        target.mkdir()
        (target / "blob").write_bytes(b"x" * 65536)

        dir_size = WalkDiskUsage().measure(target)
        file_size = WalkDiskUsage().measure(target / "blob")

        assert file_size > 0
        assert dir_size >= file_size

    def test_hardlinks_counted_once(self, tmp_path: Path) -> None:
        """Two links to the same inode count once."""
        target = tmp_path / "data"
        target.mkdir()
        (target / "a").write_bytes(b"x" * 65536)
        (target / "b").hardlink_to(target / "a")

        expected = (target.lstat().st_blocks + (target / "a").lstat().st_blocks) * 512

        assert WalkDiskUsage().measure(target) == expected


class TestGetDiskUsageProvider:
    """Tests for get_disk_usage_provider."""

    def test_known_backends(self) -> None:
        """du and walk map to their providers."""
        assert isinstance(get_disk_usage_provider("du"), DuDiskUsage)
        assert isinstance(get_disk_usage_provider("walk"), WalkDiskUsage)

    def test_unknown_backend(self) -> None:
        """Unknown names raise ValueError."""
        with pytest.raises(ValueError, match="Unknown disk usage backend"):
            get_disk_usage_provider("ncdu")
