"""Unit tests for the caches CLI commands."""

from unittest.mock import MagicMock, patch

import pytest
from macclean.cleanup.commands import CommandOutcome, CommandStatus
from macclean.cleanup.scanner import CleanupItem, CleanupPath
from macclean.cli.main import app
from macclean.core.config import CleanupTask, MaccleanConfig
from macclean.models.selectable import SelectableItem
from macclean.review.executor import DeletionSummary, RemovalResult, RemovalStatus
from typer.testing import CliRunner

runner = CliRunner()


def _items() -> list[CleanupItem]:
    npm = CleanupTask(name="npm", description="npm cache", paths=("~/.npm/_cacache/*",))
    xcode = CleanupTask(name="Xcode", description="Derived data")
    return [
        CleanupItem(
            task=npm,
            paths=(
                CleanupPath("/Users/me/.npm/_cacache/content-v2", 4096),
                CleanupPath("/Users/me/.npm/_cacache/index-v5", 1024),
            ),
        ),
        CleanupItem(task=xcode, paths=(CleanupPath("/Users/me/DerivedData/App-abc", 8192),)),
    ]


@pytest.fixture
def mock_scanner():
    scanner = MagicMock()
    scanner.scan.return_value = _items()
    with (
        patch("macclean.cli.commands.caches.require_config", return_value=MaccleanConfig()),
        patch("macclean.cli.commands.caches.build_cleanup_scanner", return_value=scanner),
    ):
        yield scanner


def test_scan_lists_tasks(mock_scanner: MagicMock) -> None:
    """The scan report has one row per task with data."""
    result = runner.invoke(app, ["caches", "scan"])

    assert result.exit_code == 0
    assert "npm" in result.stdout
    assert "Xcode" in result.stdout
    assert "2 task(s), 13.00 KB reclaimable" in result.stdout


def test_scan_nothing(mock_scanner: MagicMock) -> None:
    """No matches means nothing to clean."""
    mock_scanner.scan.return_value = []

    result = runner.invoke(app, ["caches", "scan"])

    assert "No caches to clean" in result.stdout


def test_clean_reviews_every_path(mock_scanner: MagicMock) -> None:
    """Every matched path becomes a review item."""
    summary = DeletionSummary(
        (RemovalResult(SelectableItem("npm", "/x", 10), RemovalStatus.REMOVED),)
    )
    with (
        patch("macclean.cli.commands.caches.acquire_privileges", return_value=False),
        patch("macclean.cli.commands.caches.run_review", return_value=summary) as review,
    ):
        result = runner.invoke(app, ["caches", "clean", "--yes"])

    assert result.exit_code == 0
    items = review.call_args.args[0]
    assert [i.path for i in items] == [
        "/Users/me/.npm/_cacache/content-v2",
        "/Users/me/.npm/_cacache/index-v5",
        "/Users/me/DerivedData/App-abc",
    ]
    assert all(i.confidence is None for i in items)
    assert review.call_args.kwargs["title"] == "Cache Cleanup"


def test_clean_failure_exit_code(mock_scanner: MagicMock) -> None:
    """A failed deletion makes the command fail."""
    summary = DeletionSummary(
        (RemovalResult(SelectableItem("npm", "/x", 10), RemovalStatus.FAILED, "denied"),)
    )
    with (
        patch("macclean.cli.commands.caches.acquire_privileges", return_value=False),
        patch("macclean.cli.commands.caches.run_review", return_value=summary),
    ):
        result = runner.invoke(app, ["caches", "clean", "--yes"])

    assert result.exit_code == 1


def _dns_item() -> CleanupItem:
    return CleanupItem(
        task=CleanupTask(
            name="DNS Cache",
            commands=("dscacheutil -flushcache",),
            requires_root=True,
        ),
        paths=(),
    )


def test_clean_runs_task_commands(mock_scanner: MagicMock) -> None:
    """--yes runs task commands after the review, with the session privileges."""
    mock_scanner.scan.return_value = [_dns_item()]
    outcome = CommandOutcome("DNS Cache", "dscacheutil -flushcache", CommandStatus.OK)
    with (
        patch("macclean.cli.commands.caches.acquire_privileges", return_value=True),
        patch("macclean.cli.commands.caches.run_review", return_value=None),
        patch("macclean.cli.commands.caches.TaskCommandRunner") as runner_cls,
    ):
        runner_cls.return_value.run.return_value = [outcome]
        result = runner.invoke(app, ["caches", "clean", "--yes"])

    assert result.exit_code == 0
    runner_cls.assert_called_once_with(has_elevation=True)
    assert runner_cls.return_value.run.call_args.args[0].name == "DNS Cache"
    assert "Nothing deleted" not in result.stdout


def test_clean_task_commands_need_confirmation(mock_scanner: MagicMock) -> None:
    """Without --yes each task's commands are confirmed separately."""
    mock_scanner.scan.return_value = [_dns_item()]
    with (
        patch("macclean.cli.commands.caches.acquire_privileges", return_value=False),
        patch("macclean.cli.commands.caches.run_review", return_value=None),
        patch("macclean.cli.commands.caches.TaskCommandRunner") as runner_cls,
    ):
        result = runner.invoke(app, ["caches", "clean"], input="y\nn\n")

    assert result.exit_code == 0
    runner_cls.return_value.run.assert_not_called()
    assert "Nothing deleted" in result.stdout


def test_failed_task_command_exit_code(mock_scanner: MagicMock) -> None:
    """A failed task command fails the command."""
    mock_scanner.scan.return_value = [_dns_item()]
    outcome = CommandOutcome(
        "DNS Cache", "dscacheutil -flushcache", CommandStatus.FAILED, "not permitted"
    )
    with (
        patch("macclean.cli.commands.caches.acquire_privileges", return_value=True),
        patch("macclean.cli.commands.caches.run_review", return_value=None),
        patch("macclean.cli.commands.caches.TaskCommandRunner") as runner_cls,
    ):
        runner_cls.return_value.run.return_value = [outcome]
        result = runner.invoke(app, ["caches", "clean", "--yes"])

    assert result.exit_code == 1
