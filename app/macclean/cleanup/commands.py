"""Cleanup task commands.

Some caches are best cleared by their own tool ("brew cleanup -s",
"npm cache clean --force") or are not files at all (the DNS resolver
cache). Cleanup tasks list such commands; this module runs them.
"""

import logging
import shlex
import subprocess
from dataclasses import dataclass
from enum import Enum

from macclean.core.config import CleanupTask
from macclean.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)

# brew cleanup can take minutes on a large cellar
COMMAND_TIMEOUT = 300.0


class CommandStatus(str, Enum):
    """Outcome of one cleanup command."""

    OK = "ok"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True, slots=True)
class CommandOutcome:
    """Result of running one command of a cleanup task.

    Attributes:
        task: Name of the task the command belongs to.
        command: The command as configured.
        status: Whether it ran, failed or was skipped.
        error: Failure or skip reason.
    """

    task: str
    command: str
    status: CommandStatus
    error: str | None = None

    @property
    def success(self) -> bool:
        """Skipped commands are not failures."""
        return self.status != CommandStatus.FAILED


class TaskCommandRunner:
    """Runs the commands of cleanup tasks.

    Args:
        has_elevation: Whether ``sudo -n`` is available for tasks that
            require root.
        timeout: Per-command timeout in seconds.
    """

    def __init__(self, has_elevation: bool = False, timeout: float = COMMAND_TIMEOUT) -> None:
        self._has_elevation = has_elevation
        self._timeout = timeout

    def run(self, task: CleanupTask) -> list[CommandOutcome]:
        """Run every command of a task, in order.

        A failing command does not stop the ones after it.
        """
        return [self.run_command(task, command) for command in task.commands]

    def run_command(self, task: CleanupTask, command: str) -> CommandOutcome:
        """Run one command of a task."""
        try:
            args = shlex.split(command)
        except ValueError as e:
            return self._outcome(task, command, CommandStatus.FAILED, f"Invalid command: {e}")
        if not args:
            return self._outcome(task, command, CommandStatus.FAILED, "Empty command")

        if not command_exists(args[0]):
            return self._outcome(task, command, CommandStatus.SKIPPED, f"{args[0]} not found")

        if task.requires_root:
            if not self._has_elevation:
                return self._outcome(
                    task, command, CommandStatus.SKIPPED, "Requires administrator privileges"
                )
            args = ["sudo", "-n", *args]

        logger.info("Running %s for %s", " ".join(args), task.name)
        try:
            result = run_command(args, timeout=self._timeout)
        except subprocess.TimeoutExpired:
            return self._outcome(
                task, command, CommandStatus.FAILED, f"Timed out after {self._timeout:.0f}s"
            )
        except OSError as e:
            return self._outcome(task, command, CommandStatus.FAILED, str(e))

        if not result.success:
            error = result.stderr.strip() or f"Exit code {result.returncode}"
            return self._outcome(task, command, CommandStatus.FAILED, error)

        return self._outcome(task, command, CommandStatus.OK)

    def _outcome(
        self,
        task: CleanupTask,
        command: str,
        status: CommandStatus,
        error: str | None = None,
    ) -> CommandOutcome:
        if status == CommandStatus.FAILED:
            logger.warning("%s command %r failed: %s", task.name, command, error)
        elif status == CommandStatus.SKIPPED:
            logger.debug("%s command %r skipped: %s", task.name, command, error)
        return CommandOutcome(task=task.name, command=command, status=status, error=error)
