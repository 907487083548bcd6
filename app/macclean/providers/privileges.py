"""Administrator privilege checks via sudo.

The privilege grant is obtained at most once per session: callers check
with check_sudo(), optionally ask for a password with request_sudo(),
and pass the resulting flag down to the deletion executor.
"""

import logging
import os
import subprocess

from macclean.utils.shell import command_exists, run_command, run_interactive

logger = logging.getLogger(__name__)


def is_root() -> bool:
    """Check if the current process is running as root."""
    return os.geteuid() == 0


def check_sudo() -> bool:
    """Check whether sudo can run without prompting for a password.

    Returns:
        True if running as root or a cached sudo credential is valid.
    """
    if is_root():
        return True
    if not command_exists("sudo"):
        return False
    try:
        return run_command(["sudo", "-n", "true"], timeout=10.0).success
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.debug("sudo check failed: %s", e)
        return False


def request_sudo() -> bool:
    """Ask the user for their password with ``sudo -v``.

    The password prompt is handled by sudo itself on the inherited terminal.

    Returns:
        True if a sudo credential is now cached.
    """
    try:
        return run_interactive(["sudo", "-v"]) == 0
    except OSError as e:
        logger.warning("Cannot run sudo: %s", e)
        return False
