from __future__ import annotations

import logging
import shutil

from .command import privileged, run_cmd

logger = logging.getLogger(__name__)


class PreflightError(RuntimeError):
    pass


def command_exists(name: str) -> bool:
    return shutil.which(name) is not None


def detect_debian_version(*, dry_run: bool = False) -> str:
    """Major Debian release as reported by lsb_release (e.g. "12")."""

    if not command_exists("lsb_release"):
        raise PreflightError("lsb_release not found. Please install lsb-release package first.")

    r = run_cmd(["lsb_release", "-rs"], dry_run=dry_run)
    version = r.stdout.strip().split(".", 1)[0]
    if not version:
        if dry_run:
            return "unknown"
        raise PreflightError("lsb_release returned an empty release number")
    return version


def systemctl_enable_now(unit: str, *, sudo: bool, dry_run: bool = False) -> None:
    run_cmd(privileged(["systemctl", "enable", "--now", unit], sudo=sudo), dry_run=dry_run)


def add_user_to_group(user: str, group: str, *, sudo: bool, dry_run: bool = False) -> None:
    run_cmd(privileged(["usermod", "-aG", group, user], sudo=sudo), dry_run=dry_run)
