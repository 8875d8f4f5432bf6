from __future__ import annotations

import logging
from typing import Sequence

from .command import privileged, run_cmd

logger = logging.getLogger(__name__)


# Long-running apt operations write to the terminal so progress stays visible.
def apt_update(*, sudo: bool, dry_run: bool = False) -> None:
    run_cmd(privileged(["apt", "update", "-y"], sudo=sudo), capture=False, dry_run=dry_run)


def apt_upgrade(*, sudo: bool, dry_run: bool = False) -> None:
    run_cmd(privileged(["apt", "upgrade", "-y"], sudo=sudo), capture=False, dry_run=dry_run)


def apt_install(packages: Sequence[str], *, sudo: bool, dry_run: bool = False) -> None:
    if not packages:
        return
    run_cmd(privileged(["apt", "install", "-y", *packages], sudo=sudo), capture=False, dry_run=dry_run)


def apt_fix_broken(*, sudo: bool, dry_run: bool = False) -> None:
    """Pull in dependencies left unresolved by a bare dpkg -i."""
    run_cmd(privileged(["apt-get", "install", "-f", "-y"], sudo=sudo), dry_run=dry_run)


def dpkg_install(deb_path: str, *, sudo: bool, dry_run: bool = False) -> None:
    run_cmd(privileged(["dpkg", "-i", deb_path], sudo=sudo), dry_run=dry_run)


def dpkg_is_installed(package: str, *, dry_run: bool = False) -> bool:
    r = run_cmd(["dpkg-query", "-W", "-f=${Status}", package], check=False, dry_run=dry_run)
    return r.returncode == 0 and "install ok installed" in r.stdout


def flatpak_remotes(*, dry_run: bool = False) -> list[str]:
    r = run_cmd(["flatpak", "remotes", "--columns=name"], check=False, dry_run=dry_run)
    if r.returncode != 0:
        return []
    return [line.strip() for line in r.stdout.splitlines() if line.strip()]


def flatpak_remote_add(name: str, url: str, *, dry_run: bool = False) -> None:
    run_cmd(["flatpak", "remote-add", "--if-not-exists", name, url], dry_run=dry_run)


def flatpak_install(remote: str, app_id: str, *, sudo: bool, dry_run: bool = False) -> None:
    run_cmd(privileged(["flatpak", "install", remote, app_id, "-y"], sudo=sudo), dry_run=dry_run)


def snap_installed_names(*, dry_run: bool = False) -> set[str]:
    """Names from the first column of `snap list`, header excluded."""

    r = run_cmd(["snap", "list"], check=False, dry_run=dry_run)
    if r.returncode != 0:
        # snapd without any snaps installed exits non-zero on some releases.
        return set()
    names: set[str] = set()
    for line in r.stdout.splitlines()[1:]:
        fields = line.split()
        if fields:
            names.add(fields[0])
    return names


def snap_install(name: str, *, classic: bool, sudo: bool, dry_run: bool = False) -> None:
    argv = ["snap", "install"]
    if classic:
        argv.append("--classic")
    run_cmd(privileged([*argv, name], sudo=sudo), dry_run=dry_run)
