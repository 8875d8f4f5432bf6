from __future__ import annotations

import logging
import shutil
from pathlib import Path

from .command import run_cmd

logger = logging.getLogger(__name__)


def _remove(p: Path) -> None:
    if p.is_dir() and not p.is_symlink():
        shutil.rmtree(p)
    else:
        p.unlink()


def git_clone(url: str, dest: str, *, dry_run: bool = False) -> None:
    run_cmd(["git", "clone", url, dest], dry_run=dry_run)


def install_from_repo(
    url: str,
    *,
    inner_path: str,
    dest: str,
    work_dir: str,
    dry_run: bool = False,
) -> None:
    """Clone url under work_dir and move inner_path out of it to dest.

    inner_path "." moves the whole clone. The clone is removed afterwards. An
    existing dest is replaced.

    work_dir may be shared by several calls. A clone of the same name left
    behind there (e.g. an earlier mapping of the same repo whose move failed)
    is removed before cloning again.
    """

    clone = Path(work_dir) / url.rstrip("/").rsplit("/", 1)[-1]
    target = Path(dest)

    if clone.exists():
        logger.info("Removing stale clone %s", str(clone))
        if not dry_run:
            _remove(clone)

    git_clone(url, str(clone), dry_run=dry_run)

    if dry_run:
        logger.info("Would move %s -> %s", str(clone / inner_path), str(target))
        return

    if not clone.is_dir():
        raise FileNotFoundError(f"cloned directory {clone} not found")

    source = clone if inner_path in {"", "."} else clone / inner_path
    if not source.exists():
        _remove(clone)
        raise FileNotFoundError(f"{inner_path} not found in {url}")

    if target.exists() or target.is_symlink():
        logger.warning("Replacing existing %s", str(target))
        _remove(target)

    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.move(str(source), str(target))

    if clone.exists():
        _remove(clone)
