from __future__ import annotations

import hashlib
import logging
import tempfile
from pathlib import Path
from typing import Optional, Sequence

from .command import run_cmd

logger = logging.getLogger(__name__)


class ChecksumMismatch(RuntimeError):
    pass


def download(url: str, dest: str, *, dry_run: bool = False) -> None:
    """Fetch url into dest; raises CommandError on HTTP or network failure."""
    run_cmd(["curl", "-fsSL", "-o", dest, url], dry_run=dry_run)


def sha256_of(path: str) -> str:
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()


def verify_sha256(path: str, expected: str) -> str:
    actual = sha256_of(path)
    if actual != expected.strip().lower():
        raise ChecksumMismatch(f"{path}: expected sha256 {expected}, got {actual}")
    return actual


def run_installer_script(
    url: str,
    *,
    args: Sequence[str] = (),
    expected_sha256: Optional[str] = None,
    dry_run: bool = False,
) -> Optional[str]:
    """Download a vendor installer script, verify it, then run it with sh.

    The script is executed from a temporary file rather than piped, so a pinned
    checksum can be checked before anything runs. Returns the script digest
    (None in dry-run).
    """

    with tempfile.TemporaryDirectory(prefix="desktop-setup-") as tmp:
        script = str(Path(tmp) / "install.sh")
        download(url, script, dry_run=dry_run)

        digest: Optional[str] = None
        if not dry_run:
            if expected_sha256:
                digest = verify_sha256(script, expected_sha256)
            else:
                digest = sha256_of(script)
                logger.warning("Running unverified installer %s (sha256=%s)", url, digest)

        run_cmd(["sh", script, *args], dry_run=dry_run)
        return digest
