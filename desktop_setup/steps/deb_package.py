from __future__ import annotations

import logging
import tempfile
from dataclasses import dataclass
from pathlib import Path

from ..lib.command import CommandError
from ..lib.download import download
from ..lib.pkg import apt_fix_broken, dpkg_install, dpkg_is_installed
from ..logging_utils import log_success
from ..pipeline import Policy, RunContext

logger = logging.getLogger(__name__)


@dataclass
class DebPackageStep:
    """Install a vendor .deb fetched from a URL templated on the Debian release."""

    step_id: str
    package: str
    url: str
    label: str = ""
    policy: Policy = Policy.FAIL_FAST

    @property
    def name(self) -> str:
        return self.label or self.package

    def resolve_url(self, ctx: RunContext) -> str:
        return self.url.format(debian_version=ctx.config.debian_version or "")

    def is_satisfied(self, ctx: RunContext) -> bool:
        return dpkg_is_installed(self.package, dry_run=ctx.dry_run)

    def apply(self, ctx: RunContext) -> None:
        url = self.resolve_url(ctx)
        logger.info("Installing %s", self.name)

        with tempfile.TemporaryDirectory(prefix="desktop-setup-") as tmp:
            deb = str(Path(tmp) / url.rsplit("/", 1)[-1])
            try:
                download(url, deb, dry_run=ctx.dry_run)
            except CommandError:
                # Vendor may not publish a build for this release yet.
                logger.warning("Failed to download %s for Debian %s", self.name, ctx.config.debian_version)
                return

            dpkg_install(deb, sudo=ctx.sudo, dry_run=ctx.dry_run)
            apt_fix_broken(sudo=ctx.sudo, dry_run=ctx.dry_run)

        log_success(logger, "%s installed successfully", self.name)
