from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from ..lib.pkg import snap_install, snap_installed_names
from ..logging_utils import log_success
from ..pipeline import Policy, RunContext

logger = logging.getLogger(__name__)


@dataclass
class SnapAppsStep:
    """Install each snap in apps unless `snap list` already has that exact name.

    Matching is on the whole first column, so "nvim" is not satisfied by an
    installed "nvim-something".
    """

    step_id: str
    apps: List[str] = field(default_factory=list)
    classic: bool = True
    policy: Policy = Policy.FAIL_FAST

    def is_satisfied(self, ctx: RunContext) -> bool:
        # Checked per app inside apply() so each skip is logged.
        return False

    def apply(self, ctx: RunContext) -> None:
        logger.info("Installing snap applications: %s", " ".join(self.apps))
        installed = snap_installed_names(dry_run=ctx.dry_run)
        for app in self.apps:
            logger.info("Checking if %s is installed", app)
            if app in installed:
                logger.info("%s is already installed", app)
                continue
            logger.info("Installing %s via snap", app)
            snap_install(app, classic=self.classic, sudo=ctx.sudo, dry_run=ctx.dry_run)
            log_success(logger, "%s installed successfully", app)
