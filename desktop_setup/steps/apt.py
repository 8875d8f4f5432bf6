from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from ..lib.pkg import apt_install, apt_update, apt_upgrade
from ..logging_utils import log_success
from ..pipeline import Policy, RunContext

logger = logging.getLogger(__name__)


@dataclass
class AptUpgradeStep:
    step_id: str
    policy: Policy = Policy.FAIL_FAST

    def is_satisfied(self, ctx: RunContext) -> bool:
        # apt is idempotent on its own; always safe to re-run.
        return False

    def apply(self, ctx: RunContext) -> None:
        logger.info("Updating package lists and upgrading system")
        apt_update(sudo=ctx.sudo, dry_run=ctx.dry_run)
        apt_upgrade(sudo=ctx.sudo, dry_run=ctx.dry_run)
        log_success(logger, "System updated successfully")


@dataclass
class AptInstallStep:
    step_id: str
    packages: List[str] = field(default_factory=list)
    policy: Policy = Policy.FAIL_FAST

    def is_satisfied(self, ctx: RunContext) -> bool:
        return False

    def apply(self, ctx: RunContext) -> None:
        logger.info("Installing packages: %s", ", ".join(self.packages))
        apt_install(self.packages, sudo=ctx.sudo, dry_run=ctx.dry_run)
        log_success(logger, "Packages installed successfully: %s", ", ".join(self.packages))
