from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from ..lib.pkg import flatpak_install, flatpak_remote_add, flatpak_remotes
from ..logging_utils import log_success
from ..pipeline import Policy, RunContext

logger = logging.getLogger(__name__)


@dataclass
class FlatpakRemoteStep:
    step_id: str
    name: str
    url: str
    policy: Policy = Policy.FAIL_FAST

    def is_satisfied(self, ctx: RunContext) -> bool:
        return self.name in flatpak_remotes(dry_run=ctx.dry_run)

    def apply(self, ctx: RunContext) -> None:
        logger.info("Adding %s repository", self.name)
        flatpak_remote_add(self.name, self.url, dry_run=ctx.dry_run)
        log_success(logger, "%s repository configured", self.name)


@dataclass
class FlatpakInstallStep:
    step_id: str
    remote: str
    apps: List[str] = field(default_factory=list)
    policy: Policy = Policy.FAIL_FAST

    def is_satisfied(self, ctx: RunContext) -> bool:
        return False

    def apply(self, ctx: RunContext) -> None:
        for app in self.apps:
            logger.info("Installing %s via Flatpak", app)
            flatpak_install(self.remote, app, sudo=ctx.sudo, dry_run=ctx.dry_run)
            log_success(logger, "%s installed successfully", app)
