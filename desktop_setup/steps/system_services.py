from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from ..lib.system import add_user_to_group, systemctl_enable_now
from ..logging_utils import log_success
from ..pipeline import Policy, RunContext

logger = logging.getLogger(__name__)

RESTART_NOTICE = "Restart your system to apply all changes and group memberships."


@dataclass
class EnableServiceStep:
    step_id: str
    unit: str
    policy: Policy = Policy.FAIL_FAST

    def is_satisfied(self, ctx: RunContext) -> bool:
        # Re-enabling a running unit is a no-op for systemd.
        return False

    def apply(self, ctx: RunContext) -> None:
        logger.info("Enabling and starting %s service", self.unit)
        systemctl_enable_now(self.unit, sudo=ctx.sudo, dry_run=ctx.dry_run)
        log_success(logger, "%s service enabled and started", self.unit)


@dataclass
class UserGroupsStep:
    step_id: str
    groups: List[str] = field(default_factory=list)
    policy: Policy = Policy.FAIL_FAST

    def is_satisfied(self, ctx: RunContext) -> bool:
        return False

    def apply(self, ctx: RunContext) -> None:
        user = ctx.config.user
        logger.info("Adding user %s to groups: %s", user, ", ".join(self.groups))
        for group in self.groups:
            add_user_to_group(user, group, sudo=ctx.sudo, dry_run=ctx.dry_run)
        # Membership only applies to new login sessions.
        ctx.notify(RESTART_NOTICE)
        log_success(logger, "User %s added to groups: %s", user, ", ".join(self.groups))
