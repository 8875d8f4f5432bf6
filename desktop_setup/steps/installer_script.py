from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..lib.download import run_installer_script
from ..lib.system import command_exists
from ..logging_utils import log_success
from ..pipeline import Policy, RunContext

logger = logging.getLogger(__name__)


@dataclass
class InstallerScriptStep:
    step_id: str
    label: str
    url: str
    args: List[str] = field(default_factory=list)
    binary: Optional[str] = None
    sha256: Optional[str] = None
    policy: Policy = Policy.BEST_EFFORT

    def is_satisfied(self, ctx: RunContext) -> bool:
        if not self.binary:
            return False
        if command_exists(self.binary):
            logger.info("%s is already installed (%s on PATH)", self.label, self.binary)
            return True
        return False

    def apply(self, ctx: RunContext) -> None:
        logger.info("Installing %s", self.label)
        run_installer_script(self.url, args=self.args, expected_sha256=self.sha256, dry_run=ctx.dry_run)
        log_success(logger, "%s installed successfully", self.label)
