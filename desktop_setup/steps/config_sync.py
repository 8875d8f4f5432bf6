from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from ..lib.dotfiles import install_from_repo
from ..logging_utils import log_success
from ..pipeline import Policy, RunContext

logger = logging.getLogger(__name__)


class ConfigSyncError(RuntimeError):
    pass


@dataclass(frozen=True)
class ConfigMapping:
    repo: str
    path: str
    dest: str

    def target(self, config_home: str) -> str:
        return os.path.join(config_home, self.dest)


@dataclass
class ConfigSyncStep:
    """Fetch dotfile repositories into the config root.

    Each mapping is independent: a failed clone or a missing path is logged as
    one ERROR line and the next mapping still runs. If any mapping failed,
    apply() raises ConfigSyncError once all of them have been attempted.
    """

    step_id: str
    base_url: str
    mappings: List[ConfigMapping] = field(default_factory=list)
    policy: Policy = Policy.BEST_EFFORT

    def repo_url(self, mapping: ConfigMapping) -> str:
        return f"{self.base_url.rstrip('/')}/{mapping.repo}"

    def is_satisfied(self, ctx: RunContext) -> bool:
        # Always re-fetch so local config tracks the remote.
        return False

    def sync_one(self, ctx: RunContext, mapping: ConfigMapping, work_dir: str) -> bool:
        target = mapping.target(ctx.config.config_home)
        logger.info("Setting up %s configuration", mapping.repo)
        try:
            install_from_repo(
                self.repo_url(mapping),
                inner_path=mapping.path,
                dest=target,
                work_dir=work_dir,
                dry_run=ctx.dry_run,
            )
        except Exception as e:
            logger.error("Failed to set up %s configuration at %s: %s", mapping.repo, target, e)
            return False
        log_success(logger, "%s configuration installed to %s", mapping.repo, target)
        return True

    def apply(self, ctx: RunContext) -> None:
        logger.info("Setting up configuration files")
        if not ctx.dry_run:
            Path(ctx.config.config_home).mkdir(parents=True, exist_ok=True)

        failed = 0
        with tempfile.TemporaryDirectory(prefix="desktop-setup-dotfiles-") as work_dir:
            for mapping in self.mappings:
                if not self.sync_one(ctx, mapping, work_dir):
                    failed += 1

        if failed:
            # Per-mapping errors are already logged; this only marks the step failed.
            raise ConfigSyncError(f"{failed} of {len(self.mappings)} configurations were not installed")
        log_success(logger, "All configurations installed successfully")
