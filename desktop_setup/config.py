from __future__ import annotations

import getpass
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SetupConfig:
    """Everything a run reads from its environment, resolved once at start."""

    home: str
    user: str
    config_home: str
    sudo: bool = True
    dry_run: bool = False
    debian_version: Optional[str] = None


def resolve_config(environ: Optional[Mapping[str, str]] = None, *, dry_run: bool = False) -> SetupConfig:
    env = os.environ if environ is None else environ

    home = env.get("HOME") or str(Path.home())
    user = env.get("USER") or getpass.getuser()

    config_home = env.get("XDG_CONFIG_HOME") or ""
    if not config_home:
        config_home = os.path.join(home, ".config")
        logger.info("XDG_CONFIG_HOME not set, using default: %s", config_home)

    # Root needs no sudo prefix; everyone else gets one per privileged command.
    sudo = os.geteuid() != 0 if hasattr(os, "geteuid") else True

    return SetupConfig(home=home, user=user, config_home=config_home, sudo=sudo, dry_run=dry_run)
